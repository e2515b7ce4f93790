"""Structural checks for the agent dependency graph."""

from __future__ import annotations

import logging

from handoff.errors import AgentNotFoundError, CycleError, GraphError

from .deps import DependencyGraph

logger = logging.getLogger(__name__)


class Validator:
    """
    Checks two invariants:

    1. every dependency an agent declares, and every recorded edge target,
       names an existing agent
    2. the graph has no cycle
    """

    def __init__(self, graph: DependencyGraph) -> None:
        self.graph = graph

    def validate(self) -> None:
        """Raise the first structural error found, if any."""
        problems = self.find_problems()
        if problems:
            raise problems[0]

    def find_problems(self) -> list[GraphError]:
        """Run both passes and return every error found (reference errors first)."""
        problems: list[GraphError] = []

        missing = self.check_references()
        if missing is not None:
            problems.append(missing)

        cycle = self.check_cycles()
        if cycle is not None:
            problems.append(cycle)

        logger.debug("Validated %d agent(s): %d problem(s)", len(self.graph), len(problems))
        return problems

    def check_references(self) -> AgentNotFoundError | None:
        for name, node in self.graph.nodes.items():
            for dep in (*node.meta.dependencies, *self.graph.adjacency(name)):
                if not self.graph.has_node(dep):
                    return AgentNotFoundError(dep)
        return None

    def check_cycles(self) -> CycleError | None:
        visited: set[str] = set()
        on_stack: set[str] = set()

        for name in self.graph.nodes:
            if name in visited:
                continue
            path = self._detect_cycle(name, visited, on_stack)
            if path is not None:
                return CycleError(path)
        return None

    def _detect_cycle(
        self, node: str, visited: set[str], on_stack: set[str]
    ) -> list[str] | None:
        """DFS from node; returns the path from node down to the repeated node."""
        visited.add(node)
        on_stack.add(node)

        for neighbor in self.graph.adjacency(node):
            if neighbor not in visited:
                path = self._detect_cycle(neighbor, visited, on_stack)
                if path is not None:
                    return [node, *path]
            elif neighbor in on_stack:
                return [node, neighbor]

        on_stack.discard(node)
        return None
