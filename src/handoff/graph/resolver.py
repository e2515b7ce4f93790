"""Dependency resolution and topological ordering over a DependencyGraph.

Ordering convention: every edge (a, b) - "a depends on b" - places a before b.
That is delegation/hierarchy order, where the agent that pulls others in
comes first. load_order() gives the reverse, dependencies first.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable

from handoff.errors import AgentNotFoundError, CycleError

from .deps import DependencyGraph

logger = logging.getLogger(__name__)


class Resolver:
    """Read-only queries over a fully built dependency graph."""

    def __init__(self, graph: DependencyGraph) -> None:
        self.graph = graph

    def resolve_dependencies(self, agent_names: Iterable[str]) -> list[str]:
        """Transitive closure of the given agents, seeds included, in topological order.

        Raises:
            AgentNotFoundError: a seed or any reachable dependency is not in the graph
            CycleError: the reachable subgraph contains a cycle
        """
        seeds = list(agent_names)
        if not seeds:
            return []

        subset: dict[str, None] = {}
        queue: deque[str] = deque()

        for name in seeds:
            if not self.graph.has_node(name):
                raise AgentNotFoundError(name)
            if name not in subset:
                subset[name] = None
                queue.append(name)

        while queue:
            current = queue.popleft()
            for dep in self.graph.adjacency(current):
                if dep in subset:
                    continue
                if not self.graph.has_node(dep):
                    raise AgentNotFoundError(dep)
                subset[dep] = None
                queue.append(dep)

        logger.debug("Resolved %d seed(s) to %d agent(s)", len(seeds), len(subset))
        return self._kahn(list(subset))

    def topological_sort(self) -> list[str]:
        """Every node, each dependent before its dependencies.

        Raises:
            CycleError: the graph contains a cycle
        """
        return self._kahn(list(self.graph.nodes))

    def load_order(self) -> list[str]:
        """Every node, each dependency before the agents that need it."""
        return list(reversed(self.topological_sort()))

    def _kahn(self, names: list[str]) -> list[str]:
        members = set(names)
        in_degree: dict[str, int] = {name: 0 for name in names}

        for name in names:
            for dep in self.graph.adjacency(name):
                if dep in members:
                    in_degree[dep] += 1

        queue = deque(name for name in names if in_degree[name] == 0)
        result: list[str] = []

        while queue:
            current = queue.popleft()
            result.append(current)
            for dep in self.graph.adjacency(current):
                if dep not in members:
                    continue
                in_degree[dep] -= 1
                if in_degree[dep] == 0:
                    queue.append(dep)

        if len(result) != len(names):
            stuck = [name for name in names if in_degree[name] > 0]
            logger.debug("Topological sort stalled on %s", stuck)
            raise CycleError(self._cycle_witness(stuck))

        return result

    def _cycle_witness(self, stuck: list[str]) -> list[str]:
        """One cycle among the nodes Kahn's algorithm could not place.

        Every stalled node still has a stalled predecessor, so walking
        predecessors from any of them must revisit a node.
        """
        members = set(stuck)
        predecessors: dict[str, list[str]] = {name: [] for name in stuck}
        for name in stuck:
            for dep in self.graph.adjacency(name):
                if dep in members:
                    predecessors[dep].append(name)

        seen: dict[str, int] = {}
        walk: list[str] = []
        current = stuck[0]
        while current not in seen:
            seen[current] = len(walk)
            walk.append(current)
            current = predecessors[current][0]

        # walk runs against the edges; reverse it to read in edge direction
        cycle = walk[seen[current]:] + [current]
        return list(reversed(cycle))
