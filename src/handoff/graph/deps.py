"""Agent dependency graph - named nodes plus "requires" edges."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AgentMeta:
    """Metadata describing one agent, as supplied by a metadata loader."""

    name: str
    description: str = ""
    model: str = ""
    color: str = ""
    skills: tuple[str, ...] = ()
    tools: frozenset[str] = field(default_factory=frozenset)
    dependencies: tuple[str, ...] = ()
    content: str = ""
    file_path: str = ""


@dataclass(frozen=True)
class Node:
    """An agent node in the dependency graph."""

    name: str
    meta: AgentMeta


class DependencyGraph:
    """
    Directed graph of agents. An edge (a, b) means "a depends on b".

    Adjacency is kept as an insertion-ordered set per node, so inserting the
    same edge twice records it once. Neither edge targets nor acyclicity are
    checked here; see handoff.graph.validator.
    """

    def __init__(self) -> None:
        self.nodes: dict[str, Node] = {}
        self._adjacency: dict[str, dict[str, None]] = {}

    def add_node(self, name: str, meta: AgentMeta | None = None) -> None:
        """Insert or overwrite a node; edges already recorded for it are kept."""
        self.nodes[name] = Node(name=name, meta=meta or AgentMeta(name=name))
        self._adjacency.setdefault(name, {})

    def add_edge(self, from_name: str, to_name: str) -> None:
        """Record that from_name depends on to_name."""
        self._adjacency.setdefault(from_name, {})[to_name] = None

    def adjacency(self, name: str) -> list[str]:
        """Dependencies of name in insertion order; empty for unknown names."""
        return list(self._adjacency.get(name, ()))

    def edges(self) -> list[tuple[str, str]]:
        return [(src, dst) for src, targets in self._adjacency.items() for dst in targets]

    def has_dependency(self, from_name: str, to_name: str) -> bool:
        return to_name in self._adjacency.get(from_name, ())

    def has_node(self, name: str) -> bool:
        return name in self.nodes

    def get_node(self, name: str) -> Node | None:
        return self.nodes.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)
