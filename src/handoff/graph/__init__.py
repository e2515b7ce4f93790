"""Agent dependency graph, resolution and validation."""

from handoff.graph.deps import AgentMeta, DependencyGraph, Node
from handoff.graph.loader import (
    build_dependency_graph,
    load_agent_metas,
    load_dependency_graph,
)
from handoff.graph.resolver import Resolver
from handoff.graph.validator import Validator

__all__ = [
    "AgentMeta",
    "DependencyGraph",
    "Node",
    "Resolver",
    "Validator",
    "build_dependency_graph",
    "load_agent_metas",
    "load_dependency_graph",
]
