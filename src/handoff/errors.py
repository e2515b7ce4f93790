"""Error kinds raised by the handoff core.

Three families, kept apart so callers can tell them apart:

- TaskValidationError: the task itself is malformed (checked before any lookup)
- GraphError: the dependency graph is structurally broken (missing agent, cycle)
- NoNextAgentError: the delegation chain ended; a normal "task complete" signal
"""

from __future__ import annotations


class HandoffError(Exception):
    """Base class for every error raised by handoff."""


class TaskValidationError(HandoffError, ValueError):
    """Task is missing a description or category, or names an unknown value."""


class GraphError(HandoffError):
    """Structural problem in the agent dependency graph."""


class AgentNotFoundError(GraphError, LookupError):
    """A referenced agent does not exist in the graph."""

    def __init__(self, name: str) -> None:
        super().__init__(f"agent not found: {name}")
        self.name = name


class CycleError(GraphError):
    """The dependency graph contains a cycle."""

    def __init__(self, path: list[str] | None = None) -> None:
        self.path = list(path or [])
        if self.path:
            message = "cycle detected in dependency graph: " + " -> ".join(self.path)
        else:
            message = "cycle detected in dependency graph"
        super().__init__(message)


class NoNextAgentError(HandoffError):
    """The current role is last in its chain, or not part of it."""

    def __init__(self, role: str, task_type: str) -> None:
        super().__init__(f"no next agent for role {role} in task type {task_type}")
        self.role = role
        self.task_type = task_type


class MetadataError(HandoffError):
    """An agent metadata file could not be read or parsed."""


class ConfigError(HandoffError):
    """Configuration file is unreadable or invalid."""
