"""
Task Data Models

Closed vocabularies (task categories, agent roles, specification actions and phases)
and the Task that flows through the selector and delegator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from handoff.errors import TaskValidationError


class TaskType(StrEnum):
    """Kind of development task."""

    FEATURE = "feature"
    BUG_FIX = "bugfix"
    REFACTOR = "refactor"
    TEST = "test"
    DOCUMENTATION = "documentation"
    ARCHITECTURE = "architecture"

    @classmethod
    def parse(cls, value: str) -> TaskType:
        """Parse a category name, accepting "bug fix" / "bug_fix" spellings."""
        key = value.strip().lower().replace(" ", "").replace("_", "").replace("-", "")
        for member in cls:
            if member.value == key:
                return member
        raise TaskValidationError(f"unknown task type: {value!r}")


class AgentRole(StrEnum):
    """Specialization of an agent in the workflow."""

    PRODUCT = "product"
    ARCHITECT = "architect"
    SENIOR = "senior"
    DEVELOPER = "developer"
    REVIEWER = "reviewer"
    OPS = "ops"

    @classmethod
    def parse(cls, value: str) -> AgentRole:
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise TaskValidationError(f"unknown agent role: {value!r}") from None


class ActionPhase(StrEnum):
    """Development lifecycle phase."""

    DISCOVERY = "discovery"
    PLANNING = "planning"
    EXECUTION = "execution"
    VALIDATION = "validation"
    LIFECYCLE = "lifecycle"


class SpecAction(StrEnum):
    """Action performed on a specification, grouped by phase."""

    RESEARCH = "research"
    ANALYZE = "analyze"
    RETROFIT = "retrofit"
    PROPOSAL = "proposal"
    PLAN = "plan"
    DESIGN = "design"
    SPLIT = "split"
    IMPLEMENT = "implement"
    EXECUTE = "execute"
    SCAFFOLD = "scaffold"
    REVIEW = "review"
    VERIFY = "verify"
    DEBUG = "debug"
    LINT = "lint"
    APPROVE = "approve"
    ARCHIVE = "archive"
    STATUS = "status"

    @property
    def phase(self) -> ActionPhase:
        return ACTION_PHASES[self]


ACTION_PHASES: dict[SpecAction, ActionPhase] = {
    SpecAction.RESEARCH: ActionPhase.DISCOVERY,
    SpecAction.ANALYZE: ActionPhase.DISCOVERY,
    SpecAction.RETROFIT: ActionPhase.DISCOVERY,
    SpecAction.PROPOSAL: ActionPhase.PLANNING,
    SpecAction.PLAN: ActionPhase.PLANNING,
    SpecAction.DESIGN: ActionPhase.PLANNING,
    SpecAction.SPLIT: ActionPhase.PLANNING,
    SpecAction.IMPLEMENT: ActionPhase.EXECUTION,
    SpecAction.EXECUTE: ActionPhase.EXECUTION,
    SpecAction.SCAFFOLD: ActionPhase.EXECUTION,
    SpecAction.REVIEW: ActionPhase.VALIDATION,
    SpecAction.VERIFY: ActionPhase.VALIDATION,
    SpecAction.DEBUG: ActionPhase.VALIDATION,
    SpecAction.LINT: ActionPhase.VALIDATION,
    SpecAction.APPROVE: ActionPhase.LIFECYCLE,
    SpecAction.ARCHIVE: ActionPhase.LIFECYCLE,
    SpecAction.STATUS: ActionPhase.LIFECYCLE,
}


def _parse_enum(enum_cls: type[StrEnum], value: Any, label: str) -> Any:
    if value == "" or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        raise TaskValidationError(f"unknown {label}: {value!r}") from None


@dataclass
class Task:
    """
    A development task to be analyzed and routed.

    Non-empty strings for task_type, action and phase are parsed into their
    enums on construction, so an unknown category fails here rather than
    falling through to a default later. Empty values are left for validate().
    """

    description: str
    task_type: TaskType | str
    action: SpecAction | str = ""
    phase: ActionPhase | str = ""
    files: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.task_type, str) and not isinstance(self.task_type, TaskType):
            self.task_type = TaskType.parse(self.task_type) if self.task_type.strip() else ""
        self.action = _parse_enum(SpecAction, self.action, "action")
        self.phase = _parse_enum(ActionPhase, self.phase, "phase")
        if not self.phase and isinstance(self.action, SpecAction):
            self.phase = self.action.phase

    def validate(self) -> None:
        """Raise TaskValidationError when description or type is missing."""
        if not self.description:
            raise TaskValidationError("task description required")
        if not self.task_type:
            raise TaskValidationError("task type required")
