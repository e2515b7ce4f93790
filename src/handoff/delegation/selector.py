"""
Agent Selector — Complexity-Driven Role and Model Choice

Routing strategy:
    complexity level -> responsible role -> model tier
    (action, phase, role, metadata) -> skills, via a pluggable SkillMatcher

Tiers are tags (opus > sonnet > haiku), not concrete model identifiers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from handoff.errors import TaskValidationError
from handoff.models import AgentRole, Task
from handoff.scoring.complexity_analyzer import (
    ComplexityAnalyzer,
    ComplexityLevel,
    TaskComplexity,
)

from .skills import SkillContext, SkillMatcher

logger = logging.getLogger(__name__)


class ModelTier(StrEnum):
    """Capability tiers, lightest to heaviest."""

    HAIKU = "haiku"
    SONNET = "sonnet"
    OPUS = "opus"


@dataclass
class SelectionResult:
    """Selected agent configuration for a task."""

    role: AgentRole
    model: ModelTier
    skills: list[str] = field(default_factory=list)
    reason: str = ""
    complexity: TaskComplexity | None = None


def select_role(level: ComplexityLevel) -> AgentRole:
    """Map complexity to the responsible role; developer absorbs the low end."""
    if level == ComplexityLevel.ARCHITECTURAL:
        return AgentRole.ARCHITECT
    if level == ComplexityLevel.COMPLEX:
        return AgentRole.SENIOR
    return AgentRole.DEVELOPER


def select_model(role: AgentRole, level: ComplexityLevel) -> ModelTier:
    """Map (role, complexity) to a model tier."""
    if role in (AgentRole.ARCHITECT, AgentRole.REVIEWER):
        return ModelTier.OPUS
    if role == AgentRole.SENIOR:
        return ModelTier.OPUS if level >= ComplexityLevel.COMPLEX else ModelTier.SONNET
    if role == AgentRole.DEVELOPER:
        return ModelTier.SONNET if level >= ComplexityLevel.MODERATE else ModelTier.HAIKU
    return ModelTier.SONNET


class Selector:
    """
    Chooses the role, model tier and skills for a task.

    Args:
        skill_matcher: Optional SkillMatcher. Without one, no skills are matched.
        analyzer: Optional complexity analyzer override.
    """

    def __init__(
        self,
        skill_matcher: SkillMatcher | None = None,
        analyzer: ComplexityAnalyzer | None = None,
    ) -> None:
        self.skill_matcher = skill_matcher
        self.analyzer = analyzer or ComplexityAnalyzer()

    def select(self, task: Task) -> SelectionResult:
        """
        Analyze a task and return the agent configuration to run it with.

        Raises:
            TaskValidationError: task has no description or type
        """
        try:
            task.validate()
        except TaskValidationError as exc:
            raise TaskValidationError(f"invalid task: {exc}") from exc

        complexity = self.analyzer.analyze(task)
        role = select_role(complexity.level)
        model = select_model(role, complexity.level)
        skills = self.match_skills(task, role)

        logger.debug(
            "Selected %s/%s for %s task (score %d)",
            role,
            model,
            task.task_type,
            complexity.score,
        )

        return SelectionResult(
            role=role,
            model=model,
            skills=skills,
            reason=f"complexity={complexity.level}, task_type={task.task_type}",
            complexity=complexity,
        )

    def match_skills(self, task: Task, role: AgentRole) -> list[str]:
        if self.skill_matcher is None:
            return []
        context = SkillContext(
            action=task.action,
            phase=task.phase,
            role=role,
            metadata=dict(task.metadata),
        )
        return list(self.skill_matcher.match_for_context(context))
