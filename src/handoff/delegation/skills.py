"""
Skill Matching — Context-to-Skill Lookup

The selector only needs one operation from a skill source: given the
execution context, name the skills that apply. Anything satisfying
SkillMatcher can be plugged in; StaticSkillMatcher is the trigger-table
implementation used by the CLI.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from handoff.models import ActionPhase, AgentRole, SpecAction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkillContext:
    """Execution context handed to a skill matcher."""

    action: SpecAction | str = ""
    phase: ActionPhase | str = ""
    role: AgentRole | str = ""
    metadata: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class SkillMatcher(Protocol):
    """Anything that can name the skills applicable to a context."""

    def match_for_context(self, context: SkillContext) -> list[str]: ...


@dataclass(frozen=True)
class SkillRule:
    """A named skill and the terms that trigger it."""

    name: str
    triggers: tuple[str, ...] = ()


def build_search_terms(context: SkillContext) -> list[str]:
    """Lower-cased terms from action, phase, role and metadata keys/values."""
    terms: list[str] = []
    for value in (context.action, context.phase, context.role):
        if value:
            terms.append(str(value).lower())

    for key, value in context.metadata.items():
        terms.append(str(key).lower())
        if isinstance(value, str):
            terms.append(value.lower())

    return terms


def _matches(rule: SkillRule, terms: list[str]) -> bool:
    for trigger in rule.triggers:
        trigger = trigger.lower()
        if not trigger:
            continue
        for term in terms:
            if not term:
                continue
            if trigger == term or trigger in term or term in trigger:
                return True
    return False


class StaticSkillMatcher:
    """Matches skills against a fixed table of trigger rules."""

    def __init__(self, rules: Iterable[SkillRule] = ()) -> None:
        self._rules: tuple[SkillRule, ...] = tuple(rules)

    @property
    def rules(self) -> tuple[SkillRule, ...]:
        return self._rules

    def match_for_context(self, context: SkillContext) -> list[str]:
        terms = build_search_terms(context)
        matched = [rule.name for rule in self._rules if _matches(rule, terms)]
        logger.debug("Matched %d skill(s) for terms %s: %s", len(matched), terms, matched)
        return matched
