"""
Delegation — Role Selection and Workflow Hand-offs

Core Components:
- selector: complexity -> role -> model tier, plus skill matching
- delegator: static per-category chains and the role hand-off matrix
- skills: SkillMatcher protocol and the trigger-table StaticSkillMatcher
"""

from .delegator import (
    DEFAULT_CHAIN,
    DELEGATION_CHAINS,
    HANDOFF_MATRIX,
    Delegator,
    can_hand_off,
)
from .selector import ModelTier, SelectionResult, Selector, select_model, select_role
from .skills import SkillContext, SkillMatcher, SkillRule, StaticSkillMatcher

__all__ = [
    # Delegator
    "DEFAULT_CHAIN",
    "DELEGATION_CHAINS",
    "HANDOFF_MATRIX",
    "Delegator",
    "can_hand_off",
    # Selector
    "ModelTier",
    "SelectionResult",
    "Selector",
    "select_model",
    "select_role",
    # Skills
    "SkillContext",
    "SkillMatcher",
    "SkillRule",
    "StaticSkillMatcher",
]
