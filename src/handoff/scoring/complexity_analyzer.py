#!/usr/bin/env python3
"""Complexity Analyzer - additive task complexity scoring.

Scores a Task from three signals (its category, keywords in its description
and the number of files it touches) and buckets the sum into an ordinal level
that drives role and model selection.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Final

from handoff.models import Task, TaskType

# ═══════════════════════════════════════════════════════════════════════════
# COMPLEXITY SIGNALS
# ═══════════════════════════════════════════════════════════════════════════

TYPE_WEIGHTS: Final[dict[str, int]] = {
    TaskType.ARCHITECTURE: 40,
    TaskType.FEATURE: 25,
    TaskType.REFACTOR: 20,
    TaskType.BUG_FIX: 15,
    TaskType.TEST: 10,
    TaskType.DOCUMENTATION: 5,
}

# Unrecognized categories score like a bug fix
DEFAULT_TYPE_WEIGHT: Final[int] = 15

# Case-sensitive substring matches; every hit adds its full weight
KEYWORD_WEIGHTS: Final[dict[str, int]] = {
    "architecture": 15,
    "design": 15,
    "migrate": 12,
    "integrate": 10,
    "refactor": 10,
    "implement": 8,
    "add": 5,
    "create": 5,
    "fix": 3,
    "update": 3,
}

# (max file count, weight); anything above the last bound gets FILE_WEIGHT_MAX
FILE_THRESHOLDS: Final[list[tuple[int, int]]] = [
    (0, 0),
    (1, 2),
    (3, 5),
    (5, 10),
]
FILE_WEIGHT_MAX: Final[int] = 15


# ═══════════════════════════════════════════════════════════════════════════
# DATA STRUCTURES
# ═══════════════════════════════════════════════════════════════════════════


class ComplexityLevel(IntEnum):
    """Ordinal complexity classification."""

    TRIVIAL = 0
    SIMPLE = 1
    MODERATE = 2
    COMPLEX = 3
    ARCHITECTURAL = 4

    def __str__(self) -> str:
        return self.name.lower()

    # IntEnum would otherwise format as the bare integer
    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


# Minimum score per level, highest first
LEVEL_THRESHOLDS: Final[list[tuple[int, ComplexityLevel]]] = [
    (50, ComplexityLevel.ARCHITECTURAL),
    (35, ComplexityLevel.COMPLEX),
    (20, ComplexityLevel.MODERATE),
    (10, ComplexityLevel.SIMPLE),
]


@dataclass(frozen=True)
class TaskComplexity:
    """Result of complexity analysis."""

    level: ComplexityLevel
    score: int
    reason: str


# ═══════════════════════════════════════════════════════════════════════════
# SCORING FUNCTIONS
# ═══════════════════════════════════════════════════════════════════════════


def score_by_type(task_type: str) -> int:
    return TYPE_WEIGHTS.get(task_type, DEFAULT_TYPE_WEIGHT)


def matched_keywords(description: str) -> list[str]:
    """Keywords found in the description, in table order."""
    return [keyword for keyword in KEYWORD_WEIGHTS if keyword in description]


def score_by_description(description: str) -> int:
    return sum(KEYWORD_WEIGHTS[keyword] for keyword in matched_keywords(description))


def score_by_files(files: list[str]) -> int:
    count = len(files)
    for max_count, weight in FILE_THRESHOLDS:
        if count <= max_count:
            return weight
    return FILE_WEIGHT_MAX


def score_to_level(score: int) -> ComplexityLevel:
    for minimum, level in LEVEL_THRESHOLDS:
        if score >= minimum:
            return level
    return ComplexityLevel.TRIVIAL


# ═══════════════════════════════════════════════════════════════════════════
# MAIN ANALYSIS
# ═══════════════════════════════════════════════════════════════════════════


def analyze(task: Task) -> TaskComplexity:
    """Determine the complexity level of a task.

    Returns TaskComplexity with:
        - level: ordinal ComplexityLevel
        - score: type + keyword + file-count weights
        - reason: human-readable breakdown of each contribution
    """
    task_type = str(task.task_type)
    type_score = score_by_type(task_type)
    keywords = matched_keywords(task.description)
    keyword_score = score_by_description(task.description)
    file_score = score_by_files(task.files)

    score = type_score + keyword_score + file_score

    reasoning_parts = [f"type {task_type or 'unknown'}: {type_score}"]
    if keywords:
        reasoning_parts.append(f"keywords {', '.join(keywords)}: {keyword_score}")
    reasoning_parts.append(f"{len(task.files)} file(s): {file_score}")

    return TaskComplexity(
        level=score_to_level(score),
        score=score,
        reason="; ".join(reasoning_parts),
    )


class ComplexityAnalyzer:
    """Stateless analyzer object for callers that inject collaborators."""

    def analyze(self, task: Task) -> TaskComplexity:
        return analyze(task)
