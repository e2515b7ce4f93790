"""Task complexity analysis."""

from .complexity_analyzer import (
    ComplexityAnalyzer,
    ComplexityLevel,
    TaskComplexity,
    analyze,
)

__all__ = [
    "analyze",
    "ComplexityAnalyzer",
    "ComplexityLevel",
    "TaskComplexity",
]
