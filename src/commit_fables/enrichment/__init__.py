"""Enrichment stages: persona, patterns and achievements.

All stages are pure functions over normalized commits.
"""

from .achievements import Achievement, extract_achievements
from .patterns import (
    CommitPattern,
    CommitPatternType,
    detect_patterns,
    parse_commit_type,
    verify_partition,
)
from .persona import (
    DeveloperPersona,
    PersonaTrait,
    PersonaType,
    classify_persona,
)

__all__ = [
    # Persona
    "PersonaType",
    "PersonaTrait",
    "DeveloperPersona",
    "classify_persona",
    # Patterns
    "CommitPatternType",
    "CommitPattern",
    "parse_commit_type",
    "detect_patterns",
    "verify_partition",
    # Achievements
    "Achievement",
    "extract_achievements",
]
