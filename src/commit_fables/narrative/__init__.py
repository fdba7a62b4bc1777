"""Narrative rendering and story assembly.

Templates are deterministic: the same commits and settings always render
the same text.
"""

from .formatting import TimeSpan, describe_persona, format_duration, time_of_day
from .story import Story, assemble_story
from .templates import (
    CasualTemplate,
    EpicTemplate,
    NarrativeTemplate,
    StoryTemplate,
    TechnicalTemplate,
    get_template,
)

__all__ = [
    "Story",
    "assemble_story",
    "StoryTemplate",
    "EpicTemplate",
    "NarrativeTemplate",
    "CasualTemplate",
    "TechnicalTemplate",
    "get_template",
    "TimeSpan",
    "describe_persona",
    "format_duration",
    "time_of_day",
]
