"""Commit Fables: turn commit history into a styled story."""

from .commits import CommitEvent, normalize_commits
from .config import EngineConfig, load_config
from .enrichment import (
    Achievement,
    CommitPattern,
    CommitPatternType,
    DeveloperPersona,
    PersonaTrait,
    PersonaType,
    classify_persona,
    detect_patterns,
    extract_achievements,
)
from .errors import (
    CommitFablesError,
    ConfigError,
    MalformedCommitError,
    PatternInvariantError,
    SettingsValidationError,
)
from .narrative import Story, assemble_story, get_template
from .settings import StoryLength, StorySettings, StoryStyle, StoryTone
from .stats import LanguageShare, RepositoryMetadata, StoryStats

__version__ = "0.1.0"

__all__ = [
    "Achievement",
    "CommitEvent",
    "CommitFablesError",
    "CommitPattern",
    "CommitPatternType",
    "ConfigError",
    "DeveloperPersona",
    "EngineConfig",
    "LanguageShare",
    "MalformedCommitError",
    "PatternInvariantError",
    "PersonaTrait",
    "PersonaType",
    "RepositoryMetadata",
    "SettingsValidationError",
    "Story",
    "StoryLength",
    "StorySettings",
    "StoryStats",
    "StoryStyle",
    "StoryTone",
    "assemble_story",
    "classify_persona",
    "detect_patterns",
    "extract_achievements",
    "get_template",
    "load_config",
    "normalize_commits",
]
