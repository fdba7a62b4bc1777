"""Caller-supplied story settings and their validation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from .errors import SettingsValidationError


class StoryStyle(str, Enum):
    """Narrative voice used to render the story."""

    EPIC = "epic"
    NARRATIVE = "narrative"
    CASUAL = "casual"
    TECHNICAL = "technical"


class StoryTone(str, Enum):
    ENTHUSIASTIC = "enthusiastic"
    PROFESSIONAL = "professional"
    CASUAL = "casual"


class StoryLength(str, Enum):
    BRIEF = "brief"
    STANDARD = "standard"
    DETAILED = "detailed"


ENUM_FIELDS: dict[str, type[Enum]] = {
    "style": StoryStyle,
    "tone": StoryTone,
    "length": StoryLength,
}

FLAG_FIELDS = ("include_time_context", "include_language_context", "include_line_changes")

# camelCase keys as sent by the web form / API body
CAMEL_CASE_KEYS = {
    "includeTimeContext": "include_time_context",
    "includeLanguageContext": "include_language_context",
    "includeLineChanges": "include_line_changes",
}


def coerce_enum(name: str, value: Any) -> Enum:
    enum_cls = ENUM_FIELDS[name]
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except (ValueError, TypeError) as e:
        allowed = ", ".join(member.value for member in enum_cls)
        raise SettingsValidationError(
            f"Invalid {name} {value!r}; expected one of: {allowed}",
            {"field": name, "value": value},
        ) from e


@dataclass(frozen=True)
class StorySettings:
    """Validated settings bundle.

    Strings are accepted for the enum fields and converted; anything
    outside the closed sets raises SettingsValidationError.
    """

    style: StoryStyle = StoryStyle.NARRATIVE
    include_time_context: bool = True
    include_language_context: bool = True
    include_line_changes: bool = True
    tone: StoryTone = StoryTone.PROFESSIONAL
    length: StoryLength = StoryLength.STANDARD

    def __post_init__(self):
        for name in ENUM_FIELDS:
            object.__setattr__(self, name, coerce_enum(name, getattr(self, name)))

        for name in FLAG_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise SettingsValidationError(
                    f"{name} must be a boolean, got {value!r}",
                    {"field": name, "value": value},
                )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StorySettings:
        """Build settings from a request body; accepts snake_case or camelCase keys."""
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = CAMEL_CASE_KEYS.get(key, key)
            if name not in ENUM_FIELDS and name not in FLAG_FIELDS:
                raise SettingsValidationError(f"Unknown setting: {key!r}", {"field": key})
            values[name] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "style": self.style.value,
            "include_time_context": self.include_time_context,
            "include_language_context": self.include_language_context,
            "include_line_changes": self.include_line_changes,
            "tone": self.tone.value,
            "length": self.length.value,
        }
