"""Engine tuning parameters.

Every numeric threshold used by the persona classifier, pattern detector
and achievement extractor lives here so that product tuning never needs a
code change. Defaults are documented next to each field.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import ConfigError

# Importance of each commit type when scoring a pattern (keyed by type value)
DEFAULT_TYPE_WEIGHTS: dict[str, float] = {
    "feature": 1.0,
    "release": 1.0,
    "refactor": 0.9,
    "perf": 0.9,
    "bugfix": 0.8,
    "revert": 0.6,
    "test": 0.6,
    "merge": 0.5,
    "docs": 0.5,
    "chore": 0.4,
    "style": 0.3,
}


@dataclass(frozen=True)
class EngineConfig:
    """Tunable thresholds for story generation."""

    # Time zone used to read hour-of-day and weekday from UTC timestamps
    timezone: str = "UTC"

    # Pattern clustering: a quiet stretch longer than this closes a pattern
    idle_gap_hours: float = 48.0

    # Significance scoring
    size_weight: float = 1.0
    density_weight: float = 0.5
    density_cap: float = 10.0  # commits per hour
    significance_k: float = 0.15
    type_weights: dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_TYPE_WEIGHTS)
    )

    # Achievement qualification
    achievement_significance: float = 0.8
    achievement_min_commits: int = 10

    # Persona traits
    consistent_hour_stddev: float = 2.0
    dedicated_min_commits: int = 10
    dedicated_commits_per_day: float = 3.0
    adaptable_min_weekdays: int = 5
    balanced_weekend_tolerance: float = 0.1

    # Stats
    top_languages_limit: int = 5

    def __post_init__(self):
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(
                f"Unknown time zone: {self.timezone!r}", {"timezone": self.timezone}
            ) from e

        if self.idle_gap_hours <= 0:
            raise ConfigError("idle_gap_hours must be positive")
        if self.significance_k <= 0:
            raise ConfigError("significance_k must be positive")
        if not 0.0 <= self.achievement_significance <= 1.0:
            raise ConfigError("achievement_significance must be within [0, 1]")
        if self.achievement_min_commits < 1:
            raise ConfigError("achievement_min_commits must be at least 1")
        if self.top_languages_limit < 1:
            raise ConfigError("top_languages_limit must be at least 1")

        missing = set(DEFAULT_TYPE_WEIGHTS) - set(self.type_weights)
        if missing:
            raise ConfigError(
                f"type_weights is missing: {', '.join(sorted(missing))}",
                {"missing": sorted(missing)},
            )

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def type_weight(self, type_value: str) -> float:
        return self.type_weights[type_value]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EngineConfig:
        """Build a config from a plain mapping, rejecting unknown keys.

        A partial ``type_weights`` mapping is merged over the defaults.
        """
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(
                f"Unknown config keys: {', '.join(unknown)}", {"unknown": unknown}
            )

        values: dict[str, Any] = {}
        for key, value in data.items():
            if key == "type_weights":
                if not isinstance(value, dict):
                    raise ConfigError("type_weights must be a mapping")
                merged = dict(DEFAULT_TYPE_WEIGHTS)
                for type_value, weight in value.items():
                    if type_value not in DEFAULT_TYPE_WEIGHTS:
                        raise ConfigError(f"Unknown commit type in type_weights: {type_value!r}")
                    if not isinstance(weight, (int, float)) or isinstance(weight, bool):
                        raise ConfigError(f"type_weights[{type_value!r}] must be a number")
                    merged[type_value] = float(weight)
                values[key] = merged
                continue

            default = getattr(cls, key)
            if isinstance(default, str):
                if not isinstance(value, str):
                    raise ConfigError(f"{key} must be a string")
            elif isinstance(default, int) and not isinstance(default, bool):
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigError(f"{key} must be an integer")
            elif isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{key} must be a number")
            values[key] = value

        return cls(**values)


def load_config(path: Path | str) -> EngineConfig:
    """Load an ``EngineConfig`` from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {path}", {"path": str(path)}) from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file is not valid JSON: {path}", {"path": str(path)}) from e

    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a JSON object", {"path": str(path)})

    return EngineConfig.from_dict(data)
