"""Runtime settings for the optimizer and the command-line tool.

Every setting comes from an environment variable, optionally seeded from a
.env file through python-dotenv. Unset variables fall back to defaults.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from promptcraft.intelligence.types import Mode


@dataclass(frozen=True)
class Config:
    """Optimizer settings read from the environment.

    Attributes:
        log_level: Root logging level name (LOG_LEVEL).
        default_mode: Mode used when the caller does not pick one (PROMPTCRAFT_MODE).
        disabled_patterns: Pattern ids to leave out (PROMPTCRAFT_DISABLED_PATTERNS).
        escalation_suggest_above: Escalation score that suggests deep mode.
        escalation_quality_floor: Dimension score below which escalation factors apply.
        pattern_priorities: Pattern id to priority overrides
            (PROMPTCRAFT_PATTERN_PRIORITIES, e.g. "scope-definer=9").
    """

    log_level: str
    default_mode: Mode
    disabled_patterns: tuple[str, ...]
    escalation_suggest_above: int
    escalation_quality_floor: int
    pattern_priorities: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """Build settings from the environment.

        Args:
            env_file: .env file to load first. When omitted, python-dotenv
                looks for one starting from the working directory.

        Returns:
            Validated settings.

        Raises:
            ValueError: If an environment variable holds an invalid value.
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level not in valid_levels:
            raise ValueError(
                f"Invalid LOG_LEVEL: {log_level}. Must be one of {valid_levels}"
            )

        mode_name = os.getenv("PROMPTCRAFT_MODE", Mode.FAST.value).strip().lower()
        try:
            default_mode = Mode(mode_name)
        except ValueError:
            valid_modes = [mode.value for mode in Mode]
            raise ValueError(
                f"Invalid PROMPTCRAFT_MODE: {mode_name}. Must be one of {valid_modes}"
            ) from None

        disabled_patterns = tuple(
            pattern_id.strip()
            for pattern_id in os.getenv("PROMPTCRAFT_DISABLED_PATTERNS", "").split(",")
            if pattern_id.strip()
        )

        return cls(
            log_level=log_level,
            default_mode=default_mode,
            disabled_patterns=disabled_patterns,
            escalation_suggest_above=_score_from_env(
                "PROMPTCRAFT_ESCALATION_SUGGEST_ABOVE", 45
            ),
            escalation_quality_floor=_score_from_env(
                "PROMPTCRAFT_ESCALATION_QUALITY_FLOOR", 60
            ),
            pattern_priorities=_priorities_from_env("PROMPTCRAFT_PATTERN_PRIORITIES"),
        )


def _score_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if not 0 <= value <= 100:
        raise ValueError(f"{name} must be between 0 and 100, got {value}")
    return value


def _priorities_from_env(name: str) -> dict[str, int]:
    priorities: dict[str, int] = {}
    for entry in os.getenv(name, "").split(","):
        if not entry.strip():
            continue
        pattern_id, sep, raw = entry.partition("=")
        pattern_id = pattern_id.strip()
        if not sep or not pattern_id:
            raise ValueError(f"{name} entries must look like id=priority, got {entry.strip()!r}")
        try:
            priority = int(raw)
        except ValueError:
            raise ValueError(
                f"{name} priority for {pattern_id} must be an integer, got {raw.strip()!r}"
            ) from None
        if not 1 <= priority <= 10:
            raise ValueError(
                f"{name} priority for {pattern_id} must be between 1 and 10, got {priority}"
            )
        priorities[pattern_id] = priority
    return priorities
