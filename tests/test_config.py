"""Tests for environment-based configuration."""

from pathlib import Path

import pytest

from promptcraft.config import Config
from promptcraft.intelligence import Mode

pytestmark = pytest.mark.usefixtures("clean_env")


def _missing_env_file(tmp_path: Path) -> Path:
    return tmp_path / "missing.env"


def test_defaults(tmp_path: Path) -> None:
    config = Config.from_env(_missing_env_file(tmp_path))

    assert config == Config(
        log_level="INFO",
        default_mode=Mode.FAST,
        disabled_patterns=(),
        escalation_suggest_above=45,
        escalation_quality_floor=60,
    )


def test_values_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PROMPTCRAFT_MODE", "Deep")
    monkeypatch.setenv("PROMPTCRAFT_DISABLED_PATTERNS", "conciseness-filter, scope-definer,,")
    monkeypatch.setenv("PROMPTCRAFT_ESCALATION_SUGGEST_ABOVE", "30")
    monkeypatch.setenv("PROMPTCRAFT_ESCALATION_QUALITY_FLOOR", "70")

    config = Config.from_env(_missing_env_file(tmp_path))

    assert config.log_level == "DEBUG"
    assert config.default_mode is Mode.DEEP
    assert config.disabled_patterns == ("conciseness-filter", "scope-definer")
    assert config.escalation_suggest_above == 30
    assert config.escalation_quality_floor == 70


def test_values_from_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("LOG_LEVEL=WARNING\nPROMPTCRAFT_MODE=deep\n")

    config = Config.from_env(env_file)

    assert config.log_level == "WARNING"
    assert config.default_mode is Mode.DEEP


def test_blank_threshold_uses_default(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROMPTCRAFT_ESCALATION_SUGGEST_ABOVE", "  ")

    assert Config.from_env(_missing_env_file(tmp_path)).escalation_suggest_above == 45


def test_invalid_log_level(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "LOUD")

    with pytest.raises(ValueError, match="Invalid LOG_LEVEL"):
        Config.from_env(_missing_env_file(tmp_path))


def test_invalid_mode(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROMPTCRAFT_MODE", "turbo")

    with pytest.raises(ValueError, match="Invalid PROMPTCRAFT_MODE"):
        Config.from_env(_missing_env_file(tmp_path))


def test_non_integer_threshold(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROMPTCRAFT_ESCALATION_QUALITY_FLOOR", "high")

    with pytest.raises(ValueError, match="must be an integer"):
        Config.from_env(_missing_env_file(tmp_path))


def test_out_of_range_threshold(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROMPTCRAFT_ESCALATION_SUGGEST_ABOVE", "150")

    with pytest.raises(ValueError, match="between 0 and 100"):
        Config.from_env(_missing_env_file(tmp_path))


def test_pattern_priorities(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROMPTCRAFT_PATTERN_PRIORITIES", "conciseness-filter=3, scope-definer = 9 ,,")

    config = Config.from_env(_missing_env_file(tmp_path))

    assert config.pattern_priorities == {"conciseness-filter": 3, "scope-definer": 9}


@pytest.mark.parametrize(
    ("value", "message"),
    [
        ("scope-definer", "must look like id=priority"),
        ("=5", "must look like id=priority"),
        ("scope-definer=high", "must be an integer"),
        ("scope-definer=0", "between 1 and 10"),
        ("scope-definer=11", "between 1 and 10"),
    ],
)
def test_invalid_pattern_priorities(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, value: str, message: str
) -> None:
    monkeypatch.setenv("PROMPTCRAFT_PATTERN_PRIORITIES", value)

    with pytest.raises(ValueError, match=message):
        Config.from_env(_missing_env_file(tmp_path))
