"""Shared pytest fixtures for test infrastructure."""

import pytest

from promptcraft.intelligence import (
    Intent,
    IntentAnalysis,
    IntentDetector,
    Mode,
    PatternContext,
    PatternLibrary,
    PromptOptimizer,
    QualityAssessor,
)

CONFIG_ENV_VARS = (
    "LOG_LEVEL",
    "PROMPTCRAFT_MODE",
    "PROMPTCRAFT_DISABLED_PATTERNS",
    "PROMPTCRAFT_ESCALATION_SUGGEST_ABOVE",
    "PROMPTCRAFT_ESCALATION_QUALITY_FLOOR",
    "PROMPTCRAFT_PATTERN_PRIORITIES",
)


@pytest.fixture
def detector() -> IntentDetector:
    """Provide a fresh intent detector."""
    return IntentDetector()


@pytest.fixture
def assessor() -> QualityAssessor:
    """Provide a fresh quality assessor."""
    return QualityAssessor()


@pytest.fixture
def library() -> PatternLibrary:
    """Provide a pattern library holding every built-in pattern."""
    return PatternLibrary()


@pytest.fixture
def optimizer() -> PromptOptimizer:
    """Provide an optimizer with default collaborators and thresholds."""
    return PromptOptimizer()


@pytest.fixture
def make_context(detector: IntentDetector):
    """Provide a factory for pattern contexts.

    Returns:
        Callable: Factory taking the prompt text, an optional mode and an
        optional forced intent. Without a forced intent the detector decides.

    Example:
        def test_something(make_context):
            context = make_context("Fix the crash", intent=Intent.DEBUGGING)
            result = pattern.apply("Fix the crash", context)
    """

    def _create(
        text: str,
        mode: Mode = Mode.FAST,
        intent: Intent | None = None,
    ) -> PatternContext:
        if intent is None:
            analysis = detector.analyze(text)
        else:
            analysis = IntentAnalysis(
                primary_intent=intent,
                confidence=90,
                characteristics=detector.characteristics(text),
            )
        return PatternContext(mode=mode, original_prompt=text, intent=analysis)

    return _create


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every configuration variable for the duration of a test.

    Each variable is set before being deleted so that monkeypatch also
    undoes values a .env file loads during the test.
    """
    for name in CONFIG_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
