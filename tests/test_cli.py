"""Tests for the command-line interface."""

import pytest

from promptcraft.cli import (
    main,
    render_recommendation_detail,
    render_result,
    render_statistics,
)
from promptcraft.intelligence import (
    DetailedRecommendation,
    EscalationAnalysis,
    EscalationReason,
    Mode,
    PatternStatistics,
    PromptOptimizer,
    QualityLevel,
)

pytestmark = pytest.mark.usefixtures("clean_env")


def test_main_prints_enhanced_prompt_and_scores(capsys: pytest.CaptureFixture[str]) -> None:
    main(["Create a login page"])

    out = capsys.readouterr().out
    assert out.startswith("Create a login page")
    assert "Intent: code-generation" in out
    assert "Mode: fast" in out
    assert "overall" in out
    assert "Patterns applied:" in out


def test_main_deep_mode_verbose(capsys: pytest.CaptureFixture[str]) -> None:
    main(["Create a login page", "--mode", "deep", "--verbose"])

    out = capsys.readouterr().out
    assert "Mode: deep" in out
    assert "  - Objective Clarifier [high]: Added an explicit objective and deliverable" in out
    assert "Quality level: " in out
    assert "Escalation score:" not in out


def test_main_verbose_explains_deep_mode_recommendation(
    capsys: pytest.CaptureFixture[str],
) -> None:
    main(["make something", "--verbose"])

    out = capsys.readouterr().out
    assert "Escalation score: " in out
    assert "  - length-mismatch +15: Very short prompt with incomplete requirements" in out
    assert out.rstrip().endswith("Re-run with --mode deep.")


def test_main_uses_configured_mode(
    capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("PROMPTCRAFT_MODE", "deep")

    main(["Create a login page"])

    assert "Mode: deep" in capsys.readouterr().out


def test_main_stats_only(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--stats"])

    out = capsys.readouterr().out
    assert "Patterns: 27 total" in out
    assert "fast: 12" in out
    assert "deep: 27" in out


def test_main_rejects_blank_prompt(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["   "])

    assert exc_info.value.code == 2
    assert "prompt must not be blank" in capsys.readouterr().err


def test_main_requires_a_prompt(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        main([])

    assert "prompt must not be blank" in capsys.readouterr().err


def test_main_reports_configuration_errors(
    capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "LOUD")

    with pytest.raises(SystemExit):
        main(["Create a login page"])

    assert "Configuration error: Invalid LOG_LEVEL" in capsys.readouterr().err


async def test_render_result_includes_recommendation() -> None:
    optimizer = PromptOptimizer()
    result = await optimizer.optimize("Plan the microservices architecture", Mode.FAST)

    lines = render_result(result, "Try deep mode.")

    assert lines[0] == result.enhanced
    assert lines[-1] == "Try deep mode."
    assert f"  {'overall':<14} {result.quality.overall:>3}" in lines


def test_render_statistics() -> None:
    assert render_statistics(PatternStatistics(27, 12, 27)) == [
        "Patterns: 27 total",
        "  fast: 12",
        "  deep: 27",
    ]


def test_main_reports_bad_pattern_priorities(
    capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("PROMPTCRAFT_PATTERN_PRIORITIES", "scope-definer=99")

    with pytest.raises(SystemExit):
        main(["Create a login page"])

    assert "between 1 and 10" in capsys.readouterr().err


def test_render_recommendation_detail() -> None:
    detail = DetailedRecommendation(
        message="Deep mode would provide: validation checklist. Re-run with --mode deep.",
        quality_level=QualityLevel.DECENT,
        escalation=EscalationAnalysis(
            should_escalate=True,
            score=50,
            confidence="low",
            reasons=(
                EscalationReason("complex-intent", 20, "migration requires thorough analysis"),
                EscalationReason("length-mismatch", 15, "Very short prompt with incomplete requirements"),
            ),
            deep_mode_value="Deep mode would provide: validation checklist.",
        ),
    )

    assert render_recommendation_detail(detail) == [
        "Quality level: decent",
        "Escalation score: 50 (low confidence)",
        "  - complex-intent +20: migration requires thorough analysis",
        "  - length-mismatch +15: Very short prompt with incomplete requirements",
    ]


def test_render_recommendation_detail_without_escalation() -> None:
    detail = DetailedRecommendation(
        message="Good quality. Ready to use!", quality_level=QualityLevel.GOOD
    )

    assert render_recommendation_detail(detail) == ["Quality level: good"]
