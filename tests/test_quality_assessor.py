"""Tests for rule-based quality assessment."""

from dataclasses import astuple

import pytest

from promptcraft.intelligence import Intent, IntentAnalysis, QualityAssessor
from promptcraft.intelligence.quality_assessor import (
    OVERALL_WEIGHTS,
    missing_requirements,
    overall_score,
)

CODE_GENERATION = IntentAnalysis(primary_intent=Intent.CODE_GENERATION, confidence=94)
DEBUGGING = IntentAnalysis(primary_intent=Intent.DEBUGGING, confidence=80)


def _dimension_scores(score) -> list[int]:
    return [
        score.clarity,
        score.efficiency,
        score.structure,
        score.completeness,
        score.actionability,
        score.specificity,
    ]


def test_short_code_generation_prompt_scores(assessor: QualityAssessor) -> None:
    score = assessor.assess_text("Create a login page", CODE_GENERATION)

    assert _dimension_scores(score) == [40, 100, 40, 40, 65, 90]
    assert score.overall == 58
    assert score.strengths == (
        "Concise and focused",
        "Highly specific with concrete details",
    )


@pytest.mark.parametrize(
    "prompt",
    [
        "",
        "   ",
        "Create a login page",
        "please please just really basically do something somehow with stuff etc? ? ? ? ?",
        "## Context\n\n- Currently `UserService.get_user()` fails in src/users.py\n" * 20,
    ],
)
@pytest.mark.parametrize("intent", list(Intent))
def test_scores_stay_within_bounds(
    assessor: QualityAssessor, prompt: str, intent: Intent
) -> None:
    score = assessor.assess_text(prompt, IntentAnalysis(primary_intent=intent, confidence=50))

    assert all(0 <= value <= 100 for value in _dimension_scores(score))
    assert 0 <= score.overall <= 100


def test_assessment_is_deterministic(assessor: QualityAssessor) -> None:
    prompt = "Fix the crash in checkout.py when the cart is empty"

    first = assessor.assess(prompt, prompt, DEBUGGING)
    second = QualityAssessor().assess(prompt, prompt, DEBUGGING)

    assert astuple(first) == astuple(second)


def test_assess_scores_the_enhanced_text(assessor: QualityAssessor) -> None:
    original = "Create a login page"
    enhanced = (
        original
        + "\n\n## Objective\n\nThe goal is a React login form that should return a session token."
        + "\n\n## Success Criteria\n\n- [ ] Tests pass for valid and empty input"
    )

    assert assessor.assess(original, enhanced, CODE_GENERATION).overall > (
        assessor.assess_text(original, CODE_GENERATION).overall
    )


def test_strengths_follow_high_dimensions(assessor: QualityAssessor) -> None:
    score = assessor.assess_text(
        "Fix the TypeError exception in src/cart.py: expected a total, "
        "but getting None after I reproduce the steps",
        DEBUGGING,
    )

    high = sum(1 for value in _dimension_scores(score) if value >= 85)
    assert len(score.strengths) == high


def test_overall_uses_fixed_weights() -> None:
    perfect = {name: 100 for name in OVERALL_WEIGHTS}
    assert overall_score(perfect) == 100
    assert overall_score({**perfect, "clarity": 50}) == 91
    assert sum(OVERALL_WEIGHTS.values()) == pytest.approx(1.0)


def test_missing_requirements_for_bare_debugging_prompt() -> None:
    assert missing_requirements("Fix it", Intent.DEBUGGING) == [
        "error-message",
        "expected-behavior",
        "actual-behavior",
        "reproduction-steps",
    ]


def test_missing_requirements_when_all_present() -> None:
    prompt = (
        "I get a TypeError exception when I click save. "
        "Expected the form to submit, but actually nothing happens."
    )

    assert missing_requirements(prompt, Intent.DEBUGGING) == []


def test_completeness_penalizes_each_missing_requirement(assessor: QualityAssessor) -> None:
    assert assessor.assess_text("Fix it", DEBUGGING).completeness == 40


def test_pleasantries_and_filler_reduce_efficiency(assessor: QualityAssessor) -> None:
    plain = assessor.assess_text("Create a login page", CODE_GENERATION)
    padded = assessor.assess_text(
        "Could you please just create a really simple login page, thanks",
        CODE_GENERATION,
    )

    assert padded.efficiency < plain.efficiency


def test_migration_without_versions_loses_specificity(assessor: QualityAssessor) -> None:
    migration = IntentAnalysis(primary_intent=Intent.MIGRATION, confidence=80)

    vague = assessor.assess_text("Migrate the frontend framework", migration)
    versioned = assessor.assess_text("Migrate the frontend from React 17 to React 18", migration)

    assert versioned.specificity > vague.specificity
