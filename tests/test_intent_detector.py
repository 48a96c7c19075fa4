"""Tests for heuristic intent detection."""

import pytest

from promptcraft.intelligence import Intent, IntentDetector


@pytest.mark.parametrize(
    ("prompt", "expected"),
    [
        ("Create a login page", Intent.CODE_GENERATION),
        ("Fix the authentication error", Intent.DEBUGGING),
        ("How should I structure my database?", Intent.PLANNING),
        ("Plan the microservices architecture", Intent.PLANNING),
        ("Improve the performance of my query", Intent.REFINEMENT),
        ("Explain how the caching works", Intent.DOCUMENTATION),
        ("Create a PRD for user management", Intent.PRD_GENERATION),
        ("Write unit tests for UserService", Intent.TESTING),
        ("Migrate from React 17 to React 18", Intent.MIGRATION),
        ("Security audit of the authentication module", Intent.SECURITY_REVIEW),
        ("Teach me about closures in JavaScript", Intent.LEARNING),
        ("Summarize our conversation about the checkout flow", Intent.SUMMARIZATION),
    ],
)
def test_primary_intent(detector: IntentDetector, prompt: str, expected: Intent) -> None:
    analysis = detector.analyze(prompt)

    assert analysis.primary_intent is expected
    assert 0 <= analysis.confidence <= 100


def test_clear_code_generation_prompt_has_high_confidence(detector: IntentDetector) -> None:
    analysis = detector.analyze("Create a login page")

    assert analysis.confidence >= 75


def test_empty_prompt_defaults_with_zero_confidence(detector: IntentDetector) -> None:
    analysis = detector.analyze("")

    assert analysis.primary_intent is Intent.CODE_GENERATION
    assert analysis.confidence == 0
    assert analysis.secondary_intents == ()
    assert analysis.characteristics.is_open_ended


def test_prompt_without_signals_gets_low_confidence(detector: IntentDetector) -> None:
    analysis = detector.analyze("user login")

    assert analysis.primary_intent is Intent.CODE_GENERATION
    assert analysis.confidence == 30


def test_secondary_intents_list_runner_ups(detector: IntentDetector) -> None:
    analysis = detector.analyze("Fix the failing tests")

    assert analysis.primary_intent is Intent.DEBUGGING
    assert Intent.TESTING in [secondary.intent for secondary in analysis.secondary_intents]
    assert len(analysis.secondary_intents) <= 2
    assert all(0 < secondary.confidence <= 100 for secondary in analysis.secondary_intents)


def test_analysis_is_deterministic(detector: IntentDetector) -> None:
    prompt = "Refactor the payment service and add tests for the refund flow"

    assert detector.analyze(prompt) == detector.analyze(prompt)
    assert IntentDetector().analyze(prompt) == detector.analyze(prompt)


def test_question_is_open_ended(detector: IntentDetector) -> None:
    assert detector.characteristics("How should I structure my database?").is_open_ended


def test_constrained_request_is_not_open_ended(detector: IntentDetector) -> None:
    characteristics = detector.characteristics(
        "Add pagination to the orders endpoint with at most 50 items per page"
    )

    assert not characteristics.is_open_ended


@pytest.mark.parametrize(
    "prompt",
    ["help with stuff", "Refactor the parser using the visitor pattern"],
)
def test_with_and_using_are_not_constraints(detector: IntentDetector, prompt: str) -> None:
    assert detector.characteristics(prompt).is_open_ended


def test_long_unstructured_prompt_needs_structure(detector: IntentDetector) -> None:
    prompt = (
        "We have a shop. Customers complain that checkout is slow. "
        "The database is old and the UI is cluttered."
    )

    assert detector.characteristics(prompt).needs_structure


def test_structured_prompt_does_not_need_structure(detector: IntentDetector) -> None:
    prompt = (
        "## Context\n"
        "- We have a shop and customers complain that checkout is slow\n"
        "- The database is old and the UI is cluttered\n"
        "- Orders time out during sales"
    )

    assert not detector.characteristics(prompt).needs_structure


def test_code_context_detection(detector: IntentDetector) -> None:
    assert detector.characteristics("Why does `parseDate()` return null?").has_code_context
    assert not detector.characteristics("Create a login page").has_code_context


def test_technical_terms_detection(detector: IntentDetector) -> None:
    assert detector.characteristics("Add a REST endpoint in Python").has_technical_terms
    assert not detector.characteristics("Write a poem about spring").has_technical_terms
