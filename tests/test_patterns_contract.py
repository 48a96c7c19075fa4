"""Contract tests run against every built-in pattern."""

import pytest

from promptcraft.intelligence import Intent, Mode
from promptcraft.intelligence.patterns import default_patterns

PROMPTS = [
    "Create a login page",
    "Fix the crash in checkout.py when the cart is empty",
    "We need to let users export reports. I want it to be fast. Also the goal "
    "is to reduce support tickets. It cannot use paid services.",
    "Create a PRD for an online store with subscriptions, a search feature and email alerts",
    "## Context\n\n- Legacy billing app\n- Migrate from Django 3.2 to Django 4.2",
]

PATTERNS = default_patterns()


@pytest.mark.parametrize("pattern", PATTERNS, ids=lambda pattern: pattern.id)
@pytest.mark.parametrize("mode", list(Mode))
def test_patterns_only_append(pattern, mode: Mode, make_context) -> None:
    for prompt in PROMPTS:
        for intent in pattern.applicable_intents:
            result = pattern.apply(prompt, make_context(prompt, mode, intent=intent))

            assert result.enhanced_prompt.startswith(prompt)
            if result.applied:
                assert len(result.enhanced_prompt) > len(prompt)
            else:
                assert result.enhanced_prompt == prompt


@pytest.mark.parametrize("pattern", PATTERNS, ids=lambda pattern: pattern.id)
def test_patterns_skip_empty_prompt(pattern, make_context) -> None:
    for text in ("", "   \n"):
        result = pattern.apply(text, make_context(text, Mode.DEEP))

        assert not result.applied
        assert result.enhanced_prompt == text


@pytest.mark.parametrize("pattern", PATTERNS, ids=lambda pattern: pattern.id)
def test_pattern_metadata(pattern) -> None:
    assert pattern.id
    assert pattern.name
    assert pattern.description
    assert pattern.applicable_intents <= frozenset(Intent)
    assert 1 <= pattern.priority <= 10


@pytest.mark.parametrize("pattern", PATTERNS, ids=lambda pattern: pattern.id)
def test_is_applicable_respects_mode_and_intent(pattern, make_context) -> None:
    for intent in Intent:
        for mode in Mode:
            context = make_context("Create a login page", mode, intent=intent)
            expected = pattern.mode.includes(mode) and intent in pattern.applicable_intents

            assert pattern.is_applicable(context) is expected
