"""Tests for conversation patterns."""

from promptcraft.intelligence import Impact, Intent, Mode
from promptcraft.intelligence.patterns import (
    ConversationSummarizer,
    ImplicitRequirementExtractor,
    TopicCoherenceAnalyzer,
)
from promptcraft.intelligence.patterns.conversation import extraction_confidence

DISCUSSION = (
    "We need to let users export reports. I want it to be fast. "
    "Also the goal is to reduce support tickets. It cannot use paid services."
)


def test_conversation_summarizer_extracts_requirements(make_context) -> None:
    result = ConversationSummarizer().apply(
        DISCUSSION, make_context(DISCUSSION, Mode.DEEP, intent=Intent.SUMMARIZATION)
    )

    assert result.applied
    enhanced = result.enhanced_prompt
    assert "## Extracted Requirements" in enhanced
    assert "*Extraction confidence: 100%*" in enhanced
    assert "**Goals:**\n- reduce support tickets" in enhanced
    assert "**Requirements:**\n- let users export reports\n- it to be fast" in enhanced
    assert "**Constraints:**\n- use paid services" in enhanced
    assert "> **Note:**" not in enhanced
    assert result.improvement.impact is Impact.HIGH


def test_conversation_summarizer_skips_non_conversational(make_context) -> None:
    text = "Summarize the meeting"
    result = ConversationSummarizer().apply(
        text, make_context(text, Mode.DEEP, intent=Intent.SUMMARIZATION)
    )

    assert not result.applied
    assert result.improvement.description == "Not conversational content"


def test_extraction_confidence() -> None:
    assert extraction_confidence([], [], []) == 50
    assert extraction_confidence(["export"], [], []) == 70
    assert extraction_confidence(["export"], ["goal"], ["limit"]) == 100


def test_topic_coherence_analyzer(make_context) -> None:
    text = "Let's discuss the login page layout and the database schema."
    result = TopicCoherenceAnalyzer().apply(
        text, make_context(text, Mode.DEEP, intent=Intent.PLANNING)
    )

    assert result.applied
    assert "## Topics Covered" in result.enhanced_prompt
    assert (
        "1. **User Interface**: Let's discuss the login page layout and the database schema."
        in result.enhanced_prompt
    )
    assert result.improvement.description == "Organized 3 distinct topics for clarity"


def test_topic_coherence_detect_topics() -> None:
    topics = TopicCoherenceAnalyzer().detect_topics(
        "Let's discuss the login page layout and the database schema."
    )

    assert topics == ["User Interface", "Database", "Authentication"]


def test_topic_coherence_skips_single_topic(make_context) -> None:
    text = "Discuss the database schema"
    result = TopicCoherenceAnalyzer().apply(
        text, make_context(text, Mode.DEEP, intent=Intent.SUMMARIZATION)
    )

    assert not result.applied
    assert result.improvement.description == "Single coherent topic detected"


def test_implicit_requirement_extractor(make_context) -> None:
    text = "Build a login form"
    result = ImplicitRequirementExtractor().apply(
        text, make_context(text, Mode.DEEP, intent=Intent.CODE_GENERATION)
    )

    assert result.applied
    enhanced = result.enhanced_prompt
    assert "- Password reset and account recovery flow" in enhanced
    assert "- Logout and session expiry" in enhanced
    assert "- Required fields and format rules for every input" in enhanced
    assert result.improvement.impact is Impact.HIGH


def test_implicit_requirement_extractor_respects_covered_needs(make_context) -> None:
    text = "Build a login form with a forgot password link"
    result = ImplicitRequirementExtractor().apply(
        text, make_context(text, Mode.DEEP, intent=Intent.CODE_GENERATION)
    )

    assert "Password reset" not in result.enhanced_prompt
    assert "- Logout and session expiry" in result.enhanced_prompt
