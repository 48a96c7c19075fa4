"""Tests for shared text helpers."""

from promptcraft.intelligence.text_utils import (
    clamp,
    contains_keyword,
    contains_phrase,
    first_sentence,
    is_structured,
    matching_keywords,
    normalize_text,
    render_section,
    split_sentences,
    unique,
    word_count,
)


def test_normalize_text_collapses_whitespace() -> None:
    assert normalize_text("  build \n\n a   page  ") == "build a page"
    assert normalize_text("   \t ") == ""


def test_split_sentences_on_punctuation_and_newlines() -> None:
    assert split_sentences("First one. Second one!\nThird") == [
        "First one.",
        "Second one!",
        "Third",
    ]
    assert split_sentences("") == []


def test_first_sentence_strips_punctuation_and_truncates() -> None:
    assert first_sentence("Build a login page. Use React.") == "Build a login page"
    truncated = first_sentence("x" * 200, limit=20)
    assert len(truncated) == 20
    assert truncated.endswith("...")
    assert first_sentence("   ") == ""


def test_contains_keyword_matches_whole_words_only() -> None:
    assert contains_keyword("Create an API client", "api")
    assert not contains_keyword("A rapid prototype", "api")
    assert contains_keyword("Write tests", "tests?")
    assert contains_keyword("Write a test", "tests?")


def test_matching_keywords_preserves_keyword_order() -> None:
    assert matching_keywords("react and vue", ("vue", "react", "angular")) == ["vue", "react"]


def test_contains_phrase_is_a_substring_check() -> None:
    assert contains_phrase("Cache Invalidation strategy", ["validation"])
    assert not contains_phrase("Cache strategy", ["validation"])


def test_is_structured_detects_headings_and_lists() -> None:
    assert is_structured("## Heading\ntext")
    assert is_structured("- first item")
    assert is_structured("1. first step")
    assert not is_structured("plain text without markup")


def test_unique_keeps_first_seen_order() -> None:
    assert unique(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


def test_word_count() -> None:
    assert word_count("Build a login page") == 4
    assert word_count("") == 0


def test_render_section_numbered() -> None:
    assert render_section("Title", ["one", "two"], style="numbered") == (
        "\n\n## Title\n\n1. one\n2. two"
    )


def test_render_section_with_intro_and_footer() -> None:
    section = render_section(
        "Checks",
        ["a"],
        style="checkbox",
        intro="Intro line",
        footer="Footer line",
    )
    assert section == "\n\n## Checks\n\nIntro line\n\n- [ ] a\n\nFooter line"


def test_render_section_ballot_and_level() -> None:
    assert render_section("Sub", ["x"], style="ballot", level=3) == "\n\n### Sub\n\n☐ x"


def test_clamp() -> None:
    assert clamp(120) == 100
    assert clamp(-5) == 0
    assert clamp(49.6) == 50
