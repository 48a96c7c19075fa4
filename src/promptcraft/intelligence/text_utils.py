"""Stateless text helpers shared by the detector, the assessor and patterns."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from functools import lru_cache

_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+|\n+")
_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s+\S", re.MULTILINE)
_LIST_ITEM_RE = re.compile(r"^\s*(?:[-*+]|\d+[.)]|- \[[ xX]\]|☐)\s+\S", re.MULTILINE)
_WORD_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9'_\-./]*")


def normalize_text(value: str) -> str:
    """Trim and collapse internal whitespace."""

    trimmed = value.strip()
    if not trimmed:
        return ""
    return _WHITESPACE_RE.sub(" ", trimmed)


def split_sentences(text: str) -> list[str]:
    """Split text into non-empty sentences on terminal punctuation or newlines."""

    return [
        normalize_text(part)
        for part in _SENTENCE_SPLIT_RE.split(text)
        if part and part.strip()
    ]


def first_sentence(text: str, limit: int = 160) -> str:
    """Return the first sentence without trailing punctuation, truncated to ``limit``."""

    sentences = split_sentences(text)
    if not sentences:
        return ""
    sentence = sentences[0].rstrip(".!?;:, ")
    if len(sentence) > limit:
        sentence = sentence[: limit - 3].rstrip() + "..."
    return sentence


def words(text: str) -> list[str]:
    """Return the word tokens of ``text``."""

    return _WORD_RE.findall(text)


def word_count(text: str) -> int:
    return len(words(text))


@lru_cache(maxsize=None)
def keyword_regex(keyword: str) -> re.Pattern[str]:
    """Compile a case-insensitive whole-word regex for a keyword.

    ``keyword`` may itself be a regex fragment.
    """

    return re.compile(rf"(?<![\w-])(?:{keyword})(?![\w-])", re.IGNORECASE)


def contains_keyword(text: str, keyword: str) -> bool:
    return keyword_regex(keyword).search(text) is not None


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """Return True when any keyword occurs in ``text`` as a whole word."""

    return any(contains_keyword(text, keyword) for keyword in keywords)


def matching_keywords(text: str, keywords: Iterable[str]) -> list[str]:
    """Return the keywords present in ``text``, preserving their order."""

    return [keyword for keyword in keywords if contains_keyword(text, keyword)]


def contains_phrase(text: str, phrases: Iterable[str]) -> bool:
    """Case-insensitive substring check for any of ``phrases``."""

    lowered = text.lower()
    return any(phrase.lower() in lowered for phrase in phrases)


def has_headings(text: str) -> bool:
    return _HEADING_RE.search(text) is not None


def has_list_items(text: str) -> bool:
    return _LIST_ITEM_RE.search(text) is not None


def is_structured(text: str) -> bool:
    """Return True when the text already uses markdown headings or lists."""

    return has_headings(text) or has_list_items(text)


def unique(items: Iterable[str]) -> list[str]:
    """Drop duplicates while keeping first-seen order."""

    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def render_section(
    heading: str,
    items: Sequence[str],
    *,
    style: str = "bullet",
    intro: str | None = None,
    footer: str | None = None,
    level: int = 2,
) -> str:
    """Render a delimited markdown section to be appended to a prompt.

    Args:
        heading: Section title without leading hashes.
        items: List entries.
        style: ``bullet``, ``numbered``, ``checkbox`` or ``ballot``.
        intro: Optional line placed between heading and list.
        footer: Optional trailing paragraph.
        level: Markdown heading level.

    Returns:
        The section, starting with a blank-line separator.
    """

    lines = ["", "", f"{'#' * level} {heading}", ""]
    if intro:
        lines.extend([intro, ""])
    for index, item in enumerate(items, start=1):
        if style == "numbered":
            lines.append(f"{index}. {item}")
        elif style == "checkbox":
            lines.append(f"- [ ] {item}")
        elif style == "ballot":
            lines.append(f"☐ {item}")
        else:
            lines.append(f"- {item}")
    if footer:
        lines.extend(["", footer])
    return "\n".join(lines)


def clamp(value: float, low: int = 0, high: int = 100) -> int:
    """Round ``value`` and clamp it into ``[low, high]``."""

    return int(max(low, min(high, round(value))))
