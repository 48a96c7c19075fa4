"""Patterns for free-form, conversational input."""

from __future__ import annotations

import re

from promptcraft.intelligence.patterns.base import BasePattern
from promptcraft.intelligence.text_utils import (
    contains_any,
    contains_phrase,
    normalize_text,
    render_section,
    split_sentences,
    unique,
)
from promptcraft.intelligence.types import (
    Impact,
    Intent,
    PatternContext,
    PatternMode,
    PatternResult,
    QualityDimension,
)


def _clean(fragment: str) -> str:
    return normalize_text(fragment).rstrip(".!?,;:")[:200]


class ConversationSummarizer(BasePattern):
    """Extract goals, requirements and constraints from a discussion."""

    id = "conversation-summarizer"
    name = "Conversation Summarizer"
    description = "Extracts structured requirements from conversational text"
    applicable_intents = frozenset({Intent.SUMMARIZATION, Intent.PLANNING, Intent.PRD_GENERATION})
    mode = PatternMode.DEEP
    priority = 8
    dimension = QualityDimension.STRUCTURE

    _MARKERS = (
        "i want",
        "i need",
        "we need",
        "we want",
        "i would like",
        "we would like",
        "would like to",
        "should be able to",
        "needs to",
        "thinking about",
        "maybe we could",
        "what if",
        "how about",
        "perhaps we",
        "considering",
        "wondering if",
        "let's",
        "let me",
        "also",
        "and then",
        "plus",
        "another thing",
        "oh and",
        "by the way",
        "basically",
        "essentially",
        "kind of like",
        "sort of",
        "something like",
        "can we",
        "could we",
        "shall we",
    )
    _STRUCTURE_INDICATORS = ("##", "###", "**Requirements:**", "**Features:**", "- [ ]", "1.", "2.", "3.")

    _REQUIREMENT_PATTERNS = (
        re.compile(r"(?:i |we )?(?:need|want|should|must|require)\s+(?:to\s+)?(.+)", re.IGNORECASE),
        re.compile(r"(?:should be able to|needs to|has to|have to)\s+(.+)", re.IGNORECASE),
        re.compile(r"(?:feature|functionality|capability):\s*(.+)", re.IGNORECASE),
        re.compile(r"users? (?:can|should|will|must)\s+(.+)", re.IGNORECASE),
        re.compile(r"the system (?:should|must|will)\s+(.+)", re.IGNORECASE),
        re.compile(r"(?:provides?|enables?|allows?)\s+(.+)", re.IGNORECASE),
    )
    _CONSTRAINT_PATTERNS = (
        re.compile(r"(?:can't|cannot|shouldn't|must not)\s+([^.!?\n]+)", re.IGNORECASE),
        re.compile(r"(?:limited to|restricted to|only)\s+([^.!?\n]+)", re.IGNORECASE),
        re.compile(r"(?:within|budget|deadline|timeline):\s*([^.!?\n]+)", re.IGNORECASE),
        re.compile(r"(?:no more than|at most|maximum)\s+([^.!?\n]+)", re.IGNORECASE),
    )
    _GOAL_PATTERNS = (
        re.compile(r"(?:goal is to|aim(?:ing)? to|objective is to)\s+([^.!?\n]+)", re.IGNORECASE),
        re.compile(r"(?:trying to|looking to|hoping to)\s+([^.!?\n]+)", re.IGNORECASE),
        re.compile(r"(?:so that|in order to|to achieve)\s+([^.!?\n]+)", re.IGNORECASE),
        re.compile(r"(?:ultimately|end goal|main goal)\s+([^.!?\n]+)", re.IGNORECASE),
    )
    _MAX_REQUIREMENTS = 10
    _MAX_CONSTRAINTS = 5
    _MAX_GOALS = 3
    _VERIFY_BELOW = 80

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if "## Extracted Requirements" in text:
            return self._skip(text, "Requirements already extracted")

        source = self._user_text(text, context)
        if sum(1 for indicator in self._STRUCTURE_INDICATORS if indicator in source) >= 3:
            return self._skip(text, "Content already well-structured")
        if not self._is_conversational(source):
            return self._skip(text, "Not conversational content")

        goals = self._extract(source, self._GOAL_PATTERNS)[: self._MAX_GOALS]
        requirements = self._requirements(source)
        constraints = self._constraints(source)
        confidence = extraction_confidence(requirements, goals, constraints)

        lines = ["", "", "## Extracted Requirements", "", f"*Extraction confidence: {confidence}%*"]
        for title, entries in (("Goals", goals), ("Requirements", requirements), ("Constraints", constraints)):
            if entries:
                lines.extend(["", f"**{title}:**"])
                lines.extend(f"- {entry}" for entry in entries)
        if confidence < self._VERIFY_BELOW:
            lines.extend(["", "> **Note:** Verify these extracted requirements are complete and accurate."])

        return self._append(
            text,
            "\n".join(lines),
            "Extracted structured requirements from conversation",
            Impact.HIGH,
        )

    def _is_conversational(self, source: str) -> bool:
        markers = [marker for marker in self._MARKERS if marker in source.lower()]
        has_bullets = "- " in source or "* " in source
        return len(markers) >= 2 or (len(split_sentences(source)) > 3 and not has_bullets)

    def _requirements(self, source: str) -> list[str]:
        found: list[str] = []
        for sentence in split_sentences(source):
            for pattern in self._REQUIREMENT_PATTERNS:
                match = pattern.search(sentence)
                if match:
                    found.append(_clean(match.group(1)))
                    break
        return unique(item for item in found if item)[: self._MAX_REQUIREMENTS]

    def _constraints(self, source: str) -> list[str]:
        found = self._extract(source, self._CONSTRAINT_PATTERNS)
        if contains_any(source, ("performance",)):
            found.append("Performance requirements to be defined")
        if contains_any(source, ("security",)):
            found.append("Security requirements to be defined")
        if contains_any(source, ("mobile",)) and contains_any(source, ("desktop",)):
            found.append("Must work on both mobile and desktop")
        return unique(found)[: self._MAX_CONSTRAINTS]

    @staticmethod
    def _extract(source: str, patterns: tuple[re.Pattern[str], ...]) -> list[str]:
        found: list[str] = []
        for pattern in patterns:
            for match in pattern.finditer(source):
                cleaned = _clean(match.group(1))
                if cleaned:
                    found.append(cleaned)
        return unique(found)


def extraction_confidence(requirements: list[str], goals: list[str], constraints: list[str]) -> int:
    """Confidence that the extraction captured the discussion, 50-100."""

    confidence = 50
    if requirements:
        confidence += 20
    if goals:
        confidence += 15
    if constraints:
        confidence += 15
    return min(confidence, 100)


class TopicCoherenceAnalyzer(BasePattern):
    """Group a multi-topic discussion by theme."""

    id = "topic-coherence-analyzer"
    name = "Topic Coherence Analyzer"
    description = "Detects topic shifts and multi-topic conversations"
    applicable_intents = frozenset({Intent.SUMMARIZATION, Intent.PLANNING})
    mode = PatternMode.DEEP
    priority = 6
    dimension = QualityDimension.STRUCTURE

    TOPICS: dict[str, tuple[str, ...]] = {
        "User Interface": (
            "ui", "interface", "design", "layout", "buttons?", "forms?", "pages?", "screens?",
            "components?", "modals?", "dialogs?", "navigation", "menus?", "sidebar",
        ),
        "Backend/API": (
            "api", "backend", "server", "endpoints?", "routes?", "controllers?", "middleware",
            "rest", "graphql", "websockets?",
        ),
        "Database": (
            "database", "db", "schema", "tables?", "query", "queries", "orm", "sql", "nosql", "indexes",
        ),
        "Authentication": (
            "auth", "login", "passwords?", "sessions?", "tokens?", "permissions?", "roles?", "oauth",
            "jwt", "sso", "mfa", "2fa",
        ),
        "Performance": (
            "performance", "speed", "cache", "caching", "latency", "load time", "bundle", "memory", "cpu",
        ),
        "Testing": ("tests?", "testing", "coverage", "qa", "unit tests?", "e2e", "mocks?", "fixtures?"),
        "Deployment": (
            "deploy", "deployment", "ci/cd", "pipeline", "release", "production", "staging", "docker",
            "kubernetes",
        ),
        "User Experience": ("ux", "usability", "accessibility", "user flow", "journey", "onboarding"),
        "Integration": ("integrations?", "third-party", "webhooks?", "sync", "import", "export"),
        "Security": ("security", "encryption", "vulnerabilit(?:y|ies)", "xss", "csrf", "injection"),
        "Analytics": ("analytics", "tracking", "metrics", "dashboards?", "reports?", "statistics"),
        "Error Handling": ("errors?", "exceptions?", "fallback", "retry", "timeout", "failures?"),
        "Documentation": ("documentation", "docs", "readme", "guide", "tutorial"),
        "State Management": ("state", "store", "redux", "global state", "persist", "hydrate"),
    }
    _ORGANIZED_RE = re.compile(
        r"^#{2,}\s*(?:user interface|backend|database|auth|performance|testing|deploy|topics)",
        re.IGNORECASE | re.MULTILINE,
    )
    _MAX_TOPICS = 8

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if self._ORGANIZED_RE.search(text):
            return self._skip(text, "Topics already organized")

        source = self._user_text(text, context)
        topics = self.detect_topics(source)
        if len(topics) <= 1:
            return self._skip(text, "Single coherent topic detected")

        sentences = split_sentences(source)
        lines = [
            "",
            "",
            "## Topics Covered",
            "",
            "This discussion touches on several areas:",
            "",
        ]
        for index, topic in enumerate(topics[: self._MAX_TOPICS], start=1):
            related = [s for s in sentences if contains_any(s, self.TOPICS[topic])]
            summary = related[0] if related else f"Discussion related to {topic}"
            lines.append(f"{index}. **{topic}**: {summary}")

        return self._append(
            text,
            "\n".join(lines),
            f"Organized {len(topics)} distinct topics for clarity",
        )

    def detect_topics(self, text: str) -> list[str]:
        return [topic for topic, keywords in self.TOPICS.items() if contains_any(text, keywords)]


class ImplicitRequirementExtractor(BasePattern):
    """Surface requirements a feature implies but nobody stated."""

    id = "implicit-requirement-extractor"
    name = "Implicit Requirement Extractor"
    description = "Surfaces requirements implied by the described functionality"
    applicable_intents = frozenset(
        {
            Intent.SUMMARIZATION,
            Intent.PLANNING,
            Intent.PRD_GENERATION,
            Intent.CODE_GENERATION,
        }
    )
    mode = PatternMode.DEEP
    priority = 7
    dimension = QualityDimension.COMPLETENESS

    # trigger keywords, keywords showing it is already covered, implied requirement
    _RULES: tuple[tuple[tuple[str, ...], tuple[str, ...], str], ...] = (
        (("login", "sign ?in", "auth", "authentication"), ("reset", "forgot"), "Password reset and account recovery flow"),
        (("login", "sessions?", "auth"), ("logout", "log out", "expiry", "expire"), "Logout and session expiry"),
        (("user data", "profiles?", "personal", "accounts?"), ("gdpr", "privacy", "delete"), "Privacy controls and account deletion (GDPR)"),
        (("forms?", "input", "sign ?up"), ("required fields", "format rules"), "Required fields and format rules for every input"),
        (("uploads?", "attachments?"), ("size limit", "file type"), "File size limits and allowed file types"),
        (("payments?", "checkout", "billing"), ("receipt", "refund"), "Receipts and refunds"),
        (("lists?", "search", "feed", "tables?"), ("pagination", "paging", "infinite scroll"), "Pagination for long result lists"),
        (("notifications?", "emails?", "alerts?"), ("unsubscribe", "preferences"), "Notification preferences and unsubscribe"),
        (("mobile",), ("responsive",), "Responsive layout for small screens"),
        (("real-?time", "live", "websockets?", "chat"), ("reconnect", "offline"), "Reconnection and offline behaviour"),
        (("admin", "roles?", "permissions?"), ("audit log", "audit trail"), "Audit trail of administrative actions"),
    )
    _MAX_ITEMS = 8

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if "## Implicit Requirements" in text:
            return self._skip(text, "Implicit requirements already surfaced")

        source = self._user_text(text, context)
        items = unique(
            requirement
            for triggers, covered, requirement in self._RULES
            if contains_any(source, triggers) and not contains_phrase(source, covered)
        )
        if not items:
            return self._skip(text, "No implicit requirements detected")

        section = render_section(
            "Implicit Requirements",
            items[: self._MAX_ITEMS],
            intro="Usually expected, though not stated:",
        )
        return self._append(
            text,
            section,
            f"Surfaced {len(items)} implicit requirements",
            Impact.HIGH if len(items) >= 3 else Impact.MEDIUM,
        )
