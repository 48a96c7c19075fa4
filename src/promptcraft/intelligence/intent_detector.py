"""Classify raw prompts into an intent plus structural characteristics."""

from __future__ import annotations

import re
from dataclasses import dataclass

from promptcraft.intelligence.text_utils import (
    contains_any,
    contains_keyword,
    is_structured,
    matching_keywords,
    normalize_text,
    split_sentences,
    word_count,
)
from promptcraft.intelligence.types import (
    Characteristics,
    Intent,
    IntentAnalysis,
    SecondaryIntent,
)

DEFAULT_INTENT = Intent.CODE_GENERATION

_STRONG_WEIGHT = 3
_WEAK_WEIGHT = 1
_PHRASE_WEIGHT = 4

_NO_SIGNAL_CONFIDENCE = 30


@dataclass(frozen=True)
class _IntentRule:
    intent: Intent
    strong: tuple[str, ...]
    weak: tuple[str, ...] = ()
    phrases: tuple[re.Pattern[str], ...] = ()


def _phrases(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns)


_CODE_NOUNS = (
    r"function|component|class|endpoint|api|page|feature|service|module|form|app"
    r"|website|dashboard|script|handler|method|hook|route|cli|widget"
)

_INTENT_RULES: tuple[_IntentRule, ...] = (
    _IntentRule(
        intent=Intent.CODE_GENERATION,
        strong=("create", "build", "implement", "generate", "develop", "scaffold", "add", "write"),
        weak=(
            "component",
            "function",
            "class",
            "endpoint",
            "api",
            "page",
            "feature",
            "module",
            "service",
            "form",
            "app",
            "website",
            "dashboard",
            "make",
            "new",
        ),
        phrases=_phrases(
            rf"\b(?:create|build|write|implement|add|make|generate)\s+(?:\w+\s+){{0,3}}?(?:{_CODE_NOUNS})s?\b",
        ),
    ),
    _IntentRule(
        intent=Intent.PLANNING,
        strong=(
            "plan",
            "architecture",
            "architect",
            "design",
            "roadmap",
            "strategy",
            "approach",
            "spec",
            "specification",
            "organi[sz]e",
        ),
        weak=("structure", "options", "trade-?offs?", "scalable", "choose", "compare", "best"),
        phrases=_phrases(
            r"\bhow should (?:i|we)\b",
            r"\bwhat(?:'s| is) the best (?:way|approach)\b",
            r"\bpros and cons\b",
            r"\bchoose between\b",
            r"\bhow do (?:i|we) approach\b",
            r"\bwhat architecture\b",
            r"\b(?:write|create|define|draft)\s+(?:a\s+|an\s+|the\s+)?(?:technical\s+)?spec(?:ification)?s?\b",
        ),
    ),
    _IntentRule(
        intent=Intent.REFINEMENT,
        strong=(
            "improve",
            "optimi[sz]e",
            "refactor",
            "enhance",
            "clean up",
            "simplify",
            "speed up",
            "reduce",
        ),
        weak=(
            "faster",
            "performance",
            "cleaner",
            "better",
            "maintainable",
            "maintainability",
            "reusable",
            "readable",
            "efficient",
            "update",
            "modern",
            "responsive",
        ),
        phrases=_phrases(
            r"\bmake (?:this|it|the|my)\b(?:\s+\w+){0,3}\s+(?:more|less|better|faster|cleaner|simpler)\b",
            r"\bmake it (?:faster|better|cleaner|simpler)\b",
            r"\breduce (?:the\s+)?(?:memory|latency|load|bundle|response)\b",
            r"\bupdate the (?:styling|style|ui|design)\b",
            r"\bresponse time\b",
        ),
    ),
    _IntentRule(
        intent=Intent.DEBUGGING,
        strong=(
            "fix",
            "debug",
            "bugs?",
            "errors?",
            "crash(?:es|ing)?",
            "broken",
            "resolve",
            "troubleshoot",
            "exception",
            "failing",
            "fails",
            "leak",
        ),
        weak=("issue", "problem", "wrong", "undefined", "null", "timeout", "stack trace"),
        phrases=_phrases(
            r"\bwhy (?:is|does|do|am|are)\b.*\b(?:not|n't|returning|failing|crash\w*|throw\w*)\b",
            r"\b(?:doesn't|does not|don't|isn't|is not) work(?:ing)?\b",
            r"\bnot (?:working|rendering|loading|updating)\b",
            r"\bwhat is causing\b",
            r"\breturning (?:a\s+)?\d{3}\b",
        ),
    ),
    _IntentRule(
        intent=Intent.DOCUMENTATION,
        strong=(
            "document",
            "documentation",
            "docs",
            "readme",
            "explain",
            "describe",
            "comments",
            "jsdoc",
            "docstrings?",
        ),
        weak=("overview", "guide", "reference"),
        phrases=_phrases(
            r"\bexplain how\b",
            r"\bwalk me through\b",
            r"\bshow me how\b",
            r"\bwhat does (?:this|the)\b",
            r"\bdescribe the\b",
            r"\badd comments\b",
        ),
    ),
    _IntentRule(
        intent=Intent.PRD_GENERATION,
        strong=("prd", "user stories", "product requirements?", "requirements document"),
        weak=("stakeholders", "personas?", "acceptance criteria"),
        phrases=_phrases(
            r"\bproduct requirements? (?:document|doc)\b",
            r"\b(?:create|write|draft|generate)\s+(?:a\s+|the\s+)?prd\b",
        ),
    ),
    _IntentRule(
        intent=Intent.TESTING,
        strong=(
            "tests?",
            "testing",
            "jest",
            "vitest",
            "pytest",
            "mocha",
            "coverage",
            "mock",
            "stubs?",
            "e2e",
            "tdd",
        ),
        weak=("fixtures?", "assertions?", "spec"),
        phrases=_phrases(
            r"\b(?:write|add|create)\s+(?:\w+\s+){0,2}?tests?\b",
            r"\btest (?:coverage|suite|cases?)\b",
        ),
    ),
    _IntentRule(
        intent=Intent.MIGRATION,
        strong=("migrate", "migration", "upgrade", "port", "convert"),
        weak=("legacy", "deprecated", "version"),
        phrases=_phrases(
            r"\bfrom\s+[\w.+#-]+(?:\s+[\w.+#-]+)?\s+to\s+[\w.+#-]+",
            r"\breplace\s+[\w.+#-]+\s+with\b",
        ),
    ),
    _IntentRule(
        intent=Intent.SECURITY_REVIEW,
        strong=(
            "security",
            "vulnerability",
            "vulnerabilities",
            "audit",
            "owasp",
            "xss",
            "csrf",
            "injection",
            "exploits?",
            "pentest",
            "penetration",
        ),
        weak=("secure", "sanitize", "threat", "attack", "cve"),
        phrases=_phrases(
            r"\bsecurity (?:audit|review)\b",
            r"\b(?:find|scan|check)\b.*\bvulnerabilit",
        ),
    ),
    _IntentRule(
        intent=Intent.LEARNING,
        strong=("teach", "learn", "understand", "tutorial", "fundamentals", "concepts?", "beginner"),
        weak=("basics", "introduction", "intro"),
        phrases=_phrases(
            r"\bteach me\b",
            r"\bhelp me understand\b",
            r"\bhow does\b.*\bwork\b",
            r"\bwhat are the fundamentals\b",
        ),
    ),
    _IntentRule(
        intent=Intent.SUMMARIZATION,
        strong=("summari[sz]e", "summary", "recap", "tl;?dr"),
        weak=("conversation", "discussion", "thread"),
        phrases=_phrases(
            r"\bsummari[sz]e (?:this|the|our) (?:conversation|discussion|thread|chat|meeting)\b",
            r"\bextract (?:the\s+)?requirements\b",
        ),
    ),
)

_PERFORMANCE_TERMS = ("performance", "latency", "memory", "slow", "faster", "speed", "response time")
_QUESTION_STARTERS = ("how", "what", "which", "should", "where")

_CODE_CONTEXT_RE = re.compile(
    r"```|`[^`\n]+`|=>|\w+\([^)]*\)|[{};]\s*$|\b[a-z]+[A-Z][a-zA-Z]*\b|\b[a-z]+_[a-z_]+\b",
    re.MULTILINE,
)

_TECHNICAL_TERMS = (
    "api",
    "endpoint",
    "database",
    "sql",
    "schema",
    "react",
    "vue",
    "angular",
    "node(?:\\.js)?",
    "python",
    "javascript",
    "typescript",
    "java",
    "rust",
    "golang",
    "docker",
    "kubernetes",
    "aws",
    "graphql",
    "rest",
    "json",
    "http",
    "oauth",
    "jwt",
    "redis",
    "postgres(?:ql)?",
    "mysql",
    "mongo(?:db)?",
    "css",
    "html",
    "component",
    "middleware",
    "cache",
    "async",
    "microservices?",
    "frontend",
    "backend",
    "cli",
    "sdk",
)

_TOPIC_GROUPS: dict[str, tuple[str, ...]] = {
    "ui": ("ui", "page", "component", "form", "button", "layout", "css", "frontend"),
    "api": ("api", "endpoint", "rest", "graphql", "backend", "server", "route"),
    "data": ("database", "db", "sql", "schema", "table", "postgres(?:ql)?", "mongo(?:db)?", "orm"),
    "auth": ("auth", "authentication", "login", "password", "oauth", "jwt", "session", "roles?"),
    "testing": ("tests?", "coverage", "mock", "qa"),
    "deployment": ("deploy", "docker", "kubernetes", "ci/cd", "pipeline", "production"),
    "performance": ("performance", "cache", "latency", "speed", "memory"),
}

_OPEN_PHRASING_RE = re.compile(
    r"\?|\b(?:how should|how do i|how can i|what(?:'s| is) the best|ideas?|suggestions?"
    r"|help me|options|brainstorm|explore|any thoughts|not sure)\b",
    re.IGNORECASE,
)
_CONSTRAINT_RE = re.compile(
    r"\d|\b(?:must|must not|should not|only|at least|at most|within|no more than|required"
    r"|requirements?|constraints?|limit(?:ed)?|exactly)\b",
    re.IGNORECASE,
)

_STRUCTURE_WORD_THRESHOLD = 25
_STRUCTURE_SENTENCE_THRESHOLD = 3
_STRUCTURE_TOPIC_THRESHOLD = 3


class IntentDetector:
    """Heuristic intent classifier.

    Each intent is scored from weighted keyword and phrase matches plus a few
    context bonuses. The highest score wins; ties resolve in ``Intent``
    declaration order. The detector holds no per-call state.
    """

    def analyze(self, text: str) -> IntentAnalysis:
        """Classify ``text``.

        Args:
            text: Raw prompt text; may be empty.

        Returns:
            IntentAnalysis with primary intent, confidence and characteristics.
        """

        normalized = normalize_text(text)
        characteristics = self.characteristics(text)
        if not normalized:
            return IntentAnalysis(
                primary_intent=DEFAULT_INTENT,
                confidence=0,
                characteristics=characteristics,
            )

        scores = self._score_intents(normalized, characteristics)
        ranked = sorted(
            scores.items(),
            key=lambda item: (-item[1], list(Intent).index(item[0])),
        )
        top_intent, top_score = ranked[0]
        total = sum(scores.values())

        if top_score == 0:
            return IntentAnalysis(
                primary_intent=DEFAULT_INTENT,
                confidence=_NO_SIGNAL_CONFIDENCE,
                characteristics=characteristics,
            )

        secondary = tuple(
            SecondaryIntent(intent=intent, confidence=round(100 * score / total))
            for intent, score in ranked[1:3]
            if score > 0
        )
        return IntentAnalysis(
            primary_intent=top_intent,
            confidence=_confidence(top_score, total),
            characteristics=characteristics,
            secondary_intents=secondary,
        )

    def characteristics(self, text: str) -> Characteristics:
        """Compute intent-independent surface features of ``text``."""

        normalized = normalize_text(text)
        if not normalized:
            return Characteristics(is_open_ended=True)

        topics = sum(
            1 for keywords in _TOPIC_GROUPS.values() if contains_any(normalized, keywords)
        )
        long_or_mixed = (
            word_count(normalized) >= _STRUCTURE_WORD_THRESHOLD
            or len(split_sentences(text)) >= _STRUCTURE_SENTENCE_THRESHOLD
            or topics >= _STRUCTURE_TOPIC_THRESHOLD
        )
        return Characteristics(
            has_code_context=_CODE_CONTEXT_RE.search(text) is not None,
            has_technical_terms=contains_any(normalized, _TECHNICAL_TERMS),
            is_open_ended=(
                _OPEN_PHRASING_RE.search(normalized) is not None
                or _CONSTRAINT_RE.search(normalized) is None
            ),
            needs_structure=long_or_mixed and not is_structured(text),
        )

    def _score_intents(
        self,
        text: str,
        characteristics: Characteristics,
    ) -> dict[Intent, int]:
        scores: dict[Intent, int] = {}
        for rule in _INTENT_RULES:
            score = _STRONG_WEIGHT * len(matching_keywords(text, rule.strong))
            score += _WEAK_WEIGHT * len(matching_keywords(text, rule.weak))
            score += _PHRASE_WEIGHT * sum(
                1 for phrase in rule.phrases if phrase.search(text)
            )
            scores[rule.intent] = score

        lowered = text.lower()
        if characteristics.has_code_context and scores[Intent.DEBUGGING] > 0:
            scores[Intent.DEBUGGING] += 2
        if text.rstrip().endswith("?") and lowered.startswith(_QUESTION_STARTERS):
            if scores[Intent.PLANNING] > 0:
                scores[Intent.PLANNING] += 2
        if scores[Intent.REFINEMENT] > 0 and contains_any(text, _PERFORMANCE_TERMS):
            scores[Intent.REFINEMENT] += 2
        if scores[Intent.MIGRATION] > 0 and contains_keyword(text, "from"):
            scores[Intent.MIGRATION] += 2
        return scores


def _confidence(top_score: int, total: int) -> int:
    """Map the winning score onto a coarse 0-100 band."""

    dominance = top_score / total
    strength = min(top_score, 10) / 10
    return max(0, min(100, round(35 + 35 * dominance + 30 * strength)))
