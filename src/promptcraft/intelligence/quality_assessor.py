"""Score prompt quality across six dimensions.

Every dimension starts at 100 and is adjusted by lexical and structural
features of the enhanced prompt. Scores are clamped into 0-100.

The overall score is a single fixed weighted mean of the six dimensions:

    clarity 0.18, efficiency 0.12, structure 0.18,
    completeness 0.22, actionability 0.18, specificity 0.12
"""

from __future__ import annotations

import re

from promptcraft.intelligence.text_utils import (
    clamp,
    contains_any,
    contains_phrase,
    has_headings,
    matching_keywords,
    words,
)
from promptcraft.intelligence.types import Intent, IntentAnalysis, QualityScore

OVERALL_WEIGHTS: dict[str, float] = {
    "clarity": 0.18,
    "efficiency": 0.12,
    "structure": 0.18,
    "completeness": 0.22,
    "actionability": 0.18,
    "specificity": 0.12,
}

STRENGTH_THRESHOLD = 85

_STRENGTH_LABELS: dict[str, str] = {
    "clarity": "Clear objective and goals",
    "efficiency": "Concise and focused",
    "structure": "Well-structured with logical flow",
    "completeness": "Comprehensive with all necessary details",
    "actionability": "Immediately actionable",
    "specificity": "Highly specific with concrete details",
}


def _rx(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE | re.MULTILINE)


_OBJECTIVE_RE = _rx(r"objective|goal|purpose|need to|want to|^#+\s*objective")
_OUTPUT_FORMAT_RE = _rx(r"output|return|result|format|structure|response")
_SUCCESS_CRITERIA_RE = _rx(r"success|criteria|metric|measure|test|verify|validate")
_INPUT_OUTPUT_RE = _rx(r"input|output|parameter|argument|return")
_EDGE_CASES_RE = _rx(r"edge case|empty|null|zero|negative|invalid|error")
_EXAMPLES_RE = _rx(r"example|for instance|such as|\blike\b|e\.g\.|```")
_NUMBER_RE = re.compile(r"\b\d+(?:\.\d+)?\b")
_FILE_PATH_RE = re.compile(r"[/\\][\w.-]+[/\\]?|\.\w{2,4}\b|\./|\.\./")
_IDENTIFIER_RE = re.compile(
    r"\b[a-z]+[A-Z][a-zA-Z]*\b|\b[A-Z][a-z]+[A-Z][a-zA-Z]*\b|\b[a-z]+_[a-z]+\b"
)
_VERSION_RE = _rx(r"v?\d+\.\d+(?:\.\d+)?|version\s*\d+|\b\d{2,}\b")

_TECH_STACK = (
    "python",
    "javascript",
    "typescript",
    "java",
    "rust",
    "go",
    "golang",
    "php",
    "ruby",
    "react",
    "vue",
    "angular",
    "svelte",
    "django",
    "flask",
    "fastapi",
    "express",
    "spring",
    "rails",
    "node(?:\\.js)?",
    "next\\.js",
)

_CLARITY_VAGUE = ("something", "somehow", "maybe", "kind of", "sort of", "stuff", "things")
_PLEASANTRIES = ("please", "thank you", "thanks", "could you", "would you")
_FILLER = ("very", "really", "just", "basically", "simply", "actually", "literally")
_AMBIGUOUS = ("etc", "and so on", "or something", "whatever", "anything")
_SPECIFICITY_VAGUE = ("something", "stuff", "things", "whatever", "somehow", "somewhere")
_PRONOUNS = ("it", "this", "that", "they", "them")
_TECHNICAL_TERMS = (
    "api",
    "endpoint",
    "database",
    "schema",
    "component",
    "function",
    "class",
    "interface",
    "module",
    "service",
    "controller",
    "model",
    "view",
    "route",
    "middleware",
    "hook",
    "state",
    "props",
    "query",
    "mutation",
    "resolver",
)

_STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
        "with", "by", "from", "as", "is", "was", "are", "were", "been", "be",
        "have", "has", "had", "do", "does", "did", "will", "would", "could",
        "should", "may", "might", "can", "this", "that", "these", "those",
    }
)

# Four checks per intent; each missing element costs the same penalty.
_COMPLETENESS_REQUIREMENTS: dict[Intent, tuple[tuple[str, re.Pattern[str]], ...]] = {
    Intent.CODE_GENERATION: (
        ("objective", _OBJECTIVE_RE),
        ("tech-stack", _rx(r"\b(?:" + "|".join(_TECH_STACK) + r")\b")),
        ("inputs-outputs", _INPUT_OUTPUT_RE),
        ("edge-cases", _EDGE_CASES_RE),
    ),
    Intent.PLANNING: (
        ("problem-statement", _rx(r"problem|issue|challenge|currently|pain point")),
        ("goals", _rx(r"goal|objective|aim|purpose|achieve|accomplish")),
        ("constraints", _rx(r"constraint|limit|must not|cannot|within|maximum|minimum|budget")),
        ("timeline", _rx(r"timeline|deadline|week|month|sprint|milestone|phase")),
    ),
    Intent.REFINEMENT: (
        ("current-state", _rx(r"current|currently|existing|today|right now")),
        ("desired-improvement", _rx(r"improve|faster|cleaner|reduce|better|simpler")),
        ("metrics", _rx(r"\d+\s*(?:ms|s|%|mb|kb)|metric|benchmark|measure")),
        ("constraints", _rx(r"constraint|must not|without|keep|preserve|backward")),
    ),
    Intent.DEBUGGING: (
        ("error-message", _rx(r"error|exception|traceback|stack trace")),
        ("expected-behavior", _rx(r"expected|should|supposed to|intended")),
        ("actual-behavior", _rx(r"actual|currently|instead|\bbut\b|however|getting")),
        ("reproduction-steps", _rx(r"steps|reproduce|when i|after|repro")),
    ),
    Intent.DOCUMENTATION: (
        ("audience", _rx(r"audience|reader|developer|user|beginner|team")),
        ("scope", _rx(r"scope|cover|section|module|endpoint|api")),
        ("format", _rx(r"markdown|readme|jsdoc|docstring|format|wiki|html")),
        ("examples-needed", _EXAMPLES_RE),
    ),
    Intent.PRD_GENERATION: (
        ("product-vision", _rx(r"vision|problem|purpose|why")),
        ("user-personas", _rx(r"persona|user|customer|audience|stakeholder")),
        ("features", _rx(r"feature|requirement|capabilit|must have")),
        ("success-metrics", _rx(r"metric|kpi|success|measure|goal")),
    ),
    Intent.TESTING: (
        ("test-type", _rx(r"unit|integration|e2e|end-to-end|snapshot|regression")),
        ("coverage-scope", _rx(r"coverage|scope|module|service|component|function")),
        ("edge-cases", _EDGE_CASES_RE),
        ("mocking-needs", _rx(r"mock|stub|fake|fixture|spy")),
    ),
    Intent.MIGRATION: (
        ("source-version", _rx(r"\bfrom\b|current version|legacy|old")),
        ("target-version", _rx(r"\bto\b\s+\S*\d|target|latest|new version")),
        ("data-considerations", _rx(r"data|schema|backup|records")),
        ("breaking-changes", _rx(r"breaking|deprecat|incompatib|rollback")),
    ),
    Intent.SECURITY_REVIEW: (
        ("scope", _rx(r"scope|module|endpoint|service|component|codebase")),
        ("threat-model", _rx(r"threat|attacker|attack|risk|exploit")),
        ("compliance-requirements", _rx(r"owasp|gdpr|hipaa|pci|soc ?2|compliance")),
        ("known-issues", _rx(r"known|reported|cve|incident|previous")),
    ),
    Intent.LEARNING: (
        ("current-knowledge", _rx(r"i know|familiar|beginner|experience|background")),
        ("learning-goal", _rx(r"understand|learn|goal|so that|able to")),
        ("preferred-depth", _rx(r"deep|overview|detail|high-level|in depth|basics")),
        ("context", _rx(r"project|working on|using|context|for my")),
    ),
    Intent.SUMMARIZATION: (
        ("conversation-context", _rx(r"conversation|discussion|meeting|thread|chat")),
        ("key-requirements", _rx(r"requirement|need|must|should")),
        ("constraints", _rx(r"constraint|limit|cannot|must not|budget|deadline")),
        ("success-criteria", _SUCCESS_CRITERIA_RE),
    ),
}

_COMPLETENESS_PENALTY = 15


class QualityAssessor:
    """Deterministic, rule-based prompt quality scorer."""

    def assess(self, original: str, enhanced: str, intent: IntentAnalysis) -> QualityScore:
        """Score ``enhanced`` for the given intent.

        Args:
            original: Text before optimization (kept for interface symmetry).
            enhanced: Text to score.
            intent: Detected intent; weights some dimensions.

        Returns:
            QualityScore with every field within 0-100.
        """

        primary = intent.primary_intent
        dimensions = {
            "clarity": self._clarity(enhanced, primary),
            "efficiency": self._efficiency(enhanced),
            "structure": self._structure(enhanced, primary),
            "completeness": self._completeness(enhanced, primary),
            "actionability": self._actionability(enhanced, primary),
            "specificity": self._specificity(enhanced, primary),
        }
        return QualityScore(
            **dimensions,
            overall=overall_score(dimensions),
            strengths=tuple(
                _STRENGTH_LABELS[name]
                for name, score in dimensions.items()
                if score >= STRENGTH_THRESHOLD
            ),
        )

    def assess_text(self, text: str, intent: IntentAnalysis) -> QualityScore:
        """Score a single text without an optimization run."""
        return self.assess(text, text, intent)

    def _clarity(self, prompt: str, intent: Intent) -> int:
        score = 100
        if not _OBJECTIVE_RE.search(prompt):
            score -= 20
        if intent is Intent.CODE_GENERATION:
            if not contains_any(prompt, _TECH_STACK):
                score -= 15
            if not _OUTPUT_FORMAT_RE.search(prompt):
                score -= 15
        if not _SUCCESS_CRITERIA_RE.search(prompt):
            score -= 10
        score -= 5 * len(matching_keywords(prompt, _CLARITY_VAGUE))
        return clamp(score)

    def _efficiency(self, prompt: str) -> int:
        score = 100
        score -= 5 * len(matching_keywords(prompt, _PLEASANTRIES))
        score -= 3 * len(matching_keywords(prompt, _FILLER))

        tokens = prompt.lower().split()
        if tokens:
            signal = sum(1 for token in tokens if token not in _STOP_WORDS and len(token) > 2)
            ratio = signal / len(tokens)
            if ratio < 0.6:
                score -= 30
            elif ratio < 0.75:
                score -= 15
        else:
            score -= 30
        return clamp(score)

    def _structure(self, prompt: str, intent: Intent) -> int:
        score = 100
        has_context = contains_phrase(prompt, ("context", "background", "currently"))
        has_requirements = contains_phrase(prompt, ("requirement", "need", "should", "must"))
        has_output = contains_phrase(prompt, ("output", "result", "deliverable", "expected"))

        if intent is not Intent.REFINEMENT and not has_context:
            score -= 20
        if not has_requirements:
            score -= 25
        if not has_output:
            score -= 15
        if has_headings(prompt):
            score += 10
        return clamp(score)

    def _completeness(self, prompt: str, intent: Intent) -> int:
        missing = missing_requirements(prompt, intent)
        return clamp(100 - _COMPLETENESS_PENALTY * len(missing))

    def _actionability(self, prompt: str, intent: Intent) -> int:
        score = 100
        score -= 10 * len(matching_keywords(prompt, _AMBIGUOUS))
        if intent is Intent.CODE_GENERATION and not _EXAMPLES_RE.search(prompt):
            score -= 15
        if not _SUCCESS_CRITERIA_RE.search(prompt):
            score -= 20
        questions = prompt.count("?")
        if questions > 3:
            score -= 5 * questions
        return clamp(score)

    def _specificity(self, prompt: str, intent: Intent) -> int:
        score = 100
        score -= 15 * len(matching_keywords(prompt, _SPECIFICITY_VAGUE))

        if len(words(prompt)) < 50:
            pronouns = len(matching_keywords(prompt, _PRONOUNS))
            if pronouns > 2:
                score -= 5 * (pronouns - 2)

        has_file_paths = _FILE_PATH_RE.search(prompt) is not None
        has_code = "```" in prompt
        if _NUMBER_RE.search(prompt):
            score += 10
        if has_file_paths:
            score += 10
        score += min(5 * len(matching_keywords(prompt, _TECHNICAL_TERMS)), 15)
        if has_code:
            score += 10
        if _IDENTIFIER_RE.search(prompt):
            score += 5

        if intent in (Intent.CODE_GENERATION, Intent.DEBUGGING):
            if not has_file_paths and not has_code:
                score -= 10
        elif intent is Intent.MIGRATION and not _VERSION_RE.search(prompt):
            score -= 15
        return clamp(score)


def missing_requirements(text: str, intent: Intent) -> list[str]:
    """Return the names of the intent's completeness checks ``text`` fails."""

    return [
        name
        for name, check in _COMPLETENESS_REQUIREMENTS[intent]
        if not check.search(text)
    ]


def overall_score(dimensions: dict[str, int]) -> int:
    """Apply the fixed overall weighting to a mapping of dimension scores."""

    return clamp(sum(dimensions[name] * weight for name, weight in OVERALL_WEIGHTS.items()))
