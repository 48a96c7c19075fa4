"""Data models shared by the prompt optimization pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Intent(str, Enum):
    """What a prompt is trying to accomplish.

    Declaration order is also the tie-break order used by the intent detector.
    """

    CODE_GENERATION = "code-generation"
    PLANNING = "planning"
    REFINEMENT = "refinement"
    DEBUGGING = "debugging"
    DOCUMENTATION = "documentation"
    PRD_GENERATION = "prd-generation"
    TESTING = "testing"
    MIGRATION = "migration"
    SECURITY_REVIEW = "security-review"
    LEARNING = "learning"
    SUMMARIZATION = "summarization"


class Mode(str, Enum):
    """Optimization depth requested by the caller."""

    FAST = "fast"
    DEEP = "deep"


class PatternMode(str, Enum):
    """Which optimization modes a pattern takes part in."""

    FAST = "fast"
    DEEP = "deep"
    BOTH = "both"

    def includes(self, mode: Mode) -> bool:
        """Return True when a pattern with this mode may run in ``mode``."""
        return self is PatternMode.BOTH or self.value == mode.value


class QualityDimension(str, Enum):
    """Dimensions a prompt is scored on."""

    CLARITY = "clarity"
    EFFICIENCY = "efficiency"
    STRUCTURE = "structure"
    COMPLETENESS = "completeness"
    ACTIONABILITY = "actionability"
    SPECIFICITY = "specificity"


class Impact(str, Enum):
    """Rough size of an improvement."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class QualityLevel(str, Enum):
    """Band an overall quality score falls into."""

    EXCELLENT = "excellent"
    GOOD = "good"
    DECENT = "decent"
    NEEDS_WORK = "needs-work"


ALL_INTENTS: frozenset[Intent] = frozenset(Intent)


@dataclass(frozen=True)
class Characteristics:
    """Surface features of a prompt, computed once per analysis.

    Attributes:
        has_code_context: Code fences, inline code or identifiers are present.
        has_technical_terms: Technology or domain vocabulary is present.
        is_open_ended: The prompt is phrased openly or states no constraints.
        needs_structure: Long or mixed content without headings or lists.
    """

    has_code_context: bool = False
    has_technical_terms: bool = False
    is_open_ended: bool = False
    needs_structure: bool = False


@dataclass(frozen=True)
class SecondaryIntent:
    """A runner-up intent and its relative confidence."""

    intent: Intent
    confidence: int


@dataclass(frozen=True)
class IntentAnalysis:
    """Result of classifying a prompt.

    Attributes:
        primary_intent: Winning intent.
        confidence: Coarse 0-100 signal; only meaningful in bands.
        characteristics: Intent-independent surface features.
        secondary_intents: Up to two runner-up intents.
    """

    primary_intent: Intent
    confidence: int
    characteristics: Characteristics = field(default_factory=Characteristics)
    secondary_intents: tuple[SecondaryIntent, ...] = ()


@dataclass(frozen=True)
class PatternContext:
    """Per-run context handed unchanged to every pattern."""

    mode: Mode
    original_prompt: str
    intent: IntentAnalysis


@dataclass(frozen=True)
class Improvement:
    """Description of what a pattern added."""

    dimension: QualityDimension
    description: str
    impact: Impact


@dataclass(frozen=True)
class PatternResult:
    """Outcome of applying one pattern.

    When ``applied`` is False, ``enhanced_prompt`` is exactly the input text.
    """

    enhanced_prompt: str
    improvement: Improvement
    applied: bool


@dataclass(frozen=True)
class PatternSummary:
    """Name and description of a pattern that was applied."""

    name: str
    description: str
    impact: Impact


@dataclass(frozen=True)
class QualityScore:
    """Prompt quality on six dimensions, each within 0-100.

    ``overall`` is derived solely from the six dimension scores.
    """

    clarity: int
    efficiency: int
    structure: int
    completeness: int
    actionability: int
    specificity: int
    overall: int
    strengths: tuple[str, ...] = ()


@dataclass(frozen=True)
class OptimizationResult:
    """Everything one pipeline run produced.

    Attributes:
        original: Prompt as given.
        enhanced: Prompt after every applied pattern.
        mode: Mode the run used.
        intent: Detected intent.
        quality: Quality of the enhanced prompt.
        original_quality: Quality of the prompt as given; escalation
            advice is based on this score.
        improvements: One entry per applied pattern.
        applied_patterns: Applied patterns in application order.
        processing_time_ms: Wall-clock duration of the run.
    """

    original: str
    enhanced: str
    mode: Mode
    intent: IntentAnalysis
    quality: QualityScore
    original_quality: QualityScore
    improvements: tuple[Improvement, ...]
    applied_patterns: tuple[PatternSummary, ...]
    processing_time_ms: float


@dataclass(frozen=True)
class EscalationReason:
    """One factor that pushed towards a deep-mode recommendation."""

    factor: str
    contribution: int
    description: str


@dataclass(frozen=True)
class EscalationAnalysis:
    """Detailed deep-mode escalation decision."""

    should_escalate: bool
    score: int
    confidence: str
    reasons: tuple[EscalationReason, ...]
    deep_mode_value: str


@dataclass(frozen=True)
class PatternStatistics:
    """Pattern counts per mode."""

    total_patterns: int
    fast_patterns: int
    deep_patterns: int


@dataclass(frozen=True)
class DetailedRecommendation:
    """Advisory message with the analysis behind it.

    Attributes:
        message: Text shown to the user.
        quality_level: Band of the enhanced prompt's overall score.
        escalation: Escalation analysis; only computed for fast-mode runs.
    """

    message: str
    quality_level: QualityLevel
    escalation: EscalationAnalysis | None = None
