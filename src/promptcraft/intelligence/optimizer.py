"""Prompt optimization orchestrator.

Runs intent detection, pattern selection, sequential pattern application and
quality assessment, then advises whether a deep-mode pass is worthwhile.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from promptcraft.intelligence.intent_detector import IntentDetector
from promptcraft.intelligence.pattern_library import PatternLibrary
from promptcraft.intelligence.quality_assessor import QualityAssessor
from promptcraft.intelligence.types import (
    DetailedRecommendation,
    EscalationAnalysis,
    EscalationReason,
    Improvement,
    Intent,
    Mode,
    OptimizationResult,
    PatternContext,
    PatternStatistics,
    PatternSummary,
    QualityLevel,
)

if TYPE_CHECKING:
    from promptcraft.config import Config

logger = logging.getLogger(__name__)

_PLANNING_INTENTS = (Intent.PLANNING, Intent.PRD_GENERATION)
_COMPLEX_INTENTS = (Intent.MIGRATION, Intent.SECURITY_REVIEW)
_SHORT_PROMPT_CHARS = 50

_LEVEL_MESSAGES = {
    QualityLevel.EXCELLENT: "Excellent! Your prompt is AI-ready.",
    QualityLevel.GOOD: "Good quality. Ready to use!",
    QualityLevel.DECENT: "Decent quality. Consider the improvements listed above.",
    QualityLevel.NEEDS_WORK: "This prompt needs improvement for best results.",
}


@dataclass(frozen=True)
class EscalationThresholds:
    """Constants behind the deep-mode escalation score.

    Attributes:
        standard_floor: Dimension scores below this count against a prompt.
        intent_confidence_min: Confidence below this plus 10 adds to the score.
        suggest_above: Score at which deep mode is suggested.
        strong_recommend_above: Score at which the suggestion is high confidence.
        excellent_overall: Overall quality at which a clear prompt never escalates.
    """

    standard_floor: int = 60
    intent_confidence_min: int = 50
    suggest_above: int = 45
    strong_recommend_above: int = 75
    excellent_overall: int = 90

    @property
    def lenient_floor(self) -> int:
        """Quality below which short or open-ended prompts count as underspecified."""
        return self.standard_floor + 10


class PromptOptimizer:
    """Orchestrator for the prompt optimization pipeline.

    Coordinates:
    - Intent detection
    - Pattern selection and sequential application with failure isolation
    - Quality assessment of the enhanced prompt
    - Deep-mode escalation advice
    """

    def __init__(
        self,
        detector: IntentDetector | None = None,
        library: PatternLibrary | None = None,
        assessor: QualityAssessor | None = None,
        thresholds: EscalationThresholds | None = None,
    ) -> None:
        """Initialize the optimizer; missing collaborators get defaults.

        Args:
            detector: Intent detector.
            library: Pattern library holding every pattern.
            assessor: Quality assessor.
            thresholds: Escalation constants.
        """
        self.detector = detector or IntentDetector()
        self.library = library or PatternLibrary()
        self.assessor = assessor or QualityAssessor()
        self.thresholds = thresholds or EscalationThresholds()

    @classmethod
    def from_config(cls, config: Config) -> PromptOptimizer:
        """Build an optimizer from application configuration."""
        return cls(
            library=PatternLibrary(
                disabled=config.disabled_patterns,
                priority_overrides=config.pattern_priorities,
            ),
            thresholds=EscalationThresholds(
                standard_floor=config.escalation_quality_floor,
                suggest_above=config.escalation_suggest_above,
            ),
        )

    async def optimize(self, text: str, mode: Mode | str = Mode.FAST) -> OptimizationResult:
        """Optimize a prompt.

        The pipeline:
        1. Detect the intent of ``text``
        2. Select the eligible patterns for that intent and mode
        3. Apply them in order to the progressively enhanced text,
           skipping any pattern that raises
        4. Assess the quality of the final text and of the prompt as given

        Args:
            text: Raw prompt; any string, including empty.
            mode: ``fast`` or ``deep``.

        Returns:
            OptimizationResult for this run.

        Raises:
            ValueError: If ``mode`` is not a known mode.
        """
        return self._run(text, Mode(mode))

    def _run(self, text: str, mode: Mode) -> OptimizationResult:
        start = time.perf_counter()
        intent = self.detector.analyze(text)
        patterns = self.library.select_patterns(intent, mode)
        context = PatternContext(mode=mode, original_prompt=text, intent=intent)

        current = text
        improvements: list[Improvement] = []
        applied: list[PatternSummary] = []
        for pattern in patterns:
            try:
                outcome = pattern.apply(current, context)
            except Exception as e:
                logger.debug(f"Pattern {pattern.id} failed, skipping: {e}")
                continue
            if not outcome.applied:
                continue
            current = outcome.enhanced_prompt
            improvements.append(outcome.improvement)
            applied.append(
                PatternSummary(
                    name=pattern.name,
                    description=pattern.description,
                    impact=outcome.improvement.impact,
                )
            )

        quality = self.assessor.assess(text, current, intent)
        original_quality = quality if current == text else self.assessor.assess_text(text, intent)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            f"Optimized prompt ({mode.value}): intent={intent.primary_intent.value} "
            f"patterns={len(applied)}/{len(patterns)} overall={quality.overall} "
            f"in {elapsed_ms:.1f}ms"
        )
        return OptimizationResult(
            original=text,
            enhanced=current,
            mode=mode,
            intent=intent,
            quality=quality,
            original_quality=original_quality,
            improvements=tuple(improvements),
            applied_patterns=tuple(applied),
            processing_time_ms=elapsed_ms,
        )

    def should_recommend_deep_mode(self, result: OptimizationResult) -> bool:
        """Decide whether a deep-mode run should be suggested.

        Depends only on ``result.intent`` and ``result.original_quality``.
        ``result.quality`` rates the enhanced text, whose appended sections
        would hide how much the user's own prompt leaves out.

        Rules, first match wins:
        1. Planning that is open-ended and needs structure: always.
        2. Neither open-ended nor in need of structure, with excellent
           quality: never.
        3. Open-ended with quality below the lenient floor: always.
        4. Otherwise the escalation score decides.
        """
        characteristics = result.intent.characteristics
        quality = result.original_quality
        if (
            result.intent.primary_intent is Intent.PLANNING
            and characteristics.is_open_ended
            and characteristics.needs_structure
        ):
            return True
        if (
            not characteristics.is_open_ended
            and not characteristics.needs_structure
            and quality.overall >= self.thresholds.excellent_overall
        ):
            return False
        if characteristics.is_open_ended and quality.overall < self.thresholds.lenient_floor:
            return True
        return self.analyze_escalation(result).should_escalate

    def analyze_escalation(self, result: OptimizationResult) -> EscalationAnalysis:
        """Score the case for a deep-mode run from intent and quality factors.

        Quality factors read ``result.original_quality``.

        Args:
            result: A completed optimization.

        Returns:
            EscalationAnalysis with the total score, its confidence band and
            every contributing factor.
        """

        thresholds = self.thresholds
        intent = result.intent
        quality = result.original_quality
        reasons: list[EscalationReason] = []

        if intent.primary_intent in _PLANNING_INTENTS:
            reasons.append(
                EscalationReason(
                    "intent-type",
                    30,
                    f"{intent.primary_intent.value} tasks benefit from deep analysis",
                )
            )

        confidence_floor = thresholds.intent_confidence_min + 10
        if intent.confidence < confidence_floor:
            reasons.append(
                EscalationReason(
                    "low-confidence",
                    round((confidence_floor - intent.confidence) / 3),
                    f"Intent detection confidence is low ({intent.confidence}%)",
                )
            )

        quality_floor = thresholds.standard_floor + 5
        if quality.overall < quality_floor:
            reasons.append(
                EscalationReason(
                    "low-quality",
                    round((quality_floor - quality.overall) / 2.6),
                    f"Prompt quality is below threshold ({quality.overall}/100)",
                )
            )

        if quality.completeness < thresholds.standard_floor:
            reasons.append(
                EscalationReason(
                    "missing-completeness",
                    15,
                    f"Missing required details (completeness: {quality.completeness}%)",
                )
            )

        if quality.specificity < thresholds.standard_floor:
            reasons.append(
                EscalationReason(
                    "low-specificity",
                    15,
                    f"Prompt lacks concrete details (specificity: {quality.specificity}%)",
                )
            )

        if intent.characteristics.is_open_ended and intent.characteristics.needs_structure:
            reasons.append(
                EscalationReason("high-ambiguity", 20, "Open-ended request without clear structure")
            )

        if (
            len(result.original) < _SHORT_PROMPT_CHARS
            and quality.completeness < thresholds.lenient_floor
        ):
            reasons.append(
                EscalationReason(
                    "length-mismatch", 15, "Very short prompt with incomplete requirements"
                )
            )

        if intent.primary_intent in _COMPLEX_INTENTS:
            reasons.append(
                EscalationReason(
                    "complex-intent",
                    20,
                    f"{intent.primary_intent.value} requires thorough analysis",
                )
            )

        score = min(sum(reason.contribution for reason in reasons), 100)
        medium_floor = round((thresholds.suggest_above + thresholds.strong_recommend_above) / 2)
        if score >= thresholds.strong_recommend_above:
            confidence = "high"
        elif score >= medium_floor:
            confidence = "medium"
        else:
            confidence = "low"

        return EscalationAnalysis(
            should_escalate=score >= thresholds.suggest_above,
            score=score,
            confidence=confidence,
            reasons=tuple(reasons),
            deep_mode_value=self._deep_mode_value(intent.primary_intent, reasons),
        )

    def get_recommendation(self, result: OptimizationResult) -> str | None:
        """Return a short advisory message, or None when nothing is worth saying."""

        if result.mode is Mode.FAST and self.should_recommend_deep_mode(result):
            return self._deep_mode_message(self.analyze_escalation(result))

        level = quality_level(result.quality.overall)
        if level is QualityLevel.NEEDS_WORK:
            return None
        return _LEVEL_MESSAGES[level]

    def get_detailed_recommendation(self, result: OptimizationResult) -> DetailedRecommendation:
        """Return the advisory message together with the analysis behind it.

        Unlike :meth:`get_recommendation`, a prompt below the decent band
        still gets a message. The escalation analysis is attached for
        fast-mode runs only.
        """
        level = quality_level(result.quality.overall)
        message = _LEVEL_MESSAGES[level]
        escalation = None
        if result.mode is Mode.FAST:
            escalation = self.analyze_escalation(result)
            if self.should_recommend_deep_mode(result):
                message = self._deep_mode_message(escalation)
        return DetailedRecommendation(message=message, quality_level=level, escalation=escalation)

    def get_statistics(self) -> PatternStatistics:
        return PatternStatistics(
            total_patterns=self.library.get_pattern_count(),
            fast_patterns=len(self.library.get_patterns_by_scope(Mode.FAST)),
            deep_patterns=len(self.library.get_patterns_by_scope(Mode.DEEP)),
        )

    @staticmethod
    def _deep_mode_message(analysis: EscalationAnalysis) -> str:
        return f"{analysis.deep_mode_value} Re-run with --mode deep."

    @staticmethod
    def _deep_mode_value(intent: Intent, reasons: list[EscalationReason]) -> str:
        factors = {reason.factor for reason in reasons}
        benefits: list[str] = []
        if intent in _PLANNING_INTENTS:
            benefits.append("structured implementation plan")
        if factors & {"low-quality", "missing-completeness"}:
            benefits.append("comprehensive requirements extraction")
        if "high-ambiguity" in factors:
            benefits.append("alternative approaches and trade-offs")
        if "low-specificity" in factors:
            benefits.append("concrete examples and specifications")
        if intent is Intent.MIGRATION:
            benefits.append("migration checklist and risk assessment")
        if intent is Intent.SECURITY_REVIEW:
            benefits.append("security checklist and threat analysis")
        benefits.append("validation checklist")
        return f"Deep mode would provide: {', '.join(benefits)}."


def quality_level(overall: int) -> QualityLevel:
    """Map an overall quality score onto its band."""

    if overall >= 90:
        return QualityLevel.EXCELLENT
    if overall >= 80:
        return QualityLevel.GOOD
    if overall >= 70:
        return QualityLevel.DECENT
    return QualityLevel.NEEDS_WORK
