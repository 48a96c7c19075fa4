"""Prompt intelligence: intent detection, patterns, assessment and orchestration."""

from promptcraft.intelligence.intent_detector import IntentDetector
from promptcraft.intelligence.optimizer import EscalationThresholds, PromptOptimizer
from promptcraft.intelligence.pattern_library import PatternLibrary
from promptcraft.intelligence.quality_assessor import QualityAssessor
from promptcraft.intelligence.types import (
    Characteristics,
    DetailedRecommendation,
    EscalationAnalysis,
    EscalationReason,
    Impact,
    Improvement,
    Intent,
    IntentAnalysis,
    Mode,
    OptimizationResult,
    PatternContext,
    PatternMode,
    PatternResult,
    PatternStatistics,
    PatternSummary,
    QualityDimension,
    QualityLevel,
    QualityScore,
    SecondaryIntent,
)

__all__ = [
    "Characteristics",
    "DetailedRecommendation",
    "EscalationAnalysis",
    "EscalationReason",
    "EscalationThresholds",
    "Impact",
    "Improvement",
    "Intent",
    "IntentAnalysis",
    "IntentDetector",
    "Mode",
    "OptimizationResult",
    "PatternContext",
    "PatternLibrary",
    "PatternMode",
    "PatternResult",
    "PatternStatistics",
    "PatternSummary",
    "PromptOptimizer",
    "QualityAssessor",
    "QualityDimension",
    "QualityLevel",
    "QualityScore",
    "SecondaryIntent",
]
