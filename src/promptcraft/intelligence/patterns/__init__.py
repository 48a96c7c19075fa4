"""Built-in prompt transformation patterns."""

from promptcraft.intelligence.patterns.actionability import (
    ActionabilityEnhancer,
    SuccessCriteriaEnforcer,
)
from promptcraft.intelligence.patterns.base import BasePattern, Pattern
from promptcraft.intelligence.patterns.clarity import (
    AlternativePhrasingGenerator,
    AmbiguityDetector,
    ConcisenessFilter,
    ContextPrecisionBooster,
    ObjectiveClarifier,
)
from promptcraft.intelligence.patterns.completeness import (
    AssumptionExplicitizer,
    CompletenessValidator,
    DomainContextEnricher,
    PrerequisiteIdentifier,
    ScopeDefiner,
    TechnicalContextEnricher,
)
from promptcraft.intelligence.patterns.conversation import (
    ConversationSummarizer,
    ImplicitRequirementExtractor,
    TopicCoherenceAnalyzer,
)
from promptcraft.intelligence.patterns.prd import (
    DependencyIdentifier,
    PRDStructureEnforcer,
    RequirementPrioritizer,
    SuccessMetricsEnforcer,
    UserPersonaEnricher,
)
from promptcraft.intelligence.patterns.robustness import (
    EdgeCaseIdentifier,
    ErrorToleranceEnhancer,
    ValidationChecklistCreator,
)
from promptcraft.intelligence.patterns.structure import (
    OutputFormatEnforcer,
    StepDecomposer,
    StructureOrganizer,
)


def default_patterns() -> list[Pattern]:
    """Return fresh instances of every built-in pattern in registration order.

    Registration order breaks ties between patterns of equal priority.
    """

    return [
        ConcisenessFilter(),
        ObjectiveClarifier(),
        TechnicalContextEnricher(),
        StructureOrganizer(),
        CompletenessValidator(),
        ActionabilityEnhancer(),
        AlternativePhrasingGenerator(),
        EdgeCaseIdentifier(),
        ValidationChecklistCreator(),
        AssumptionExplicitizer(),
        ScopeDefiner(),
        PRDStructureEnforcer(),
        StepDecomposer(),
        ContextPrecisionBooster(),
        AmbiguityDetector(),
        OutputFormatEnforcer(),
        SuccessCriteriaEnforcer(),
        ErrorToleranceEnhancer(),
        PrerequisiteIdentifier(),
        DomainContextEnricher(),
        RequirementPrioritizer(),
        UserPersonaEnricher(),
        SuccessMetricsEnforcer(),
        DependencyIdentifier(),
        ConversationSummarizer(),
        TopicCoherenceAnalyzer(),
        ImplicitRequirementExtractor(),
    ]


__all__ = [
    "ActionabilityEnhancer",
    "AlternativePhrasingGenerator",
    "AmbiguityDetector",
    "AssumptionExplicitizer",
    "BasePattern",
    "CompletenessValidator",
    "ConcisenessFilter",
    "ContextPrecisionBooster",
    "ConversationSummarizer",
    "DependencyIdentifier",
    "DomainContextEnricher",
    "EdgeCaseIdentifier",
    "ErrorToleranceEnhancer",
    "ImplicitRequirementExtractor",
    "ObjectiveClarifier",
    "OutputFormatEnforcer",
    "PRDStructureEnforcer",
    "Pattern",
    "PrerequisiteIdentifier",
    "RequirementPrioritizer",
    "ScopeDefiner",
    "StepDecomposer",
    "StructureOrganizer",
    "SuccessCriteriaEnforcer",
    "SuccessMetricsEnforcer",
    "TechnicalContextEnricher",
    "TopicCoherenceAnalyzer",
    "UserPersonaEnricher",
    "ValidationChecklistCreator",
    "default_patterns",
]
