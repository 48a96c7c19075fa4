"""Patterns that turn intent into checkable, concrete work."""

from __future__ import annotations

from promptcraft.intelligence.patterns.base import BasePattern
from promptcraft.intelligence.text_utils import (
    contains_phrase,
    matching_keywords,
    render_section,
)
from promptcraft.intelligence.types import (
    ALL_INTENTS,
    Impact,
    Intent,
    PatternContext,
    PatternMode,
    PatternResult,
    QualityDimension,
)


class ActionabilityEnhancer(BasePattern):
    """Replace vague verbs with concrete actions."""

    id = "actionability-enhancer"
    name = "Actionability Enhancer"
    description = "Converts vague verbs into concrete next actions"
    applicable_intents = ALL_INTENTS - {Intent.LEARNING, Intent.SUMMARIZATION}
    mode = PatternMode.BOTH
    priority = 7
    dimension = QualityDimension.ACTIONABILITY

    _VAGUE_VERBS = {
        "improve": "Name the measure to improve and the target value",
        "enhance": "List the specific behaviours to add or change",
        "optimize": "State what to optimize for (latency, memory, cost) and by how much",
        "clean up": "List the code smells to remove and the files involved",
        "refactor": "Describe the target structure and what must stay unchanged",
        "handle": "Describe the expected behaviour for each case to handle",
        "deal with": "Say what outcome counts as dealt with",
        "look at": "Say what to look for and what to report back",
        "work on": "Define the concrete change and when it is finished",
        "update": "Say what changes and what the new value or behaviour is",
        "make better": "Define better with a concrete, checkable outcome",
        "fix up": "Describe the broken behaviour and the correct one",
    }

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        source = self._user_text(text, context)
        verbs = matching_keywords(source, self._VAGUE_VERBS)
        if not verbs:
            return self._skip(text, "No vague verbs found")

        items = [f'Instead of "{verb}": {self._VAGUE_VERBS[verb]}' for verb in verbs[:8]]
        section = render_section("Concrete Actions", items)
        return self._append(
            text,
            section,
            f"Made {len(items)} vague actions concrete",
            Impact.HIGH if len(items) >= 3 else Impact.MEDIUM,
        )


class SuccessCriteriaEnforcer(BasePattern):
    """Add checkable success criteria."""

    id = "success-criteria-enforcer"
    name = "Success Criteria Enforcer"
    description = "Adds checkable success criteria"
    applicable_intents = frozenset(
        {
            Intent.CODE_GENERATION,
            Intent.REFINEMENT,
            Intent.DEBUGGING,
            Intent.TESTING,
            Intent.MIGRATION,
            Intent.PLANNING,
        }
    )
    mode = PatternMode.BOTH
    priority = 6
    dimension = QualityDimension.ACTIONABILITY

    _INDICATORS = (
        "success criteria",
        "acceptance criteria",
        "definition of done",
        "done when",
        "should pass",
        "must pass",
    )
    _CRITERIA = {
        Intent.CODE_GENERATION: (
            "The code runs without errors on the stated inputs",
            "Public functions behave as described for valid and malformed arguments",
            "Tests covering the main paths pass",
            "The change follows the existing conventions of the codebase",
        ),
        Intent.REFINEMENT: (
            "The targeted measure improves by the stated amount",
            "Existing tests still pass without modification",
            "No public interface changes unless agreed",
        ),
        Intent.DEBUGGING: (
            "The original failure can no longer be reproduced",
            "A regression test fails before the fix and passes after it",
            "No new warnings or failures appear elsewhere",
        ),
        Intent.TESTING: (
            "All new tests pass consistently on repeated runs",
            "Each test checks one behaviour and is independent of the others",
            "Failure paths and boundary values are exercised",
        ),
        Intent.MIGRATION: (
            "The application builds and starts on the target version",
            "The full test suite passes after the migration",
            "A rollback has been rehearsed",
        ),
        Intent.PLANNING: (
            "Every goal maps to at least one milestone",
            "Each milestone has an owner and a completion check",
            "Open risks have a mitigation or an explicit acceptance",
        ),
    }

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if contains_phrase(text, self._INDICATORS):
            return self._skip(text, "Success criteria already defined")

        criteria = self._CRITERIA[context.intent.primary_intent]
        section = render_section("Success Criteria", criteria, style="checkbox")
        return self._append(
            text,
            section,
            f"Added {len(criteria)} checkable success criteria",
            Impact.HIGH,
        )
