"""Patterns that give a prompt shape: outline, steps and output format."""

from __future__ import annotations

import re

from promptcraft.intelligence.patterns.base import BasePattern
from promptcraft.intelligence.text_utils import (
    contains_any,
    contains_phrase,
    first_sentence,
    is_structured,
    render_section,
    split_sentences,
    word_count,
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

_NUMBERED_LIST_RE = re.compile(r"^\s*\d+[.)]\s+\S", re.MULTILINE)


class StructureOrganizer(BasePattern):
    """Regroup a free-form request into context, requirements and output."""

    id = "structure-organizer"
    name = "Structure Organizer"
    description = "Suggests a context, requirements and output outline"
    applicable_intents = ALL_INTENTS - {Intent.SUMMARIZATION, Intent.LEARNING}
    mode = PatternMode.BOTH
    priority = 8
    dimension = QualityDimension.STRUCTURE

    _CONTEXT_CUES = (
        "currently",
        "existing",
        "we have",
        "background",
        "right now",
        "today",
        "at the moment",
        "our",
        "legacy",
    )
    _OUTPUT_CUES = ("return", "returns", "output", "result", "format", "deliverable", "response", "report")
    _PER_GROUP = 4

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if "## Suggested Structure" in text:
            return self._skip(text, "Outline already suggested")

        source = self._user_text(text, context)
        if is_structured(source):
            return self._skip(text, "Prompt already structured")
        sentences = split_sentences(source)
        if len(sentences) < 2 or word_count(source) < 15:
            return self._skip(text, "Prompt too short to reorganize")

        groups: dict[str, list[str]] = {"Context": [], "Requirements": [], "Expected Output": []}
        for sentence in sentences:
            if contains_any(sentence, self._CONTEXT_CUES):
                groups["Context"].append(sentence)
            elif contains_any(sentence, self._OUTPUT_CUES):
                groups["Expected Output"].append(sentence)
            else:
                groups["Requirements"].append(sentence)

        placeholders = {
            "Context": "Describe the current situation and relevant background",
            "Requirements": "List what the result must do",
            "Expected Output": "Describe the format of the answer you expect",
        }
        lines = ["", "", "## Suggested Structure", "", "Reorganized outline of the request:"]
        for title, entries in groups.items():
            lines.extend(["", f"### {title}", ""])
            for entry in entries[: self._PER_GROUP] or [placeholders[title]]:
                lines.append(f"- {entry}")

        return self._append(
            text,
            "\n".join(lines),
            f"Organized {len(sentences)} sentences into context, requirements and output",
        )


class StepDecomposer(BasePattern):
    """Break the request into ordered steps."""

    id = "step-decomposer"
    name = "Step Decomposer"
    description = "Breaks complex requests into ordered implementation steps"
    applicable_intents = frozenset(
        {
            Intent.CODE_GENERATION,
            Intent.PLANNING,
            Intent.REFINEMENT,
            Intent.MIGRATION,
            Intent.TESTING,
            Intent.DEBUGGING,
        }
    )
    mode = PatternMode.BOTH
    priority = 7
    dimension = QualityDimension.ACTIONABILITY

    _STEPS = {
        Intent.CODE_GENERATION: (
            "Confirm the inputs, outputs and constraints for: {subject}",
            "Define the data structures and interfaces",
            "Implement the core logic",
            "Handle failure paths and unusual inputs",
            "Write tests for the main and failure paths",
            "Document how to use the result",
        ),
        Intent.PLANNING: (
            "Clarify goals and constraints for: {subject}",
            "List the candidate approaches",
            "Compare their trade-offs",
            "Choose an approach and record why",
            "Break the work into milestones",
            "Identify risks and mitigations",
        ),
        Intent.REFINEMENT: (
            "Measure the current behaviour of: {subject}",
            "Identify the main bottlenecks or code smells",
            "Apply changes in small increments",
            "Re-measure after each change",
            "Confirm behaviour is unchanged with tests",
        ),
        Intent.MIGRATION: (
            "Inventory the code and dependencies affected by: {subject}",
            "Read the changelog for breaking changes",
            "Upgrade on a separate branch",
            "Fix breakages one area at a time",
            "Run the full test suite",
            "Plan the rollout and the rollback",
        ),
        Intent.TESTING: (
            "Identify the units under test for: {subject}",
            "Set up fixtures and test doubles",
            "Cover the happy path",
            "Cover failure paths and boundary values",
            "Check coverage of the changed code",
        ),
        Intent.DEBUGGING: (
            "Reproduce the problem reliably: {subject}",
            "Isolate the failing component",
            "Identify the root cause",
            "Apply the smallest fix that addresses it",
            "Add a regression test",
            "Verify nothing else broke",
        ),
    }

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if _NUMBERED_LIST_RE.search(text) or contains_phrase(text, ("step 1", "steps:")):
            return self._skip(text, "Steps already provided")

        source = self._user_text(text, context)
        if word_count(source) < 4:
            return self._skip(text, "Request too small to decompose")

        subject = first_sentence(source, limit=100)
        steps = [step.format(subject=subject) for step in self._STEPS[context.intent.primary_intent]]
        heading = "Suggested Steps" if context.intent.primary_intent is Intent.PLANNING else "Implementation Steps"
        section = render_section(heading, steps, style="numbered")
        return self._append(text, section, f"Decomposed the request into {len(steps)} steps")


class OutputFormatEnforcer(BasePattern):
    """Spell out the shape of the expected answer."""

    id = "output-format-enforcer"
    name = "Output Format Enforcer"
    description = "Adds explicit output format specifications"
    applicable_intents = frozenset(
        {
            Intent.CODE_GENERATION,
            Intent.PLANNING,
            Intent.DOCUMENTATION,
            Intent.PRD_GENERATION,
            Intent.TESTING,
        }
    )
    mode = PatternMode.BOTH
    priority = 7
    dimension = QualityDimension.STRUCTURE

    _FORMAT_INDICATORS = (
        "output format",
        "expected output",
        "return format",
        "format:",
        "as json",
        "as markdown",
        "as a table",
        "typescript",
        "react component",
        "should return",
        "code block",
        "```",
    )

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if contains_phrase(text, self._FORMAT_INDICATORS):
            return self._skip(text, "Output format already specified")

        items = self._items(context.intent.primary_intent, text)
        section = render_section("Expected Output Format", items)
        return self._append(text, section, "Specified the expected output format")

    def _items(self, intent: Intent, text: str) -> list[str]:
        if contains_any(text, ("python", "django", "flask", "fastapi")):
            language, doc_style, runner = "Python", "Docstrings on public functions", "pytest"
        else:
            language, doc_style, runner = "TypeScript/JavaScript", "JSDoc comments on exported functions", "Jest"

        if intent is Intent.PLANNING:
            return [
                "Markdown task list (`- [ ]`) grouped by phase",
                "Each task with a rough estimate",
                "Risks and open questions at the end",
            ]
        if intent is Intent.DOCUMENTATION:
            return [
                "Markdown with headings for overview, usage and reference",
                "Code examples in fenced blocks",
                "A table of contents when there are more than three sections",
            ]
        if intent is Intent.PRD_GENERATION:
            return [
                "PRD document with numbered sections",
                "Requirements as a prioritized table",
                "Success metrics with target values",
            ]
        if intent is Intent.TESTING:
            return [
                f"{runner} test files ready to run",
                "Test names that describe the behaviour under test",
                "A note on any fixtures or test doubles required",
            ]
        return [
            f"Complete {language} code in fenced code blocks",
            doc_style,
            "A short usage example",
            f"{runner} tests for the main paths",
        ]
