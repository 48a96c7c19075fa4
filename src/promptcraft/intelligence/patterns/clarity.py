"""Patterns that sharpen what is being asked."""

from __future__ import annotations

import re

from promptcraft.intelligence.patterns.base import BasePattern
from promptcraft.intelligence.patterns.vocabulary import (
    FILE_REFERENCE_RE,
    TECH_STACK,
    TEST_FRAMEWORKS,
    VERSION_RE,
)
from promptcraft.intelligence.text_utils import (
    contains_any,
    contains_keyword,
    first_sentence,
    matching_keywords,
    render_section,
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


def _impact_for(count: int, high: int = 3) -> Impact:
    if count >= high:
        return Impact.HIGH
    if count >= 2:
        return Impact.MEDIUM
    return Impact.LOW


class ConcisenessFilter(BasePattern):
    """Point out pleasantries, filler and wordy constructions."""

    id = "conciseness-filter"
    name = "Conciseness Filter"
    description = "Flags filler words and pleasantries that dilute the request"
    applicable_intents = ALL_INTENTS
    mode = PatternMode.BOTH
    priority = 10
    dimension = QualityDimension.EFFICIENCY

    _PLEASANTRIES = (
        "please",
        "thank you",
        "thanks",
        "could you",
        "would you",
        "can you",
        "i was wondering if",
        "if you don't mind",
        "i would like you to",
        "i'd like you to",
    )
    _FILLER = (
        "very",
        "really",
        "just",
        "basically",
        "simply",
        "actually",
        "literally",
        "quite",
        "kind of",
        "sort of",
    )
    _WORDY = {
        "in order to": "to",
        "due to the fact that": "because",
        "at this point in time": "now",
        "for the purpose of": "for",
        "in the event that": "if",
        "make sure that": "ensure",
        "is able to": "can",
        "a number of": "several",
    }

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        source = self._user_text(text, context)
        pleasantries = matching_keywords(source, self._PLEASANTRIES)
        filler = matching_keywords(source, self._FILLER)
        wordy = matching_keywords(source, self._WORDY)
        found = len(pleasantries) + len(filler) + len(wordy)
        if not found:
            return self._skip(text, "No filler or pleasantries found")

        items = [f'"{phrase}" is a courtesy the assistant does not need' for phrase in pleasantries]
        items += [f'"{word}" adds emphasis but no information' for word in filler]
        items += [f'"{phrase}" can be shortened to "{self._WORDY[phrase]}"' for phrase in wordy]
        section = render_section(
            "Conciseness Notes",
            items[:8],
            intro="These phrases can be dropped or shortened without losing meaning:",
        )
        return self._append(
            text,
            section,
            f"Flagged {found} filler phrases that can be trimmed",
            _impact_for(found, high=5),
        )


class ObjectiveClarifier(BasePattern):
    """State the task, the expected deliverable and the reason behind it."""

    id = "objective-clarifier"
    name = "Objective Clarifier"
    description = "Makes the objective and expected deliverable explicit"
    applicable_intents = ALL_INTENTS
    mode = PatternMode.BOTH
    priority = 10
    dimension = QualityDimension.CLARITY

    _OBJECTIVE_RE = re.compile(
        r"\b(?:objective|goal|purpose|aim)s?\b|\bin order to\b|\bso that\b",
        re.IGNORECASE,
    )
    _DELIVERABLES = {
        Intent.CODE_GENERATION: "Working code that fits the existing codebase, with a short usage note",
        Intent.PLANNING: "A phased plan with decisions, trade-offs and open questions",
        Intent.REFINEMENT: "Improved code plus a summary of what changed and why",
        Intent.DEBUGGING: "The root cause, a fix and a way to confirm the fix",
        Intent.DOCUMENTATION: "Documentation ready to publish for the intended readers",
        Intent.PRD_GENERATION: "A product requirements document covering problem, users and scope",
        Intent.TESTING: "A test suite that exercises the described behaviour",
        Intent.MIGRATION: "A migration plan and the changes needed to complete it",
        Intent.SECURITY_REVIEW: "A list of findings ranked by severity with remediations",
        Intent.LEARNING: "An explanation pitched at the stated level, with examples",
        Intent.SUMMARIZATION: "A concise summary of decisions, requirements and next steps",
    }

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if self._OBJECTIVE_RE.search(text):
            return self._skip(text, "Objective already stated")

        task = first_sentence(self._user_text(text, context))
        if not task:
            return self._skip(text, "No task statement to restate")
        items = [
            f"**Task**: {task}",
            f"**Deliverable**: {self._DELIVERABLES[context.intent.primary_intent]}",
            "**Purpose**: say why this is needed so trade-offs can be weighed",
        ]
        return self._append(
            text,
            render_section("Objective", items),
            "Added an explicit objective and deliverable",
            Impact.HIGH,
        )


class AmbiguityDetector(BasePattern):
    """Mark unqualified terms and vague phrases that need clarification."""

    id = "ambiguity-detector"
    name = "Ambiguity Detector"
    description = "Identifies and clarifies ambiguous terms and vague references"
    applicable_intents = ALL_INTENTS - {Intent.LEARNING}
    mode = PatternMode.BOTH
    priority = 9
    dimension = QualityDimension.CLARITY

    MARKER = "[CLARIFY]"

    _TERMS = {
        "app": "What kind of application: web, mobile, desktop or CLI?",
        "system": "Which system, and where are its boundaries?",
        "feature": "Which behaviour exactly should the user get?",
        "database": "Which engine: PostgreSQL, MySQL, MongoDB or another?",
        "cache": "Which caching layer (in-memory, Redis, HTTP) and which eviction policy?",
        "service": "Which service, and is it internal or third-party?",
        "component": "Which component, and where does it live in the codebase?",
        "api": "Which API style: REST, GraphQL or an in-process interface?",
        "data": "Which data: its source, shape and expected volume?",
        "platform": "Which platform and versions must be supported?",
    }
    _QUALIFIERS = (
        "web",
        "mobile",
        "desktop",
        "ios",
        "android",
        "cli",
        "react",
        "vue",
        "angular",
        "rest",
        "restful",
        "graphql",
        "postgres",
        "postgresql",
        "mysql",
        "mongodb",
        "redis",
        "sqlite",
        "in-memory",
        "http",
        "internal",
        "external",
        "user",
        "customer",
        "payment",
        "billing",
        "notification",
        "auth",
        "authentication",
    )
    _VAGUE_PHRASES = {
        "should work": "What observable behaviour counts as working?",
        "properly": "What does correct behaviour look like, concretely?",
        "correctly": "Which outcome is considered correct?",
        "as needed": "Under which conditions exactly?",
        "user-friendly": "Which usability criteria must be met?",
        "fast": "What response time or throughput is acceptable?",
        "scalable": "What load must it handle (users, requests per second, data size)?",
        "simple": "Simple for whom, and by which measure?",
        "etc": "Which further items does 'etc' stand for?",
    }
    _QUALIFIED_RE = re.compile(
        rf"\b(?:{'|'.join(re.escape(q) for q in _QUALIFIERS)})\s+(?:{'|'.join(_TERMS)})\b",
        re.IGNORECASE,
    )

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if self.MARKER in text:
            return self._skip(text, "Clarifications already requested")

        source = self._user_text(text, context)
        qualified = {match.group(0).split()[-1].lower() for match in self._QUALIFIED_RE.finditer(source)}
        terms = [
            term
            for term in matching_keywords(source, self._TERMS)
            if term not in qualified or self._has_bare_use(source, term)
        ]
        phrases = matching_keywords(source, self._VAGUE_PHRASES)
        flagged = terms + phrases
        if not flagged:
            return self._skip(text, "No ambiguous terms found")

        items = [f'{self.MARKER} "{term}": {self._TERMS[term]}' for term in terms]
        items += [f'{self.MARKER} "{phrase}": {self._VAGUE_PHRASES[phrase]}' for phrase in phrases]
        section = render_section(
            "Clarifications Needed",
            items[:10],
            intro="Resolve these before implementation:",
        )
        quoted = ", ".join(f'"{term}"' for term in flagged)
        return self._append(
            text,
            section,
            f"Flagged {len(flagged)} ambiguous terms: {quoted}",
            _impact_for(len(flagged)),
        )

    def _has_bare_use(self, source: str, term: str) -> bool:
        """True when ``term`` also appears without a qualifier in front of it."""

        total = len(re.findall(rf"\b{term}\b", source, re.IGNORECASE))
        qualified = sum(
            1
            for match in self._QUALIFIED_RE.finditer(source)
            if match.group(0).split()[-1].lower() == term
        )
        return total > qualified


class ContextPrecisionBooster(BasePattern):
    """Ask for the setup details an assistant would otherwise guess."""

    id = "context-precision-booster"
    name = "Context Precision Booster"
    description = "Requests missing context such as stack, location and error output"
    applicable_intents = frozenset(
        {
            Intent.CODE_GENERATION,
            Intent.DEBUGGING,
            Intent.REFINEMENT,
            Intent.TESTING,
            Intent.MIGRATION,
        }
    )
    mode = PatternMode.BOTH
    priority = 8
    dimension = QualityDimension.SPECIFICITY

    _LOCATION_TERMS = ("files?", "modules?", "directory", "folder", "package", "repo(?:sitory)?")

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        intent = context.intent.primary_intent
        items: list[str] = []
        if not contains_any(text, TECH_STACK):
            items.append("**Tech stack**: language, framework and versions in use")
        if not FILE_REFERENCE_RE.search(text) and not contains_any(text, self._LOCATION_TERMS):
            items.append("**Location**: files, modules or directories involved")

        if intent is Intent.DEBUGGING:
            if not contains_any(text, ("errors?", "exceptions?", "traceback", "stack trace")):
                items.append("**Error output**: the exact error message and stack trace")
            if not contains_any(text, ("expected", "instead", "actual")):
                items.append("**Expected vs actual**: what should happen and what happens instead")
            if not contains_any(text, ("environment", "os", "browser", "runtime", "production", "locally")):
                items.append("**Environment**: OS, runtime and browser versions")
        elif intent is Intent.REFINEMENT:
            if not contains_any(text, ("current", "currently", "existing")):
                items.append("**Current implementation**: paste or describe the code to improve")
            if not re.search(r"\d", text):
                items.append("**Target**: which measure should improve and by how much")
        elif intent is Intent.MIGRATION:
            if not VERSION_RE.search(text):
                items.append("**Versions**: the current and the target versions")
        elif intent is Intent.TESTING:
            if not contains_any(text, TEST_FRAMEWORKS):
                items.append("**Test framework**: the runner and assertion library in use")
        elif not contains_any(text, ("existing", "current", "codebase", "already")):
            items.append("**Existing code**: related code, interfaces or conventions to follow")

        if len(items) < 2:
            return self._skip(text, "Context is already precise")

        section = render_section(
            "Context Needed",
            items[:6],
            intro="Add these details so the answer fits your setup:",
        )
        return self._append(
            text,
            section,
            f"Requested {len(items)} missing context details",
            Impact.HIGH if len(items) >= 4 else Impact.MEDIUM,
        )


class AlternativePhrasingGenerator(BasePattern):
    """Offer other framings of the same request."""

    id = "alternative-phrasing-generator"
    name = "Alternative Phrasing Generator"
    description = "Suggests alternative framings of the request"
    applicable_intents = frozenset(
        {
            Intent.CODE_GENERATION,
            Intent.PLANNING,
            Intent.REFINEMENT,
            Intent.DOCUMENTATION,
            Intent.PRD_GENERATION,
            Intent.LEARNING,
        }
    )
    mode = PatternMode.DEEP
    priority = 5
    dimension = QualityDimension.CLARITY

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if contains_keyword(text, "alternatives?"):
            return self._skip(text, "Alternatives already discussed")

        subject = first_sentence(self._user_text(text, context), limit=120)
        if word_count(subject) < 3:
            return self._skip(text, "Request too short to rephrase")

        lowered = subject[0].lower() + subject[1:]
        items = [
            f"**User story**: As a user, I want to {lowered} so that <benefit>.",
            f"**Task-oriented**: Goal: {subject}. Constraints: <limits>. Output: <format>.",
            f"**Acceptance-driven**: Given <starting state>, when <action>, then {lowered} is done.",
        ]
        section = render_section(
            "Alternative Framings",
            items,
            intro="If the request is misread, try one of these framings:",
        )
        return self._append(text, section, "Added 3 alternative framings", Impact.LOW)
