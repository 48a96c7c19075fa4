"""Patterns for product requirement documents and product planning."""

from __future__ import annotations

import re

from promptcraft.intelligence.patterns.base import BasePattern
from promptcraft.intelligence.patterns.vocabulary import DOMAINS
from promptcraft.intelligence.text_utils import (
    contains_any,
    contains_phrase,
    matching_keywords,
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

_PRODUCT_INTENTS = frozenset({Intent.PRD_GENERATION, Intent.PLANNING})

# Checked in order; the first matching domain wins.
_PRODUCT_DOMAINS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("ecommerce", ("shop", "store", "cart", "checkout", "orders?", "e-?commerce", "products?")),
    ("saas", ("saas", "subscriptions?", "workspaces?", "dashboard", "b2b", "tenants?")),
    ("content", ("blog", "posts?", "articles?", "feed", "content", "cms")),
    ("education", ("courses?", "students?", "lessons?", "teachers?", "classroom")),
)


def _product_domain(text: str) -> str | None:
    for domain, keywords in _PRODUCT_DOMAINS:
        if contains_any(text, keywords):
            return domain
    return None


class PRDStructureEnforcer(BasePattern):
    """Check a PRD request against the standard PRD sections."""

    id = "prd-structure-enforcer"
    name = "PRD Structure Enforcer"
    description = "Ensures a PRD covers the standard sections"
    applicable_intents = frozenset({Intent.PRD_GENERATION})
    mode = PatternMode.DEEP
    priority = 9
    dimension = QualityDimension.COMPLETENESS

    SECTIONS: tuple[tuple[str, tuple[str, ...], str], ...] = (
        (
            "Problem Statement",
            ("problems?", "pain points?", "issues?", "challenges?"),
            "What problem does this solve, and for whom?",
        ),
        (
            "Target Users",
            ("users?", "personas?", "audience", "customers?"),
            "Who are the primary users and what do they need?",
        ),
        (
            "Goals & Success Metrics",
            ("goals?", "metrics?", "kpis?", "success", "objectives?"),
            "Which measurable outcomes define success?",
        ),
        (
            "Functional Requirements",
            ("requirements?", "features?", "must", "functionality"),
            "What must the product do?",
        ),
        (
            "Scope & Boundaries",
            ("scope", "boundar(?:y|ies)", "out of scope", "in scope"),
            "What is included, and what is explicitly excluded?",
        ),
        (
            "Constraints & Dependencies",
            ("constraints?", "dependenc(?:y|ies)", "limitations?", "must use"),
            "Which technical or business limits apply?",
        ),
        (
            "Timeline & Milestones",
            ("timeline", "milestones?", "phases?", "deadlines?", "sprints?"),
            "When are the key milestones?",
        ),
        (
            "Risks & Mitigations",
            ("risks?", "mitigations?", "concerns?"),
            "What could go wrong, and how will it be handled?",
        ),
    )
    BEST_PRACTICES = (
        "Write requirements as behaviour a user can observe",
        "Give every goal a measurable target",
        "Record scope decisions, including what is deferred",
    )

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        source = self._user_text(text, context)
        missing: list[tuple[str, str]] = []
        weak: list[str] = []
        for title, keywords, guidance in self.SECTIONS:
            hits = len(matching_keywords(source, keywords))
            if hits == 0:
                missing.append((title, guidance))
            elif hits == 1:
                weak.append(title)

        if not missing:
            return self._skip(text, "PRD covers every standard section")

        total = len(self.SECTIONS)
        present = total - len(missing)
        lines = [
            "",
            "",
            "## PRD Completeness Check",
            "",
            f"Current coverage: {round(100 * present / total)}% ({present}/{total} sections)",
            "",
            "Missing sections:",
        ]
        lines.extend(f"- **{title}**: {guidance}" for title, guidance in missing)
        if weak:
            lines.extend(["", "These sections are mentioned but could be expanded:"])
            lines.extend(f"- {title}" for title in weak)
        lines.extend(["", "### PRD Best Practices", ""])
        lines.extend(f"- {practice}" for practice in self.BEST_PRACTICES)

        return self._append(
            text,
            "\n".join(lines),
            f"Checked {total} PRD sections, {len(missing)} missing",
            Impact.HIGH if len(missing) >= 4 else Impact.MEDIUM,
        )


class RequirementPrioritizer(BasePattern):
    """Sort stated requirements into must, should and nice to have."""

    id = "requirement-prioritizer"
    name = "Requirement Prioritizer"
    description = "Separates must-have requirements from nice-to-haves"
    applicable_intents = _PRODUCT_INTENTS
    mode = PatternMode.DEEP
    priority = 7
    dimension = QualityDimension.STRUCTURE

    _INDICATORS = ("must have", "must-have", "nice to have", "nice-to-have", "priority", "priorities", "p0", "moscow")
    _REQUIREMENT_RE = re.compile(
        r"\b(?:need|needs|should|must|want|wants|require|requires|support|allow|enable|include|have to)\b",
        re.IGNORECASE,
    )
    _MUST = ("must", "required", "requires?", "needs?", "critical", "have to", "essential")
    _NICE = ("could", "nice", "maybe", "optional", "would be", "eventually", "later")
    _MAX_REQUIREMENTS = 10

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        source = self._user_text(text, context)
        if "## Requirement Priorities" in text or contains_phrase(source, self._INDICATORS):
            return self._skip(text, "Requirements already prioritized")

        requirements = [
            sentence
            for sentence in split_sentences(source)
            if self._REQUIREMENT_RE.search(sentence)
        ][: self._MAX_REQUIREMENTS]
        if not requirements:
            return self._skip(text, "No requirements to prioritize")

        buckets: dict[str, list[str]] = {"Must have": [], "Should have": [], "Nice to have": []}
        for requirement in requirements:
            if contains_any(requirement, self._NICE):
                buckets["Nice to have"].append(requirement)
            elif contains_any(requirement, self._MUST):
                buckets["Must have"].append(requirement)
            else:
                buckets["Should have"].append(requirement)

        lines = ["", "", "## Requirement Priorities"]
        for title, entries in buckets.items():
            lines.extend(["", f"**{title}:**"])
            lines.extend(f"- {entry}" for entry in entries or ["(none identified yet)"])
        return self._append(
            text,
            "\n".join(lines),
            f"Prioritized {len(requirements)} requirements",
        )


class UserPersonaEnricher(BasePattern):
    """Suggest target users and personas when none are described."""

    id = "user-persona-enricher"
    name = "User Persona Enricher"
    description = "Adds target users and personas"
    applicable_intents = _PRODUCT_INTENTS
    mode = PatternMode.DEEP
    priority = 6
    dimension = QualityDimension.COMPLETENESS

    _INDICATORS = ("persona", "target user", "target audience", "user types")
    _PERSONAS = {
        "ecommerce": (
            "Shopper on mobile who wants a quick checkout",
            "Returning customer tracking and managing orders",
            "Store administrator maintaining the catalog",
        ),
        "saas": (
            "Team administrator managing seats and permissions",
            "Daily end user focused on their own tasks",
            "Manager reading summary reports",
        ),
        "content": (
            "Author creating and editing content",
            "Reader discovering and following content",
            "Moderator reviewing submissions",
        ),
        "education": (
            "Student following a course at their own pace",
            "Instructor building and grading lessons",
            "Administrator managing enrolments",
        ),
    }
    _DEFAULT_PERSONAS = (
        "Primary user who performs the core task every day",
        "Occasional user who needs guidance",
        "Administrator who configures and supports the product",
    )
    _QUESTIONS = (
        "What are each persona's goals and frustrations?",
        "How comfortable is each persona with technology?",
    )

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        source = self._user_text(text, context)
        if "## Target Users" in text or contains_phrase(source, self._INDICATORS):
            return self._skip(text, "Target users already described")

        personas = self._PERSONAS.get(_product_domain(source), self._DEFAULT_PERSONAS)
        section = render_section(
            "Target Users & Personas",
            [*personas, *self._QUESTIONS],
            intro="Describe who this is for. Starting points:",
        )
        return self._append(text, section, f"Suggested {len(personas)} user personas")


class SuccessMetricsEnforcer(BasePattern):
    """Ask for measurable product outcomes."""

    id = "success-metrics-enforcer"
    name = "Success Metrics Enforcer"
    description = "Ensures measurable success metrics are defined"
    applicable_intents = _PRODUCT_INTENTS
    mode = PatternMode.DEEP
    priority = 7
    dimension = QualityDimension.SPECIFICITY

    _METRIC_RE = re.compile(
        r"\b(?:kpis?|metrics?|conversion rate|retention|nps|churn)\b|\d+(?:\.\d+)?\s*%",
        re.IGNORECASE,
    )
    _DOMAIN_METRICS = {
        "ecommerce": (
            "Checkout conversion rate (target: +X%)",
            "Cart abandonment rate",
            "Average order value",
        ),
        "saas": (
            "Weekly active users",
            "Trial-to-paid conversion",
            "Monthly churn rate",
        ),
        "content": (
            "Daily active readers",
            "Average time on page",
            "Posts published per week",
        ),
        "education": (
            "Course completion rate",
            "Weekly active learners",
            "Average assessment score",
        ),
    }
    _PERFORMANCE_METRICS = (
        "p95 response time (target: under X ms)",
        "Error rate per thousand requests",
    )
    _GENERIC_METRICS = (
        "Adoption: share of target users using it within 30 days",
        "Task success rate",
        "User satisfaction (CSAT or NPS)",
    )

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        source = self._user_text(text, context)
        if "## Success Metrics" in text or self._METRIC_RE.search(source):
            return self._skip(text, "Success metrics already defined")

        metrics: list[str] = []
        domain = _product_domain(source)
        if domain:
            metrics.extend(self._DOMAIN_METRICS[domain])
        if contains_any(source, ("performance", "speed", "latency", "slow", "load time")):
            metrics.extend(self._PERFORMANCE_METRICS)
        metrics.extend(self._GENERIC_METRICS)

        section = render_section(
            "Success Metrics",
            metrics[:8],
            intro="Define measurable targets for:",
        )
        return self._append(text, section, f"Added {min(len(metrics), 8)} measurable success metrics", Impact.HIGH)


class DependencyIdentifier(BasePattern):
    """List technical and external dependencies the work relies on."""

    id = "dependency-identifier"
    name = "Dependency Identifier"
    description = "Identifies technical and external dependencies"
    applicable_intents = frozenset(
        {
            Intent.PRD_GENERATION,
            Intent.PLANNING,
            Intent.CODE_GENERATION,
            Intent.MIGRATION,
        }
    )
    mode = PatternMode.DEEP
    priority = 5
    dimension = QualityDimension.COMPLETENESS

    _RULES: tuple[tuple[tuple[str, ...], str], ...] = (
        (DOMAINS["authentication"], "Authentication provider or identity service"),
        (DOMAINS["payments"], "Payment provider account and webhook endpoint"),
        (("email", "emails", "notifications?", "sms"), "Email or notification delivery service"),
        (DOMAINS["database"], "Database schema changes and migrations"),
        (("third-party", "external", "integrations?", "webhooks?"), "Availability and rate limits of external APIs"),
        (("uploads?", "images?", "attachments?", "storage"), "Object storage for uploaded files"),
        (("search",), "Search index or search service"),
        (("analytics", "tracking"), "Analytics or event tracking pipeline"),
        (("real-?time", "websockets?", "live updates?"), "Realtime transport (WebSockets or server-sent events)"),
    )

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        source = self._user_text(text, context)
        if "## Dependencies" in text or re.search(r"dependenc|depends on", source, re.IGNORECASE):
            return self._skip(text, "Dependencies already listed")

        items = unique(dependency for keywords, dependency in self._RULES if contains_any(source, keywords))
        if not items:
            return self._skip(text, "No dependencies detected")
        if context.intent.primary_intent in _PRODUCT_INTENTS:
            items.append("Sign-off from design and stakeholders")

        section = render_section(
            "Dependencies",
            items,
            intro="Confirm these are available or planned:",
        )
        return self._append(text, section, f"Identified {len(items)} dependencies")
