"""Patterns that fill in missing context, assumptions and boundaries."""

from __future__ import annotations

import re

from promptcraft.intelligence.patterns.base import BasePattern
from promptcraft.intelligence.patterns.vocabulary import (
    DATABASES,
    DOMAINS,
    FRAMEWORKS,
    LANGUAGES,
    TECH_STACK,
    TEST_FRAMEWORKS,
    VERSION_RE,
)
from promptcraft.intelligence.quality_assessor import missing_requirements
from promptcraft.intelligence.text_utils import (
    contains_any,
    contains_phrase,
    first_sentence,
    render_section,
    unique,
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


def _detected_domains(text: str) -> list[str]:
    return [domain for domain, keywords in DOMAINS.items() if contains_any(text, keywords)]


class CompletenessValidator(BasePattern):
    """Ask for the elements an intent normally needs but the prompt lacks."""

    id = "completeness-validator"
    name = "Completeness Validator"
    description = "Lists missing intent-specific details"
    applicable_intents = ALL_INTENTS
    mode = PatternMode.BOTH
    priority = 6
    dimension = QualityDimension.COMPLETENESS

    QUESTIONS = {
        "objective": "**Objective**: what should the result achieve?",
        "tech-stack": "**Tech stack**: which language and framework?",
        "inputs-outputs": "**Inputs and outputs**: what goes in and what comes out?",
        "edge-cases": "**Unusual inputs**: how should empty, missing or malformed values behave?",
        "problem-statement": "**Problem**: what is wrong or missing today?",
        "goals": "**Goals**: what should be true once this is done?",
        "constraints": "**Constraints**: limits on budget, tools or approach",
        "timeline": "**Timeline**: deadlines or milestones",
        "current-state": "**Current state**: how does it work today?",
        "desired-improvement": "**Desired improvement**: what should get better?",
        "metrics": "**Metrics**: how will the improvement be measured?",
        "error-message": "**Error message**: the exact text and stack trace",
        "expected-behavior": "**Expected behaviour**: what should happen?",
        "actual-behavior": "**Actual behaviour**: what happens instead?",
        "reproduction-steps": "**Reproduction steps**: how to trigger the problem",
        "audience": "**Audience**: who will read this?",
        "scope": "**Scope**: which parts need covering?",
        "format": "**Format**: README, docstrings, wiki page or another format?",
        "examples-needed": "**Examples**: which examples should be included?",
        "product-vision": "**Vision**: why build this product at all?",
        "user-personas": "**Users**: who is it for?",
        "features": "**Features**: what must it do?",
        "success-metrics": "**Success metrics**: which numbers show it worked?",
        "test-type": "**Test type**: unit, integration or end-to-end?",
        "coverage-scope": "**Coverage**: which code is under test?",
        "mocking-needs": "**Test doubles**: what needs mocking or stubbing?",
        "source-version": "**Source**: what is being migrated from?",
        "target-version": "**Target**: which version or platform is the destination?",
        "data-considerations": "**Data**: what stored data is affected?",
        "breaking-changes": "**Breaking changes**: which incompatibilities are known?",
        "threat-model": "**Threat model**: which attackers and risks matter?",
        "compliance-requirements": "**Compliance**: OWASP, GDPR, PCI or other standards?",
        "known-issues": "**Known issues**: previous incidents or reported weaknesses",
        "current-knowledge": "**Background**: what do you already know?",
        "learning-goal": "**Learning goal**: what should you be able to do afterwards?",
        "preferred-depth": "**Depth**: a quick overview or an in-depth treatment?",
        "context": "**Context**: what are you working on that needs this?",
        "conversation-context": "**Conversation**: which discussion is being summarized?",
        "key-requirements": "**Key requirements**: which needs were agreed?",
        "success-criteria": "**Success criteria**: how will the outcome be checked?",
    }

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        missing = missing_requirements(text, context.intent.primary_intent)
        if not missing:
            return self._skip(text, "All intent-specific details present")

        section = render_section(
            "Missing Details",
            [self.QUESTIONS[name] for name in missing],
            intro="Fill in these details:",
        )
        return self._append(
            text,
            section,
            f"Identified {len(missing)} missing details",
            Impact.HIGH if len(missing) >= 3 else Impact.MEDIUM,
        )


class TechnicalContextEnricher(BasePattern):
    """Ask for runtime, versions, conventions and performance limits."""

    id = "technical-context-enricher"
    name = "Technical Context Enricher"
    description = "Adds the technical constraints the answer has to respect"
    applicable_intents = frozenset(
        {
            Intent.CODE_GENERATION,
            Intent.REFINEMENT,
            Intent.DEBUGGING,
            Intent.MIGRATION,
            Intent.TESTING,
        }
    )
    mode = PatternMode.BOTH
    priority = 5
    dimension = QualityDimension.SPECIFICITY

    _RUNTIME_TERMS = (
        "environment",
        "browser",
        "server",
        "serverless",
        "runtime",
        "docker",
        "cloud",
        "aws",
        "linux",
        "cli",
    )
    _CONVENTION_TERMS = ("conventions?", "style guide", "lint", "eslint", "prettier", "pep ?8", "black", "ruff")
    _PERFORMANCE_TERMS = ("performance", "latency", "memory", "throughput", r"\d+\s?ms")

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if "## Technical Context" in text:
            return self._skip(text, "Technical context already requested")

        items: list[str] = []
        if not contains_any(text, TECH_STACK) and "**Tech stack**" not in text:
            items.append("Language and framework, with versions")
        if not VERSION_RE.search(text):
            items.append("Versions of the key dependencies")
        if not contains_any(text, self._RUNTIME_TERMS):
            items.append("Target runtime: browser, server, serverless or CLI")
        if not contains_any(text, self._CONVENTION_TERMS):
            items.append("Coding conventions: lint rules, formatting and architecture patterns")
        if not contains_any(text, self._PERFORMANCE_TERMS):
            items.append("Performance limits such as latency or memory budgets")
        if contains_any(text, DOMAINS["database"]) and not contains_any(text, DATABASES):
            items.append("Database engine and version")

        if len(items) < 2:
            return self._skip(text, "Technical context already sufficient")

        section = render_section(
            "Technical Context",
            items,
            intro="State these technical constraints:",
        )
        return self._append(text, section, f"Requested {len(items)} technical constraints")


class DomainContextEnricher(BasePattern):
    """Add well-known best practices for the domains a prompt touches."""

    id = "domain-context-enricher"
    name = "Domain Context Enricher"
    description = "Adds domain-specific best practices"
    applicable_intents = frozenset(
        {
            Intent.CODE_GENERATION,
            Intent.DEBUGGING,
            Intent.TESTING,
            Intent.SECURITY_REVIEW,
            Intent.REFINEMENT,
            Intent.PLANNING,
        }
    )
    mode = PatternMode.BOTH
    priority = 5
    dimension = QualityDimension.COMPLETENESS

    _PRACTICES = {
        "authentication": (
            "Hash passwords with bcrypt or argon2 and never store them in plain text",
            "Expire sessions and rotate tokens after login",
            "Rate-limit login attempts",
        ),
        "api": (
            "Return consistent response shapes with meaningful status codes",
            "Check request bodies and parameters at the boundary",
            "Version the API and document every endpoint",
        ),
        "database": (
            "Use parameterized queries to prevent SQL injection",
            "Add an index for each frequent lookup",
            "Wrap multi-step writes in a transaction",
        ),
        "frontend": (
            "Use semantic HTML and meet accessibility guidelines",
            "Keep layouts responsive across screen sizes",
            "Show loading and empty states",
        ),
        "testing": (
            "Follow Arrange-Act-Assert (AAA) in each test",
            "Keep tests isolated with no shared state",
            "Aim coverage at behaviour rather than lines",
        ),
        "payments": (
            "Never store raw card data; rely on the provider's tokens (PCI DSS)",
            "Make charge requests idempotent",
            "Reconcile payment webhooks with order state",
        ),
    }
    _MAX_DOMAINS = 3

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if contains_phrase(text, ("best practice",)):
            return self._skip(text, "Best practices already referenced")

        domains = _detected_domains(self._user_text(text, context))[: self._MAX_DOMAINS]
        if not domains:
            return self._skip(text, "No specific domain detected")

        lines = ["", "", "## Domain Best Practices"]
        for domain in domains:
            lines.extend(["", f"### {domain.title() if domain != 'api' else 'API'}", ""])
            lines.extend(f"- {practice}" for practice in self._PRACTICES[domain])
        return self._append(
            text,
            "\n".join(lines),
            f"Added best practices for {', '.join(domains)}",
        )


class AssumptionExplicitizer(BasePattern):
    """Surface the defaults an assistant would silently pick."""

    id = "assumption-explicitizer"
    name = "Assumption Explicitizer"
    description = "Makes implicit assumptions explicit so they can be confirmed"
    applicable_intents = frozenset(
        {
            Intent.CODE_GENERATION,
            Intent.PLANNING,
            Intent.MIGRATION,
            Intent.TESTING,
            Intent.DEBUGGING,
            Intent.PRD_GENERATION,
        }
    )
    mode = PatternMode.DEEP
    priority = 6
    dimension = QualityDimension.CLARITY

    _FRONTEND = ("ui", "components?", "frontend", "pages?", "forms?")
    _CODE_NOUNS = ("functions?", "class(?:es)?", "methods?", "scripts?", "modules?", "services?", "components?", "api", "endpoints?")
    _NETWORK = ("api", "fetch", "calls?", "requests?", "http", "network")
    _TIMELINE = ("weeks?", "months?", "sprints?", "deadline", "timeline", "quarter")

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if re.search(r"assum", text, re.IGNORECASE):
            return self._skip(text, "Assumptions already stated")

        source = self._user_text(text, context)
        intent = context.intent.primary_intent
        assumptions: list[str] = []
        if contains_any(source, self._FRONTEND) and not contains_any(source, FRAMEWORKS):
            assumptions.append("Frontend framework is React; name another if not")
        if contains_any(source, self._CODE_NOUNS) and not contains_any(source, tuple(re.escape(k) for k in LANGUAGES)):
            assumptions.append("Language is TypeScript/JavaScript unless stated otherwise")
        if contains_any(source, DOMAINS["database"]) and not contains_any(source, DATABASES):
            assumptions.append("Database technology is PostgreSQL; confirm the actual engine")
        if contains_any(source, ("api", "services?", "endpoints?")) and not contains_any(
            source, ("errors?", "throws?", "exceptions?")
        ):
            assumptions.append("Failures are reported by throwing errors rather than returning null")
        if contains_any(source, self._NETWORK):
            assumptions.append("Network calls are async (async/await with promises)")
        if contains_any(source, ("state",)):
            assumptions.append("State management uses React Context; Redux only for complex global state")
        if intent in (Intent.PLANNING, Intent.PRD_GENERATION):
            if not contains_any(source, ("team", "developers?", "engineers?", "people")):
                assumptions.append("A small team of 1-3 developers does the work")
            if not contains_any(source, self._TIMELINE):
                assumptions.append("Timeline is a few weeks, delivered incrementally")
        if intent is Intent.TESTING and not contains_any(source, TEST_FRAMEWORKS):
            assumptions.append("Tests use Jest for TypeScript/JavaScript or pytest for Python")
        if intent is Intent.MIGRATION and not contains_any(source, ("downtime",)):
            assumptions.append("Some downtime during the cutover is acceptable")

        if not assumptions:
            return self._skip(text, "No implicit assumptions detected")

        section = render_section(
            "Implicit Assumptions",
            assumptions[:8],
            intro="Confirm or correct these assumptions before starting:",
        )
        return self._append(
            text,
            section,
            f"Made {len(assumptions)} implicit assumptions explicit",
            Impact.HIGH if len(assumptions) >= 3 else Impact.MEDIUM,
        )


class PrerequisiteIdentifier(BasePattern):
    """List what must be in place before work can start."""

    id = "prerequisite-identifier"
    name = "Prerequisite Identifier"
    description = "Identifies prerequisites implied by the technologies involved"
    applicable_intents = frozenset(
        {
            Intent.CODE_GENERATION,
            Intent.PLANNING,
            Intent.MIGRATION,
            Intent.TESTING,
            Intent.DEBUGGING,
        }
    )
    mode = PatternMode.DEEP
    priority = 6
    dimension = QualityDimension.COMPLETENESS

    _INDICATORS = (
        "prerequisite",
        "requirements:",
        "depends on",
        "before starting",
        "assuming",
        "make sure you have",
    )
    _TECHNOLOGIES: tuple[tuple[re.Pattern[str], tuple[str, ...]], ...] = (
        (
            re.compile(r"\b(?:react|jsx|tsx|use(?:State|Effect|Memo|Callback|Ref|Context))\b", re.IGNORECASE),
            ("Node.js and npm installed", "A React project scaffolded with Vite or Next.js"),
        ),
        (
            re.compile(r"\b(?:node(?:\.js)?|express|npm|nestjs)\b", re.IGNORECASE),
            ("Node.js (LTS) installed", "package.json initialized with npm"),
        ),
        (
            re.compile(r"\btypescript\b", re.IGNORECASE),
            ("TypeScript configured with a tsconfig.json",),
        ),
        (
            re.compile(r"\b(?:python|django|flask|fastapi|pip)\b", re.IGNORECASE),
            ("Python 3 with a virtual environment", "Dependencies pinned in requirements or pyproject"),
        ),
        (
            re.compile(r"\b(?:database|db|sql|postgres(?:ql)?|mysql|mongo(?:db)?|prisma)\b", re.IGNORECASE),
            (
                "A running database instance reachable from the application",
                "Connection credentials available as environment variables",
            ),
        ),
        (
            re.compile(r"\b(?:docker|containers?|kubernetes|k8s)\b", re.IGNORECASE),
            ("Docker installed and running",),
        ),
        (
            re.compile(r"\b(?:stripe|openai|twilio|aws|firebase|sendgrid)\b", re.IGNORECASE),
            ("API keys for the third-party services",),
        ),
    )

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if contains_phrase(text, self._INDICATORS):
            return self._skip(text, "Prerequisites already stated")

        source = self._user_text(text, context)
        items: list[str] = []
        for regex, prerequisites in self._TECHNOLOGIES:
            if regex.search(source):
                items.extend(prerequisites)
        if context.intent.primary_intent is Intent.TESTING:
            items.append("The test runner installed and configured")

        items = unique(items)
        if not items:
            return self._skip(text, "No technology-specific prerequisites detected")

        section = render_section("Prerequisites", items[:8], intro="Have these in place first:")
        return self._append(text, section, f"Identified {len(items)} prerequisites")


class ScopeDefiner(BasePattern):
    """Draw explicit in-scope and out-of-scope lines."""

    id = "scope-definer"
    name = "Scope Definer"
    description = "Add explicit scope boundaries to prevent scope creep"
    applicable_intents = frozenset(
        {
            Intent.CODE_GENERATION,
            Intent.PLANNING,
            Intent.PRD_GENERATION,
            Intent.MIGRATION,
            Intent.DOCUMENTATION,
        }
    )
    mode = PatternMode.DEEP
    priority = 5
    dimension = QualityDimension.STRUCTURE

    _INDICATORS = (
        "out of scope",
        "not included",
        "in scope",
        "scope:",
        "will not",
        "won't",
        "excluded",
        "non-goal",
    )
    _OUT_OF_SCOPE = {
        Intent.CODE_GENERATION: (
            "Deployment and infrastructure changes",
            "Refactoring unrelated code",
            "Functionality not named above",
        ),
        Intent.PLANNING: (
            "Implementation details below the milestone level",
            "Staffing and budget decisions",
        ),
        Intent.PRD_GENERATION: (
            "Technical design and implementation",
            "Pricing and go-to-market planning",
        ),
        Intent.MIGRATION: (
            "New functionality during the migration",
            "Unrelated dependency upgrades",
        ),
        Intent.DOCUMENTATION: (
            "Internal implementation details not exposed to readers",
            "Changelog history",
        ),
    }
    _BOUNDARIES = (
        "Only change files related to this request",
        "Keep existing public interfaces backward compatible",
        "Ask before adding new dependencies",
    )

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if contains_phrase(text, self._INDICATORS):
            return self._skip(text, "Scope already defined")

        source = self._user_text(text, context)
        subject = first_sentence(source, limit=120)
        if not subject:
            return self._skip(text, "No request to scope")

        in_scope = [subject]
        in_scope += [f"The {domain} work named in the request" for domain in _detected_domains(source)]

        lines = ["", "", "## Scope Definition", "", "**In Scope:**"]
        lines.extend(f"- {item}" for item in in_scope[:4])
        lines.extend(["", "**Out of Scope:**"])
        lines.extend(f"- {item}" for item in self._OUT_OF_SCOPE[context.intent.primary_intent])
        lines.extend(["", "**Boundaries:**"])
        lines.extend(f"- {item}" for item in self._BOUNDARIES)
        return self._append(text, "\n".join(lines), "Added explicit scope boundaries")
