"""Tests for PRD and product planning patterns."""

from promptcraft.intelligence import Impact, Intent, Mode
from promptcraft.intelligence.patterns import (
    DependencyIdentifier,
    PRDStructureEnforcer,
    RequirementPrioritizer,
    SuccessMetricsEnforcer,
    UserPersonaEnricher,
)


def test_prd_structure_enforcer_reports_coverage(make_context) -> None:
    text = "Create a PRD for an online store"
    result = PRDStructureEnforcer().apply(
        text, make_context(text, Mode.DEEP, intent=Intent.PRD_GENERATION)
    )

    assert result.applied
    enhanced = result.enhanced_prompt
    assert "## PRD Completeness Check" in enhanced
    assert "Current coverage: 0% (0/8 sections)" in enhanced
    assert "- **Problem Statement**: What problem does this solve, and for whom?" in enhanced
    assert "### PRD Best Practices" in enhanced
    assert result.improvement.description == "Checked 8 PRD sections, 8 missing"
    assert result.improvement.impact is Impact.HIGH


def test_prd_structure_enforcer_lists_weak_sections(make_context) -> None:
    text = "Write a PRD. The problem is slow checkout for customers and users."
    result = PRDStructureEnforcer().apply(
        text, make_context(text, Mode.DEEP, intent=Intent.PRD_GENERATION)
    )

    assert "Current coverage: 25% (2/8 sections)" in result.enhanced_prompt
    assert (
        "These sections are mentioned but could be expanded:\n- Problem Statement"
        in result.enhanced_prompt
    )


def test_prd_structure_enforcer_skips_complete_prd(make_context) -> None:
    text = (
        "Problem: users struggle. Goals and metrics defined. Requirements listed. "
        "Scope set. Constraints noted. Timeline fixed. Risks tracked."
    )
    result = PRDStructureEnforcer().apply(
        text, make_context(text, Mode.DEEP, intent=Intent.PRD_GENERATION)
    )

    assert not result.applied


def test_requirement_prioritizer_buckets(make_context) -> None:
    text = (
        "Users must be able to sign in. It should support dark mode. "
        "It would be nice to include CSV export later."
    )
    result = RequirementPrioritizer().apply(
        text, make_context(text, Mode.DEEP, intent=Intent.PLANNING)
    )

    assert result.applied
    enhanced = result.enhanced_prompt
    assert "**Must have:**\n- Users must be able to sign in." in enhanced
    assert "**Should have:**\n- It should support dark mode." in enhanced
    assert "**Nice to have:**\n- It would be nice to include CSV export later." in enhanced
    assert result.improvement.description == "Prioritized 3 requirements"


def test_requirement_prioritizer_skips_prioritized_list(make_context) -> None:
    text = "List the must-have features for launch"
    result = RequirementPrioritizer().apply(
        text, make_context(text, Mode.DEEP, intent=Intent.PLANNING)
    )

    assert not result.applied


def test_user_persona_enricher_uses_product_domain(make_context) -> None:
    text = "Plan an online store with a cart"
    result = UserPersonaEnricher().apply(text, make_context(text, Mode.DEEP, intent=Intent.PLANNING))

    assert result.applied
    assert "## Target Users & Personas" in result.enhanced_prompt
    assert "- Shopper on mobile who wants a quick checkout" in result.enhanced_prompt


def test_user_persona_enricher_default_personas(make_context) -> None:
    text = "Plan the internal tooling roadmap"
    result = UserPersonaEnricher().apply(text, make_context(text, Mode.DEEP, intent=Intent.PLANNING))

    assert "- Primary user who performs the core task every day" in result.enhanced_prompt


def test_user_persona_enricher_skips_described_audience(make_context) -> None:
    text = "Plan a scheduling tool. Our target audience is nurses."
    result = UserPersonaEnricher().apply(text, make_context(text, Mode.DEEP, intent=Intent.PLANNING))

    assert not result.applied


def test_success_metrics_enforcer(make_context) -> None:
    text = "Create a PRD for a SaaS dashboard"
    result = SuccessMetricsEnforcer().apply(
        text, make_context(text, Mode.DEEP, intent=Intent.PRD_GENERATION)
    )

    assert result.applied
    assert "## Success Metrics" in result.enhanced_prompt
    assert "- Weekly active users" in result.enhanced_prompt
    assert result.improvement.description == "Added 6 measurable success metrics"


def test_success_metrics_enforcer_skips_measurable_prompt(make_context) -> None:
    text = "Create a PRD that grows retention by 5%"
    result = SuccessMetricsEnforcer().apply(
        text, make_context(text, Mode.DEEP, intent=Intent.PRD_GENERATION)
    )

    assert not result.applied


def test_dependency_identifier(make_context) -> None:
    text = "Plan a checkout flow with email receipts"
    result = DependencyIdentifier().apply(text, make_context(text, Mode.DEEP, intent=Intent.PLANNING))

    assert result.applied
    enhanced = result.enhanced_prompt
    assert "- Payment provider account and webhook endpoint" in enhanced
    assert "- Email or notification delivery service" in enhanced
    assert "- Sign-off from design and stakeholders" in enhanced
    assert result.improvement.description == "Identified 3 dependencies"


def test_dependency_identifier_skips_without_dependencies(make_context) -> None:
    text = "Build a calculator"
    result = DependencyIdentifier().apply(
        text, make_context(text, Mode.DEEP, intent=Intent.CODE_GENERATION)
    )

    assert not result.applied
