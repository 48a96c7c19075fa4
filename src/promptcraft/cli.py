"""Command-line interface for Promptcraft."""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence

from promptcraft.config import Config
from promptcraft.intelligence import (
    DetailedRecommendation,
    Mode,
    OptimizationResult,
    PatternStatistics,
    PromptOptimizer,
    QualityDimension,
)

LOGGER_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def render_result(
    result: OptimizationResult, recommendation: str | None, verbose: bool = False
) -> list[str]:
    """Render an optimization result as printable lines.

    Args:
        result: Completed optimization.
        recommendation: Advisory message, if any.
        verbose: Include one line per applied pattern.

    Returns:
        Lines to print, without trailing newlines.
    """
    quality = result.quality
    lines = [
        result.enhanced,
        "",
        f"Intent: {result.intent.primary_intent.value} "
        f"(confidence {result.intent.confidence}%)",
        f"Mode: {result.mode.value}",
        "Quality:",
    ]
    for dimension in QualityDimension:
        lines.append(f"  {dimension.value:<14} {getattr(quality, dimension.value):>3}")
    lines.append(f"  {'overall':<14} {quality.overall:>3}")
    if quality.strengths:
        lines.append(f"Strengths: {', '.join(quality.strengths)}")

    lines.append(
        f"Patterns applied: {len(result.applied_patterns)} "
        f"({result.processing_time_ms:.1f}ms)"
    )
    if verbose:
        for summary, improvement in zip(result.applied_patterns, result.improvements):
            lines.append(f"  - {summary.name} [{summary.impact.value}]: {improvement.description}")

    if recommendation:
        lines.extend(["", recommendation])
    return lines


def render_recommendation_detail(detail: DetailedRecommendation) -> list[str]:
    """Render the quality band and, when present, the escalation breakdown."""
    lines = [f"Quality level: {detail.quality_level.value}"]
    escalation = detail.escalation
    if escalation is not None:
        lines.append(
            f"Escalation score: {escalation.score} ({escalation.confidence} confidence)"
        )
        for reason in escalation.reasons:
            lines.append(f"  - {reason.factor} +{reason.contribution}: {reason.description}")
    return lines


def render_statistics(stats: PatternStatistics) -> list[str]:
    return [
        f"Patterns: {stats.total_patterns} total",
        f"  fast: {stats.fast_patterns}",
        f"  deep: {stats.deep_patterns}",
    ]


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for prompt optimization."""
    parser = argparse.ArgumentParser(
        prog="promptcraft",
        description="Optimize a prompt with rule-based enhancement patterns",
    )
    parser.add_argument(
        "prompt",
        nargs="?",
        help="Prompt text to optimize",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in Mode],
        help="Optimization mode (default: PROMPTCRAFT_MODE or fast)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print pattern counts per mode",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging and list applied patterns",
    )

    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
    except ValueError as e:
        parser.error(f"Configuration error: {e}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level),
        format=LOGGER_FORMAT,
    )

    optimizer = PromptOptimizer.from_config(config)

    if args.stats:
        for line in render_statistics(optimizer.get_statistics()):
            print(line)
        if args.prompt is None:
            return
        print()

    if args.prompt is None or not args.prompt.strip():
        parser.error("prompt must not be blank")

    mode = Mode(args.mode) if args.mode else config.default_mode
    result = asyncio.run(optimizer.optimize(args.prompt, mode))
    if args.verbose:
        detail = optimizer.get_detailed_recommendation(result)
        lines = render_result(result, None, verbose=True)
        lines.extend(render_recommendation_detail(detail))
        lines.extend(["", detail.message])
    else:
        lines = render_result(result, optimizer.get_recommendation(result))

    for line in lines:
        print(line)


if __name__ == "__main__":
    main()
