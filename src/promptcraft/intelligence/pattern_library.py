"""Registry of patterns and the selection rule for a pipeline run."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from promptcraft.intelligence.patterns import Pattern, default_patterns
from promptcraft.intelligence.types import IntentAnalysis, Mode, PatternContext

logger = logging.getLogger(__name__)


class PatternLibrary:
    """Owns pattern instances and picks the ordered subset for a run.

    Patterns are kept in registration order; selection sorts by descending
    priority with a stable sort, so registration order breaks ties. Priority
    overrides replace a pattern's own priority for ordering only; pattern
    instances are never modified.
    """

    def __init__(
        self,
        patterns: Iterable[Pattern] | None = None,
        disabled: Iterable[str] = (),
        priority_overrides: Mapping[str, int] | None = None,
    ) -> None:
        """Initialize the library.

        Args:
            patterns: Patterns to register; the built-in set when None.
            disabled: Pattern ids excluded from selection and introspection.
            priority_overrides: Pattern id to priority, each within 1-10.

        Raises:
            ValueError: If an override is outside 1-10.
        """
        self._patterns: dict[str, Pattern] = {}
        self._disabled = frozenset(disabled)
        self._priorities = dict(priority_overrides or {})
        for pattern_id, priority in self._priorities.items():
            if not 1 <= priority <= 10:
                raise ValueError(
                    f"Priority for {pattern_id} must be between 1 and 10, got {priority}"
                )
        for pattern in default_patterns() if patterns is None else patterns:
            self.register(pattern)

        unknown = self._disabled - self._patterns.keys()
        if unknown:
            logger.warning(f"Unknown pattern ids disabled: {', '.join(sorted(unknown))}")
        unknown = self._priorities.keys() - self._patterns.keys()
        if unknown:
            logger.warning(
                f"Unknown pattern ids in priority overrides: {', '.join(sorted(unknown))}"
            )

    def register(self, pattern: Pattern) -> None:
        """Add a pattern.

        Raises:
            ValueError: If a pattern with the same id is already registered.
        """
        if pattern.id in self._patterns:
            raise ValueError(f"Pattern already registered: {pattern.id}")
        self._patterns[pattern.id] = pattern

    def get(self, pattern_id: str) -> Pattern | None:
        """Return the pattern with ``pattern_id``, or None if unknown or disabled."""
        if pattern_id in self._disabled:
            return None
        return self._patterns.get(pattern_id)

    def select_patterns(self, intent: IntentAnalysis, mode: Mode) -> list[Pattern]:
        """Return the patterns eligible for ``intent`` in ``mode``.

        A pattern is eligible when its mode matches, the primary intent is
        in its applicable intents and its own ``is_applicable`` gate agrees.

        Args:
            intent: Result of intent detection.
            mode: Requested optimization mode.

        Returns:
            Eligible patterns, highest priority first.
        """

        context = PatternContext(mode=mode, original_prompt="", intent=intent)
        selected = [
            pattern
            for pattern in self._enabled()
            if pattern.mode.includes(mode)
            and intent.primary_intent in pattern.applicable_intents
            and pattern.is_applicable(context)
        ]
        return sorted(selected, key=lambda pattern: -self.priority_of(pattern))

    def priority_of(self, pattern: Pattern) -> int:
        """Return the priority used to order ``pattern``, honouring overrides."""
        return self._priorities.get(pattern.id, pattern.priority)

    def get_all_patterns(self) -> list[Pattern]:
        return list(self._enabled())

    def get_patterns_by_scope(self, mode: Mode) -> list[Pattern]:
        """Return enabled patterns that can run in ``mode``."""
        return [pattern for pattern in self._enabled() if pattern.mode.includes(mode)]

    def get_pattern_count(self) -> int:
        return sum(1 for _ in self._enabled())

    def _enabled(self) -> Iterable[Pattern]:
        return (
            pattern
            for pattern_id, pattern in self._patterns.items()
            if pattern_id not in self._disabled
        )
