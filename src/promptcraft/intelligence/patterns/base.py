"""Pattern contract and the shared helper base class."""

from __future__ import annotations

from typing import ClassVar, Protocol

from promptcraft.intelligence.types import (
    ALL_INTENTS,
    Impact,
    Improvement,
    Intent,
    PatternContext,
    PatternMode,
    PatternResult,
    QualityDimension,
)


class Pattern(Protocol):
    """A single prompt transformation rule."""

    id: str
    name: str
    description: str
    applicable_intents: frozenset[Intent]
    mode: PatternMode
    priority: int

    def is_applicable(self, context: PatternContext) -> bool:
        ...

    def apply(self, text: str, context: PatternContext) -> PatternResult:
        ...


class BasePattern:
    """Shallow base for the built-in patterns.

    Subclasses declare their metadata as class attributes and implement
    ``_enhance``. Patterns only ever append a section to the text they are
    given, so an applied result always starts with the input verbatim.
    """

    id: ClassVar[str] = ""
    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    applicable_intents: ClassVar[frozenset[Intent]] = ALL_INTENTS
    mode: ClassVar[PatternMode] = PatternMode.BOTH
    priority: ClassVar[int] = 5
    dimension: ClassVar[QualityDimension] = QualityDimension.COMPLETENESS

    def is_applicable(self, context: PatternContext) -> bool:
        """Static gate on mode and primary intent."""
        return (
            self.mode.includes(context.mode)
            and context.intent.primary_intent in self.applicable_intents
        )

    def apply(self, text: str, context: PatternContext) -> PatternResult:
        """Append this pattern's section to ``text`` when it adds something.

        Args:
            text: Current, possibly already enhanced, prompt.
            context: Per-run context shared by every pattern.

        Returns:
            PatternResult; unchanged text with ``applied=False`` when the
            concern is already covered or nothing useful can be added.
        """

        if not text.strip():
            return self._skip(text, "Empty prompt")
        return self._enhance(text, context)

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        raise NotImplementedError

    @staticmethod
    def _user_text(text: str, context: PatternContext) -> str:
        """Return the caller's own prompt when ``text`` extends it, else ``text``.

        Content-extracting patterns read this so they never quote sections
        appended earlier in the same run.
        """

        original = context.original_prompt
        if original.strip() and text.startswith(original):
            return original
        return text

    def _skip(self, text: str, reason: str) -> PatternResult:
        return PatternResult(
            enhanced_prompt=text,
            improvement=Improvement(self.dimension, reason, Impact.LOW),
            applied=False,
        )

    def _append(
        self,
        text: str,
        section: str,
        description: str,
        impact: Impact = Impact.MEDIUM,
    ) -> PatternResult:
        return PatternResult(
            enhanced_prompt=text + section,
            improvement=Improvement(self.dimension, description, impact),
            applied=True,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r} priority={self.priority}>"
