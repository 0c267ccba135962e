"""Render selected durations into localized text.

Compact and short styles need a duration-only phrase ("2 days", "2d") while
many locale primitives only produce relative phrases ("in 2 days"). The
renderer tries an ordered chain of strategies and takes the first result:

1. NativeDuration      - a dedicated duration formatter, when available
2. OverrideTemplate    - curated per-language templates (narrow width)
3. UnitExtraction      - template derived from a unit formatter (narrow width)
4. RelativeExtraction  - LCS of "+n"/"-n" relative renderings of a numeric
                         stand-in when the real magnitude renders as a word

When every strategy declines, the LCS of the magnitude's own relative
renderings is used, directional leftovers included.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from typing_extensions import override

from humandelta.backend import BabelBackend, LocaleBackend
from humandelta.duration import Duration, Part, Style, Unit, Width
from humandelta.lcs import longest_common_substring
from humandelta.overrides import OVERRIDES, OverrideTable, Template

logger = logging.getLogger(__name__)

# Stand-in magnitudes tried, in order, when a magnitude renders as a word.
# A candidate whose "+n" and "-n" renderings match (zero) is passed over.
CANDIDATES = (1, 0, 2, 3, 4, 5, 6, 10, 20, 21, 100)

_WIDTHS: dict[Style, Width] = {
    "compact": "narrow",
    "short": "short",
    "long": "long",
    "longer": "long",
}

# Failures a strategy may hit inside locale primitives before falling through
_FALLTHROUGH = (NotImplementedError, LookupError, ValueError)


def _integer(parts: Sequence[Part]) -> str | None:
    return next((p.value for p in parts if p.type == "integer"), None)


class Strategy(ABC):
    """One way of producing a duration-only phrase for a single unit."""

    def __init__(self, backend: LocaleBackend):
        self.backend: LocaleBackend = backend

    @abstractmethod
    def render(self, duration: Duration, width: Width, locale: str) -> str | None:
        """Return the unsigned phrase, or None to defer to the next strategy."""
        pass

    @property
    def name(self) -> str:
        return type(self).__name__


class NativeDuration(Strategy):
    @override
    def render(self, duration: Duration, width: Width, locale: str) -> str | None:
        if not self.backend.capabilities.duration_format:
            return None
        return self.backend.format_duration(
            locale, {duration.field: duration.magnitude}, width
        )


class OverrideTemplate(Strategy):
    def __init__(self, backend: LocaleBackend, overrides: OverrideTable):
        super().__init__(backend)
        self.overrides: OverrideTable = overrides

    @override
    def render(self, duration: Duration, width: Width, locale: str) -> str | None:
        if width != "narrow":
            return None
        template = self.overrides.lookup(self.backend.language(locale), duration.unit)
        if template is None:
            return None
        return template.fill(self.backend.format_number(locale, duration.magnitude))


class UnitExtraction(Strategy):
    """Derive a template by formatting 1 with a narrow unit formatter."""

    def __init__(self, backend: LocaleBackend):
        super().__init__(backend)
        self._templates: dict[tuple[str, Unit], Template | None] = {}

    def template(self, locale: str, unit: Unit) -> Template | None:
        key = (locale, unit)
        if key not in self._templates:
            self._templates[key] = self._derive(locale, unit)
        return self._templates[key]

    def _derive(self, locale: str, unit: Unit) -> Template | None:
        try:
            parts = self.backend.format_unit_to_parts(locale, 1, unit, "narrow")
        except _FALLTHROUGH as exc:
            logger.debug("No unit template for %s/%s: %s", locale, unit, exc)
            return None

        prefix: list[str] = []
        suffix: list[str] = []
        found = False
        for part in parts:
            if part.type == "integer" and not found:
                found = True
            elif found:
                suffix.append(part.value)
            else:
                prefix.append(part.value)
        if not found:
            return None
        return Template(prefix="".join(prefix), suffix="".join(suffix))

    @override
    def render(self, duration: Duration, width: Width, locale: str) -> str | None:
        if width != "narrow" or not self.backend.capabilities.unit_parts:
            return None
        template = self.template(locale, duration.unit)
        if template is None:
            return None
        return template.fill(self.backend.format_number(locale, duration.magnitude))


class RelativeExtraction(Strategy):
    """Recover a numeric phrase when the magnitude renders idiomatically.

    E.g. Hebrew renders 2 days as "בעוד יומיים" (no digits). A stand-in
    sharing the magnitude's plural category that does render with digits is
    formatted in both directions; the common substring is the bare duration,
    whose digits are then swapped for the real magnitude.
    """

    @override
    def render(self, duration: Duration, width: Width, locale: str) -> str | None:
        caps = self.backend.capabilities
        if not (caps.relative_parts and caps.plural_rules):
            return None
        magnitude, unit = duration.magnitude, duration.unit
        # Digits already present: the plain two-sided LCS handles it. Zero
        # always needs a stand-in since "+0" and "-0" render alike.
        if magnitude and self._digits(locale, magnitude, unit, width) is not None:
            return None

        found = self.stand_in(locale, magnitude, unit, width)
        if found is None:
            return None
        stand_in, stand_in_digits = found
        logger.debug(
            "Using stand-in %d for %d %s in %s", stand_in, magnitude, unit, locale
        )

        extracted = longest_common_substring(
            self.backend.format_relative(locale, stand_in, unit, width),
            self.backend.format_relative(locale, -stand_in, unit, width),
        ).strip()
        digits = self.backend.format_number(locale, magnitude)
        return extracted.replace(stand_in_digits, digits, 1)

    def stand_in(
        self, locale: str, magnitude: int, unit: Unit, width: Width
    ) -> tuple[int, str] | None:
        """First usable candidate and its rendered digits.

        A candidate is usable when it renders with digits and its two
        directions differ. Candidates in the plural category of ``magnitude``
        are preferred, then ``other``, then any.
        """
        category = self.backend.plural_category(locale, magnitude)
        for wanted in (category, "other", None):
            for candidate in CANDIDATES:
                if (
                    wanted is not None
                    and self.backend.plural_category(locale, candidate) != wanted
                ):
                    continue
                digits = self._digits(locale, candidate, unit, width)
                if digits is None:
                    continue
                if self._directionless(locale, candidate, unit, width):
                    continue
                return candidate, digits
        return None

    def _digits(self, locale: str, value: int, unit: Unit, width: Width) -> str | None:
        parts = self.backend.format_relative_to_parts(locale, value, unit, width)
        return _integer(parts)

    def _directionless(self, locale: str, value: int, unit: Unit, width: Width) -> bool:
        forward = self.backend.format_relative(locale, value, unit, width)
        return forward == self.backend.format_relative(locale, -value, unit, width)


class DurationRenderer:
    """Turn ``Duration`` values into localized text for a given style.

    Args:
        backend: Locale primitives (default: ``BabelBackend()``)
        overrides: Curated templates consulted by ``OverrideTemplate``
        strategies: Explicit strategy chain for compact/short styles;
            defaults to the four built-in strategies in order

    Example:
        >>> renderer = DurationRenderer()
        >>> renderer.render((Duration(unit="day", magnitude=2),), "compact", "he-IL")
        "2 י'"
    """

    def __init__(
        self,
        backend: LocaleBackend | None = None,
        *,
        overrides: OverrideTable = OVERRIDES,
        strategies: Sequence[Strategy] | None = None,
    ):
        self.backend: LocaleBackend = backend if backend is not None else BabelBackend()
        self.overrides: OverrideTable = overrides
        if strategies is None:
            strategies = (
                NativeDuration(self.backend),
                OverrideTemplate(self.backend, overrides),
                UnitExtraction(self.backend),
                RelativeExtraction(self.backend),
            )
        self.strategies: tuple[Strategy, ...] = tuple(strategies)

    def render(
        self,
        durations: Duration | Sequence[Duration],
        style: Style,
        locale: str,
    ) -> str:
        if isinstance(durations, Duration):
            durations = (durations,)
        primary = durations[0]

        if style in ("long", "longer"):
            text = self.backend.format_relative(
                locale, primary.signed, primary.unit, "long"
            )
            if style == "long" or len(durations) < 2:
                return text
            return f"{text} {self.quantity(durations[1], locale)}"

        text = self.duration_only(primary, _WIDTHS.get(style, "short"), locale)
        return f"-{text}" if primary.sign < 0 else text

    def duration_only(self, duration: Duration, width: Width, locale: str) -> str:
        """Unsigned duration phrase with no directional wording, if possible."""
        for strategy in self.strategies:
            try:
                text = strategy.render(duration, width, locale)
            except _FALLTHROUGH as exc:
                logger.debug("%s failed for %s: %s", strategy.name, duration, exc)
                continue
            if text is not None:
                return text
            logger.debug("%s declined %s in %s", strategy.name, duration, locale)

        logger.debug("Falling back to raw LCS for %s in %s", duration, locale)
        magnitude, unit = duration.magnitude, duration.unit
        return longest_common_substring(
            self.backend.format_relative(locale, magnitude, unit, width),
            self.backend.format_relative(locale, -magnitude, unit, width),
        ).strip()

    def quantity(self, duration: Duration, locale: str) -> str:
        """Bare quantity for the secondary unit of the ``longer`` style."""
        if self.backend.capabilities.duration_format:
            try:
                return self.backend.format_duration(
                    locale, {duration.field: duration.magnitude}, "long"
                )
            except _FALLTHROUGH as exc:
                logger.debug("Duration formatter failed for %s: %s", duration, exc)
        return f"{duration.magnitude} {duration.unit}s"
