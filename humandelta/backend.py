"""Locale-formatting primitives consumed by the duration renderer.

The renderer never checks for features at call time. Each backend declares
what it can do through a ``Capabilities`` descriptor, and optional primitives
raise ``NotImplementedError`` when absent. ``BabelBackend`` provides every
primitive from CLDR data via Babel.
"""

import logging
import math
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Literal, TypeAlias

from babel import Locale, UnknownLocaleError, default_locale
from babel.core import parse_locale
from babel.dates import format_time, format_timedelta, get_day_names
from babel.lists import format_list
from babel.numbers import format_decimal
from babel.units import format_unit
from typing_extensions import override

from humandelta.duration import Part, Unit, Width
from humandelta.util import SECOND, UNIT_MS

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en-US"

WeekdayWidth: TypeAlias = Literal["narrow", "abbreviated", "wide"]

_UNIT_SECONDS: dict[str, int] = {unit: ms // SECOND for unit, ms in UNIT_MS.items()}

# Relative patterns are tried at the requested width, then wider ones
_WIDTH_ORDER: tuple[Width, ...] = ("narrow", "short", "long")

# Tags Babel has no data for, mapped to the locale whose data they share
_DATA_FALLBACKS: dict[str, str] = {
    # Najdi Arabic
    "ars": "ar",
}

_LIST_STYLES: dict[Width, str] = {
    "long": "unit",
    "short": "unit-short",
    "narrow": "unit-narrow",
}


@dataclass(frozen=True, kw_only=True)
class Capabilities:
    """Optional primitives a backend supports.

    Attributes:
        duration_format: ``format_duration`` renders a bare quantity
        relative_parts: ``format_relative_to_parts`` tokenizes relative output
        unit_parts: ``format_unit_to_parts`` tokenizes unit output
        plural_rules: ``plural_category`` returns CLDR plural categories
    """

    duration_format: bool = False
    relative_parts: bool = False
    unit_parts: bool = False
    plural_rules: bool = False


@lru_cache(maxsize=128)
def babel_locale(tag: str) -> Locale:
    """Parse a BCP-47 (``he-IL``) or POSIX (``he_IL``) tag into a Babel locale.

    A tag without data of its own falls back to its language (``de-XX`` to
    ``de``), or to the locale listed in ``_DATA_FALLBACKS`` (``ars`` to
    ``ar``). The caller keeps the requested tag for curated lookups.

    Raises:
        ValueError: If the tag is malformed
        UnknownLocaleError: If neither the tag nor its fallback has data
    """
    posix = tag.replace("-", "_")
    try:
        return Locale.parse(posix)
    except UnknownLocaleError:
        language = parse_locale(posix)[0]
        fallback = _DATA_FALLBACKS.get(language, language)
        if fallback == posix:
            raise
        logger.debug("No locale data for %r, using %r", tag, fallback)
        return Locale.parse(fallback)


def language_of(tag: str) -> str:
    """Return the base language subtag of ``tag`` (``"he"`` for ``"he-IL"``).

    Raises:
        ValueError: If the tag is syntactically malformed
    """
    return parse_locale(tag.replace("-", "_"))[0]


def resolve_locale(locale: str | Sequence[str] | None) -> str:
    """Pick the locale tag to format with.

    A string is validated and returned as given. In a sequence, the first
    tag with locale data wins. Without a locale, the host default
    (``LANGUAGE``/``LC_ALL``/``LC_CTYPE``/``LANG``) is used, then ``en-US``.

    Raises:
        ValueError: If a tag is malformed
        UnknownLocaleError: If no requested tag has locale data
    """
    if isinstance(locale, str) and locale:
        babel_locale(locale)
        return locale

    if locale:
        error: UnknownLocaleError | None = None
        for tag in locale:
            try:
                babel_locale(tag)
            except UnknownLocaleError as exc:
                logger.debug("Skipping locale %r without data", tag)
                error = exc
                continue
            return tag
        assert error is not None
        raise error

    host = default_locale()
    if host:
        tag = host.replace("_", "-")
        try:
            babel_locale(tag)
            return tag
        except (ValueError, UnknownLocaleError):
            logger.debug("Host locale %r unusable, using %s", host, FALLBACK_LOCALE)
    return FALLBACK_LOCALE


def tokenize(text: str, number: str) -> list[Part]:
    """Split ``text`` around the first standalone occurrence of ``number``.

    Returns ``integer`` and ``literal`` parts; a single literal part when
    the number does not appear (idiomatic wording like "tomorrow").
    """
    match = re.search(rf"(?<!\d){re.escape(number)}(?!\d)", text)
    if match is None:
        return [Part("literal", text)]

    parts: list[Part] = []
    if match.start() > 0:
        parts.append(Part("literal", text[: match.start()]))
    parts.append(Part("integer", number))
    if match.end() < len(text):
        parts.append(Part("literal", text[match.end() :]))
    return parts


class LocaleBackend(ABC):
    """Locale-formatting primitives, keyed per call by a locale tag."""

    capabilities: Capabilities = Capabilities()

    def language(self, locale: str) -> str:
        return language_of(locale)

    @abstractmethod
    def format_number(self, locale: str, value: int) -> str:
        """Format an integer with the locale's digits and grouping."""
        pass

    @abstractmethod
    def plural_category(self, locale: str, value: int) -> str:
        pass

    @abstractmethod
    def format_relative(self, locale: str, value: int, unit: Unit, width: Width) -> str:
        """Format a signed quantity with directional wording ("in 2 days")."""
        pass

    @abstractmethod
    def format_weekday(self, locale: str, dt: datetime, width: WeekdayWidth) -> str:
        pass

    @abstractmethod
    def format_time(self, locale: str, dt: datetime) -> str:
        """Format the clock time of ``dt`` with the locale's short pattern."""
        pass

    def format_relative_to_parts(
        self, locale: str, value: int, unit: Unit, width: Width
    ) -> list[Part]:
        raise NotImplementedError(
            f"{type(self).__name__} cannot tokenize relative time"
        )

    def format_unit_to_parts(
        self, locale: str, value: int, unit: Unit, width: Width
    ) -> list[Part]:
        raise NotImplementedError(f"{type(self).__name__} cannot format units")

    def format_duration(
        self, locale: str, fields: Mapping[str, int], width: Width
    ) -> str:
        """Format a bare quantity such as ``{"hours": 2}`` ("2 hours")."""
        raise NotImplementedError(f"{type(self).__name__} cannot format durations")


class BabelBackend(LocaleBackend):
    """Backend built on Babel's CLDR formatters.

    Babel always offers ``format_timedelta`` without direction, but it is
    advertised as a duration formatter only when ``native_durations`` is
    set; otherwise curated templates and extraction take precedence.
    """

    def __init__(self, *, native_durations: bool = False):
        self.capabilities: Capabilities = Capabilities(
            duration_format=native_durations,
            relative_parts=True,
            unit_parts=True,
            plural_rules=True,
        )

    @override
    def format_number(self, locale: str, value: int) -> str:
        return format_decimal(value, locale=babel_locale(locale))

    @override
    def plural_category(self, locale: str, value: int) -> str:
        return babel_locale(locale).plural_form(value)

    @override
    def format_relative(self, locale: str, value: int, unit: Unit, width: Width) -> str:
        loc = babel_locale(locale)
        widths = _WIDTH_ORDER[_WIDTH_ORDER.index(width) :]
        for wider in widths[:-1]:
            try:
                return self._relative(value, unit, wider, loc)
            except KeyError:
                # Locale lacks a "future"/"past" pattern for unit at this width
                logger.debug("No %s %s pattern in %s, widening", wider, unit, locale)
        return self._relative(value, unit, widths[-1], loc)

    def _relative(self, value: int, unit: Unit, width: Width, loc: Locale) -> str:
        # An infinite threshold pins the output to ``unit`` instead of letting
        # Babel pick the largest fitting one.
        return format_timedelta(
            value * _UNIT_SECONDS[unit],
            granularity=unit,
            threshold=math.inf,
            add_direction=True,
            format=width,
            locale=loc,
        )

    @override
    def format_relative_to_parts(
        self, locale: str, value: int, unit: Unit, width: Width
    ) -> list[Part]:
        text = self.format_relative(locale, value, unit, width)
        # format_timedelta substitutes plain ASCII digits
        return tokenize(text, str(abs(value)))

    @override
    def format_unit_to_parts(
        self, locale: str, value: int, unit: Unit, width: Width
    ) -> list[Part]:
        loc = babel_locale(locale)
        unit_id = f"duration-{unit}"
        text = format_unit(value, unit_id, length=width, locale=loc)
        # Without a pattern at this length Babel emits "{value} {unit_id}"
        if unit_id in text:
            raise ValueError(f"No {width} pattern for {unit_id} in {locale}")
        return tokenize(text, format_decimal(abs(value), locale=loc))

    @override
    def format_duration(
        self, locale: str, fields: Mapping[str, int], width: Width
    ) -> str:
        loc = babel_locale(locale)
        items: list[str] = []
        for field, count in fields.items():
            unit = field.removesuffix("s")
            if unit not in _UNIT_SECONDS:
                valid = ", ".join(f"{u}s" for u in _UNIT_SECONDS)
                raise ValueError(f"Unknown duration field '{field}'. Valid: {valid}")
            items.append(
                format_timedelta(
                    count * _UNIT_SECONDS[unit],
                    granularity=unit,
                    threshold=math.inf,
                    format=width,
                    locale=loc,
                )
            )
        return format_list(items, style=_LIST_STYLES[width], locale=loc)

    @override
    def format_weekday(self, locale: str, dt: datetime, width: WeekdayWidth) -> str:
        # Babel indexes day names from Monday = 0, like datetime.weekday()
        return get_day_names(width, context="format", locale=babel_locale(locale))[
            dt.weekday()
        ]

    @override
    def format_time(self, locale: str, dt: datetime) -> str:
        return format_time(
            dt, format="short", tzinfo=dt.tzinfo, locale=babel_locale(locale)
        )
