from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from functools import cache
from typing import Any, Literal
from zoneinfo import ZoneInfo

from dateutil.parser import isoparse
from dateutil.tz import tzlocal

from humandelta.backend import WeekdayWidth, resolve_locale
from humandelta.duration import Part, Style, normalize_style
from humandelta.renderer import DurationRenderer
from humandelta.selector import select
from humandelta.util import YEAR

Instant = datetime | date | int | float | str

_WEEKDAY_WIDTHS: dict[Style, WeekdayWidth] = {
    "compact": "narrow",
    "short": "abbreviated",
    "long": "wide",
    "longer": "wide",
}


@dataclass(frozen=True, kw_only=True)
class Formatted:
    """Result of ``format``.

    Attributes:
        text: Full string, ``{date}({weekday}) {time}({duration})``
        in_future: True if ``to`` is after ``from_``
        in_a_year_or_more: True if the two instants are 365+ days apart
        locale: Locale tag used for formatting
        time_zone: Zone the date, weekday and time were rendered in
        parts: Typed segments that concatenate to ``text``
    """

    text: str
    in_future: bool
    in_a_year_or_more: bool
    locale: str
    time_zone: str
    parts: tuple[Part, ...]

    def __str__(self) -> str:
        return self.text


@cache
def default_renderer() -> DurationRenderer:
    """Shared renderer backed by Babel."""
    return DurationRenderer()


def _resolve_zone(tz: str | tzinfo | None) -> tzinfo:
    if tz is None:
        return tzlocal()
    if isinstance(tz, str):
        return ZoneInfo(tz)
    if isinstance(tz, tzinfo):
        return tz
    raise TypeError(
        f"tz must be an IANA zone name, a tzinfo, or None.\n"
        f"Got {type(tz).__name__!r}: {tz!r}\n"
        f"Examples: tz='UTC', tz='Asia/Jerusalem', tz=ZoneInfo('US/Pacific')"
    )


def _zone_name(zone: tzinfo, at: datetime) -> str:
    key = getattr(zone, "key", None)
    if key:
        return key
    return at.tzname() or "UTC"


def _coerce_instant(
    value: Any, edge: Literal["to", "from_"], zone: tzinfo
) -> datetime:
    """Convert an instant option to an aware datetime in ``zone``.

    Accepts:
    - datetime: aware values are converted; naive values are read in ``zone``
    - date: Start of that day in ``zone``
    - int/float: Unix timestamp in seconds
    - str: ISO-8601 text, parsed with dateutil

    Raises:
        TypeError: If value is an unsupported type
    """
    if isinstance(value, str):
        value = isoparse(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=zone)
        return value.astimezone(zone)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=zone)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=zone)
    raise TypeError(
        f"{edge} must be a datetime, date, Unix timestamp, or ISO-8601 string.\n"
        f"Got {type(value).__name__!r}: {value!r}\n"
        f"Examples:\n"
        f"  format(datetime(2025, 11, 27, 12, tzinfo=timezone.utc))\n"
        f"  format(1764244800)  # int (Unix seconds)\n"
        f"  format('2025-11-27T12:00:00Z')"
    )


def _date_token(dt: datetime, style: Style) -> str:
    # Built from fields so every locale shows the same ISO-like order
    if style in ("long", "longer"):
        return f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
    if style == "short":
        return f"{dt.year % 100:02d}-{dt.month:02d}-{dt.day:02d}"
    return f"{dt.month:02d}-{dt.day:02d}"


def _elapsed_ms(target: datetime, reference: datetime) -> int:
    return (target - reference) // timedelta(milliseconds=1)


def _build(
    to: Instant,
    from_: Instant | None,
    style: Any,
    duration_threshold: Any,
    locale: str,
    zone: tzinfo,
    renderer: DurationRenderer,
) -> tuple[list[Part], int, datetime]:
    style = normalize_style(style)
    target = _coerce_instant(to, "to", zone)
    reference = (
        datetime.now(zone) if from_ is None else _coerce_instant(from_, "from_", zone)
    )
    elapsed = _elapsed_ms(target, reference)
    backend = renderer.backend

    durations = select(elapsed, style, duration_threshold)
    parts = [
        Part("date", _date_token(target, style)),
        Part("literal", "("),
        Part("day", backend.format_weekday(locale, target, _WEEKDAY_WIDTHS[style])),
        Part("literal", ") "),
        Part("time", backend.format_time(locale, target)),
        Part("literal", "("),
        Part("relative", renderer.render(durations, style, locale)),
        Part("literal", ")"),
    ]
    return parts, elapsed, target


def format_to_parts(
    to: Instant,
    from_: Instant | None = None,
    *,
    style: Style = "short",
    duration_threshold: float | str = "twice",
    locale: str | Sequence[str] | None = None,
    tz: str | tzinfo | None = None,
    renderer: DurationRenderer | None = None,
) -> list[Part]:
    """Format ``to`` relative to ``from_`` as typed segments.

    Segment types, in order: date, literal, day, literal, time, literal,
    relative, literal.

    Example:
        >>> [p.type for p in format_to_parts(target, now, locale="en-US")]
        ['date', 'literal', 'day', 'literal', 'time', 'literal', 'relative', 'literal']
    """
    parts, _, _ = _build(
        to,
        from_,
        style,
        duration_threshold,
        resolve_locale(locale),
        _resolve_zone(tz),
        renderer or default_renderer(),
    )
    return parts


def format(
    to: Instant,
    from_: Instant | None = None,
    *,
    style: Style = "short",
    duration_threshold: float | str = "twice",
    locale: str | Sequence[str] | None = None,
    tz: str | tzinfo | None = None,
    renderer: DurationRenderer | None = None,
) -> Formatted:
    """
    Format ``to`` as ``{date}({weekday}) {time}({duration})``.

    Args:
        to: Target instant
        from_: Reference instant (default: now)
        style: "compact", "short", "long" or "longer"; anything else is "short"
        duration_threshold: 1, 1.5, 2 or "one"/"once"/"two"/"twice"; how many
            of a unit to show before switching to the next larger one
        locale: Locale tag or preference list (default: host locale, then en-US)
        tz: IANA zone name or tzinfo for naive instants and calendar fields
            (default: host zone)
        renderer: Duration renderer to use (default: shared Babel renderer)

    Returns:
        Formatted result; ``str(result)`` is the text

    Example:
        >>> now = datetime(2025, 11, 25, 12, tzinfo=timezone.utc)
        >>> later = now + timedelta(days=2)
        >>> result = format(later, now, style="compact", locale="he-IL")
        >>> result.parts[-2].value
        "2 י'"
    """
    resolved = resolve_locale(locale)
    zone = _resolve_zone(tz)
    parts, elapsed, target = _build(
        to,
        from_,
        style,
        duration_threshold,
        resolved,
        zone,
        renderer or default_renderer(),
    )
    return Formatted(
        text="".join(p.value for p in parts),
        in_future=elapsed > 0,
        in_a_year_or_more=abs(elapsed) >= YEAR,
        locale=resolved,
        time_zone=_zone_name(zone, target),
        parts=tuple(parts),
    )
