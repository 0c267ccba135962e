"""Pick the display unit(s) and magnitude for an elapsed interval."""

from typing import Any

from humandelta.duration import Duration, Style, Unit, threshold_multiplier
from humandelta.util import BOUNDARIES, DAY, UNIT_MS, UNITS


def elapsed_counts(abs_ms: int) -> dict[Unit, int]:
    """Whole counts of each unit contained in ``abs_ms`` (floor, no rounding).

    Months and years derive from the day count using 30 and 365 days.
    """
    seconds = abs_ms // 1000
    minutes = seconds // 60
    hours = minutes // 60
    days = abs_ms // DAY
    return {
        "second": seconds,
        "minute": minutes,
        "hour": hours,
        "day": days,
        "week": days // 7,
        "month": days // 30,
        "year": days // 365,
    }


def select(
    elapsed_ms: int, style: Style | str, threshold: Any = 2
) -> tuple[Duration] | tuple[Duration, Duration]:
    """Choose the primary unit, plus a secondary one for the ``longer`` style.

    Thresholded styles (compact/short/long) promote to the next coarser unit
    once the current count reaches ``boundary * multiplier``; the comparison
    is strict, so 120 seconds at multiplier 2 is "2 minutes". The week, month
    and year steps compare day, week and month counts rather than exact
    milliseconds.

    ``longer`` ignores the threshold and takes the largest non-zero unit,
    then the next finer unit from the exact remainder if it is non-zero.

    Example:
        >>> primary, secondary = select(26 * 3600 * 1000, "longer")
        >>> primary.unit, primary.magnitude, secondary.unit, secondary.magnitude
        ('day', 1, 'hour', 2)
    """
    sign = -1 if elapsed_ms < 0 else 1
    abs_ms = abs(int(elapsed_ms))
    counts = elapsed_counts(abs_ms)

    if style == "longer":
        primary: Unit = next((u for u in UNITS if counts[u] > 0), "second")
        first = Duration(unit=primary, magnitude=counts[primary], sign=sign)
        if primary == "second":
            return (first,)

        remainder = abs_ms - first.magnitude * UNIT_MS[primary]
        finer: Unit = UNITS[UNITS.index(primary) + 1]
        second_magnitude = remainder // UNIT_MS[finer]
        if second_magnitude == 0:
            return (first,)
        return (first, Duration(unit=finer, magnitude=second_magnitude, sign=sign))

    multiplier = threshold_multiplier(threshold)
    for unit, boundary in BOUNDARIES:
        if counts[unit] < boundary * multiplier:
            return (Duration(unit=unit, magnitude=counts[unit], sign=sign),)
    return (Duration(unit="year", magnitude=counts["year"], sign=sign),)
