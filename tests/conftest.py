from collections.abc import Mapping
from datetime import datetime

import pytest
from typing_extensions import override

from humandelta.backend import Capabilities, LocaleBackend, WeekdayWidth, tokenize
from humandelta.duration import Part, Unit, Width

_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class FakeBackend(LocaleBackend):
    """Deterministic backend with English-like wording.

    ``idioms`` maps ``(unit, signed value)`` to a phrase without digits,
    the way some locales say "tomorrow" instead of "in 1 day". ``dual``
    gives 2 its own plural category, as Hebrew does. ``units`` maps a unit
    to a narrow pattern like ``"{n}d"``; missing units raise ValueError.
    """

    def __init__(
        self,
        *,
        capabilities: Capabilities = Capabilities(
            relative_parts=True, unit_parts=True, plural_rules=True
        ),
        idioms: Mapping[tuple[str, int], str] | None = None,
        units: Mapping[str, str] | None = None,
        dual: bool = False,
    ):
        self.capabilities: Capabilities = capabilities
        self.idioms: Mapping[tuple[str, int], str] = idioms or {}
        self.units: Mapping[str, str] = units or {}
        self.dual: bool = dual
        self.unit_calls: list[tuple[str, str]] = []
        self.duration_calls: list[dict[str, int]] = []

    @override
    def format_number(self, locale: str, value: int) -> str:
        return f"{value:,}"

    @override
    def plural_category(self, locale: str, value: int) -> str:
        if value == 1:
            return "one"
        if value == 2 and self.dual:
            return "two"
        return "other"

    @override
    def format_relative(self, locale: str, value: int, unit: Unit, width: Width) -> str:
        if (unit, value) in self.idioms:
            return self.idioms[(unit, value)]
        name = unit if abs(value) == 1 else f"{unit}s"
        if value < 0:
            return f"{-value} {name} ago"
        return f"in {value} {name}"

    @override
    def format_relative_to_parts(
        self, locale: str, value: int, unit: Unit, width: Width
    ) -> list[Part]:
        return tokenize(self.format_relative(locale, value, unit, width), str(abs(value)))

    @override
    def format_unit_to_parts(
        self, locale: str, value: int, unit: Unit, width: Width
    ) -> list[Part]:
        self.unit_calls.append((locale, unit))
        if unit not in self.units:
            raise ValueError(f"no unit pattern for {unit}")
        return tokenize(self.units[unit].replace("{n}", str(value)), str(value))

    @override
    def format_duration(self, locale: str, fields: Mapping[str, int], width: Width) -> str:
        if not self.capabilities.duration_format:
            return super().format_duration(locale, fields, width)
        self.duration_calls.append(dict(fields))
        return " ".join(f"{count} {field}" for field, count in fields.items())

    @override
    def format_weekday(self, locale: str, dt: datetime, width: WeekdayWidth) -> str:
        name = _DAYS[dt.weekday()]
        if width == "narrow":
            return name[0]
        if width == "abbreviated":
            return name[:3]
        return name

    @override
    def format_time(self, locale: str, dt: datetime) -> str:
        return dt.strftime("%H:%M")


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend(units={"day": "{n}d", "hour": "{n}h"})


@pytest.fixture
def make_backend():
    return FakeBackend
