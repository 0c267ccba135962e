"""Curated compact unit templates for languages where extraction misfires.

Each template holds a single ``{number}`` slot that receives the
locale-formatted magnitude, e.g. ``"{number} י'"`` renders as ``"2 י'"``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from humandelta.duration import Unit

PLACEHOLDER = "{number}"


@dataclass(frozen=True, kw_only=True)
class Template:
    """Text with exactly one number slot between ``prefix`` and ``suffix``."""

    prefix: str = ""
    suffix: str = ""

    @classmethod
    def parse(cls, text: str) -> "Template":
        count = text.count(PLACEHOLDER)
        if count != 1:
            raise ValueError(
                f"Template must contain exactly one {PLACEHOLDER} slot, "
                f"found {count} in {text!r}"
            )
        prefix, suffix = text.split(PLACEHOLDER)
        return cls(prefix=prefix, suffix=suffix)

    def fill(self, number: str) -> str:
        return f"{self.prefix}{number}{self.suffix}"

    def __str__(self) -> str:
        return self.fill(PLACEHOLDER)


class OverrideTable:
    """Read-only mapping of language subtag -> unit -> template."""

    def __init__(self, entries: Mapping[str, Mapping[Unit, str | Template]]):
        table: dict[str, Mapping[Unit, Template]] = {}
        for language, units in entries.items():
            table[language] = MappingProxyType(
                {
                    unit: t if isinstance(t, Template) else Template.parse(t)
                    for unit, t in units.items()
                }
            )
        self._table: Mapping[str, Mapping[Unit, Template]] = MappingProxyType(table)

    def lookup(self, language: str, unit: Unit) -> Template | None:
        units = self._table.get(language)
        if units is None:
            return None
        return units.get(unit)

    def languages(self) -> list[str]:
        return sorted(self._table)

    def __contains__(self, language: object) -> bool:
        return language in self._table


OVERRIDES = OverrideTable(
    {
        "he": {
            "day": "{number} י'",
            "week": "{number} שב'",
            "month": "{number} חו'",
            "year": "{number} שָּׁנָ'",
            "hour": "{number} שע'",
            "minute": "{number} דק'",
            "second": "{number} שְׁנִ'",
        },
        "ar": {
            "month": "{number}م",
        },
        "ars": {
            "year": "{number}سنة",
            "month": "{number}م",
        },
        "syr": {
            "day": "{number}ܝܘܡܐ",
        },
    }
)
