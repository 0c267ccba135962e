"""Curated weekday abbreviations for locales where truncation is ambiguous.

Truncating the short weekday names of these locales to three characters
collides (e.g. Swahili "Jum" covers five days), so each gets a hand-picked
set of 2-4 character abbreviations, Sunday first.

Run ``python -m humandelta.weekdays`` to check that every entry has seven
distinct abbreviations.
"""

import sys
from collections.abc import Mapping, Sequence
from datetime import datetime
from types import MappingProxyType

_OCCITAN = ("dimg", "dilu", "dima", "dimc", "dijò", "divn", "diss")
_URDU = ("اتو", "پیر", "منگ", "بدھ", "جمر", "جمع", "ہفت")
_ZHUANG = ("ngo", "sit", "ngh", "sam", "seq", "haj", "rok")

CUSTOM_WEEKDAY_ABBREVIATIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        # Manx: Jerc/Jerd share "Jer"
        "gv": ("Jed", "Jel", "Jem", "Jrc", "Jrd", "Jeh", "Jes"),
        # Malagasy: four days start with "Ala"
        "mg": ("Alh", "Alt", "Tal", "Alr", "Alk", "Zom", "Asb"),
        # Burmese: Sunday and Monday share a prefix
        "my": ("တနဂ", "တနလ", "အင်", "ဗုဒ", "ကြာ", "သော", "စနေ"),
        # Occitan: "dim" covers Sun/Tue/Wed
        "oc": _OCCITAN,
        "oc-FR": _OCCITAN,
        "oc-ES": _OCCITAN,
        # Swahili: syllables after "Juma"
        "sw": ("Jpl", "Jtt", "Jnn", "Jtn", "Alh", "Iju", "Jms"),
        # Urdu: Thursday keeps its ر
        "ur": _URDU,
        "ur-IN": _URDU,
        "ur-PK": _URDU,
        "pa-PK": ("اتو", "پیر", "منگ", "بُد", "جمر", "جمع", "ہفت"),
        # Yoruba: Wednesday/Thursday share "Ọjọ"
        "yo": ("Àìk", "Aj", "Ìsẹ", "Ọjr", "Ọjb", "Ẹt", "Àbm"),
        # Zhuang: endings after the shared "singhgiz"
        "za": _ZHUANG,
        "za-CN": _ZHUANG,
    }
)


def weekday_abbreviation(locale: str, dt: datetime) -> str | None:
    """Curated abbreviation for the weekday of ``dt``, or None if uncurated.

    Looks up the full tag first (``oc-FR``), then its language (``oc``).
    """
    tag = locale.replace("_", "-")
    abbrevs = CUSTOM_WEEKDAY_ABBREVIATIONS.get(tag)
    if abbrevs is None:
        abbrevs = CUSTOM_WEEKDAY_ABBREVIATIONS.get(tag.split("-")[0])
    if abbrevs is None:
        return None
    # Table is Sunday-first; datetime.weekday() is Monday = 0
    return abbrevs[(dt.weekday() + 1) % 7]


def duplicate_abbreviations(
    table: Mapping[str, Sequence[str]] = CUSTOM_WEEKDAY_ABBREVIATIONS,
) -> dict[str, tuple[str, ...]]:
    """Return entries that do not hold exactly seven distinct abbreviations."""
    return {
        locale: tuple(abbrevs)
        for locale, abbrevs in table.items()
        if len(abbrevs) != 7 or len(set(abbrevs)) != 7
    }


def main() -> int:
    bad = duplicate_abbreviations()
    for locale, abbrevs in CUSTOM_WEEKDAY_ABBREVIATIONS.items():
        lengths = [len(a) for a in abbrevs]
        mark = "FAIL" if locale in bad else "ok"
        span = f"{min(lengths)}-{max(lengths)}"
        print(f"{mark:4} {locale:6} {', '.join(abbrevs)}  (len {span})")
    return 1 if bad else 0


if __name__ == "__main__":
    sys.exit(main())
