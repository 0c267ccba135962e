from .backend import BabelBackend, Capabilities, LocaleBackend, resolve_locale
from .core import Formatted, format, format_to_parts
from .duration import Duration, Part
from .lcs import longest_common_substring
from .overrides import OVERRIDES, OverrideTable, Template
from .renderer import (
    DurationRenderer,
    NativeDuration,
    OverrideTemplate,
    RelativeExtraction,
    Strategy,
    UnitExtraction,
)
from .selector import select
from .weekdays import CUSTOM_WEEKDAY_ABBREVIATIONS, weekday_abbreviation

__all__ = [
    "format",
    "format_to_parts",
    "Formatted",
    "Part",
    "Duration",
    "select",
    "DurationRenderer",
    "Strategy",
    "NativeDuration",
    "OverrideTemplate",
    "UnitExtraction",
    "RelativeExtraction",
    "LocaleBackend",
    "BabelBackend",
    "Capabilities",
    "resolve_locale",
    "OverrideTable",
    "Template",
    "OVERRIDES",
    "longest_common_substring",
    "CUSTOM_WEEKDAY_ABBREVIATIONS",
    "weekday_abbreviation",
]
