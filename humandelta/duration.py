from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

Unit: TypeAlias = Literal[
    "second", "minute", "hour", "day", "week", "month", "year"
]
Style: TypeAlias = Literal["compact", "short", "long", "longer"]
Width: TypeAlias = Literal["narrow", "short", "long"]

STYLES: tuple[Style, ...] = ("compact", "short", "long", "longer")

_THRESHOLDS: dict[Any, float] = {
    1: 1,
    "one": 1,
    "once": 1,
    1.5: 1.5,
    2: 2,
    "two": 2,
    "twice": 2,
}


@dataclass(frozen=True, kw_only=True)
class Duration:
    unit: Unit
    magnitude: int
    sign: int = 1

    def __post_init__(self) -> None:
        if self.magnitude < 0:
            raise ValueError(
                f"Duration magnitude ({self.magnitude}) must be >= 0; "
                f"carry direction in sign instead"
            )
        if self.sign not in (1, -1):
            raise ValueError(f"Duration sign must be 1 or -1, got {self.sign!r}")

    @property
    def signed(self) -> int:
        return self.sign * self.magnitude

    @property
    def field(self) -> str:
        """Plural field name used by duration formatters ("days", "hours", ...)."""
        return f"{self.unit}s"

    def __str__(self) -> str:
        prefix = "-" if self.sign < 0 else ""
        return f"Duration({prefix}{self.magnitude} {self.unit})"


@dataclass(frozen=True)
class Part:
    """A typed segment of formatted output."""

    type: str
    value: str


def normalize_style(style: Any) -> Style:
    """Return ``style`` if recognized, else ``"short"``."""
    return style if style in STYLES else "short"


def threshold_multiplier(threshold: Any) -> float:
    """Map a duration threshold option to its boundary multiplier.

    Accepts 1, 1.5, 2 or the aliases "one", "once", "two", "twice".
    Anything else uses the default multiplier of 2.
    """
    try:
        return _THRESHOLDS.get(threshold, 2)
    except TypeError:
        # unhashable
        return 2
