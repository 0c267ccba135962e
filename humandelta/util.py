"""Utility constants and helpers for humandelta.

Time unit constants represent durations in milliseconds.
Months and years use fixed approximations (30 and 365 days).
"""

# Time unit constants (all values in milliseconds)
SECOND = 1000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
MONTH = 30 * DAY
YEAR = 365 * DAY

UNIT_MS = {
    "year": YEAR,
    "month": MONTH,
    "week": WEEK,
    "day": DAY,
    "hour": HOUR,
    "minute": MINUTE,
    "second": SECOND,
}

# Coarsest first
UNITS = ("year", "month", "week", "day", "hour", "minute", "second")

# Natural boundary of each unit before promoting to the next coarser one,
# finest first. Year has no boundary.
BOUNDARIES = (
    ("second", 60),
    ("minute", 60),
    ("hour", 24),
    ("day", 7),
    ("week", 4),
    ("month", 12),
)
