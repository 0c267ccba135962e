"""Tests for composing the full formatted output."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from humandelta.core import format, format_to_parts
from humandelta.duration import Part
from humandelta.renderer import DurationRenderer

# Tuesday
NOW = datetime(2025, 11, 25, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def renderer(backend) -> DurationRenderer:
    return DurationRenderer(backend)


def test_parts_sequence(renderer):
    parts = format_to_parts(
        NOW + timedelta(days=2), NOW, locale="en-US", tz="UTC", renderer=renderer
    )
    assert parts == [
        Part("date", "25-11-27"),
        Part("literal", "("),
        Part("day", "Thu"),
        Part("literal", ") "),
        Part("time", "12:00"),
        Part("literal", "("),
        Part("relative", "2 days"),
        Part("literal", ")"),
    ]


@pytest.mark.parametrize(
    ("style", "expected"),
    [
        ("compact", "11-27(T) 12:00(2d)"),
        ("short", "25-11-27(Thu) 12:00(2 days)"),
        ("long", "2025-11-27(Thursday) 12:00(in 2 days)"),
        ("longer", "2025-11-27(Thursday) 12:00(in 2 days)"),
    ],
)
def test_text_per_style(renderer, style, expected):
    result = format(
        NOW + timedelta(days=2), NOW, style=style, locale="en-US", tz="UTC", renderer=renderer
    )
    assert result.text == expected
    assert str(result) == expected
    assert "".join(p.value for p in result.parts) == expected


def test_unknown_style_formats_as_short(renderer):
    result = format(
        NOW + timedelta(days=2), NOW, style="tiny", locale="en-US", tz="UTC", renderer=renderer
    )
    assert result.text == "25-11-27(Thu) 12:00(2 days)"


def test_longer_two_units(renderer):
    result = format(
        NOW + timedelta(days=1, hours=2),
        NOW,
        style="longer",
        locale="en-US",
        tz="UTC",
        renderer=renderer,
    )
    assert result.parts[-2] == Part("relative", "in 1 day 2 hours")


def test_past_short_has_minus_prefix(renderer):
    result = format(NOW - timedelta(hours=3), NOW, locale="en-US", tz="UTC", renderer=renderer)
    assert result.parts[-2].value == "-3 hours"
    assert result.in_future is False


def test_past_long_has_no_minus_prefix(renderer):
    result = format(
        NOW - timedelta(hours=3), NOW, style="long", locale="en-US", tz="UTC", renderer=renderer
    )
    assert result.parts[-2].value == "3 hours ago"


def test_result_flags(renderer):
    future = format(NOW + timedelta(days=2), NOW, locale="en-US", tz="UTC", renderer=renderer)
    assert future.in_future is True
    assert future.in_a_year_or_more is False
    assert future.locale == "en-US"
    assert future.time_zone == "UTC"

    same = format(NOW, NOW, locale="en-US", tz="UTC", renderer=renderer)
    assert same.in_future is False

    far = format(NOW - timedelta(days=365), NOW, locale="en-US", tz="UTC", renderer=renderer)
    assert far.in_a_year_or_more is True
    almost = format(
        NOW + timedelta(days=364, hours=23), NOW, locale="en-US", tz="UTC", renderer=renderer
    )
    assert almost.in_a_year_or_more is False


def test_calendar_fields_follow_tz(renderer):
    """22:00 UTC on the 27th is already the 28th in Jerusalem."""
    target = datetime(2025, 11, 27, 22, 0, tzinfo=timezone.utc)
    result = format(target, NOW, locale="en-US", tz="Asia/Jerusalem", renderer=renderer)
    assert result.parts[0].value == "25-11-28"
    assert result.parts[2].value == "Fri"
    assert result.parts[4].value == "00:00"
    assert result.time_zone == "Asia/Jerusalem"


def test_tzinfo_object_is_accepted(renderer):
    result = format(
        NOW, NOW, locale="en-US", tz=ZoneInfo("America/New_York"), renderer=renderer
    )
    assert result.parts[4].value == "07:00"
    assert result.time_zone == "America/New_York"


def test_naive_instants_read_in_tz(renderer):
    parts = format_to_parts(
        datetime(2025, 11, 27, 9, 30), datetime(2025, 11, 25, 9, 30),
        locale="en-US", tz="Asia/Tokyo", renderer=renderer,
    )
    assert parts[4].value == "09:30"
    assert parts[-2].value == "2 days"


@pytest.mark.parametrize(
    "to",
    [
        NOW + timedelta(days=2),
        int((NOW + timedelta(days=2)).timestamp()),
        (NOW + timedelta(days=2)).timestamp(),
        "2025-11-27T12:00:00Z",
        "2025-11-27T14:00:00+02:00",
    ],
)
def test_instant_types(renderer, to):
    parts = format_to_parts(to, NOW, locale="en-US", tz="UTC", renderer=renderer)
    assert parts[0].value == "25-11-27"
    assert parts[-2].value == "2 days"


def test_date_instant_is_start_of_day(renderer):
    parts = format_to_parts(date(2025, 11, 27), NOW, locale="en-US", tz="UTC", renderer=renderer)
    assert parts[4].value == "00:00"
    assert parts[-2].value == "36 hours"


def test_from_defaults_to_now(renderer):
    result = format(
        datetime.now(timezone.utc) + timedelta(days=3, minutes=1),
        locale="en-US",
        tz="UTC",
        renderer=renderer,
    )
    assert result.parts[-2].value == "3 days"
    assert result.in_future is True


@pytest.mark.parametrize("threshold", [1, "one", "once"])
def test_duration_threshold_option(renderer, threshold):
    parts = format_to_parts(
        NOW + timedelta(seconds=60),
        NOW,
        duration_threshold=threshold,
        locale="en-US",
        tz="UTC",
        renderer=renderer,
    )
    assert parts[-2].value == "1 minute"


def test_locale_preference_list_picks_first_known(renderer):
    result = format(NOW, NOW, locale=["zz-ZZ", "he-IL"], tz="UTC", renderer=renderer)
    assert result.locale == "he-IL"


def test_malformed_locale_propagates(renderer):
    with pytest.raises(ValueError):
        format(NOW, NOW, locale="12-!!", tz="UTC", renderer=renderer)


def test_default_locale_from_environment(renderer, monkeypatch):
    for name in ("LANGUAGE", "LC_ALL", "LC_CTYPE", "LANG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LANG", "he_IL.UTF-8")
    assert format(NOW, NOW, tz="UTC", renderer=renderer).locale == "he-IL"


def test_default_locale_fallback(renderer, monkeypatch):
    for name in ("LANGUAGE", "LC_ALL", "LC_CTYPE", "LANG"):
        monkeypatch.delenv(name, raising=False)
    assert format(NOW, NOW, tz="UTC", renderer=renderer).locale == "en-US"


def test_unsupported_instant_type(renderer):
    with pytest.raises(TypeError, match="to must be a datetime"):
        format([2025, 11, 27], NOW, locale="en-US", tz="UTC", renderer=renderer)

    with pytest.raises(TypeError, match="from_ must be a datetime"):
        format(NOW, object(), locale="en-US", tz="UTC", renderer=renderer)


def test_bool_is_not_a_timestamp(renderer):
    with pytest.raises(TypeError):
        format(True, NOW, locale="en-US", tz="UTC", renderer=renderer)


def test_unsupported_tz_type(renderer):
    with pytest.raises(TypeError, match="tz must be an IANA zone name"):
        format(NOW, NOW, locale="en-US", tz=5, renderer=renderer)
