#!/usr/bin/env python3
"""
Tests for the event filtering, normalization and formatting helpers
"""

from datetime import datetime, time, timedelta

import pytest

from ics_calendar_mcp.calendar_feed.event_utils import (
    NO_EVENTS_MESSAGE,
    UNTITLED_EVENT_NAME,
    CalendarEvent,
    RawEvent,
    TimeWindow,
    end_of_day,
    event_search_text,
    filter_by_keyword,
    filter_by_range,
    format_datetime,
    format_event_list,
    render_events,
    sort_by_start,
    start_of_day,
    to_calendar_event,
    today_window,
    upcoming_window,
)


def local(year, month, day, hour=0, minute=0, second=0, microsecond=0):
    """Aware datetime for a local wall-clock time"""
    return datetime(year, month, day, hour, minute, second, microsecond).astimezone()


class TestDateWindows:
    """Test day boundaries and query windows"""

    def test_start_of_day_is_local_midnight(self):
        result = start_of_day(local(2025, 3, 14, 15, 30))
        assert result.replace(tzinfo=None) == datetime(2025, 3, 14)
        assert result.tzinfo is not None

    def test_end_of_day_is_last_millisecond(self):
        result = end_of_day(local(2025, 3, 14, 0, 0))
        assert result.replace(tzinfo=None) == datetime(2025, 3, 14, 23, 59, 59, 999000)

    def test_today_window(self):
        now = local(2025, 6, 1, 12, 0)
        window = today_window(now)
        assert window.start == local(2025, 6, 1)
        assert window.end == local(2025, 6, 1, 23, 59, 59, 999000)

    def test_upcoming_window_spans_n_days(self):
        now = local(2025, 6, 1, 12, 0)
        window = upcoming_window(7, now)
        assert window.start == local(2025, 6, 1)
        assert window.end.date() == datetime(2025, 6, 8).date()
        assert window.end.replace(tzinfo=None).time() == time(23, 59, 59, 999000)

    def test_upcoming_window_one_day_includes_tomorrow(self):
        now = local(2025, 6, 1, 0, 30)
        window = upcoming_window(1, now)
        assert window.end.date() == datetime(2025, 6, 2).date()

    def test_upcoming_window_adds_elapsed_time(self):
        now = local(2025, 6, 1, 12, 0)
        window = upcoming_window(90, now)
        assert window.end.date() == (now + timedelta(days=90)).astimezone().date()


class TestRangeFilter:
    """Test the inclusive overlap filter"""

    @pytest.fixture
    def window(self):
        return TimeWindow(start=local(2025, 1, 10), end=local(2025, 1, 10, 23, 59, 59, 999000))

    def test_event_inside_window(self, window):
        event = RawEvent(start=local(2025, 1, 10, 9), end=local(2025, 1, 10, 11), summary="Inside")
        assert filter_by_range([event], window) == [event]

    def test_event_partially_overlapping_start(self, window):
        event = RawEvent(start=local(2025, 1, 9, 22), end=local(2025, 1, 10, 1), summary="Overnight")
        assert filter_by_range([event], window) == [event]

    def test_event_spanning_whole_window(self, window):
        event = RawEvent(start=local(2025, 1, 1), end=local(2025, 1, 31), summary="Term")
        assert filter_by_range([event], window) == [event]

    def test_event_ending_exactly_at_window_start(self, window):
        event = RawEvent(start=local(2025, 1, 9, 23), end=window.start, summary="Touch start")
        assert filter_by_range([event], window) == [event]

    def test_event_starting_exactly_at_window_end(self, window):
        event = RawEvent(start=window.end, end=local(2025, 1, 11, 1), summary="Touch end")
        assert filter_by_range([event], window) == [event]

    def test_events_outside_window(self, window):
        before = RawEvent(start=local(2025, 1, 9, 8), end=local(2025, 1, 9, 9), summary="Before")
        after = RawEvent(start=local(2025, 1, 11, 8), end=local(2025, 1, 11, 9), summary="After")
        assert filter_by_range([before, after], window) == []

    def test_preserves_input_order(self, window):
        late = RawEvent(start=local(2025, 1, 10, 15), end=local(2025, 1, 10, 16), summary="Late")
        early = RawEvent(start=local(2025, 1, 10, 8), end=local(2025, 1, 10, 9), summary="Early")
        assert filter_by_range([late, early], window) == [late, early]


class TestKeywordMatcher:
    """Test case-insensitive keyword search"""

    def test_matches_description_only(self):
        event = RawEvent(start=local(2025, 1, 1), end=local(2025, 1, 1), description="Midterm EXAM review")
        assert filter_by_keyword([event], "exam") == [event]

    def test_matches_summary_and_location_case_insensitively(self):
        event = RawEvent(start=local(2025, 1, 1), end=local(2025, 1, 1),
                         summary="Physics Lab", location="Building B")
        assert filter_by_keyword([event], "PHYSICS") == [event]
        assert filter_by_keyword([event], "building b") == [event]

    def test_no_match(self):
        event = RawEvent(start=local(2025, 1, 1), end=local(2025, 1, 1), summary="Lunch")
        assert filter_by_keyword([event], "exam") == []

    def test_search_text_skips_absent_fields(self):
        event = RawEvent(start=local(2025, 1, 1), end=local(2025, 1, 1), summary="A", description="B")
        assert event_search_text(event) == "A B"

    def test_keyword_can_span_joined_fields(self):
        event = RawEvent(start=local(2025, 1, 1), end=local(2025, 1, 1), summary="Room", location="101")
        assert filter_by_keyword([event], "room 101") == [event]

    def test_empty_keyword_is_rejected(self):
        event = RawEvent(start=local(2025, 1, 1), end=local(2025, 1, 1), summary="Anything")
        with pytest.raises(ValueError):
            filter_by_keyword([event], "")


class TestNormalizer:
    """Test conversion to display-ready events"""

    def test_missing_fields_use_defaults(self):
        raw = RawEvent(start=local(2025, 1, 1, 9), end=local(2025, 1, 1, 10))
        event = to_calendar_event(raw)
        assert event.name == UNTITLED_EVENT_NAME
        assert event.location == ""
        assert event.description == ""

    def test_present_fields_are_kept(self):
        raw = RawEvent(start=local(2025, 1, 1, 9), end=local(2025, 1, 1, 10),
                       summary="Math Exam", location="Room 101", description="Bring a calculator")
        event = to_calendar_event(raw)
        assert event.name == "Math Exam"
        assert event.location == "Room 101"
        assert event.description == "Bring a calculator"

    def test_datetime_format_has_date_weekday_and_time(self):
        text = format_datetime(local(2025, 1, 1, 9, 5))
        assert text.startswith("2025/01/01")
        assert text.endswith("09:05")
        assert local(2025, 1, 1).strftime("%a") in text


class TestFormatter:
    """Test rendering of event lists"""

    def test_empty_list(self):
        assert format_event_list([]) == NO_EVENTS_MESSAGE

    def test_optional_lines_are_omitted(self):
        text = format_event_list([CalendarEvent(name="Standup", start="S", end="E")])
        assert text == "1. Standup\n   Time: S ~ E\n"
        assert "Location" not in text
        assert "Description" not in text

    def test_all_lines_and_numbering(self):
        events = [
            CalendarEvent(name="First", start="S1", end="E1", location="Hall"),
            CalendarEvent(name="Second", start="S2", end="E2", description="Notes"),
        ]
        assert format_event_list(events) == (
            "1. First\n"
            "   Time: S1 ~ E1\n"
            "   Location: Hall\n"
            "\n"
            "2. Second\n"
            "   Time: S2 ~ E2\n"
            "   Description: Notes\n"
        )


class TestSortingAndRendering:
    """Test ordering of rendered results"""

    def test_sort_is_stable_for_equal_starts(self):
        start = local(2025, 1, 1, 10)
        first = RawEvent(start=start, end=start, summary="A")
        second = RawEvent(start=start, end=start, summary="B")
        earliest = RawEvent(start=local(2025, 1, 1, 8), end=local(2025, 1, 1, 9), summary="C")
        assert sort_by_start([first, second, earliest]) == [earliest, first, second]

    def test_render_events_orders_by_start(self):
        later = RawEvent(start=local(2025, 1, 2, 10), end=local(2025, 1, 2, 11), summary="Later")
        sooner = RawEvent(start=local(2025, 1, 1, 10), end=local(2025, 1, 1, 11), summary="Sooner")
        text = render_events([later, sooner])
        assert text.index("1. Sooner") < text.index("2. Later")

    def test_render_no_events(self):
        assert render_events([]) == NO_EVENTS_MESSAGE
