"""
Event utilities for the ICS Calendar MCP Server

Pure, in-memory helpers used by every query: date windows, range and
keyword filters, normalization of parsed events and text formatting.
All datetimes are timezone-aware and interpreted in the host's local zone.
"""

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Iterable, List, Optional, Sequence

UNTITLED_EVENT_NAME = "(untitled)"
NO_EVENTS_MESSAGE = "No matching events found."
DISPLAY_DATETIME_FORMAT = "%Y/%m/%d (%a) %H:%M"

# 23:59:59.999 local, the last millisecond of a day
END_OF_DAY_TIME = time(23, 59, 59, 999000)


@dataclass(frozen=True)
class RawEvent:
    """An event as produced by the feed parser"""
    start: datetime
    end: datetime
    summary: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class CalendarEvent:
    """A display-ready event"""
    name: str
    start: str
    end: str
    location: str = ""
    description: str = ""


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive [start, end] range of instants"""
    start: datetime
    end: datetime


def local_now() -> datetime:
    """Current instant as an aware datetime in the host's local zone"""
    return datetime.now().astimezone()


def start_of_day(instant: datetime) -> datetime:
    """Local midnight of the day containing ``instant``"""
    local_date = instant.astimezone().date()
    return datetime.combine(local_date, time.min).astimezone()


def end_of_day(instant: datetime) -> datetime:
    """23:59:59.999 local of the day containing ``instant``"""
    local_date = instant.astimezone().date()
    return datetime.combine(local_date, END_OF_DAY_TIME).astimezone()


def today_window(now: Optional[datetime] = None) -> TimeWindow:
    """Window covering the whole local day of ``now``"""
    now = now or local_now()
    return TimeWindow(start=start_of_day(now), end=end_of_day(now))


def upcoming_window(days: int, now: Optional[datetime] = None) -> TimeWindow:
    """Window from local midnight today to the end of the day ``days`` days ahead.

    The offset is added as absolute time (``days`` * 24h), so across a DST
    change the end day is the one reached by elapsed time, not by calendar days.
    """
    now = now or local_now()
    return TimeWindow(start=start_of_day(now), end=end_of_day(now + timedelta(days=days)))


def filter_by_range(events: Iterable[RawEvent], window: TimeWindow) -> List[RawEvent]:
    """Keep events whose interval overlaps the window, boundaries included"""
    return [
        event for event in events
        if event.start <= window.end and event.end >= window.start
    ]


def event_search_text(event: RawEvent) -> str:
    """Space-joined summary, location and description, skipping absent fields"""
    fields = [event.summary, event.location, event.description]
    return " ".join(field for field in fields if field)


def filter_by_keyword(events: Iterable[RawEvent], keyword: str) -> List[RawEvent]:
    """Keep events whose text contains ``keyword``, ignoring case"""
    if not keyword:
        raise ValueError("keyword must be a non-empty string")

    needle = keyword.lower()
    return [event for event in events if needle in event_search_text(event).lower()]


def sort_by_start(events: Iterable[RawEvent]) -> List[RawEvent]:
    """Order events by start; sorted() is stable so ties keep feed order"""
    return sorted(events, key=lambda event: event.start)


def format_datetime(value: datetime) -> str:
    """Render an instant in local time for display"""
    return value.astimezone().strftime(DISPLAY_DATETIME_FORMAT)


def to_calendar_event(raw: RawEvent) -> CalendarEvent:
    """Resolve display fields, substituting defaults for absent values"""
    return CalendarEvent(
        name=raw.summary or UNTITLED_EVENT_NAME,
        start=format_datetime(raw.start),
        end=format_datetime(raw.end),
        location=raw.location or "",
        description=raw.description or "",
    )


def format_event(index: int, event: CalendarEvent) -> str:
    lines = [
        f"{index}. {event.name}\n",
        f"   Time: {event.start} ~ {event.end}\n",
    ]
    if event.location:
        lines.append(f"   Location: {event.location}\n")
    if event.description:
        lines.append(f"   Description: {event.description}\n")
    return "".join(lines)


def format_event_list(events: Sequence[CalendarEvent]) -> str:
    """Render numbered entries separated by blank lines"""
    if not events:
        return NO_EVENTS_MESSAGE
    return "\n".join(format_event(i, event) for i, event in enumerate(events, start=1))


def render_events(events: Iterable[RawEvent]) -> str:
    """Sort, normalize and format a filtered event list"""
    return format_event_list([to_calendar_event(event) for event in sort_by_start(events)])
