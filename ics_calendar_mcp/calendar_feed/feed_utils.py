"""
Feed utilities for the ICS Calendar MCP Server

Downloads an iCalendar document over HTTP and turns its VEVENT components
into RawEvent records in the host's local timezone.
"""

import asyncio
import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional

import icalendar
import requests

from ics_calendar_mcp.calendar_feed.event_utils import RawEvent
from ics_calendar_mcp.config import DEFAULT_FETCH_TIMEOUT

logger = logging.getLogger(__name__)

USER_AGENT = "ics-calendar-mcp"


class CalendarFeedError(Exception):
    """Base class for feed failures"""


class CalendarFetchError(CalendarFeedError):
    """The feed could not be downloaded"""


class CalendarParseError(CalendarFeedError):
    """The downloaded document is not a readable iCalendar file"""


def normalize_feed_url(url: str) -> str:
    """webcal:// is an alias for https:// used by calendar apps"""
    if url.lower().startswith("webcal://"):
        return "https://" + url[len("webcal://"):]
    return url


def to_local_datetime(value) -> datetime:
    """Convert an iCalendar date or datetime into an aware local datetime.

    Dates become local midnight and floating (naive) times are read as local.
    """
    if isinstance(value, datetime):
        return value.astimezone()
    if isinstance(value, date):
        return datetime.combine(value, time.min).astimezone()
    raise TypeError(f"Unsupported iCalendar date value: {value!r}")


def _text(component, name: str) -> Optional[str]:
    value = component.get(name)
    if value is None:
        return None
    return str(value)


def _decoded_value(component, name: str):
    prop = component.get(name)
    return getattr(prop, "dt", None)


def event_from_component(component) -> Optional[RawEvent]:
    """Build a RawEvent from a VEVENT, or None when it has no usable start"""
    start_value = _decoded_value(component, "DTSTART")
    if start_value is None:
        return None

    start = to_local_datetime(start_value)

    end_value = _decoded_value(component, "DTEND")
    duration = _decoded_value(component, "DURATION")
    if end_value is not None:
        end = to_local_datetime(end_value)
    elif isinstance(duration, timedelta):
        end = start + duration
    elif not isinstance(start_value, datetime):
        # All-day event without DTEND lasts one day
        end = start + timedelta(days=1)
    else:
        end = start

    return RawEvent(
        start=start,
        end=end,
        summary=_text(component, "SUMMARY"),
        location=_text(component, "LOCATION"),
        description=_text(component, "DESCRIPTION"),
    )


def parse_events(document: bytes) -> List[RawEvent]:
    """Parse an iCalendar document and return its events in document order"""
    try:
        calendar = icalendar.Calendar.from_ical(document)
    except ValueError as e:
        raise CalendarParseError(f"Failed to parse calendar: {e}") from e

    events = []
    for component in calendar.walk("VEVENT"):
        try:
            event = event_from_component(component)
        except (TypeError, ValueError) as e:
            logger.warning("Skipping event %s: %s", _text(component, "UID"), e)
            continue
        if event is None:
            logger.warning("Skipping event %s without DTSTART", _text(component, "UID"))
            continue
        events.append(event)
    return events


class CalendarFeed:
    """Fetches and parses a remote iCalendar feed on every call"""

    def __init__(self, url: str, timeout: float = DEFAULT_FETCH_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.url = normalize_feed_url(url)
        self.timeout = timeout
        self.session = session or requests.Session()

    def download(self) -> bytes:
        """Download the raw document"""
        logger.info("Fetching calendar feed %s", self.url)
        try:
            response = self.session.get(
                self.url,
                timeout=self.timeout,
                headers={"User-Agent": USER_AGENT},
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise CalendarFetchError(f"Failed to fetch calendar from {self.url}: {e}") from e
        return response.content

    def fetch_events_sync(self) -> List[RawEvent]:
        events = parse_events(self.download())
        logger.debug("Parsed %d events from %s", len(events), self.url)
        return events

    async def fetch_events(self) -> List[RawEvent]:
        """Fetch the feed without blocking the event loop"""
        return await asyncio.to_thread(self.fetch_events_sync)
