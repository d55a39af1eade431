"""
ICS Calendar MCP Server

Answers today / upcoming / search queries over a remote iCalendar feed.
"""

from .feed_utils import CalendarFeed, CalendarFeedError, CalendarFetchError, CalendarParseError
from .server import ICSCalendarMCPServer

__all__ = [
    'CalendarFeed',
    'CalendarFeedError',
    'CalendarFetchError',
    'CalendarParseError',
    'ICSCalendarMCPServer',
]
