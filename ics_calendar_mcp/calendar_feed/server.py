#!/usr/bin/env python3
"""
ICS Calendar MCP Server

A Model Context Protocol server that answers read-only queries over a
remote iCalendar (.ics) feed: today's events, upcoming events and keyword
search. The feed is downloaded and parsed again on every call.
"""

import asyncio
import logging
import sys

from ics_calendar_mcp.__about__ import __version__
from ics_calendar_mcp.calendar_feed.event_utils import (
    filter_by_keyword,
    filter_by_range,
    local_now,
    render_events,
    today_window,
    upcoming_window,
)
from ics_calendar_mcp.calendar_feed.feed_utils import CalendarFeed
from ics_calendar_mcp.common.logging_config import configure_logging
from ics_calendar_mcp.common.mcp.server_base import BaseMCPServer
from ics_calendar_mcp.config import ConfigurationError, Settings, apply_host_locale, load_settings

logger = logging.getLogger(__name__)

SERVER_NAME = "ics-calendar"
DEFAULT_UPCOMING_DAYS = 7
MIN_UPCOMING_DAYS = 1
MAX_UPCOMING_DAYS = 90


class ICSCalendarMCPServer(BaseMCPServer):
    """ICS calendar MCP server implementation"""

    def __init__(self, feed):
        super().__init__(SERVER_NAME, __version__)
        self.feed = feed
        self.setup_tools()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ICSCalendarMCPServer":
        return cls(CalendarFeed(settings.ics_url, timeout=settings.fetch_timeout))

    def setup_tools(self):
        """Setup all calendar tools"""

        # Tool 1: Today's events
        self.tool_registry.register(
            name="get_today_events",
            description="Get all of today's events (classes, exams, meetings)",
            input_schema={
                "type": "object",
                "properties": {},
                "additionalProperties": False
            },
            handler=self.get_today_events
        )

        # Tool 2: Upcoming events
        self.tool_registry.register(
            name="get_upcoming_events",
            description="Get events in the next N days",
            input_schema={
                "type": "object",
                "properties": {
                    "days": {
                        "type": "integer",
                        "minimum": MIN_UPCOMING_DAYS,
                        "maximum": MAX_UPCOMING_DAYS,
                        "default": DEFAULT_UPCOMING_DAYS,
                        "description": "Number of days to look ahead (default 7)"
                    }
                },
                "additionalProperties": False
            },
            handler=self.get_upcoming_events
        )

        # Tool 3: Keyword search
        self.tool_registry.register(
            name="search_events",
            description="Search events by keyword (matches name, location and description)",
            input_schema={
                "type": "object",
                "properties": {
                    "keyword": {
                        "type": "string",
                        "minLength": 1,
                        "description": "Keyword to search for"
                    }
                },
                "required": ["keyword"],
                "additionalProperties": False
            },
            handler=self.search_events
        )

    # Tool handlers
    async def get_today_events(self, args: dict):
        """List events overlapping the current local day"""
        events = await self.feed.fetch_events()
        now = local_now()
        matched = filter_by_range(events, today_window(now))
        header = f"📅 Today's events ({now.date().isoformat()}):"
        return self.create_text_response(f"{header}\n\n{render_events(matched)}")

    async def get_upcoming_events(self, args: dict):
        """List events from today through the end of day N"""
        days = args.get("days", DEFAULT_UPCOMING_DAYS)
        events = await self.feed.fetch_events()
        matched = filter_by_range(events, upcoming_window(days, local_now()))
        header = f"📅 Events in the next {days} days:"
        return self.create_text_response(f"{header}\n\n{render_events(matched)}")

    async def search_events(self, args: dict):
        """List events whose name, location or description contains the keyword"""
        keyword = args["keyword"]
        events = await self.feed.fetch_events()
        matched = filter_by_keyword(events, keyword)
        header = f"🔍 Search results for \"{keyword}\":"
        return self.create_text_response(f"{header}\n\n{render_events(matched)}")


async def serve(settings: Settings):
    """Run the server on stdio until the client disconnects"""
    server = ICSCalendarMCPServer.from_settings(settings)
    await server.run()


def main():
    """Main entry point"""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    configure_logging(quiet=settings.quiet)
    apply_host_locale()

    try:
        asyncio.run(serve(settings))
    except Exception:
        logger.exception("Server failed to start")
        sys.exit(1)


if __name__ == "__main__":
    main()
