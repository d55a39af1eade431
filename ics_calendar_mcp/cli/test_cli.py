#!/usr/bin/env python3
"""
Tests for the ics-calendar command line interface
"""

import pytest
from typer.testing import CliRunner

from ics_calendar_mcp import __version__
from ics_calendar_mcp.calendar_feed.feed_utils import CalendarFeed, CalendarFetchError
from ics_calendar_mcp.cli.commands import query
from ics_calendar_mcp.cli.main import app

runner = CliRunner()

FEED_ICS = b"""BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//Test//Calendar//EN
BEGIN:VEVENT
UID:exam-1
SUMMARY:Final Exam
DTSTART:20250110T090000Z
DTEND:20250110T110000Z
LOCATION:Main Hall
END:VEVENT
END:VCALENDAR
"""


@pytest.fixture
def configured(monkeypatch):
    """Point the CLI at a fake feed"""
    monkeypatch.setattr("ics_calendar_mcp.config.load_dotenv", lambda: None)
    monkeypatch.setattr(query, "configure_logging", lambda quiet: None)
    monkeypatch.setenv("ICS_URL", "https://example.com/cal.ics")
    monkeypatch.setattr(CalendarFeed, "download", lambda self: FEED_ICS)


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_search_prints_matches(configured):
    result = runner.invoke(app, ["search", "exam"])
    assert result.exit_code == 0
    assert 'Search results for "exam"' in result.output
    assert "1. Final Exam" in result.output
    assert "Location: Main Hall" in result.output


def test_upcoming_rejects_out_of_range_days(configured):
    result = runner.invoke(app, ["upcoming", "--days", "91"])
    assert result.exit_code == 1
    assert "must be <= 90" in result.output


def test_today_runs(configured):
    result = runner.invoke(app, ["today"])
    assert result.exit_code == 0
    assert "Today's events" in result.output


def test_fetch_failure_exits_non_zero(configured, monkeypatch):
    def fail(self):
        raise CalendarFetchError("connection refused")

    monkeypatch.setattr(CalendarFeed, "download", fail)
    result = runner.invoke(app, ["today"])
    assert result.exit_code == 1
    assert "connection refused" in result.output


def test_missing_url_exits_non_zero(monkeypatch):
    monkeypatch.setattr("ics_calendar_mcp.config.load_dotenv", lambda: None)
    monkeypatch.delenv("ICS_URL", raising=False)
    result = runner.invoke(app, ["search", "exam"])
    assert result.exit_code == 1
    assert "ICS_URL is not set" in result.output
