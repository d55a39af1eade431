# Copyright 2025 ics-calendar-mcp Contributors. All Rights Reserved.
#
# Licensed under the MIT License.

"""Entry point for ``python -m ics_calendar_mcp``."""

from ics_calendar_mcp.cli.main import app

if __name__ == "__main__":
    app()
