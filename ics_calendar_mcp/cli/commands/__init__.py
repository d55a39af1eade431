# Copyright 2025 ics-calendar-mcp Contributors. All Rights Reserved.
#
# Licensed under the MIT License.

"""CLI commands for ics-calendar."""
