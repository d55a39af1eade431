# Copyright 2025 ics-calendar-mcp Contributors. All Rights Reserved.
#
# Licensed under the MIT License.

__version__ = "1.0.0"
