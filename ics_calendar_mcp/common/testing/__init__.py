"""
Testing utilities

Provides base classes and helpers for testing MCP servers.
"""

from .base_test import BaseMCPTest, StubCalendarFeed
from .mcp_test import MCPServerTester

__all__ = ["BaseMCPTest", "MCPServerTester", "StubCalendarFeed"]
