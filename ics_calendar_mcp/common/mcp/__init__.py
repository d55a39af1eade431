"""
MCP server utilities

Provides the base server class and tool registry.
"""

from .server_base import BaseMCPServer
from .tools import ToolArgumentError, ToolDefinition, ToolRegistry

__all__ = ["BaseMCPServer", "ToolArgumentError", "ToolDefinition", "ToolRegistry"]
