"""
Base MCP server implementation

Provides the stdio plumbing shared by MCP server implementations.
"""

import logging
from typing import Any, Dict, List

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
import mcp.server.stdio
import mcp.types as types

from ics_calendar_mcp.common.mcp.tools import ToolRegistry

logger = logging.getLogger(__name__)


class BaseMCPServer:
    """Base class for MCP server implementations"""

    def __init__(self, server_name: str, server_version: str = "1.0.0"):
        """Initialize base MCP server"""
        self.server_name = server_name
        self.server_version = server_version
        self.server = Server(server_name)
        self.tool_registry = ToolRegistry()
        self.setup_handlers()

    def setup_handlers(self):
        """Setup MCP server handlers"""
        @self.server.list_tools()
        async def handle_list_tools() -> List[types.Tool]:
            return await self.list_tools()

        @self.server.call_tool()
        async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
            return await self.call_tool(name, arguments)

    async def list_tools(self) -> List[types.Tool]:
        """List all registered tools"""
        return self.tool_registry.get_tool_definitions()

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        """Dispatch a tool call through the registry.

        Exceptions propagate; the MCP server converts them into an error result.
        """
        return await self.tool_registry.call_tool(name, arguments)

    def create_text_response(self, text: str) -> List[types.TextContent]:
        """Create a standard text response"""
        return [types.TextContent(type="text", text=text)]

    async def run(self):
        """Run the MCP server on stdio"""
        logger.info("Starting %s %s on stdio", self.server_name, self.server_version)
        async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=self.server_name,
                    server_version=self.server_version,
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={}
                    )
                )
            )
