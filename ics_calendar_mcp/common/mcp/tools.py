"""
Tool utilities for MCP servers

Provides utilities for defining, validating and dispatching MCP tools.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

import mcp.types as types

logger = logging.getLogger(__name__)


class ToolArgumentError(ValueError):
    """Raised when a tool call is rejected before its handler runs"""


@dataclass
class ToolDefinition:
    """Definition of an MCP tool"""
    name: str
    description: str
    input_schema: Dict[str, Any]
    handler: Callable[[Dict[str, Any]], Awaitable[Any]]


class ToolRegistry:
    """Registry for managing MCP tools"""

    def __init__(self):
        """Initialize tool registry"""
        self.tools: Dict[str, ToolDefinition] = {}

    def register(self,
                 name: str,
                 description: str,
                 input_schema: Dict[str, Any],
                 handler: Callable[[Dict[str, Any]], Awaitable[Any]]):
        """Register a new tool"""
        self.tools[name] = ToolDefinition(
            name=name,
            description=description,
            input_schema=input_schema,
            handler=handler
        )

    def get_tool_definitions(self) -> List[types.Tool]:
        """Get MCP tool definitions"""
        return [
            types.Tool(
                name=tool_def.name,
                description=tool_def.description,
                inputSchema=tool_def.input_schema
            )
            for tool_def in self.tools.values()
        ]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        """Validate arguments and call a registered tool.

        Validation failures raise ToolArgumentError before the handler runs.
        Handler failures are logged and re-raised so the MCP server reports
        the call as an error instead of a normal result.
        """
        arguments = self.validate_arguments(name, arguments or {})
        tool_def = self.tools[name]

        try:
            result = await tool_def.handler(arguments)
        except Exception:
            logger.exception("Tool %s failed", name)
            raise

        if isinstance(result, str):
            return [types.TextContent(type="text", text=result)]
        return result

    def validate_arguments(self, tool_name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """Validate tool arguments against the schema and apply defaults.

        Returns a new argument dict with declared defaults filled in.
        """
        if tool_name not in self.tools:
            raise ToolArgumentError(f"Unknown tool: {tool_name}")

        schema = self.tools[tool_name].input_schema
        properties = schema.get('properties', {})

        missing_fields = [field for field in schema.get('required', []) if field not in arguments]
        if missing_fields:
            raise ToolArgumentError(f"Missing required fields: {', '.join(missing_fields)}")

        if schema.get('additionalProperties') is False:
            unknown_fields = [field for field in arguments if field not in properties]
            if unknown_fields:
                raise ToolArgumentError(f"Unexpected fields: {', '.join(unknown_fields)}")

        validated = dict(arguments)
        for field_name, field_schema in properties.items():
            if field_name not in validated:
                if 'default' in field_schema:
                    validated[field_name] = field_schema['default']
                continue
            validated[field_name] = self._validate_field(field_name, validated[field_name], field_schema)

        return validated

    def _validate_field(self, field_name: str, value: Any, field_schema: Dict[str, Any]) -> Any:
        """Check one value against its property schema"""
        expected_type = field_schema.get('type')
        if expected_type and not self._validate_type(value, expected_type):
            raise ToolArgumentError(f"Field {field_name} should be of type {expected_type}")

        if expected_type == 'integer':
            value = int(value)

        if isinstance(value, (int, float)):
            if 'minimum' in field_schema and value < field_schema['minimum']:
                raise ToolArgumentError(
                    f"Field {field_name} must be >= {field_schema['minimum']}, got {value}"
                )
            if 'maximum' in field_schema and value > field_schema['maximum']:
                raise ToolArgumentError(
                    f"Field {field_name} must be <= {field_schema['maximum']}, got {value}"
                )

        if isinstance(value, str):
            if 'minLength' in field_schema and len(value) < field_schema['minLength']:
                raise ToolArgumentError(
                    f"Field {field_name} must be at least {field_schema['minLength']} character(s) long"
                )

        return value

    def _validate_type(self, value: Any, expected_type: str) -> bool:
        """Validate value against expected JSON schema type"""
        # bool is an int subclass but never a JSON number
        if isinstance(value, bool):
            return expected_type == 'boolean'

        if expected_type == 'integer':
            return isinstance(value, int) or (isinstance(value, float) and value.is_integer())

        type_mapping = {
            'string': str,
            'number': (int, float),
            'boolean': bool,
            'array': list,
            'object': dict
        }

        if expected_type in type_mapping:
            return isinstance(value, type_mapping[expected_type])

        return True  # Unknown type, allow it
