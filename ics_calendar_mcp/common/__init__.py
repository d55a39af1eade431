"""Shared MCP, logging and testing utilities."""
