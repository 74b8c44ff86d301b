"""Bridge between MCP tool calls and a Julia interpreter subprocess."""

__version__ = "0.1.0"
