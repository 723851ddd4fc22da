"""MCP gateway exposing the attendance database as agent tools."""

__version__ = "1.0.0"
