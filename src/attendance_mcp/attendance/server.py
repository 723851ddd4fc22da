"""Factory for the attendance MCP server."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import TextContent
from mcp.types import Tool as MCPTool

from ..db import Database, MySQLDatabase
from ..logging import get_logger
from ..settings import DatabaseSettings, GatewaySettings, load_database_settings, load_gateway_settings
from .catalog import build_catalog
from .dispatcher import ToolDispatcher
from .formatter import to_text_content

LOGGER = get_logger(__name__)


class AttendanceServer(FastMCP):
    """FastMCP server whose tool listing and calls go through the catalog dispatcher."""

    def __init__(self, dispatcher: ToolDispatcher, **settings: Any) -> None:
        self.dispatcher = dispatcher
        super().__init__("attendance", **settings)

    async def list_tools(self) -> List[MCPTool]:
        return [
            MCPTool(
                name=definition.name,
                description=definition.description,
                inputSchema=definition.input_schema(),
            )
            for definition in self.dispatcher.definitions()
        ]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> List[TextContent]:
        # The dispatcher blocks on the database; keep the event loop free.
        envelope = await asyncio.to_thread(self.dispatcher.dispatch, name, arguments or {})
        return [to_text_content(envelope)]


def build_attendance_server(
    database_settings: Optional[DatabaseSettings] = None,
    gateway_settings: Optional[GatewaySettings] = None,
    database: Optional[Database] = None,
) -> AttendanceServer:
    gateway = gateway_settings or load_gateway_settings()
    if database is None:
        database = MySQLDatabase(database_settings or load_database_settings())

    catalog = build_catalog(gateway.resolved_leave_year(), read_only=gateway.read_only)
    server = AttendanceServer(
        ToolDispatcher(catalog, database),
        json_response=True,
        stateless_http=True,
    )
    for name in catalog:
        LOGGER.info("tool_registered", tool=name, read_only=gateway.read_only)
    return server


def run() -> None:
    server = build_attendance_server()
    server.run()
