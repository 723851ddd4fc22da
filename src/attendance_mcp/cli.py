"""CLI entry point for running the attendance MCP server."""

from __future__ import annotations

import argparse

from starlette.middleware.cors import CORSMiddleware

from .attendance import build_attendance_server
from .logging import configure_logging, get_logger
from .settings import load_database_settings, load_gateway_settings

LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the attendance database MCP server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mechanism for MCP (default: stdio)",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Host for http transport")
    parser.add_argument("--port", type=int, default=8080, help="Port for http transport")
    parser.add_argument(
        "--read-only",
        action="store_true",
        help="Expose only read tools and reject every non-SELECT query",
    )
    parser.add_argument("--env-file", default=None, help="Environment file with DB_* settings")
    return parser


def main() -> None:
    args = build_parser().parse_args()

    gateway_settings = load_gateway_settings(args.env_file)
    if args.read_only:
        gateway_settings = gateway_settings.model_copy(update={"read_only": True})
    database_settings = load_database_settings(args.env_file)

    configure_logging(gateway_settings.log_level)
    LOGGER.info(
        "server_starting",
        transport=args.transport,
        database=database_settings.database,
        host=database_settings.host,
        read_only=gateway_settings.read_only,
    )
    server = build_attendance_server(database_settings, gateway_settings)

    if args.transport == "stdio":
        server.run()
    elif args.transport == "http":
        import uvicorn

        app = server.streamable_http_app()
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=["mcp-session-id", "mcp-protocol-version"],
        )
        uvicorn.run(app, host=args.host, port=args.port)
    else:
        raise ValueError(f"Unsupported transport {args.transport}")


if __name__ == "__main__":  # pragma: no cover
    main()
