"""
Command line entry point.

Serves the deck and card tools over MCP stdio (default) or HTTP.
Logs go to stderr so stdout stays reserved for the stdio protocol.
"""

import argparse
import logging
import sys

import uvicorn

from hearthdecks.config import settings
from hearthdecks.mcp.server import run_stdio

logger = logging.getLogger(__name__)

TRANSPORTS = ("stdio", "http")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hearthdecks",
        description="Hearthstone deck code and card lookup tool server",
    )
    parser.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default="stdio",
        help="Transport to serve on (default: stdio)",
    )
    parser.add_argument("--host", default=settings.http_host, help="HTTP bind host")
    parser.add_argument("--port", type=int, default=settings.http_port, help="HTTP bind port")
    parser.add_argument(
        "--log-level",
        default="DEBUG" if settings.debug else "INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def run_http(host: str, port: int) -> None:
    """Serve the HTTP API with uvicorn."""
    logger.info("%s running on http://%s:%d", settings.app_name, host, port)
    logger.info("SSE endpoint: http://%s:%d/sse", host, port)
    logger.info("Tools endpoint: http://%s:%d/tools", host, port)
    logger.info("Health check: http://%s:%d/health", host, port)
    uvicorn.run("hearthdecks.main:app", host=host, port=port, log_level="info")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.transport == "http":
        run_http(args.host, args.port)
    else:
        run_stdio()


if __name__ == "__main__":
    main()
