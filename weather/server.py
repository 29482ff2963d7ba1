# weather/server.py
# MCP server exposing a single tool backed by the NWS alerts API.
#
# Run:
#   pip install -e .
#   weather-server            # or: python -m weather
#
# The server speaks MCP over stdio, so logs go to stderr only.

import argparse
import logging
import sys
from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator, List, Optional

import httpx
from mcp.server.fastmcp import FastMCP
from pydantic import Field

from weather.nws import get_alerts

logger = logging.getLogger(__name__)

SERVER_NAME = "weather"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
STARTUP_MESSAGE = "Weather server is running. Press Ctrl+C to stop."

StateCode = Annotated[
    str,
    Field(min_length=2, max_length=2, description="Two-letter state code"),
]


@asynccontextmanager
async def _announce(server: FastMCP) -> AsyncIterator[dict]:
    # Entered once the transport is connected and the session starts.
    logger.info(STARTUP_MESSAGE)
    yield {}


def create_server(
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
    log_level: str = "INFO",
) -> FastMCP:
    """Create the MCP server with the ``get-alerts`` tool registered."""
    mcp = FastMCP(SERVER_NAME, lifespan=_announce, log_level=log_level)

    @mcp.tool(
        name="get-alerts",
        description="Get weather alerts for a state",
        structured_output=False,
    )
    async def get_alerts_tool(state: StateCode) -> str:
        return await get_alerts(state, transport=http_transport)

    return mcp


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="weather-server",
        description="Serve NWS weather alerts to an MCP host over stdio.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="stderr log level (default: INFO)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    try:
        mcp = create_server(log_level=args.log_level)
        mcp.run(transport="stdio")
    except KeyboardInterrupt:
        pass
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
