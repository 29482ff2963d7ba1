# weather/__init__.py
# MCP server for active NWS weather alerts by US state.

from weather.nws import format_alert, get_alerts
from weather.server import create_server, main

__all__ = ["create_server", "format_alert", "get_alerts", "main"]
