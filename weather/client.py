# weather/client.py
# Minimal MCP client that launches the weather server over stdio and calls get-alerts.
#
# Usage:
#   weather-client                       # spawns `python -m weather`
#   weather-client path/to/server.py     # spawns another server script
# Then try commands:
#   alerts CA

import asyncio
import sys
from contextlib import AsyncExitStack
from typing import List, Optional

from mcp import ClientSession
from mcp.client.stdio import StdioServerParameters, stdio_client
from mcp.shared.exceptions import McpError

PROMPT = "\nQuery (alerts <STATE> | quit): "
USAGE = "Unknown command. Try: alerts CA"


def server_parameters(argv: List[str]) -> StdioServerParameters:
    if argv:
        return StdioServerParameters(command=sys.executable, args=[argv[0]], env=None)
    return StdioServerParameters(command=sys.executable, args=["-m", "weather"], env=None)


async def run_command(session: ClientSession, line: str) -> Optional[str]:
    """Dispatch one command line; returns the text to print, or None to stop."""
    q = line.strip()
    if q.lower() == "quit":
        return None
    if not q:
        return ""

    parts = q.split()
    if parts[0].lower() != "alerts":
        return USAGE
    if len(parts) != 2:
        return "Usage: alerts <STATE>"

    res = await session.call_tool("get-alerts", {"state": parts[1]})
    text = "\n".join(c.text for c in res.content if c.type == "text")
    if res.isError:
        return f"Error: {text}"
    return text


async def main_async(argv: List[str]) -> None:
    async with AsyncExitStack() as stack:
        params = server_parameters(argv)
        reader, writer = await stack.enter_async_context(stdio_client(params))
        session: ClientSession = await stack.enter_async_context(ClientSession(reader, writer))
        await session.initialize()

        tools = (await session.list_tools()).tools
        print("Connected. Tools available:", [t.name for t in tools])

        while True:
            try:
                line = input(PROMPT)
            except (EOFError, KeyboardInterrupt):
                break
            try:
                out = await run_command(session, line)
            except McpError as e:
                print(f"Error: {e}")
                continue
            if out is None:
                break
            if out:
                print(out)


def main() -> None:
    asyncio.run(main_async(sys.argv[1:]))


if __name__ == "__main__":
    main()
