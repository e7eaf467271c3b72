"""Explicitly scoped MCP session with the chrome-devtools-mcp server."""

from __future__ import annotations

import json
import logging
import os
from contextlib import AsyncExitStack
from functools import cached_property
from typing import Any

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client

from agent_scripts.chrome.models import ToolImage, ToolOutput
from agent_scripts.chrome.tools import ChromeTools
from agent_scripts.config.models import ChromeConfig
from agent_scripts.results import CommandResult

logger = logging.getLogger(__name__)


def _field(obj: Any, name: str, alias: str) -> Any:
    """Read a result field under its snake_case name or its wire alias."""
    value = getattr(obj, name, None)
    return getattr(obj, alias, None) if value is None else value


def _tool_output(result: Any) -> ToolOutput:
    texts: list[str] = []
    images: list[ToolImage] = []
    for item in result.content or []:
        if getattr(item, "type", None) == "image":
            mime_type = _field(item, "mime_type", "mimeType") or ""
            images.append(ToolImage(mime_type=mime_type, data=item.data))
        elif hasattr(item, "text"):
            texts.append(item.text)

    text = "\n".join(texts)
    data = _field(result, "structured_content", "structuredContent")
    if data is None and text:
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            data = None
    return ToolOutput(text=text, data=data, images=images)


class ChromeSession:
    """One chrome-devtools-mcp server process and its client session.

    Use as ``async with ChromeSession(config) as chrome:`` or call open() and
    close() yourself. Nothing is shared between instances.
    """

    def __init__(self, config: ChromeConfig | None = None) -> None:
        self.config = config or ChromeConfig()
        self._stack: AsyncExitStack | None = None
        self._session: ClientSession | None = None

    @property
    def is_open(self) -> bool:
        return self._session is not None

    async def open(self) -> ChromeSession:
        if self._session is not None:
            return self

        params = StdioServerParameters(
            command=self.config.command,
            args=list(self.config.args),
            env={**os.environ, **self.config.env},
        )
        stack = AsyncExitStack()
        try:
            read, write = await stack.enter_async_context(stdio_client(params))
            session = await stack.enter_async_context(ClientSession(read, write))
            await session.initialize()
        except BaseException:
            await stack.aclose()
            raise

        logger.debug("Connected to %s %s", self.config.command, " ".join(self.config.args))
        self._stack, self._session = stack, session
        return self

    async def close(self) -> None:
        """Shut down the server process. Safe to call more than once."""
        stack, self._stack, self._session = self._stack, None, None
        if stack is None:
            return
        try:
            await stack.aclose()
        except Exception as e:
            logger.warning("Error closing chrome-devtools-mcp session: %s", e)

    async def __aenter__(self) -> ChromeSession:
        return await self.open()

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def call(self, tool: str, params: dict[str, Any] | None = None) -> CommandResult:
        """Call an MCP tool; ``data`` of a successful result is a ToolOutput."""
        if self._session is None:
            return CommandResult.fail("Chrome session is not open")

        # The server rejects explicit nulls for optional arguments.
        arguments = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug("chrome %s %s", tool, arguments)
        try:
            result = await self._session.call_tool(tool, arguments)
        except Exception as e:
            logger.warning("chrome %s failed: %s", tool, e)
            return CommandResult.fail(f"{tool}: {e}")

        output = _tool_output(result)
        if _field(result, "is_error", "isError"):
            return CommandResult.fail(output.text or f"{tool} returned an error")
        return CommandResult.ok(output)

    @cached_property
    def tools(self) -> ChromeTools:
        return ChromeTools(self)
