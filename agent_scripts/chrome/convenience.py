"""One-shot browser tasks built on ChromeSession.

Each helper opens its own session unless handed one, and raises CommandError
when a tool call fails.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
from contextlib import asynccontextmanager
from typing import AsyncIterator

from agent_scripts.chrome.models import ScreenshotFormat, ToolOutput, parse_pages
from agent_scripts.chrome.session import ChromeSession
from agent_scripts.config.models import ChromeConfig
from agent_scripts.results import CommandResult

logger = logging.getLogger(__name__)


def _unwrap(result: CommandResult, operation: str) -> ToolOutput:
    return result.unwrap("chrome", operation)


async def _pkill(pattern: str) -> None:
    try:
        proc = await asyncio.create_subprocess_exec(
            "pkill", "-f", pattern, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
        )
    except FileNotFoundError:
        logger.warning("pkill not available; leaving %r processes running", pattern)
        return
    # Exit status 1 only means nothing matched.
    await proc.wait()


async def ensure_clean_state(
    session: ChromeSession | None = None, config: ChromeConfig | None = None
) -> None:
    """Close ``session`` and kill leftover browser and server processes."""
    if config is None:
        config = session.config if session is not None else ChromeConfig()
    if session is not None:
        await session.close()
    for pattern in config.cleanup_patterns:
        await _pkill(pattern)
    await asyncio.sleep(config.settle_delay)


@asynccontextmanager
async def browser_session(
    config: ChromeConfig | None = None, keep_open: bool = False
) -> AsyncIterator[ChromeSession]:
    """Fresh browser for the block.

    With ``keep_open`` the session outlives the block and the caller must close
    it (or pass it to ensure_clean_state).
    """
    config = config or ChromeConfig()
    await ensure_clean_state(config=config)
    session = await ChromeSession(config).open()
    try:
        yield session
    finally:
        if not keep_open:
            await ensure_clean_state(session)


@asynccontextmanager
async def _use_session(
    session: ChromeSession | None, config: ChromeConfig | None
) -> AsyncIterator[ChromeSession]:
    # A caller's session is used as is and left open.
    if session is not None:
        yield session
        return
    async with browser_session(config) as fresh:
        yield fresh


async def _navigate(
    session: ChromeSession, url: str, wait_for_text: str | None, wait_timeout: int | None
) -> None:
    _unwrap(await session.tools.navigate_page(url=url), "navigate_page")
    if wait_for_text:
        _unwrap(await session.tools.wait_for(wait_for_text, timeout=wait_timeout), "wait_for")


async def navigate_and_screenshot(
    url: str,
    file_path: str,
    wait_for_text: str | None = None,
    wait_timeout: int | None = None,
    full_page: bool | None = None,
    format: ScreenshotFormat | None = None,
    quality: int | None = None,
    session: ChromeSession | None = None,
    config: ChromeConfig | None = None,
) -> str:
    async with _use_session(session, config) as chrome:
        await _navigate(chrome, url, wait_for_text, wait_timeout)
        _unwrap(
            await chrome.tools.take_screenshot(
                format=format, quality=quality, full_page=full_page, file_path=file_path
            ),
            "take_screenshot",
        )
    return file_path


async def navigate_and_snapshot(
    url: str,
    wait_for_text: str | None = None,
    wait_timeout: int | None = None,
    verbose: bool | None = None,
    session: ChromeSession | None = None,
    config: ChromeConfig | None = None,
) -> str:
    """Return the accessibility snapshot text of ``url``."""
    async with _use_session(session, config) as chrome:
        await _navigate(chrome, url, wait_for_text, wait_timeout)
        output = _unwrap(await chrome.tools.take_snapshot(verbose=verbose), "take_snapshot")
    return output.text


async def quick_screenshot(
    url: str,
    file_path: str,
    full_page: bool = False,
    session: ChromeSession | None = None,
    config: ChromeConfig | None = None,
) -> str:
    return await navigate_and_screenshot(
        url, file_path, full_page=full_page, session=session, config=config
    )


async def close_all_pages(session: ChromeSession) -> int:
    """Close every page but the first. Returns how many were closed."""
    pages = parse_pages(_unwrap(await session.tools.list_pages(), "list_pages"))
    closed = 0
    for page in pages[1:]:
        result = await session.tools.close_page(page.id)
        if result.success:
            closed += 1
        else:
            logger.debug("Could not close page %s: %s", page.id, result.error)
    return closed
