"""Task-level helpers on top of the peekaboo command wrappers.

These raise CommandError instead of returning failed results.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator

from agent_scripts.peekaboo.base import PeekabooClient
from agent_scripts.peekaboo.models import DetectionResult, UIElement
from agent_scripts.results import CommandError, CommandResult

logger = logging.getLogger(__name__)


def _unwrap(result: CommandResult, operation: str) -> Any:
    return result.unwrap("peekaboo", operation)


def screenshot(client: PeekabooClient, path: str, **options: Any) -> str:
    """Save a screenshot to ``path`` and return the path. Options go to ``image``."""
    _unwrap(client.capture.image(path=path, **options), "screenshot")
    return path


def detect_elements(client: PeekabooClient, **see_options: Any) -> DetectionResult:
    see_options.setdefault("annotate", True)
    data = _unwrap(client.capture.see(**see_options), "see")
    return DetectionResult.from_see(data if isinstance(data, dict) else {})


def find_elements(client: PeekabooClient, text: str, **see_options: Any) -> list[UIElement]:
    """Elements whose label contains ``text`` (case-insensitive)."""
    return [e for e in detect_elements(client, **see_options).elements if e.matches(text)]


def find_element(client: PeekabooClient, text: str, **see_options: Any) -> UIElement | None:
    matches = find_elements(client, text, **see_options)
    return matches[0] if matches else None


def find_elements_by_role(client: PeekabooClient, role: str, **see_options: Any) -> list[UIElement]:
    wanted = role.lower()
    return [e for e in detect_elements(client, **see_options).elements if e.role.lower() == wanted]


def click_element(client: PeekabooClient, element_id: str, **click_options: Any) -> None:
    _unwrap(client.input.click(on=element_id, **click_options), "click")


def click_text(client: PeekabooClient, text: str, **see_options: Any) -> UIElement:
    """Find the first element labelled ``text`` and click it."""
    element = find_element(client, text, **see_options)
    if element is None:
        raise CommandError("peekaboo", "click", f'Element with text "{text}" not found')
    click_element(client, element.id)
    return element


def see_and_click(client: PeekabooClient, text: str, **see_options: Any) -> UIElement:
    return click_text(client, text, **see_options)


def type_text(client: PeekabooClient, text: str, **type_options: Any) -> None:
    _unwrap(client.input.type(text=text, **type_options), "type")


def launch_app(client: PeekabooClient, name: str) -> None:
    _unwrap(client.app.launch(name=name, wait_until_ready=True), "launch")


def quit_app(client: PeekabooClient, name: str, force: bool = False) -> None:
    _unwrap(client.app.quit(app=name, force=force), "quit")


@contextmanager
def with_app(client: PeekabooClient, name: str, quit_after: bool = False) -> Iterator[str]:
    """Launch ``name`` for the duration of the block, optionally quitting it afterwards."""
    launch_app(client, name)
    time.sleep(client.config.launch_settle)
    try:
        yield name
    finally:
        if quit_after:
            try:
                quit_app(client, name)
            except CommandError as e:
                logger.warning("Could not quit %s: %s", name, e)


def quick_app_screenshot(client: PeekabooClient, app: str, path: str) -> str:
    return screenshot(client, path, app=app)


def wait_for_element(
    client: PeekabooClient,
    text: str,
    timeout: float | None = None,
    interval: float | None = None,
    **see_options: Any,
) -> UIElement:
    """Poll ``see`` until an element labelled ``text`` appears. Times are in seconds."""
    limit = client.config.wait_timeout if timeout is None else timeout
    pause = client.config.wait_interval if interval is None else interval
    deadline = time.monotonic() + limit

    while time.monotonic() < deadline:
        element = find_element(client, text, **see_options)
        if element is not None:
            return element
        time.sleep(pause)

    raise CommandError("peekaboo", "wait", f'Timeout waiting for element with text "{text}"')
