from __future__ import annotations

from typing import TYPE_CHECKING

from agent_scripts.results import CommandResult
from agent_scripts.runner import build_flags

if TYPE_CHECKING:
    from agent_scripts.peekaboo.base import PeekabooClient
    from agent_scripts.peekaboo.models import CaptureEngine, CaptureMode, ImageFormat


class CaptureCommands:
    """Screenshots and UI element detection."""

    def __init__(self, client: PeekabooClient) -> None:
        self._client = client

    def see(
        self,
        app: str | None = None,
        pid: int | None = None,
        window_title: str | None = None,
        window_id: int | None = None,
        mode: CaptureMode | None = None,
        path: str | None = None,
        capture_engine: CaptureEngine | None = None,
        screen_index: int | None = None,
        analyze: str | None = None,
        timeout_seconds: float | None = None,
        annotate: bool = False,
        menubar: bool = False,
        no_web_focus: bool = False,
    ) -> CommandResult:
        """Capture a window and return its accessibility elements and a snapshot id."""
        args = build_flags(
            [
                ("--app", app),
                ("--pid", pid),
                ("--window-title", window_title),
                ("--window-id", window_id),
                ("--mode", mode),
                ("--path", path),
                ("--capture-engine", capture_engine),
                ("--screen-index", screen_index),
                ("--analyze", analyze),
                ("--timeout-seconds", timeout_seconds),
                ("--annotate", annotate),
                ("--menubar", menubar),
                ("--no-web-focus", no_web_focus),
            ]
        )
        return self._client.command("see", args)

    def image(
        self,
        app: str | None = None,
        pid: int | None = None,
        path: str | None = None,
        mode: CaptureMode | None = None,
        window_title: str | None = None,
        window_index: int | None = None,
        window_id: int | None = None,
        screen_index: int | None = None,
        format: ImageFormat | None = None,
        retina: bool = False,
        analyze: str | None = None,
    ) -> CommandResult:
        args = build_flags(
            [
                ("--app", app),
                ("--pid", pid),
                ("--path", path),
                ("--mode", mode),
                ("--window-title", window_title),
                ("--window-index", window_index),
                ("--window-id", window_id),
                ("--screen-index", screen_index),
                ("--format", format),
                ("--retina", retina),
                ("--analyze", analyze),
            ]
        )
        return self._client.command("image", args)
