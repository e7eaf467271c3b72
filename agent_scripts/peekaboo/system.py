"""Apps, windows, menus, Dock, clipboard and discovery commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from agent_scripts.results import CommandResult
from agent_scripts.runner import build_flags

if TYPE_CHECKING:
    from agent_scripts.peekaboo.base import PeekabooClient
    from agent_scripts.peekaboo.models import WindowAction


class _Group:
    def __init__(self, client: PeekabooClient) -> None:
        self._client = client


class ListCommands(_Group):
    def apps(self) -> CommandResult:
        return self._client.command("list apps")

    def windows(self, app: str, include_details: Sequence[str] | None = None) -> CommandResult:
        details = ",".join(include_details) if include_details else None
        return self._client.command(
            "list windows", build_flags([("--app", app), ("--include-details", details)])
        )

    def screens(self) -> CommandResult:
        return self._client.command("list screens")

    def permissions(self) -> CommandResult:
        return self._client.command("list permissions")

    def menubar(self) -> CommandResult:
        return self._client.command("list menubar")


class AppCommands(_Group):
    def launch(
        self,
        name: str | None = None,
        bundle_id: str | None = None,
        open: Sequence[str] | None = None,
        wait_until_ready: bool = False,
        no_focus: bool = False,
    ) -> CommandResult:
        """Launch by name or bundle id. Each ``open`` entry is passed as ``--open``."""
        args = [name] if name else []
        args += build_flags(
            [
                ("--bundle-id", bundle_id),
                ("--open", list(open or [])),
                ("--wait-until-ready", wait_until_ready),
                ("--no-focus", no_focus),
            ]
        )
        return self._client.command("app launch", args)

    def quit(
        self,
        app: str | None = None,
        all: bool = False,
        except_apps: Sequence[str] | None = None,
        force: bool = False,
    ) -> CommandResult:
        excluded = ",".join(except_apps) if except_apps else None
        return self._client.command(
            "app quit",
            build_flags([("--app", app), ("--all", all), ("--except", excluded), ("--force", force)]),
        )

    def switch(self, to: str | None = None, cycle: bool = False) -> CommandResult:
        return self._client.command("app switch", build_flags([("--to", to), ("--cycle", cycle)]))

    def hide(self, app: str) -> CommandResult:
        return self._client.command("app hide", ["--app", app])

    def unhide(self, app: str) -> CommandResult:
        return self._client.command("app unhide", ["--app", app])

    def list(self) -> CommandResult:
        return self._client.command("app list")

    def relaunch(
        self, name: str, wait: float | None = None, wait_until_ready: bool = False
    ) -> CommandResult:
        args = [name, *build_flags([("--wait", wait), ("--wait-until-ready", wait_until_ready)])]
        return self._client.command("app relaunch", args)


def _window_target(
    app: str | None, title: str | None, index: int | None, window_id: int | None
) -> list[str]:
    return build_flags(
        [
            ("--app", app),
            ("--window-title", title),
            ("--window-index", index),
            ("--window-id", window_id),
        ]
    )


class WindowCommands(_Group):
    """Window management. A window is picked by app plus title, index or id."""

    def act(
        self,
        action: WindowAction,
        app: str | None = None,
        title: str | None = None,
        index: int | None = None,
        window_id: int | None = None,
    ) -> CommandResult:
        """close, minimize, maximize or focus."""
        return self._client.command(f"window {action}", _window_target(app, title, index, window_id))

    def close(self, app: str | None = None, **kwargs) -> CommandResult:
        return self.act("close", app, **kwargs)

    def minimize(self, app: str | None = None, **kwargs) -> CommandResult:
        return self.act("minimize", app, **kwargs)

    def maximize(self, app: str | None = None, **kwargs) -> CommandResult:
        return self.act("maximize", app, **kwargs)

    def focus(self, app: str | None = None, **kwargs) -> CommandResult:
        return self.act("focus", app, **kwargs)

    def move(
        self,
        x: int,
        y: int,
        app: str | None = None,
        title: str | None = None,
        index: int | None = None,
        window_id: int | None = None,
    ) -> CommandResult:
        args = ["--x", str(x), "--y", str(y), *_window_target(app, title, index, window_id)]
        return self._client.command("window move", args)

    def resize(
        self,
        width: int,
        height: int,
        app: str | None = None,
        title: str | None = None,
        index: int | None = None,
        window_id: int | None = None,
    ) -> CommandResult:
        args = [
            "--width", str(width),
            "--height", str(height),
            *_window_target(app, title, index, window_id),
        ]
        return self._client.command("window resize", args)

    def set_bounds(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        app: str | None = None,
        title: str | None = None,
        index: int | None = None,
        window_id: int | None = None,
    ) -> CommandResult:
        args = [
            "--x", str(x),
            "--y", str(y),
            "--width", str(width),
            "--height", str(height),
            *_window_target(app, title, index, window_id),
        ]
        return self._client.command("window set-bounds", args)

    def list(self, app: str) -> CommandResult:
        return self._client.command("window list", ["--app", app])


class ClipboardCommands(_Group):
    def get(self, prefer: str | None = None, output: str | None = None) -> CommandResult:
        args = ["--action", "get", *build_flags([("--prefer", prefer), ("--output", output)])]
        return self._client.command("clipboard", args)

    def set(
        self,
        text: str | None = None,
        file_path: str | None = None,
        image_path: str | None = None,
        data_base64: str | None = None,
        uti: str | None = None,
        also_text: str | None = None,
        allow_large: bool = False,
        verify: bool = False,
    ) -> CommandResult:
        args = [
            "--action", "set",
            *build_flags(
                [
                    ("--text", text),
                    ("--file-path", file_path),
                    ("--image-path", image_path),
                    ("--data-base64", data_base64),
                    ("--uti", uti),
                    ("--also-text", also_text),
                    ("--allow-large", allow_large),
                    ("--verify", verify),
                ]
            ),
        ]
        return self._client.command("clipboard", args)

    def clear(self) -> CommandResult:
        return self._client.command("clipboard", ["--action", "clear"])

    def save(self, slot: str | None = None) -> CommandResult:
        return self._client.command("clipboard", ["--action", "save", *build_flags([("--slot", slot)])])

    def restore(self, slot: str | None = None) -> CommandResult:
        return self._client.command(
            "clipboard", ["--action", "restore", *build_flags([("--slot", slot)])]
        )

    def load(self, file_path: str) -> CommandResult:
        return self._client.command("clipboard", ["--action", "load", "--file-path", file_path])


class MenuCommands(_Group):
    def list(self, app: str) -> CommandResult:
        return self._client.command("menu list", ["--app", app])

    def list_all(self) -> CommandResult:
        return self._client.command("menu list-all")

    def click(self, app: str, path: str) -> CommandResult:
        """Click a menu item by path, e.g. ``"File > Save"``."""
        return self._client.command("menu click", ["--app", app, "--path", path])

    def click_extra(self, title: str) -> CommandResult:
        return self._client.command("menu click-extra", ["--title", title])


class DockCommands(_Group):
    def launch(self, app: str) -> CommandResult:
        return self._client.command("dock launch", [app])

    def right_click(self, app: str, select: str | None = None) -> CommandResult:
        return self._client.command(
            "dock right-click", ["--app", app, *build_flags([("--select", select)])]
        )

    def hide(self) -> CommandResult:
        return self._client.command("dock hide")

    def show(self) -> CommandResult:
        return self._client.command("dock show")

    def list(self) -> CommandResult:
        return self._client.command("dock list")
