from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from agent_scripts.peekaboo.models import FocusOptions, TargetOptions, target_flags
from agent_scripts.results import CommandResult
from agent_scripts.runner import build_flags

if TYPE_CHECKING:
    from agent_scripts.peekaboo.base import PeekabooClient
    from agent_scripts.peekaboo.models import ScrollDirection, TypingProfile


class InputCommands:
    """Mouse and keyboard input.

    Every command takes optional ``target`` and ``focus`` option groups that
    pick the window and control how it is focused first.
    """

    def __init__(self, client: PeekabooClient) -> None:
        self._client = client

    def click(
        self,
        query: str | None = None,
        on: str | None = None,
        id: str | None = None,
        coords: tuple[int, int] | None = None,
        wait_for: int | None = None,
        double: bool = False,
        right: bool = False,
        target: TargetOptions | None = None,
        focus: FocusOptions | None = None,
    ) -> CommandResult:
        """Click by text query, element id (``on``/``id``) or ``(x, y)`` coordinates."""
        args = [query] if query else []
        args += build_flags(
            [
                ("--on", on),
                ("--id", id),
                ("--coords", f"{coords[0]},{coords[1]}" if coords else None),
                ("--wait-for", wait_for),
                ("--double", double),
                ("--right", right),
            ]
        )
        return self._client.command("click", args + target_flags(target, focus))

    def type(
        self,
        text: str | None = None,
        delay: int | None = None,
        profile: TypingProfile | None = None,
        wpm: int | None = None,
        tab: int | None = None,
        press_return: bool = False,
        escape: bool = False,
        delete: bool = False,
        clear: bool = False,
        target: TargetOptions | None = None,
        focus: FocusOptions | None = None,
    ) -> CommandResult:
        args = [text] if text else []
        args += build_flags(
            [
                ("--delay", delay),
                ("--profile", profile),
                ("--wpm", wpm),
                ("--tab", tab),
                ("--return", press_return),
                ("--escape", escape),
                ("--delete", delete),
                ("--clear", clear),
            ]
        )
        return self._client.command("type", args + target_flags(target, focus))

    def hotkey(
        self,
        keys: str,
        hold_duration: int | None = None,
        target: TargetOptions | None = None,
        focus: FocusOptions | None = None,
    ) -> CommandResult:
        """Press a key combination such as ``"cmd,shift,t"``."""
        args = [keys, *build_flags([("--hold-duration", hold_duration)])]
        return self._client.command("hotkey", args + target_flags(target, focus))

    def press(
        self,
        keys: str | Sequence[str],
        count: int | None = None,
        delay: int | None = None,
        hold: int | None = None,
        target: TargetOptions | None = None,
        focus: FocusOptions | None = None,
    ) -> CommandResult:
        args = [keys] if isinstance(keys, str) else [*keys]
        args += build_flags([("--count", count), ("--delay", delay), ("--hold", hold)])
        return self._client.command("press", args + target_flags(target, focus))

    def scroll(
        self,
        direction: ScrollDirection,
        amount: int | None = None,
        on: str | None = None,
        delay: int | None = None,
        smooth: bool = False,
        target: TargetOptions | None = None,
        focus: FocusOptions | None = None,
    ) -> CommandResult:
        args = build_flags(
            [
                ("--direction", direction),
                ("--amount", amount),
                ("--on", on),
                ("--delay", delay),
                ("--smooth", smooth),
            ]
        )
        return self._client.command("scroll", args + target_flags(target, focus))
