"""Executor for the ``peekaboo`` macOS automation CLI."""

from __future__ import annotations

import json
import logging
from functools import cached_property
from typing import Sequence

from pydantic import ValidationError

from agent_scripts.config.models import PeekabooConfig
from agent_scripts.peekaboo.capture import CaptureCommands
from agent_scripts.peekaboo.interaction import InputCommands
from agent_scripts.peekaboo.models import Envelope
from agent_scripts.peekaboo.system import (
    AppCommands,
    ClipboardCommands,
    DockCommands,
    ListCommands,
    MenuCommands,
    WindowCommands,
)
from agent_scripts.results import CommandResult
from agent_scripts.runner import (
    CompletedCommand,
    build_flags,
    failure_message,
    parse_output,
    run_command,
)

logger = logging.getLogger(__name__)


def _envelope(text: str) -> Envelope | None:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(raw, dict) or "success" not in raw:
        return None
    try:
        return Envelope.model_validate(raw)
    except ValidationError:
        return None


def _error_from(cmd: CompletedCommand) -> str:
    """peekaboo reports errors as JSON on stderr or stdout; fall back to raw text."""
    for text in (cmd.stderr, cmd.stdout):
        if not text or not text.strip():
            continue
        envelope = _envelope(text.strip())
        if envelope is not None:
            return envelope.error_message()
    return failure_message(cmd)


class PeekabooClient:
    """Runs peekaboo and unwraps its JSON envelope exactly once."""

    def __init__(self, config: PeekabooConfig | None = None) -> None:
        self.config = config or PeekabooConfig()

    def exec(self, args: Sequence[str], json_output: bool = True) -> CommandResult:
        argv = [self.config.binary, *args]
        if json_output:
            argv.append("--json")
        cmd = run_command(argv, timeout=self.config.timeout)
        if not cmd.ok:
            return CommandResult.fail(_error_from(cmd))
        if not json_output:
            return CommandResult.ok(cmd.stdout.strip() or None)

        envelope = _envelope(cmd.stdout.strip())
        if envelope is None:
            return CommandResult.ok(parse_output(cmd.stdout))
        if not envelope.success:
            return CommandResult.fail(envelope.error_message())
        return CommandResult.ok(envelope.data)

    def command(
        self, command: str, args: Sequence[str] = (), json_output: bool = True
    ) -> CommandResult:
        """``peekaboo <command> <args>``; command may contain spaces (``"list apps"``)."""
        return self.exec([*command.split(), *args], json_output=json_output)

    def raw(self, command: str, args: Sequence[str] = ()) -> CommandResult:
        return self.command(command, args, json_output=False)

    def open(
        self,
        target: str,
        app: str | None = None,
        bundle_id: str | None = None,
        wait_until_ready: bool = False,
        no_focus: bool = False,
    ) -> CommandResult:
        """Open a URL or file, optionally with a specific app."""
        args = [
            target,
            *build_flags(
                [
                    ("--app", app),
                    ("--bundle-id", bundle_id),
                    ("--wait-until-ready", wait_until_ready),
                    ("--no-focus", no_focus),
                ]
            ),
        ]
        return self.command("open", args)

    def sleep(self, ms: int) -> CommandResult:
        return self.command("sleep", [str(ms)])

    @cached_property
    def capture(self) -> CaptureCommands:
        return CaptureCommands(self)

    @cached_property
    def input(self) -> InputCommands:
        return InputCommands(self)

    @cached_property
    def list(self) -> ListCommands:
        return ListCommands(self)

    @cached_property
    def app(self) -> AppCommands:
        return AppCommands(self)

    @cached_property
    def window(self) -> WindowCommands:
        return WindowCommands(self)

    @cached_property
    def clipboard(self) -> ClipboardCommands:
        return ClipboardCommands(self)

    @cached_property
    def menu(self) -> MenuCommands:
        return MenuCommands(self)

    @cached_property
    def dock(self) -> DockCommands:
        return DockCommands(self)
