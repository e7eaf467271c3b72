"""Subprocess execution and flag building shared by the CLI wrappers."""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

logger = logging.getLogger(__name__)

# Return code used when the process could not be started or was killed.
NOT_RUN = -1


@dataclass
class CompletedCommand:
    """Captured output of a finished (or failed-to-start) process."""

    argv: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_command(argv: Sequence[str], timeout: float | None = None) -> CompletedCommand:
    """Run argv without a shell and capture its output.

    A missing binary or a timeout is reported through ``returncode == NOT_RUN``
    with a message in ``stderr`` rather than an exception.
    """
    argv = [str(a) for a in argv]
    logger.debug("exec: %s", " ".join(argv))
    try:
        proc = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        logger.warning("%s not found on PATH", argv[0])
        return CompletedCommand(argv, NOT_RUN, stderr=f"{argv[0]}: command not found")
    except subprocess.TimeoutExpired:
        logger.warning("%s timed out after %ss", argv[0], timeout)
        return CompletedCommand(argv, NOT_RUN, stderr=f"{argv[0]} timed out after {timeout}s")

    if proc.returncode != 0:
        logger.warning(
            "%s exited %d: %s", argv[0], proc.returncode, (proc.stderr or "")[:200]
        )
    return CompletedCommand(argv, proc.returncode, proc.stdout or "", proc.stderr or "")


def parse_output(stdout: str) -> Any:
    """JSON when the text parses as JSON, otherwise the stripped text. Empty is None."""
    text = stdout.strip()
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def failure_message(cmd: CompletedCommand) -> str:
    """Best human-readable reason for a failed command."""
    for text in (cmd.stderr, cmd.stdout):
        if text and text.strip():
            return text.strip()
    return f"{cmd.argv[0]} exited with status {cmd.returncode}"


def build_flags(options: Iterable[tuple[str, Any]]) -> list[str]:
    """Translate ordered (flag, value) pairs into argv.

    None, False and "" are skipped. True emits the bare flag. Lists and tuples
    repeat the flag once per element. Anything else is passed as ``str(value)``.
    """
    args: list[str] = []
    for flag, value in options:
        if value is None or value is False or value == "":
            continue
        if value is True:
            args.append(flag)
        elif isinstance(value, (list, tuple)):
            for item in value:
                args.extend([flag, str(item)])
        else:
            args.extend([flag, str(value)])
    return args
