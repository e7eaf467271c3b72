"""Executor for the Atlassian ``acli`` command line."""

from __future__ import annotations

import logging
from functools import cached_property
from typing import Sequence

from agent_scripts.acli.board import BoardCommands
from agent_scripts.acli.project import ProjectCommands
from agent_scripts.acli.workitem import WorkitemCommands
from agent_scripts.config.models import AcliConfig
from agent_scripts.results import CommandResult
from agent_scripts.runner import failure_message, parse_output, run_command

logger = logging.getLogger(__name__)


class AcliClient:
    """Runs ``acli`` and returns a CommandResult for every call."""

    def __init__(self, config: AcliConfig | None = None) -> None:
        self.config = config or AcliConfig()

    def exec(self, args: Sequence[str]) -> CommandResult:
        cmd = run_command([self.config.binary, *args], timeout=self.config.timeout)
        if not cmd.ok:
            return CommandResult.fail(failure_message(cmd))
        return CommandResult.ok(parse_output(cmd.stdout))

    def jira(self, subcommand: str, args: Sequence[str] = ()) -> CommandResult:
        """``acli jira <subcommand> --json <args>``. Subcommand may contain spaces."""
        return self.exec(["jira", *subcommand.split(), "--json", *args])

    def jira_raw(self, subcommand: str, args: Sequence[str] = ()) -> CommandResult:
        """Same as jira() but without ``--json`` for commands that lack it."""
        return self.exec(["jira", *subcommand.split(), *args])

    @cached_property
    def workitem(self) -> WorkitemCommands:
        return WorkitemCommands(self)

    @cached_property
    def project(self) -> ProjectCommands:
        return ProjectCommands(self)

    @cached_property
    def board(self) -> BoardCommands:
        return BoardCommands(self)
