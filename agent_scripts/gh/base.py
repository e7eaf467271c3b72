"""Executor for the GitHub ``gh`` command line."""

from __future__ import annotations

from functools import cached_property
from typing import Sequence

from agent_scripts.config.models import GhConfig
from agent_scripts.gh.run import RunCommands
from agent_scripts.gh.workflow import WorkflowCommands
from agent_scripts.results import CommandResult
from agent_scripts.runner import failure_message, parse_output, run_command


def json_flag(fields: Sequence[str] = ()) -> str:
    return f"--json={','.join(fields)}" if fields else "--json"


class GhClient:
    def __init__(self, config: GhConfig | None = None) -> None:
        self.config = config or GhConfig()

    def exec(self, args: Sequence[str]) -> CommandResult:
        """Run gh; stdout is decoded as JSON when possible."""
        cmd = run_command([self.config.binary, *args], timeout=self.config.timeout)
        if not cmd.ok:
            return CommandResult.fail(failure_message(cmd))
        return CommandResult.ok(parse_output(cmd.stdout))

    def json(
        self,
        command: str,
        subcommand: str,
        args: Sequence[str] = (),
        fields: Sequence[str] = (),
    ) -> CommandResult:
        return self.exec([command, subcommand, *args, json_flag(fields)])

    def raw(self, args: Sequence[str]) -> CommandResult:
        """Run gh and keep stdout as text (logs, YAML, verbose views)."""
        cmd = run_command([self.config.binary, *args], timeout=self.config.timeout)
        if not cmd.ok:
            return CommandResult.fail(failure_message(cmd))
        return CommandResult.ok(cmd.stdout.strip())

    @cached_property
    def run(self) -> RunCommands:
        return RunCommands(self)

    @cached_property
    def workflow(self) -> WorkflowCommands:
        return WorkflowCommands(self)
