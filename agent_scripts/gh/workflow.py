from __future__ import annotations

from typing import TYPE_CHECKING

from agent_scripts.gh.models import WORKFLOW_JSON_FIELDS
from agent_scripts.results import CommandResult
from agent_scripts.runner import build_flags

if TYPE_CHECKING:
    from agent_scripts.gh.base import GhClient


class WorkflowCommands:
    """``gh workflow ...``"""

    def __init__(self, client: GhClient) -> None:
        self._client = client

    def list(self, all: bool = False) -> CommandResult:
        return self._client.json(
            "workflow", "list", build_flags([("--all", all)]), WORKFLOW_JSON_FIELDS
        )

    def view(self, workflow: str | int, ref: str | None = None) -> CommandResult:
        return self._client.raw(["workflow", "view", str(workflow), *build_flags([("--ref", ref)])])

    def view_yaml(self, workflow: str | int, ref: str | None = None) -> CommandResult:
        return self._client.raw(
            ["workflow", "view", str(workflow), "--yaml", *build_flags([("--ref", ref)])]
        )

    def run(
        self,
        workflow: str | int,
        ref: str | None = None,
        inputs: dict[str, str] | None = None,
    ) -> CommandResult:
        """Trigger a workflow_dispatch run. Each input becomes ``-f key=value``."""
        args = ["workflow", "run", str(workflow), *build_flags([("--ref", ref)])]
        for key, value in (inputs or {}).items():
            args.extend(["-f", f"{key}={value}"])
        return self._client.exec(args)
