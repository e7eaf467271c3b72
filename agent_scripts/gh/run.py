from __future__ import annotations

from typing import TYPE_CHECKING

from agent_scripts.gh.models import RUN_JSON_FIELDS
from agent_scripts.results import CommandResult
from agent_scripts.runner import build_flags

if TYPE_CHECKING:
    from agent_scripts.gh.base import GhClient


class RunCommands:
    """``gh run ...``"""

    def __init__(self, client: GhClient) -> None:
        self._client = client

    def list(
        self,
        workflow: str | None = None,
        branch: str | None = None,
        user: str | None = None,
        event: str | None = None,
        status: str | None = None,
        commit: str | None = None,
        limit: int | None = None,
    ) -> CommandResult:
        args = build_flags(
            [
                ("--workflow", workflow),
                ("--branch", branch),
                ("--user", user),
                ("--event", event),
                ("--status", status),
                ("--commit", commit),
                ("--limit", limit),
            ]
        )
        return self._client.json("run", "list", args, RUN_JSON_FIELDS)

    def view(self, run_id: int | str) -> CommandResult:
        return self._client.json("run", "view", [str(run_id)], RUN_JSON_FIELDS)

    def view_verbose(self, run_id: int | str) -> CommandResult:
        return self._client.raw(["run", "view", str(run_id), "--verbose"])

    def jobs(self, run_id: int | str) -> CommandResult:
        """Jobs of a run, unwrapped from gh's ``{"jobs": [...]}`` object."""
        result = self._client.json("run", "view", [str(run_id)], ["jobs"])
        if not result.success:
            return result
        data = result.data if isinstance(result.data, dict) else {}
        return CommandResult.ok(data.get("jobs", []))

    def view_log(self, run_id: int | str) -> CommandResult:
        return self._client.raw(["run", "view", str(run_id), "--log"])

    def view_job_log(self, run_id: int | str, job_id: int | str) -> CommandResult:
        return self._client.raw(["run", "view", str(run_id), "--log", "--job", str(job_id)])

    def view_log_failed(self, run_id: int | str) -> CommandResult:
        return self._client.raw(["run", "view", str(run_id), "--log-failed"])

    def watch(
        self,
        run_id: int | str,
        interval: int | None = None,
        compact: bool = False,
        exit_status: bool = False,
    ) -> CommandResult:
        args = build_flags(
            [("--interval", interval), ("--compact", compact), ("--exit-status", exit_status)]
        )
        return self._client.exec(["run", "watch", str(run_id), *args])

    def rerun(
        self,
        run_id: int | str,
        failed: bool = False,
        job: str | None = None,
        debug: bool = False,
    ) -> CommandResult:
        args = build_flags([("--failed", failed), ("--job", job), ("--debug", debug)])
        return self._client.exec(["run", "rerun", str(run_id), *args])

    def cancel(self, run_id: int | str) -> CommandResult:
        return self._client.exec(["run", "cancel", str(run_id)])

    def download(
        self, run_id: int | str, name: str | None = None, dir: str | None = None
    ) -> CommandResult:
        args = build_flags([("--name", name), ("--dir", dir)])
        return self._client.exec(["run", "download", str(run_id), *args])
