from __future__ import annotations

from typing import TYPE_CHECKING

from agent_scripts.results import CommandResult
from agent_scripts.runner import build_flags

if TYPE_CHECKING:
    from agent_scripts.acli.base import AcliClient


class ProjectCommands:
    """``acli jira project ...``"""

    def __init__(self, client: AcliClient) -> None:
        self._client = client

    def list(
        self, recent: bool = True, limit: int | None = None, paginate: bool = False
    ) -> CommandResult:
        # acli requires at least one of --recent, --limit or --paginate
        args = build_flags([("--recent", recent), ("--limit", limit), ("--paginate", paginate)])
        return self._client.jira("project list", args)

    def view(self, key: str) -> CommandResult:
        return self._client.jira("project view", [key])
