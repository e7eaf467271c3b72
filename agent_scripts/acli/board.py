from __future__ import annotations

from typing import TYPE_CHECKING

from agent_scripts.results import CommandResult
from agent_scripts.runner import build_flags

if TYPE_CHECKING:
    from agent_scripts.acli.base import AcliClient


class BoardCommands:
    """``acli jira board ...``"""

    def __init__(self, client: AcliClient) -> None:
        self._client = client

    def search(self, name: str | None = None, project: str | None = None) -> CommandResult:
        return self._client.jira(
            "board search", build_flags([("--name", name), ("--project", project)])
        )

    def list_sprints(self, board_id: str | int) -> CommandResult:
        return self._client.jira("board list-sprints", [str(board_id)])

    def get(self, board_id: str | int) -> CommandResult:
        return self._client.jira("board get", [str(board_id)])
