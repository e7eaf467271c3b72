"""Jira work item commands.

create and edit send a JSON payload through ``--from-json`` so descriptions
can be real ADF documents instead of escaped strings on the command line.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Sequence

from agent_scripts.acli.utils import with_temp_json
from agent_scripts.adf import AdfDocument, markdown_to_adf, markdown_to_adf_string
from agent_scripts.results import CommandResult
from agent_scripts.runner import build_flags

if TYPE_CHECKING:
    from agent_scripts.acli.base import AcliClient

logger = logging.getLogger(__name__)


def _adf(
    markdown: str | None, document: AdfDocument | dict[str, Any] | None
) -> dict[str, Any] | None:
    """Markdown wins over a prebuilt document when both are given."""
    if markdown is not None:
        return markdown_to_adf(markdown).to_dict()
    if isinstance(document, AdfDocument):
        return document.to_dict()
    return document


def _keys(keys: str | Sequence[str]) -> list[str]:
    return [keys] if isinstance(keys, str) else list(keys)


def build_create_payload(
    project: str,
    type: str,
    summary: str,
    description_markdown: str | None = None,
    description: AdfDocument | dict[str, Any] | None = None,
    assignee: str | None = None,
    labels: Sequence[str] | None = None,
    parent: str | None = None,
    custom_fields: dict[str, Any] | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"projectKey": project, "type": type, "summary": summary}
    adf = _adf(description_markdown, description)
    if adf is not None:
        payload["description"] = adf
    if assignee:
        payload["assignee"] = assignee
    if labels:
        payload["labels"] = list(labels)
    if parent:
        payload["parentIssueId"] = parent
    if custom_fields:
        payload["additionalAttributes"] = custom_fields
    return payload


def build_edit_payload(
    keys: str | Sequence[str],
    summary: str | None = None,
    description_markdown: str | None = None,
    description: AdfDocument | dict[str, Any] | None = None,
    assignee: str | None = None,
    type: str | None = None,
    labels_to_add: Sequence[str] | None = None,
    labels_to_remove: Sequence[str] | None = None,
    custom_fields: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Only the fields that were passed end up in the payload."""
    payload: dict[str, Any] = {"issues": _keys(keys)}
    if summary:
        payload["summary"] = summary
    adf = _adf(description_markdown, description)
    if adf is not None:
        payload["description"] = adf
    if assignee:
        payload["assignee"] = assignee
    if type:
        payload["type"] = type
    if labels_to_add:
        payload["labelsToAdd"] = list(labels_to_add)
    if labels_to_remove:
        payload["labelsToRemove"] = list(labels_to_remove)
    if custom_fields:
        payload["additionalAttributes"] = custom_fields
    return payload


class WorkitemCommands:
    """``acli jira workitem ...``"""

    def __init__(self, client: AcliClient) -> None:
        self._client = client

    def _from_json(self, subcommand: str, payload: dict[str, Any], *extra: str) -> CommandResult:
        return with_temp_json(
            payload,
            lambda path: self._client.jira(subcommand, ["--from-json", path, *extra]),
            temp_dir=self._client.config.temp_dir,
        )

    def create(self, project: str, type: str, summary: str, **fields: Any) -> CommandResult:
        """Create a work item. ``fields`` are the optional keywords of build_create_payload."""
        payload = build_create_payload(project, type, summary, **fields)
        logger.info("Creating %s in %s: %s", type, project, summary)
        return self._from_json("workitem create", payload)

    def edit(self, keys: str | Sequence[str], **fields: Any) -> CommandResult:
        """Edit one work item or a batch of them in a single call."""
        payload = build_edit_payload(keys, **fields)
        logger.info("Editing %s", ", ".join(payload["issues"]))
        return self._from_json("workitem edit", payload, "--yes")

    def view(self, key: str, fields: str | None = None) -> CommandResult:
        return self._client.jira("workitem view", [key, *build_flags([("--fields", fields)])])

    def search(
        self,
        jql: str | None = None,
        filter: str | None = None,
        fields: str | None = None,
        limit: int | None = None,
        paginate: bool = False,
    ) -> CommandResult:
        args = build_flags(
            [
                ("--jql", jql),
                ("--filter", filter),
                ("--fields", fields),
                ("--limit", limit),
                ("--paginate", paginate),
            ]
        )
        return self._client.jira("workitem search", args)

    def transition(self, keys: str | Sequence[str], status: str) -> CommandResult:
        return self._client.jira(
            "workitem transition",
            ["--key", ",".join(_keys(keys)), "--status", status, "--yes"],
        )

    def comment(
        self,
        key: str,
        body_markdown: str | None = None,
        body: str | None = None,
        body_file: str | None = None,
    ) -> CommandResult:
        """Add a comment. Markdown is converted to an ADF body."""
        if body_markdown is not None:
            body = markdown_to_adf_string(body_markdown)
        args = ["--key", key, *build_flags([("--body", body), ("--body-file", body_file)])]
        return self._client.jira("workitem comment create", args)
