"""Tests for the acli (Jira) wrapper."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from agent_scripts.acli import AcliClient
from agent_scripts.acli.utils import with_temp_json
from agent_scripts.acli.workitem import build_create_payload, build_edit_payload
from agent_scripts.adf import markdown_to_adf
from agent_scripts.config.models import AcliConfig
from agent_scripts.runner import NOT_RUN


@pytest.fixture
def client():
    return AcliClient(AcliConfig(binary="acli", timeout=7))


@pytest.fixture
def captured():
    """Patch with_temp_json so payloads are recorded instead of written."""
    calls = []

    def _fake(data, fn, temp_dir=None):
        calls.append({"data": data, "temp_dir": temp_dir})
        return fn("/tmp/acli-test.json")

    with patch("agent_scripts.acli.workitem.with_temp_json", side_effect=_fake):
        yield calls


# ---------------------------------------------------------------------------
# Executor
# ---------------------------------------------------------------------------


class TestAcliClient:
    def test_jira_adds_json_flag(self, client, mock_run, completed):
        mock_run.return_value = completed('{"key": "TEAM-1"}')
        result = client.jira("workitem view", ["TEAM-1"])
        assert result.success
        assert result.data == {"key": "TEAM-1"}
        mock_run.assert_called_once_with(
            ["acli", "jira", "workitem", "view", "--json", "TEAM-1"], timeout=7
        )

    def test_jira_raw_has_no_json_flag(self, client, mock_run):
        client.jira_raw("auth status")
        assert mock_run.call_args.args[0] == ["acli", "jira", "auth", "status"]

    def test_text_output_kept(self, client, mock_run, completed):
        mock_run.return_value = completed("Transitioned TEAM-1\n")
        assert client.jira("workitem transition").data == "Transitioned TEAM-1"

    def test_failure_uses_stderr(self, client, mock_run, completed):
        mock_run.return_value = completed(returncode=1, stderr="unauthorized")
        result = client.jira("workitem view", ["TEAM-1"])
        assert not result.success
        assert result.error == "unauthorized"

    def test_missing_binary(self, client, mock_run, completed):
        mock_run.return_value = completed(returncode=NOT_RUN, stderr="acli: command not found")
        assert client.exec(["jira"]).error == "acli: command not found"

    def test_groups_are_cached(self, client):
        assert client.workitem is client.workitem


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------


class TestCreatePayload:
    def test_required_fields(self):
        assert build_create_payload("TEAM", "Task", "Test task") == {
            "projectKey": "TEAM",
            "type": "Task",
            "summary": "Test task",
        }

    def test_markdown_description_becomes_adf(self):
        payload = build_create_payload(
            "TEAM", "Task", "Test", description_markdown="# Hello\n\n**bold**"
        )
        description = payload["description"]
        assert description["type"] == "doc"
        assert description["version"] == 1
        assert [b["type"] for b in description["content"]] == ["heading", "paragraph"]

    def test_prebuilt_document(self):
        doc = markdown_to_adf("x")
        payload = build_create_payload("TEAM", "Task", "T", description=doc)
        assert payload["description"] == doc.to_dict()

    def test_markdown_wins_over_document(self):
        payload = build_create_payload(
            "TEAM", "Task", "T", description_markdown="md", description={"type": "doc"}
        )
        assert payload["description"]["content"][0]["content"][0]["text"] == "md"

    def test_labels_parent_assignee(self):
        payload = build_create_payload(
            "TEAM",
            "Sub-task",
            "T",
            assignee="@me",
            labels=("bug", "urgent"),
            parent="TEAM-100",
        )
        assert payload["labels"] == ["bug", "urgent"]
        assert payload["parentIssueId"] == "TEAM-100"
        assert payload["assignee"] == "@me"

    def test_custom_fields(self):
        payload = build_create_payload(
            "TEAM", "Task", "T", custom_fields={"customfield_10000": {"value": "test"}}
        )
        assert payload["additionalAttributes"] == {"customfield_10000": {"value": "test"}}


class TestEditPayload:
    def test_single_key_wrapped(self):
        assert build_edit_payload("TEAM-123", summary="Updated")["issues"] == ["TEAM-123"]

    def test_batch_keys(self):
        keys = ["TEAM-123", "TEAM-124", "TEAM-125"]
        assert build_edit_payload(keys, summary="Batch")["issues"] == keys

    def test_markdown_description(self):
        payload = build_edit_payload("TEAM-123", description_markdown="# Updated\n\nNew content")
        assert payload["description"]["type"] == "doc"

    def test_labels_split(self):
        payload = build_edit_payload(
            "TEAM-123", labels_to_add=["done", "reviewed"], labels_to_remove=["wip", "draft"]
        )
        assert payload["labelsToAdd"] == ["done", "reviewed"]
        assert payload["labelsToRemove"] == ["wip", "draft"]

    def test_only_provided_fields(self):
        assert build_edit_payload("TEAM-123", summary="Only summary") == {
            "issues": ["TEAM-123"],
            "summary": "Only summary",
        }

    def test_type_and_custom_fields(self):
        payload = build_edit_payload(
            "TEAM-1", type="Bug", custom_fields={"customfield_1": {"value": "x"}}
        )
        assert payload["type"] == "Bug"
        assert payload["additionalAttributes"] == {"customfield_1": {"value": "x"}}


# ---------------------------------------------------------------------------
# Work item commands
# ---------------------------------------------------------------------------


class TestWorkitemCommands:
    def test_create_sends_payload_file(self, client, mock_run, completed, captured):
        mock_run.return_value = completed('{"key": "TEAM-9"}')
        result = client.workitem.create("TEAM", "Task", "T", labels=["a"])
        assert result.data == {"key": "TEAM-9"}
        assert captured[0]["data"]["labels"] == ["a"]
        assert mock_run.call_args.args[0] == [
            "acli", "jira", "workitem", "create", "--json", "--from-json", "/tmp/acli-test.json",
        ]

    def test_create_uses_configured_temp_dir(self, mock_run, captured):
        AcliClient(AcliConfig(temp_dir="/var/tmp")).workitem.create("TEAM", "Task", "T")
        assert captured[0]["temp_dir"] == "/var/tmp"

    def test_edit_confirms(self, client, mock_run, captured):
        client.workitem.edit(["TEAM-1", "TEAM-2"], summary="S")
        assert captured[0]["data"]["issues"] == ["TEAM-1", "TEAM-2"]
        argv = mock_run.call_args.args[0]
        assert argv[:5] == ["acli", "jira", "workitem", "edit", "--json"]
        assert argv[-1] == "--yes"

    def test_view_fields(self, client, mock_run):
        client.workitem.view("TEAM-1", fields="summary,status")
        assert mock_run.call_args.args[0][-3:] == ["TEAM-1", "--fields", "summary,status"]

    def test_search_flags(self, client, mock_run):
        client.workitem.search(jql="project = TEAM", limit=10, paginate=True)
        assert mock_run.call_args.args[0][5:] == [
            "--jql", "project = TEAM", "--limit", "10", "--paginate",
        ]

    def test_transition_joins_keys(self, client, mock_run):
        client.workitem.transition(["TEAM-1", "TEAM-2"], "Done")
        assert mock_run.call_args.args[0][5:] == [
            "--key", "TEAM-1,TEAM-2", "--status", "Done", "--yes",
        ]

    def test_comment_markdown_becomes_adf_body(self, client, mock_run):
        client.workitem.comment("TEAM-1", body_markdown="**hi**")
        argv = mock_run.call_args.args[0]
        assert argv[3:5] == ["comment", "create"]
        body = json.loads(argv[argv.index("--body") + 1])
        assert body["type"] == "doc"
        assert body["content"][0]["content"][0]["marks"] == [{"type": "strong"}]

    def test_comment_body_file(self, client, mock_run):
        client.workitem.comment("TEAM-1", body_file="note.txt")
        assert mock_run.call_args.args[0][-4:] == ["--key", "TEAM-1", "--body-file", "note.txt"]


class TestProjectAndBoard:
    def test_project_list_defaults_to_recent(self, client, mock_run):
        client.project.list()
        assert mock_run.call_args.args[0] == ["acli", "jira", "project", "list", "--json", "--recent"]

    def test_project_list_limit(self, client, mock_run):
        client.project.list(recent=False, limit=5)
        assert mock_run.call_args.args[0][-2:] == ["--limit", "5"]

    def test_board_search(self, client, mock_run):
        client.board.search(project="TEAM")
        assert mock_run.call_args.args[0][2:] == ["board", "search", "--json", "--project", "TEAM"]

    def test_board_sprints(self, client, mock_run):
        client.board.list_sprints(12)
        assert mock_run.call_args.args[0][2:] == ["board", "list-sprints", "--json", "12"]


# ---------------------------------------------------------------------------
# Temp JSON helper
# ---------------------------------------------------------------------------


class TestWithTempJson:
    def test_file_written_then_removed(self, tmp_path):
        seen = {}

        def _read(path):
            seen["path"] = path
            seen["data"] = json.loads(Path(path).read_text())
            return "done"

        assert with_temp_json({"a": 1}, _read, temp_dir=str(tmp_path)) == "done"
        assert seen["data"] == {"a": 1}
        assert Path(seen["path"]).name.startswith("acli-")
        assert not Path(seen["path"]).exists()

    def test_removed_on_error(self, tmp_path):
        paths = []

        def _boom(path):
            paths.append(path)
            raise RuntimeError("fail")

        with pytest.raises(RuntimeError):
            with_temp_json({}, _boom, temp_dir=str(tmp_path))
        assert not Path(paths[0]).exists()
