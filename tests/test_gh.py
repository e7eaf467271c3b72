"""Tests for the gh command wrappers and models."""

import pytest

from agent_scripts.config.models import GhConfig
from agent_scripts.gh import RUN_JSON_FIELDS, GhClient, Job, Run
from agent_scripts.gh.base import json_flag


@pytest.fixture
def client():
    return GhClient(GhConfig(timeout=11))


def _argv(mock_run):
    return mock_run.call_args.args[0]


# ---------------------------------------------------------------------------
# Executor
# ---------------------------------------------------------------------------


class TestGhClient:
    def test_json_flag(self):
        assert json_flag(["a", "b"]) == "--json=a,b"
        assert json_flag() == "--json"

    def test_json_decodes_output(self, client, mock_run, completed):
        mock_run.return_value = completed('[{"databaseId": 1}]')
        result = client.json("run", "list", ["--limit", "1"], ["databaseId"])
        assert result.data == [{"databaseId": 1}]
        mock_run.assert_called_once_with(
            ["gh", "run", "list", "--limit", "1", "--json=databaseId"], timeout=11
        )

    def test_raw_keeps_text(self, client, mock_run, completed):
        mock_run.return_value = completed('{"looks": "like json"}\n')
        assert client.raw(["run", "view", "1", "--log"]).data == '{"looks": "like json"}'

    def test_failure(self, client, mock_run, completed):
        mock_run.return_value = completed(returncode=1, stderr="HTTP 404")
        result = client.run.view(5)
        assert not result.success
        assert result.error == "HTTP 404"

    def test_raw_failure(self, client, mock_run, completed):
        mock_run.return_value = completed(returncode=1, stdout="no log")
        assert client.raw(["run", "view"]).error == "no log"


# ---------------------------------------------------------------------------
# gh run
# ---------------------------------------------------------------------------


class TestRunCommands:
    def test_list_flags(self, client, mock_run):
        client.run.list(workflow="ci.yml", branch="main", limit=3)
        assert _argv(mock_run) == [
            "gh", "run", "list",
            "--workflow", "ci.yml", "--branch", "main", "--limit", "3",
            "--json=" + ",".join(RUN_JSON_FIELDS),
        ]

    def test_view(self, client, mock_run):
        client.run.view(42)
        assert _argv(mock_run)[:4] == ["gh", "run", "view", "42"]

    def test_jobs_unwrapped(self, client, mock_run, completed):
        mock_run.return_value = completed('{"jobs": [{"name": "build", "databaseId": 7}]}')
        result = client.run.jobs(42)
        assert result.data == [{"name": "build", "databaseId": 7}]
        assert _argv(mock_run)[-1] == "--json=jobs"

    def test_jobs_failure_passed_through(self, client, mock_run, completed):
        mock_run.return_value = completed(returncode=1, stderr="nope")
        assert client.run.jobs(42).error == "nope"

    def test_job_log(self, client, mock_run):
        client.run.view_job_log(42, 7)
        assert _argv(mock_run) == ["gh", "run", "view", "42", "--log", "--job", "7"]

    def test_log_failed(self, client, mock_run):
        client.run.view_log_failed(42)
        assert _argv(mock_run)[-1] == "--log-failed"

    def test_watch(self, client, mock_run):
        client.run.watch(42, compact=True, exit_status=True)
        assert _argv(mock_run) == ["gh", "run", "watch", "42", "--compact", "--exit-status"]

    def test_rerun_failed(self, client, mock_run):
        client.run.rerun(42, failed=True)
        assert _argv(mock_run) == ["gh", "run", "rerun", "42", "--failed"]

    def test_rerun_job_debug(self, client, mock_run):
        client.run.rerun(42, job="99", debug=True)
        assert _argv(mock_run)[4:] == ["--job", "99", "--debug"]

    def test_cancel(self, client, mock_run):
        client.run.cancel(42)
        assert _argv(mock_run) == ["gh", "run", "cancel", "42"]

    def test_download(self, client, mock_run):
        client.run.download(42, name="dist", dir="out")
        assert _argv(mock_run)[4:] == ["--name", "dist", "--dir", "out"]


# ---------------------------------------------------------------------------
# gh workflow
# ---------------------------------------------------------------------------


class TestWorkflowCommands:
    def test_list(self, client, mock_run):
        client.workflow.list(all=True)
        assert _argv(mock_run) == ["gh", "workflow", "list", "--all", "--json=id,name,path,state"]

    def test_view_yaml(self, client, mock_run):
        client.workflow.view_yaml("ci.yml", ref="dev")
        assert _argv(mock_run) == ["gh", "workflow", "view", "ci.yml", "--yaml", "--ref", "dev"]

    def test_run_inputs(self, client, mock_run):
        client.workflow.run("deploy.yml", ref="main", inputs={"env": "prod", "dry": "true"})
        assert _argv(mock_run) == [
            "gh", "workflow", "run", "deploy.yml", "--ref", "main",
            "-f", "env=prod", "-f", "dry=true",
        ]


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class TestModels:
    def test_run_from_gh_json(self):
        run = Run.model_validate(
            {
                "databaseId": 123,
                "displayTitle": "Fix",
                "status": "in_progress",
                "conclusion": "",
                "headBranch": "main",
                "unknownField": True,
            }
        )
        assert run.database_id == 123
        assert run.head_branch == "main"
        assert not run.completed

    def test_run_completed(self):
        assert Run(database_id=1, status="completed").completed

    def test_job_steps(self):
        job = Job.model_validate(
            {
                "name": "test",
                "databaseId": 9,
                "conclusion": "failure",
                "steps": [{"name": "pytest", "number": 3, "conclusion": "failure"}],
            }
        )
        assert job.steps[0].number == 3
