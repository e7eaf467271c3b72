"""Pydantic models for ``gh run`` / ``gh workflow`` JSON output."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RunStatus = Literal["queued", "in_progress", "completed", "requested", "waiting", "pending"]
RunConclusion = Literal[
    "success",
    "failure",
    "cancelled",
    "skipped",
    "timed_out",
    "action_required",
    "neutral",
    "stale",
    "startup_failure",
]

RUN_JSON_FIELDS: list[str] = [
    "databaseId",
    "displayTitle",
    "name",
    "number",
    "status",
    "conclusion",
    "headBranch",
    "headSha",
    "event",
    "url",
    "createdAt",
    "updatedAt",
    "startedAt",
    "workflowDatabaseId",
    "workflowName",
    "attempt",
]

WORKFLOW_JSON_FIELDS: list[str] = ["id", "name", "path", "state"]


class _GhModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Workflow(_GhModel):
    id: int
    name: str
    path: str = ""
    state: str = ""


class Step(_GhModel):
    name: str
    status: str = ""
    conclusion: str | None = None
    number: int = 0
    started_at: str | None = Field(default=None, alias="startedAt")
    completed_at: str | None = Field(default=None, alias="completedAt")


class Job(_GhModel):
    name: str
    database_id: int = Field(alias="databaseId")
    status: str = ""
    conclusion: str | None = None
    started_at: str | None = Field(default=None, alias="startedAt")
    completed_at: str | None = Field(default=None, alias="completedAt")
    steps: list[Step] = []


class Run(_GhModel):
    """One workflow run. gh reports ``conclusion`` as "" while a run is active."""

    database_id: int = Field(alias="databaseId")
    display_title: str = Field(default="", alias="displayTitle")
    name: str = ""
    number: int = 0
    status: str = ""
    conclusion: str | None = None
    head_branch: str = Field(default="", alias="headBranch")
    head_sha: str = Field(default="", alias="headSha")
    event: str = ""
    url: str = ""
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    started_at: str | None = Field(default=None, alias="startedAt")
    workflow_database_id: int | None = Field(default=None, alias="workflowDatabaseId")
    workflow_name: str = Field(default="", alias="workflowName")
    attempt: int = 1

    @property
    def completed(self) -> bool:
        return self.status == "completed"


class FailedStep(_GhModel):
    job_name: str
    job_id: int
    step_name: str
    step_number: int
    log: str | None = None
