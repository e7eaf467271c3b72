from .base import GhClient
from .convenience import (
    download_artifacts,
    get_failed_steps,
    get_latest_run,
    rerun_failed,
    rerun_with_debug,
    run_and_watch,
    run_workflow,
    wait_for_completion,
)
from .models import RUN_JSON_FIELDS, FailedStep, Job, Run, Step, Workflow

__all__ = [
    "FailedStep",
    "GhClient",
    "Job",
    "RUN_JSON_FIELDS",
    "Run",
    "Step",
    "Workflow",
    "download_artifacts",
    "get_failed_steps",
    "get_latest_run",
    "rerun_failed",
    "rerun_with_debug",
    "run_and_watch",
    "run_workflow",
    "wait_for_completion",
]
