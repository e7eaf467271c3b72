"""Higher-level GitHub Actions helpers.

Unlike the thin command wrappers these raise CommandError on failure and
return typed models.
"""

from __future__ import annotations

import logging
import time

from agent_scripts.gh.base import GhClient
from agent_scripts.gh.models import FailedStep, Job, Run
from agent_scripts.results import CommandError, CommandResult

logger = logging.getLogger(__name__)


def _unwrap(result: CommandResult, operation: str):
    return result.unwrap("gh", operation)


def get_latest_run(client: GhClient, workflow: str) -> Run | None:
    """Most recent run of ``workflow``, or None when there is none or gh fails."""
    result = client.run.list(workflow=workflow, limit=1)
    if not result.success or not isinstance(result.data, list) or not result.data:
        return None
    return Run.model_validate(result.data[0])


def run_workflow(
    client: GhClient,
    workflow: str,
    ref: str | None = None,
    inputs: dict[str, str] | None = None,
) -> int:
    """Trigger ``workflow`` and return the database id of the run it started.

    gh does not report the new run id, so the latest run is recorded first and
    the run list is polled until a different id shows up.
    """
    before = get_latest_run(client, workflow)
    before_id = before.database_id if before else None

    _unwrap(client.workflow.run(workflow, ref=ref, inputs=inputs), f"workflow run {workflow}")

    cfg = client.config
    for attempt in range(cfg.start_attempts):
        time.sleep(cfg.start_interval)
        latest = get_latest_run(client, workflow)
        if latest and latest.database_id != before_id:
            logger.info("Workflow %s started run %d", workflow, latest.database_id)
            return latest.database_id
        logger.debug("Run for %s not visible yet (attempt %d)", workflow, attempt + 1)

    raise CommandError(
        "gh", f"workflow run {workflow}", "Timed out waiting for workflow run to start"
    )


def run_and_watch(
    client: GhClient,
    workflow: str,
    ref: str | None = None,
    inputs: dict[str, str] | None = None,
) -> Run:
    """Trigger a run, block until it finishes, and return its final state."""
    run_id = run_workflow(client, workflow, ref=ref, inputs=inputs)
    watched = client.run.watch(run_id, compact=True, exit_status=True)
    if not watched.success:
        # --exit-status makes watch fail when the run fails
        logger.info("Run %d finished unsuccessfully: %s", run_id, watched.error)
    return Run.model_validate(_unwrap(client.run.view(run_id), f"run view {run_id}"))


def get_failed_steps(client: GhClient, run_id: int | str) -> list[FailedStep]:
    """Failed steps of every failed job, each with its job log when available."""
    raw_jobs = _unwrap(client.run.jobs(run_id), f"run view {run_id} jobs")
    jobs = [Job.model_validate(j) for j in raw_jobs or []]

    failed: list[FailedStep] = []
    for job in jobs:
        if job.conclusion != "failure":
            continue
        log: str | None = None
        log_fetched = False
        for step in job.steps:
            if step.conclusion != "failure":
                continue
            if not log_fetched:
                log_result = client.run.view_job_log(run_id, job.database_id)
                log = log_result.data if log_result.success else None
                log_fetched = True
            failed.append(
                FailedStep(
                    job_name=job.name,
                    job_id=job.database_id,
                    step_name=step.name,
                    step_number=step.number,
                    log=log,
                )
            )
    return failed


def rerun_failed(client: GhClient, run_id: int | str) -> None:
    _unwrap(client.run.rerun(run_id, failed=True), f"run rerun {run_id} --failed")


def rerun_with_debug(client: GhClient, run_id: int | str) -> None:
    _unwrap(client.run.rerun(run_id, debug=True), f"run rerun {run_id} --debug")


def download_artifacts(client: GhClient, run_id: int | str, dest_dir: str) -> None:
    _unwrap(client.run.download(run_id, dir=dest_dir), f"run download {run_id}")


def wait_for_completion(
    client: GhClient,
    run_id: int | str,
    poll_interval: float | None = None,
    timeout: float | None = None,
) -> Run:
    """Poll ``gh run view`` until the run reports status ``completed``.

    Intervals are in seconds and default to the gh config section.
    """
    interval = client.config.poll_interval if poll_interval is None else poll_interval
    limit = client.config.run_timeout if timeout is None else timeout
    deadline = time.monotonic() + limit

    while time.monotonic() < deadline:
        run = Run.model_validate(_unwrap(client.run.view(run_id), f"run view {run_id}"))
        if run.completed:
            return run
        logger.debug("Run %s is %s", run_id, run.status)
        time.sleep(interval)

    raise CommandError(
        "gh", f"run view {run_id}", f"Timed out waiting for run {run_id} to complete"
    )
