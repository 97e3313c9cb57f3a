"""WorkflowRunApi: status-checked reads of a workflow run and its active job URL."""

from typing import List, Optional

from await_run.clock import SystemClock
from await_run.models import Job, RunState
from await_run.retry import print_warning

ACTIVE_JOB_POLL_INTERVAL_MS = 2500
ACTIVE_JOB_URL_NOT_FOUND = "Unable to fetch URL"


class WorkflowRunApi:
    """Reads run state and jobs from a WorkflowRunClient.

    Any response other than 200 is raised as a RuntimeError; deciding
    whether to retry is left to the caller.

    Args:
        client: WorkflowRunClient (or FakeWorkflowRunClient).
        clock: Time source used between active job probes.
        poll_interval_ms: Delay between active job probes.
        warn: Sink for warnings, defaults to stderr.
    """

    def __init__(self, client, clock=None, poll_interval_ms=ACTIVE_JOB_POLL_INTERVAL_MS, warn=None):
        self._client = client
        self._clock = clock if clock is not None else SystemClock()
        self._poll_interval_ms = poll_interval_ms
        self._warn = warn if warn is not None else print_warning

    async def fetch_workflow_run_state(self, run_id: int) -> RunState:
        data, status = await self._client.get_workflow_run(run_id)
        if status != 200:
            raise RuntimeError(
                f"Failed to fetch Workflow Run state, expected 200 but received {status}"
            )
        return RunState.from_api(data or {})

    async def fetch_workflow_run_jobs(self, run_id: int) -> List[Job]:
        data, status = await self._client.list_jobs_for_workflow_run(run_id)
        if status != 200:
            raise RuntimeError(
                f"Failed to fetch Jobs for Workflow Run, expected 200 but received {status}"
            )
        return [Job.from_api(job) for job in (data or {}).get("jobs", [])]

    async def fetch_workflow_run_failed_jobs(self, run_id: int) -> List[Job]:
        jobs = await self.fetch_workflow_run_jobs(run_id)
        failed = [job for job in jobs if job.conclusion == "failure"]
        if not failed:
            self._warn(f"Failed to find failed Jobs for Workflow Run {run_id}")
        return failed

    async def fetch_workflow_run_active_job_url(self, run_id: int) -> Optional[str]:
        """Return the URL of the job currently running, or None.

        The first in_progress job wins. A run whose job already finished
        falls back to the first completed job.
        """
        jobs = await self.fetch_workflow_run_jobs(run_id)
        for status in ("in_progress", "completed"):
            for job in jobs:
                if job.status == status:
                    return job.url
        return None

    async def fetch_workflow_run_active_job_url_retry(self, run_id: int, timeout_ms: float) -> str:
        started = self._clock.now()
        while self._clock.now() - started < timeout_ms:
            url = await self.fetch_workflow_run_active_job_url(run_id)
            if url:
                return url
            await self._clock.sleep(self._poll_interval_ms)
        return ACTIVE_JOB_URL_NOT_FOUND
