"""RunAwaiter: polls a workflow run until it completes and reports the outcome."""

from dataclasses import dataclass, field
from typing import List, Optional

from await_run.clock import SystemClock
from await_run.models import Job
from await_run.retry import print_warning, retry_on_error

ACTIVE_JOB_URL_TIMEOUT_MS = 10000


@dataclass
class RunOutcome:
    run_id: int
    success: bool
    conclusion: Optional[str] = None
    reason: Optional[str] = None
    active_job_url: Optional[str] = None
    failed_jobs: List[Job] = field(default_factory=list)


def format_failed_job(job: Job) -> str:
    lines = [
        f"Job: {job.name}",
        f"  ID: {job.id}",
        f"  Status: {job.status}",
        f"  Conclusion: {job.conclusion}",
        f"  URL: {job.url}",
    ]
    failed_steps = [step for step in job.steps if step.conclusion != "success"]
    if failed_steps:
        lines.append("  Steps (non-success):")
        for step in failed_steps:
            lines.append(f"    {step.number}: {step.name}")
            lines.append(f"      Status: {step.status}")
            lines.append(f"      Conclusion: {step.conclusion}")
    return "\n".join(lines)


class RunAwaiter:
    """Waits for a workflow run to complete.

    Args:
        api: WorkflowRunApi for run state and job reads.
        opts: AwaitRunOpts with the run id, timeout and poll interval.
        clock: Time source, defaults to SystemClock.
        warn: Sink for retry warnings, defaults to stderr.
    """

    def __init__(self, api, opts, clock=None, warn=None):
        self._api = api
        self._opts = opts
        self._clock = clock if clock is not None else SystemClock()
        self._warn = warn if warn is not None else print_warning

    async def await_completion(self) -> RunOutcome:
        run_id = self._opts.run_id
        started = self._clock.now()

        active_job_url = await self._api.fetch_workflow_run_active_job_url_retry(
            run_id, ACTIVE_JOB_URL_TIMEOUT_MS,
        )
        print(f"Awaiting completion of Workflow Run {run_id}...")
        print(f"  ID: {run_id}")
        print(f"  URL: {active_job_url}")

        attempt = 0
        while self._clock.now() - started < self._opts.run_timeout_ms:
            attempt += 1
            result = await retry_on_error(
                lambda: self._api.fetch_workflow_run_state(run_id),
                self._opts.poll_interval_ms,
                label="fetch_workflow_run_state",
                clock=self._clock,
                warn=self._warn,
            )

            if result.success:
                state = result.value
                if state.is_completed:
                    return await self._conclude(run_id, state.conclusion, active_job_url)
                print(f"Workflow Run not completed (attempt {attempt}): {state.status}")
            else:
                print(f"Could not fetch Workflow Run state (attempt {attempt}), retrying...")

            await self._clock.sleep(self._opts.poll_interval_ms)

        print(f"Timed out waiting for Workflow Run {run_id} after {self._opts.run_timeout_seconds}s")
        return RunOutcome(
            run_id=run_id, success=False, reason="timeout", active_job_url=active_job_url,
        )

    async def _conclude(self, run_id, conclusion, active_job_url) -> RunOutcome:
        if conclusion == "success":
            print("Workflow Run has completed successfully")
            return RunOutcome(
                run_id=run_id, success=True, conclusion=conclusion,
                active_job_url=active_job_url,
            )

        if conclusion == "failure":
            failed_jobs = await self._api.fetch_workflow_run_failed_jobs(run_id)
            for job in failed_jobs:
                print(format_failed_job(job))
            return RunOutcome(
                run_id=run_id, success=False, conclusion=conclusion,
                reason="Workflow Run has failed", active_job_url=active_job_url,
                failed_jobs=failed_jobs,
            )

        if conclusion is None:
            reason = "Workflow Run has concluded without a conclusion"
        else:
            reason = f"Workflow Run has concluded with {conclusion}"
        return RunOutcome(
            run_id=run_id, success=False, conclusion=conclusion,
            reason=reason, active_job_url=active_job_url,
        )
