"""Click command for awaiting a workflow run."""

import asyncio

import click

from await_run.await_opts import AwaitRunOpts
from await_run.run_awaiter import RunAwaiter
from await_run.workflow_run_api import WorkflowRunApi
from await_run.workflow_run_client import WorkflowRunClient


def await_run(opts: AwaitRunOpts):
    """Await the workflow run described by opts and print its outcome."""
    opts.validate()
    client = WorkflowRunClient(owner=opts.owner, repo=opts.repo)
    api = WorkflowRunApi(client, poll_interval_ms=opts.poll_interval_ms)
    outcome = asyncio.run(RunAwaiter(api, opts).await_completion())

    if outcome.success:
        print(f"Workflow Run {outcome.run_id} succeeded.")
    else:
        print(f"Workflow Run {outcome.run_id} failed: {outcome.reason}")
    return outcome


@click.command("await-run")
@click.argument("run_id", type=int)
@click.option("--owner", default="{owner}",
              help="Repository owner (default: from the current checkout)")
@click.option("--repo", default="{repo}",
              help="Repository name (default: from the current checkout)")
@click.option("--run-timeout-seconds", type=int, default=300,
              help="Time to wait for the run to complete (default: 300)")
@click.option("--poll-interval-ms", type=int, default=2500,
              help="Delay between run state checks (default: 2500)")
def main(**kwargs):
    """Await completion of a GitHub Actions workflow run."""
    await_run(AwaitRunOpts(**kwargs))
