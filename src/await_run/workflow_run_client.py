"""WorkflowRunClient: reads workflow runs and their jobs through `gh api`."""

import asyncio
import json
import re
import subprocess
from typing import Any, Optional, Tuple

JOBS_PER_PAGE = 100
_STATUS_LINE = re.compile(r"^HTTP/\S+\s+(\d{3})")


def parse_included_response(result) -> Tuple[Optional[Any], int]:
    """Split `gh api --include` output into (json_body, status_code).

    Raises RuntimeError when gh printed no HTTP status line, which means
    the request never reached GitHub.
    """
    text = result.stdout.replace("\r\n", "\n")
    head, _, body = text.partition("\n\n")
    match = _STATUS_LINE.match(head)
    if not match:
        raise RuntimeError(f"gh api request failed: {result.stderr.strip()}")
    data = json.loads(body) if body.strip() else None
    return data, int(match.group(1))


class WorkflowRunClient:
    """Wraps GitHub CLI (gh) calls for workflow run operations.

    owner and repo default to gh's {owner}/{repo} placeholders, which gh
    fills in from the repository in the current directory.
    All subprocess calls go through _run_gh() for consistency.
    """

    def __init__(self, owner: str = "{owner}", repo: str = "{repo}"):
        self._owner = owner
        self._repo = repo

    def _run_gh(self, args, **kwargs):
        return subprocess.run(
            args,
            capture_output=True,
            text=True,
            **kwargs,
        )

    def _get(self, path: str) -> Tuple[Optional[Any], int]:
        result = self._run_gh(["gh", "api", "--include", path])
        return parse_included_response(result)

    def _runs_path(self, run_id: int) -> str:
        return f"repos/{self._owner}/{self._repo}/actions/runs/{run_id}"

    async def get_workflow_run(self, run_id: int) -> Tuple[Optional[Any], int]:
        return await asyncio.to_thread(self._get, self._runs_path(run_id))

    def _list_jobs(self, run_id: int) -> Tuple[Optional[Any], int]:
        """Collect every page of jobs; the first non-200 page is returned as is."""
        jobs = []
        page = 1
        while True:
            path = f"{self._runs_path(run_id)}/jobs?filter=latest&per_page={JOBS_PER_PAGE}&page={page}"
            data, status = self._get(path)
            if status != 200:
                return data, status
            page_jobs = (data or {}).get("jobs", [])
            jobs.extend(page_jobs)
            total_count = (data or {}).get("total_count", len(jobs))
            if not page_jobs or len(jobs) >= total_count:
                return {"total_count": total_count, "jobs": jobs}, status
            page += 1

    async def list_jobs_for_workflow_run(self, run_id: int) -> Tuple[Optional[Any], int]:
        return await asyncio.to_thread(self._list_jobs, run_id)
