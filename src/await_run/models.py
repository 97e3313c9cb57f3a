"""Value objects for workflow runs, jobs and steps as returned by the Actions API."""

from dataclasses import dataclass
from typing import Optional

JOB_URL_UNAVAILABLE = "GitHub failed to return the URL"


@dataclass(frozen=True)
class RunState:
    status: str
    conclusion: Optional[str]

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    @classmethod
    def from_api(cls, data: dict) -> "RunState":
        return cls(status=data.get("status"), conclusion=data.get("conclusion"))


@dataclass(frozen=True)
class Step:
    name: str
    number: int
    status: str
    conclusion: Optional[str]

    @classmethod
    def from_api(cls, data: dict) -> "Step":
        return cls(
            name=data.get("name"),
            number=data.get("number"),
            status=data.get("status"),
            conclusion=data.get("conclusion"),
        )


@dataclass(frozen=True)
class Job:
    """A job within a workflow run.

    url is never empty: a missing html_url becomes JOB_URL_UNAVAILABLE.
    steps keep the order the API returned them in.
    """

    id: int
    name: str
    url: str
    status: str
    conclusion: Optional[str]
    steps: tuple = ()

    @classmethod
    def from_api(cls, data: dict) -> "Job":
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            url=data.get("html_url") or JOB_URL_UNAVAILABLE,
            status=data.get("status"),
            conclusion=data.get("conclusion"),
            steps=tuple(Step.from_api(step) for step in data.get("steps") or []),
        )
