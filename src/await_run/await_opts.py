"""Options dataclass for the await-run command."""

from dataclasses import dataclass

import click


@dataclass
class AwaitRunOpts:
    """All options for awaiting a workflow run."""

    run_id: int
    owner: str = "{owner}"
    repo: str = "{repo}"
    run_timeout_seconds: int = 300
    poll_interval_ms: int = 2500

    @property
    def run_timeout_ms(self) -> int:
        return self.run_timeout_seconds * 1000

    def validate(self):
        """Raise click.UsageError if a duration is not positive."""
        invalid = [flag for attr, flag in (
            ("run_timeout_seconds", "--run-timeout-seconds"),
            ("poll_interval_ms", "--poll-interval-ms"),
        ) if getattr(self, attr) <= 0]
        if invalid:
            raise click.UsageError(
                f"must be greater than zero: {', '.join(invalid)}"
            )
