"""Run outcome data models."""

from dataclasses import dataclass, field
from enum import Enum


class OutcomeStatus(str, Enum):
    """Final status of one repository within a run."""

    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ExitCode:
    SUCCESS = 0
    USAGE = 1
    PARTIAL_FAILURE = 2
    FAILURE = 3
    FATAL = 4
    INTERRUPTED = 130


@dataclass
class RepositoryOutcome:
    """Result of processing one repository."""

    full_name: str
    status: OutcomeStatus
    reason: str | None = None
    commit_id: str | None = None


@dataclass
class RunSummary:
    """Aggregated outcomes of one run."""

    outcomes: list[RepositoryOutcome] = field(default_factory=list)
    nothing_to_do: bool = False
    teardown_error: str | None = None
    interrupted: bool = False

    def add(self, outcome: RepositoryOutcome) -> None:
        self.outcomes.append(outcome)

    def with_status(self, status: OutcomeStatus) -> list[RepositoryOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def succeeded(self) -> list[RepositoryOutcome]:
        return self.with_status(OutcomeStatus.SUCCEEDED)

    @property
    def failed(self) -> list[RepositoryOutcome]:
        return self.with_status(OutcomeStatus.FAILED)

    @property
    def skipped(self) -> list[RepositoryOutcome]:
        return self.with_status(OutcomeStatus.SKIPPED)

    @property
    def cancelled(self) -> bool:
        return any(o.status == OutcomeStatus.CANCELLED for o in self.outcomes)

    @property
    def exit_code(self) -> int:
        """
        Overall process exit status.

        Interruption wins over failures; a run where nothing failed is a
        success even if some repositories were skipped.
        """
        if self.interrupted or self.cancelled:
            return ExitCode.INTERRUPTED
        if not self.failed:
            return ExitCode.SUCCESS
        if self.succeeded:
            return ExitCode.PARTIAL_FAILURE
        return ExitCode.FAILURE

    def format(self) -> str:
        """Human-readable multi-line report."""
        if self.nothing_to_do:
            return "No repos to update under the given username."

        lines = [
            f"{len(self.succeeded)} updated, {len(self.skipped)} skipped, "
            f"{len(self.failed)} failed"
        ]
        for outcome in self.outcomes:
            line = f"  {outcome.status.value:<9} {outcome.full_name}"
            if outcome.commit_id:
                line += f" ({outcome.commit_id[:12]})"
            if outcome.reason:
                line += f": {outcome.reason}"
            lines.append(line)
        return "\n".join(lines)
