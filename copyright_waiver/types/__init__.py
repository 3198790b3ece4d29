"""copyright-waiver type definitions."""

from copyright_waiver.types.licenses import LicenseText
from copyright_waiver.types.repos import LocalRepository, RepositoryRecord
from copyright_waiver.types.runs import (
    ExitCode,
    OutcomeStatus,
    RepositoryOutcome,
    RunSummary,
)

__all__ = [
    # Repos
    "RepositoryRecord",
    "LocalRepository",
    # Licenses
    "LicenseText",
    # Runs
    "ExitCode",
    "OutcomeStatus",
    "RepositoryOutcome",
    "RunSummary",
]
