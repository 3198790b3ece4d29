"""
Run coordinator.

Sequences listing, license resolution and the per-repository
clone → mutate → commit → push cycle, then tears the workspace down.
"""

from enum import Enum
from typing import TYPE_CHECKING

from copyright_waiver.cancellation import CancellationToken
from copyright_waiver.exceptions import (
    AuthError,
    CloneCancelledError,
    FilesystemError,
    GitError,
    NetworkError,
    NothingToCommitError,
    WaiverError,
)
from copyright_waiver.filtering import filter_repositories
from copyright_waiver.license_files import apply_license
from copyright_waiver.logging import get_logger
from copyright_waiver.types.licenses import LicenseText
from copyright_waiver.types.repos import RepositoryRecord
from copyright_waiver.types.runs import OutcomeStatus, RepositoryOutcome, RunSummary

if TYPE_CHECKING:
    from copyright_waiver.clients.repos import ReposClient
    from copyright_waiver.config import CommitIdentity
    from copyright_waiver.credentials import SSHCredentials
    from copyright_waiver.git import GitHelper
    from copyright_waiver.resolver import LicenseResolver
    from copyright_waiver.workspace import Workspace

logger = get_logger()


class RunState(str, Enum):
    IDLE = "idle"
    LISTING = "listing"
    RESOLVING = "resolving"
    PROCESSING = "processing"
    TEARDOWN = "teardown"
    DONE = "done"
    FATAL = "fatal"


class WaiverRun:
    """
    One batch run over a user's repositories.

    Failures of a single repository are recorded and the run moves on.
    Listing and resolution failures, and an SSH key rejected during a
    clone, abort the run. The workspace is torn down in every case.

    Cancellation only interrupts a clone; once a clone has completed,
    mutation, commit and push of that repository run to completion. git
    runs in its own session, so a terminal Ctrl-C reaches only the token.
    """

    def __init__(
        self,
        username: str,
        repos: "ReposClient",
        resolver: "LicenseResolver",
        workspace: "Workspace",
        git: "GitHelper",
        credentials: "SSHCredentials",
        identity: "CommitIdentity",
        token: CancellationToken | None = None,
    ) -> None:
        self.username = username
        self.repos = repos
        self.resolver = resolver
        self.workspace = workspace
        self.git = git
        self.credentials = credentials
        self.identity = identity
        self.token = token or CancellationToken()
        self.state = RunState.IDLE
        self.summary = RunSummary()

    def run(self) -> RunSummary:
        """
        Execute the run.

        Returns:
            RunSummary with one outcome per eligible repository

        Raises:
            ListingError: If the repository listing fails
            ResolutionError: If the license text cannot be fetched
            CloneAuthError: If the forge rejects the SSH key
        """
        try:
            self.state = RunState.LISTING
            records = filter_repositories(self.repos.list_for_user(self.username))
            if not records:
                logger.info("No eligible repositories for %s", self.username)
                self.summary.nothing_to_do = True
                self.state = RunState.DONE
                return self.summary
            logger.info("%d repositories to update for %s", len(records), self.username)

            self.state = RunState.RESOLVING
            text = self.resolver.resolve()

            self.state = RunState.PROCESSING
            logger.info("To gracefully stop after the current clone, press Ctrl-C.")
            for record in records:
                self.summary.add(self._process(record, text))
        except WaiverError:
            self.state = RunState.FATAL
            raise
        finally:
            self.summary.interrupted = self.token.cancelled
            self._teardown()

        self.state = RunState.DONE
        return self.summary

    def _process(self, record: RepositoryRecord, text: LicenseText) -> RepositoryOutcome:
        name = record.full_name

        if self.token.cancelled:
            return RepositoryOutcome(name, OutcomeStatus.SKIPPED, "cancelled by operator")

        try:
            local_repo = self.git.clone(
                record,
                self.workspace.path_for(name),
                self.credentials,
                self.token,
            )
            apply_license(local_repo, text)
            commit_id = self.git.commit_license(local_repo, self.identity)
            self.git.push(local_repo, self.credentials)
        except CloneCancelledError as e:
            logger.warning("%s: %s", name, e.message)
            return RepositoryOutcome(name, OutcomeStatus.CANCELLED, "clone cancelled by operator")
        except AuthError as e:
            logger.error("%s: SSH key rejected, aborting run: %s", name, e.message)
            self.summary.add(RepositoryOutcome(name, OutcomeStatus.FAILED, e.message))
            raise
        except NothingToCommitError:
            logger.info("%s: license already up to date", name)
            return RepositoryOutcome(name, OutcomeStatus.SKIPPED, "license already up to date")
        except (NetworkError, FilesystemError, GitError) as e:
            logger.error("%s: %s", name, e)
            return RepositoryOutcome(name, OutcomeStatus.FAILED, str(e))

        logger.info("%s: license updated", name)
        return RepositoryOutcome(name, OutcomeStatus.SUCCEEDED, commit_id=commit_id)

    def _teardown(self) -> None:
        previous = self.state
        self.state = RunState.TEARDOWN
        try:
            self.workspace.teardown()
        except FilesystemError as e:
            logger.warning("Workspace teardown incomplete: %s", e)
            self.summary.teardown_error = str(e)
        if previous in (RunState.FATAL, RunState.DONE):
            self.state = previous
