"""
Git helper utilities for copyright-waiver.

Runs the clone, commit and push stages through the git command line,
authenticating over SSH with the run's key.
"""

import os
import subprocess
import sys
import threading
from collections import deque
from collections.abc import Iterable
from pathlib import Path
from typing import IO, TYPE_CHECKING

from copyright_waiver.exceptions import (
    CloneAuthError,
    CloneCancelledError,
    CloneError,
    GitError,
    NothingToCommitError,
    PushError,
)
from copyright_waiver.license_files import CANONICAL_LICENSE_FILENAME
from copyright_waiver.logging import get_logger, log_git_command
from copyright_waiver.types.repos import LocalRepository, RepositoryRecord

if TYPE_CHECKING:
    from copyright_waiver.cancellation import CancellationToken
    from copyright_waiver.config import CommitIdentity
    from copyright_waiver.credentials import SSHCredentials

logger = get_logger("git")

COMMIT_MESSAGE = "copyright-waiver: Update license to a public-domain-equivalent license"

# Fragments of ssh/git output that mean the key was rejected
_AUTH_FAILURE_MARKERS = (
    "Permission denied (publickey",
    "Host key verification failed",
    "Authentication failed",
    "Load key",
)

# Lines of clone output kept for error messages
_OUTPUT_TAIL = 50


def _is_auth_failure(output: str) -> bool:
    return any(marker in output for marker in _AUTH_FAILURE_MARKERS)


class GitHelper:
    """
    Helper for the git operations of a run.

    Example:
        ```python
        from copyright_waiver.git import GitHelper

        git = GitHelper()
        local = git.clone(record, workspace.path_for(record.full_name), credentials, token)
        apply_license(local, text)
        git.commit_license(local, identity)
        git.push(local, credentials)
        ```
    """

    def __init__(
        self,
        progress: IO[str] | None = sys.stderr,
        depth: int | None = None,
        poll_interval: float = 0.1,
    ) -> None:
        """
        Initialize GitHelper.

        Args:
            progress: Stream receiving clone progress (None to discard it)
            depth: Optional shallow clone depth
            poll_interval: Seconds between cancellation checks during a clone
        """
        self.progress = progress
        self.depth = depth
        self.poll_interval = poll_interval

    def clone(
        self,
        record: RepositoryRecord,
        destination: str | Path,
        credentials: "SSHCredentials",
        token: "CancellationToken | None" = None,
    ) -> LocalRepository:
        """
        Clone the default branch of a repository.

        The clone is single-branch and uses ``origin`` as the remote name.
        Parent directories of ``destination`` are created as needed.

        Args:
            record: Repository to clone
            destination: Local directory to clone into
            credentials: SSH key used for transport authentication
            token: Cancellation token polled while git runs

        Returns:
            LocalRepository for the new clone

        Raises:
            CloneCancelledError: If the token is cancelled before or during the clone
            CloneAuthError: If the remote rejects the credentials
            CloneError: On any other clone failure
        """
        destination = Path(destination)

        if token is not None and token.cancelled:
            raise CloneCancelledError(record.full_name)

        cmd = [
            "git",
            "clone",
            "--progress",
            "--single-branch",
            "--branch",
            record.default_branch,
            "--origin",
            "origin",
        ]
        if self.depth is not None:
            cmd.extend(["--depth", str(self.depth)])
        cmd.extend([record.ssh_url, str(destination)])

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CloneError(
                record.full_name, f"cannot create {destination.parent}: {e}"
            ) from e

        logger.info("Cloning %s (%s)", record.full_name, record.default_branch)
        log_git_command(cmd)

        try:
            process = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                env=credentials.git_env(),
                # Outside the terminal's process group: only the token stops git
                start_new_session=True,
            )
        except OSError as e:
            raise CloneError(record.full_name, f"cannot run git: {e}") from e

        output: deque[str] = deque(maxlen=_OUTPUT_TAIL)
        reader = threading.Thread(
            target=self._forward_progress,
            args=(process.stderr, output),
            daemon=True,
        )
        reader.start()

        returncode = self._wait(process, token)
        reader.join(timeout=5)

        if token is not None and token.cancelled:
            raise CloneCancelledError(record.full_name)

        if returncode != 0:
            message = "".join(output).strip() or f"git clone exited with status {returncode}"
            if _is_auth_failure(message):
                raise CloneAuthError(record.full_name, message)
            raise CloneError(record.full_name, message)

        return LocalRepository(record=record, path=destination)

    def commit_license(
        self,
        local_repo: LocalRepository,
        identity: "CommitIdentity",
    ) -> str:
        """
        Stage the canonical LICENSE file and commit it.

        Only ``LICENSE`` is staged. Author and committer are both set to
        ``identity`` regardless of the clone's git configuration.

        Args:
            local_repo: Clone whose LICENSE was replaced
            identity: Author/committer name and email

        Returns:
            The new commit id

        Raises:
            NothingToCommitError: If LICENSE already had the new content
            GitError: If staging or committing fails
        """
        name = local_repo.full_name

        self._run(local_repo.path, ["add", "--", CANONICAL_LICENSE_FILENAME], name)

        diff = self._run(
            local_repo.path,
            ["diff", "--cached", "--quiet", "--", CANONICAL_LICENSE_FILENAME],
            name,
            ok_codes=(0, 1),
        )
        if diff.returncode == 0:
            raise NothingToCommitError(name)

        env = os.environ.copy()
        env.update({
            "GIT_AUTHOR_NAME": identity.name,
            "GIT_AUTHOR_EMAIL": identity.email,
            "GIT_COMMITTER_NAME": identity.name,
            "GIT_COMMITTER_EMAIL": identity.email,
        })
        self._run(
            local_repo.path,
            ["commit", "-m", COMMIT_MESSAGE, "--", CANONICAL_LICENSE_FILENAME],
            name,
            env=env,
        )

        commit_id = self.head_oid(local_repo.path)
        logger.info("%s: committed %s", name, commit_id[:12])
        return commit_id

    def push(
        self,
        local_repo: LocalRepository,
        credentials: "SSHCredentials",
    ) -> None:
        """
        Push the new commit to ``origin``.

        No refspec is given; git pushes the checked-out branch to the
        upstream configured by the clone.

        Args:
            local_repo: Clone holding the commit
            credentials: SSH key used for transport authentication

        Raises:
            PushError: On rejection, authentication or network failure
        """
        cmd = ["git", "push", "origin"]
        log_git_command(cmd, cwd=str(local_repo.path))

        try:
            result = subprocess.run(
                cmd,
                cwd=local_repo.path,
                capture_output=True,
                text=True,
                stdin=subprocess.DEVNULL,
                env=credentials.git_env(),
                errors="replace",
                start_new_session=True,
            )
        except OSError as e:
            raise PushError(local_repo.full_name, f"cannot run git: {e}") from e

        if result.returncode != 0:
            message = result.stderr.strip() or f"git push exited with status {result.returncode}"
            raise PushError(local_repo.full_name, message)

        logger.info("%s: pushed to origin", local_repo.full_name)

    def head_oid(self, repo_path: Path) -> str:
        """Get the OID of HEAD in the local repository."""
        result = self._run(repo_path, ["rev-parse", "HEAD"], str(repo_path))
        return result.stdout.strip()

    @staticmethod
    def get_config(key: str) -> str | None:
        """
        Read a value from the user's git configuration.

        Returns:
            The configured value, or None if unset or git is unavailable
        """
        try:
            result = subprocess.run(
                ["git", "config", "--get", key],
                capture_output=True,
                text=True,
                stdin=subprocess.DEVNULL,
            )
        except OSError:
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def _wait(
        self,
        process: subprocess.Popen,
        token: "CancellationToken | None",
    ) -> int:
        """Wait for ``process``, terminating it if ``token`` is cancelled."""
        while True:
            try:
                return process.wait(timeout=self.poll_interval)
            except subprocess.TimeoutExpired:
                if token is None or not token.cancelled:
                    continue
            logger.info("Terminating git clone (pid %d)", process.pid)
            process.terminate()
            try:
                return process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                process.kill()
                return process.wait()

    def _forward_progress(self, stream: Iterable[str], sink: deque[str]) -> None:
        for line in stream:
            sink.append(line)
            if self.progress is not None:
                self.progress.write(line)
                self.progress.flush()

    def _run(
        self,
        repo_path: Path,
        args: list[str],
        repository: str,
        env: dict[str, str] | None = None,
        ok_codes: tuple[int, ...] = (0,),
    ) -> subprocess.CompletedProcess:
        cmd = ["git", *args]
        log_git_command(cmd, cwd=str(repo_path))
        try:
            result = subprocess.run(
                cmd,
                cwd=repo_path,
                capture_output=True,
                text=True,
                stdin=subprocess.DEVNULL,
                env=env,
                errors="replace",
                start_new_session=True,
            )
        except OSError as e:
            raise GitError(repository, f"cannot run git: {e}") from e

        if result.returncode not in ok_codes:
            message = result.stderr.strip() or result.stdout.strip()
            raise GitError(repository, f"git {args[0]} failed: {message}")
        return result
