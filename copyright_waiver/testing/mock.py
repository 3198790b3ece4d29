"""
Mock collaborators for testing.

Provides a MockForgeClient that mimics the real client interface without
making API calls, and a MockGitHelper that fakes clones on the local
filesystem without running git.
"""

import hashlib
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TypeVar

from copyright_waiver.exceptions import CloneCancelledError, GitError
from copyright_waiver.license_files import CANONICAL_LICENSE_FILENAME
from copyright_waiver.types.licenses import LicenseText
from copyright_waiver.types.repos import LocalRepository, RepositoryRecord

T = TypeVar("T")

UNLICENSE_BODY = (
    "This is free and unencumbered software released into the public domain.\n"
)


@dataclass
class MockResponse:
    """Configuration for a mock response."""

    data: Any
    error: Exception | None = None
    call_count: int = 0


@dataclass
class MockCall:
    """Record of a method call."""

    method: str
    args: tuple[Any, ...]
    kwargs: dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class _CallRecorder:
    """Call bookkeeping shared by the mock collaborators."""

    def __init__(self) -> None:
        self._calls: list[MockCall] = []

    def _record_call(
        self,
        method: str,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        """Record a method call for verification."""
        self._calls.append(MockCall(method=method, args=args, kwargs=kwargs))

    def was_called(self, method: str) -> bool:
        """Check if a method (e.g. "repos.list_for_user", "push") was called."""
        return any(call.method == method for call in self._calls)

    def call_count(self, method: str) -> int:
        """Get the number of times a method was called."""
        return sum(1 for call in self._calls if call.method == method)

    def get_calls(self, method: str | None = None) -> list[MockCall]:
        """Get recorded calls, optionally filtered by method."""
        if method is None:
            return list(self._calls)
        return [call for call in self._calls if call.method == method]


class _MockResource:
    """Configured responses for one mocked resource client."""

    def __init__(self, mock_client: "MockForgeClient") -> None:
        self._mock = mock_client
        self._responses: dict[str, MockResponse] = {}

    def _get_response(self, method: str, default: T) -> T:
        """Get configured response or default."""
        resp = self._responses.get(method)
        if resp is None:
            return default
        resp.call_count += 1
        if resp.error:
            raise resp.error
        return default if resp.data is None else resp.data


class MockReposClient(_MockResource):
    def configure_list_for_user(
        self,
        response: list[RepositoryRecord] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._responses["list_for_user"] = MockResponse(data=response, error=error)

    def list_for_user(self, username: str) -> list[RepositoryRecord]:
        self._mock._record_call("repos.list_for_user", (username,), {})
        return self._get_response("list_for_user", [])


class MockLicensesClient(_MockResource):
    def configure_get(
        self,
        response: LicenseText | None = None,
        error: Exception | None = None,
    ) -> None:
        self._responses["get"] = MockResponse(data=response, error=error)

    def get(self, key: str) -> LicenseText:
        """Return the configured text, or a short Unlicense body keyed ``key``."""
        self._mock._record_call("licenses.get", (key,), {})
        return self._get_response(
            "get",
            LicenseText(key=key, name="The Unlicense", body=UNLICENSE_BODY),
        )


class MockForgeClient(_CallRecorder):
    """
    Mock forge client for testing.

    Provides the same interface as ForgeClient but returns configurable
    mock responses instead of making real API calls.

    Example:
        ```python
        from copyright_waiver.testing import MockForgeClient

        mock = MockForgeClient()
        mock.repos.configure_list_for_user(response=[record])

        records = mock.repos.list_for_user("octocat")
        assert mock.was_called("repos.list_for_user")
        ```
    """

    def __init__(self) -> None:
        super().__init__()
        self.repos = MockReposClient(self)
        self.licenses = MockLicensesClient(self)

    def reset(self) -> None:
        """Reset all recorded calls and configured responses."""
        self._calls.clear()
        self.repos._responses.clear()
        self.licenses._responses.clear()

    def close(self) -> None:
        """No-op for compatibility with real client."""
        pass

    def __enter__(self) -> "MockForgeClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class MockGitHelper(_CallRecorder):
    """
    Stand-in for GitHelper that never runs git.

    ``clone`` creates the destination directory and seeds it with the files
    configured for the repository; ``commit_license`` returns a digest of the
    LICENSE content; ``push`` only records the call.

    Example:
        ```python
        git = MockGitHelper()
        git.configure_files("octocat/hello", {"LICENSE.md": "MIT"})
        git.configure_error("clone", "octocat/broken", CloneError("octocat/broken", "boom"))
        ```
    """

    def __init__(self) -> None:
        super().__init__()
        self._files: dict[str, dict[str, str]] = {}
        self._errors: dict[tuple[str, str], Exception] = {}
        self._interrupt_on_clone: set[str] = set()

    def configure_files(self, full_name: str, files: dict[str, str]) -> None:
        """Files present in the fake clone of ``full_name``."""
        self._files[full_name] = files

    def configure_error(self, method: str, full_name: str, error: Exception) -> None:
        """Raise ``error`` when ``method`` runs for ``full_name``."""
        self._errors[(method, full_name)] = error

    def interrupt_clone(self, full_name: str) -> None:
        """Simulate the operator interrupting the clone of ``full_name``."""
        self._interrupt_on_clone.add(full_name)

    def clone(
        self,
        record: RepositoryRecord,
        destination: str | Path,
        credentials: Any,
        token: Any = None,
    ) -> LocalRepository:
        self._record_call("clone", (record, destination), {"token": token})
        if record.full_name in self._interrupt_on_clone and token is not None:
            token.cancel()
        if token is not None and token.cancelled:
            raise CloneCancelledError(record.full_name)
        self._raise_configured("clone", record.full_name)

        destination = Path(destination)
        destination.mkdir(parents=True, exist_ok=True)
        for filename, content in self._files.get(record.full_name, {}).items():
            (destination / filename).write_text(content, encoding="utf-8")
        return LocalRepository(record=record, path=destination)

    def commit_license(self, local_repo: LocalRepository, identity: Any) -> str:
        self._record_call("commit_license", (local_repo, identity), {})
        self._raise_configured("commit_license", local_repo.full_name)
        license_path = local_repo.path / CANONICAL_LICENSE_FILENAME
        if not license_path.exists():
            raise GitError(local_repo.full_name, "pathspec 'LICENSE' did not match any files")
        return hashlib.sha1(license_path.read_bytes()).hexdigest()

    def push(self, local_repo: LocalRepository, credentials: Any) -> None:
        self._record_call("push", (local_repo, credentials), {})
        self._raise_configured("push", local_repo.full_name)

    def pushed(self) -> list[str]:
        """Names of repositories pushed, in order."""
        return [call.args[0].full_name for call in self.get_calls("push")]

    def _raise_configured(self, method: str, full_name: str) -> None:
        error = self._errors.get((method, full_name))
        if error is not None:
            raise error
