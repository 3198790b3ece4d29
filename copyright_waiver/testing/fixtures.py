"""
Pytest fixtures for copyright-waiver testing.

Provides records, credentials and mock collaborators shared by the test suite.
"""

from pathlib import Path
from typing import Any, Generator

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from copyright_waiver.cancellation import CancellationToken
from copyright_waiver.config import CommitIdentity
from copyright_waiver.credentials import SSHCredentials
from copyright_waiver.resolver import LicenseResolver
from copyright_waiver.runner import WaiverRun
from copyright_waiver.testing.mock import MockForgeClient, MockGitHelper
from copyright_waiver.types.licenses import LicenseText
from copyright_waiver.types.repos import RepositoryRecord
from copyright_waiver.workspace import Workspace


# ============================================================================
# Helper functions
# ============================================================================


def create_mock_record(
    full_name: str = "octocat/hello-world",
    license_key: str | None = "mit",
    fork: bool = False,
    archived: bool = False,
    default_branch: str = "main",
) -> RepositoryRecord:
    """Build a RepositoryRecord with sensible defaults."""
    return RepositoryRecord(
        full_name=full_name,
        ssh_url=f"git@github.com:{full_name}.git",
        default_branch=default_branch,
        license_key=license_key,
        fork=fork,
        archived=archived,
    )


def create_api_repository(
    full_name: str = "octocat/hello-world",
    license_key: str | None = "mit",
    fork: bool = False,
    archived: bool = False,
    default_branch: str = "main",
) -> dict[str, Any]:
    """Build one entry of a ``GET /users/{name}/repos`` response."""
    return {
        "id": abs(hash(full_name)) % 10**8,
        "name": full_name.rsplit("/", 1)[-1],
        "full_name": full_name,
        "private": False,
        "ssh_url": f"git@github.com:{full_name}.git",
        "clone_url": f"https://github.com/{full_name}.git",
        "default_branch": default_branch,
        "license": (
            None
            if license_key is None
            else {"key": license_key, "name": license_key.upper(), "spdx_id": license_key.upper()}
        ),
        "fork": fork,
        "archived": archived,
    }


def write_ssh_key(path: Path) -> Path:
    """Write a freshly generated, unencrypted OpenSSH ed25519 private key."""
    key = ed25519.Ed25519PrivateKey.generate()
    path.write_bytes(
        key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.OpenSSH,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    path.chmod(0o600)
    return path


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def ssh_key_file(tmp_path: Path) -> Path:
    """Provide the path of a valid SSH private key."""
    return write_ssh_key(tmp_path / "id_ed25519")


@pytest.fixture
def ssh_credentials(ssh_key_file: Path) -> SSHCredentials:
    return SSHCredentials.from_file(ssh_key_file)


@pytest.fixture
def commit_identity() -> CommitIdentity:
    return CommitIdentity(name="Waiver Bot", email="waiver-bot@example.com")


@pytest.fixture
def unlicense_text() -> LicenseText:
    return LicenseText(
        key="unlicense",
        name="The Unlicense",
        body="This is free and unencumbered software released into the public domain.\n",
    )


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    """Provide a workspace rooted in a temporary directory."""
    return Workspace(tmp_path / "workspace")


@pytest.fixture
def mock_forge() -> Generator[MockForgeClient, None, None]:
    client = MockForgeClient()
    yield client
    client.reset()


@pytest.fixture
def mock_git() -> MockGitHelper:
    return MockGitHelper()


@pytest.fixture
def cancellation_token() -> CancellationToken:
    return CancellationToken()


@pytest.fixture
def make_run(
    mock_forge: MockForgeClient,
    mock_git: MockGitHelper,
    workspace: Workspace,
    ssh_credentials: SSHCredentials,
    commit_identity: CommitIdentity,
    cancellation_token: CancellationToken,
):
    """
    Factory building a WaiverRun over the mock collaborators.

    Example:
        ```python
        def test_run(make_run, mock_forge):
            mock_forge.repos.configure_list_for_user(response=[record])
            summary = make_run().run()
        ```
    """
    def factory(username: str = "octocat") -> WaiverRun:
        return WaiverRun(
            username=username,
            repos=mock_forge.repos,
            resolver=LicenseResolver(mock_forge.licenses),
            workspace=workspace,
            git=mock_git,
            credentials=ssh_credentials,
            identity=commit_identity,
            token=cancellation_token,
        )

    return factory
