"""
Pytest plugin for copyright-waiver testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["copyright_waiver.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from copyright_waiver.testing.fixtures import (
    cancellation_token,
    commit_identity,
    make_run,
    mock_forge,
    mock_git,
    ssh_credentials,
    ssh_key_file,
    unlicense_text,
    workspace,
)

__all__ = [
    "cancellation_token",
    "commit_identity",
    "make_run",
    "mock_forge",
    "mock_git",
    "ssh_credentials",
    "ssh_key_file",
    "unlicense_text",
    "workspace",
]
