"""copyright-waiver testing utilities.

Provides mock collaborators and fixtures for testing runs without a forge.
"""

from copyright_waiver.testing.fixtures import (
    create_api_repository,
    create_mock_record,
    write_ssh_key,
)
from copyright_waiver.testing.mock import (
    MockCall,
    MockForgeClient,
    MockGitHelper,
    MockResponse,
)

__all__ = [
    # Mocks
    "MockForgeClient",
    "MockGitHelper",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_record",
    "create_api_repository",
    "write_ssh_key",
]
