"""copyright-waiver - relicense a user's repositories under a public-domain-equivalent license."""

__version__ = "0.1.0"

from copyright_waiver.cancellation import CancellationToken, install_interrupt_handler  # noqa: E402
from copyright_waiver.client import ForgeClient  # noqa: E402
from copyright_waiver.config import CommitIdentity, WaiverConfig  # noqa: E402
from copyright_waiver.credentials import SSHCredentials  # noqa: E402
from copyright_waiver.exceptions import (  # noqa: E402
    APIError,
    AuthError,
    CloneAuthError,
    CloneCancelledError,
    CloneError,
    ConfigurationError,
    FilesystemError,
    GitError,
    LicenseWriteError,
    ListingError,
    NetworkError,
    NothingToCommitError,
    NotFoundError,
    PushError,
    RateLimitedError,
    ResolutionError,
    ServerError,
    WaiverError,
    WorkspaceError,
)
from copyright_waiver.filtering import PUBLIC_DOMAIN_LICENSE_KEYS, filter_repositories  # noqa: E402
from copyright_waiver.git import COMMIT_MESSAGE, GitHelper  # noqa: E402
from copyright_waiver.license_files import apply_license, locate_license_file  # noqa: E402
from copyright_waiver.logging import configure_logging, get_logger  # noqa: E402
from copyright_waiver.resolver import LicenseResolver  # noqa: E402
from copyright_waiver.runner import RunState, WaiverRun  # noqa: E402
from copyright_waiver.transport import HTTPTransport, RetryConfig  # noqa: E402
from copyright_waiver.types import (  # noqa: E402
    ExitCode,
    LicenseText,
    LocalRepository,
    OutcomeStatus,
    RepositoryOutcome,
    RepositoryRecord,
    RunSummary,
)
from copyright_waiver.workspace import Workspace  # noqa: E402

__all__ = [
    "__version__",
    # Coordinator
    "WaiverRun",
    "RunState",
    "WaiverConfig",
    "CommitIdentity",
    # Stages
    "filter_repositories",
    "PUBLIC_DOMAIN_LICENSE_KEYS",
    "LicenseResolver",
    "Workspace",
    "GitHelper",
    "COMMIT_MESSAGE",
    "locate_license_file",
    "apply_license",
    # Credentials and cancellation
    "SSHCredentials",
    "CancellationToken",
    "install_interrupt_handler",
    # Forge API
    "ForgeClient",
    "HTTPTransport",
    "RetryConfig",
    # Types
    "RepositoryRecord",
    "LocalRepository",
    "LicenseText",
    "OutcomeStatus",
    "RepositoryOutcome",
    "RunSummary",
    "ExitCode",
    # Exceptions
    "WaiverError",
    "ConfigurationError",
    "AuthError",
    "NetworkError",
    "APIError",
    "NotFoundError",
    "RateLimitedError",
    "ServerError",
    "ListingError",
    "ResolutionError",
    "CloneError",
    "CloneCancelledError",
    "CloneAuthError",
    "PushError",
    "FilesystemError",
    "LicenseWriteError",
    "WorkspaceError",
    "GitError",
    "NothingToCommitError",
    # Logging
    "configure_logging",
    "get_logger",
]
