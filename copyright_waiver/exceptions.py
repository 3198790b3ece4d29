"""copyright-waiver exception classes."""


class WaiverError(Exception):
    """Base exception for all copyright-waiver errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(WaiverError):
    """Raised when command-line input or configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class AuthError(WaiverError):
    """Raised when SSH credentials cannot be loaded or are rejected."""

    pass


# ============================================================================
# Network errors
# ============================================================================


class NetworkError(WaiverError):
    """Base class for failures talking to the forge (HTTP or git transport)."""

    pass


class APIError(NetworkError):
    """Raised on a non-success response from the forge API."""

    def __init__(
        self, code: str, message: str, status_code: int | None = None
    ) -> None:
        super().__init__(code, message)
        self.status_code = status_code


class NotFoundError(APIError):
    """Raised when a user or resource is not found."""

    pass


class RateLimitedError(APIError):
    """Raised when the forge API rate limit is exhausted."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        status_code: int | None = None,
    ) -> None:
        super().__init__(code, message, status_code)
        self.retry_after = retry_after


class ServerError(APIError):
    """Raised on server errors (5xx) and exhausted connection retries."""

    pass


class ListingError(NetworkError):
    """Raised when the repository listing cannot be fetched or parsed."""

    def __init__(self, message: str) -> None:
        super().__init__("LISTING_FAILED", message)


class ResolutionError(NetworkError):
    """Raised when the replacement license text cannot be resolved."""

    def __init__(self, message: str) -> None:
        super().__init__("LICENSE_RESOLUTION_FAILED", message)


class CloneError(NetworkError):
    """Raised when a repository cannot be cloned."""

    def __init__(self, repository: str, message: str, code: str = "CLONE_FAILED") -> None:
        super().__init__(code, f"{repository}: {message}")
        self.repository = repository


class CloneCancelledError(CloneError):
    """Raised when an in-flight clone is aborted by the operator."""

    def __init__(self, repository: str) -> None:
        super().__init__(repository, "clone cancelled by operator", "CLONE_CANCELLED")


class CloneAuthError(CloneError, AuthError):
    """Raised when the remote rejects the SSH credentials during a clone."""

    def __init__(self, repository: str, message: str) -> None:
        CloneError.__init__(self, repository, message, "CLONE_AUTH_FAILED")


class PushError(NetworkError):
    """Raised when a commit cannot be pushed to origin."""

    def __init__(self, repository: str, message: str) -> None:
        super().__init__("PUSH_FAILED", f"{repository}: {message}")
        self.repository = repository


# ============================================================================
# Filesystem and git errors
# ============================================================================


class FilesystemError(WaiverError):
    """Base class for local filesystem failures."""

    pass


class LicenseWriteError(FilesystemError):
    """Raised when the license file cannot be replaced."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__("LICENSE_WRITE_FAILED", f"{path}: {message}")
        self.path = path


class WorkspaceError(FilesystemError):
    """Raised on invalid workspace paths or a failed teardown."""

    def __init__(self, message: str) -> None:
        super().__init__("WORKSPACE_ERROR", message)


class GitError(WaiverError):
    """Raised when a local git operation (stage, commit) fails."""

    def __init__(self, repository: str, message: str, code: str = "GIT_ERROR") -> None:
        super().__init__(code, f"{repository}: {message}")
        self.repository = repository


class NothingToCommitError(GitError):
    """Raised when the new license text leaves nothing staged."""

    def __init__(self, repository: str) -> None:
        super().__init__(repository, "license already up to date", "NOTHING_TO_COMMIT")
