"""
Run configuration.

Settings come from command-line flags, then environment variables, then
defaults.
"""

import argparse
import os
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from copyright_waiver.exceptions import ConfigurationError
from copyright_waiver.git import GitHelper

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_WORKSPACE = Path(tempfile.gettempdir()) / "copyright-waiver"


@dataclass(frozen=True)
class CommitIdentity:
    """Author and committer identity for the license commit."""

    name: str
    email: str

    @classmethod
    def resolve(
        cls,
        name: str | None,
        email: str | None,
        environ: Mapping[str, str],
    ) -> "CommitIdentity":
        """
        Resolve the identity from flags, environment or the user's git config.

        Raises:
            ConfigurationError: If a name or email cannot be determined
        """
        name = (
            name
            or environ.get("COPYRIGHT_WAIVER_AUTHOR_NAME")
            or GitHelper.get_config("user.name")
        )
        email = (
            email
            or environ.get("COPYRIGHT_WAIVER_AUTHOR_EMAIL")
            or GitHelper.get_config("user.email")
        )
        if not name or not email:
            raise ConfigurationError(
                "commit identity not set: pass --author-name/--author-email, set "
                "COPYRIGHT_WAIVER_AUTHOR_NAME/COPYRIGHT_WAIVER_AUTHOR_EMAIL, or "
                "configure git user.name/user.email"
            )
        return cls(name=name, email=email)


@dataclass(frozen=True)
class WaiverConfig:
    """Everything a run needs besides its collaborators."""

    username: str
    ssh_key: str
    identity: CommitIdentity
    workspace_root: Path = DEFAULT_WORKSPACE
    api_url: str = DEFAULT_API_URL
    api_token: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    clone_depth: int | None = None

    @classmethod
    def from_args(
        cls,
        args: argparse.Namespace,
        environ: Mapping[str, str] | None = None,
    ) -> "WaiverConfig":
        """
        Build the configuration from parsed command-line arguments.

        Environment variables:
            COPYRIGHT_WAIVER_WORKSPACE: Workspace root (default: <tmp>/copyright-waiver)
            COPYRIGHT_WAIVER_API_URL: Forge API base URL (default: https://api.github.com)
            COPYRIGHT_WAIVER_TIMEOUT: HTTP timeout in seconds (default: 30)
            COPYRIGHT_WAIVER_AUTHOR_NAME / COPYRIGHT_WAIVER_AUTHOR_EMAIL: Commit identity
            GITHUB_TOKEN: API token (optional)

        Raises:
            ConfigurationError: If required input is missing or invalid
        """
        if environ is None:
            environ = os.environ

        if not args.name:
            raise ConfigurationError("--name is required")
        if not args.ssh_key:
            raise ConfigurationError("--ssh-key is required")

        timeout_str = environ.get("COPYRIGHT_WAIVER_TIMEOUT")
        timeout = DEFAULT_TIMEOUT
        if timeout_str:
            try:
                timeout = float(timeout_str)
            except ValueError:
                timeout = -1.0
            if timeout <= 0:
                raise ConfigurationError(
                    f"Invalid COPYRIGHT_WAIVER_TIMEOUT: {timeout_str!r}. Must be a positive number"
                )

        depth = getattr(args, "depth", None)
        if depth is not None and depth < 1:
            raise ConfigurationError(f"Invalid --depth: {depth}. Must be at least 1")

        workspace = (
            getattr(args, "workspace", None)
            or environ.get("COPYRIGHT_WAIVER_WORKSPACE")
            or DEFAULT_WORKSPACE
        )

        return cls(
            username=args.name,
            ssh_key=args.ssh_key,
            identity=CommitIdentity.resolve(
                getattr(args, "author_name", None),
                getattr(args, "author_email", None),
                environ,
            ),
            workspace_root=Path(os.path.expanduser(str(workspace))),
            api_url=(
                getattr(args, "api_url", None)
                or environ.get("COPYRIGHT_WAIVER_API_URL")
                or DEFAULT_API_URL
            ),
            api_token=environ.get("GITHUB_TOKEN") or None,
            timeout=timeout,
            clone_depth=depth,
        )
