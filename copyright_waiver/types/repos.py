"""Repository-related data models."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class RepositoryRecord:
    """Identity and mutation-eligibility metadata for one remote repository."""

    full_name: str
    ssh_url: str
    default_branch: str
    license_key: str | None
    fork: bool
    archived: bool

    @property
    def name(self) -> str:
        """Repository name without the owner prefix."""
        return self.full_name.rsplit("/", 1)[-1]

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RepositoryRecord":
        """
        Build a record from one entry of the forge's repository listing.

        Args:
            data: JSON object as returned by ``GET /users/{name}/repos``

        Returns:
            RepositoryRecord

        Raises:
            KeyError: If a required field is missing
            TypeError: If the entry or a required field has the wrong type
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")

        # license is null for repositories without a detected license
        license_info = data.get("license") or {}
        license_key = license_info.get("key") if isinstance(license_info, dict) else None

        full_name = data["full_name"]
        ssh_url = data["ssh_url"]
        default_branch = data["default_branch"]
        for field_name, value in (
            ("full_name", full_name),
            ("ssh_url", ssh_url),
            ("default_branch", default_branch),
        ):
            if not isinstance(value, str) or not value:
                raise TypeError(f"field {field_name!r} must be a non-empty string")

        return cls(
            full_name=full_name,
            ssh_url=ssh_url,
            default_branch=default_branch,
            license_key=license_key,
            fork=bool(data.get("fork", False)),
            archived=bool(data.get("archived", False)),
        )


@dataclass(frozen=True)
class LocalRepository:
    """An on-disk single-branch clone of a RepositoryRecord."""

    record: RepositoryRecord
    path: Path

    @property
    def full_name(self) -> str:
        return self.record.full_name
