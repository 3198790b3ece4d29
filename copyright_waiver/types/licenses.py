"""License-related data models."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LicenseText:
    """The replacement license body applied to every eligible repository."""

    key: str
    name: str
    body: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "LicenseText":
        """Build a LicenseText from a ``GET /licenses/{key}`` response."""
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        body = data["body"]
        if not isinstance(body, str) or not body.strip():
            raise ValueError("license body is empty")
        return cls(
            key=data.get("key", ""),
            name=data.get("name", ""),
            body=body,
        )
