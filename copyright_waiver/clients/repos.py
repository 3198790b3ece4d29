"""Repositories resource client."""

from typing import TYPE_CHECKING, Any

from copyright_waiver.exceptions import APIError, ListingError
from copyright_waiver.logging import get_logger
from copyright_waiver.types.repos import RepositoryRecord

if TYPE_CHECKING:
    from copyright_waiver.transport import HTTPTransport

logger = get_logger("http")

# GitHub caps per_page at 100
PAGE_SIZE = 100


class ReposClient:
    """Client for repository listing."""

    def __init__(self, transport: "HTTPTransport", page_size: int = PAGE_SIZE) -> None:
        """
        Initialize the repos client.

        Args:
            transport: HTTP transport for making requests
            page_size: Number of repositories requested per page
        """
        self.transport = transport
        self.page_size = page_size

    def list_for_user(self, username: str) -> list[RepositoryRecord]:
        """
        List every repository owned by a user, following pagination.

        Pages are requested until one comes back shorter than the page size.
        The order returned by the forge is preserved.

        Args:
            username: Forge username whose repositories are listed

        Returns:
            List of RepositoryRecord objects

        Raises:
            ListingError: If any page cannot be fetched or an entry is malformed
        """
        records: list[RepositoryRecord] = []
        page = 1

        while True:
            params: dict[str, Any] = {
                "type": "owner",
                "per_page": self.page_size,
                "page": page,
            }
            try:
                response = self.transport.get(f"/users/{username}/repos", params=params)
            except APIError as e:
                raise ListingError(
                    f"could not list repositories for {username!r}: {e.message}"
                ) from e

            if not isinstance(response, list):
                raise ListingError(
                    f"expected a JSON array of repositories for {username!r}, "
                    f"got {type(response).__name__}"
                )

            for index, entry in enumerate(response):
                try:
                    records.append(RepositoryRecord.from_api(entry))
                except (KeyError, TypeError) as e:
                    raise ListingError(
                        f"malformed repository entry {index} on page {page}: {e}"
                    ) from e

            logger.debug("Listed page %d for %s: %d repositories", page, username, len(response))

            if len(response) < self.page_size:
                return records
            page += 1
