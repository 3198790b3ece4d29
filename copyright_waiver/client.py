"""
Forge API client.

Provides the interface used to list repositories and look up license text.
"""

from typing import Any

from copyright_waiver.clients import LicensesClient, ReposClient
from copyright_waiver.transport import HTTPTransport, RetryConfig


class ForgeClient:
    """
    Client for the forge's REST API.

    Aggregates the resource clients over a shared transport.

    Example:
        ```python
        from copyright_waiver.client import ForgeClient

        with ForgeClient() as forge:
            records = forge.repos.list_for_user("octocat")
            unlicense = forge.licenses.get("unlicense")
        ```
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Args:
            base_url: Base URL for API requests (default: https://api.github.com)
            token: Optional API token; anonymous requests have a low rate limit
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
        """
        self.base_url = base_url
        self.timeout = timeout

        self._transport = HTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
        )

        self.repos = ReposClient(self._transport)
        self.licenses = LicensesClient(self._transport)

    @property
    def transport(self) -> HTTPTransport:
        return self._transport

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._transport.close()

    def __enter__(self) -> "ForgeClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
