"""Licenses resource client."""

from typing import TYPE_CHECKING

from copyright_waiver.types.licenses import LicenseText

if TYPE_CHECKING:
    from copyright_waiver.transport import HTTPTransport


class LicensesClient:
    """Client for license metadata lookups."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the licenses client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def get(self, key: str) -> LicenseText:
        """
        Get a license, including its full text.

        Args:
            key: License key (e.g., "unlicense")

        Returns:
            LicenseText with the license body

        Raises:
            NotFoundError: If the license key is unknown
            APIError: On other API errors
            KeyError, TypeError, ValueError: If the response has no usable body
        """
        response = self.transport.get(f"/licenses/{key}")
        return LicenseText.from_api(response)
