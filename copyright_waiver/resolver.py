"""Replacement license lookup."""

from copyright_waiver.clients.licenses import LicensesClient
from copyright_waiver.exceptions import APIError, ResolutionError
from copyright_waiver.logging import get_logger
from copyright_waiver.types.licenses import LicenseText

logger = get_logger()

DEFAULT_LICENSE_KEY = "unlicense"


class LicenseResolver:
    """Fetches the replacement license text once per run."""

    def __init__(self, licenses: LicensesClient, key: str = DEFAULT_LICENSE_KEY) -> None:
        self.licenses = licenses
        self.key = key

    def resolve(self) -> LicenseText:
        """
        Fetch the replacement license text.

        Returns:
            LicenseText for the configured license key

        Raises:
            ResolutionError: On network failure, a non-success status or a
                response without a license body
        """
        try:
            text = self.licenses.get(self.key)
        except APIError as e:
            raise ResolutionError(f"could not fetch license {self.key!r}: {e.message}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise ResolutionError(f"malformed response for license {self.key!r}: {e}") from e

        logger.info("Resolved replacement license: %s", text.name or self.key)
        return text
