"""copyright-waiver forge resource clients."""

from copyright_waiver.clients.licenses import LicensesClient
from copyright_waiver.clients.repos import ReposClient

__all__ = [
    "LicensesClient",
    "ReposClient",
]
