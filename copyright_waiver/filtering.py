"""Repository eligibility filter.

A repository is eligible for the license change unless it is archived, is a
fork, or already carries a public-domain-equivalent license.
"""

from collections.abc import Iterable

from copyright_waiver.logging import get_logger
from copyright_waiver.types.repos import RepositoryRecord

logger = get_logger()

# Unlicense, CC0, 0BSD and WTFPL; matched case-sensitively against license.key
PUBLIC_DOMAIN_LICENSE_KEYS = frozenset({"unlicense", "cc0-1.0", "0bsd", "wtfpl"})


def exclusion_reason(record: RepositoryRecord) -> str | None:
    """Return why a record is excluded, or None if it is eligible."""
    if record.archived:
        return "archived"
    if record.fork:
        return "fork"
    if record.license_key in PUBLIC_DOMAIN_LICENSE_KEYS:
        return f"already public-domain-equivalent ({record.license_key})"
    return None


def is_eligible(record: RepositoryRecord) -> bool:
    return exclusion_reason(record) is None


def filter_repositories(records: Iterable[RepositoryRecord]) -> list[RepositoryRecord]:
    """
    Keep only the records eligible for the license change.

    Relative order is preserved and the input is not modified, so filtering
    an already-filtered list returns an equal list.

    Args:
        records: Repository records in listing order

    Returns:
        Eligible records in their original order
    """
    eligible: list[RepositoryRecord] = []
    for record in records:
        reason = exclusion_reason(record)
        if reason is None:
            eligible.append(record)
        else:
            logger.debug("Skipping %s: %s", record.full_name, reason)
    return eligible
