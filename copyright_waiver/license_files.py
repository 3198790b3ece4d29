"""Locating and replacing a repository's license file."""

import os
from pathlib import Path

from copyright_waiver.exceptions import LicenseWriteError
from copyright_waiver.logging import get_logger
from copyright_waiver.types.licenses import LicenseText
from copyright_waiver.types.repos import LocalRepository

logger = get_logger()

CANONICAL_LICENSE_FILENAME = "LICENSE"

# Lookup priority: the first existing file wins
LICENSE_CANDIDATES = ("LICENSE.md", "LICENSE.txt", CANONICAL_LICENSE_FILENAME)

LICENSE_FILE_MODE = 0o644


def locate_license_file(repo_path: Path) -> Path:
    """
    Find the existing license file of a working tree.

    Args:
        repo_path: Root of the working tree

    Returns:
        The first existing candidate, or the canonical LICENSE path when
        the repository has no license file
    """
    for filename in LICENSE_CANDIDATES:
        candidate = repo_path / filename
        if candidate.exists():
            return candidate
    return repo_path / CANONICAL_LICENSE_FILENAME


def apply_license(local_repo: LocalRepository, text: LicenseText) -> Path:
    """
    Replace the repository's license with ``text``.

    The located license file is deleted first, then the text is written to
    the canonical LICENSE file. A ``LICENSE.md`` or ``LICENSE.txt`` variant
    is deleted from the working tree only; the deletion is not staged.

    Args:
        local_repo: The clone to modify
        text: Replacement license

    Returns:
        Path of the written canonical license file

    Raises:
        LicenseWriteError: On any filesystem failure
    """
    existing = locate_license_file(local_repo.path)
    target = local_repo.path / CANONICAL_LICENSE_FILENAME

    try:
        existing.unlink(missing_ok=True)
        target.write_text(text.body, encoding="utf-8")
        os.chmod(target, LICENSE_FILE_MODE)
    except OSError as e:
        raise LicenseWriteError(str(target), str(e)) from e

    if existing != target:
        logger.info(
            "%s: replaced %s with %s",
            local_repo.full_name,
            existing.name,
            CANONICAL_LICENSE_FILENAME,
        )
    else:
        logger.info("%s: wrote %s", local_repo.full_name, CANONICAL_LICENSE_FILENAME)
    return target
