"""Batch workspace holding the local clones of one run."""

import shutil
import sys
import tempfile
from pathlib import Path

from copyright_waiver.exceptions import WorkspaceError
from copyright_waiver.logging import get_logger

logger = get_logger()

RUN_DIR_PREFIX = "run-"


class Workspace:
    """
    A root directory under which every clone of a run lives.

    The root belongs to one run and is removed by ``teardown()``. Use
    ``Workspace.claim(base)`` to get a fresh root below a user-supplied
    directory; ``base`` and anything else in it are left alone.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    @classmethod
    def claim(cls, base: str | Path) -> "Workspace":
        """
        Create a new, empty run directory below ``base``.

        Args:
            base: Directory holding run directories; created if missing

        Returns:
            Workspace rooted at the new run directory

        Raises:
            WorkspaceError: If the run directory cannot be created
        """
        base = Path(base)
        try:
            base.mkdir(parents=True, exist_ok=True)
            root = tempfile.mkdtemp(prefix=RUN_DIR_PREFIX, dir=base)
        except OSError as e:
            raise WorkspaceError(f"cannot create a run directory under {base}: {e}") from e
        logger.debug("Claimed workspace %s", root)
        return cls(root)

    def path_for(self, full_name: str) -> Path:
        """
        Map a qualified repository name to its clone directory.

        Pure path arithmetic; nothing is created on disk.

        Args:
            full_name: Qualified name such as "octocat/hello-world"

        Returns:
            ``<root>/<full_name>``

        Raises:
            WorkspaceError: If the name is empty, absolute or would escape the root
        """
        parts = full_name.split("/")
        if any(part in ("", ".", "..") for part in parts):
            raise WorkspaceError(f"invalid repository name for workspace: {full_name!r}")
        return self.root.joinpath(*parts)

    def teardown(self) -> None:
        """
        Recursively remove the workspace root.

        A root that was never created is not an error.

        Raises:
            WorkspaceError: If the tree could not be fully removed
        """
        if not self.root.exists():
            return

        failures: list[str] = []

        def record_failure(func, path, exc) -> None:
            # onerror passes an exc_info tuple, onexc the exception itself
            if isinstance(exc, tuple):
                exc = exc[1]
            failures.append(f"{path}: {exc}")

        if sys.version_info >= (3, 12):
            shutil.rmtree(self.root, onexc=record_failure)
        else:
            shutil.rmtree(self.root, onerror=record_failure)

        if failures:
            raise WorkspaceError(
                f"could not fully remove {self.root}: " + "; ".join(failures)
            )
        logger.info("Removed workspace %s", self.root)
