"""Swaps a patched report file into the place of the original."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FileReplacer:
    """
    Moves a fully written replacement over the original report.

    With atomic=True (default) this is a single rename that overwrites the
    destination, so readers see either the old or the new file. atomic=False
    deletes the original first and then renames; if the delete fails the
    replacement is left in place for inspection and the original is kept.
    """

    def __init__(self, atomic: bool = True) -> None:
        self._atomic = atomic

    def replace(self, replacement: Path, original: Path) -> bool:
        """
        Args:
            replacement: Freshly written file, in the same directory as original
            original: Report file to replace

        Returns:
            True if the replacement now lives at the original's path
        """
        if self._atomic:
            try:
                replacement.replace(original)  # Atomic on POSIX
            except OSError:
                logger.error(
                    "Could not move updated report file '%s' to '%s'",
                    replacement,
                    original,
                    exc_info=True,
                )
                return False
            return True

        if original.exists():
            try:
                original.unlink()
            except OSError:
                logger.error(
                    "Could not delete original report file '%s'",
                    original,
                    exc_info=True,
                )
                return False

        try:
            replacement.rename(original)
        except OSError:
            logger.error(
                "Could not rename updated report file '%s' to '%s'",
                replacement,
                original,
                exc_info=True,
            )
            return False
        return True
