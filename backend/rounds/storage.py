"""Crash-consistent file writes for the game store.

Every record is written to a sibling ``.scratch`` file first and then renamed
over the target, so a reader sees either the previous complete content or the
new complete content. Files are created with owner-only permissions (0o600)
inside an owner-only directory (0o700) as a filesystem hygiene measure.
"""

import contextlib
import os
from pathlib import Path

import structlog

logger = structlog.get_logger()

# Owner-only directory permissions for the game data directory.
_DATA_DIR_MODE = 0o700

# Owner-only file permissions for game and player files.
_DATA_FILE_MODE = 0o600

SCRATCH_SUFFIX = ".scratch"


def scratch_path_for(path: Path) -> Path:
    """Return the transient sibling path used while ``path`` is being written."""
    return path.with_suffix(SCRATCH_SUFFIX)


class AtomicFileWriter:
    """Writes byte payloads via scratch-file-then-rename.

    A failed write is not retried and the scratch file is left in place so an
    interrupted write can be diagnosed; ``GameRepository.remove_stale_scratch_files``
    clears leftovers.
    """

    def write(self, path: Path, content: bytes) -> None:
        """Atomically replace ``path`` with ``content``.

        Creates the parent directory lazily with owner-only permissions.
        Raises OSError if any step fails.
        """
        path.parent.mkdir(mode=_DATA_DIR_MODE, parents=True, exist_ok=True)

        scratch = scratch_path_for(path)
        fd = os.open(scratch, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _DATA_FILE_MODE)
        fd_owned = True
        try:
            with os.fdopen(fd, "wb") as f:
                fd_owned = False  # os.fdopen took ownership; it will close fd
                os.fchmod(f.fileno(), _DATA_FILE_MODE)
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            raise
        scratch.replace(path)
        logger.debug("wrote file", path=str(path), size=len(content))
