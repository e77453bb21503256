"""Result-returning filesystem primitives.

Each helper resolves nothing on its own: callers pass absolute paths that
were already joined against the store root. Filesystem faults are caught
here and returned as ``Err`` values.
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Iterable, Optional

import portalocker

from .errors import HttpCode, SizeLimitExceededError
from .result import Ok, Result, catch_io, error_response
from .storage_models import FileType

logger = logging.getLogger(__name__)


def exists(path: Path) -> Result:
    """Return ``Ok(path)`` if it exists, NOT_FOUND otherwise."""
    try:
        if path.exists():
            return Ok(path)
    except (OSError, ValueError) as e:
        logger.debug("Cannot inspect %s: %s", path, e)
    return error_response(HttpCode.NOT_FOUND, "File not found")


def file_type(path: Path) -> Optional[FileType]:
    """Return the kind of entry at ``path`` or None if it cannot be determined."""
    try:
        if path.is_dir():
            return FileType.DIRECTORY
        if path.exists():
            return FileType.FILE
    except (OSError, ValueError) as e:
        logger.debug("Cannot inspect %s: %s", path, e)
    return None


def input_stream(path: Path) -> Result:
    """Open a file for reading. The caller must close the returned stream."""
    found = exists(path)
    if found.is_err:
        return found
    return catch_io(lambda: path.open("rb"))


def delete(path: Path) -> Result:
    """Delete a file or an empty directory."""
    def remove() -> None:
        if path.is_dir() and not path.is_symlink():
            path.rmdir()
        else:
            path.unlink()
        logger.debug("Deleted %s", path)

    return catch_io(remove)


def list_files(path: Path) -> Result:
    """List the immediate children of a directory (unordered)."""
    found = exists(path)
    if found.is_err:
        return found
    return catch_io(lambda: list(path.iterdir()))


def last_modified_time(path: Path) -> Result:
    """Return the modification time as an aware UTC datetime."""
    found = exists(path)
    if found.is_err:
        return found
    return catch_io(
        lambda: datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    )


def _tree_size(path: Path) -> int:
    if not path.is_dir():
        return path.stat().st_size

    total = 0
    for entry in path.rglob("*"):
        try:
            if entry.is_file():
                total += entry.stat().st_size
        except FileNotFoundError:
            # Removed while walking
            continue
    return total


def size(path: Path) -> Result:
    """Return the size in bytes of a file, or of a whole directory tree."""
    found = exists(path)
    if found.is_err:
        return found
    return catch_io(lambda: _tree_size(path))


def write_locked(path: Path, chunks: Iterable[bytes], limit: Optional[int] = None) -> int:
    """Overwrite ``path`` with ``chunks`` while holding an exclusive lock.

    The file must already exist. It is opened without truncation, locked,
    and only then truncated, so a writer waiting on the lock never clobbers
    bytes another writer is still producing. Content is fsync'ed before
    the handle is closed, which releases the lock.

    The lock is advisory: it only excludes writers that lock the same file
    the same way.

    When ``limit`` is given, a chunk that would push the total past it
    aborts the write and leaves the file empty.

    Returns:
        Number of bytes written

    Raises:
        OSError: On any filesystem fault
        portalocker.LockException: If the lock cannot be acquired
        SizeLimitExceededError: If the chunks exceed ``limit``
    """
    written = 0
    with path.open("r+b") as handle:
        portalocker.lock(handle, portalocker.LockFlags.EXCLUSIVE)
        try:
            handle.truncate(0)
            for chunk in chunks:
                if limit is not None and written + len(chunk) > limit:
                    handle.truncate(0)
                    handle.flush()
                    raise SizeLimitExceededError(path, limit)
                handle.write(chunk)
                written += len(chunk)
            handle.flush()
            os.fsync(handle.fileno())
        finally:
            portalocker.unlock(handle)
    return written


def read_chunks(stream: BinaryIO, chunk_size: int = 64 * 1024) -> Iterable[bytes]:
    """Yield a stream's content in bounded chunks until EOF."""
    return iter(lambda: stream.read(chunk_size), b"")
