"""Local filesystem storage provider."""

import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Union

from .. import files
from ..errors import ErrorKind, HttpCode, SizeLimitExceededError
from ..result import Result, catch_io, error_response
from ..storage_models import DocumentInfo, FileDetails, FileType, to_document_info, to_file_details
from .base import PathLike

logger = logging.getLogger(__name__)

# Number of in-process write locks; paths are striped across them
_WRITE_LOCK_STRIPES = 64


class FileSystemStorageProvider(ABC):
    """
    Blob store backed by one local directory.

    Files live at ``root / relative_path``; the filesystem is the only
    source of truth and nothing is cached between calls. Subclasses decide
    the capacity policy by implementing ``can_hold``.

    Concurrency:
        Writes to the same path through one provider instance are
        serialized. Across instances and processes the only protection is
        an advisory lock on the open file handle, which is not honored by
        writers that do not take it and behaves differently on network
        mounts. Run a single writing instance per root.

        Reads and deletes are not synchronized with writes: a reader may
        see a file mid-write, or see it vanish if a delete races the read.
    """

    def __init__(self, root_directory: Union[str, Path]):
        """
        Initialize the provider.

        Args:
            root_directory: Root of the storage namespace
        """
        self.root = Path(root_directory).absolute()
        self._write_locks = [threading.Lock() for _ in range(_WRITE_LOCK_STRIPES)]

    @abstractmethod
    def can_hold(self, additional_bytes: int) -> Result[None]:
        """
        Decide whether ``additional_bytes`` more may be stored.

        Returns:
            ``Ok(None)`` when allowed, an INSUFFICIENT_STORAGE error otherwise
        """

    def put_file(
        self,
        path: PathLike,
        source: Union[bytes, BinaryIO],
        size: Optional[int] = None,
    ) -> Result[DocumentInfo]:
        """
        Store content at ``path``, creating missing parent directories.

        A bytes source is measured by its length. A stream source with a
        ``size`` hint is checked against the quota with that hint and then
        copied to disk in bounded chunks; a stream that turns out longer than
        its hint is cut off with INSUFFICIENT_STORAGE and the file is left
        empty. A stream without a hint is read into memory first so it can be
        measured.

        The quota is consulted before anything touches the disk, so a
        denied write leaves no trace. Once allowed, the target file is
        created empty if needed and stays behind even if the write itself
        fails afterwards.

        Args:
            path: Relative path of the file
            source: Content as bytes or a readable binary stream
            size: Optional byte count of a stream source

        Returns:
            DocumentInfo snapshot of the written file
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            data = bytes(source)
            return self._put(path, len(data), [data])

        if size is not None:
            return self._put(path, size, files.read_chunks(source))

        drained = catch_io(source.read)
        if drained.is_err:
            return drained
        data = drained.value
        return self._put(path, len(data), [data])

    def _put(self, path: PathLike, size: int, chunks: Iterable[bytes]) -> Result[DocumentInfo]:
        file = self._resolved(path)

        def write():
            allowed = self.can_hold(size)
            if allowed.is_err and allowed.error.kind != ErrorKind.INSUFFICIENT_STORAGE:
                return allowed
            if allowed.is_err:
                logger.warning("Rejected write of %d bytes to %s: %s", size, file, allowed.error.message)
                return error_response(HttpCode.INSUFFICIENT_STORAGE, "Not enough storage space available")

            if not file.parent.exists():
                file.parent.mkdir(parents=True, exist_ok=True)

            if not file.exists():
                file.touch(exist_ok=True)

            with self._write_lock(file):
                try:
                    written = files.write_locked(file, chunks, limit=size)
                except SizeLimitExceededError as e:
                    logger.warning("Aborted write to %s: %s", file, e)
                    return error_response(HttpCode.INSUFFICIENT_STORAGE, str(e))

            if written < size:
                logger.warning("Size hint for %s was %d bytes, wrote %d", file, size, written)
            logger.debug("Stored %s (%d bytes)", file, written)

            return to_document_info(file)

        return catch_io(write)

    def get_file(self, path: PathLike) -> Result[BinaryIO]:
        """Open a stored file for reading; the caller must close the stream."""
        return files.input_stream(self._resolved(path))

    def get_file_details(self, path: PathLike) -> Result[FileDetails]:
        return to_file_details(self._resolved(path))

    def remove_file(self, path: PathLike) -> Result[None]:
        """Delete a file or empty directory. A missing target is an error."""
        return files.delete(self._resolved(path))

    def get_files(self, directory: PathLike) -> Result[List[Path]]:
        """
        List the immediate children of a directory.

        Returns:
            Paths relative to the root, in no particular order
        """
        return files.list_files(self._resolved(directory)).map(
            lambda children: [child.relative_to(self.root) for child in children]
        )

    def get_last_modified_time(self, path: PathLike) -> Result[datetime]:
        return files.last_modified_time(self._resolved(path))

    def get_file_size(self, path: PathLike) -> Result[int]:
        return files.size(self._resolved(path))

    def exists(self, path: PathLike) -> bool:
        """Check existence. Errors are reported as ``False``, not raised."""
        return files.exists(self._resolved(path)).is_ok

    def is_directory(self, path: PathLike) -> bool:
        """Check for a directory. Errors are reported as ``False``, not raised."""
        return files.file_type(self._resolved(path)) == FileType.DIRECTORY

    def usage(self) -> Result[int]:
        """Total size in bytes of everything under the root."""
        return files.size(self.root)

    def is_full(self) -> bool:
        return self.can_hold(0).is_err

    def shutdown(self) -> None:
        """Release held resources. Nothing is held by the local provider."""
        pass

    def _write_lock(self, file: Path) -> threading.Lock:
        return self._write_locks[hash(file) % len(self._write_locks)]

    def _resolved(self, path: PathLike) -> Path:
        return self.root / path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.root)!r})"
