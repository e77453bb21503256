"""Base protocol for storage provider implementations."""

from datetime import datetime
from pathlib import Path
from typing import BinaryIO, List, Optional, Protocol, Union

from ..result import Result
from ..storage_models import DocumentInfo, FileDetails

PathLike = Union[str, Path]


class StorageProvider(Protocol):
    """
    Protocol for storage provider implementations.

    Every operation returns a result value instead of raising. Paths are
    relative to the provider's root; keeping them inside the root (no
    ``..`` traversal) is the caller's responsibility.
    """

    def put_file(
        self,
        path: PathLike,
        source: Union[bytes, BinaryIO],
        size: Optional[int] = None,
    ) -> "Result[DocumentInfo]":
        """
        Store content at ``path``, replacing anything already there.

        Args:
            path: Relative path of the file
            source: Content as bytes or a readable binary stream
            size: Optional byte count of a stream source

        Returns:
            DocumentInfo of the written file, or INSUFFICIENT_STORAGE /
            INTERNAL_SERVER_ERROR
        """
        ...

    def get_file(self, path: PathLike) -> "Result[BinaryIO]":
        """Open a stored file for reading; the caller closes the stream."""
        ...

    def get_file_details(self, path: PathLike) -> "Result[FileDetails]":
        """Describe a stored file or directory."""
        ...

    def remove_file(self, path: PathLike) -> "Result[None]":
        """Delete a stored file or empty directory."""
        ...

    def get_files(self, directory: PathLike) -> "Result[List[Path]]":
        """List the immediate children of a directory."""
        ...

    def get_last_modified_time(self, path: PathLike) -> "Result[datetime]":
        ...

    def get_file_size(self, path: PathLike) -> "Result[int]":
        ...

    def exists(self, path: PathLike) -> bool:
        """Check existence; any error counts as absent."""
        ...

    def is_directory(self, path: PathLike) -> bool:
        """Check for a directory; any error counts as not a directory."""
        ...

    def usage(self) -> "Result[int]":
        """Total bytes stored under the root."""
        ...

    def can_hold(self, additional_bytes: int) -> "Result[None]":
        """Decide whether ``additional_bytes`` more may be stored."""
        ...

    def is_full(self) -> bool:
        """True when not even zero more bytes may be stored."""
        ...

    def shutdown(self) -> None:
        """Release provider-held resources."""
        ...
