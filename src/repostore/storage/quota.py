"""Capacity policies for the local filesystem provider."""

import shutil
from pathlib import Path
from typing import Union

from ..errors import HttpCode
from ..result import Ok, Result, catch_io, error_response
from ..utils import humanize_size
from .fs import FileSystemStorageProvider


class FixedQuotaStorageProvider(FileSystemStorageProvider):
    """Local provider limited to a fixed number of bytes."""

    def __init__(self, root_directory: Union[str, Path], max_size: int):
        """
        Args:
            root_directory: Root of the storage namespace
            max_size: Maximum total bytes stored under the root
        """
        if max_size < 0:
            raise ValueError(f"max_size must be non-negative, got {max_size}")
        super().__init__(root_directory)
        self.max_size = max_size

    def can_hold(self, additional_bytes: int) -> Result[None]:
        used = self.usage()
        if used.is_err:
            return used

        total = used.value + additional_bytes
        if total > self.max_size:
            return error_response(
                HttpCode.INSUFFICIENT_STORAGE,
                f"Repository cannot hold the given file "
                f"({humanize_size(total)} too much for {humanize_size(self.max_size)})",
            )
        return Ok(None)


class PercentageQuotaStorageProvider(FileSystemStorageProvider):
    """
    Local provider limited to a share of its disk.

    Capacity is what the store already uses plus the free space left on
    the filesystem holding the root, so the store only ever competes for
    space with itself and whatever else lives on that disk.
    """

    def __init__(self, root_directory: Union[str, Path], max_percentage: float):
        """
        Args:
            root_directory: Root of the storage namespace
            max_percentage: Fraction of capacity that may be used, in (0, 1]
        """
        if not 0 < max_percentage <= 1:
            raise ValueError(f"max_percentage must be in (0, 1], got {max_percentage}")
        super().__init__(root_directory)
        self.max_percentage = max_percentage

    def can_hold(self, additional_bytes: int) -> Result[None]:
        used = self.usage()
        if used.is_err:
            return used

        free = catch_io(lambda: shutil.disk_usage(self.root).free)
        if free.is_err:
            return free

        capacity = used.value + free.value
        if capacity <= 0:
            return error_response(HttpCode.INSUFFICIENT_STORAGE, "No disk space available")

        ratio = (used.value + additional_bytes) / capacity
        if ratio > self.max_percentage:
            return error_response(
                HttpCode.INSUFFICIENT_STORAGE,
                f"Repository cannot hold the given file "
                f"({ratio:.1%} of {humanize_size(capacity)} exceeds {self.max_percentage:.0%})",
            )
        return Ok(None)
