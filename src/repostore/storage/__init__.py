"""Storage providers backed by the local filesystem."""

from .base import StorageProvider
from .factory import make_storage_provider
from .fs import FileSystemStorageProvider
from .quota import FixedQuotaStorageProvider, PercentageQuotaStorageProvider

__all__ = [
    "FileSystemStorageProvider",
    "FixedQuotaStorageProvider",
    "PercentageQuotaStorageProvider",
    "StorageProvider",
    "make_storage_provider",
]
