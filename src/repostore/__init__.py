"""Local filesystem blob storage for artifact repositories."""

from .constants import REPOSTORE_VERSION
from .errors import ErrorKind, ErrorResponse, HttpCode
from .result import Err, Ok, Result
from .storage import (
    FileSystemStorageProvider,
    FixedQuotaStorageProvider,
    PercentageQuotaStorageProvider,
    StorageProvider,
    make_storage_provider,
)
from .storage_models import DirectoryInfo, DocumentInfo, FileDetails, FileType

__version__ = REPOSTORE_VERSION

__all__ = [
    "DirectoryInfo",
    "DocumentInfo",
    "Err",
    "ErrorKind",
    "ErrorResponse",
    "FileDetails",
    "FileSystemStorageProvider",
    "FileType",
    "FixedQuotaStorageProvider",
    "HttpCode",
    "Ok",
    "PercentageQuotaStorageProvider",
    "Result",
    "StorageProvider",
    "make_storage_provider",
]
