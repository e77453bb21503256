"""Repository-domain metadata derived from stored files.

``DocumentInfo`` and ``DirectoryInfo`` are snapshots of on-disk state taken
at call time; they do not follow later changes to the file.
"""

import mimetypes
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import List, Literal, Union

from pydantic import BaseModel, Field

from .errors import HttpCode
from .result import Result, catch_io, error_response

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Artifact extensions the platform mimetypes table does not know about
_REPOSITORY_TYPES = {
    ".jar": "application/java-archive",
    ".war": "application/java-archive",
    ".pom": "application/xml",
    ".xml": "application/xml",
    ".module": "application/json",
    ".sha1": "text/plain",
    ".sha256": "text/plain",
    ".sha512": "text/plain",
    ".md5": "text/plain",
    ".asc": "text/plain",
}


class FileType(str, Enum):
    """Kind of entry stored under the root."""
    FILE = "file"
    DIRECTORY = "directory"


class DocumentInfo(BaseModel):
    """Metadata snapshot of a stored file."""
    type: Literal[FileType.FILE] = FileType.FILE
    name: str
    content_type: str = DEFAULT_CONTENT_TYPE
    content_length: int
    last_modified: datetime


class DirectoryInfo(BaseModel):
    """Metadata snapshot of a directory and its immediate children."""
    type: Literal[FileType.DIRECTORY] = FileType.DIRECTORY
    name: str
    files: List[str] = Field(default_factory=list)


FileDetails = Union[DocumentInfo, DirectoryInfo]


def guess_content_type(path: Path) -> str:
    """Guess a content type from the file extension."""
    known = _REPOSITORY_TYPES.get(path.suffix.lower())
    if known:
        return known
    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or DEFAULT_CONTENT_TYPE


def to_document_info(path: Path) -> DocumentInfo:
    """Build a DocumentInfo from the file's current state.

    Raises:
        OSError: If the file cannot be stat'ed
    """
    stat = path.stat()
    return DocumentInfo(
        name=path.name,
        content_type=guess_content_type(path),
        content_length=stat.st_size,
        last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
    )


def to_file_details(path: Path) -> Result:
    """Describe a file or directory, or fail with NOT_FOUND if absent."""
    if not path.exists():
        return error_response(HttpCode.NOT_FOUND, "File not found")

    def describe() -> FileDetails:
        if path.is_dir():
            return DirectoryInfo(
                name=path.name,
                files=sorted(child.name for child in path.iterdir()),
            )
        return to_document_info(path)

    return catch_io(describe)
