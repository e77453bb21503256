"""Shared test fixtures and utilities."""

import pytest

from repostore.result import Ok, error_response
from repostore.errors import HttpCode
from repostore.storage import FileSystemStorageProvider, FixedQuotaStorageProvider


class SwitchableQuotaProvider(FileSystemStorageProvider):
    """Provider whose quota decision is flipped by the test."""

    def __init__(self, root_directory, allow=True):
        super().__init__(root_directory)
        self.allow = allow
        self.requests = []

    def can_hold(self, additional_bytes):
        self.requests.append(additional_bytes)
        if self.allow:
            return Ok(None)
        return error_response(HttpCode.INSUFFICIENT_STORAGE, "denied by test")


@pytest.fixture
def store_root(tmp_path):
    """Root directory of the store under test."""
    root = tmp_path / "store"
    root.mkdir()
    return root


@pytest.fixture
def provider(store_root):
    """Provider with a 1000 byte quota."""
    return FixedQuotaStorageProvider(store_root, max_size=1000)


@pytest.fixture
def switchable(store_root):
    """Provider whose quota can be toggled with ``.allow``."""
    return SwitchableQuotaProvider(store_root)


@pytest.fixture
def write_file(store_root):
    """Factory fixture to write files relative to the store root."""
    def _write(path: str, content: bytes = b"test content"):
        file_path = store_root / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(content)
        return file_path
    return _write
