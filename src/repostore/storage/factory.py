"""Factory for creating storage provider instances."""

import logging

from ..config import StorageSettings
from ..errors import InvalidQuotaError
from ..utils import parse_data_size
from .fs import FileSystemStorageProvider
from .quota import FixedQuotaStorageProvider, PercentageQuotaStorageProvider

logger = logging.getLogger(__name__)


def validate_quota(quota: str) -> None:
    """
    Early validation of a quota description.

    Raises:
        InvalidQuotaError: If the quota is neither a percentage nor a data size
    """
    _parse_quota(quota)


def _parse_quota(quota: str):
    value = quota.strip()
    if value.endswith("%"):
        try:
            percentage = float(value[:-1]) / 100
        except ValueError:
            raise InvalidQuotaError(quota, "not a number")
        if not 0 < percentage <= 1:
            raise InvalidQuotaError(quota, "percentage must be in (0, 100]")
        return "percentage", percentage

    try:
        return "fixed", parse_data_size(value)
    except ValueError:
        raise InvalidQuotaError(quota)


def make_storage_provider(settings: StorageSettings) -> FileSystemStorageProvider:
    """
    Create a storage provider from settings.

    The root directory is created if it does not exist yet.

    Args:
        settings: Storage configuration

    Returns:
        Provider enforcing the configured quota

    Raises:
        InvalidQuotaError: If the quota cannot be parsed
        NotImplementedError: If the provider type is not supported
    """
    if settings.provider != "fs":
        raise NotImplementedError(f"Provider {settings.provider} not supported")

    kind, limit = _parse_quota(settings.quota)

    root = settings.root.absolute()
    root.mkdir(parents=True, exist_ok=True)

    if kind == "percentage":
        provider = PercentageQuotaStorageProvider(root, limit)
    else:
        provider = FixedQuotaStorageProvider(root, limit)

    logger.info("Created %s (quota=%s)", provider, settings.quota)
    return provider
