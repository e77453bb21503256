"""Storage configuration helpers."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from .constants import CONFIG_FILE, ENV_QUOTA, ENV_ROOT
from .errors import ConfigError


class StorageSettings(BaseModel):
    """
    Storage configuration (``storage:`` section of repostore.yaml).

    ``quota`` is either a percentage of the disk holding the root
    (``"85%"``) or an absolute data size (``"10GB"``).
    """
    provider: str = "fs"
    root: Path = Path("repositories")
    quota: str = "100%"

    @field_validator("provider")
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("quota", mode="before")
    @classmethod
    def quota_as_text(cls, v):
        # YAML reads a bare byte count such as `quota: 1024` as a number
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


def load_storage_settings(path: Optional[Union[str, Path]] = None) -> StorageSettings:
    """
    Load storage settings from a YAML file, then apply environment overrides.

    A missing file yields defaults. ``REPOSTORE_ROOT`` and ``REPOSTORE_QUOTA``
    take precedence over values from the file.

    Raises:
        ConfigError: If the file is not valid YAML or has invalid values
    """
    cfg_path = Path(path) if path else Path(CONFIG_FILE)

    data = {}
    if cfg_path.exists():
        try:
            loaded = yaml.safe_load(cfg_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {cfg_path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Expected a mapping in {cfg_path}")
        data = dict(loaded.get("storage", loaded) or {})

    root_from_file = "root" in data
    if os.environ.get(ENV_ROOT):
        data["root"] = os.environ[ENV_ROOT]
        root_from_file = False
    if os.environ.get(ENV_QUOTA):
        data["quota"] = os.environ[ENV_QUOTA]

    try:
        settings = StorageSettings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid storage configuration in {cfg_path}: {e}") from e

    # Relative roots from the file are taken relative to the file
    if root_from_file and not settings.root.is_absolute():
        settings.root = cfg_path.parent / settings.root
    return settings
