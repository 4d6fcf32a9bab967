"""
Configuration File Resolution.

Locates and parses the per-dataset JSON manifest. An explicit path always
wins; otherwise the packaged ``configs/<name>.json`` is used.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..exceptions import ConfigError
from ..paths import CONFIGS_DIR, LOGGER_NAME
from .dataset_config import DatasetConfig

logger = logging.getLogger(LOGGER_NAME)


def resolve_config_path(name: str, config_path: Optional[Union[str, Path]] = None) -> Path:
    """Returns the manifest path for ``name``, honouring an explicit override."""
    if config_path is not None:
        return Path(config_path)
    return CONFIGS_DIR / f"{name}.json"


def load_dataset_config(
    name: str, config_path: Optional[Union[str, Path]] = None
) -> DatasetConfig:
    """
    Loads and validates the configuration for a dataset.

    Args:
        name: Dataset identifier (e.g. ``mnist``).
        config_path: Optional explicit JSON path.

    Returns:
        Frozen DatasetConfig.

    Raises:
        ConfigError: File missing or unreadable, malformed, or declaring a
            different dataset name than requested.
    """
    path = resolve_config_path(name, config_path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    cfg = DatasetConfig.from_json(text, source=str(path))
    if cfg.name != name:
        raise ConfigError(f"Config {path} declares dataset '{cfg.name}', expected '{name}'")

    logger.debug(f"Loaded config '{name}' from {path}")
    return cfg
