"""
Filesystem Authority Package.

Centralizes all static path logic: project root discovery, dataset location,
and the packaged configuration and asset directories.
"""

from .constants import (
    ASSETS_DIR,
    CONFIGS_DIR,
    DATASET_DIR,
    LOGGER_NAME,
    PACKAGE_ROOT,
    PROJECT_ROOT,
    get_project_root,
)

__all__ = [
    "PROJECT_ROOT",
    "PACKAGE_ROOT",
    "CONFIGS_DIR",
    "ASSETS_DIR",
    "DATASET_DIR",
    "LOGGER_NAME",
    "get_project_root",
]
