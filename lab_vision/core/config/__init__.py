"""
Configuration Package Initialization.

Provides a flat public API for the configuration schemas while deferring the
pydantic import until a schema is actually accessed.

Architecture:
    - Lazy Import Pattern (PEP 562): Uses __getattr__ for on-demand loading
    - Flat API: All schemas accessible from lab_vision.core.config
    - Caching: Loaded attributes cached in globals()

Example:
    >>> from lab_vision.core.config import load_dataset_config
    >>> cfg = load_dataset_config("mnist")
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "DatasetConfig",
    "ArchitectureConfig",
    "NormalizationConfig",
    "TrainingConfig",
    "ArtifactsConfig",
    "load_dataset_config",
    "resolve_config_path",
]

# LAZY IMPORTS MAPPING
_LAZY_IMPORTS: dict[str, str] = {
    "DatasetConfig": "lab_vision.core.config.dataset_config",
    "ArchitectureConfig": "lab_vision.core.config.dataset_config",
    "NormalizationConfig": "lab_vision.core.config.dataset_config",
    "TrainingConfig": "lab_vision.core.config.dataset_config",
    "ArtifactsConfig": "lab_vision.core.config.dataset_config",
    "load_dataset_config": "lab_vision.core.config.loader",
    "resolve_config_path": "lab_vision.core.config.loader",
}


# LAZY LOADER FUNCTION
def __getattr__(name: str) -> Any:
    """Lazily import configuration components on first access."""
    if name not in _LAZY_IMPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = import_module(_LAZY_IMPORTS[name])
    attr = getattr(module, name)

    globals()[name] = attr
    return attr


# DIR SUPPORT
def __dir__() -> list[str]:
    return sorted(__all__)
