"""
Embedded Per-Domain Resources.

Each inference domain ships its configuration (``configs/<name>.json``) and
a trained checkpoint blob (``assets/<name>/model.bin``) inside the package.
They are read once per process and shared as immutable values.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

from ..core.config import DatasetConfig, load_dataset_config
from ..core.io import embedded_asset_path
from ..core.paths import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


@dataclass(frozen=True)
class EmbeddedResources:
    config: DatasetConfig
    blob: bytes

    @property
    def has_checkpoint(self) -> bool:
        return len(self.blob) > 0


@lru_cache(maxsize=None)
def get_embedded_resources(domain: str) -> EmbeddedResources:
    """
    Reads the packaged config and blob for ``domain``.

    A missing blob becomes an empty placeholder (with a warning) so services
    can still be constructed; loading such a service fails with a
    CheckpointError.
    """
    cfg = load_dataset_config(domain)
    path = embedded_asset_path(domain)
    if path.is_file():
        blob = path.read_bytes()
    else:
        logger.warning(f"{path} not found; embedding empty placeholder (run training and embed first)")
        blob = b""
    return EmbeddedResources(config=cfg, blob=blob)
