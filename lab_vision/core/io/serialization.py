"""
Run Metadata Serialization.

Writes a JSON snapshot of the validated configuration next to the trained
checkpoint, so an artifact directory always records the settings that
produced it.
"""

from pathlib import Path

from ..config.dataset_config import DatasetConfig
from ..exceptions import CheckpointError


def save_config_snapshot(cfg: DatasetConfig, path: Path) -> Path:
    """Serializes ``cfg`` as indented JSON at ``path``."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(cfg.model_dump_json(indent=2), encoding="utf-8")
    except OSError as e:
        raise CheckpointError(f"Cannot write config snapshot {path}: {e}") from e
    return path


def load_config_snapshot(path: Path) -> DatasetConfig:
    """Reads a snapshot written by ``save_config_snapshot``."""
    path = Path(path)
    return DatasetConfig.from_json(path.read_text(encoding="utf-8"), source=str(path))
