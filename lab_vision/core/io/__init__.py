"""
I/O Package.

Checkpoint encodings and run metadata serialization.
"""

from .checkpoints import (
    decode_state_blob,
    embed_checkpoint,
    embedded_asset_path,
    encode_state_blob,
    load_checkpoint_blob,
    load_checkpoint_file,
    save_checkpoint,
)
from .serialization import load_config_snapshot, save_config_snapshot

__all__ = [
    "encode_state_blob",
    "decode_state_blob",
    "load_checkpoint_file",
    "load_checkpoint_blob",
    "save_checkpoint",
    "embed_checkpoint",
    "embedded_asset_path",
    "save_config_snapshot",
    "load_config_snapshot",
]
