"""
IDX File Decoder.

Reads the big-endian IDX container used by the digit dataset: a 4-byte magic
number, one 4-byte size per dimension, then raw uint8 payload. Files may be
gzip-compressed (``.gz`` suffix).
"""

import gzip
import struct
from pathlib import Path

import numpy as np

from ..core.exceptions import DatasetUnavailable

IMAGES_MAGIC = 2051
LABELS_MAGIC = 2049


def _read_bytes(path: Path) -> bytes:
    try:
        if path.suffix == ".gz":
            with gzip.open(path, "rb") as f:
                return f.read()
        return path.read_bytes()
    except OSError as e:
        raise DatasetUnavailable(f"Cannot read IDX file {path}: {e}") from e


def _parse(path: Path, expected_magic: int, ndim: int) -> np.ndarray:
    raw = _read_bytes(path)
    header_len = 4 + 4 * ndim
    if len(raw) < header_len:
        raise DatasetUnavailable(f"Truncated IDX header in {path}")

    magic, *dims = struct.unpack(f">{1 + ndim}I", raw[:header_len])
    if magic != expected_magic:
        raise DatasetUnavailable(f"Bad IDX magic number {magic} in {path} (expected {expected_magic})")

    expected = int(np.prod(dims))
    payload = np.frombuffer(raw, dtype=np.uint8, offset=header_len)
    if payload.size < expected:
        raise DatasetUnavailable(f"IDX payload in {path} has {payload.size} bytes, expected {expected}")
    return payload[:expected].reshape(dims).copy()


def read_idx_images(path: Path) -> np.ndarray:
    """Returns ``[N, H, W]`` uint8 pixels."""
    return _parse(Path(path), IMAGES_MAGIC, ndim=3)


def read_idx_labels(path: Path) -> np.ndarray:
    """Returns ``[N]`` uint8 labels."""
    return _parse(Path(path), LABELS_MAGIC, ndim=1)
