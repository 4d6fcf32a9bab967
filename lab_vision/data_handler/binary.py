"""
Fixed-Length Binary Record Decoder.

Each record is ``1 + C*H*W`` bytes: one label byte followed by channel-major
(channel, row, column) 8-bit pixel intensities. Files carry no header or
footer. A short trailing record is dropped silently.
"""

import logging
from pathlib import Path
from typing import Tuple

import numpy as np

from ..core.exceptions import DatasetUnavailable
from ..core.paths import LOGGER_NAME
from .dataset import SampleDataset

logger = logging.getLogger(LOGGER_NAME)


def record_size(shape: Tuple[int, int, int]) -> int:
    c, h, w = shape
    return 1 + c * h * w


def decode_records(raw: bytes, shape: Tuple[int, int, int], origin: str = "memory") -> SampleDataset:
    """
    Decodes a byte buffer of concatenated records.

    Args:
        raw: Buffer contents.
        shape: Per-sample (C, H, W).
        origin: Label stored on the returned dataset.

    Returns:
        SampleDataset with ``len(raw) // record_size`` samples.
    """
    size = record_size(shape)
    count = len(raw) // size
    leftover = len(raw) - count * size
    if leftover:
        logger.debug(f"{origin}: discarding {leftover} trailing bytes (partial record)")

    records = np.frombuffer(raw, dtype=np.uint8, count=count * size).reshape(count, size)
    labels = records[:, 0].astype(np.int64)
    images = records[:, 1:].reshape(count, *shape).copy()
    return SampleDataset(images, labels, origin=origin)


def read_record_file(path: Path, shape: Tuple[int, int, int]) -> SampleDataset:
    """
    Reads and decodes one record file.

    Raises:
        DatasetUnavailable: If the file is missing or unreadable.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise DatasetUnavailable(f"Cannot read dataset file {path}: {e}") from e
    return decode_records(raw, shape, origin=str(path))
