"""
Deterministic Synthetic Data.

Stand-in samples used when a real dataset is unavailable during training.
Every sample derives from a stable hash of its index, so two requests for
the same size always yield the same labels and pixels, independent of the
interpreter's hash randomization.

For index ``i`` with ``seed = stable_index_hash(i)``:
    label           = seed % num_classes
    pixel[c][h][w]  = (seed + c*1000 + h*10 + w) % 256
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import hashlib
from typing import Tuple

# =========================================================================== #
#                               Third-Party Imports                           #
# =========================================================================== #
import numpy as np

# =========================================================================== #
#                              Internal Imports                               #
# =========================================================================== #
from .dataset import SampleDataset

_CHUNK = 4096


def stable_index_hash(index: int) -> int:
    """64-bit BLAKE2b digest of the little-endian index."""
    digest = hashlib.blake2b(index.to_bytes(8, "little"), digest_size=8).digest()
    return int.from_bytes(digest, "little")


def create_synthetic_samples(
    size: int, shape: Tuple[int, int, int], num_classes: int
) -> SampleDataset:
    """
    Builds ``size`` deterministic samples of per-sample ``shape`` (C, H, W).

    Args:
        size: Number of samples.
        shape: Per-sample (C, H, W).
        num_classes: Label range.
    """
    c, h, w = shape
    seeds = [stable_index_hash(i) for i in range(size)]
    labels = np.array([s % num_classes for s in seeds], dtype=np.int64)
    seed_mod = np.array([s % 256 for s in seeds], dtype=np.uint16)

    offsets = (
        np.arange(c, dtype=np.int64)[:, None, None] * 1000
        + np.arange(h, dtype=np.int64)[None, :, None] * 10
        + np.arange(w, dtype=np.int64)[None, None, :]
    ) % 256
    offsets = offsets.astype(np.uint16)

    images = np.empty((size, c, h, w), dtype=np.uint8)
    for start in range(0, size, _CHUNK):
        stop = min(start + _CHUNK, size)
        block = seed_mod[start:stop, None, None, None] + offsets[None]
        images[start:stop] = block % 256

    return SampleDataset(images, labels, origin="synthetic")
