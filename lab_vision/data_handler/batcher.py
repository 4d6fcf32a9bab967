"""
Batch Assembly.

Groups samples into a normalized ``[B, C, H, W]`` float tensor and a ``[B]``
int64 label vector, preserving input order. A ``Batcher`` is a pure function
of its samples and the configured statistics, and doubles as the DataLoader
``collate_fn``.
"""

from typing import NamedTuple, Optional, Sequence

import numpy as np
import torch

from ..core.config import DatasetConfig
from ..core.exceptions import ConfigError
from .dataset import Sample
from .transforms import normalize_pixels


class Batch(NamedTuple):
    images: torch.Tensor
    targets: torch.Tensor


class Batcher:
    """
    Stacks and normalizes samples.

    Args:
        input_channels: Expected channel count of every sample.
        mean: Per-channel means (length == input_channels).
        std: Per-channel standard deviations (length == input_channels).
    """

    def __init__(self, input_channels: int, mean: Sequence[float], std: Sequence[float]):
        if len(mean) != input_channels or len(std) != input_channels:
            raise ConfigError(
                f"Normalization arity ({len(mean)}, {len(std)}) does not match "
                f"input_channels {input_channels}"
            )
        self.input_channels = input_channels
        self.mean = tuple(mean)
        self.std = tuple(std)

    @classmethod
    def from_config(cls, cfg: DatasetConfig) -> "Batcher":
        mean, std = cfg.normalization_vectors()
        return cls(cfg.input_channels, mean, std)

    def batch(self, samples: Sequence[Sample], device: Optional[torch.device] = None) -> Batch:
        """
        Builds one batch from ``samples``.

        Raises:
            ValueError: On an empty sample list.
            ConfigError: If a sample's channel count differs from the config.
        """
        if len(samples) == 0:
            raise ValueError("Cannot build a batch from an empty sample list")

        stacked = np.stack([np.asarray(s.image) for s in samples])
        if stacked.ndim != 4 or stacked.shape[1] != self.input_channels:
            raise ConfigError(
                f"Samples shaped {stacked.shape[1:]} do not match "
                f"input_channels {self.input_channels}"
            )

        images = normalize_pixels(torch.from_numpy(stacked), self.mean, self.std).contiguous()
        targets = torch.tensor([int(s.label) for s in samples], dtype=torch.int64)

        if device is not None:
            images, targets = images.to(device), targets.to(device)
        return Batch(images, targets)

    def __call__(self, samples: Sequence[Sample]) -> Batch:
        return self.batch(samples)
