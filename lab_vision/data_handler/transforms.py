"""
Pixel Normalization.

The single preprocessing rule shared by training batches, the batch CLI and
the inference services: scale byte intensities to [0, 1], then subtract the
per-channel mean and divide by the per-channel std (torchvision v2).
"""

from typing import Sequence

import torch
from torchvision.transforms.v2 import functional as F

from ..core.exceptions import ConfigError


def normalize_pixels(
    images: torch.Tensor, mean: Sequence[float], std: Sequence[float]
) -> torch.Tensor:
    """
    Normalizes byte-scale images shaped ``[..., C, H, W]``.

    Raises:
        ConfigError: If the channel dimension does not match the statistics.
    """
    channels = images.shape[-3]
    if len(mean) != channels or len(std) != channels:
        raise ConfigError(
            f"Normalization arity ({len(mean)}, {len(std)}) does not match "
            f"{channels} image channel(s)"
        )
    scaled = images.to(torch.float32) / 255.0
    return F.normalize(scaled, mean=list(mean), std=list(std))
