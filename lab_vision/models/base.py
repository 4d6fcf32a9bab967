"""
Image Classifier Contract.

Both architectures share one capability: construct from a DatasetConfig,
map ``[B, C, H, W]`` images to ``[B, num_classes]`` logits, and switch
between the trainable representation and a frozen, read-only copy used for
evaluation, persistence and inference.
"""

import copy
from typing import Dict, Tuple

import torch
import torch.nn as nn

from ..core.config import DatasetConfig


class ImageClassifier(nn.Module):
    """Base class for config-driven classifiers."""

    arch_tag: str = ""

    def __init__(self, cfg: DatasetConfig):
        super().__init__()
        self.num_classes = cfg.num_classes
        self.in_channels = cfg.input_channels
        self.input_size = cfg.input_size

    @classmethod
    def from_config(cls, cfg: DatasetConfig) -> "ImageClassifier":
        return cls(cfg)

    def frozen(self) -> "ImageClassifier":
        """
        Read-only copy in eval mode.

        Parameters are deep-copied and detached from autograd, so later
        optimizer steps on ``self`` never show through the returned view.
        """
        view = copy.deepcopy(self)
        view.eval()
        view.requires_grad_(False)
        return view

    @property
    def is_frozen(self) -> bool:
        return not self.training and not any(p.requires_grad for p in self.parameters())

    def param_shapes(self) -> Dict[str, Tuple[int, ...]]:
        return {k: tuple(v.shape) for k, v in self.state_dict().items()}

    def num_parameters(self) -> int:
        return sum(p.numel() for p in self.parameters())
