"""
LeNet-style Shallow Classifier.

Two convolutional stages for small grayscale inputs:

    [conv 5x5, pad 2 → ReLU → maxpool 2x2] x 2 → flatten
    → fc1 (hidden) → ReLU → fc2 (num_classes)

Each pooling halves the spatial size, so ``input_size`` must be divisible by
4. The dense input width is ``conv2_out * (H / 4) * (W / 4)``.
"""

import torch
import torch.nn as nn
import torch.nn.functional as F

from ..core.config import DatasetConfig
from .base import ImageClassifier

DEFAULT_CONV1_OUT = 32
DEFAULT_CONV2_OUT = 64


class LeNet(ImageClassifier):
    """Shallow digit classifier (tag ``lenet``)."""

    arch_tag = "lenet"

    def __init__(self, cfg: DatasetConfig):
        super().__init__(cfg)
        spec = cfg.model
        conv1_out = spec.conv1_out or DEFAULT_CONV1_OUT
        conv2_out = spec.conv2_out or DEFAULT_CONV2_OUT
        height, width = cfg.input_size

        self.conv1 = nn.Conv2d(cfg.input_channels, conv1_out, kernel_size=5, padding=2)
        self.conv2 = nn.Conv2d(conv1_out, conv2_out, kernel_size=5, padding=2)
        self.pool = nn.MaxPool2d(kernel_size=2, stride=2)

        self.fc1 = nn.Linear(conv2_out * (height // 4) * (width // 4), spec.fc1_out)
        self.fc2 = nn.Linear(spec.fc1_out, cfg.num_classes)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        x = self.pool(F.relu(self.conv1(x)))
        x = self.pool(F.relu(self.conv2(x)))
        x = torch.flatten(x, 1)
        x = F.relu(self.fc1(x))
        return self.fc2(x)


def build_lenet(device: torch.device, cfg: DatasetConfig) -> LeNet:
    return LeNet(cfg).to(device)
