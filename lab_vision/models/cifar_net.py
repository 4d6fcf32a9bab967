"""
Deep Natural-Image Classifier.

Three convolutional stages followed by a dropout-regularized dense head:

    [conv 3x3, pad 1 → ReLU → maxpool 2x2] x 3 → flatten
    → fc1 → ReLU → dropout(0.5) → fc2 → ReLU → dropout(0.5) → fc3

The spatial reduction is fixed at 32 → 16 → 8 → 4, so the dense input
width is always ``conv3_out * 4 * 4`` and the architecture only accepts
32x32 inputs.
"""

import torch
import torch.nn as nn
import torch.nn.functional as F

from ..core.config import DatasetConfig
from .base import ImageClassifier

DEFAULT_CONV1_OUT = 64
DEFAULT_CONV2_OUT = 128
DEFAULT_CONV3_OUT = 256
DEFAULT_FC2_OUT = 256
DROPOUT_RATE = 0.5

# Feature map side after three 2x2 poolings of a 32-pixel input
FINAL_SPATIAL = 4


class CifarNet(ImageClassifier):
    """Deep RGB classifier (tag ``cifar_net``)."""

    arch_tag = "cifar_net"

    def __init__(self, cfg: DatasetConfig):
        super().__init__(cfg)
        spec = cfg.model
        conv1_out = spec.conv1_out or DEFAULT_CONV1_OUT
        conv2_out = spec.conv2_out or DEFAULT_CONV2_OUT
        conv3_out = spec.conv3_out or DEFAULT_CONV3_OUT
        fc2_out = spec.fc2_out or DEFAULT_FC2_OUT

        self.conv1 = nn.Conv2d(cfg.input_channels, conv1_out, kernel_size=3, padding=1)
        self.conv2 = nn.Conv2d(conv1_out, conv2_out, kernel_size=3, padding=1)
        self.conv3 = nn.Conv2d(conv2_out, conv3_out, kernel_size=3, padding=1)
        self.pool = nn.MaxPool2d(kernel_size=2, stride=2)

        self.fc1 = nn.Linear(conv3_out * FINAL_SPATIAL * FINAL_SPATIAL, spec.fc1_out)
        self.fc2 = nn.Linear(spec.fc1_out, fc2_out)
        self.fc3 = nn.Linear(fc2_out, cfg.num_classes)
        self.dropout = nn.Dropout(p=DROPOUT_RATE)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        x = self.pool(F.relu(self.conv1(x)))
        x = self.pool(F.relu(self.conv2(x)))
        x = self.pool(F.relu(self.conv3(x)))
        x = torch.flatten(x, 1)
        x = self.dropout(F.relu(self.fc1(x)))
        x = self.dropout(F.relu(self.fc2(x)))
        return self.fc3(x)


def build_cifar_net(device: torch.device, cfg: DatasetConfig) -> CifarNet:
    return CifarNet(cfg).to(device)
