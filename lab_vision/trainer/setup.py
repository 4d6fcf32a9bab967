"""
Optimization Setup Module

Factory functions for the optimization components of a run: the Adam
optimizer driven by the configured learning rate and the batch-mean
softmax cross-entropy criterion.
"""

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
import torch.nn as nn
import torch.optim as optim

# =========================================================================== #
#                                Internal Imports                             #
# =========================================================================== #
from ..core.config import DatasetConfig

# =========================================================================== #
#                                  FACTORIES                                  #
# =========================================================================== #


def get_criterion() -> nn.Module:
    return nn.CrossEntropyLoss(reduction="mean")


def get_optimizer(model: nn.Module, cfg: DatasetConfig) -> optim.Optimizer:
    """Adaptive-moment optimizer over every trainable parameter."""
    return optim.Adam(model.parameters(), lr=cfg.training.learning_rate)
