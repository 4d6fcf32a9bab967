"""
Trainer Package.

Epoch state machine, single-epoch training kernel and optimization setup.
"""

from .engine import train_one_epoch
from .setup import get_criterion, get_optimizer
from .trainer import EpochRecord, ModelTrainer, TrainerState, TrainingResult

__all__ = [
    "ModelTrainer",
    "TrainerState",
    "EpochRecord",
    "TrainingResult",
    "train_one_epoch",
    "get_criterion",
    "get_optimizer",
]
