"""
Reproducibility Environment.

Centralizes RNG seeding across Python, NumPy and PyTorch, and provides the
seeded ``torch.Generator`` that fixes the training shuffle order for a run.
"""

import logging
import random

import numpy as np
import torch

from ..paths import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


def set_seed(seed: int) -> None:
    """Seed all PRNGs.

    Seeds Python's ``random``, NumPy, and PyTorch (CPU + all CUDA devices)
    and pins cuDNN to its deterministic kernels.

    Args:
        seed: The seed value to set across all PRNGs.
    """
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)

    if torch.cuda.is_available():
        torch.cuda.manual_seed_all(seed)
        torch.backends.cudnn.deterministic = True
        torch.backends.cudnn.benchmark = False

    logger.debug(f"Seeded Python, NumPy and PyTorch with {seed}")


def make_generator(seed: int) -> torch.Generator:
    """Returns a CPU generator seeded for a reproducible DataLoader shuffle."""
    generator = torch.Generator()
    generator.manual_seed(seed)
    return generator
