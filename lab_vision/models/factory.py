"""
Models Factory Module.

Registry-based construction of the image classifiers. The architecture tag
declared in the config (``model.type``) selects the builder; unknown tags are
rejected before any parameter is allocated.

Architecture:
    - Registry Pattern: ``_MODEL_REGISTRY`` maps tags to builders
    - Config-driven Geometry: channels, classes and widths come from DatasetConfig
    - Device Management: models are moved to the target device on construction

Example:
    >>> from lab_vision.models import get_model
    >>> model = get_model(cfg=cfg, device=device)
    >>> print(f"Parameters: {model.num_parameters():,}")
"""

import logging
from typing import Callable, Dict

import torch

from ..core.config import DatasetConfig
from ..core.exceptions import UnsupportedArchitecture
from ..core.paths import LOGGER_NAME
from .base import ImageClassifier
from .cifar_net import build_cifar_net
from .lenet import build_lenet

# LOGGER CONFIGURATION
logger = logging.getLogger(LOGGER_NAME)

_MODEL_REGISTRY: Dict[str, Callable[[torch.device, DatasetConfig], ImageClassifier]] = {
    "lenet": build_lenet,
    "cifar_net": build_cifar_net,
}


def available_architectures() -> list:
    return sorted(_MODEL_REGISTRY)


# MODEL FACTORY LOGIC
def get_model(cfg: DatasetConfig, device: torch.device, verbose: bool = True) -> ImageClassifier:
    """
    Resolves, instantiates and deploys the architecture named by the config.

    Args:
        cfg: Dataset configuration.
        device: Hardware accelerator target.
        verbose: Log the architecture summary.

    Returns:
        Trainable classifier on ``device``.

    Raises:
        UnsupportedArchitecture: If ``cfg.model.type`` is not registered.
    """
    tag = cfg.model.type.lower()
    builder = _MODEL_REGISTRY.get(tag)
    if builder is None:
        error_msg = (
            f"Architecture '{cfg.model.type}' (config '{cfg.name}') is not registered. "
            f"Available: {available_architectures()}"
        )
        logger.error(f" [!] {error_msg}")
        raise UnsupportedArchitecture(error_msg)

    if verbose:
        c, h, w = cfg.input_shape
        logger.info(
            f"Initializing Architecture: {tag} | Input: {h}x{w}x{c} | "
            f"Output: {cfg.num_classes} classes"
        )

    model = builder(device, cfg)

    if verbose:
        logger.info(
            f"Model deployed to {str(device).upper()} | "
            f"Total Parameters: {model.num_parameters():,}"
        )
    return model
