"""
Standalone Evaluation Pipeline.

Backs the ``eval`` command: restores the structured checkpoint named by the
config and measures it on the real test split. Synthetic fallback is
disabled here, so a missing dataset is fatal.
"""

import logging
from pathlib import Path
from typing import Optional

import torch

from ..core.config import DatasetConfig
from ..core.io import load_checkpoint_file
from ..core.paths import LOGGER_NAME
from ..data_handler import DataLoaderFactory, get_dataset_source, load_split
from ..models import get_model
from .engine import predict_loader
from .metrics import compute_classification_metrics

logger = logging.getLogger(LOGGER_NAME)


def run_evaluation(
    cfg: DatasetConfig,
    device: torch.device,
    dataset_root: Optional[Path] = None,
    checkpoint_path: Optional[Path] = None,
) -> dict:
    """
    Evaluates a trained checkpoint on the test split.

    Args:
        cfg: Dataset configuration.
        device: Target device.
        dataset_root: Override for the dataset directory.
        checkpoint_path: Override for ``cfg.model_path``.

    Returns:
        Metrics dict (``accuracy``, ``f1``, ``auc``) plus ``samples``.

    Raises:
        UnsupportedDataset, DatasetUnavailable, CheckpointError
    """
    source = get_dataset_source(cfg, root=dataset_root)
    test_ds = load_split(source, "test", allow_synthetic=False)

    model = get_model(cfg, device, verbose=False)
    load_checkpoint_file(model, Path(checkpoint_path or cfg.model_path), device)
    frozen = model.frozen()

    loader = DataLoaderFactory(cfg).test_loader(test_ds)
    labels, preds, probs = predict_loader(frozen, loader, device)
    metrics = compute_classification_metrics(labels, preds, probs)
    metrics["samples"] = int(len(labels))

    logger.info(
        f"Test Metrics -> Acc: {metrics['accuracy']:.4f} | "
        f"AUC: {metrics['auc']:.4f} | F1: {metrics['f1']:.4f} "
        f"({metrics['samples']} samples)"
    )
    return metrics
