"""
Pipeline Phase Functions.

One function per command of the CLI, each taking an already-validated
config and device so they can also be driven programmatically.

Phases:
    1. Training: run the epoch state machine and persist both checkpoints
    2. Evaluation: measure the structured checkpoint on the real test split
    3. Inference: classify a file or a directory of images
    4. Embed: copy the trained blob into the package assets
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, TextIO

import torch

from ..core.config import DatasetConfig
from ..core.io import embed_checkpoint
from ..core.logger import LogStyle
from ..core.paths import LOGGER_NAME
from ..evaluation import run_evaluation
from ..inference import InferenceDispatcher
from ..trainer import ModelTrainer, TrainingResult

logger = logging.getLogger(LOGGER_NAME)


def run_training_phase(
    cfg: DatasetConfig,
    device: torch.device,
    dataset_root: Optional[Path] = None,
    allow_synthetic: bool = True,
    max_samples: Optional[int] = None,
    use_tqdm: bool = True,
) -> TrainingResult:
    """
    Trains the configured architecture and writes both checkpoint encodings.

    Example:
        >>> result = run_training_phase(cfg, torch.device("cpu"), max_samples=512)
        >>> print(f"Final accuracy: {result.final_accuracy:.2%}")
    """
    logger.info(LogStyle.banner(f"TRAINING: {cfg.name.upper()} / {cfg.model.type.upper()}"))

    trainer = ModelTrainer(
        cfg,
        device,
        dataset_root=dataset_root,
        allow_synthetic=allow_synthetic,
        max_samples=max_samples,
        use_tqdm=use_tqdm,
    )
    result = trainer.train()

    if result.synthetic_data:
        logger.warning("Model was trained on synthetic data; its accuracy is not meaningful.")
    logger.info(
        f"Training finished after {len(result.history)} epoch(s) | "
        f"final test accuracy {result.final_accuracy * 100:.2f}%"
    )
    return result


def run_evaluation_phase(
    cfg: DatasetConfig, device: torch.device, dataset_root: Optional[Path] = None
) -> dict:
    logger.info(LogStyle.banner(f"EVALUATION: {cfg.name.upper()}"))
    return run_evaluation(cfg, device, dataset_root=dataset_root)


def run_inference_phase(
    cfg: DatasetConfig,
    device: torch.device,
    path: Path,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Returns the number of inputs that could not be classified."""
    dispatcher = InferenceDispatcher(cfg, device)
    return dispatcher.run(Path(path), out=out, err=err)


def run_embed_phase(cfg: DatasetConfig) -> Path:
    return embed_checkpoint(cfg.model_bin_path, cfg.name)
