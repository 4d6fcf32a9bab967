"""
Model Training & Lifecycle Orchestration.

``ModelTrainer`` runs the epoch state machine of a training run:

    INIT → (TRAIN_EPOCH → EVAL_EPOCH) x epochs → PERSIST → DONE

Any failure moves the trainer to FAILED before the exception propagates.

Key Features:
    - Early Rejection: the dataset name is checked against the source
      registry before any data, model or optimizer is allocated.
    - Synthetic Fallback: a missing dataset is replaced by deterministic
      synthetic samples during training (logged, not raised).
    - Frozen Evaluation: accuracy and persistence always use a read-only
      copy of the parameters, never the trainable module itself.
    - Dual Checkpoints: the structured file and the byte blob are written
      from the same frozen state.
    - Cooperative Stop: ``request_stop()`` ends the run after the current epoch.
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
import torch

# =========================================================================== #
#                                Internal Imports                             #
# =========================================================================== #
from ..core.config import DatasetConfig
from ..core.environment import set_seed
from ..core.io import save_checkpoint, save_config_snapshot
from ..core.paths import LOGGER_NAME
from ..data_handler import (
    Batcher,
    DataLoaderFactory,
    ensure_supported,
    get_dataset_source,
    load_split,
)
from ..evaluation import evaluate_accuracy
from ..models import get_model
from .engine import train_one_epoch
from .setup import get_criterion, get_optimizer

logger = logging.getLogger(LOGGER_NAME)


class TrainerState(str, Enum):
    INIT = "init"
    TRAIN_EPOCH = "train_epoch"
    EVAL_EPOCH = "eval_epoch"
    PERSIST = "persist"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class EpochRecord:
    epoch: int
    train_loss: float
    test_accuracy: float
    test_samples: int

    def summary(self) -> str:
        return (
            f"epoch {self.epoch:02d} | train_loss {self.train_loss:.4f} | "
            f"test_acc {self.test_accuracy * 100:.2f}% ({self.test_samples} samples)"
        )


@dataclass(frozen=True)
class TrainingResult:
    model_path: Path
    bin_path: Path
    history: Tuple[EpochRecord, ...]
    synthetic_data: bool = False

    @property
    def final_accuracy(self) -> float:
        return self.history[-1].test_accuracy if self.history else 0.0


class ModelTrainer:
    """
    Owns one training run for a dataset configuration.

    Args:
        cfg: Validated configuration (CLI overrides already applied).
        device: Target device.
        dataset_root: Override for the dataset directory.
        allow_synthetic: Substitute synthetic samples for a missing dataset.
        max_samples: Cap on the samples used per split.
        use_tqdm: Show per-batch progress bars.

    Raises:
        UnsupportedDataset: Raised by the constructor for unknown dataset names.
    """

    def __init__(
        self,
        cfg: DatasetConfig,
        device: torch.device,
        dataset_root: Optional[Path] = None,
        allow_synthetic: bool = True,
        max_samples: Optional[int] = None,
        use_tqdm: bool = True,
    ):
        ensure_supported(cfg.name)

        self.cfg = cfg
        self.device = device
        self.dataset_root = dataset_root
        self.allow_synthetic = allow_synthetic
        self.max_samples = max_samples
        self.use_tqdm = use_tqdm

        self.state = TrainerState.INIT
        self.history: List[EpochRecord] = []
        self._stop_requested = False
        self._ready = False

        self.model = None
        self.optimizer = None
        self.criterion = None
        self.train_loader = None
        self.test_loader = None
        self.synthetic_data = False

    # --- Lifecycle ---

    def setup(self) -> None:
        """INIT: builds data pipeline, model, optimizer and criterion."""
        set_seed(self.cfg.training.seed)

        source = get_dataset_source(self.cfg, root=self.dataset_root)
        split_kwargs = {"allow_synthetic": self.allow_synthetic, "max_samples": self.max_samples}
        train_ds = load_split(source, "train", **split_kwargs)
        test_ds = load_split(source, "test", **split_kwargs)
        self.synthetic_data = train_ds.is_synthetic or test_ds.is_synthetic

        factory = DataLoaderFactory(self.cfg, Batcher.from_config(self.cfg))
        self.train_loader, self.test_loader = factory.build(train_ds, test_ds)

        self.model = get_model(self.cfg, self.device)
        self.optimizer = get_optimizer(self.model, self.cfg)
        self.criterion = get_criterion()
        self._ready = True

    def request_stop(self) -> None:
        """Asks the run to finish after the epoch in progress."""
        self._stop_requested = True

    def train(self) -> TrainingResult:
        """
        Runs every configured epoch, then persists both checkpoint encodings.

        Returns:
            TrainingResult with the written paths and the per-epoch history.
        """
        try:
            if not self._ready:
                self.setup()

            epochs = self.cfg.training.epochs
            logger.info(
                f"Training {self.cfg.name} for {epochs} epoch(s) | "
                f"batch_size {self.cfg.training.batch_size} | lr {self.cfg.training.learning_rate}"
            )

            for epoch in range(1, epochs + 1):
                self.state = TrainerState.TRAIN_EPOCH
                train_loss = train_one_epoch(
                    model=self.model,
                    loader=self.train_loader,
                    criterion=self.criterion,
                    optimizer=self.optimizer,
                    device=self.device,
                    epoch=epoch,
                    total_epochs=epochs,
                    use_tqdm=self.use_tqdm,
                )

                self.state = TrainerState.EVAL_EPOCH
                record = self._evaluate_epoch(epoch, train_loss)
                self.history.append(record)
                logger.info(record.summary())

                if self._stop_requested and epoch < epochs:
                    logger.warning(f"Stop requested: ending training after epoch {epoch}.")
                    break

            self.state = TrainerState.PERSIST
            model_path, bin_path = self._persist()

            self.state = TrainerState.DONE
            return TrainingResult(
                model_path=model_path,
                bin_path=bin_path,
                history=tuple(self.history),
                synthetic_data=self.synthetic_data,
            )
        except Exception:
            failed_in = self.state
            self.state = TrainerState.FAILED
            logger.error(f"Training failed during {failed_in.value}")
            raise

    # --- Internal steps ---

    def _evaluate_epoch(self, epoch: int, train_loss: float) -> EpochRecord:
        accuracy, total = evaluate_accuracy(self.model.frozen(), self.test_loader, self.device)
        return EpochRecord(
            epoch=epoch, train_loss=train_loss, test_accuracy=accuracy, test_samples=total
        )

    def _persist(self) -> Tuple[Path, Path]:
        frozen = self.model.frozen()
        model_path, bin_path = save_checkpoint(
            frozen.state_dict(), self.cfg.model_path, self.cfg.model_bin_path
        )
        save_config_snapshot(self.cfg, model_path.parent / "config.json")
        return model_path, bin_path
