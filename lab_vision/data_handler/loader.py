"""
Data Loader Orchestration Module.

Builds the train/test DataLoaders for a run. The training loader shuffles
with a generator seeded from ``training.seed`` so the batch order is
reproducible. The test loader never shuffles. Both run in-process
(``num_workers=0``) so batches are consumed in loader order, with the
Batcher as collate function.
"""

import logging
from typing import Optional, Tuple

import torch
from torch.utils.data import DataLoader

from ..core.config import DatasetConfig
from ..core.environment import make_generator
from ..core.paths import LOGGER_NAME
from .batcher import Batcher
from .dataset import SampleDataset


# DATALOADER FACTORY
class DataLoaderFactory:
    """Creates the DataLoaders of one run from a validated config.

    Attributes:
        cfg (DatasetConfig): Validated dataset configuration.
        batcher (Batcher): Normalizing collate function.
        logger (logging.Logger): Project logger.
    """

    def __init__(self, cfg: DatasetConfig, batcher: Optional[Batcher] = None):
        self.cfg = cfg
        self.batcher = batcher if batcher is not None else Batcher.from_config(cfg)
        self.logger = logging.getLogger(LOGGER_NAME)

    def _infrastructure_kwargs(self) -> dict:
        return {
            "num_workers": 0,
            "pin_memory": torch.cuda.is_available(),
            "collate_fn": self.batcher,
        }

    def train_loader(self, dataset: SampleDataset) -> DataLoader:
        return DataLoader(
            dataset,
            batch_size=self.cfg.training.batch_size,
            shuffle=True,
            generator=make_generator(self.cfg.training.seed),
            **self._infrastructure_kwargs(),
        )

    def test_loader(self, dataset: SampleDataset) -> DataLoader:
        return DataLoader(
            dataset,
            batch_size=self.cfg.training.batch_size,
            shuffle=False,
            **self._infrastructure_kwargs(),
        )

    def build(
        self, train_ds: SampleDataset, test_ds: SampleDataset
    ) -> Tuple[DataLoader, DataLoader]:
        """Returns ``(train_loader, test_loader)``."""
        train_loader = self.train_loader(train_ds)
        test_loader = self.test_loader(test_ds)

        mode_str = "RGB" if self.cfg.input_channels == 3 else "Grayscale"
        self.logger.info(
            f"DataLoaders ready ({mode_str}) → "
            f"Train:[{len(train_ds)}] Test:[{len(test_ds)}] "
            f"Batch:[{self.cfg.training.batch_size}]"
        )
        return train_loader, test_loader
