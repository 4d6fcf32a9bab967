"""
Dataset Source Registry.

One source per dataset domain turns raw files into an ordered
``SampleDataset`` for the ``train`` or ``test`` split. ``load_split`` wraps a
source with the synthetic fallback used while training: a missing dataset
is replaced by deterministic synthetic samples (logged, not raised). Outside
training the fallback is disabled and absence is fatal.

Architecture:
    - Registry Pattern: ``DATASET_SOURCES`` maps dataset names to classes
    - Template Method: ``DatasetSource.load`` validates the split and
      delegates decoding to ``_read_split``
    - Fallback Policy: isolated in ``load_split``
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import logging
from pathlib import Path
from typing import ClassVar, Dict, Optional, Tuple, Type, get_args

# =========================================================================== #
#                              Internal Imports                               #
# =========================================================================== #
from ..core.config import DatasetConfig
from ..core.config.types import Split
from ..core.exceptions import DatasetUnavailable, TrainingPathNotImplemented, UnsupportedDataset
from ..core.paths import DATASET_DIR, LOGGER_NAME
from .binary import read_record_file
from .dataset import SampleDataset
from .idx import read_idx_images, read_idx_labels
from .synthetic import create_synthetic_samples

logger = logging.getLogger(LOGGER_NAME)

SPLITS: Tuple[str, ...] = get_args(Split)


# =========================================================================== #
#                                BASE SOURCE                                  #
# =========================================================================== #


class DatasetSource:
    """
    Produces ordered labeled samples for one dataset domain.

    Subclasses set ``name``, ``default_subdir`` and ``synthetic_sizes`` and
    implement ``_read_split``. A source without a decoder for a split raises
    ``TrainingPathNotImplemented`` for it.
    """

    name: ClassVar[str] = ""
    default_subdir: ClassVar[str] = ""
    synthetic_sizes: ClassVar[Dict[str, int]] = {"train": 50000, "test": 10000}

    def __init__(self, cfg: DatasetConfig, root: Optional[Path] = None):
        self.cfg = cfg
        self.root = Path(root) if root is not None else DATASET_DIR / self.default_subdir

    @property
    def sample_shape(self) -> Tuple[int, int, int]:
        return self.cfg.input_shape

    def load(self, split: Split) -> SampleDataset:
        """
        Decodes one split.

        Raises:
            ValueError: Unknown split name.
            DatasetUnavailable: Missing directory or files, or labels outside
                [0, num_classes).
            TrainingPathNotImplemented: No decoder for this split.
        """
        if split not in SPLITS:
            raise ValueError(f"Unknown split '{split}', expected one of {SPLITS}")
        if not self.root.is_dir():
            raise DatasetUnavailable(f"Dataset directory not found: {self.root}")

        dataset = self._read_split(split)
        self._check_labels(dataset, split)
        logger.info(f"Loaded {self.name}/{split}: {len(dataset)} samples from {self.root}")
        return dataset

    def _check_labels(self, dataset: SampleDataset, split: Split) -> None:
        if len(dataset) == 0:
            return
        low, high = int(dataset.labels.min()), int(dataset.labels.max())
        if low < 0 or high >= self.cfg.num_classes:
            raise DatasetUnavailable(
                f"{dataset.origin}: '{split}' labels span [{low}, {high}], "
                f"expected [0, {self.cfg.num_classes - 1}]"
            )

    def _read_split(self, split: Split) -> SampleDataset:
        raise TrainingPathNotImplemented(
            f"No '{split}' decoder implemented for dataset '{self.cfg.name}'"
        )

    def _require(self, path: Path) -> Path:
        if not path.is_file():
            raise DatasetUnavailable(f"Dataset file not found: {path}")
        return path


# =========================================================================== #
#                              CONCRETE SOURCES                               #
# =========================================================================== #


class Cifar10Source(DatasetSource):
    """Binary record batches: ``data_batch_1..5.bin`` (train), ``test_batch.bin``."""

    name = "cifar10"
    default_subdir = "cifar-10/cifar-10-batches-bin"
    synthetic_sizes = {"train": 50000, "test": 10000}

    TRAIN_FILES: ClassVar[Tuple[str, ...]] = tuple(f"data_batch_{i}.bin" for i in range(1, 6))
    TEST_FILES: ClassVar[Tuple[str, ...]] = ("test_batch.bin",)

    def _read_split(self, split: Split) -> SampleDataset:
        names = self.TRAIN_FILES if split == "train" else self.TEST_FILES
        # Validate the full file set before decoding anything
        paths = [self._require(self.root / n) for n in names]
        parts = [read_record_file(p, self.sample_shape) for p in paths]
        for part in parts:
            self._check_labels(part, split)
        return SampleDataset.concatenate(parts, origin=str(self.root))


class MnistSource(DatasetSource):
    """IDX files, plain or gzip-compressed."""

    name = "mnist"
    default_subdir = "mnist"
    synthetic_sizes = {"train": 60000, "test": 10000}

    PREFIXES: ClassVar[Dict[str, str]] = {"train": "train", "test": "t10k"}

    def _locate(self, stem: str) -> Path:
        for candidate in (self.root / stem, self.root / f"{stem}.gz"):
            if candidate.is_file():
                return candidate
        raise DatasetUnavailable(f"Dataset file not found: {self.root / stem}[.gz]")

    def _read_split(self, split: Split) -> SampleDataset:
        prefix = self.PREFIXES[split]
        images = read_idx_images(self._locate(f"{prefix}-images-idx3-ubyte"))
        labels = read_idx_labels(self._locate(f"{prefix}-labels-idx1-ubyte"))
        if len(images) != len(labels):
            raise DatasetUnavailable(
                f"{self.root}: {len(images)} images but {len(labels)} labels for '{split}'"
            )
        if images.shape[1:] != self.sample_shape[1:]:
            raise DatasetUnavailable(
                f"{self.root}: image size {images.shape[1:]} does not match "
                f"configured input_size {self.sample_shape[1:]}"
            )
        return SampleDataset(images[:, None, :, :], labels, origin=str(self.root))


# =========================================================================== #
#                                  REGISTRY                                   #
# =========================================================================== #

DATASET_SOURCES: Dict[str, Type[DatasetSource]] = {
    "mnist": MnistSource,
    "cifar10": Cifar10Source,
}


def ensure_supported(name: str) -> Type[DatasetSource]:
    """Returns the source class for ``name`` or raises UnsupportedDataset."""
    if name not in DATASET_SOURCES:
        error_msg = f"Unsupported dataset '{name}'. Available: {sorted(DATASET_SOURCES)}"
        logger.error(error_msg)
        raise UnsupportedDataset(error_msg)
    return DATASET_SOURCES[name]


def get_dataset_source(cfg: DatasetConfig, root: Optional[Path] = None) -> DatasetSource:
    return ensure_supported(cfg.name)(cfg, root=root)


def load_split(
    source: DatasetSource,
    split: Split,
    allow_synthetic: bool = True,
    max_samples: Optional[int] = None,
) -> SampleDataset:
    """
    Loads a split, optionally substituting synthetic data when it is absent.

    Args:
        source: Dataset source.
        split: ``train`` or ``test``.
        allow_synthetic: Replace a DatasetUnavailable with synthetic samples.
        max_samples: Keep only the first ``max_samples`` samples.

    Raises:
        DatasetUnavailable: When the dataset is absent and fallback is disabled.
    """
    try:
        dataset = source.load(split)
    except DatasetUnavailable as e:
        if not allow_synthetic:
            raise
        size = source.synthetic_sizes[split]
        if max_samples is not None:
            size = min(size, max_samples)
        logger.warning(f"{e}. Using {size} synthetic '{split}' samples instead.")
        return create_synthetic_samples(size, source.sample_shape, source.cfg.num_classes)

    if max_samples is not None:
        dataset = dataset.head(max_samples)
    return dataset
