"""
In-Memory Sample Containers.

Decoded splits are held as one contiguous ``[N, C, H, W]`` pixel array plus
an ``[N]`` label vector. ``SampleDataset`` exposes them as an ordered,
indexable sequence of ``Sample`` records that plugs straight into a PyTorch
DataLoader (the Batcher acts as its collate function).
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
from dataclasses import dataclass
from typing import Final, Iterator, Tuple

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
import numpy as np
from torch.utils.data import Dataset

# =========================================================================== #
#                                DATA CLASSES                                 #
# =========================================================================== #


@dataclass(frozen=True)
class Sample:
    """One labeled image: ``image`` is ``[C, H, W]`` (uint8 or float32 byte-scale)."""

    image: np.ndarray
    label: int


# =========================================================================== #
#                                DATASET CLASS                                #
# =========================================================================== #


class SampleDataset(Dataset):
    """
    Ordered labeled samples for one split.

    Attributes:
        images: ``[N, C, H, W]`` pixel array.
        labels: ``[N]`` int64 label array.
        origin: Where the samples came from (a directory or ``synthetic``).
    """

    def __init__(self, images: np.ndarray, labels: np.ndarray, origin: str = "memory"):
        if images.ndim != 4:
            raise ValueError(f"images must be [N, C, H, W], got shape {images.shape}")
        if len(images) != len(labels):
            raise ValueError(f"{len(images)} images but {len(labels)} labels")

        self.images: Final[np.ndarray] = images
        self.labels: Final[np.ndarray] = np.asarray(labels, dtype=np.int64)
        self.origin: Final[str] = origin

    def __len__(self) -> int:
        return len(self.labels)

    def __getitem__(self, idx: int) -> Sample:
        return Sample(image=self.images[idx], label=int(self.labels[idx]))

    def __iter__(self) -> Iterator[Sample]:
        for idx in range(len(self)):
            yield self[idx]

    @property
    def sample_shape(self) -> Tuple[int, int, int]:
        return tuple(self.images.shape[1:])

    @property
    def is_synthetic(self) -> bool:
        return self.origin == "synthetic"

    def head(self, n: int) -> "SampleDataset":
        """First ``n`` samples in order (the dataset itself when already short enough)."""
        if n >= len(self):
            return self
        return SampleDataset(self.images[:n], self.labels[:n], origin=self.origin)

    @classmethod
    def concatenate(cls, parts: "list[SampleDataset]", origin: str) -> "SampleDataset":
        """Joins splits end to end, preserving the order of ``parts``."""
        images = np.concatenate([p.images for p in parts], axis=0)
        labels = np.concatenate([p.labels for p in parts], axis=0)
        return cls(images, labels, origin=origin)
