"""
Data Handler Package.

Turns raw dataset files (or deterministic synthetic stand-ins) into ordered
samples, normalized batches and PyTorch DataLoaders, and decodes image files
for inference.
"""

from .batcher import Batch, Batcher
from .binary import decode_records, read_record_file, record_size
from .dataset import Sample, SampleDataset
from .idx import read_idx_images, read_idx_labels
from .images import IMAGE_EXTENSIONS, is_image_file, load_image
from .loader import DataLoaderFactory
from .sources import (
    DATASET_SOURCES,
    Cifar10Source,
    DatasetSource,
    MnistSource,
    ensure_supported,
    get_dataset_source,
    load_split,
)
from .synthetic import create_synthetic_samples, stable_index_hash
from .transforms import normalize_pixels

__all__ = [
    "Sample",
    "SampleDataset",
    "Batch",
    "Batcher",
    "normalize_pixels",
    "decode_records",
    "read_record_file",
    "record_size",
    "read_idx_images",
    "read_idx_labels",
    "create_synthetic_samples",
    "stable_index_hash",
    "DatasetSource",
    "Cifar10Source",
    "MnistSource",
    "DATASET_SOURCES",
    "ensure_supported",
    "get_dataset_source",
    "load_split",
    "IMAGE_EXTENSIONS",
    "is_image_file",
    "load_image",
    "DataLoaderFactory",
]
