"""
Core Package.

Cross-cutting infrastructure: configuration, paths, logging, environment,
checkpoint I/O, the error taxonomy and the command-line interface.
"""

from .exceptions import (
    CheckpointError,
    ConfigError,
    DatasetUnavailable,
    ImageDecodeError,
    InferenceError,
    LabVisionError,
    TrainingPathNotImplemented,
    UnsupportedArchitecture,
    UnsupportedDataset,
)
from .paths import LOGGER_NAME

__all__ = [
    "LabVisionError",
    "ConfigError",
    "UnsupportedDataset",
    "UnsupportedArchitecture",
    "DatasetUnavailable",
    "TrainingPathNotImplemented",
    "CheckpointError",
    "ImageDecodeError",
    "InferenceError",
    "LOGGER_NAME",
]
