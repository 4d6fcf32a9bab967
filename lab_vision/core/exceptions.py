"""
Error Taxonomy.

All failures raised by the package derive from LabVisionError so that entry
points can separate expected, user-facing conditions from programming errors.
Where a failure has a natural built-in counterpart (ValueError,
FileNotFoundError, OSError, NotImplementedError) the exception also derives
from it, keeping generic handlers working.
"""


class LabVisionError(Exception):
    """Base class for every error raised by lab_vision."""


class ConfigError(LabVisionError, ValueError):
    """Malformed or missing configuration, or a normalization arity mismatch."""


class UnsupportedDataset(LabVisionError):
    """Dataset name has no registered source."""


class UnsupportedArchitecture(ConfigError):
    """Config declares a model type tag that is not registered."""


class DatasetUnavailable(LabVisionError, FileNotFoundError):
    """Dataset directory or split files are missing or unreadable."""


class TrainingPathNotImplemented(LabVisionError, NotImplementedError):
    """A registered dataset source has no decoder for the requested split."""


class CheckpointError(LabVisionError):
    """Checkpoint could not be written, decoded, or matched to the architecture."""


class ImageDecodeError(LabVisionError, OSError):
    """An input image could not be opened or decoded."""


class InferenceError(LabVisionError):
    """Inference was requested on an unusable model or input buffer."""
