"""
Dataset Configuration Schema.

Frozen pydantic manifest parsed from ``configs/<name>.json``. A single
instance drives every stage of a run: architecture construction, dataset
decoding, batch normalization, training hyperparameters and artifact
locations. Once loaded it is never mutated; CLI overrides produce a new,
re-validated instance via ``with_overrides``.

Key Features:
    * Cross-field validation: class_names length vs num_classes, and
      normalization arity (scalar vs 3-vector) vs input_channels
    * Shape helpers: ``input_shape`` and ``normalization_vectors`` expose the
      values consumed by the Batcher and the inference surfaces
    * Artifact resolution: structured checkpoint and byte blob paths derived
      from the artifacts block
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import json
from pathlib import Path
from typing import Any, List, Optional, Tuple

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

# =========================================================================== #
#                               Internal Imports                              #
# =========================================================================== #
from ..exceptions import ConfigError
from .types import (
    ArchitectureTag,
    BatchSize,
    Channels,
    DatasetSlug,
    LayerWidth,
    LearningRate,
    NormValue,
    PositiveInt,
    SpatialSize,
)


# =========================================================================== #
#                              SUB-CONFIGURATIONS                             #
# =========================================================================== #


class ArchitectureConfig(BaseModel):
    """
    Architecture tag plus optional layer widths.

    Widths left unset fall back to the defaults of the selected variant
    (see ``lab_vision.models``).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: ArchitectureTag = Field(description="Registered architecture tag (lenet, cifar_net)")
    conv1_out: Optional[LayerWidth] = None
    conv2_out: Optional[LayerWidth] = None
    conv3_out: Optional[LayerWidth] = None
    fc1_out: LayerWidth = Field(description="Width of the first hidden dense layer")
    fc2_out: Optional[LayerWidth] = None


class NormalizationConfig(BaseModel):
    """Per-channel mean/std, a scalar for grayscale or a 3-vector for RGB."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mean: NormValue
    std: NormValue

    @model_validator(mode="after")
    def check_consistency(self) -> "NormalizationConfig":
        if self.arity(self.mean) != self.arity(self.std):
            raise ValueError("normalization mean and std must have the same arity")
        std = self.std if isinstance(self.std, tuple) else (self.std,)
        if any(s <= 0 for s in std):
            raise ValueError(f"normalization std must be strictly positive, got {self.std}")
        return self

    @staticmethod
    def arity(value: NormValue) -> int:
        return len(value) if isinstance(value, tuple) else 1


class TrainingConfig(BaseModel):
    """Optimization hyperparameters and the fixed shuffle seed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    epochs: PositiveInt = Field(description="Number of full passes over the train split")
    batch_size: BatchSize = Field(description="Samples per batch")
    learning_rate: LearningRate = Field(description="Adam learning rate")
    normalization: NormalizationConfig
    seed: int = Field(default=42, description="Shuffle and initialization seed")


class ArtifactsConfig(BaseModel):
    """Checkpoint locations. Relative ``dir`` values resolve against the CWD."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    dir: str = Field(min_length=1)
    model_file: str = Field(min_length=1)
    model_bin: str = Field(min_length=1)
    wasm_bg: Optional[str] = None
    wasm_js: Optional[str] = None


# =========================================================================== #
#                             DATASET CONFIGURATION                           #
# =========================================================================== #


class DatasetConfig(BaseModel):
    """
    Validated manifest for one dataset domain.

    Attributes:
        name: Dataset identifier, also the key of the dataset source registry.
        input_channels: 1 (grayscale) or 3 (RGB).
        input_size: Spatial size as (height, width).
        num_classes: Number of target classes.
        class_names: Ordered human-readable labels, one per class index.
        model: Architecture block.
        training: Hyperparameter block.
        artifacts: Checkpoint location block.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: DatasetSlug
    input_channels: Channels
    input_size: SpatialSize
    num_classes: PositiveInt
    class_names: List[str]
    model: ArchitectureConfig
    training: TrainingConfig
    artifacts: ArtifactsConfig

    @model_validator(mode="after")
    def check_cross_field_invariants(self) -> "DatasetConfig":
        """
        Enforces the invariants every downstream component relies on.

        Raises:
            ValueError: On class name count mismatch, unsupported channel
                count, or normalization arity that does not match the channels.
        """
        if len(self.class_names) != self.num_classes:
            raise ValueError(
                f"class_names has {len(self.class_names)} entries "
                f"but num_classes is {self.num_classes}"
            )
        if self.input_channels not in (1, 3):
            raise ValueError(f"input_channels must be 1 or 3, got {self.input_channels}")

        norm = self.training.normalization
        arity = NormalizationConfig.arity(norm.mean)
        if arity != self.input_channels:
            raise ValueError(
                f"normalization arity {arity} does not match "
                f"input_channels {self.input_channels}"
            )
        return self

    # --- Constructors ---

    @classmethod
    def from_json(cls, text: str, source: str = "<string>") -> "DatasetConfig":
        """
        Parses and validates a JSON document.

        Args:
            text: Raw JSON content.
            source: Human-readable origin used in error messages.

        Raises:
            ConfigError: On malformed JSON or schema violations.
        """
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config {source}: {e}") from e
        return cls.from_dict(payload, source=source)

    @classmethod
    def from_dict(cls, payload: Any, source: str = "<dict>") -> "DatasetConfig":
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise ConfigError(f"Invalid config {source}: {e}") from e

    def with_overrides(self, **overrides: Any) -> "DatasetConfig":
        """
        Returns a new validated config with training fields replaced.

        Only keys with a non-None value are applied, so argparse namespaces
        can be forwarded directly (e.g. ``epochs=args.epochs``).
        """
        training_updates = {k: v for k, v in overrides.items() if v is not None}
        if not training_updates:
            return self

        unknown = set(training_updates) - set(TrainingConfig.model_fields)
        if unknown:
            raise ConfigError(f"Unknown training override(s): {sorted(unknown)}")

        payload = self.model_dump()
        payload["training"].update(training_updates)
        return self.from_dict(payload, source=f"{self.name} (overrides)")

    # --- Properties ---

    @property
    def height(self) -> int:
        return self.input_size[0]

    @property
    def width(self) -> int:
        return self.input_size[1]

    @property
    def input_shape(self) -> Tuple[int, int, int]:
        """Per-sample tensor shape (C, H, W)."""
        return (self.input_channels, self.height, self.width)

    @property
    def pixels_per_sample(self) -> int:
        c, h, w = self.input_shape
        return c * h * w

    @property
    def model_path(self) -> Path:
        """Structured checkpoint location: ``{artifacts.dir}/{artifacts.model_file}``."""
        return Path(self.artifacts.dir) / self.artifacts.model_file

    @property
    def model_bin_path(self) -> Path:
        """Flat byte blob location: ``{artifacts.dir}/{artifacts.model_bin}``."""
        return Path(self.artifacts.dir) / self.artifacts.model_bin

    def normalization_vectors(self) -> Tuple[Tuple[float, ...], Tuple[float, ...]]:
        """
        Expands the normalization block to one (mean, std) entry per channel.

        Raises:
            ConfigError: If the declared arity does not match input_channels.
        """
        norm = self.training.normalization
        mean = norm.mean if isinstance(norm.mean, tuple) else (norm.mean,)
        std = norm.std if isinstance(norm.std, tuple) else (norm.std,)
        if len(mean) != self.input_channels or len(std) != self.input_channels:
            raise ConfigError(
                f"{self.name}: normalization arity ({len(mean)}, {len(std)}) "
                f"does not match input_channels {self.input_channels}"
            )
        return tuple(float(m) for m in mean), tuple(float(s) for s in std)

    def class_name(self, index: int, placeholder: Optional[str] = None) -> str:
        """
        Looks up a class label; out-of-range indices map to a sentinel.

        Args:
            index: Predicted class index.
            placeholder: Sentinel returned out of range. Defaults to
                ``unknown_<index>``.
        """
        if 0 <= index < len(self.class_names):
            return self.class_names[index]
        return placeholder if placeholder is not None else f"unknown_{index}"
