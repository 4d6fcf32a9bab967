"""
Model Checkpoint & Weight Management.

Persists a frozen parameter state in two co-derived encodings and restores
either of them into a freshly constructed architecture:

    * Structured file: ``torch.save`` of the state dict, restored with
      ``weights_only=True`` (no arbitrary code execution).
    * Flat blob: safetensors bytes of the full-precision (float32) state
      dict, small enough to embed as a package asset.

Both encodings are always written from the same state dict, so reloading
either reproduces identical inference behavior.
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import logging
import shutil
from pathlib import Path
from typing import Dict, Mapping, Tuple

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
import torch
from safetensors import SafetensorError
from safetensors.torch import load as load_safetensors_bytes
from safetensors.torch import save as save_safetensors_bytes

# =========================================================================== #
#                               Internal Imports                              #
# =========================================================================== #
from ..exceptions import CheckpointError
from ..paths import ASSETS_DIR, LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

StateDict = Dict[str, torch.Tensor]

# =========================================================================== #
#                                  Encoding                                   #
# =========================================================================== #


def _full_precision(state: Mapping[str, torch.Tensor]) -> StateDict:
    """Detached, contiguous float32 CPU copies of every floating tensor."""
    out: StateDict = {}
    for key, tensor in state.items():
        t = tensor.detach().to("cpu")
        if t.is_floating_point():
            t = t.to(torch.float32)
        out[key] = t.contiguous().clone()
    return out


def encode_state_blob(state: Mapping[str, torch.Tensor]) -> bytes:
    """Serializes a state dict into a flat full-precision byte blob."""
    return save_safetensors_bytes(_full_precision(state))


def decode_state_blob(blob: bytes) -> StateDict:
    """
    Decodes a byte blob produced by ``encode_state_blob``.

    Raises:
        CheckpointError: On an empty or corrupt blob.
    """
    if not blob:
        raise CheckpointError("Checkpoint blob is empty (no trained model embedded)")
    try:
        return load_safetensors_bytes(bytes(blob))
    except (SafetensorError, ValueError) as e:
        raise CheckpointError(f"Cannot decode checkpoint blob: {e}") from e


# =========================================================================== #
#                               Weight Restoration                            #
# =========================================================================== #


def _apply_state(model: torch.nn.Module, state: Mapping[str, torch.Tensor], origin: str) -> None:
    """
    Loads ``state`` into ``model`` after a strict key and shape comparison.

    Raises:
        CheckpointError: On missing keys, unexpected keys or shape mismatch.
    """
    expected = model.state_dict()

    missing = sorted(set(expected) - set(state))
    unexpected = sorted(set(state) - set(expected))
    if missing or unexpected:
        raise CheckpointError(
            f"Checkpoint {origin} does not match the architecture "
            f"(missing: {missing}, unexpected: {unexpected})"
        )

    mismatched = [
        f"{k}: {tuple(state[k].shape)} != {tuple(v.shape)}"
        for k, v in expected.items()
        if tuple(state[k].shape) != tuple(v.shape)
    ]
    if mismatched:
        raise CheckpointError(f"Checkpoint {origin} has shape mismatches: {mismatched}")

    model.load_state_dict(state)


def load_checkpoint_file(model: torch.nn.Module, path: Path, device: torch.device) -> None:
    """
    Restores model state from a structured checkpoint using weights-only loading.

    Args:
        model (torch.nn.Module): The model instance to populate.
        path (Path): Filesystem path to the checkpoint file.
        device (torch.device): Target device for mapping the tensors.

    Raises:
        CheckpointError: If the file is missing, unreadable, or mismatched.
    """
    path = Path(path)
    if not path.exists():
        raise CheckpointError(f"Model checkpoint not found at: {path}")

    try:
        state_dict = torch.load(path, map_location=device, weights_only=True)
    except Exception as e:
        # Corrupt archives surface as pickle, zip or index errors depending on the damage
        raise CheckpointError(f"Cannot read checkpoint {path}: {e}") from e
    if not isinstance(state_dict, Mapping):
        raise CheckpointError(
            f"Checkpoint {path} holds a {type(state_dict).__name__}, expected a state dict"
        )

    _apply_state(model, state_dict, origin=str(path))


def load_checkpoint_blob(model: torch.nn.Module, blob: bytes, device: torch.device) -> None:
    """Restores model state from a flat byte blob (see ``encode_state_blob``)."""
    state = {k: v.to(device) for k, v in decode_state_blob(blob).items()}
    _apply_state(model, state, origin=f"blob ({len(blob)} bytes)")


# =========================================================================== #
#                                  Persistence                                #
# =========================================================================== #


def save_checkpoint(
    state: Mapping[str, torch.Tensor], model_path: Path, bin_path: Path
) -> Tuple[Path, Path]:
    """
    Writes both encodings of the same state dict.

    Returns:
        The (structured file, blob file) paths written.

    Raises:
        CheckpointError: On any write failure.
    """
    model_path, bin_path = Path(model_path), Path(bin_path)
    snapshot = _full_precision(state)
    try:
        model_path.parent.mkdir(parents=True, exist_ok=True)
        bin_path.parent.mkdir(parents=True, exist_ok=True)
        torch.save(snapshot, model_path)
        bin_path.write_bytes(encode_state_blob(snapshot))
    except OSError as e:
        raise CheckpointError(f"Cannot write checkpoint to {model_path} / {bin_path}: {e}") from e

    logger.info(f"Model saved to {model_path}")
    logger.info(f"Model blob saved to {bin_path}")
    return model_path, bin_path


def embedded_asset_path(name: str) -> Path:
    """Package asset location of the embedded blob for a dataset domain."""
    return ASSETS_DIR / name / "model.bin"


def embed_checkpoint(bin_path: Path, name: str) -> Path:
    """
    Copies a trained blob into the package assets consumed by the services.

    Raises:
        CheckpointError: If the blob is missing, empty or cannot be copied.
    """
    bin_path = Path(bin_path)
    if not bin_path.is_file() or bin_path.stat().st_size == 0:
        raise CheckpointError(f"No trained blob to embed at {bin_path}; run training first")

    target = embedded_asset_path(name)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(bin_path, target)
    except OSError as e:
        raise CheckpointError(f"Cannot embed {bin_path} into {target}: {e}") from e

    logger.info(f"Embedded {bin_path} -> {target}")
    return target
