"""
Pytest Configuration and Shared Fixtures for the lab_vision Test Suite.

Provides tiny, fast configurations for both dataset domains:
- mnist-like: 1 channel, 8x8 inputs, narrow LeNet
- cifar10-like: 3 channels, 32x32 inputs (fixed by the deep architecture), narrow CifarNet

Artifact directories always point into pytest's tmp_path.
"""

# Standard Imports
import copy
import struct

# Third-Party Imports
import numpy as np
import pytest
import torch

# Internal Imports
from lab_vision.core.config import DatasetConfig

MNIST_TINY = {
    "name": "mnist",
    "input_channels": 1,
    "input_size": [8, 8],
    "num_classes": 10,
    "class_names": [str(i) for i in range(10)],
    "model": {"type": "lenet", "conv1_out": 4, "conv2_out": 8, "fc1_out": 16},
    "training": {
        "epochs": 1,
        "batch_size": 4,
        "learning_rate": 0.01,
        "normalization": {"mean": 0.1307, "std": 0.3081},
    },
    "artifacts": {"dir": "artifacts/mnist", "model_file": "model.pth", "model_bin": "model.bin"},
}

CIFAR_TINY = {
    "name": "cifar10",
    "input_channels": 3,
    "input_size": [32, 32],
    "num_classes": 10,
    "class_names": [
        "airplane", "automobile", "bird", "cat", "deer",
        "dog", "frog", "horse", "ship", "truck",
    ],
    "model": {
        "type": "cifar_net",
        "conv1_out": 4,
        "conv2_out": 8,
        "conv3_out": 8,
        "fc1_out": 16,
        "fc2_out": 8,
    },
    "training": {
        "epochs": 1,
        "batch_size": 4,
        "learning_rate": 0.01,
        "normalization": {"mean": [0.4914, 0.4822, 0.4465], "std": [0.2470, 0.2435, 0.2616]},
    },
    "artifacts": {"dir": "artifacts/cifar10", "model_file": "model.pth", "model_bin": "model.bin"},
}


def _with_artifacts(template: dict, tmp_path) -> dict:
    payload = copy.deepcopy(template)
    payload["artifacts"]["dir"] = str(tmp_path / "artifacts" / template["name"])
    return payload


# CONFIG FIXTURES
@pytest.fixture
def mnist_dict(tmp_path):
    """Raw tiny single-channel config payload."""
    return _with_artifacts(MNIST_TINY, tmp_path)


@pytest.fixture
def cifar_dict(tmp_path):
    """Raw tiny three-channel config payload."""
    return _with_artifacts(CIFAR_TINY, tmp_path)


@pytest.fixture
def mnist_cfg(mnist_dict):
    return DatasetConfig.model_validate(mnist_dict)


@pytest.fixture
def cifar_cfg(cifar_dict):
    return DatasetConfig.model_validate(cifar_dict)


@pytest.fixture
def device():
    """All tests run on CPU."""
    return torch.device("cpu")


# DATASET FIXTURES
def _idx_bytes(magic: int, array: np.ndarray) -> bytes:
    header = struct.pack(f">{1 + array.ndim}I", magic, *array.shape)
    return header + array.astype(np.uint8).tobytes()


@pytest.fixture
def mnist_dataset_dir(tmp_path):
    """
    Tiny on-disk MNIST layout (8x8 IDX files).

    Labels cycle through 0..9 so every class is present in both splits.
    """
    root = tmp_path / "datasets" / "mnist"
    root.mkdir(parents=True)
    rng = np.random.default_rng(0)
    for prefix, n in (("train", 20), ("t10k", 10)):
        images = rng.integers(0, 256, size=(n, 8, 8), dtype=np.uint8)
        labels = np.arange(n) % 10
        (root / f"{prefix}-images-idx3-ubyte").write_bytes(_idx_bytes(2051, images))
        (root / f"{prefix}-labels-idx1-ubyte").write_bytes(_idx_bytes(2049, labels))
    return root
