"""
Test Suite for Checkpoint Encodings.

Both the structured file and the flat blob must restore parameters that
produce the same logits as the model they were written from.
"""

# Standard Imports
from unittest.mock import patch

# Third-Party Imports
import pytest
import torch

# Internal Imports
from lab_vision.core.config import DatasetConfig
from lab_vision.core.exceptions import CheckpointError
from lab_vision.core.io import (
    decode_state_blob,
    embed_checkpoint,
    encode_state_blob,
    load_checkpoint_blob,
    load_checkpoint_file,
    load_config_snapshot,
    save_checkpoint,
    save_config_snapshot,
)
from lab_vision.core.io import checkpoints
from lab_vision.models import CifarNet, LeNet


@pytest.fixture
def trained_lenet(mnist_cfg):
    torch.manual_seed(0)
    return LeNet(mnist_cfg).frozen()


# ROUND TRIPS
@pytest.mark.unit
@pytest.mark.parametrize("arch, cfg_name", [(LeNet, "mnist_cfg"), (CifarNet, "cifar_cfg")])
def test_both_encodings_reproduce_logits(arch, cfg_name, request, device):
    cfg = request.getfixturevalue(cfg_name)
    source = arch(cfg).frozen()
    x = torch.randn(2, *cfg.input_shape)
    expected = source(x)

    model_path, bin_path = save_checkpoint(source.state_dict(), cfg.model_path, cfg.model_bin_path)

    from_file = arch(cfg)
    load_checkpoint_file(from_file, model_path, device)
    from_blob = arch(cfg)
    load_checkpoint_blob(from_blob, bin_path.read_bytes(), device)

    assert torch.allclose(from_file.frozen()(x), expected, atol=1e-6)
    assert torch.allclose(from_blob.frozen()(x), expected, atol=1e-6)


@pytest.mark.unit
def test_blob_is_full_precision(trained_lenet):
    half_state = {k: v.half() for k, v in trained_lenet.state_dict().items()}
    decoded = decode_state_blob(encode_state_blob(half_state))
    assert all(t.dtype == torch.float32 for t in decoded.values())


@pytest.mark.unit
def test_save_creates_parent_directories(trained_lenet, tmp_path):
    model_path, bin_path = save_checkpoint(
        trained_lenet.state_dict(), tmp_path / "a" / "m.pth", tmp_path / "b" / "m.bin"
    )
    assert model_path.is_file()
    assert bin_path.stat().st_size > 0


# FAILURES
@pytest.mark.unit
def test_empty_blob_raises(mnist_cfg, device):
    with pytest.raises(CheckpointError, match="empty"):
        load_checkpoint_blob(LeNet(mnist_cfg), b"", device)


@pytest.mark.unit
def test_corrupt_blob_raises(mnist_cfg, device):
    with pytest.raises(CheckpointError, match="decode"):
        load_checkpoint_blob(LeNet(mnist_cfg), b"\x08\x00\x00\x00garbage", device)


@pytest.mark.unit
def test_corrupt_checkpoint_file_raises(mnist_cfg, tmp_path, device):
    path = tmp_path / "model.pth"
    path.write_bytes(b"this is not a checkpoint at all" * 4)

    with pytest.raises(CheckpointError, match="model.pth"):
        load_checkpoint_file(LeNet(mnist_cfg), path, device)


@pytest.mark.unit
def test_checkpoint_file_without_state_dict(mnist_cfg, tmp_path, device):
    path = tmp_path / "model.pth"
    torch.save(torch.zeros(3), path)

    with pytest.raises(CheckpointError, match="expected a state dict"):
        load_checkpoint_file(LeNet(mnist_cfg), path, device)


@pytest.mark.unit
def test_shape_mismatch_raises(mnist_cfg, mnist_dict, device):
    blob = encode_state_blob(LeNet(mnist_cfg).state_dict())
    mnist_dict["model"]["fc1_out"] = 32
    other = LeNet(DatasetConfig.from_dict(mnist_dict))

    with pytest.raises(CheckpointError, match="shape mismatch"):
        load_checkpoint_blob(other, blob, device)


@pytest.mark.unit
def test_architecture_mismatch_raises(mnist_cfg, cifar_cfg, device):
    blob = encode_state_blob(LeNet(mnist_cfg).state_dict())

    with pytest.raises(CheckpointError, match="missing"):
        load_checkpoint_blob(CifarNet(cifar_cfg), blob, device)


@pytest.mark.unit
def test_missing_checkpoint_file(mnist_cfg, tmp_path, device):
    with pytest.raises(CheckpointError, match="not found"):
        load_checkpoint_file(LeNet(mnist_cfg), tmp_path / "absent.pth", device)


@pytest.mark.unit
def test_write_failure_raises(trained_lenet, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")

    with pytest.raises(CheckpointError, match="Cannot write"):
        save_checkpoint(trained_lenet.state_dict(), blocker / "m.pth", blocker / "m.bin")


# EMBEDDING
@pytest.mark.unit
def test_embed_copies_blob_into_assets(trained_lenet, tmp_path):
    _, bin_path = save_checkpoint(
        trained_lenet.state_dict(), tmp_path / "m.pth", tmp_path / "m.bin"
    )
    assets = tmp_path / "assets"

    with patch.object(checkpoints, "ASSETS_DIR", assets):
        target = embed_checkpoint(bin_path, "mnist")

    assert target == assets / "mnist" / "model.bin"
    assert target.read_bytes() == bin_path.read_bytes()


@pytest.mark.unit
def test_embed_without_trained_blob(tmp_path):
    with patch.object(checkpoints, "ASSETS_DIR", tmp_path / "assets"):
        with pytest.raises(CheckpointError, match="run training first"):
            embed_checkpoint(tmp_path / "missing.bin", "mnist")


# CONFIG SNAPSHOT
@pytest.mark.unit
def test_config_snapshot_roundtrip(cifar_cfg, tmp_path):
    path = save_config_snapshot(cifar_cfg, tmp_path / "run" / "config.json")
    assert load_config_snapshot(path) == cifar_cfg
