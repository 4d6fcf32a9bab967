"""
Test Suite for the Binary Record Decoder and the Cifar10 Source.

Records are ``1 + C*H*W`` bytes: label byte, then channel-major pixels.
"""

# Third-Party Imports
import numpy as np
import pytest

# Internal Imports
from lab_vision.core.exceptions import DatasetUnavailable
from lab_vision.data_handler import Cifar10Source, decode_records, load_split, record_size


def _make_records(labels, shape, offset=0):
    c, h, w = shape
    rng = np.random.default_rng(offset)
    pixels = rng.integers(0, 256, size=(len(labels), c * h * w), dtype=np.uint8)
    records = np.concatenate([np.array(labels, dtype=np.uint8)[:, None], pixels], axis=1)
    return records.tobytes(), pixels


# DECODER
@pytest.mark.unit
def test_k_records_yield_k_samples():
    shape = (3, 4, 5)
    raw, pixels = _make_records([1, 7, 3], shape)

    ds = decode_records(raw, shape)

    assert len(ds) == 3
    assert ds.images.shape == (3, 3, 4, 5)
    assert list(ds.labels) == [1, 7, 3]


@pytest.mark.unit
def test_pixel_layout_is_channel_major():
    c, h, w = shape = (3, 4, 5)
    raw, _ = _make_records([9, 2], shape)
    record_len = record_size(shape)

    ds = decode_records(raw, shape)

    for k in range(2):
        record = raw[k * record_len : (k + 1) * record_len]
        sample = ds[k]
        assert sample.label == record[0]
        for ch, row, col in [(0, 0, 0), (1, 2, 3), (2, 3, 4)]:
            assert sample.image[ch, row, col] == record[1 + ch * h * w + row * w + col]


@pytest.mark.unit
def test_trailing_partial_record_is_discarded():
    shape = (1, 2, 2)
    raw, _ = _make_records([4, 5], shape)

    ds = decode_records(raw + b"\x01\x02", shape)

    assert len(ds) == 2


@pytest.mark.unit
def test_empty_buffer_yields_empty_dataset():
    ds = decode_records(b"", (1, 2, 2))
    assert len(ds) == 0


# CIFAR10 SOURCE
@pytest.fixture
def cifar_root(tmp_path, cifar_cfg):
    """Five train files with two records each, one test file with three."""
    root = tmp_path / "cifar-10-batches-bin"
    root.mkdir()
    shape = cifar_cfg.input_shape
    for i in range(1, 6):
        raw, _ = _make_records([i, i], shape, offset=i)
        (root / f"data_batch_{i}.bin").write_bytes(raw)
    raw, _ = _make_records([0, 1, 2], shape, offset=99)
    (root / "test_batch.bin").write_bytes(raw)
    return root


@pytest.mark.unit
def test_cifar_train_concatenates_in_order(cifar_cfg, cifar_root):
    ds = Cifar10Source(cifar_cfg, root=cifar_root).load("train")

    assert len(ds) == 10
    assert list(ds.labels) == [1, 1, 2, 2, 3, 3, 4, 4, 5, 5]
    assert ds.sample_shape == (3, 32, 32)


@pytest.mark.unit
def test_cifar_test_split(cifar_cfg, cifar_root):
    ds = Cifar10Source(cifar_cfg, root=cifar_root).load("test")
    assert list(ds.labels) == [0, 1, 2]


@pytest.mark.unit
def test_cifar_missing_directory(cifar_cfg, tmp_path):
    source = Cifar10Source(cifar_cfg, root=tmp_path / "absent")
    with pytest.raises(DatasetUnavailable, match="absent"):
        source.load("train")


@pytest.mark.unit
def test_cifar_missing_batch_file(cifar_cfg, cifar_root):
    (cifar_root / "data_batch_3.bin").unlink()
    with pytest.raises(DatasetUnavailable, match="data_batch_3.bin"):
        Cifar10Source(cifar_cfg, root=cifar_root).load("train")


@pytest.mark.unit
def test_dataset_unavailable_is_file_not_found(cifar_cfg, tmp_path):
    with pytest.raises(FileNotFoundError):
        Cifar10Source(cifar_cfg, root=tmp_path / "absent").load("test")


@pytest.mark.unit
def test_unknown_split_rejected(cifar_cfg, cifar_root):
    with pytest.raises(ValueError, match="Unknown split"):
        Cifar10Source(cifar_cfg, root=cifar_root).load("val")


@pytest.mark.unit
def test_out_of_range_label_names_the_file(cifar_cfg, cifar_root):
    raw, _ = _make_records([3, 200, 4], cifar_cfg.input_shape)
    (cifar_root / "test_batch.bin").write_bytes(raw)

    with pytest.raises(DatasetUnavailable, match="test_batch.bin.*200"):
        Cifar10Source(cifar_cfg, root=cifar_root).load("test")


@pytest.mark.unit
def test_out_of_range_label_falls_back_during_training(cifar_cfg, cifar_root):
    raw, _ = _make_records([10], cifar_cfg.input_shape)
    (cifar_root / "data_batch_3.bin").write_bytes(raw)

    ds = load_split(Cifar10Source(cifar_cfg, root=cifar_root), "train", max_samples=4)

    assert ds.is_synthetic
    assert int(ds.labels.max()) < cifar_cfg.num_classes
