"""
Test Suite for Batch Assembly, Pixel Normalization and DataLoader Construction.
"""

# Third-Party Imports
import numpy as np
import pytest
import torch

# Internal Imports
from lab_vision.core.exceptions import ConfigError
from lab_vision.data_handler import (
    Batcher,
    DataLoaderFactory,
    Sample,
    SampleDataset,
    create_synthetic_samples,
    normalize_pixels,
)


def _samples(n, shape):
    c, h, w = shape
    return [
        Sample(image=np.full((c, h, w), i % 256, dtype=np.uint8), label=i % 10)
        for i in range(n)
    ]


# BATCHER
@pytest.mark.unit
@pytest.mark.parametrize("n", [1, 3, 7])
def test_batch_shapes_and_order(mnist_cfg, n):
    batch = Batcher.from_config(mnist_cfg).batch(_samples(n, (1, 8, 8)))

    assert batch.images.shape == (n, 1, 8, 8)
    assert batch.targets.shape == (n,)
    assert batch.images.dtype == torch.float32
    assert batch.targets.dtype == torch.int64
    assert batch.targets.tolist() == [i % 10 for i in range(n)]
    assert batch.images.is_contiguous()


@pytest.mark.unit
def test_grayscale_normalization_values(mnist_cfg):
    samples = [Sample(np.full((1, 8, 8), 255, dtype=np.uint8), 0)]
    batch = Batcher.from_config(mnist_cfg).batch(samples)

    expected = (1.0 - 0.1307) / 0.3081
    assert torch.allclose(batch.images, torch.full_like(batch.images, expected), atol=1e-5)


@pytest.mark.unit
def test_rgb_normalization_is_per_channel(cifar_cfg):
    samples = [Sample(np.zeros((3, 32, 32), dtype=np.uint8), 1)]
    batch = Batcher.from_config(cifar_cfg).batch(samples)

    mean, std = cifar_cfg.normalization_vectors()
    for ch in range(3):
        expected = -mean[ch] / std[ch]
        assert batch.images[0, ch, 5, 5].item() == pytest.approx(expected, rel=1e-5)


@pytest.mark.unit
def test_float_samples_are_accepted(mnist_cfg):
    samples = [Sample(np.full((1, 8, 8), 127.5, dtype=np.float32), 2)]
    batch = Batcher.from_config(mnist_cfg).batch(samples)
    assert batch.images.shape == (1, 1, 8, 8)


@pytest.mark.unit
def test_empty_sample_list_raises(mnist_cfg):
    with pytest.raises(ValueError, match="empty"):
        Batcher.from_config(mnist_cfg).batch([])


@pytest.mark.unit
def test_arity_mismatch_at_construction():
    with pytest.raises(ConfigError, match="arity"):
        Batcher(input_channels=3, mean=(0.5,), std=(0.5,))


@pytest.mark.unit
def test_channel_mismatch_in_samples(mnist_cfg):
    with pytest.raises(ConfigError):
        Batcher.from_config(mnist_cfg).batch(_samples(2, (3, 8, 8)))


@pytest.mark.unit
def test_batch_moves_to_device(mnist_cfg, device):
    batch = Batcher.from_config(mnist_cfg).batch(_samples(2, (1, 8, 8)), device=device)
    assert batch.images.device == device
    assert batch.targets.device == device


# NORMALIZE PIXELS
@pytest.mark.unit
def test_normalize_pixels_channel_mismatch():
    with pytest.raises(ConfigError):
        normalize_pixels(torch.zeros(1, 3, 4, 4), mean=(0.5,), std=(0.5,))


@pytest.mark.unit
def test_normalize_pixels_unbatched():
    out = normalize_pixels(torch.full((1, 2, 2), 255.0), mean=(0.5,), std=(0.5,))
    assert torch.allclose(out, torch.ones(1, 2, 2))


# DATALOADERS
@pytest.mark.unit
def test_test_loader_preserves_order(mnist_cfg):
    ds = create_synthetic_samples(10, mnist_cfg.input_shape, mnist_cfg.num_classes)
    loader = DataLoaderFactory(mnist_cfg).test_loader(ds)

    targets = torch.cat([t for _, t in loader]).tolist()

    assert targets == ds.labels.tolist()


@pytest.mark.unit
def test_train_loader_shuffle_is_reproducible(mnist_cfg):
    images = np.zeros((20, 1, 8, 8), dtype=np.uint8)
    ds = SampleDataset(images, np.arange(20) % 10)
    factory = DataLoaderFactory(mnist_cfg)

    order_a = torch.cat([t for _, t in factory.train_loader(ds)]).tolist()
    order_b = torch.cat([t for _, t in factory.train_loader(ds)]).tolist()

    assert order_a == order_b
    assert sorted(order_a) == sorted(ds.labels.tolist())


@pytest.mark.unit
def test_build_returns_both_loaders(mnist_cfg):
    ds = create_synthetic_samples(9, mnist_cfg.input_shape, mnist_cfg.num_classes)
    train_loader, test_loader = DataLoaderFactory(mnist_cfg).build(ds, ds)

    assert len(train_loader) == 3
    assert len(test_loader) == 3
