"""
Test Suite for the Models Factory.
"""

# Standard Imports
from unittest.mock import MagicMock, patch

# Third-Party Imports
import pytest

# Internal Imports
from lab_vision.core.config import DatasetConfig
from lab_vision.core.exceptions import ConfigError, UnsupportedArchitecture
from lab_vision.models import CifarNet, LeNet, available_architectures, get_model
from lab_vision.models import factory


@pytest.mark.unit
def test_registry_contents():
    assert available_architectures() == ["cifar_net", "lenet"]


@pytest.mark.unit
def test_get_model_resolves_tags(mnist_cfg, cifar_cfg, device):
    assert isinstance(get_model(mnist_cfg, device, verbose=False), LeNet)
    assert isinstance(get_model(cifar_cfg, device), CifarNet)


@pytest.mark.unit
def test_tag_lookup_is_case_insensitive(mnist_dict, device):
    mnist_dict["model"]["type"] = "LeNet"
    model = get_model(DatasetConfig.from_dict(mnist_dict), device, verbose=False)
    assert isinstance(model, LeNet)


@pytest.mark.unit
def test_unknown_tag_rejected_before_allocation(mnist_dict, device):
    mnist_dict["model"]["type"] = "resnet_18"
    cfg = DatasetConfig.from_dict(mnist_dict)
    builder = MagicMock()

    with patch.dict(factory._MODEL_REGISTRY, {"lenet": builder}):
        with pytest.raises(UnsupportedArchitecture, match="resnet_18"):
            get_model(cfg, device)

    builder.assert_not_called()


@pytest.mark.unit
def test_unsupported_architecture_is_config_error():
    assert issubclass(UnsupportedArchitecture, ConfigError)


@pytest.mark.unit
def test_model_placed_on_device(mnist_cfg, device):
    model = get_model(mnist_cfg, device, verbose=False)
    assert all(p.device == device for p in model.parameters())
