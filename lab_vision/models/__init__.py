"""
Models Package.

Config-driven image classifiers behind a common contract and the
registry-based factory that selects them by tag.
"""

from .base import ImageClassifier
from .cifar_net import CifarNet, build_cifar_net
from .factory import available_architectures, get_model
from .lenet import LeNet, build_lenet

__all__ = [
    "ImageClassifier",
    "LeNet",
    "CifarNet",
    "build_lenet",
    "build_cifar_net",
    "get_model",
    "available_architectures",
]
