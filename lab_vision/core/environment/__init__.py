"""
Environment Package.

Hardware discovery, one-time device acquisition and RNG seeding.
"""

from .hardware import DeviceManager, detect_best_device, to_device_obj
from .reproducibility import make_generator, set_seed

__all__ = [
    "DeviceManager",
    "detect_best_device",
    "to_device_obj",
    "set_seed",
    "make_generator",
]
