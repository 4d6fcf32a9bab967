"""
lab_vision: config-driven convolutional image classifiers.

Trains and serves small CNN classifiers over two dataset domains
(single-channel digits and three-channel natural images). Every stage,
from architecture construction to inference preprocessing, is driven by a
declarative per-dataset JSON configuration.
"""

__version__ = "0.3.0"
