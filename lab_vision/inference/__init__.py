"""
Inference Package.

Batch command-line dispatch over image files and the per-domain interactive
model services backed by embedded resources.
"""

from .dispatcher import InferenceDispatcher, Prediction, PredictionRow
from .resources import EmbeddedResources, get_embedded_resources
from .service import SERVICE_DOMAINS, UNKNOWN_CLASS, ModelService

__all__ = [
    "InferenceDispatcher",
    "Prediction",
    "PredictionRow",
    "EmbeddedResources",
    "get_embedded_resources",
    "ModelService",
    "SERVICE_DOMAINS",
    "UNKNOWN_CLASS",
]
