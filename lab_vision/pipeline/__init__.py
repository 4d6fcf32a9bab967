"""
Pipeline Package.

Phase functions shared by the CLI and programmatic callers.
"""

from .phases import (
    run_embed_phase,
    run_evaluation_phase,
    run_inference_phase,
    run_training_phase,
)

__all__ = [
    "run_training_phase",
    "run_evaluation_phase",
    "run_inference_phase",
    "run_embed_phase",
]
