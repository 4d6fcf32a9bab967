"""
Evaluation Package.

Accuracy and prediction passes, classification metrics and the standalone
checkpoint evaluation pipeline.
"""

from .engine import evaluate_accuracy, predict_loader
from .metrics import compute_classification_metrics
from .pipeline import run_evaluation

__all__ = [
    "evaluate_accuracy",
    "predict_loader",
    "compute_classification_metrics",
    "run_evaluation",
]
