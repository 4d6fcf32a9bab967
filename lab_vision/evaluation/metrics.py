"""
Metrics Computation Module

Provides a standardized interface for calculating classification performance
metrics from model outputs. Isolates statistical logic from inference loops.
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import logging
from typing import Optional

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
import numpy as np
from sklearn.metrics import f1_score, roc_auc_score

# =========================================================================== #
#                                Internal Imports                             #
# =========================================================================== #
from ..core.paths import LOGGER_NAME

# =========================================================================== #
#                                 METRIC LOGIC                                #
# =========================================================================== #

logger = logging.getLogger(LOGGER_NAME)


def compute_classification_metrics(
    labels: np.ndarray,
    preds: np.ndarray,
    probs: Optional[np.ndarray] = None,
) -> dict:
    """
    Computes accuracy, macro-averaged F1 and, when probabilities are given,
    macro-averaged one-vs-rest ROC-AUC.

    Args:
        labels: Ground truth class indices.
        preds: Predicted class indices.
        probs: Optional softmax probability distributions ``[N, num_classes]``.

    Returns:
        dict: ``accuracy``, ``f1`` and ``auc`` (0.0 when not computable).
    """
    labels = np.asarray(labels)
    preds = np.asarray(preds)
    if labels.size == 0:
        return {"accuracy": 0.0, "f1": 0.0, "auc": 0.0}

    accuracy = np.mean(preds == labels)
    macro_f1 = f1_score(labels, preds, average="macro", zero_division=0)

    auc = 0.0
    if probs is not None:
        try:
            auc = roc_auc_score(
                labels,
                probs,
                multi_class="ovr",
                average="macro",
                labels=np.arange(probs.shape[1]),
            )
        except ValueError as e:
            logger.warning(f"ROC-AUC calculation failed: {e}. Defaulting to 0.0")

    return {"accuracy": float(accuracy), "f1": float(macro_f1), "auc": float(auc)}
