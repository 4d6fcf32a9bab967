"""
Evaluation Engine Module

Architecture-agnostic passes over a loader: accuracy for the training loop
and full prediction collection for standalone evaluation. The predicted
label of a sample is the arg-max of its logits.
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
from typing import List, Tuple

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
import numpy as np
import torch
import torch.nn as nn
from torch.utils.data import DataLoader

# =========================================================================== #
#                               EVALUATION ENGINE                             #
# =========================================================================== #


def evaluate_accuracy(
    model: nn.Module, loader: DataLoader, device: torch.device
) -> Tuple[float, int]:
    """
    One full pass over ``loader``.

    Returns:
        ``(accuracy, total)`` where accuracy is Σ correct / Σ samples, and
        0.0 for an empty loader.
    """
    model.eval()
    correct = 0
    total = 0

    with torch.no_grad():
        for inputs, targets in loader:
            inputs, targets = inputs.to(device), targets.to(device)
            preds = model(inputs).argmax(dim=1)
            correct += int((preds == targets).sum().item())
            total += targets.size(0)

    return (correct / total if total else 0.0), total


def predict_loader(
    model: nn.Module, loader: DataLoader, device: torch.device
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Collects labels, predictions and softmax probabilities over ``loader``.

    Returns:
        Tuple of (labels ``[N]``, preds ``[N]``, probs ``[N, num_classes]``).
    """
    model.eval()
    all_probs_list: List[np.ndarray] = []
    all_labels_list: List[np.ndarray] = []

    with torch.no_grad():
        for inputs, targets in loader:
            logits = model(inputs.to(device))
            all_probs_list.append(torch.softmax(logits, dim=1).cpu().numpy())
            all_labels_list.append(targets.cpu().numpy())

    if not all_probs_list:
        return np.empty(0, dtype=np.int64), np.empty(0, dtype=np.int64), np.empty((0, 0))

    all_probs = np.concatenate(all_probs_list)
    all_labels = np.concatenate(all_labels_list)
    return all_labels, all_probs.argmax(axis=1), all_probs
