"""
Training Engine.

Single-epoch training kernel. Every batch performs exactly one forward
pass, one backward pass and one optimizer step over that batch's complete
gradient set.
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import math

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
import torch
import torch.nn as nn
from torch.utils.data import DataLoader
from tqdm import tqdm

# =========================================================================== #
#                               CORE ENGINES                                  #
# =========================================================================== #


def train_one_epoch(
    model: nn.Module,
    loader: DataLoader,
    criterion: nn.Module,
    optimizer: torch.optim.Optimizer,
    device: torch.device,
    epoch: int = 1,
    total_epochs: int = 1,
    use_tqdm: bool = True,
) -> float:
    """
    Performs a single training cycle over the training set.

    Returns:
        Mean of the per-batch losses (0.0 if the loader is empty).

    Raises:
        FloatingPointError: If a batch produces a non-finite loss.
    """
    model.train()
    running_loss = 0.0
    batches = 0

    progress_bar = tqdm(
        loader,
        desc=f"Epoch {epoch:02d}/{total_epochs}",
        leave=False,
        disable=not use_tqdm,
    )

    for inputs, targets in progress_bar:
        inputs, targets = inputs.to(device), targets.to(device)

        optimizer.zero_grad(set_to_none=True)
        logits = model(inputs)
        loss = criterion(logits, targets)
        loss.backward()
        optimizer.step()

        loss_value = loss.item()
        if not math.isfinite(loss_value):
            raise FloatingPointError(f"Non-finite training loss at epoch {epoch}: {loss_value}")

        running_loss += loss_value
        batches += 1
        progress_bar.set_postfix({"loss": f"{loss_value:.4f}"})

    return running_loss / max(batches, 1)
