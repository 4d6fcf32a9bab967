"""
Hardware Acceleration & Device Acquisition.

Detects the available accelerator (CUDA > MPS > CPU) and wraps the one-time
device setup step. ``DeviceManager`` makes that step idempotent: the first
call performs the acquisition, later calls observe the completed result.
Both a blocking entry point (CLI paths) and an awaitable one (the inference
services) are provided.
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import asyncio
import logging
import threading
from typing import Optional

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
import torch

# =========================================================================== #
#                               Internal Imports                              #
# =========================================================================== #
from ..exceptions import ConfigError
from ..paths import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

# =========================================================================== #
#                              Hardware Detection                             #
# =========================================================================== #


def detect_best_device() -> str:
    """
    Detects the most performant accelerator (CUDA > MPS > CPU).

    Returns:
        Device string: 'cuda', 'mps', or 'cpu'
    """
    if torch.cuda.is_available():
        return "cuda"
    if hasattr(torch.backends, "mps") and torch.backends.mps.is_available():
        return "mps"
    return "cpu"


def to_device_obj(device_str: str) -> torch.device:
    """
    Converts device string to PyTorch device object.

    Args:
        device_str: 'cuda', 'mps', 'cpu', or 'auto' (auto-selects best available)

    Raises:
        ConfigError: If an accelerator is requested but unavailable, or the
            device string is not recognized
    """
    if device_str == "auto":
        device_str = detect_best_device()

    if device_str not in ("cuda", "cpu", "mps"):
        raise ConfigError(f"Unsupported device: {device_str}")

    if device_str == "cuda" and not torch.cuda.is_available():
        raise ConfigError("CUDA requested but not available")

    if device_str == "mps" and not (
        hasattr(torch.backends, "mps") and torch.backends.mps.is_available()
    ):
        raise ConfigError("MPS requested but not available")

    return torch.device(device_str)


# =========================================================================== #
#                              Device Acquisition                             #
# =========================================================================== #


class DeviceManager:
    """
    One-time, idempotent device setup.

    The first successful ``acquire()`` / ``ensure_ready()`` resolves the
    device and runs a warm-up allocation on it. Every later call returns the
    cached device without repeating the setup. Concurrent awaiters share the
    single acquisition through an ``asyncio.Lock``, which binds to the
    first event loop that waits on it. A failed acquisition drops the lock.
    """

    def __init__(self, device: str = "auto"):
        self.requested = device
        self._device: Optional[torch.device] = None
        self._thread_lock = threading.Lock()
        self._async_lock: Optional[asyncio.Lock] = None

    @property
    def is_ready(self) -> bool:
        return self._device is not None

    @property
    def device(self) -> torch.device:
        if self._device is None:
            raise RuntimeError("Device not acquired yet; call acquire() or ensure_ready() first")
        return self._device

    def acquire(self) -> torch.device:
        """Blocking acquisition; returns the cached device on repeat calls."""
        with self._thread_lock:
            if self._device is None:
                device = to_device_obj(self.requested)
                # Warm-up allocation initializes the backend context
                torch.empty(1, device=device)
                self._device = device
                logger.debug(f"Device ready: {device}")
        return self._device

    async def ensure_ready(self) -> torch.device:
        """Awaitable acquisition for event-driven hosts."""
        if self._device is not None:
            return self._device

        if self._async_lock is None:
            self._async_lock = asyncio.Lock()

        try:
            async with self._async_lock:
                if self._device is None:
                    await asyncio.to_thread(self.acquire)
        except Exception:
            self._async_lock = None
            raise
        return self._device
