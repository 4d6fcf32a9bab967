"""
Interactive Per-Domain Inference Service.

``ModelService`` is the stateful façade an event-driven host talks to. It is
constructed synchronously without I/O on the parameters, loads lazily, and
answers probability and arg-max queries on flat pixel buffers using the same
normalization as training.

Architecture:
    - Domain Registry: ``SERVICE_DOMAINS`` lists the supported domains; each
      ``ModelService.for_domain`` call builds an independent instance
    - Single Decode: concurrent ``load()`` callers share one decode guarded by
      an ``asyncio.Lock``
    - Off-loop Work: blob decoding and forward passes run in a worker thread

Example:
    >>> service = ModelService.for_domain("mnist")
    >>> probs = await service.inference([0.0] * 784)
    >>> service.get_class_name(int(max(range(10), key=probs.__getitem__)))
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import asyncio
import logging
from typing import List, Optional, Sequence, Tuple

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
import numpy as np
import torch

# =========================================================================== #
#                                Internal Imports                             #
# =========================================================================== #
from ..core.environment import DeviceManager
from ..core.exceptions import InferenceError, UnsupportedDataset
from ..core.io import load_checkpoint_blob
from ..core.paths import LOGGER_NAME
from ..data_handler import normalize_pixels
from ..models import ImageClassifier, get_model
from .resources import EmbeddedResources, get_embedded_resources

logger = logging.getLogger(LOGGER_NAME)

SERVICE_DOMAINS: Tuple[str, ...] = ("mnist", "cifar10")

UNKNOWN_CLASS = "unknown"


class ModelService:
    """
    Lazy-loading classifier service for one dataset domain.

    An instance belongs to the event loop that first awaits it: the load lock
    is created lazily and binds to that loop. Use one instance per loop.

    Args:
        resources: Embedded config and checkpoint blob of the domain.
        device: Requested device (``auto`` by default).
    """

    def __init__(self, resources: EmbeddedResources, device: str = "auto"):
        self.resources = resources
        self.config = resources.config
        self.mean, self.std = self.config.normalization_vectors()
        self._device_manager = DeviceManager(device)
        self._model: Optional[ImageClassifier] = None
        self._load_lock: Optional[asyncio.Lock] = None

    @classmethod
    def for_domain(cls, domain: str, device: str = "auto") -> "ModelService":
        if domain not in SERVICE_DOMAINS:
            raise UnsupportedDataset(
                f"No inference service for '{domain}'. Available: {list(SERVICE_DOMAINS)}"
            )
        return cls(get_embedded_resources(domain), device=device)

    # --- Loading ---

    def is_loaded(self) -> bool:
        return self._model is not None

    async def load(self) -> None:
        """
        Decodes the embedded blob into a frozen model. Idempotent.

        Raises:
            CheckpointError: Empty, corrupt or mismatched blob.
        """
        if self._model is not None:
            return

        if self._load_lock is None:
            self._load_lock = asyncio.Lock()

        try:
            async with self._load_lock:
                if self._model is not None:
                    return
                device = await self._device_manager.ensure_ready()
                self._model = await asyncio.to_thread(self._decode, device)
                logger.info(f"{self.config.name} model loaded on {device}")
        except Exception:
            # A failed load leaves no lock behind, so a later loop can retry
            self._load_lock = None
            raise

    def _decode(self, device: torch.device) -> ImageClassifier:
        model = get_model(self.config, device, verbose=False)
        load_checkpoint_blob(model, self.resources.blob, device)
        return model.frozen()

    # --- Queries ---

    def _prepare(self, pixels: Sequence[float]) -> torch.Tensor:
        buffer = np.asarray(pixels, dtype=np.float32).reshape(-1)
        expected = self.config.pixels_per_sample
        if buffer.size != expected:
            raise InferenceError(
                f"{self.config.name}: expected {expected} pixel values "
                f"{self.config.input_shape}, got {buffer.size}"
            )
        images = torch.from_numpy(buffer).reshape(1, *self.config.input_shape)
        return normalize_pixels(images, self.mean, self.std).to(self._device_manager.device)

    def _forward(self, pixels: Sequence[float]) -> torch.Tensor:
        if self._model is None:
            raise InferenceError(f"{self.config.name} model is not loaded")
        with torch.no_grad():
            return self._model(self._prepare(pixels))

    async def inference(self, pixels: Sequence[float]) -> List[float]:
        """Per-class softmax probabilities, in class-index order."""
        await self.load()
        logits = await asyncio.to_thread(self._forward, pixels)
        return torch.softmax(logits, dim=1)[0].cpu().tolist()

    async def inference_top1(self, pixels: Sequence[float]) -> int:
        """Arg-max class index (no softmax)."""
        await self.load()
        logits = await asyncio.to_thread(self._forward, pixels)
        return int(logits.argmax(dim=1).item())

    def get_class_name(self, index: int) -> str:
        return self.config.class_name(index, placeholder=UNKNOWN_CLASS)

    def get_class_names(self) -> List[str]:
        return list(self.config.class_names)
