"""
Batch Command-Line Inference.

``InferenceDispatcher`` restores exactly one structured checkpoint for the
architecture named by the config and reuses it for every input. A single
file yields one prediction; a directory is filtered to image files, sorted
lexicographically, and yields one row per file. A per-file failure is
reported inline and never aborts the remaining files.
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, TextIO

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
import torch

# =========================================================================== #
#                                Internal Imports                             #
# =========================================================================== #
from ..core.config import DatasetConfig
from ..core.exceptions import ImageDecodeError, LabVisionError
from ..core.io import load_checkpoint_file
from ..core.paths import LOGGER_NAME
from ..data_handler import is_image_file, load_image, normalize_pixels
from ..models import ImageClassifier, get_model

logger = logging.getLogger(LOGGER_NAME)


@dataclass(frozen=True)
class Prediction:
    index: int
    class_name: str


@dataclass(frozen=True)
class PredictionRow:
    path: Path
    prediction: Optional[Prediction] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_csv(self) -> str:
        if self.prediction is None:
            return f"{self.path},ERROR:{self.error},"
        return f"{self.path},{self.prediction.index},{self.prediction.class_name}"


class InferenceDispatcher:
    """
    Runs a trained classifier over image files.

    Args:
        cfg: Dataset configuration naming architecture and checkpoint.
        device: Target device.
        checkpoint_path: Override for ``cfg.model_path``.
        model: Already-trained classifier to use instead of reading a
            checkpoint (frozen on the way in).

    Raises:
        UnsupportedArchitecture: Unknown ``model.type`` (a ConfigError).
        CheckpointError: Missing or mismatched checkpoint.
    """

    def __init__(
        self,
        cfg: DatasetConfig,
        device: torch.device,
        checkpoint_path: Optional[Path] = None,
        model: Optional[ImageClassifier] = None,
    ):
        self.cfg = cfg
        self.device = device
        self.mean, self.std = cfg.normalization_vectors()

        if model is None:
            model = get_model(cfg, device, verbose=False)
            path = Path(checkpoint_path or cfg.model_path)
            load_checkpoint_file(model, path, device)
            logger.info(f"Loaded {cfg.model.type} checkpoint from {path}")
        self.model: ImageClassifier = model.frozen()

    def predict_file(self, path: Path) -> Prediction:
        """Decodes, normalizes and classifies one image."""
        pixels = load_image(Path(path), self.cfg.input_shape)
        images = torch.from_numpy(pixels).unsqueeze(0)
        images = normalize_pixels(images, self.mean, self.std).to(self.device)

        with torch.no_grad():
            index = int(self.model(images).argmax(dim=1).item())
        return Prediction(index=index, class_name=self.cfg.class_name(index))

    def predict_directory(self, directory: Path) -> List[PredictionRow]:
        """Classifies every image file in ``directory`` in lexicographic order."""
        files = sorted(p for p in Path(directory).iterdir() if is_image_file(p))
        rows: List[PredictionRow] = []
        for path in files:
            try:
                rows.append(PredictionRow(path=path, prediction=self.predict_file(path)))
            except LabVisionError as e:
                logger.debug(f"Inference failed for {path}: {e}")
                rows.append(PredictionRow(path=path, error=str(e)))
        return rows

    def run(
        self, path: Path, out: Optional[TextIO] = None, err: Optional[TextIO] = None
    ) -> int:
        """
        Prints predictions for a file or a directory.

        Returns:
            Number of inputs that failed.

        Raises:
            ImageDecodeError: If ``path`` is neither a file nor a directory,
                or a single file cannot be decoded.
        """
        out = out if out is not None else sys.stdout
        err = err if err is not None else sys.stderr
        path = Path(path)
        if path.is_dir():
            rows = self.predict_directory(path)
            if not rows:
                logger.info(f"No image files found in {path}")
                return 0
            print("File,Pred,Class", file=out)
            for row in rows:
                print(row.to_csv(), file=out if row.ok else err)
            return sum(1 for r in rows if not r.ok)

        if path.is_file():
            prediction = self.predict_file(path)
            print(f"Predicted: {prediction.index} ({prediction.class_name})", file=out)
            return 0

        raise ImageDecodeError(f"Input path is neither a file nor a directory: {path}")
