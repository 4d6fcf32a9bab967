"""
Image File Decoding for Inference.

Opens an image with PIL, converts it to luma or RGB to match the configured
channel count, resizes it with nearest-neighbour filtering and returns a
``[C, H, W]`` uint8 array ready for ``normalize_pixels``.
"""

from pathlib import Path
from typing import FrozenSet, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..core.exceptions import ImageDecodeError

IMAGE_EXTENSIONS: FrozenSet[str] = frozenset(
    {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tif", ".tiff", ".webp"}
)


def is_image_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS


def load_image(path: Path, shape: Tuple[int, int, int]) -> np.ndarray:
    """
    Decodes ``path`` into a ``shape`` (C, H, W) uint8 array.

    Raises:
        ImageDecodeError: If the file cannot be opened or decoded.
    """
    channels, height, width = shape
    mode = "L" if channels == 1 else "RGB"
    try:
        with Image.open(path) as img:
            img = img.convert(mode).resize((width, height), Image.NEAREST)
            pixels = np.asarray(img, dtype=np.uint8)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageDecodeError(f"Cannot decode image {path}: {e}") from e

    if pixels.ndim == 2:
        return pixels[None, :, :].copy()
    return np.ascontiguousarray(pixels.transpose(2, 0, 1))
