"""
Test Suite for Image File Decoding used by the Inference Surfaces.
"""

# Third-Party Imports
import numpy as np
import pytest
from PIL import Image

# Internal Imports
from lab_vision.core.exceptions import ImageDecodeError
from lab_vision.data_handler import is_image_file, load_image


@pytest.mark.unit
def test_grayscale_decode_and_resize(tmp_path):
    path = tmp_path / "digit.png"
    Image.fromarray(np.full((16, 16), 200, dtype=np.uint8)).save(path)

    pixels = load_image(path, (1, 8, 8))

    assert pixels.shape == (1, 8, 8)
    assert pixels.dtype == np.uint8
    assert (pixels == 200).all()


@pytest.mark.unit
def test_rgb_image_converted_to_luma(tmp_path):
    path = tmp_path / "color.png"
    Image.new("RGB", (10, 10), (255, 255, 255)).save(path)

    pixels = load_image(path, (1, 8, 8))

    assert pixels.shape == (1, 8, 8)
    assert (pixels == 255).all()


@pytest.mark.unit
def test_rgb_decode_is_channel_major(tmp_path):
    path = tmp_path / "red.bmp"
    Image.new("RGB", (32, 32), (250, 10, 0)).save(path)

    pixels = load_image(path, (3, 32, 32))

    assert pixels.shape == (3, 32, 32)
    assert pixels[0].max() == 250
    assert pixels[1].max() == 10
    assert pixels[2].max() == 0


@pytest.mark.unit
def test_corrupt_image_raises(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image at all")

    with pytest.raises(ImageDecodeError, match="broken.png"):
        load_image(path, (1, 8, 8))


@pytest.mark.unit
def test_missing_image_raises_oserror_subclass(tmp_path):
    with pytest.raises(OSError):
        load_image(tmp_path / "nope.png", (1, 8, 8))


@pytest.mark.unit
def test_is_image_file_case_insensitive(tmp_path):
    upper = tmp_path / "A.PNG"
    upper.write_bytes(b"x")
    text = tmp_path / "notes.txt"
    text.write_text("x")

    assert is_image_file(upper)
    assert not is_image_file(text)
    assert not is_image_file(tmp_path)
