import io

import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def sample_image_uint8():
    """Returns a simple 100x100 uint8 RGB image."""
    img = np.zeros((100, 100, 3), dtype=np.uint8)
    img[:50, :50] = [255, 0, 0]    # Red quadrant
    img[:50, 50:] = [0, 255, 0]    # Green quadrant
    img[50:, :50] = [0, 0, 255]    # Blue quadrant
    img[50:, 50:] = [255, 255, 0]  # Yellow quadrant
    return img


@pytest.fixture
def solid_image():
    """Factory for solid-color uint8 RGB images."""
    def make(color, width=32, height=24):
        img = np.zeros((height, width, 3), dtype=np.uint8)
        img[:, :] = color
        return img
    return make


@pytest.fixture
def png_bytes():
    """Encodes a uint8 RGB/RGBA array as PNG bytes."""
    def encode(array):
        buffer = io.BytesIO()
        Image.fromarray(array).save(buffer, format='PNG')
        return buffer.getvalue()
    return encode


@pytest.fixture
def decode_rgba():
    """Decodes encoded image bytes into a uint8 RGBA array."""
    def decode(data):
        with Image.open(io.BytesIO(data)) as img:
            return np.array(img.convert('RGBA'))
    return decode


@pytest.fixture
def store(tmp_path):
    """A key-value store in a temporary directory."""
    from pixelforge.io.storage import JsonKeyValueStore
    return JsonKeyValueStore(str(tmp_path / "storage.json"))
