"""Pytest configuration.

Tests import the package from the repository root (e.g. `from bandsaw import trim`).
When running pytest from outside the repo the root isn't always on `sys.path`,
so it is added here. Shared PNG fixtures live here as well.
"""

import os
import sys

import numpy as np
import pytest
from PIL import Image as PILImage

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def rgba_canvas(width, height):
    return np.zeros((height, width, 4), dtype=np.uint8)


def square_pixels(width=1000, height=1000, x=50, y=50, size=100):
    """Transparent canvas with one fully opaque red square."""
    pixels = rgba_canvas(width, height)
    pixels[y:y + size, x:x + size] = (255, 0, 0, 255)
    return pixels


@pytest.fixture
def write_png(tmp_path):
    """Factory: write_png("a.png", pixels_or_pil_image) -> absolute Path."""
    def _write(name, image):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(image, np.ndarray):
            image = PILImage.fromarray(image)
        image.save(path, format="PNG")
        return path
    return _write


@pytest.fixture
def square_png(write_png):
    """The 1000x1000 canvas with a 100x100 opaque square at (50, 50)."""
    return write_png("square.png", square_pixels())
