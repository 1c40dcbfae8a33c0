import logging
from pathlib import Path
from typing import Union

import numpy as np

from ..models.image import Image
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)


class ImageService:
    """I/O helpers.  No bounds logic, no padding rules."""
    def __init__(self, image_repository: ImageRepository | None = None):
        self.image_repository = image_repository or ImageRepository()

    def create_image(self, pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        return self.image_repository.create_image(pixels, path)

    def load(self, path: str | Path) -> Image:
        """Load a single PNG from disk into an Image object."""
        return self.image_repository.load(path)

    def save(self, image: Image) -> None:
        """
        Business-level method to overwrite the image at its own path.
        """
        self.image_repository.save(image)

    def get_image_dimensions(self, img: Image):
        return self.image_repository.retrieve_image_dimensions(img)

    def crop_pixels(self, img: Image, bound_r, bound_l, bound_t, bound_b) -> np.ndarray:
        width = bound_r - bound_l
        height = bound_b - bound_t
        logger.debug("crop bounds=(%s,%s,%s,%s) -> %sx%s", bound_l, bound_t, bound_r, bound_b, width, height)

        if bound_l >= bound_r or bound_t >= bound_b:
            img_h, img_w = img.pixels.shape[:2]
            raise ValueError(
                f"Invalid crop bounds left={bound_l}, top={bound_t}, right={bound_r}, bottom={bound_b} "
                f"on {img_w}x{img_h} image would create {width}x{height} image"
            )

        return img.pixels[bound_t:bound_b, bound_l:bound_r].copy()
