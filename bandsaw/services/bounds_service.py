import numpy as np

from ..models.bounding_box import BoundingBox
from ..models.image import Image


class BoundsService:
    """
    Finds the opaque region of an image.
    """

    @staticmethod
    def _alpha_mask(img: Image) -> np.ndarray:
        # Any alpha > 0 counts, not only fully opaque pixels.
        return img.pixels[:, :, 3] != 0

    def scan(self, img: Image) -> BoundingBox | None:
        """
        Args:
            img (Image): RGBA image.

        Returns:
            BoundingBox with inclusive extrema (top/bottom rows, left/right
            columns) covering every pixel with alpha != 0, or None when the
            image is fully transparent.
        """
        mask = self._alpha_mask(img)
        rows = np.flatnonzero(mask.any(axis=1))
        if rows.size == 0:
            return None
        cols = np.flatnonzero(mask.any(axis=0))

        return BoundingBox(
            top=int(rows[0]),
            left=int(cols[0]),
            right=int(cols[-1]),
            bottom=int(rows[-1]),
        )
