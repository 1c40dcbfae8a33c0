import logging
import math

from ..models.bounding_box import BoundingBox

logger = logging.getLogger(__name__)


class PaddingService:
    """
    Grows a bounding box by a margin and keeps it inside the canvas.
    """

    @staticmethod
    def coerce_padding(value) -> float:
        """
        Turn user input ("10", 10, 2.5, ...) into a number. Anything that
        isn't a finite number logs a warning and becomes 0 so the crop
        still happens, just without padding.
        """
        try:
            padding = float(value)
        except (TypeError, ValueError):
            logger.warning("Padding of %r [%s] is not a number, using 0", value, type(value).__name__)
            return 0.0

        if not math.isfinite(padding):
            logger.warning("Padding of %r is not finite, using 0", value)
            return 0.0
        return padding

    @staticmethod
    def clamp(value, lo, hi):
        if lo <= value <= hi:
            return value
        if value < lo:
            return lo
        return hi

    def apply(self, box: BoundingBox | None, padding: float, width: int, height: int) -> BoundingBox | None:
        """
        Subtract padding from top/left, add it to right/bottom, then clamp
        left/right into [0, width] and top/bottom into [0, height].

        Fractional padding rounds outward so the margin is never smaller
        than asked for.
        """
        if box is None:
            return None

        top = math.floor(box.top - padding)
        left = math.floor(box.left - padding)
        right = math.ceil(box.right + padding)
        bottom = math.ceil(box.bottom + padding)

        return BoundingBox(
            top=self.clamp(top, 0, height),
            left=self.clamp(left, 0, width),
            right=self.clamp(right, 0, width),
            bottom=self.clamp(bottom, 0, height),
        )
