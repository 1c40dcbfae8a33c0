# pipeline/trim_image.py
import logging
import os
from pathlib import Path
from typing import Union

from dotenv import load_dotenv

from ..errors import BandsawError, EmptyImageError
from ..models.crop_result import CropResult, TrimFailure
from ..services.bounds_service import BoundsService
from ..services.cropping_service import CroppingService
from ..services.image_service import ImageService
from ..services.padding_service import PaddingService

# env‑vars
load_dotenv()
LEGACY_CLIP = os.getenv("BANDSAW_LEGACY_CLIP", "false").lower() == "true"

logger = logging.getLogger(__name__)


def trim_image(
    path: Union[str, Path],
    padding: float = 0,
    *,
    image_service: ImageService = ImageService(),
    bounds_service: BoundsService = BoundsService(),
    padding_service: PaddingService = PaddingService(),
    cropping_service: CroppingService = CroppingService(),
    exclusive_bounds: bool = not LEGACY_CLIP,
) -> CropResult:
    """
    Crop one PNG to its opaque pixels and overwrite it in place:
        • decode the file into RGBA pixels
        • scan for the box around every pixel with alpha > 0
        • grow the box by *padding* and clamp it to the canvas
        • cut the box out, encode, and swap the file in atomically
    Geometry in the returned CropResult is measured against the original
    canvas.

    With exclusive_bounds=False the inclusive right/bottom extrema are
    used as exclusive crop edges, which drops the last opaque column and
    row. That reproduces the legacy clipping behaviour; padding >= 1
    compensates for it.

    Raises:
        EmptyImageError: the image is fully transparent; the file is not touched.
        BandsawError: any other decode/encode/write failure.
    """
    img = image_service.load(path)
    natural_height, natural_width = image_service.get_image_dimensions(img)

    box = bounds_service.scan(img)
    if box is None:
        raise EmptyImageError(f"{img.path} is fully transparent, nothing to crop")
    logger.debug("%s: opaque extrema %s", img.path.name, box.as_bounds())

    if exclusive_bounds:
        box = box.to_exclusive()
    box = padding_service.apply(box, padding, natural_width, natural_height)

    cropped = cropping_service.crop(img, box)
    image_service.save(cropped)

    result = CropResult.from_box(img.path, box, natural_width, natural_height)
    logger.info(
        "Trimmed %s: %sx%s -> %sx%s (bounds %s)",
        result.full_name, natural_width, natural_height, result.width, result.height, result.geometric_bounds,
    )
    return result


def trim_image_safe(path: Union[str, Path], padding: float = 0, **kwargs) -> CropResult | TrimFailure:
    """
    Same as trim_image, but a failure for this one file comes back as a
    TrimFailure instead of an exception so sibling images keep going.
    """
    try:
        return trim_image(path, padding, **kwargs)
    except BandsawError as err:
        logger.error("Failed to trim %s: %s: %s", path, type(err).__name__, err)
        return TrimFailure(path=str(path), error=type(err).__name__, message=str(err))
