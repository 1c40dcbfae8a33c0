from ..errors import DegenerateCropError
from ..models.bounding_box import BoundingBox
from ..models.image import Image
from .image_service import ImageService


class CroppingService:
    def __init__(self, image_service: ImageService | None = None):
        self.image_service = image_service or ImageService()

    def crop(self, img: Image, box: BoundingBox) -> Image:
        """
        Copy the [left, right) x [top, bottom) region into a new Image that
        keeps the source path. The source pixels are left untouched.
        """
        if box.width <= 0 or box.height <= 0:
            raise DegenerateCropError(
                f"Crop box {box.as_bounds()} has zero area ({box.width}x{box.height})"
            )

        new_pixels = self.image_service.crop_pixels(img, bound_r=box.right, bound_l=box.left,
                                                    bound_t=box.top, bound_b=box.bottom)

        return self.image_service.create_image(new_pixels, img.path)
