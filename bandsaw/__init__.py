"""bandsaw: crop PNG images to their opaque pixels, in place."""

from .errors import (
    BandsawError,
    DecodeError,
    DegenerateCropError,
    EmptyImageError,
    EncodeError,
    ReadError,
    WriteError,
)
from .models.bounding_box import BoundingBox
from .models.crop_result import CropResult, TrimFailure
from .pipeline.trim import trim

__all__ = [
    "trim",
    "BoundingBox",
    "CropResult",
    "TrimFailure",
    "BandsawError",
    "DecodeError",
    "DegenerateCropError",
    "EmptyImageError",
    "EncodeError",
    "ReadError",
    "WriteError",
]

__version__ = "1.0.0"
