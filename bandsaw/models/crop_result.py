from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .bounding_box import BoundingBox


@dataclass(frozen=True)
class CropResult:
    """
    Data object describing one finished crop.
    Distances (left/top/right/bottom) are measured from the original
    canvas edges, geometric_bounds are pixel coordinates.
    """
    name: str            # File name without extension
    full_name: str       # File name with extension
    path: str            # Absolute path that was rewritten
    left: int
    top: int
    right: int
    bottom: int
    width: int           # Crop width
    height: int          # Crop height
    natural_width: int   # Original width
    natural_height: int  # Original height
    geometric_bounds: List[int] = field(default_factory=list)

    @classmethod
    def from_box(cls, path: Path, box: BoundingBox, natural_width: int, natural_height: int) -> CropResult:
        path = Path(path)
        return cls(
            name=path.stem,
            full_name=path.name,
            path=str(path),
            left=box.left,
            top=box.top,
            right=natural_width - box.right,
            bottom=natural_height - box.bottom,
            width=box.width,
            height=box.height,
            natural_width=natural_width,
            natural_height=natural_height,
            geometric_bounds=box.as_bounds(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "fullName": self.full_name,
            "path": self.path,
            "left": self.left,
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
            "width": self.width,
            "height": self.height,
            "naturalWidth": self.natural_width,
            "naturalHeight": self.natural_height,
            "geometricBounds": list(self.geometric_bounds),
        }


@dataclass(frozen=True)
class TrimFailure:
    """
    Per-item error marker, sits in the result list where the CropResult
    would have been.
    """
    path: str
    error: str    # Error kind, e.g. "DecodeError"
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "error": self.error, "message": self.message}
