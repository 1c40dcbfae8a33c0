from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List


@dataclass(frozen=True)
class BoundingBox:
    """
    Pixel-space rectangle, top-left origin, rows increasing downward.

    A box coming out of the scanner holds inclusive extrema
    (0 <= left <= right < width). Crop boxes treat right/bottom as
    exclusive, see to_exclusive(). A fully transparent image has no box
    at all (None), never a zero box.
    """
    top: int
    left: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def to_exclusive(self) -> BoundingBox:
        return replace(self, right=self.right + 1, bottom=self.bottom + 1)

    def as_bounds(self) -> List[int]:
        """[left, top, right, bottom], the geometricBounds ordering."""
        return [self.left, self.top, self.right, self.bottom]
