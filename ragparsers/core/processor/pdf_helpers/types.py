"""
PDF Handler Types

Geometry and page element types used by the PDF placement engine.

All coordinates are PDF user space: origin at the bottom-left corner of the
page, y axis pointing up. PyMuPDF reports rectangles top-down, so they are
converted with BoundingBox.from_top_down().
"""

from dataclasses import dataclass, field
from typing import Sequence, Tuple


# ============================================================================
# Geometry
# ============================================================================

@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned rectangle on a page (y axis up).

    top >= bottom for a well-formed box.
    """
    left: float
    bottom: float
    right: float
    top: float

    @classmethod
    def from_top_down(cls, rect: Sequence[float], page_height: float) -> "BoundingBox":
        """
        Convert a PyMuPDF rectangle (x0, y0, x1, y1 with y growing downward).

        Args:
            rect: fitz.Rect or 4-sequence
            page_height: Height of the page the rectangle lives on
        """
        x0, y0, x1, y1 = (float(v) for v in tuple(rect)[:4])
        return cls(
            left=min(x0, x1),
            bottom=page_height - max(y0, y1),
            right=max(x0, x1),
            top=page_height - min(y0, y1),
        )

    @property
    def top_left(self) -> Tuple[float, float]:
        return (self.left, self.top)

    @property
    def top_right(self) -> Tuple[float, float]:
        return (self.right, self.top)

    @property
    def bottom_left(self) -> Tuple[float, float]:
        return (self.left, self.bottom)

    @property
    def bottom_right(self) -> Tuple[float, float]:
        return (self.right, self.bottom)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    def overlaps_vertically(self, other: "BoundingBox") -> bool:
        """The vertical extents share at least one point."""
        return self.bottom <= other.top and other.bottom <= self.top

    def intersects(self, other: "BoundingBox") -> bool:
        """The rectangles share a region of positive area."""
        return (
            self.left < other.right and other.left < self.right
            and self.bottom < other.top and other.bottom < self.top
        )


# ============================================================================
# Page elements
# ============================================================================

@dataclass(frozen=True)
class TextBlock:
    """Text block in reading order (paragraph, table rendered as Markdown, ...)"""
    bbox: BoundingBox
    text: str


@dataclass(frozen=True)
class ImageElement:
    """
    Image drawn on a page.

    Attributes:
        id: Identifier unique within the page (e.g. "xref-12-0")
        bbox: Placement rectangle
        data: Raw image bytes
        format: Format tag reported by the container (e.g. "png", "jpeg")
    """
    id: str
    bbox: BoundingBox
    data: bytes = field(repr=False, default=b"")
    format: str = ""


__all__ = [
    "BoundingBox",
    "TextBlock",
    "ImageElement",
]
