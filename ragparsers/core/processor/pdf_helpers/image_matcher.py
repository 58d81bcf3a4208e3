"""
Image Matcher for PDF Handler

Associates page images with the text block they belong to.

Classification of one image against one block (y axis up, t = threshold):

    Above:  the image bottom edge is at or above the block top edge, closer
            than t.
    Below:  checked only when not above. Either the top edges or the bottom
            edges are closer than t, and the image is
              - under the block, its top edge closer than t to the block
                bottom edge, or
              - left of the block with vertical overlap, or
              - right of the block with vertical overlap.

The pool is never mutated: candidates are walked over a snapshot sorted by
top edge and the unmatched images are returned as a new tuple.
"""
import logging
from typing import Iterable, NamedTuple, Tuple

from ragparsers.core.processor.pdf_helpers.types import ImageElement, TextBlock

logger = logging.getLogger("document-processor")


class ImageMatch(NamedTuple):
    """Images placed around one block, plus the pool left for later blocks."""
    above: Tuple[ImageElement, ...]
    below: Tuple[ImageElement, ...]
    remaining: Tuple[ImageElement, ...]


def sort_pool(pool: Iterable[ImageElement]) -> Tuple[ImageElement, ...]:
    """Snapshot of the pool ordered by ascending top edge."""
    return tuple(sorted(pool, key=lambda image: image.bbox.top))


def is_above(block: TextBlock, image: ImageElement, threshold: float) -> bool:
    """The image sits directly above the block."""
    gap = image.bbox.bottom - block.bbox.top
    return gap >= 0 and gap < threshold


def is_near(block: TextBlock, image: ImageElement, threshold: float) -> bool:
    """The image sits directly under the block or beside it."""
    img, blk = image.bbox, block.bbox

    edges_close = (
        abs(img.top - blk.top) < threshold
        or abs(img.bottom - blk.bottom) < threshold
    )
    if not edges_close:
        return False

    under = img.top <= blk.bottom and blk.bottom - img.top < threshold
    left_of = img.right <= blk.left and img.overlaps_vertically(blk)
    right_of = img.left >= blk.right and img.overlaps_vertically(blk)

    return under or left_of or right_of


def match_images_to_block(
    block: TextBlock,
    pool: Iterable[ImageElement],
    threshold: float,
) -> ImageMatch:
    """
    Partition the pool into images above the block, below it, and the rest.

    Args:
        block: Text block in reading order
        pool: Images not placed yet
        threshold: Maximum distance in points, 0 never matches

    Returns:
        ImageMatch, each tuple ordered by ascending top edge
    """
    above = []
    below = []
    remaining = []

    for image in sort_pool(pool):
        if is_above(block, image, threshold):
            above.append(image)
        elif is_near(block, image, threshold):
            below.append(image)
        else:
            remaining.append(image)

    if above or below:
        logger.debug(
            f"[PDF] Block at top={block.bbox.top:.1f}: "
            f"{len(above)} image(s) above, {len(below)} below"
        )

    return ImageMatch(tuple(above), tuple(below), tuple(remaining))


__all__ = [
    "ImageMatch",
    "sort_pool",
    "is_above",
    "is_near",
    "match_images_to_block",
]
