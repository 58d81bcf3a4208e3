"""
Page Assembler for PDF Handler

Interleaves image placeholders with the text blocks of one page.

For each block in reading order the images matched above it come first,
then the block text, then the images matched below it. Images no block
claimed are flushed at the end: an image whose bottom edge lies in the
upper half of the page goes to the start of the page, any other image to
the end.

Every placeholder written to the page comes from an ImageRef created by the
caller's factory, so each placed image has exactly one record.
"""
import logging
from typing import Callable, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from ragparsers.core.functions.extract_output import ImageRef
from ragparsers.core.processor.pdf_helpers.image_matcher import (
    match_images_to_block,
    sort_pool,
)
from ragparsers.core.processor.pdf_helpers.types import ImageElement, TextBlock

logger = logging.getLogger("document-processor")

ImageRefFactory = Callable[[ImageElement], Optional[ImageRef]]

BLOCK_SEPARATOR = "\n\n"


class PageAssembly(NamedTuple):
    """Markdown of one page and the image records it references, in output order."""
    markdown: str
    images: Tuple[ImageRef, ...]


def assemble_page(
    blocks: Sequence[TextBlock],
    pool: Iterable[ImageElement],
    page_height: float,
    threshold: float,
    create_ref: ImageRefFactory,
) -> PageAssembly:
    """
    Build the Markdown fragment of one page.

    Args:
        blocks: Text blocks in reading order
        pool: Images drawn on the page, in any order
        page_height: Page height in points
        threshold: Proximity threshold in points
        create_ref: Builds the ImageRef of an image, None to skip the image

    Returns:
        PageAssembly
    """
    remaining: Tuple[ImageElement, ...] = tuple(pool)
    body: List[str] = []
    body_refs: List[ImageRef] = []

    def emit_images(images: Iterable[ImageElement], parts: List[str], refs: List[ImageRef]) -> None:
        for image in images:
            ref = create_ref(image)
            if ref is None:
                continue
            parts.append(ref.markdown_raw)
            refs.append(ref)

    for block in blocks:
        match = match_images_to_block(block, remaining, threshold)
        remaining = match.remaining

        emit_images(match.above, body, body_refs)
        text = block.text.strip()
        if text:
            body.append(text)
        emit_images(match.below, body, body_refs)

    head: List[str] = []
    head_refs: List[ImageRef] = []
    tail: List[str] = []
    tail_refs: List[ImageRef] = []

    middle = page_height / 2
    for image in sort_pool(remaining):
        if image.bbox.bottom > middle:
            emit_images((image,), head, head_refs)
        else:
            emit_images((image,), tail, tail_refs)

    if remaining:
        logger.debug(
            f"[PDF] {len(remaining)} unmatched image(s): "
            f"{len(head)} placed at page start, {len(tail)} at page end"
        )

    markdown = BLOCK_SEPARATOR.join(head + body + tail)
    return PageAssembly(markdown, tuple(head_refs + body_refs + tail_refs))


__all__ = [
    "PageAssembly",
    "ImageRefFactory",
    "assemble_page",
]
