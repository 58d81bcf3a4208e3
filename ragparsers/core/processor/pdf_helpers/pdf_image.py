"""
PDF image extraction helpers (PyMuPDF).

- extract_page_images(): images drawn on a page, with their placement
- render_page_png(): whole-page render for PageRef records
"""
import logging
from typing import Dict, List

import fitz

from ragparsers.core.processor.pdf_helpers.types import BoundingBox, ImageElement

logger = logging.getLogger("document-processor")


def _image_rects(page) -> Dict[int, List[tuple]]:
    """Placement rectangles of every image on the page, keyed by xref."""
    rects: Dict[int, List[tuple]] = {}
    for info in page.get_image_info(xrefs=True):
        xref = info.get("xref")
        bbox = info.get("bbox")
        if xref and bbox:
            rects.setdefault(xref, []).append(tuple(bbox))
    return rects


def extract_page_images(doc, page) -> List[ImageElement]:
    """
    Collect the images drawn on a page.

    An image drawn several times yields one element per placement. Images
    that cannot be read or have no placement are logged and skipped.

    Args:
        doc: fitz.Document
        page: fitz.Page of that document

    Returns:
        ImageElement list (unordered pool)
    """
    page_height = page.rect.height
    rects = _image_rects(page)
    elements: List[ImageElement] = []

    for img_info in page.get_images(full=True):
        xref = img_info[0]
        placements = rects.get(xref)
        if not placements:
            logger.debug(f"[PDF] Image xref {xref} on page {page.number + 1} has no placement, skipped")
            continue

        try:
            base_image = doc.extract_image(xref)
        except (RuntimeError, ValueError) as e:
            logger.warning(f"[PDF] Failed to read image xref {xref} on page {page.number + 1}: {e}")
            continue

        image_data = base_image.get("image") if base_image else None
        if not image_data:
            logger.warning(f"[PDF] Empty image xref {xref} on page {page.number + 1}, skipped")
            continue

        for index, rect in enumerate(placements):
            elements.append(ImageElement(
                id=f"xref-{xref}-{index}",
                bbox=BoundingBox.from_top_down(rect, page_height),
                data=image_data,
                format=base_image.get("ext", ""),
            ))

    return elements


def render_page_png(page, zoom: float = 2.0) -> bytes:
    """
    Render a page to PNG bytes.

    Args:
        page: fitz.Page
        zoom: Scale factor (2.0 renders at 144 dpi)
    """
    matrix = fitz.Matrix(zoom, zoom)
    pix = page.get_pixmap(matrix=matrix)
    return pix.tobytes("png")


__all__ = [
    "extract_page_images",
    "render_page_png",
]
