# ragparsers/core/processor/docx_helper/docx_image.py
"""
DOCX image extraction

Collects the images referenced by drawings (a:blip) and legacy VML pictures
(v:imagedata) inside an element and turns them into ImageRef records.
- extract_images: every image of a paragraph or table cell
- image_format_from_content_type: "image/png" -> "png"
"""
import logging
from typing import Iterator, List, Optional

from docx.document import Document as DocxDocument
from docx.oxml.ns import qn

from ragparsers.core.functions.extract_output import ImageRef
from ragparsers.core.functions.img_processor import ImageProcessor
from ragparsers.core.processor.docx_helper.docx_constants import (
    ATTR_REL_EMBED,
    ATTR_REL_ID,
    NAMESPACES,
)

logger = logging.getLogger("document-processor")


def image_format_from_content_type(content_type: Optional[str]) -> Optional[str]:
    """Format tag of an image part, None when the content type has no subtype."""
    if not content_type or '/' not in content_type:
        return None
    subtype = content_type.split('/', 1)[1].strip().lower()
    return subtype or None


def _iter_image_rel_ids(elem) -> Iterator[str]:
    for blip in elem.iterfind('.//a:blip', NAMESPACES):
        rel_id = blip.get(ATTR_REL_EMBED) or blip.get(qn('r:link'))
        if rel_id:
            yield rel_id

    for imagedata in elem.iterfind('.//v:imagedata', NAMESPACES):
        rel_id = imagedata.get(ATTR_REL_ID)
        if rel_id:
            yield rel_id


def extract_images(
    elem,
    doc: DocxDocument,
    image_processor: ImageProcessor,
) -> List[ImageRef]:
    """
    Extract the images referenced inside an element.

    Images whose part is missing, external or unreadable are logged and
    skipped.

    Args:
        elem: w:p or w:tc element
        doc: python-docx Document
        image_processor: ImageProcessor of the current conversion

    Returns:
        ImageRef list, in document order
    """
    refs: List[ImageRef] = []
    rels = doc.part.rels

    for rel_id in _iter_image_rel_ids(elem):
        rel = rels.get(rel_id)
        if rel is None or rel.is_external:
            logger.warning(f"Image relationship {rel_id} not found in package, skipped")
            continue

        try:
            part = rel.target_part
            image_format = image_format_from_content_type(getattr(part, 'content_type', None))
            image_ref = image_processor.create_image_ref(part.blob, image_format)
        except Exception as e:
            logger.warning(f"Error reading image {rel_id}, skipped: {e}")
            continue

        if image_ref is not None:
            refs.append(image_ref)

    return refs


__all__ = [
    'extract_images',
    'image_format_from_content_type',
]
