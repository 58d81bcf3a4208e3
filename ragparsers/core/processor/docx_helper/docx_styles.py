# ragparsers/core/processor/docx_helper/docx_styles.py
"""
DOCX style table

Classifies paragraph styles as headings or table-of-contents entries.

- load_style_table: styleId -> StyleInfo for every style of the document
- paragraph_style_id: pStyle of a paragraph, None when absent
- heading_level: Markdown heading level of a heading style id

A paragraph without properties or style simply has no classification.
"""
import logging
import re
from typing import Dict, NamedTuple, Optional

from docx.document import Document as DocxDocument

from ragparsers.core.processor.docx_helper.docx_constants import (
    ATTR_STYLE_ID,
    ATTR_VAL,
    NAMESPACES,
)

logger = logging.getLogger("document-processor")

_TRAILING_DIGIT = re.compile(r'(\d)$')


class StyleInfo(NamedTuple):
    """Heading / TOC classification of one style"""
    is_heading: bool
    is_toc: bool


NO_STYLE = StyleInfo(is_heading=False, is_toc=False)


def load_style_table(doc: DocxDocument) -> Dict[str, StyleInfo]:
    """
    Build the style table of a document.

    A style is a heading when its name contains "heading" and a TOC entry
    when it contains "toc" (case-insensitive, "heading 1", "toc 2", ...).

    Args:
        doc: python-docx Document

    Returns:
        styleId -> StyleInfo
    """
    table: Dict[str, StyleInfo] = {}

    for style_elem in doc.styles.element.findall('w:style', NAMESPACES):
        style_id = style_elem.get(ATTR_STYLE_ID)
        if not style_id:
            continue

        name_elem = style_elem.find('w:name', NAMESPACES)
        name = (name_elem.get(ATTR_VAL) or "") if name_elem is not None else ""
        name = name.lower()

        table[style_id] = StyleInfo(
            is_heading="heading" in name,
            is_toc="toc" in name,
        )

    logger.debug(f"Loaded {len(table)} DOCX styles")
    return table


def paragraph_style_id(para_elem) -> Optional[str]:
    """Style id of a paragraph, None when the paragraph has no pStyle."""
    p_style = para_elem.find('w:pPr/w:pStyle', NAMESPACES)
    if p_style is None:
        return None
    return p_style.get(ATTR_VAL)


def classify_paragraph(para_elem, styles: Dict[str, StyleInfo]) -> StyleInfo:
    """StyleInfo of a paragraph, NO_STYLE for unstyled or unknown styles."""
    style_id = paragraph_style_id(para_elem)
    if style_id is None:
        return NO_STYLE
    return styles.get(style_id, NO_STYLE)


def heading_level(style_id: Optional[str]) -> int:
    """
    Heading level from the trailing digit of the style id, one below it.

    Level 1 ("#") belongs to the document itself, so "Heading1" -> 2,
    "Heading3" -> 4, no trailing digit -> 1.
    """
    if not style_id:
        return 1
    match = _TRAILING_DIGIT.search(style_id)
    if not match:
        return 1
    return int(match.group(1)) + 1


__all__ = [
    'StyleInfo',
    'NO_STYLE',
    'load_style_table',
    'paragraph_style_id',
    'classify_paragraph',
    'heading_level',
]
