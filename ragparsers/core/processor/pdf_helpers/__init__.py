"""
PDF Helpers

- types: BoundingBox, TextBlock, ImageElement
- image_matcher: Image-to-block proximity classification
- page_assembler: Page Markdown assembly with image placement
- pdf_image: Image extraction and page rendering (PyMuPDF)
- pdf_table: Table detection as Markdown blocks (PyMuPDF)
"""

from ragparsers.core.processor.pdf_helpers.types import (
    BoundingBox,
    TextBlock,
    ImageElement,
)
from ragparsers.core.processor.pdf_helpers.image_matcher import (
    ImageMatch,
    match_images_to_block,
)
from ragparsers.core.processor.pdf_helpers.page_assembler import (
    PageAssembly,
    assemble_page,
)
from ragparsers.core.processor.pdf_helpers.pdf_image import (
    extract_page_images,
    render_page_png,
)
from ragparsers.core.processor.pdf_helpers.pdf_table import (
    rows_to_raw_cells,
    extract_table_blocks,
)

__all__ = [
    "BoundingBox",
    "TextBlock",
    "ImageElement",
    "ImageMatch",
    "match_images_to_block",
    "PageAssembly",
    "assemble_page",
    "extract_page_images",
    "render_page_png",
    "rows_to_raw_cells",
    "extract_table_blocks",
]
