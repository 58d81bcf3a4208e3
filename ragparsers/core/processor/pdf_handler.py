# ragparsers/core/processor/pdf_handler.py
"""
PDF Handler - PDF Document Processor

Key Features:
- Text extraction in reading order (PyMuPDF text blocks)
- Table extraction (PyMuPDF find_tables, Markdown tables)
- Image extraction placed next to the text block they belong to
- Optional page rendering (PageRef records)

Per page:
    1. Text blocks in reading order; blocks covered by a table are dropped
    2. Tables inserted in reading order as Markdown blocks
    3. Images matched to blocks by proximity (page_assembler)
"""
import logging
from typing import List, TYPE_CHECKING

import fitz  # PyMuPDF

from ragparsers.core.processor.base_handler import BaseHandler
from ragparsers.core.functions.exceptions import DocumentStructureError
from ragparsers.core.functions.extract_output import ExtractOutput, ImageRef, PageRef
from ragparsers.core.functions.img_processor import ImageProcessor

if TYPE_CHECKING:
    from ragparsers.core.document_processor import CurrentFile

from ragparsers.core.processor.pdf_helpers import (
    BoundingBox,
    TextBlock,
    ImageElement,
    assemble_page,
    extract_page_images,
    render_page_png,
)
from ragparsers.core.processor.pdf_helpers.pdf_table import extract_table_blocks

logger = logging.getLogger("document-processor")

# get_text("blocks") block type of text blocks
TEXT_BLOCK_TYPE = 0


def read_text_blocks(page) -> List[TextBlock]:
    """Text blocks of a page, in PyMuPDF reading order."""
    page_height = page.rect.height
    blocks: List[TextBlock] = []

    for x0, y0, x1, y1, text, _block_no, block_type in page.get_text("blocks", sort=True):
        if block_type != TEXT_BLOCK_TYPE or not text.strip():
            continue
        blocks.append(TextBlock(
            bbox=BoundingBox.from_top_down((x0, y0, x1, y1), page_height),
            text=text.strip(),
        ))

    return blocks


def merge_reading_order(text_blocks: List[TextBlock], table_blocks: List[TextBlock]) -> List[TextBlock]:
    """
    Insert table blocks into the text reading order.

    Text blocks overlapping a table are dropped. Each table goes before the
    first remaining text block that starts lower on the page.
    """
    if not table_blocks:
        return list(text_blocks)

    kept = [
        block for block in text_blocks
        if not any(block.bbox.intersects(table.bbox) for table in table_blocks)
    ]

    ordered: List[TextBlock] = []
    pending = sorted(table_blocks, key=lambda t: (-t.bbox.top, t.bbox.left))
    for block in kept:
        while pending and pending[0].bbox.top >= block.bbox.top:
            ordered.append(pending.pop(0))
        ordered.append(block)
    ordered.extend(pending)

    return ordered


class PDFHandler(BaseHandler):
    """
    PDF Document Processing Handler

    Usage:
        handler = PDFHandler(config={"extract_images": True})
        result = handler.extract(current_file)
    """

    def extract(self, current_file: "CurrentFile") -> ExtractOutput:
        """
        Convert a PDF document to Markdown.

        Args:
            current_file: CurrentFile dict containing file info and binary data

        Returns:
            ExtractOutput (Markdown, images, pages)

        Raises:
            DocumentStructureError: The document cannot be opened
        """
        file_path = current_file.get("file_path", "unknown")
        self.logger.info(f"PDF processing: {file_path}")

        data = self.get_file_data(current_file)
        if not data:
            self.logger.warning(f"Empty PDF stream: {file_path}")
            return ExtractOutput()

        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except (RuntimeError, ValueError) as e:
            self.logger.debug(f"PyMuPDF could not open {file_path}: {e}")
            raise DocumentStructureError(f"The PDF document is unreadable: {file_path}") from e

        try:
            page_count = doc.page_count
            result = self._convert_document(doc)
        finally:
            doc.close()

        self.logger.info(
            f"PDF processing completed: {page_count} pages, "
            f"{len(result.images)} images, {len(result.pages)} page renders"
        )
        return result

    def _convert_document(self, doc) -> ExtractOutput:
        image_processor = self.new_image_processor()
        page_parts: List[str] = []
        images: List[ImageRef] = []
        pages: List[PageRef] = []

        for page in doc:
            markdown, page_images = self._convert_page(doc, page, image_processor)
            if markdown:
                page_parts.append(markdown)
            images.extend(page_images)

            if self.options.extract_page_images:
                png = render_page_png(page, zoom=self.options.page_image_zoom)
                pages.append(image_processor.create_page_ref(page.number + 1, png))

        return ExtractOutput(
            output="\n\n".join(page_parts).strip(),
            images=images,
            pages=pages,
        )

    def _convert_page(self, doc, page, image_processor: ImageProcessor):
        text_blocks = read_text_blocks(page)

        table_blocks: List[TextBlock] = []
        if self.options.extract_tables:
            table_blocks = extract_table_blocks(page, self.table_processor)

        blocks = merge_reading_order(text_blocks, table_blocks)

        pool: List[ImageElement] = []
        if self.options.extract_images:
            pool = extract_page_images(doc, page)

        def create_ref(image: ImageElement):
            return image_processor.create_image_ref(image.data, image.format or None)

        assembly = assemble_page(
            blocks,
            pool,
            page_height=page.rect.height,
            threshold=self.options.proximity_threshold,
            create_ref=create_ref,
        )
        return assembly.markdown, list(assembly.images)


__all__ = ["PDFHandler", "read_text_blocks", "merge_reading_order"]
