"""
PDF table extraction (PyMuPDF find_tables)

Detected tables become TextBlocks holding a Markdown table, so they take part
in reading order and image placement like any other block. Cells a merged
region covers come back empty from PyMuPDF and render as empty cells.
"""
import logging
from typing import List, Optional, Sequence

from ragparsers.core.functions.table_extractor import RawCell, build_cell_matrix
from ragparsers.core.functions.table_processor import TableProcessor
from ragparsers.core.processor.pdf_helpers.types import BoundingBox, TextBlock

logger = logging.getLogger("document-processor")


def rows_to_raw_cells(rows: Sequence[Sequence[Optional[str]]]) -> List[List[RawCell]]:
    """PyMuPDF table rows -> RawCell rows (None -> empty cell)."""
    return [[RawCell(content=value or "") for value in row] for row in rows]


def extract_table_blocks(page, table_processor: Optional[TableProcessor] = None) -> List[TextBlock]:
    """
    Tables of a page as Markdown text blocks.

    Args:
        page: fitz.Page
        table_processor: Markdown table renderer

    Returns:
        TextBlock list in detection order, [] when detection fails
    """
    table_processor = table_processor or TableProcessor()
    page_height = page.rect.height

    try:
        tables = page.find_tables().tables
    except (RuntimeError, ValueError) as e:
        logger.warning(f"[PDF] Table detection failed on page {page.number + 1}: {e}")
        return []

    blocks: List[TextBlock] = []
    for table in tables:
        rows = table.extract()
        if not rows:
            continue

        header = getattr(table, "header", None)
        has_header = header is not None and not header.external

        matrix = build_cell_matrix(rows_to_raw_cells(rows), has_header=has_header)
        markdown = table_processor.format_table(matrix)
        if not markdown:
            continue

        blocks.append(TextBlock(
            bbox=BoundingBox.from_top_down(table.bbox, page_height),
            text=markdown,
        ))

    if blocks:
        logger.debug(f"[PDF] Page {page.number + 1}: {len(blocks)} table(s)")
    return blocks


__all__ = [
    "rows_to_raw_cells",
    "extract_table_blocks",
]
