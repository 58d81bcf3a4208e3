# ragparsers/core/functions/table_processor.py
"""
Table Processor - Markdown Table Rendering

Serializes a TableMatrix (see table_extractor) into a Markdown pipe-table.

================================================================================
RENDERING RULES
================================================================================

Header:
    - Source marked a header row       → first row is the header
    - First row's first slot owns text → blank header row is synthesized
    - Otherwise                        → first row is the header
    The separator row ("|---|---|") is emitted exactly once, after the header.

Slots:
    | Slot                                   | Rendering        |
    |----------------------------------------|------------------|
    | owns a cell                            | "|" + cell text  |
    | owns a cell, vertical CONTINUE         | "|" + text + ^^  |
    | no owner, occupied, horizontal CONTINUE| "|<<"            |
    | no owner, occupied, vertical CONTINUE  | "|^^"            |
    | anything else (padding included)       | "|"              |

Continuation markers sit on the slot where a merge continues, never on the
merge origin.

Worked example:
    rows: [Merged (2 columns)], [Tall (2 rows), x], [(continue), y]

    | | |
    |---|---|
    |Merged|<<|
    |Tall|x|
    |^^|y|
================================================================================
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from ragparsers.core.functions.table_extractor import (
    GridSlot,
    MergeType,
    RawCell,
    TableMatrix,
)
from ragparsers.core.functions.utils import escape_table_cell

logger = logging.getLogger("document-processor")

CellTextFunc = Callable[[RawCell], str]


@dataclass
class TableProcessorConfig:
    """Configuration for Markdown table rendering."""
    cell_delimiter: str = "|"
    blank_header_cell: str = " "
    separator_segment: str = "---"
    vertical_marker: str = "^^"
    horizontal_marker: str = "<<"


def default_cell_text(cell: RawCell) -> str:
    """Cell text when the content reference is already text."""
    if cell.content is None:
        return ""
    return str(cell.content)


class TableProcessor:
    """
    Markdown table renderer.

    Usage:
        processor = TableProcessor()
        markdown = processor.format_table(matrix)
        markdown = processor.format_table(matrix, cell_text=render_docx_cell)
    """

    def __init__(self, config: Optional[TableProcessorConfig] = None):
        self.config = config or TableProcessorConfig()
        self.logger = logging.getLogger("document-processor")

    def format_table(self, matrix: TableMatrix, cell_text: Optional[CellTextFunc] = None) -> str:
        """
        Render the matrix as a Markdown pipe-table followed by a blank line.

        Args:
            matrix: Occupancy matrix from build_cell_matrix()
            cell_text: Renders the content of an owning cell. Called once per
                merge origin, in row-major order.

        Returns:
            Markdown table text, "" for a table without columns
        """
        column_count = matrix.column_count
        if column_count == 0:
            return ""

        cell_text = cell_text or default_cell_text
        lines: List[str] = []
        header_pending = True

        for row_idx, row in enumerate(matrix.rows):
            if row_idx == 0 and not matrix.has_header and row and row[0].cell is not None:
                lines.append(self.build_blank_header(column_count))
                lines.append(self.build_header_separator(column_count))
                header_pending = False

            lines.append(self._format_row(matrix, row_idx, column_count, cell_text))

            if header_pending:
                lines.append(self.build_header_separator(column_count))
                header_pending = False

        return "\n".join(lines) + "\n\n"

    def build_blank_header(self, column_count: int) -> str:
        """Blank header row: "| | |" for two columns."""
        delimiter = self.config.cell_delimiter
        return delimiter + (self.config.blank_header_cell + delimiter) * column_count

    def build_header_separator(self, column_count: int) -> str:
        """Header separator row: "|---|---|" for two columns."""
        delimiter = self.config.cell_delimiter
        return delimiter + (self.config.separator_segment + delimiter) * column_count

    def _format_row(
        self,
        matrix: TableMatrix,
        row_idx: int,
        column_count: int,
        cell_text: CellTextFunc,
    ) -> str:
        parts = [
            self._format_slot(matrix.slot(row_idx, col_idx), cell_text)
            for col_idx in range(column_count)
        ]
        return "".join(parts) + self.config.cell_delimiter

    def _format_slot(self, slot: GridSlot, cell_text: CellTextFunc) -> str:
        delimiter = self.config.cell_delimiter

        if slot.occupied and slot.cell is not None:
            text = escape_table_cell(cell_text(slot.cell))
            if slot.vertical_merge == MergeType.CONTINUE:
                text += self.config.vertical_marker
            return delimiter + text

        if slot.occupied and slot.horizontal_merge == MergeType.CONTINUE:
            return delimiter + self.config.horizontal_marker

        if slot.occupied and slot.vertical_merge == MergeType.CONTINUE:
            return delimiter + self.config.vertical_marker

        return delimiter


def create_table_processor(config: Optional[TableProcessorConfig] = None) -> TableProcessor:
    """
    Factory function to create a TableProcessor.

    Args:
        config: Table rendering configuration
    """
    return TableProcessor(config)


__all__ = [
    "TableProcessor",
    "TableProcessorConfig",
    "CellTextFunc",
    "default_cell_text",
    "create_table_processor",
]
