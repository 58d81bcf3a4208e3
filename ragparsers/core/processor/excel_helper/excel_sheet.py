# ragparsers/core/processor/excel_helper/excel_sheet.py
"""
Excel Sheet Processor - Worksheet to Markdown

Renders the used range of an openpyxl worksheet as a Markdown table whose
header carries the column letters and whose first column carries the row
numbers:

    ||A|B|
    |---|---|---|
    |**1**|Name|Age|
    |**2**|Ada|36|

The used range is the bounding box of the cells holding a value. Rows
without any value inside it are left out.

Cell formatting:
    | Value              | Markdown                       |
    |--------------------|--------------------------------|
    | None               | empty                          |
    | bool               | TRUE / FALSE                   |
    | int / float        | 3, 2.5 (integral floats: no .0)|
    | datetime / date    | MM/DD/YYYY HH:MM:SS            |
    | time               | HH:MM:SS                       |
    | text               | '"' doubled when with_quotes   |
"""
import datetime
import logging
from dataclasses import dataclass
from typing import Any, List, NamedTuple, Optional

from openpyxl.utils import get_column_letter

from ragparsers.core.functions.utils import escape_table_cell

logger = logging.getLogger("document-processor")

DATETIME_FORMAT = "%m/%d/%Y %H:%M:%S"
TIME_FORMAT = "%H:%M:%S"


class UsedRange(NamedTuple):
    """Bounding box of the cells holding a value (1-based, inclusive)"""
    min_row: int
    min_col: int
    max_row: int
    max_col: int


@dataclass
class ExcelSheetConfig:
    """
    Worksheet rendering options.

    Attributes:
        with_quotes: Double '"' characters in text cells
        cell_delimiter: Markdown cell delimiter
    """
    with_quotes: bool = True
    cell_delimiter: str = "|"


def find_used_range(ws) -> Optional[UsedRange]:
    """
    Used range of a worksheet.

    Returns:
        UsedRange, or None when no cell holds a value
    """
    min_row = min_col = max_row = max_col = None

    for row in ws.iter_rows():
        for cell in row:
            if cell.value is None or cell.value == "":
                continue
            r, c = cell.row, cell.column
            min_row = r if min_row is None else min(min_row, r)
            max_row = r if max_row is None else max(max_row, r)
            min_col = c if min_col is None else min(min_col, c)
            max_col = c if max_col is None else max(max_col, c)

    if min_row is None:
        return None
    return UsedRange(min_row, min_col, max_row, max_col)


def format_number(value: Any) -> str:
    """Culture-independent number text."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def format_cell_value(value: Any, with_quotes: bool = True) -> str:
    """
    Markdown text of one cell value.

    Args:
        value: openpyxl cell value (data_only workbook)
        with_quotes: Double '"' characters in text values

    Returns:
        Single-line cell text
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, datetime.datetime):
        return value.strftime(DATETIME_FORMAT)
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time()).strftime(DATETIME_FORMAT)
    if isinstance(value, datetime.time):
        return value.strftime(TIME_FORMAT)

    text = str(value)
    if with_quotes:
        text = text.replace('"', '""')
    return escape_table_cell(text)


class ExcelSheetProcessor:
    """
    Worksheet renderer.

    Usage:
        processor = ExcelSheetProcessor(ExcelSheetConfig(with_quotes=False))
        markdown = processor.format_sheet(ws)
    """

    def __init__(self, config: Optional[ExcelSheetConfig] = None):
        self.config = config or ExcelSheetConfig()

    def format_sheet(self, ws) -> str:
        """
        Markdown table of a worksheet's used range.

        Returns:
            Table lines joined by newlines, "" for an empty worksheet
        """
        used = find_used_range(ws)
        if used is None:
            logger.debug(f"Worksheet '{ws.title}' is empty")
            return ""

        d = self.config.cell_delimiter
        column_count = used.max_col - used.min_col + 1
        lines: List[str] = []

        letters = [get_column_letter(c) for c in range(used.min_col, used.max_col + 1)]
        lines.append(d + d + d.join(letters) + d)
        lines.append(d + ("---" + d) * (column_count + 1))

        for row in ws.iter_rows(
            min_row=used.min_row,
            max_row=used.max_row,
            min_col=used.min_col,
            max_col=used.max_col,
        ):
            values = [cell.value for cell in row]
            if all(v is None or v == "" for v in values):
                continue

            row_number = row[0].row
            cells = [format_cell_value(v, self.config.with_quotes) for v in values]
            lines.append(f"{d}**{row_number}**{d}" + d.join(cells) + d)

        return "\n".join(lines)


__all__ = [
    'UsedRange',
    'ExcelSheetConfig',
    'ExcelSheetProcessor',
    'find_used_range',
    'format_number',
    'format_cell_value',
]
