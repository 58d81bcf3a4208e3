"""
Excel Helper Module

Module Structure:
- excel_sheet: Worksheet used range and Markdown rendering (ExcelSheetProcessor)
"""

from ragparsers.core.processor.excel_helper.excel_sheet import (
    UsedRange,
    ExcelSheetConfig,
    ExcelSheetProcessor,
    find_used_range,
    format_cell_value,
)

__all__ = [
    'UsedRange',
    'ExcelSheetConfig',
    'ExcelSheetProcessor',
    'find_used_range',
    'format_cell_value',
]
