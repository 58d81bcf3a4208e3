# ragparsers/core/processor/excel_handler.py
"""
Excel Handler - Excel Document Processor (XLSX/XLSM)

Key Features:
- One section per worksheet, introduced by the worksheet header template
- Used range rendered as a Markdown table (column letters, row numbers)
- Invariant number and date formatting
- Optional quote doubling in text cells

Worksheet details live in excel_helper.
"""
import logging
import zipfile
from typing import List, TYPE_CHECKING

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ragparsers.core.processor.base_handler import BaseHandler
from ragparsers.core.functions.exceptions import DocumentStructureError
from ragparsers.core.functions.extract_output import ExtractOutput

if TYPE_CHECKING:
    from ragparsers.core.document_processor import CurrentFile

from ragparsers.core.processor.excel_helper import (
    ExcelSheetConfig,
    ExcelSheetProcessor,
)

logger = logging.getLogger("document-processor")


class ExcelHandler(BaseHandler):
    """
    Excel Document Processing Handler

    Usage:
        handler = ExcelHandler(config={"with_quotes": False})
        result = handler.extract(current_file)
    """

    def extract(self, current_file: "CurrentFile") -> ExtractOutput:
        """
        Convert an XLSX workbook to Markdown.

        Args:
            current_file: CurrentFile dict containing file info and binary data

        Returns:
            ExtractOutput (Markdown only)

        Raises:
            DocumentStructureError: The workbook cannot be opened
        """
        file_path = current_file.get("file_path", "unknown")
        self.logger.info(f"XLSX processing: {file_path}")

        if not self.get_file_data(current_file):
            self.logger.warning(f"Empty XLSX stream: {file_path}")
            return ExtractOutput()

        try:
            wb = load_workbook(self.get_file_stream(current_file), data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError) as e:
            self.logger.debug(f"openpyxl could not open {file_path}: {e}")
            raise DocumentStructureError(f"The workbook is missing or unreadable: {file_path}") from e

        try:
            output = self._convert_workbook(wb)
        finally:
            wb.close()

        self.logger.info(f"XLSX processing completed: {len(wb.worksheets)} sheets")
        return ExtractOutput(output=output)

    def _convert_workbook(self, wb) -> str:
        sheet_processor = ExcelSheetProcessor(ExcelSheetConfig(with_quotes=self.options.with_quotes))
        template = self.options.worksheet_number_template
        result_parts: List[str] = []

        for ws in wb.worksheets:
            result_parts.append(template.replace("{name}", ws.title) + "\n")

            table = sheet_processor.format_sheet(ws)
            if table:
                result_parts.append(table + "\n")

        return "".join(result_parts).strip()


__all__ = ["ExcelHandler"]
