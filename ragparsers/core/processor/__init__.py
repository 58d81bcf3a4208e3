# ragparsers/core/processor/__init__.py
"""
Processor - Document Type-specific Handler Module

Provides handlers for processing individual document formats.

Handler List:
- docx_handler: DOCX document processing
- excel_handler: Excel (XLSX/XLSM) document processing
- pdf_handler: PDF document processing
- vtt_handler: WebVTT transcript processing

Helper Modules (subdirectories):
- docx_helper/: DOCX processing helper
- excel_helper/: Excel processing helper
- pdf_helpers/: PDF processing helper

Usage Example:
    from ragparsers.core.processor import DOCXHandler
    result = DOCXHandler(config={"extract_images": True}).extract(current_file)
"""

from ragparsers.core.processor.base_handler import BaseHandler

# === Document Handlers ===
from ragparsers.core.processor.docx_handler import DOCXHandler
from ragparsers.core.processor.pdf_handler import PDFHandler

# === Data Handlers ===
from ragparsers.core.processor.excel_handler import ExcelHandler
from ragparsers.core.processor.vtt_handler import VTTHandler

__all__ = [
    "BaseHandler",
    "DOCXHandler",
    "PDFHandler",
    "ExcelHandler",
    "VTTHandler",
]
