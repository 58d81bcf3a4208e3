# ragparsers/core/__init__.py
"""
Core - Document processing core module

Module structure:
- document_processor: Main DocumentProcessor class
- processor/: Per-format handlers
    - docx_handler: DOCX documents
    - excel_handler: XLSX workbooks
    - pdf_handler: PDF documents
    - vtt_handler: WebVTT transcripts
- functions/: Format independent utilities
    - table_extractor / table_processor: merged-cell tables to Markdown
    - img_processor: image records and placeholders

Usage Example:
    from ragparsers.core import DocumentProcessor
    from ragparsers.core.functions import build_cell_matrix, TableProcessor
"""

# === Main class ===
from ragparsers.core.document_processor import (
    DocumentProcessor,
    CurrentFile,
    create_processor,
)

__all__ = [
    "DocumentProcessor",
    "CurrentFile",
    "create_processor",
]
