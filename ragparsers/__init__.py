"""
ragparsers - Document to Markdown conversion for retrieval pipelines.

Converts DOCX, XLSX, PDF and WebVTT documents to Markdown, reconstructing
merged-cell tables and placing images next to the text they belong to.

Usage Example:
    from ragparsers import DocumentProcessor

    processor = DocumentProcessor({"extract_images": True})
    result = processor.extract("report.docx")
    print(result.output)
"""

from ragparsers.core.document_processor import DocumentProcessor, create_processor
from ragparsers.core.functions.exceptions import DocumentStructureError
from ragparsers.core.functions.extract_output import (
    ExtractOptions,
    ExtractOutput,
    ImageRef,
    PageRef,
)

__version__ = "0.1.0"

__all__ = [
    "DocumentProcessor",
    "create_processor",
    "DocumentStructureError",
    "ExtractOptions",
    "ExtractOutput",
    "ImageRef",
    "PageRef",
    "__version__",
]
