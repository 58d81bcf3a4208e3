# ragparsers/core/document_processor.py
"""DocumentProcessor - Document Processing Class

Main document processing class for the ragparsers library.
Provides a unified interface for converting documents (DOCX, XLSX, PDF,
WebVTT) to Markdown.

This class is the recommended entry point when using the library.

Usage Example:
    from ragparsers.core.document_processor import DocumentProcessor

    processor = DocumentProcessor({"extract_images": True})

    # Convert a file
    result = processor.extract("report.docx")
    print(result.output)
    for image in result.images:
        save(image.id, image.raw_bytes)

    # Convert in-memory data
    result = processor.extract_bytes(data, "xlsx")
"""

import io
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, TypedDict, Union

from ragparsers.core.functions.extract_output import ExtractOptions, ExtractOutput
from ragparsers.core.functions.img_processor import ImageProcessor, NamingStrategy
from ragparsers.core.processor.base_handler import BaseHandler
from ragparsers.core.processor.docx_handler import DOCXHandler
from ragparsers.core.processor.excel_handler import ExcelHandler
from ragparsers.core.processor.pdf_handler import PDFHandler
from ragparsers.core.processor.vtt_handler import VTTHandler

logger = logging.getLogger("document-processor")


class CurrentFile(TypedDict, total=False):
    """
    TypedDict containing file information.

    Standard structure for reading files at binary level and passing to handlers.

    Attributes:
        file_path: Absolute path of the file ("<memory>" for bytes input)
        file_name: File name (including extension)
        file_extension: File extension (lowercase, without dot)
        file_data: Binary data of the file
        file_stream: BytesIO stream (reusable)
        file_size: File size in bytes
    """
    file_path: str
    file_name: str
    file_extension: str
    file_data: bytes
    file_stream: io.BytesIO
    file_size: int


class DocumentProcessor:
    """
    ragparsers Main Document Processing Class

    Attributes:
        options: ExtractOptions used for every conversion
        supported_extensions: List of supported file extensions

    Example:
        >>> processor = DocumentProcessor()
        >>> processor.extract("notes.vtt").output
        '> [00:00:01.000 / 00:00:02.000]\\n\\n**Alice:** Hi'
    """

    # === Supported File Type Classifications ===
    DOCUMENT_TYPES = frozenset(['docx', 'pdf'])
    DATA_TYPES = frozenset(['xlsx', 'xlsm'])
    TRANSCRIPT_TYPES = frozenset(['vtt'])

    def __init__(
        self,
        config: Optional[Union[ExtractOptions, Dict[str, Any]]] = None,
        *,
        image_naming_strategy: Optional[Union[NamingStrategy, str]] = None,
    ):
        """
        Initialize DocumentProcessor.

        Args:
            config: ExtractOptions or configuration dictionary
                   - Dict: keys of ExtractOptions, unknown keys are ignored
                   - None: Use default settings
            image_naming_strategy: Identifier strategy for extracted images
                   - Default: "uuid"
                   - "sequential" gives deterministic ids (tests, snapshots)
        """
        if isinstance(config, ExtractOptions):
            self._options = config
        else:
            self._options = ExtractOptions.from_dict(config)

        self._logger = logging.getLogger("document-processor.processor")
        self._image_processor = ImageProcessor(
            naming_strategy=image_naming_strategy or NamingStrategy.UUID
        )
        self._handler_registry: Optional[Dict[str, BaseHandler]] = None

    # =========================================================================
    # Public Properties
    # =========================================================================

    @property
    def options(self) -> ExtractOptions:
        """Current extraction options."""
        return self._options

    @property
    def supported_extensions(self) -> List[str]:
        """List of all supported file extensions."""
        return sorted(self.DOCUMENT_TYPES | self.DATA_TYPES | self.TRANSCRIPT_TYPES)

    # =========================================================================
    # Public Methods
    # =========================================================================

    def extract(
        self,
        file_path: Union[str, Path],
        file_extension: Optional[str] = None,
    ) -> ExtractOutput:
        """
        Convert a file to Markdown.

        Args:
            file_path: File path
            file_extension: File extension (if None, auto-extracted from file_path)

        Returns:
            ExtractOutput

        Raises:
            FileNotFoundError: If file cannot be found
            ValueError: If file format is not supported
            DocumentStructureError: If the document structure is unusable
        """
        file_path_str = str(file_path)

        if not os.path.exists(file_path_str):
            raise FileNotFoundError(f"File not found: {file_path_str}")

        if file_extension is None:
            file_extension = os.path.splitext(file_path_str)[1]

        ext = self._normalize_extension(file_extension)
        handler = self._get_handler(ext)

        self._logger.info(f"Extracting: {file_path_str} (ext={ext})")
        current_file = self._create_current_file(file_path_str, ext)
        return handler.extract(current_file)

    def extract_bytes(
        self,
        data: bytes,
        file_extension: str,
        file_name: Optional[str] = None,
    ) -> ExtractOutput:
        """
        Convert in-memory document data to Markdown.

        Args:
            data: Document binary data
            file_extension: File extension selecting the handler
            file_name: Name used in log messages

        Returns:
            ExtractOutput
        """
        ext = self._normalize_extension(file_extension)
        handler = self._get_handler(ext)

        data = bytes(data or b"")
        current_file: CurrentFile = {
            "file_path": "<memory>",
            "file_name": file_name or f"document.{ext}",
            "file_extension": ext,
            "file_data": data,
            "file_stream": io.BytesIO(data),
            "file_size": len(data),
        }
        return handler.extract(current_file)

    def is_supported(self, file_extension: str) -> bool:
        """
        Check if a file extension is supported.

        Args:
            file_extension: File extension

        Returns:
            True if supported
        """
        ext = file_extension.lower().lstrip('.')
        return ext in self.supported_extensions

    # =========================================================================
    # Private Methods
    # =========================================================================

    def _normalize_extension(self, file_extension: str) -> str:
        ext = (file_extension or "").lower().lstrip('.')
        if not self.is_supported(ext):
            raise ValueError(f"Unsupported file format: {ext or '(none)'}")
        return ext

    def _get_handler_registry(self) -> Dict[str, BaseHandler]:
        """Build and cache handler registry."""
        if self._handler_registry is not None:
            return self._handler_registry

        handler_kwargs = {"config": self._options, "image_processor": self._image_processor}

        docx_handler = DOCXHandler(**handler_kwargs)
        excel_handler = ExcelHandler(**handler_kwargs)
        pdf_handler = PDFHandler(**handler_kwargs)
        vtt_handler = VTTHandler(**handler_kwargs)

        self._handler_registry = {
            'docx': docx_handler,
            'xlsx': excel_handler,
            'xlsm': excel_handler,
            'pdf': pdf_handler,
            'vtt': vtt_handler,
        }
        return self._handler_registry

    def _get_handler(self, ext: str) -> BaseHandler:
        handler = self._get_handler_registry().get(ext)
        if handler is None:
            raise ValueError(f"No handler available for extension: {ext}")
        return handler

    def _create_current_file(self, file_path: str, ext: str) -> CurrentFile:
        """
        Create a CurrentFile dict from a file path.

        Args:
            file_path: Path to the file
            ext: File extension (lowercase, without dot)

        Returns:
            CurrentFile dict containing file info and binary data
        """
        file_path = os.path.abspath(file_path)

        with open(file_path, 'rb') as f:
            file_data = f.read()

        return {
            "file_path": file_path,
            "file_name": os.path.basename(file_path),
            "file_extension": ext,
            "file_data": file_data,
            "file_stream": io.BytesIO(file_data),
            "file_size": len(file_data),
        }

    # =========================================================================
    # Context Manager Support
    # =========================================================================

    def __enter__(self) -> "DocumentProcessor":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        pass

    def __repr__(self) -> str:
        return f"DocumentProcessor(supported_extensions={self.supported_extensions})"


# === Module-level Convenience Functions ===

def create_processor(
    config: Optional[Union[ExtractOptions, Dict[str, Any]]] = None,
    *,
    image_naming_strategy: Optional[Union[NamingStrategy, str]] = None,
) -> DocumentProcessor:
    """
    Create a DocumentProcessor instance.

    Args:
        config: ExtractOptions or configuration dictionary
        image_naming_strategy: Identifier strategy for extracted images
    """
    return DocumentProcessor(config, image_naming_strategy=image_naming_strategy)


__all__ = [
    "DocumentProcessor",
    "CurrentFile",
    "create_processor",
]
