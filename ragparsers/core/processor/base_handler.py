# ragparsers/core/processor/base_handler.py
"""
BaseHandler - Abstract base class for document processing handlers

Defines the base interface for all document handlers.
Holds the extraction options and the ImageProcessor configuration passed
from DocumentProcessor so that internal methods can reuse them.

Usage Example:
    class PDFHandler(BaseHandler):
        def extract(self, current_file: CurrentFile) -> ExtractOutput:
            # Access self.options, self.logger, self.new_image_processor()
            ...
"""
import io
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TYPE_CHECKING, Union

from ragparsers.core.functions.extract_output import ExtractOptions, ExtractOutput
from ragparsers.core.functions.img_processor import ImageProcessor
from ragparsers.core.functions.table_processor import TableProcessor

if TYPE_CHECKING:
    from ragparsers.core.document_processor import CurrentFile

logger = logging.getLogger("document-processor")


class BaseHandler(ABC):
    """
    Abstract base class for document handlers.

    All handlers inherit from this class. Options and the image processor are
    passed at creation and stay read-only; every extract() call builds its own
    result so one handler instance can serve several documents.

    Attributes:
        options: ExtractOptions shared by all calls
        image_processor: ImageProcessor whose configuration each call reuses
        table_processor: Markdown table renderer
        logger: Logging instance
    """

    def __init__(
        self,
        config: Optional[Union[ExtractOptions, Dict[str, Any]]] = None,
        image_processor: Optional[ImageProcessor] = None,
        table_processor: Optional[TableProcessor] = None,
    ):
        """
        Initialize BaseHandler.

        Args:
            config: ExtractOptions or configuration dictionary
            image_processor: ImageProcessor instance (passed from DocumentProcessor)
            table_processor: TableProcessor instance
        """
        if isinstance(config, ExtractOptions):
            self._options = config
        else:
            self._options = ExtractOptions.from_dict(config)
        self._image_processor = image_processor or ImageProcessor()
        self._table_processor = table_processor or TableProcessor()
        self._logger = logging.getLogger(f"document-processor.{self.__class__.__name__}")

    @property
    def options(self) -> ExtractOptions:
        """Extraction options."""
        return self._options

    @property
    def image_processor(self) -> ImageProcessor:
        """ImageProcessor instance."""
        return self._image_processor

    @property
    def table_processor(self) -> TableProcessor:
        """TableProcessor instance."""
        return self._table_processor

    @property
    def logger(self) -> logging.Logger:
        """Logger instance."""
        return self._logger

    def new_image_processor(self) -> ImageProcessor:
        """
        ImageProcessor for a single conversion.

        Shares the configured templates and naming strategy, but starts a
        fresh sequential counter.
        """
        return ImageProcessor(config=self._image_processor.config)

    @abstractmethod
    def extract(self, current_file: "CurrentFile") -> ExtractOutput:
        """
        Convert a document to Markdown.

        Args:
            current_file: CurrentFile dict containing file info and binary data

        Returns:
            ExtractOutput
        """
        pass

    def get_file_stream(self, current_file: "CurrentFile") -> io.BytesIO:
        """
        Get a fresh BytesIO stream from current_file.

        Resets the stream position to the beginning for reuse.

        Args:
            current_file: CurrentFile dict

        Returns:
            BytesIO stream ready for reading
        """
        stream = current_file.get("file_stream")
        if stream is not None:
            stream.seek(0)
            return stream
        # Fallback: create new stream from file_data
        return io.BytesIO(current_file.get("file_data", b""))

    def get_file_data(self, current_file: "CurrentFile") -> bytes:
        """Binary content of current_file, b"" when absent."""
        data = current_file.get("file_data")
        if data is not None:
            return data
        return self.get_file_stream(current_file).getvalue()


__all__ = ["BaseHandler"]
