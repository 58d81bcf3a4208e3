# ragparsers/core/functions/extract_output.py
"""
Extraction Options and Output Records

Defines the immutable per-call configuration and the result records returned
by every handler.

- ExtractOptions: Extraction switches (images, tables, comments, ...)
- ImageRef: One extracted image (id, format, Markdown placeholder, raw bytes)
- PageRef: One rendered page image (PDF only)
- ExtractOutput: Markdown text plus the image/page records

Usage Example:
    from ragparsers.core.functions.extract_output import ExtractOptions

    options = ExtractOptions(extract_images=True)
    options = ExtractOptions.from_dict({"extract_images": True})
"""
import logging
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

logger = logging.getLogger("document-processor")

DEFAULT_WORKSHEET_TEMPLATE = '\n# Worksheet "{name}"\n'
DEFAULT_PROXIMITY_THRESHOLD = 60.0


@dataclass(frozen=True)
class ExtractOptions:
    """
    Extraction options shared by all handlers.

    Attributes:
        extract_images: Include image placeholders and image bytes (DOCX, PDF)
        extract_tables: Process table elements instead of skipping them (DOCX, PDF)
        extract_page_images: Render every page as an image (PDF)
        extract_comments: Include comment markers and comment text (DOCX)
        extract_revision_content: Include deleted-revision text (DOCX)
        with_quotes: Escape '"' as '""' in text cells (XLSX)
        worksheet_number_template: Sheet section header, '{name}' is replaced (XLSX)
        proximity_threshold: Maximum distance (points) between an image and a
            text block for them to be associated (PDF)
        page_image_zoom: Zoom factor used when rendering page images (PDF)
    """
    extract_images: bool = False
    extract_tables: bool = True
    extract_page_images: bool = False
    extract_comments: bool = False
    extract_revision_content: bool = False
    with_quotes: bool = True
    worksheet_number_template: str = DEFAULT_WORKSHEET_TEMPLATE
    proximity_threshold: float = DEFAULT_PROXIMITY_THRESHOLD
    page_image_zoom: float = 2.0

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]] = None) -> "ExtractOptions":
        """
        Build options from a configuration dictionary.

        Unknown keys are ignored. A None template falls back to the default.
        """
        if not config:
            return cls()

        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in config.items() if k in known}
        ignored = sorted(set(config) - known)
        if ignored:
            logger.debug(f"Ignoring unknown extraction options: {ignored}")

        if values.get("worksheet_number_template") is None:
            values.pop("worksheet_number_template", None)

        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "ExtractOptions":
        """Return a copy with some options replaced."""
        return replace(self, **overrides)


@dataclass(frozen=True)
class ImageRef:
    """
    Extracted image record.

    Attributes:
        id: Stable identifier ("<uuid>.<format>")
        format: Image format name (e.g. "png", "jpeg")
        markdown_raw: Placeholder text inserted in the Markdown output
        raw_bytes: Image binary data
    """
    id: str
    format: str
    markdown_raw: str
    raw_bytes: bytes = field(repr=False)


@dataclass(frozen=True)
class PageRef:
    """
    Rendered page record (PDF only).

    Attributes:
        id: Stable identifier
        page_number: Page number, starts at 1
        format: Image format (e.g. "png")
        markdown_raw: Placeholder text referencing the page image
        raw_bytes: Image binary data
    """
    id: str
    page_number: int
    format: str
    markdown_raw: str
    raw_bytes: bytes = field(repr=False)


@dataclass
class ExtractOutput:
    """
    Result of one document conversion.

    Attributes:
        output: Markdown text, stripped of leading/trailing whitespace
        images: Extracted images, in document order
        pages: Rendered pages, in page order (PDF only)
    """
    output: str = ""
    images: List[ImageRef] = field(default_factory=list)
    pages: List[PageRef] = field(default_factory=list)


__all__ = [
    "ExtractOptions",
    "ExtractOutput",
    "ImageRef",
    "PageRef",
    "DEFAULT_WORKSHEET_TEMPLATE",
    "DEFAULT_PROXIMITY_THRESHOLD",
]
