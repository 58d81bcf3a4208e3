# ragparsers/core/processor/docx_handler.py
"""
DOCX Handler - DOCX Document Processor

Key Features:
- Document order preservation (body element traversal)
- Headings from heading styles, table-of-contents paragraphs skipped
- Bold / italic runs, hyperlinks, tracked deletions
- Tables with horizontal and vertical merges (Markdown pipe-tables)
- Comments (inline markers, quote lines, closing summary)
- Inline image extraction (ImageRef records + Markdown placeholders)

All processing is done via python-docx with lxml element access.

Class-based Handler:
- DOCXHandler class inherits from BaseHandler to manage options/image_processor
- Internal methods access via self
"""
import logging
import zipfile
from typing import List, TYPE_CHECKING

from docx import Document
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.opc.exceptions import PackageNotFoundError
from lxml import etree

# Base handler
from ragparsers.core.processor.base_handler import BaseHandler
from ragparsers.core.functions.exceptions import DocumentStructureError
from ragparsers.core.functions.extract_output import ExtractOutput, ImageRef
from ragparsers.core.functions.img_processor import ImageProcessor
from ragparsers.core.functions.table_extractor import RawCell

if TYPE_CHECKING:
    from ragparsers.core.document_processor import CurrentFile

from ragparsers.core.processor.docx_helper import (
    # Constants
    ElementType,
    NAMESPACES,
    # Styles
    load_style_table,
    classify_paragraph,
    paragraph_style_id,
    heading_level,
    # Paragraph
    RunContext,
    render_paragraph_text,
    paragraph_plain_text,
    # Comments
    CommentTracker,
    load_comments,
    format_markers,
    format_comment_line,
    # Image
    extract_images,
    # Table
    process_table_element,
)

logger = logging.getLogger("document-processor")

PARAGRAPH_END = "\n\n"


class _DocxConversion:
    """State of a single DOCX conversion"""

    def __init__(self, handler: "DOCXHandler", doc):
        self.handler = handler
        self.doc = doc
        self.options = handler.options
        self.image_processor: ImageProcessor = handler.new_image_processor()
        self.images: List[ImageRef] = []

        self.styles = load_style_table(doc)
        hyperlinks = {
            rel_id: rel.target_ref
            for rel_id, rel in doc.part.rels.items()
            if rel.is_external and rel.reltype == RT.HYPERLINK
        }
        self.run_ctx = RunContext(
            hyperlinks=hyperlinks,
            extract_revision_content=self.options.extract_revision_content,
        )
        # Cells never carry revision content
        self.cell_ctx = RunContext(hyperlinks=hyperlinks)

        self.comments = CommentTracker(load_comments(doc)) if self.options.extract_comments else None

    def _add_images(self, elem) -> List[str]:
        if not self.options.extract_images:
            return []
        refs = extract_images(elem, self.doc, self.image_processor)
        self.images.extend(refs)
        return [ref.markdown_raw for ref in refs]

    def paragraph(self, para_elem) -> str:
        style = classify_paragraph(para_elem, self.styles)
        if style.is_toc:
            return ""

        parts: List[str] = []

        if style.is_heading:
            title = paragraph_plain_text(para_elem).strip()
            if title:
                level = heading_level(paragraph_style_id(para_elem))
                parts.append("#" * level + " " + title + PARAGRAPH_END)
        else:
            text = render_paragraph_text(para_elem, self.run_ctx).strip()
            refs = self.comments.references(para_elem) if self.comments else []
            text += format_markers(refs)

            if text:
                parts.append(text + PARAGRAPH_END)
            for ref in refs:
                parts.append(format_comment_line(ref) + PARAGRAPH_END)

        for placeholder in self._add_images(para_elem):
            parts.append(placeholder + PARAGRAPH_END)

        return "".join(parts)

    def cell_text(self, cell: RawCell) -> str:
        tc_elem = cell.content
        if tc_elem is None:
            return ""

        lines = []
        for para_elem in tc_elem.iterfind('.//w:p', NAMESPACES):
            text = render_paragraph_text(para_elem, self.cell_ctx).strip()
            if text:
                lines.append(text)
        lines.extend(self._add_images(tc_elem))
        return "\n".join(lines)

    def table(self, tbl_elem) -> str:
        return process_table_element(
            tbl_elem,
            cell_text=self.cell_text,
            table_processor=self.handler.table_processor,
        )

    def run(self, body) -> ExtractOutput:
        result_parts: List[str] = []
        total_tables = 0

        for body_elem in body:
            # XML comments and processing instructions
            if not isinstance(body_elem.tag, str):
                continue
            local_tag = etree.QName(body_elem).localname

            if local_tag == ElementType.PARAGRAPH.value:
                result_parts.append(self.paragraph(body_elem))

            elif local_tag == ElementType.TABLE.value:
                if not self.options.extract_tables:
                    continue
                table_md = self.table(body_elem)
                if table_md:
                    total_tables += 1
                    result_parts.append(table_md)

        if self.comments:
            summary = self.comments.format_summary()
            if summary:
                result_parts.append("\n" + summary)

        self.handler.logger.info(
            f"DOCX processing completed: {total_tables} tables, {len(self.images)} images"
        )
        return ExtractOutput(output="".join(result_parts).strip(), images=self.images)


class DOCXHandler(BaseHandler):
    """
    DOCX Document Processing Handler

    Inherits from BaseHandler to manage options and image_processor at instance level.

    Usage:
        handler = DOCXHandler(config={"extract_images": True})
        result = handler.extract(current_file)
    """

    def extract(self, current_file: "CurrentFile") -> ExtractOutput:
        """
        Convert a DOCX file to Markdown.

        Args:
            current_file: CurrentFile dict containing file info and binary data

        Returns:
            ExtractOutput (Markdown, images)

        Raises:
            DocumentStructureError: The package or its main document part is unusable
        """
        file_path = current_file.get("file_path", "unknown")
        self.logger.info(f"DOCX processing: {file_path}")

        if not self.get_file_data(current_file):
            self.logger.warning(f"Empty DOCX stream: {file_path}")
            return ExtractOutput()

        doc = self._open_document(current_file)

        body = doc.element.body
        if body is None:
            raise DocumentStructureError("The document body is missing.")

        return _DocxConversion(self, doc).run(body)

    def _open_document(self, current_file: "CurrentFile"):
        file_path = current_file.get("file_path", "unknown")
        try:
            # Use BytesIO stream to avoid path encoding issues
            return Document(self.get_file_stream(current_file))
        except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
            self.logger.debug(f"python-docx could not open {file_path}: {e}")
            raise DocumentStructureError(
                f"The main document part is missing or unreadable: {file_path}"
            ) from e


__all__ = ["DOCXHandler"]
