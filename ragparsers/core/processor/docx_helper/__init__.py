# ragparsers/core/processor/docx_helper/__init__.py
"""
DOCX Helper module

DOCX processing utilities, split by feature.

Module layout:
- docx_constants: XML namespaces and tags (NAMESPACES, ...)
- docx_styles: Heading / TOC style classification
- docx_paragraph: Paragraph run rendering (StyledRun, PlainText, Hyperlink, DeletedRun)
- docx_comments: Comment numbering and formatting
- docx_image: Image extraction
- docx_table: Table reading and Markdown conversion
"""

# Constants
from ragparsers.core.processor.docx_helper.docx_constants import (
    ElementType,
    NAMESPACES,
)

# Styles
from ragparsers.core.processor.docx_helper.docx_styles import (
    StyleInfo,
    load_style_table,
    classify_paragraph,
    paragraph_style_id,
    heading_level,
)

# Paragraph
from ragparsers.core.processor.docx_helper.docx_paragraph import (
    StyledRun,
    PlainText,
    Hyperlink,
    DeletedRun,
    RunContext,
    iter_paragraph_children,
    render_paragraph_text,
    paragraph_plain_text,
)

# Comments
from ragparsers.core.processor.docx_helper.docx_comments import (
    CommentInfo,
    CommentRef,
    CommentTracker,
    load_comments,
    format_markers,
    format_comment_line,
)

# Image
from ragparsers.core.processor.docx_helper.docx_image import (
    extract_images,
    image_format_from_content_type,
)

# Table
from ragparsers.core.processor.docx_helper.docx_table import (
    TableRows,
    read_table_rows,
    build_table_matrix,
    process_table_element,
)


__all__ = [
    # Constants
    'ElementType',
    'NAMESPACES',
    # Styles
    'StyleInfo',
    'load_style_table',
    'classify_paragraph',
    'paragraph_style_id',
    'heading_level',
    # Paragraph
    'StyledRun',
    'PlainText',
    'Hyperlink',
    'DeletedRun',
    'RunContext',
    'iter_paragraph_children',
    'render_paragraph_text',
    'paragraph_plain_text',
    # Comments
    'CommentInfo',
    'CommentRef',
    'CommentTracker',
    'load_comments',
    'format_markers',
    'format_comment_line',
    # Image
    'extract_images',
    'image_format_from_content_type',
    # Table
    'TableRows',
    'read_table_rows',
    'build_table_matrix',
    'process_table_element',
]
