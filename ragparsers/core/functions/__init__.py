# ragparsers/core/functions/__init__.py
"""
Functions - Common Utility Functions Module

Format independent building blocks shared by every handler.

Module Components:
- extract_output: ExtractOptions, ExtractOutput, ImageRef, PageRef
- exceptions: DocumentStructureError
- img_processor: Image records and placeholders (ImageProcessor class)
- table_extractor: Merge resolution and grid reconstruction
- table_processor: Markdown table rendering (TableProcessor class)
- utils: Text helpers

Usage Example:
    from ragparsers.core.functions import ExtractOptions, ImageProcessor
    from ragparsers.core.functions import RawCell, build_cell_matrix, TableProcessor
"""

from ragparsers.core.functions.extract_output import (
    ExtractOptions,
    ExtractOutput,
    ImageRef,
    PageRef,
)

from ragparsers.core.functions.exceptions import DocumentStructureError

from ragparsers.core.functions.img_processor import (
    ImageProcessor,
    ImageProcessorConfig,
    ImageFormat,
    NamingStrategy,
    create_image_processor,
)

from ragparsers.core.functions.table_extractor import (
    MergeType,
    CellMerge,
    RawCell,
    GridSlot,
    TableMatrix,
    resolve_cell_merge,
    build_cell_matrix,
)

from ragparsers.core.functions.table_processor import (
    TableProcessor,
    TableProcessorConfig,
    create_table_processor,
)

from ragparsers.core.functions.utils import (
    escape_table_cell,
)

__all__ = [
    # Options / output
    "ExtractOptions",
    "ExtractOutput",
    "ImageRef",
    "PageRef",
    "DocumentStructureError",
    # Images
    "ImageProcessor",
    "ImageProcessorConfig",
    "ImageFormat",
    "NamingStrategy",
    "create_image_processor",
    # Tables
    "MergeType",
    "CellMerge",
    "RawCell",
    "GridSlot",
    "TableMatrix",
    "resolve_cell_merge",
    "build_cell_matrix",
    "TableProcessor",
    "TableProcessorConfig",
    "create_table_processor",
    # Utils
    "escape_table_cell",
]
