# ragparsers/core/processor/docx_helper/docx_table.py
"""
DOCX table processing

Turns a w:tbl element into RawCell rows for the grid builder and renders the
result as a Markdown table.
- read_table_rows: RawCell rows with merge metadata and vertical spans
- is_header_row: w:tblHeader on a row
- process_table_element: w:tbl -> Markdown table

OOXML table structure:
- w:tr: table row (w:trPr/w:gridBefore skips leading grid columns)
- w:tc: table cell
- w:tcPr/w:gridSpan: number of grid columns covered
- w:tcPr/w:vMerge val="restart": vertical merge origin
- w:tcPr/w:vMerge (no val): vertical merge continuation
- w:tcPr/w:hMerge: legacy horizontal merge

OOXML does not store the height of a vertical merge. It is counted here: the
consecutive rows that hold a continuation cell at the origin's grid column.
"""
import logging
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from ragparsers.core.functions.table_extractor import (
    GRID_SPAN,
    H_MERGE,
    V_MERGE,
    V_SPAN,
    MergeType,
    RawCell,
    TableMatrix,
    build_cell_matrix,
    resolve_cell_merge,
)
from ragparsers.core.functions.table_processor import CellTextFunc, TableProcessor
from ragparsers.core.processor.docx_helper.docx_constants import (
    ATTR_VAL,
    FALSE_VALUES,
    NAMESPACES,
)

logger = logging.getLogger("document-processor")


def cell_merge_metadata(tc_elem) -> Dict[str, Any]:
    """
    Raw merge metadata of a cell.

    Keys are present only when the matching property exists. A merge
    property without w:val maps to None (continuation).
    """
    metadata: Dict[str, Any] = {}
    tc_pr = tc_elem.find('w:tcPr', NAMESPACES)
    if tc_pr is None:
        return metadata

    grid_span = tc_pr.find('w:gridSpan', NAMESPACES)
    if grid_span is not None:
        metadata[GRID_SPAN] = grid_span.get(ATTR_VAL)

    v_merge = tc_pr.find('w:vMerge', NAMESPACES)
    if v_merge is not None:
        metadata[V_MERGE] = v_merge.get(ATTR_VAL)

    h_merge = tc_pr.find('w:hMerge', NAMESPACES)
    if h_merge is not None:
        metadata[H_MERGE] = h_merge.get(ATTR_VAL)

    return metadata


def _grid_before(tr_elem) -> int:
    grid_before = tr_elem.find('w:trPr/w:gridBefore', NAMESPACES)
    if grid_before is None:
        return 0
    try:
        return max(0, int(grid_before.get(ATTR_VAL)))
    except (TypeError, ValueError):
        return 0


def is_header_row(tr_elem) -> bool:
    """The row repeats as a header row on each page."""
    tbl_header = tr_elem.find('w:trPr/w:tblHeader', NAMESPACES)
    if tbl_header is None:
        return False
    value = tbl_header.get(ATTR_VAL)
    return value is None or value.lower() not in FALSE_VALUES


class TableRows(NamedTuple):
    """Cells of a w:tbl ready for build_cell_matrix()"""
    rows: List[List[RawCell]]
    has_header: bool
    start_columns: List[int]


def read_table_rows(tbl_elem) -> TableRows:
    """
    Read the cells of a table.

    Args:
        tbl_elem: w:tbl element

    Returns:
        TableRows: RawCell rows whose content is the w:tc element, the
        header flag and each row's first grid column (w:gridBefore)
    """
    tr_elems = tbl_elem.findall('w:tr', NAMESPACES)

    # Per row: (tc, metadata, grid column)
    positioned: List[List[Tuple[Any, Dict[str, Any], int]]] = []
    # Per row: grid columns holding a vertical merge continuation
    continue_cols: List[set] = []
    start_columns: List[int] = []

    for tr in tr_elems:
        grid_col = _grid_before(tr)
        start_columns.append(grid_col)
        row_cells = []
        row_continues = set()

        for tc in tr.findall('w:tc', NAMESPACES):
            metadata = cell_merge_metadata(tc)
            merge = resolve_cell_merge(metadata)
            row_cells.append((tc, metadata, grid_col))
            if merge.vertical_merge == MergeType.CONTINUE:
                row_continues.add(grid_col)
            grid_col += merge.grid_span

        positioned.append(row_cells)
        continue_cols.append(row_continues)

    rows: List[List[RawCell]] = []
    for row_idx, row_cells in enumerate(positioned):
        raw_row = []
        for tc, metadata, grid_col in row_cells:
            if V_MERGE in metadata and resolve_cell_merge(metadata).vertical_merge == MergeType.FIRST:
                metadata = dict(metadata)
                metadata[V_SPAN] = _vertical_span(continue_cols, row_idx, grid_col)
            raw_row.append(RawCell.from_metadata(tc, metadata))
        rows.append(raw_row)

    has_header = bool(tr_elems) and is_header_row(tr_elems[0])
    return TableRows(rows, has_header, start_columns)


def _vertical_span(continue_cols: List[set], origin_row: int, grid_col: int) -> int:
    span = 1
    for row_continues in continue_cols[origin_row + 1:]:
        if grid_col not in row_continues:
            break
        span += 1
    return span


def build_table_matrix(tbl_elem) -> TableMatrix:
    """Occupancy matrix of a w:tbl element."""
    table_rows = read_table_rows(tbl_elem)
    return build_cell_matrix(
        table_rows.rows,
        has_header=table_rows.has_header,
        start_columns=table_rows.start_columns,
    )


def process_table_element(
    tbl_elem,
    cell_text: CellTextFunc,
    table_processor: Optional[TableProcessor] = None,
) -> str:
    """
    Convert a w:tbl element to a Markdown table.

    Args:
        tbl_elem: w:tbl element
        cell_text: Renders the content of a cell (its w:tc element)
        table_processor: Markdown table renderer

    Returns:
        Markdown table followed by a blank line, "" for a table without cells
    """
    table_processor = table_processor or TableProcessor()
    matrix = build_table_matrix(tbl_elem)

    if matrix.column_count == 0:
        logger.debug("Skipping DOCX table without cells")
        return ""

    return table_processor.format_table(matrix, cell_text=cell_text)


__all__ = [
    'TableRows',
    'cell_merge_metadata',
    'is_header_row',
    'read_table_rows',
    'build_table_matrix',
    'process_table_element',
]
