# ragparsers/core/functions/table_extractor.py
"""
Table Extractor - Merge Resolution and Grid Reconstruction

Format independent reconstruction of tables whose cells carry horizontal and
vertical merge directives (word-processing tables). Format helpers turn their
native cells into RawCell rows; this module turns those rows into an
occupancy matrix that table_processor serializes.

Module Components:
- MergeType: Merge directive state (NONE / FIRST / CONTINUE)
- CellMerge: Resolved merge directives of one cell
- RawCell: One source cell with its merge directives
- GridSlot: One position of the occupancy matrix
- TableMatrix: Rows of GridSlot plus header information
- resolve_cell_merge(): Classify per-cell merge metadata
- build_cell_matrix(): Build the occupancy matrix from RawCell rows

Usage Example:
    from ragparsers.core.functions.table_extractor import RawCell, build_cell_matrix

    rows = [
        [RawCell.from_metadata("Merged", {"grid_span": 2})],
        [RawCell.from_metadata("Tall", {"v_merge": "restart", "v_span": 2}),
         RawCell.from_metadata("x", {})],
        [RawCell.from_metadata("", {"v_merge": None}),
         RawCell.from_metadata("y", {})],
    ]
    matrix = build_cell_matrix(rows)
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, NamedTuple, Optional, Sequence

logger = logging.getLogger("document-processor")

# Merge metadata keys (see resolve_cell_merge)
H_MERGE = "h_merge"
V_MERGE = "v_merge"
GRID_SPAN = "grid_span"
V_SPAN = "v_span"

CONTINUE_VALUE = "continue"


class MergeType(Enum):
    """Merge directive state of a cell or slot"""
    NONE = "none"
    FIRST = "first"
    CONTINUE = "continue"


class CellMerge(NamedTuple):
    """Resolved merge directives of a single cell"""
    horizontal_merge: MergeType
    vertical_merge: MergeType
    grid_span: int
    vertical_span: int


@dataclass(frozen=True)
class RawCell:
    """
    One source table cell.

    Attributes:
        content: Opaque content reference (text or a format-specific element)
        horizontal_merge: Horizontal merge directive
        vertical_merge: Vertical merge directive
        grid_span: Number of grid columns covered (>= 1)
        vertical_span: Number of rows covered by a vertical merge origin (>= 1)
    """
    content: Any = None
    horizontal_merge: MergeType = MergeType.NONE
    vertical_merge: MergeType = MergeType.NONE
    grid_span: int = 1
    vertical_span: int = 1

    @classmethod
    def from_metadata(cls, content: Any, metadata: Mapping[str, Any]) -> "RawCell":
        """Create a cell whose merge directives come from raw metadata."""
        merge = resolve_cell_merge(metadata)
        return cls(
            content=content,
            horizontal_merge=merge.horizontal_merge,
            vertical_merge=merge.vertical_merge,
            grid_span=merge.grid_span,
            vertical_span=merge.vertical_span,
        )


@dataclass(frozen=True)
class GridSlot:
    """
    One position of the occupancy matrix.

    Attributes:
        cell: Owning cell, present only at a merge origin
        occupied: Whether a cell (or a merge covering it) fills this position
        horizontal_merge: FIRST at an origin, CONTINUE inside a column span
        vertical_merge: State of the vertical merge at this position
    """
    cell: Optional[RawCell] = None
    occupied: bool = False
    horizontal_merge: MergeType = MergeType.NONE
    vertical_merge: MergeType = MergeType.NONE


EMPTY_SLOT = GridSlot()


@dataclass
class TableMatrix:
    """
    Reconstructed occupancy matrix.

    Row order is document order, column order is first-appearance order.
    Rows may be shorter than column_count; slot() pads them.

    Attributes:
        rows: Matrix rows
        has_header: The source marked the first row as a header row
    """
    rows: List[List[GridSlot]] = field(default_factory=list)
    has_header: bool = False

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def slot(self, row_idx: int, col_idx: int) -> GridSlot:
        """Return the slot at a position, an unoccupied slot past a short row."""
        row = self.rows[row_idx]
        if col_idx < len(row):
            return row[col_idx]
        return EMPTY_SLOT


def _merge_directive(metadata: Mapping[str, Any], key: str) -> MergeType:
    if key not in metadata:
        return MergeType.NONE
    value = metadata[key]
    if value is None or str(value).strip().lower() == CONTINUE_VALUE:
        return MergeType.CONTINUE
    return MergeType.FIRST


def _span(metadata: Mapping[str, Any], key: str) -> int:
    value = metadata.get(key)
    if value is None:
        return 1
    try:
        span = int(value)
    except (TypeError, ValueError):
        logger.debug(f"Invalid {key} value {value!r}, using 1")
        return 1
    return span if span >= 1 else 1


def resolve_cell_merge(metadata: Optional[Mapping[str, Any]]) -> CellMerge:
    """
    Classify the merge directives of a single cell.

    Metadata keys:
        h_merge / v_merge: Present when the source carries the directive.
            None or "continue" means CONTINUE, any other value FIRST.
        grid_span / v_span: Span counts, 1 when absent or invalid.

    Args:
        metadata: Per-cell merge metadata (None means no directives)

    Returns:
        CellMerge
    """
    metadata = metadata or {}
    return CellMerge(
        horizontal_merge=_merge_directive(metadata, H_MERGE),
        vertical_merge=_merge_directive(metadata, V_MERGE),
        grid_span=_span(metadata, GRID_SPAN),
        vertical_span=_span(metadata, V_SPAN),
    )


def _place(row: List[GridSlot], col_idx: int, slot: GridSlot) -> None:
    while len(row) < col_idx:
        row.append(EMPTY_SLOT)
    if col_idx < len(row):
        row[col_idx] = slot
    else:
        row.append(slot)


def build_cell_matrix(
    rows: Sequence[Sequence[RawCell]],
    has_header: bool = False,
    start_columns: Optional[Sequence[int]] = None,
) -> TableMatrix:
    """
    Build the occupancy matrix of a table.

    For each row, raw cells are walked left to right and placed on the first
    column not already occupied by a vertical merge from a previous row.
    A cell spanning h columns fills h slots (origin + h-1 continuation
    slots). A vertical merge origin spanning v rows places a continuation
    slot at the same column in each of the next v-1 rows, truncated at the
    last row of the table. The continue cells that the source carries for
    those rows are absorbed by the propagated slots.

    A row with a start column leaves the grid columns before it unoccupied
    (w:gridBefore in DOCX).

    Args:
        rows: Ordered rows of RawCell
        has_header: The source marked the first row as a header row
        start_columns: Per-row first grid column, 0 when omitted

    Returns:
        TableMatrix with exactly len(rows) rows
    """
    num_rows = len(rows)
    matrix_rows: List[List[GridSlot]] = [[] for _ in range(num_rows)]
    # Propagated columns per row still waiting for their continue cell
    pending_continues = [0] * num_rows

    for row_idx, raw_cells in enumerate(rows):
        matrix_row = matrix_rows[row_idx]
        col_idx = start_columns[row_idx] if start_columns else 0
        while len(matrix_row) < col_idx:
            matrix_row.append(EMPTY_SLOT)

        for cell in raw_cells:
            while col_idx < len(matrix_row) and matrix_row[col_idx].occupied:
                col_idx += 1

            if cell.vertical_merge == MergeType.CONTINUE and pending_continues[row_idx] > 0:
                pending_continues[row_idx] -= 1
                continue

            span = cell.grid_span

            # Legacy horizontal merge: the continue cell only fills its columns
            if cell.horizontal_merge == MergeType.CONTINUE:
                for offset in range(span):
                    _place(matrix_row, col_idx + offset, GridSlot(
                        occupied=True,
                        horizontal_merge=MergeType.CONTINUE,
                    ))
                col_idx += span
                continue

            _place(matrix_row, col_idx, GridSlot(
                cell=cell,
                occupied=True,
                horizontal_merge=MergeType.FIRST,
                vertical_merge=cell.vertical_merge,
            ))
            for offset in range(1, span):
                _place(matrix_row, col_idx + offset, GridSlot(
                    occupied=True,
                    horizontal_merge=MergeType.CONTINUE,
                ))

            if cell.vertical_merge == MergeType.FIRST and cell.vertical_span > 1:
                _propagate_vertical_merge(matrix_rows, pending_continues, row_idx, col_idx, cell)

            col_idx += span

    return TableMatrix(rows=matrix_rows, has_header=has_header)


def _propagate_vertical_merge(
    matrix_rows: List[List[GridSlot]],
    pending_continues: List[int],
    origin_row: int,
    col_idx: int,
    cell: RawCell,
) -> None:
    last_row = origin_row + cell.vertical_span
    if last_row > len(matrix_rows):
        logger.debug(
            f"Vertical merge at ({origin_row}, {col_idx}) spans {cell.vertical_span} rows, "
            f"truncated at table end"
        )
        last_row = len(matrix_rows)

    for target_idx in range(origin_row + 1, last_row):
        target_row = matrix_rows[target_idx]
        already_occupied = col_idx < len(target_row) and target_row[col_idx].occupied

        _place(target_row, col_idx, GridSlot(
            occupied=True,
            horizontal_merge=MergeType.FIRST,
            vertical_merge=MergeType.CONTINUE,
        ))
        for offset in range(1, cell.grid_span):
            _place(target_row, col_idx + offset, GridSlot(
                occupied=True,
                horizontal_merge=MergeType.CONTINUE,
                vertical_merge=MergeType.CONTINUE,
            ))

        if not already_occupied:
            pending_continues[target_idx] += 1


__all__ = [
    "MergeType",
    "CellMerge",
    "RawCell",
    "GridSlot",
    "TableMatrix",
    "EMPTY_SLOT",
    "H_MERGE",
    "V_MERGE",
    "GRID_SPAN",
    "V_SPAN",
    "resolve_cell_merge",
    "build_cell_matrix",
]
