import pytest

from ragparsers.core.functions.table_extractor import (
    EMPTY_SLOT,
    MergeType,
    RawCell,
    build_cell_matrix,
    resolve_cell_merge,
)


def test_resolve_without_metadata():
    merge = resolve_cell_merge({})
    assert merge.horizontal_merge == MergeType.NONE
    assert merge.vertical_merge == MergeType.NONE
    assert merge.grid_span == 1
    assert merge.vertical_span == 1
    assert resolve_cell_merge(None) == merge


@pytest.mark.parametrize("value, expected", [
    (None, MergeType.CONTINUE),
    ("continue", MergeType.CONTINUE),
    ("Continue", MergeType.CONTINUE),
    ("restart", MergeType.FIRST),
])
def test_resolve_vertical_directive(value, expected):
    assert resolve_cell_merge({"v_merge": value}).vertical_merge == expected


def test_resolve_horizontal_directive():
    assert resolve_cell_merge({"h_merge": "restart"}).horizontal_merge == MergeType.FIRST
    assert resolve_cell_merge({"h_merge": None}).horizontal_merge == MergeType.CONTINUE


@pytest.mark.parametrize("value, expected", [
    ("3", 3),
    (2, 2),
    (0, 1),
    (-4, 1),
    ("abc", 1),
    (None, 1),
])
def test_resolve_spans_fall_back_to_one(value, expected):
    merge = resolve_cell_merge({"grid_span": value, "v_span": value})
    assert merge.grid_span == expected
    assert merge.vertical_span == expected


def test_horizontal_span_fills_continuation_slots():
    rows = [[RawCell("a", grid_span=3), RawCell("b")]]
    matrix = build_cell_matrix(rows)

    row = matrix.rows[0]
    assert len(row) == 4
    assert row[0].cell.content == "a"
    assert row[0].horizontal_merge == MergeType.FIRST
    for slot in row[1:3]:
        assert slot.cell is None
        assert slot.occupied
        assert slot.horizontal_merge == MergeType.CONTINUE
    assert row[3].cell.content == "b"


def test_vertical_span_absorbs_continue_cells():
    origin = RawCell("A", vertical_merge=MergeType.FIRST, vertical_span=3)
    rows = [
        [origin, RawCell("b")],
        [RawCell("", vertical_merge=MergeType.CONTINUE), RawCell("c")],
        [RawCell("", vertical_merge=MergeType.CONTINUE), RawCell("d")],
    ]
    matrix = build_cell_matrix(rows)

    assert matrix.column_count == 2
    for row_idx, text in ((1, "c"), (2, "d")):
        row = matrix.rows[row_idx]
        assert len(row) == 2
        assert row[0].cell is None
        assert row[0].occupied
        assert row[0].vertical_merge == MergeType.CONTINUE
        assert row[1].cell.content == text


def test_vertical_span_with_column_span():
    origin = RawCell("A", vertical_merge=MergeType.FIRST, vertical_span=2, grid_span=2)
    rows = [
        [origin, RawCell("x")],
        [RawCell("", vertical_merge=MergeType.CONTINUE, grid_span=2), RawCell("y")],
    ]
    matrix = build_cell_matrix(rows)

    row = matrix.rows[1]
    assert [slot.cell for slot in row[:2]] == [None, None]
    assert row[0].vertical_merge == MergeType.CONTINUE
    assert row[1].horizontal_merge == MergeType.CONTINUE
    assert row[1].vertical_merge == MergeType.CONTINUE
    assert row[2].cell.content == "y"


def test_vertical_span_truncated_at_table_end():
    rows = [
        [RawCell("A", vertical_merge=MergeType.FIRST, vertical_span=5)],
        [RawCell("", vertical_merge=MergeType.CONTINUE)],
    ]
    matrix = build_cell_matrix(rows)
    assert matrix.row_count == 2
    assert matrix.rows[1][0].vertical_merge == MergeType.CONTINUE


def test_rows_without_cells_are_kept():
    rows = [[RawCell("a"), RawCell("b")], [], [RawCell("c")]]
    matrix = build_cell_matrix(rows)

    assert matrix.row_count == 3
    assert matrix.column_count == 2
    assert matrix.rows[1] == []
    assert matrix.slot(1, 0) is EMPTY_SLOT
    assert matrix.slot(2, 1) is EMPTY_SLOT


def test_unmatched_continue_cell_owns_its_slot():
    rows = [[RawCell("z", vertical_merge=MergeType.CONTINUE)]]
    slot = build_cell_matrix(rows).rows[0][0]
    assert slot.cell.content == "z"
    assert slot.vertical_merge == MergeType.CONTINUE


def test_legacy_horizontal_continue_has_no_owner():
    rows = [[
        RawCell("a", horizontal_merge=MergeType.FIRST),
        RawCell("", horizontal_merge=MergeType.CONTINUE),
    ]]
    row = build_cell_matrix(rows).rows[0]
    assert row[1].cell is None
    assert row[1].horizontal_merge == MergeType.CONTINUE


def test_header_flag_and_empty_table():
    assert build_cell_matrix([[RawCell("h")]], has_header=True).has_header
    empty = build_cell_matrix([])
    assert empty.row_count == 0
    assert empty.column_count == 0


def test_start_column_leaves_leading_slots_unoccupied():
    rows = [[RawCell("a"), RawCell("b")], [RawCell("d")]]
    matrix = build_cell_matrix(rows, start_columns=[0, 1])

    assert matrix.column_count == 2
    assert matrix.rows[1][0] is EMPTY_SLOT
    assert matrix.rows[1][1].cell.content == "d"


def test_start_column_with_vertical_merge():
    rows = [
        [RawCell("a"), RawCell("B", vertical_merge=MergeType.FIRST, vertical_span=2), RawCell("c")],
        [RawCell("", vertical_merge=MergeType.CONTINUE), RawCell("z")],
    ]
    matrix = build_cell_matrix(rows, start_columns=[0, 1])

    assert matrix.slot(1, 0) is EMPTY_SLOT
    assert matrix.rows[1][1].vertical_merge == MergeType.CONTINUE
    assert matrix.rows[1][1].cell is None
    assert matrix.rows[1][2].cell.content == "z"
