import datetime
import io

import pytest
from openpyxl import Workbook

from ragparsers.core.functions.exceptions import DocumentStructureError
from ragparsers.core.processor.excel_handler import ExcelHandler
from ragparsers.core.processor.excel_helper import format_cell_value


def convert(wb, make_file, **options):
    buffer = io.BytesIO()
    wb.save(buffer)
    return ExcelHandler(config=options).extract(make_file(buffer.getvalue(), "book.xlsx"))


def test_sheet_as_table(make_file):
    wb = Workbook()
    ws = wb.active
    ws.title = "Data"
    ws["A1"] = "Name"
    ws["B1"] = "Age"
    ws["A2"] = "Ada"
    ws["B2"] = 36

    assert convert(wb, make_file).output == (
        '# Worksheet "Data"\n'
        "\n"
        "||A|B|\n"
        "|---|---|---|\n"
        "|**1**|Name|Age|\n"
        "|**2**|Ada|36|"
    )


def test_empty_sheet_keeps_its_header(make_file):
    wb = Workbook()
    assert convert(wb, make_file).output == '# Worksheet "Sheet"'


def test_used_range_offset_and_empty_rows(make_file):
    wb = Workbook()
    ws = wb.active
    ws["B3"] = "x"
    ws["C5"] = 2.5

    output = convert(wb, make_file).output
    assert output.endswith(
        "||B|C|\n"
        "|---|---|---|\n"
        "|**3**|x||\n"
        "|**5**||2.5|"
    )
    assert "**4**" not in output


def test_sheets_in_workbook_order_with_custom_template(make_file):
    wb = Workbook()
    wb.active.title = "First"
    wb.active["A1"] = 1
    second = wb.create_sheet("Second")
    second["A1"] = 2

    output = convert(wb, make_file, worksheet_number_template="## {name}").output
    assert output.index("## First") < output.index("## Second")
    assert "|**1**|1|" in output
    assert "|**1**|2|" in output


def test_quote_doubling_option(make_file):
    wb = Workbook()
    wb.active["A1"] = 'say "hi"'

    assert '|say ""hi""|' in convert(wb, make_file).output
    assert '|say "hi"|' in convert(wb, make_file, with_quotes=False).output


@pytest.mark.parametrize("value, expected", [
    (None, ""),
    (True, "TRUE"),
    (False, "FALSE"),
    (42, "42"),
    (3.0, "3"),
    (2.5, "2.5"),
    (datetime.datetime(2024, 1, 2, 3, 4, 5), "01/02/2024 03:04:05"),
    (datetime.date(2024, 1, 2), "01/02/2024 00:00:00"),
    (datetime.time(13, 5, 0), "13:05:00"),
    ("a|b\nc", "a\\|b<br>c"),
])
def test_format_cell_value(value, expected):
    assert format_cell_value(value) == expected


def test_dates_survive_workbook_round_trip(make_file):
    wb = Workbook()
    wb.active["A1"] = datetime.datetime(2023, 12, 31, 23, 59, 0)
    wb.active["B1"] = True

    assert "|**1**|12/31/2023 23:59:00|TRUE|" in convert(wb, make_file).output


def test_empty_stream(make_file):
    assert ExcelHandler().extract(make_file(b"", "empty.xlsx")).output == ""


def test_not_a_workbook(make_file):
    with pytest.raises(DocumentStructureError):
        ExcelHandler().extract(make_file(b"garbage bytes", "broken.xlsx"))
