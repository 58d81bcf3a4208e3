import io

import pytest
from docx import Document
from docx.enum.style import WD_STYLE_TYPE
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn

from ragparsers.core.functions.exceptions import DocumentStructureError
from ragparsers.core.functions.img_processor import ImageProcessor
from ragparsers.core.processor.docx_handler import DOCXHandler


def to_file(doc, make_file):
    buffer = io.BytesIO()
    doc.save(buffer)
    return make_file(buffer.getvalue(), "sample.docx")


def convert(doc, make_file, **options):
    handler = DOCXHandler(config=options, image_processor=ImageProcessor(naming_strategy="sequential"))
    return handler.extract(to_file(doc, make_file))


def text_element(tag, text):
    run = OxmlElement("w:r")
    t = OxmlElement(tag)
    t.text = text
    run.append(t)
    return run


def test_headings_and_paragraphs(make_file):
    doc = Document()
    doc.add_heading("Title", level=1)
    doc.add_paragraph("Body text")
    doc.add_heading("Section", level=2)
    doc.add_paragraph("More text")

    result = convert(doc, make_file)
    assert result.output == "## Title\n\nBody text\n\n### Section\n\nMore text"
    assert result.images == []


def test_bold_and_italic_runs(make_file):
    doc = Document()
    para = doc.add_paragraph()
    para.add_run("Plain ")
    para.add_run("bold").bold = True
    para.add_run(" and ")
    para.add_run("italic").italic = True

    assert convert(doc, make_file).output == "Plain **bold** and *italic*"


def test_external_hyperlink(make_file):
    doc = Document()
    para = doc.add_paragraph("See ")
    rel_id = para.part.relate_to("https://example.com", RT.HYPERLINK, is_external=True)
    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("r:id"), rel_id)
    hyperlink.append(text_element("w:t", "site"))
    para._p.append(hyperlink)

    assert convert(doc, make_file).output == "See [site](https://example.com)"


def test_deleted_revision(make_file):
    doc = Document()
    para = doc.add_paragraph("Kept ")
    deleted = OxmlElement("w:del")
    deleted.set(qn("w:id"), "1")
    deleted.set(qn("w:author"), "Bob")
    deleted.set(qn("w:date"), "2024-01-01T00:00:00Z")
    deleted.append(text_element("w:delText", "gone"))
    para._p.append(deleted)

    assert convert(doc, make_file).output == "Kept"
    assert convert(doc, make_file, extract_revision_content=True).output == (
        "Kept ~~(revision : Bob - 2024-01-01T00:00:00Z : gone)~~"
    )


def test_toc_paragraphs_are_skipped(make_file):
    doc = Document()
    doc.styles.add_style("My TOC Entry", WD_STYLE_TYPE.PARAGRAPH)
    doc.add_paragraph("Chapter 1 ........ 3", style="My TOC Entry")
    doc.add_paragraph("Content")

    assert convert(doc, make_file).output == "Content"


def test_merged_table(make_file):
    """Horizontal and vertical merges made through python-docx."""
    doc = Document()
    table = doc.add_table(rows=3, cols=2)
    table.cell(0, 0).merge(table.cell(0, 1)).text = "Merged"
    table.cell(1, 0).merge(table.cell(2, 0)).text = "Tall"
    table.cell(1, 1).text = "x"
    table.cell(2, 1).text = "y"

    assert convert(doc, make_file).output == (
        "| | |\n"
        "|---|---|\n"
        "|Merged|<<|\n"
        "|Tall|x|\n"
        "|^^|y|"
    )


def test_grid_before_offsets_row(make_file):
    """A row starting after w:gridBefore keeps its cells in their grid columns."""
    doc = Document()
    table = doc.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "a"
    table.cell(0, 1).text = "b"
    table.cell(1, 1).text = "d"

    tr = table.rows[1]._tr
    tr.remove(tr.tc_lst[0])
    grid_before = OxmlElement("w:gridBefore")
    grid_before.set(qn("w:val"), "1")
    tr.get_or_add_trPr().append(grid_before)

    assert convert(doc, make_file).output == (
        "| | |\n"
        "|---|---|\n"
        "|a|b|\n"
        "||d|"
    )


def test_tables_can_be_skipped(make_file):
    doc = Document()
    doc.add_paragraph("Before")
    doc.add_table(rows=1, cols=1).cell(0, 0).text = "cell"
    doc.add_paragraph("After")

    assert convert(doc, make_file, extract_tables=False).output == "Before\n\nAfter"


def test_multi_paragraph_cell(make_file):
    doc = Document()
    cell = doc.add_table(rows=1, cols=1).cell(0, 0)
    cell.text = "first"
    cell.add_paragraph("second")

    assert "|first<br>second|" in convert(doc, make_file).output


def test_inline_image(make_file, png_bytes):
    doc = Document()
    doc.add_paragraph("Figure")
    doc.add_picture(io.BytesIO(png_bytes))

    result = convert(doc, make_file, extract_images=True)
    assert result.output == "Figure\n\n![image](data:image/png;image_000001.png)"
    assert len(result.images) == 1
    assert result.images[0].id == "image_000001.png"
    assert result.images[0].raw_bytes == png_bytes

    without = convert(doc, make_file)
    assert without.output == "Figure"
    assert without.images == []


def test_unreadable_image_does_not_abort(make_file, png_bytes, monkeypatch):
    doc = Document()
    doc.add_paragraph("Figure")
    doc.add_picture(io.BytesIO(png_bytes))
    doc.add_paragraph("Caption")

    def broken(self, image_data, image_format=None):
        raise ValueError("decompression bomb")

    monkeypatch.setattr(ImageProcessor, "create_image_ref", broken)

    result = convert(doc, make_file, extract_images=True)
    assert result.output == "Figure\n\nCaption"
    assert result.images == []


def test_comments(make_file):
    doc = Document()
    para = doc.add_paragraph("Commented")
    doc.add_comment(para.runs[0], text="Check this", author="Jane")
    doc.add_paragraph("Plain")

    output = convert(doc, make_file, extract_comments=True).output
    assert output.startswith("Commented(1)\n\n> (1) : Jane (")
    assert ") : Check this\n\nPlain" in output
    assert output.endswith("> Comments\n> (1) Check this")

    assert convert(doc, make_file).output == "Commented\n\nPlain"


def test_empty_stream(make_file):
    result = DOCXHandler().extract(make_file(b"", "empty.docx"))
    assert result.output == ""
    assert result.images == []


def test_not_a_package(make_file):
    with pytest.raises(DocumentStructureError):
        DOCXHandler().extract(make_file(b"definitely not a zip", "broken.docx"))
