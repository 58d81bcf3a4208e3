from ragparsers.core.functions.extract_output import ImageRef
from ragparsers.core.processor.pdf_helpers.page_assembler import assemble_page
from ragparsers.core.processor.pdf_helpers.types import BoundingBox, ImageElement, TextBlock

PAGE_HEIGHT = 800


def image(name, left, bottom, right, top):
    return ImageElement(id=name, bbox=BoundingBox(left, bottom, right, top), data=b"x")


def placeholder_ref(img):
    return ImageRef(id=img.id, format="png", markdown_raw=f"![{img.id}]", raw_bytes=img.data)


def assemble(blocks, pool, threshold=60, create_ref=placeholder_ref):
    return assemble_page(blocks, pool, PAGE_HEIGHT, threshold, create_ref)


BLOCK = TextBlock(BoundingBox(100, 400, 300, 500), "  Hello  ")


def test_block_text_only():
    result = assemble([BLOCK], [])
    assert result.markdown == "Hello"
    assert result.images == ()


def test_images_around_block():
    pool = [image("under", 100, 350, 300, 380), image("up", 100, 520, 300, 600)]
    result = assemble([BLOCK], pool)
    assert result.markdown == "![up]\n\nHello\n\n![under]"
    assert [ref.id for ref in result.images] == ["up", "under"]


def test_unmatched_image_in_upper_half_goes_first():
    result = assemble([BLOCK], [image("top", 100, 700, 300, 780)])
    assert result.markdown == "![top]\n\nHello"


def test_unmatched_image_in_lower_half_goes_last():
    result = assemble([BLOCK], [image("bottom", 100, 50, 300, 100)])
    assert result.markdown == "Hello\n\n![bottom]"


def test_refs_follow_output_order():
    pool = [
        image("bottom", 100, 50, 300, 100),
        image("up", 100, 520, 300, 600),
        image("top", 100, 700, 300, 780),
    ]
    result = assemble([BLOCK], pool)
    assert result.markdown == "![top]\n\n![up]\n\nHello\n\n![bottom]"
    assert [ref.id for ref in result.images] == ["top", "up", "bottom"]


def test_image_claimed_by_first_matching_block_only():
    first = TextBlock(BoundingBox(100, 600, 300, 700), "A")
    second = TextBlock(BoundingBox(100, 400, 300, 500), "B")
    shared = image("img", 100, 520, 300, 580)

    result = assemble([first, second], [shared], threshold=100)
    assert result.markdown == "A\n\n![img]\n\nB"
    assert result.markdown.count("![img]") == 1


def test_skipped_images_leave_no_placeholder():
    result = assemble([BLOCK], [image("up", 100, 520, 300, 600)], create_ref=lambda img: None)
    assert result.markdown == "Hello"
    assert result.images == ()


def test_empty_page():
    result = assemble([], [])
    assert result.markdown == ""
    assert result.images == ()


def test_page_without_text_keeps_images():
    pool = [image("bottom", 100, 50, 300, 100), image("top", 100, 700, 300, 780)]
    result = assemble([], pool)
    assert result.markdown == "![top]\n\n![bottom]"
