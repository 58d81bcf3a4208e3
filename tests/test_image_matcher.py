import pytest

from ragparsers.core.processor.pdf_helpers.image_matcher import (
    is_above,
    is_near,
    match_images_to_block,
)
from ragparsers.core.processor.pdf_helpers.types import BoundingBox, ImageElement, TextBlock

# left, bottom, right, top (y axis up)
BLOCK = TextBlock(BoundingBox(100, 400, 300, 500), "Paragraph")


def image(name, left, bottom, right, top):
    return ImageElement(id=name, bbox=BoundingBox(left, bottom, right, top))


def test_bounding_box_from_top_down():
    box = BoundingBox.from_top_down((10, 20, 110, 70), page_height=800)
    assert box == BoundingBox(left=10, bottom=730, right=110, top=780)
    assert box.width == 100
    assert box.height == 50
    assert box.top_left == (10, 780)
    assert box.bottom_right == (110, 730)


def test_image_just_above_block():
    assert is_above(BLOCK, image("up", 100, 520, 300, 600), 60)
    # touching edges count as above
    assert is_above(BLOCK, image("touch", 100, 500, 300, 560), 60)


def test_gap_equal_to_threshold_is_not_close():
    far = image("far", 100, 560, 300, 620)
    assert not is_above(BLOCK, far, 60)
    assert not is_near(BLOCK, far, 60)


def test_image_under_block():
    under = image("under", 100, 350, 300, 380)
    assert not is_above(BLOCK, under, 60)
    assert is_near(BLOCK, under, 60)


@pytest.mark.parametrize("side", [
    image("left", 20, 410, 90, 490),
    image("right", 320, 420, 400, 480),
])
def test_image_beside_block(side):
    assert is_near(BLOCK, side, 60)


def test_image_far_below_is_left_in_pool():
    far = image("far", 100, 50, 300, 100)
    match = match_images_to_block(BLOCK, [far], 60)
    assert match.above == ()
    assert match.below == ()
    assert match.remaining == (far,)


def test_zero_threshold_never_matches():
    pool = [
        image("up", 100, 500, 300, 560),
        image("under", 100, 350, 300, 400),
        image("left", 20, 400, 90, 500),
    ]
    match = match_images_to_block(BLOCK, pool, 0)
    assert match.above == () and match.below == ()
    assert len(match.remaining) == 3


def test_partition_is_sorted_and_pool_untouched():
    pool = [
        image("under", 100, 350, 300, 380),
        image("up", 100, 520, 300, 600),
        image("far", 100, 50, 300, 100),
        image("left", 20, 410, 90, 490),
    ]
    snapshot = list(pool)
    match = match_images_to_block(BLOCK, pool, 60)

    assert pool == snapshot
    assert [i.id for i in match.above] == ["up"]
    # ascending top edge
    assert [i.id for i in match.below] == ["under", "left"]
    assert [i.id for i in match.remaining] == ["far"]


def test_larger_threshold_never_loses_matches():
    pool = [
        image("a", 100, 505, 300, 540),
        image("b", 100, 530, 300, 580),
        image("c", 100, 330, 300, 390),
        image("d", 310, 380, 360, 470),
        image("e", 100, 100, 300, 200),
    ]
    previous = set()
    for threshold in (0, 10, 30, 60, 120, 500):
        match = match_images_to_block(BLOCK, pool, threshold)
        matched = {i.id for i in match.above + match.below}
        assert previous <= matched
        previous = matched
