from ragparsers.core.functions.img_processor import (
    ImageProcessor,
    NamingStrategy,
    create_image_processor,
)


def test_sequential_identifiers(png_bytes):
    processor = ImageProcessor(naming_strategy="sequential")
    first = processor.create_image_ref(png_bytes)
    second = processor.create_image_ref(png_bytes)

    assert first.id == "image_000001.png"
    assert second.id == "image_000002.png"
    assert first.format == "png"
    assert first.markdown_raw == "![image](data:image/png;image_000001.png)"
    assert first.raw_bytes == png_bytes


def test_hash_identifiers_depend_on_content(png_bytes):
    processor = ImageProcessor(naming_strategy=NamingStrategy.HASH)
    assert processor.create_image_ref(png_bytes).id == processor.create_image_ref(png_bytes).id
    assert processor.create_image_ref(png_bytes).id != processor.create_image_ref(png_bytes + b"\0").id


def test_uuid_identifiers_are_unique(png_bytes):
    processor = ImageProcessor()
    ids = {processor.create_image_ref(png_bytes).id for _ in range(5)}
    assert len(ids) == 5
    assert all(image_id.endswith(".png") for image_id in ids)


def test_container_format_wins(png_bytes):
    ref = ImageProcessor().create_image_ref(png_bytes, "JPEG")
    assert ref.format == "jpeg"
    assert ref.markdown_raw.startswith("![image](data:image/jpeg;")


def test_unreadable_images_are_skipped():
    processor = ImageProcessor()
    assert processor.create_image_ref(b"") is None
    assert processor.create_image_ref(b"not an image at all") is None


def test_page_ref(png_bytes):
    page = ImageProcessor().create_page_ref(3, png_bytes)
    assert page.page_number == 3
    assert page.id.startswith("page_0003_")
    assert page.id.endswith(".png")
    assert page.markdown_raw.startswith("![page 3](data:image/png;")


def test_factory_defaults_to_uuid():
    assert create_image_processor().config.naming_strategy == NamingStrategy.UUID
    assert create_image_processor("hash").config.naming_strategy == NamingStrategy.HASH
