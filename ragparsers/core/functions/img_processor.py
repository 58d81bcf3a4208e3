# ragparsers/core/functions/img_processor.py
"""
Image Processing Module

Turns raw image data found in a document into output records and the
Markdown placeholder that references them. Images never leave the library
through any other channel than the records built here.

Main Features:
- Image format detection (container format tag, magic bytes, Pillow)
- Stable identifiers (UUID, content hash or sequential)
- Markdown placeholder generation
- ImageRef / PageRef record creation

Usage Example:
    from ragparsers.core.functions.img_processor import ImageProcessor

    processor = ImageProcessor()
    image_ref = processor.create_image_ref(png_bytes)
    # image_ref.markdown_raw == "![image](data:image/png;<uuid>.png)"

    # Deterministic identifiers (tests, snapshots)
    processor = ImageProcessor(naming_strategy="sequential")
"""
import hashlib
import io
import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from ragparsers.core.functions.extract_output import ImageRef, PageRef

logger = logging.getLogger("document-processor")


class ImageFormat(Enum):
    """Image formats recognised from magic bytes"""
    PNG = "png"
    JPEG = "jpeg"
    GIF = "gif"
    BMP = "bmp"
    WEBP = "webp"
    TIFF = "tiff"
    UNKNOWN = "unknown"


class NamingStrategy(Enum):
    """Image identifier strategies"""
    UUID = "uuid"              # Random UUID
    HASH = "hash"              # Content-based hash
    SEQUENTIAL = "sequential"  # Sequential numbering


@dataclass
class ImageProcessorConfig:
    """
    ImageProcessor Configuration

    Attributes:
        image_tag_template: Placeholder for extracted images
        page_tag_template: Placeholder for rendered pages
        naming_strategy: Identifier strategy
        hash_algorithm: Hash algorithm (for hash strategy)
    """
    image_tag_template: str = "![image](data:image/{format};{id})"
    page_tag_template: str = "![page {page_number}](data:image/{format};{id})"
    naming_strategy: NamingStrategy = NamingStrategy.UUID
    hash_algorithm: str = "sha256"


class ImageProcessor:
    """
    Image record factory.

    One instance is used per conversion call; the sequential counter is the
    only state it keeps.

    Examples:
        >>> processor = ImageProcessor(naming_strategy="sequential")
        >>> processor.create_image_ref(png_bytes).id
        'image_000001.png'
    """

    def __init__(
        self,
        naming_strategy: Union[NamingStrategy, str] = NamingStrategy.UUID,
        config: Optional[ImageProcessorConfig] = None,
    ):
        if config:
            self.config = config
        else:
            if isinstance(naming_strategy, str):
                naming_strategy = NamingStrategy(naming_strategy.lower())
            self.config = ImageProcessorConfig(naming_strategy=naming_strategy)

        self._sequential_counter: int = 0

    def _compute_hash(self, data: bytes) -> str:
        """Compute hash of image data"""
        hasher = hashlib.new(self.config.hash_algorithm)
        hasher.update(data)
        return hasher.hexdigest()[:32]

    def _detect_format(self, data: bytes) -> ImageFormat:
        """Detect format from image data"""
        if data[:8] == b'\x89PNG\r\n\x1a\n':
            return ImageFormat.PNG
        elif data[:2] == b'\xff\xd8':
            return ImageFormat.JPEG
        elif data[:6] in (b'GIF87a', b'GIF89a'):
            return ImageFormat.GIF
        elif data[:2] == b'BM':
            return ImageFormat.BMP
        elif data[:4] == b'RIFF' and data[8:12] == b'WEBP':
            return ImageFormat.WEBP
        elif data[:4] in (b'II*\x00', b'MM\x00*'):
            return ImageFormat.TIFF
        else:
            return ImageFormat.UNKNOWN

    def resolve_format(self, data: bytes, image_format: Optional[str] = None) -> Optional[str]:
        """
        Resolve the format name of an image.

        A format tag supplied by the container wins. Otherwise magic bytes are
        checked, then Pillow is asked to identify the data.

        Returns:
            Lower-case format name, or None when the data is not a readable image
        """
        if image_format:
            return image_format.strip().lower()

        detected = self._detect_format(data)
        if detected != ImageFormat.UNKNOWN:
            return detected.value

        try:
            with Image.open(io.BytesIO(data)) as img:
                if img.format:
                    return img.format.lower()
        except (UnidentifiedImageError, OSError) as e:
            logger.debug(f"Pillow could not identify image data: {e}")

        return None

    def _generate_id(self, data: bytes, image_format: str) -> str:
        """Generate a stable identifier with the format as extension"""
        strategy = self.config.naming_strategy

        if strategy == NamingStrategy.HASH:
            base = self._compute_hash(data)
        elif strategy == NamingStrategy.SEQUENTIAL:
            self._sequential_counter += 1
            base = f"image_{self._sequential_counter:06d}"
        else:
            base = str(uuid.uuid4())

        return f"{base}.{image_format}"

    def create_image_ref(
        self,
        image_data: bytes,
        image_format: Optional[str] = None,
    ) -> Optional[ImageRef]:
        """
        Build the record and placeholder for one extracted image.

        Args:
            image_data: Image binary data
            image_format: Format tag from the container (content type suffix,
                PDF image extension). Detected from the data when omitted.

        Returns:
            ImageRef, or None when the image is empty or its format unknown
        """
        if not image_data:
            logger.warning("Empty image data provided")
            return None

        fmt = self.resolve_format(image_data, image_format)
        if not fmt:
            logger.warning("Skipping image with unknown format")
            return None

        image_id = self._generate_id(image_data, fmt)
        markdown_raw = self.config.image_tag_template.format(format=fmt, id=image_id)

        return ImageRef(
            id=image_id,
            format=fmt,
            markdown_raw=markdown_raw,
            raw_bytes=bytes(image_data),
        )

    def create_page_ref(
        self,
        page_number: int,
        image_data: bytes,
        image_format: str = "png",
    ) -> PageRef:
        """
        Build the record for one rendered page.

        Args:
            page_number: Page number, starts at 1
            image_data: Rendered page binary data
            image_format: Rendered image format
        """
        page_id = f"page_{page_number:04d}_{uuid.uuid4().hex[:12]}.{image_format}"
        markdown_raw = self.config.page_tag_template.format(
            page_number=page_number, format=image_format, id=page_id
        )
        return PageRef(
            id=page_id,
            page_number=page_number,
            format=image_format,
            markdown_raw=markdown_raw,
            raw_bytes=bytes(image_data),
        )


def create_image_processor(
    naming_strategy: Optional[Union[NamingStrategy, str]] = None,
) -> ImageProcessor:
    """
    Create a new ImageProcessor instance.

    Args:
        naming_strategy: Identifier strategy (default: UUID)
    """
    return ImageProcessor(naming_strategy=naming_strategy or NamingStrategy.UUID)


__all__ = [
    "ImageProcessor",
    "ImageProcessorConfig",
    "ImageFormat",
    "NamingStrategy",
    "create_image_processor",
]
