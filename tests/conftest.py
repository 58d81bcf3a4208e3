import io

import pytest
from PIL import Image


@pytest.fixture
def png_bytes():
    """A small opaque RGB PNG."""
    buffer = io.BytesIO()
    Image.new("RGB", (16, 16), (200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_file():
    """Build the CurrentFile dict handlers expect from raw bytes."""

    def _make(data, file_name="document.bin"):
        return {
            "file_path": file_name,
            "file_name": file_name,
            "file_extension": file_name.rsplit(".", 1)[-1],
            "file_data": data,
            "file_stream": io.BytesIO(data),
            "file_size": len(data),
        }

    return _make
