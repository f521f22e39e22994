"""Tests for the image content variant."""

import io
from pathlib import Path

import pytest
from PIL import Image

from contentwrap.content import ContentFactory, ContentKind, ImageContent, ImageSize
from contentwrap.errors import NotAnImageError


@pytest.fixture
def image(factory: ContentFactory, jpeg_path: Path) -> ImageContent:
    content = factory.from_path(jpeg_path, kind=ContentKind.IMAGE)
    assert isinstance(content, ImageContent)
    return content


def test_size(image: ImageContent) -> None:
    size = image.size()

    assert (size.width, size.height) == (32, 16)
    assert size.format == "JPEG"
    assert size.mime_type == "image/jpeg"
    assert size.channels == 3
    assert size.bits == 8
    assert image.meta() == size


def test_aliases(image: ImageContent) -> None:
    assert image.width == 32
    assert image.height == 16
    assert image.image_format == "JPEG"
    assert image.image_mime_type == "image/jpeg"
    assert image.channels == 3
    assert image.bits == 8
    assert image.dimensions_string == 'width="32" height="16"'


def test_load(image: ImageContent) -> None:
    loaded = image.load()

    assert loaded.size == (32, 16)
    assert loaded.mode == "RGB"


def test_grayscale_png(factory: ContentFactory) -> None:
    buffer = io.BytesIO()
    Image.new("L", (5, 7)).save(buffer, format="PNG")

    image = factory.from_buffer(buffer.getvalue()).as_image()

    assert image.mime_type == "image/png"
    assert image.channels == 1
    assert (image.width, image.height) == (5, 7)


def test_image_reader_is_injectable(jpeg_bytes: bytes) -> None:
    class FixedReader:
        def read(self, data: bytes) -> ImageSize:
            return ImageSize(width=1, height=2, format="TEST", mime_type=None, channels=4, bits=16)

        def load(self, data: bytes) -> Image.Image:
            return Image.new("RGBA", (1, 2))

    factory = ContentFactory(detector=None, image_reader=FixedReader())
    content = factory.from_buffer(jpeg_bytes, mime_type="image/jpeg").as_image()

    assert content.dimensions_string == 'width="1" height="2"'
    assert content.bits == 16


def test_undecodable_image_bytes(factory: ContentFactory) -> None:
    content = factory.from_buffer(b"\xff\xd8 truncated").as_image()

    with pytest.raises(NotAnImageError):
        content.size()


def test_image_kind_requires_image_mime(factory: ContentFactory) -> None:
    with pytest.raises(NotAnImageError):
        factory.from_buffer(b"plain words", kind=ContentKind.IMAGE)


def test_same_metadata_across_construction_paths(
    factory: ContentFactory, jpeg_path: Path, jpeg_bytes: bytes, jpeg_base64: str
) -> None:
    images = [
        factory.from_buffer(jpeg_bytes, kind=ContentKind.IMAGE),
        factory.from_base64(jpeg_base64, kind=ContentKind.IMAGE),
        factory.from_path(jpeg_path, kind=ContentKind.IMAGE),
        factory.from_wrapped("data://image/jpeg;base64," + jpeg_base64, kind=ContentKind.IMAGE),
    ]

    first = images[0]
    for image in images[1:]:
        assert image.mime_type == first.mime_type
        assert image.size() == first.size()
        assert image.raw == first.raw
        assert image.base64() == first.base64()
