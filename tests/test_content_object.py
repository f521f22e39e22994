"""Tests for metadata resolved on content objects."""

import base64
import hashlib
from pathlib import Path

import pytest

from contentwrap.config.models import ContentWrapConfig
from contentwrap.content import ContentFactory, ImageContent
from contentwrap.content.resolver import extension_from_mime
from contentwrap.errors import (
    MimeDetectionUnavailableError,
    NotAnImageError,
    UnsupportedHashAlgorithmError,
)


def test_raw_is_idempotent(factory: ContentFactory, jpeg_path: Path) -> None:
    for content in (factory.from_path(jpeg_path), factory.from_buffer(jpeg_path.read_bytes())):
        assert content.raw == content.raw


def test_mime_type_is_resolved_once(factory: ContentFactory, detector, jpeg_path: Path) -> None:
    content = factory.from_path(jpeg_path)

    assert content.cached_mime_type is None
    assert content.mime_type == "image/jpeg"
    assert content.mime_type == "image/jpeg"
    assert detector.calls == 1


def test_mime_type_override(factory: ContentFactory, jpeg_path: Path) -> None:
    content = factory.from_path(jpeg_path)
    assert content.mime_type == "image/jpeg"

    content.mime_type = "text/html"

    assert content.mime_type == "text/html"
    assert content.detect_mime_type() == "image/jpeg"


def test_wrapper_annotation_takes_precedence(factory: ContentFactory, detector) -> None:
    encoded = base64.b64encode(b"this is a test").decode("ascii")
    content = factory.from_wrapped(f"data://text/donkey;base64,{encoded}")

    assert content.mime_type == "text/donkey"
    assert detector.calls == 0
    assert content.detect_mime_type() == "text/plain"


def test_empty_annotation_falls_back_to_sniffing(factory: ContentFactory) -> None:
    content = factory.from_wrapped("data:," + b"hello".hex())

    assert content.mime_type == "text/plain"


def test_fallback_without_detector(jpeg_bytes: bytes) -> None:
    factory = ContentFactory(detector=None)

    assert factory.from_buffer(jpeg_bytes).mime_type == "application/octet-stream"


def test_fallback_when_detector_fails(jpeg_bytes: bytes) -> None:
    class BrokenDetector:
        def detect(self, data: bytes) -> str:
            raise MimeDetectionUnavailableError("no magic database")

    factory = ContentFactory(detector=BrokenDetector())

    assert factory.from_buffer(jpeg_bytes).mime_type == "application/octet-stream"


def test_sniffing_disabled_by_config(detector, jpeg_bytes: bytes) -> None:
    config = ContentWrapConfig.model_validate(
        {"content": {"sniff_mime": False, "fallback_mime_type": "application/x-unknown"}}
    )
    factory = ContentFactory(config, detector=detector)

    assert factory.from_buffer(jpeg_bytes).mime_type == "application/x-unknown"
    assert detector.calls == 0


def test_mime_aliases(factory: ContentFactory, jpeg_path: Path) -> None:
    image = factory.from_path(jpeg_path)
    text = factory.from_buffer(b"test and stuff")

    assert image.is_image() and not image.is_text()
    assert text.is_text() and not text.is_image()
    assert not image.is_audio() and not image.is_video()

    text.mime_type = "audio/mpeg"
    assert text.is_audio()
    text.mime_type = "video/mp4"
    assert text.is_video()


def test_hash_matches_hashlib(factory: ContentFactory, jpeg_bytes: bytes) -> None:
    content = factory.from_buffer(jpeg_bytes)

    assert content.hash() == hashlib.sha256(jpeg_bytes).hexdigest()
    assert content.hash("md5") == hashlib.md5(jpeg_bytes).hexdigest()


def test_default_hash_algorithm_is_configurable(detector, jpeg_bytes: bytes) -> None:
    config = ContentWrapConfig.model_validate({"content": {"hash_algorithm": "sha1"}})
    content = ContentFactory(config, detector=detector).from_buffer(jpeg_bytes)

    assert content.hash() == hashlib.sha1(jpeg_bytes).hexdigest()


@pytest.mark.parametrize("algorithm", ["not-a-hash", "shake_128"])
def test_unsupported_hash_algorithm(
    factory: ContentFactory, jpeg_bytes: bytes, algorithm: str
) -> None:
    with pytest.raises(UnsupportedHashAlgorithmError):
        factory.from_buffer(jpeg_bytes).hash(algorithm)


def test_hash_distinguishes_content(
    factory: ContentFactory, jpeg_path: Path, base64_path: Path
) -> None:
    wrapped_binary = factory.from_buffer(jpeg_path.read_bytes())
    wrapped_base64 = factory.from_buffer(base64_path.read_bytes())
    raw_binary = factory.from_path(jpeg_path)
    raw_base64 = factory.from_path(base64_path)

    assert raw_binary.hash() == wrapped_binary.hash()
    assert raw_base64.hash() == wrapped_base64.hash()
    assert raw_binary.hash() != raw_base64.hash()


def test_name_hash(factory: ContentFactory, jpeg_path: Path, base64_path: Path) -> None:
    wrapped_binary = factory.from_buffer(jpeg_path.read_bytes())
    wrapped_base64 = factory.from_buffer(base64_path.read_bytes())

    assert wrapped_binary.name_hash() == wrapped_base64.name_hash()
    assert factory.from_path(jpeg_path).name_hash() != factory.from_path(base64_path).name_hash()


def test_extension(factory: ContentFactory, jpeg_path: Path, base64_path: Path) -> None:
    assert factory.from_buffer(jpeg_path.read_bytes()).extension() == "jpeg"
    assert factory.from_buffer(base64_path.read_bytes()).extension() == "plain"
    assert factory.from_path(jpeg_path).extension() == "jpg"
    assert factory.from_path(base64_path).extension() == "base64"
    assert factory.from_buffer(jpeg_path.read_bytes(), "upload.php").extension() == "php"

    content = factory.from_buffer(jpeg_path.read_bytes())
    assert "." not in content.extension(with_dot=False)
    assert content.extension(with_dot=True) == ".jpeg"


@pytest.mark.parametrize(
    ("mime", "expected"),
    [
        ("image/jpeg", "jpeg"),
        ("text/plain", "plain"),
        ("text/x-c++", "c++"),
        ("text/x-php", "php"),
        ("application/vnd.ms-excel", "ms-excel"),
        ("image/svg+xml", "svg+xml"),
    ],
)
def test_extension_from_mime(mime: str, expected: str) -> None:
    assert extension_from_mime(mime) == expected


def test_obfuscated_name(factory: ContentFactory, jpeg_path: Path, base64_path: Path) -> None:
    php_path = base64_path.with_name("script.php")
    php_path.write_text("<?php echo 'hi';", encoding="utf-8")

    wrapped_binary = factory.from_buffer(jpeg_path.read_bytes())
    raw_binary = factory.from_path(jpeg_path)
    raw_base64 = factory.from_path(base64_path)
    raw_php = factory.from_path(php_path)

    assert wrapped_binary.obfuscated_name(False) == raw_binary.obfuscated_name(False)
    assert raw_binary.obfuscated_name(False) != raw_base64.obfuscated_name(False)
    assert wrapped_binary.obfuscated_name(True) == wrapped_binary.hash() + ".jpeg"
    assert "php" not in raw_php.obfuscated_name(False)
    assert raw_php.obfuscated_name(True).endswith(".php")


def test_base64_rendering(
    factory: ContentFactory, jpeg_path: Path, jpeg_bytes: bytes, jpeg_base64_chunked: str
) -> None:
    raw_binary = factory.from_path(jpeg_path)
    raw_text = factory.from_wrapped("data://text/donkey," + b"this is a test".hex())

    assert raw_binary.base64(chunked=False) == base64.b64encode(jpeg_bytes).decode("ascii")
    assert raw_binary.base64() == jpeg_base64_chunked
    assert raw_text.base64(False) == base64.b64encode(b"this is a test").decode("ascii")


def test_open_returns_fresh_stream(
    factory: ContentFactory, jpeg_path: Path, jpeg_bytes: bytes
) -> None:
    for content in (factory.from_path(jpeg_path), factory.from_buffer(jpeg_bytes)):
        with content.open() as stream:
            assert stream.read() == jpeg_bytes


def test_name_can_be_changed(factory: ContentFactory) -> None:
    content = factory.from_buffer(b"data")
    content.name = "dog"

    assert content.name == "dog"
    assert content.extension() == "plain"


def test_as_image(factory: ContentFactory, jpeg_path: Path) -> None:
    image = factory.from_path(jpeg_path).as_image()

    assert isinstance(image, ImageContent)
    assert image.name == "photo.jpg"
    assert image.as_image() is image


def test_as_image_rejects_non_images(factory: ContentFactory) -> None:
    with pytest.raises(NotAnImageError):
        factory.from_buffer(b"<?php echo 'hi';").as_image()
