"""Shared fixtures: an image fixture in several encodings and deterministic factories."""

from __future__ import annotations

import base64
import io
from pathlib import Path

import pytest
from PIL import Image

from contentwrap.content import ContentFactory, default_mime_detector


class PrefixDetector:
    """Deterministic stand-in for libmagic keyed on leading bytes."""

    def __init__(self) -> None:
        self.calls = 0

    def detect(self, data: bytes) -> str | None:
        self.calls += 1
        if data.startswith(b"\xff\xd8"):
            return "image/jpeg"
        if data.startswith(b"\x89PNG"):
            return "image/png"
        if not data:
            return None
        return "text/plain"


@pytest.fixture
def detector() -> PrefixDetector:
    return PrefixDetector()


@pytest.fixture
def factory(detector: PrefixDetector) -> ContentFactory:
    return ContentFactory(detector=detector)


@pytest.fixture
def magic_factory() -> ContentFactory:
    detector = default_mime_detector()
    if detector is None:
        pytest.skip("libmagic is not installed")
    return ContentFactory(detector=detector)


@pytest.fixture
def jpeg_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (32, 16), color="red").save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def jpeg_path(tmp_path: Path, jpeg_bytes: bytes) -> Path:
    path = tmp_path / "photo.jpg"
    path.write_bytes(jpeg_bytes)
    return path


@pytest.fixture
def jpeg_base64(jpeg_bytes: bytes) -> str:
    return base64.b64encode(jpeg_bytes).decode("ascii")


@pytest.fixture
def jpeg_base64_chunked(jpeg_base64: str) -> str:
    lines = [jpeg_base64[i : i + 76] for i in range(0, len(jpeg_base64), 76)]
    return "".join(line + "\r\n" for line in lines)


@pytest.fixture
def base64_path(tmp_path: Path, jpeg_base64: str) -> Path:
    path = tmp_path / "photo.base64"
    path.write_text(jpeg_base64, encoding="ascii")
    return path
