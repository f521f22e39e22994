"""Normalize file-like inputs into content objects."""

from __future__ import annotations

from .classifier import Representation, RepresentationClassifier
from .codec import Unwrapped, WrapperCodec, WrapperInfo
from .detectors import HashComputer, MagicMimeDetector, MimeDetector, default_mime_detector
from .extractors import ImageMetadataReader, ImageSize, PillowImageReader
from .factory import (
    ContentFactory,
    default_factory,
    from_base64,
    from_best_guess,
    from_buffer,
    from_handle,
    from_path,
)
from .objects import ContentKind, ContentObject, ImageContent
from .resolver import MetadataResolver, extension_from_mime


def is_protocol_wrapped_string(value: str) -> bool:
    """Return True when ``value`` matches the wrapped string grammar."""
    return default_factory().codec.is_wrapped(value)


def is_base64_string(value: str | bytes) -> bool:
    """Return True when ``value`` survives strict base64 decoding."""
    return default_factory().codec.is_base64_string(value)


def detect_mime_type_from_buffer(data: bytes) -> str:
    """Sniff ``data`` with the default detector, falling back to a generic type."""
    return default_factory().resolver.sniff_mime(data)


__all__ = [
    "ContentFactory",
    "ContentKind",
    "ContentObject",
    "HashComputer",
    "ImageContent",
    "ImageMetadataReader",
    "ImageSize",
    "MagicMimeDetector",
    "MetadataResolver",
    "MimeDetector",
    "PillowImageReader",
    "Representation",
    "RepresentationClassifier",
    "Unwrapped",
    "WrapperCodec",
    "WrapperInfo",
    "default_factory",
    "default_mime_detector",
    "detect_mime_type_from_buffer",
    "extension_from_mime",
    "from_base64",
    "from_best_guess",
    "from_buffer",
    "from_handle",
    "from_path",
    "is_base64_string",
    "is_protocol_wrapped_string",
]
