"""Decide which construction path an arbitrary input value takes."""

from __future__ import annotations

import io
import os
from enum import Enum
from typing import Any

from contentwrap.errors import UnsupportedInputTypeError

from .codec import WrapperCodec


class Representation(str, Enum):
    """Recognized input shapes, in the order they are tested."""

    HANDLE = "handle"
    PATH = "path"
    WRAPPED = "wrapped"
    BASE64 = "base64"
    BINARY = "binary"


def is_handle(value: Any) -> bool:
    return isinstance(value, io.IOBase)


def is_readable_path(value: Any) -> bool:
    """Return True when ``value`` names an existing, readable regular file."""
    try:
        return os.path.isfile(value) and os.access(value, os.R_OK)
    except (TypeError, ValueError, OSError):
        return False


def as_text(value: Any) -> str | None:
    """Return ``value`` as text if it is a ``str`` or ASCII-only bytes, else None."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        try:
            return bytes(value).decode("ascii")
        except UnicodeDecodeError:
            return None
    return None


class RepresentationClassifier:
    """Classify input values, testing structural shapes before the loose base64 probe.

    Order: open handle, readable path or wrapped string, base64 text, raw
    buffer. Many binary buffers also decode as base64 (the empty string, for
    one), so the path and wrapper checks must run first.
    """

    def __init__(self, codec: WrapperCodec | None = None) -> None:
        self.codec = codec or WrapperCodec()

    def classify(self, value: Any) -> Representation:
        """Return the representation ``value`` should be constructed from.

        Raises:
            UnsupportedInputTypeError: If ``value`` is not a handle, path, text or buffer.
        """
        if is_handle(value):
            return Representation.HANDLE
        if isinstance(value, os.PathLike):
            return Representation.PATH
        if not isinstance(value, (str, bytes, bytearray, memoryview)):
            raise UnsupportedInputTypeError(
                f"Cannot build content from a value of type {type(value).__name__}"
            )

        text = as_text(value)
        if text is None:
            return Representation.BINARY
        if isinstance(value, str) and is_readable_path(value):
            return Representation.PATH
        if self.codec.is_wrapped(text):
            return Representation.WRAPPED
        if self.codec.is_base64_string(text):
            return Representation.BASE64
        return Representation.BINARY


__all__ = ["Representation", "RepresentationClassifier", "is_handle", "is_readable_path", "as_text"]
