"""Wrapper codec: parse and produce ``scheme:mime[;extra],payload`` strings.

The wrapper grammar mirrors data URIs closely enough that ``data:`` strings
produced elsewhere parse here, with one deliberate difference: a payload
without a ``;extra`` segment is always hexadecimal, never percent-encoded
text. ``wrap`` therefore always emits hex so arbitrary bytes never collide
with the ``,`` and ``;`` delimiters.
"""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Optional

from contentwrap.config.models import CodecSettings
from contentwrap.errors import (
    InvalidBase64DataError,
    InvalidMimeTypeError,
    MalformedHexPayloadError,
)

WRAPPER_PATTERN = re.compile(r"^([A-Za-z0-9]+):/*(.*?)(?:;([^,]*))?,")
_HEX_PATTERN = re.compile(r"[0-9A-Fa-f]*")
_LINE_BREAKS = re.compile(r"[\r\n]")


@dataclass(frozen=True)
class WrapperInfo:
    """Annotation parsed from the head of a wrapped string."""

    scheme: str
    mime_annotation: str
    is_base64: bool


@dataclass(frozen=True)
class Unwrapped:
    """A parsed wrapped string: its annotation plus the payload tail."""

    info: WrapperInfo
    payload: str


class WrapperCodec:
    """Encode and decode wrapped strings and their payloads."""

    def __init__(self, settings: CodecSettings | None = None) -> None:
        self.settings = settings or CodecSettings()

    def wrap(self, mime: str, raw: bytes) -> str:
        """Return ``raw`` wrapped with a hex payload under the configured scheme.

        Raises:
            InvalidMimeTypeError: If ``mime`` contains a ``,`` delimiter.
        """
        unwrapped = self.pack(mime, raw)
        return f"{unwrapped.info.scheme}:{unwrapped.info.mime_annotation},{unwrapped.payload}"

    def pack(self, mime: str, raw: bytes) -> Unwrapped:
        """Return the parsed form of ``wrap(mime, raw)`` without rendering and re-probing it.

        MIME parameters (``; charset=...``) are dropped so the header never
        carries a ``;extra`` segment that would mark the hex payload as base64.

        Raises:
            InvalidMimeTypeError: If ``mime`` contains a ``,`` delimiter.
        """
        info = WrapperInfo(
            scheme=self.settings.wrapper_scheme,
            mime_annotation=header_mime(mime),
            is_base64=False,
        )
        return Unwrapped(info=info, payload=raw.hex())

    def is_wrapped(self, value: str) -> bool:
        """Return True when the head of ``value`` matches the wrapper grammar."""
        return self._match(value[: self.settings.probe_length]) is not None

    def unwrap(self, value: str) -> Optional[Unwrapped]:
        """Parse ``value`` against the wrapper grammar.

        Returns ``None`` when the string is not wrapped; callers use this as a
        probe, so a mismatch is not an error. Only the first ``probe_length``
        characters are searched for the header.
        """
        match = self._match(value[: self.settings.probe_length])
        if match is None:
            return None
        scheme, mime_annotation, extra = match.groups()
        info = WrapperInfo(
            scheme=scheme,
            mime_annotation=mime_annotation,
            is_base64=bool(extra),
        )
        return Unwrapped(info=info, payload=value[match.end() :])

    def decode_payload(self, payload: str | bytes, is_base64: bool) -> bytes:
        """Decode a wrapper payload to raw bytes.

        Raw ``bytes`` that never went through a wrapper are returned unchanged.

        Raises:
            InvalidBase64DataError: If a base64 payload is rejected by strict decoding.
            MalformedHexPayloadError: If a hex payload has non-hex digits or odd length.
        """
        if isinstance(payload, bytes):
            return payload
        if is_base64:
            return self.base64_decode_strict(payload)
        _check_hex(payload)
        return bytes.fromhex(payload)

    def validate_payload(self, payload: str, is_base64: bool) -> None:
        """Raise the decode error for ``payload`` without keeping the decoded bytes."""
        if is_base64:
            self.base64_decode_strict(payload)
        else:
            _check_hex(payload)

    def base64_decode_strict(self, value: str | bytes) -> bytes:
        """Decode base64 text, rejecting characters outside the alphabet and bad padding.

        Embedded CR/LF line breaks are dropped first, so RFC 2045 chunked text
        decodes to the same bytes as a single line.
        """
        if isinstance(value, bytes):
            try:
                value = value.decode("ascii")
            except UnicodeDecodeError as exc:
                raise InvalidBase64DataError("Base64 data must be ASCII text.") from exc
        try:
            return base64.b64decode(_LINE_BREAKS.sub("", value), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidBase64DataError(f"Invalid base64 encoded data: {exc}") from exc

    def base64_encode(self, raw: bytes, chunked: bool = True) -> str:
        """Return ``raw`` as base64 text, split into RFC 2045 lines when ``chunked``.

        Chunked output ends every line, including the last, with the
        configured separator.
        """
        encoded = base64.b64encode(raw).decode("ascii")
        if not chunked:
            return encoded
        width = self.settings.base64_line_length
        separator = self.settings.base64_line_separator
        return "".join(
            encoded[start : start + width] + separator for start in range(0, len(encoded), width)
        )

    def is_wrapped_base64(self, value: str) -> bool:
        """Return True when ``value`` is wrapped and flagged as base64."""
        unwrapped = self.unwrap(value)
        return unwrapped is not None and unwrapped.info.is_base64

    def is_wrapped_hex(self, value: str) -> bool:
        """Return True when ``value`` is wrapped without a base64 flag and its payload is hex."""
        unwrapped = self.unwrap(value)
        if unwrapped is None or unwrapped.info.is_base64:
            return False
        return is_hex(unwrapped.payload)

    def is_base64_string(self, value: str | bytes) -> bool:
        """Return True when ``value`` survives strict base64 decoding.

        This is a loose heuristic: the empty string and many short strings
        qualify. Structural checks must run before it.
        """
        try:
            self.base64_decode_strict(value)
        except InvalidBase64DataError:
            return False
        return True

    @staticmethod
    def _match(head: str) -> Optional[re.Match[str]]:
        return WRAPPER_PATTERN.match(head)


def is_hex(value: str) -> bool:
    """Return True when every character of ``value`` is a hexadecimal digit."""
    return _HEX_PATTERN.fullmatch(value) is not None


def header_mime(mime: str) -> str:
    """Return ``mime`` reduced to ``type/subtype``, fit for a wrapper header.

    Raises:
        InvalidMimeTypeError: If ``mime`` contains a ``,`` delimiter.
    """
    essence = mime.split(";", 1)[0].strip()
    if "," in essence:
        raise InvalidMimeTypeError(f"MIME type {mime!r} cannot contain \",\".")
    return essence


def _check_hex(payload: str) -> None:
    if not is_hex(payload):
        raise MalformedHexPayloadError("Wrapped payload contains non-hexadecimal characters.")
    if len(payload) % 2:
        raise MalformedHexPayloadError(
            f"Wrapped hex payload has an odd number of digits ({len(payload)})."
        )


__all__ = ["WRAPPER_PATTERN", "WrapperInfo", "Unwrapped", "WrapperCodec", "header_mime", "is_hex"]
