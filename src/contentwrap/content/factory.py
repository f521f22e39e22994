"""Construction entry points for content objects."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, Any, Optional

from contentwrap.config.models import ContentWrapConfig
from contentwrap.errors import UnsupportedInputTypeError

from .classifier import Representation, RepresentationClassifier, as_text
from .codec import WrapperCodec
from .detectors import MimeDetector, default_mime_detector
from .extractors import ImageMetadataReader, PillowImageReader
from .objects import ContentKind, ContentObject, Storage
from .resolver import MetadataResolver
from .storage import FilePathStorage, TemporaryBufferStorage, WrappedStringStorage

LOGGER = logging.getLogger(__name__)

_UNSET: Any = object()


class ContentFactory:
    """Build content objects from paths, handles, buffers, base64 and wrapped strings.

    The factory owns the codec, resolver and image reader every object it
    builds shares. ``detector`` defaults to libmagic when it is installed;
    pass ``None`` to disable sniffing, in which case MIME types fall back to
    ``content.fallback_mime_type``.
    """

    def __init__(
        self,
        config: Optional[ContentWrapConfig] = None,
        *,
        detector: Optional[MimeDetector] = _UNSET,
        image_reader: Optional[ImageMetadataReader] = None,
    ) -> None:
        self.config = config or ContentWrapConfig()
        if detector is _UNSET:
            detector = default_mime_detector() if self.config.content.sniff_mime else None
        self.codec = WrapperCodec(self.config.codec)
        self.resolver = MetadataResolver(self.config.content, detector)
        self.classifier = RepresentationClassifier(self.codec)
        self.image_reader = image_reader or PillowImageReader()

    def from_path(
        self,
        path: str | os.PathLike[str],
        name: Optional[str] = None,
        *,
        kind: ContentKind = ContentKind.GENERIC,
    ) -> ContentObject:
        """Reference a file on disk without copying it.

        The name defaults to the file's base name.

        Raises:
            ContentNotFoundError: If the path does not name an existing file.
            UnreadableContentError: If the file cannot be read.
        """
        storage = FilePathStorage(Path(path))
        return self._build(storage, name or storage.path.name, kind)

    def from_handle(
        self,
        handle: IO,
        name: Optional[str] = None,
        *,
        kind: ContentKind = ContentKind.GENERIC,
    ) -> ContentObject:
        """Copy an open handle's full contents into an owned temporary buffer.

        The handle's read position is restored afterwards.

        Raises:
            UnsupportedHandleKindError: If ``handle`` is not an open readable file or stream.
        """
        settings = self.config.content
        storage = TemporaryBufferStorage.copy_from(
            handle,
            chunk_size=settings.copy_chunk_size,
            max_size=settings.spool_max_size,
        )
        return self._build(storage, name, kind)

    def from_buffer(
        self,
        data: bytes | bytearray | memoryview | str,
        name: Optional[str] = None,
        *,
        kind: ContentKind = ContentKind.GENERIC,
        mime_type: Optional[str] = None,
    ) -> ContentObject:
        """Wrap raw bytes (text is UTF-8 encoded) as a hex-payload wrapped string.

        Unlike the other constructors, the MIME type is resolved here, at
        construction: it is sniffed from ``data`` unless given, reduced to
        ``type/subtype`` and recorded as the wrapper annotation.

        Raises:
            InvalidMimeTypeError: If ``mime_type`` contains a ``,`` delimiter.
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        elif not isinstance(data, bytes):
            data = bytes(data)
        mime = mime_type or self.resolver.sniff_mime(data)
        storage = WrappedStringStorage(self.codec.pack(mime, data), self.codec)
        return self._build(storage, name, kind)

    def from_base64(
        self,
        text: str | bytes,
        name: Optional[str] = None,
        *,
        kind: ContentKind = ContentKind.GENERIC,
    ) -> ContentObject:
        """Decode strict base64 text (chunked or not) and build from the bytes.

        Raises:
            InvalidBase64DataError: If strict decoding rejects ``text``.
        """
        return self.from_buffer(self.codec.base64_decode_strict(text), name, kind=kind)

    def from_wrapped(
        self,
        text: str,
        name: Optional[str] = None,
        *,
        kind: ContentKind = ContentKind.GENERIC,
    ) -> ContentObject:
        """Reference a wrapped string in place.

        Raises:
            UnsupportedInputTypeError: If ``text`` does not match the wrapper grammar.
            InvalidBase64DataError: If a base64 payload is malformed.
            MalformedHexPayloadError: If a hex payload is malformed.
        """
        unwrapped = self.codec.unwrap(text)
        if unwrapped is None:
            raise UnsupportedInputTypeError("Value does not match the wrapped string grammar.")
        storage = WrappedStringStorage(unwrapped, self.codec)
        return self._build(storage, name, kind)

    def from_best_guess(
        self,
        value: Any,
        name: Optional[str] = None,
        *,
        kind: ContentKind = ContentKind.GENERIC,
    ) -> ContentObject:
        """Classify ``value`` and build it through the matching constructor.

        Raises:
            UnsupportedInputTypeError: If ``value`` matches no recognized shape.
        """
        representation = self.classifier.classify(value)
        LOGGER.debug("Classified %s input as %s", type(value).__name__, representation.value)

        if representation is Representation.HANDLE:
            return self.from_handle(value, name, kind=kind)
        if representation is Representation.PATH:
            return self.from_path(value, name, kind=kind)
        if representation is Representation.WRAPPED:
            return self.from_wrapped(as_text(value) or "", name, kind=kind)
        if representation is Representation.BASE64:
            return self.from_base64(as_text(value) or "", name, kind=kind)
        return self.from_buffer(value, name, kind=kind)

    def _build(self, storage: Storage, name: Optional[str], kind: ContentKind) -> ContentObject:
        content = ContentObject(
            storage,
            name=name or self.config.content.default_name,
            codec=self.codec,
            resolver=self.resolver,
            image_reader=self.image_reader,
        )
        kind = ContentKind(kind)
        if kind is ContentKind.GENERIC:
            return content
        return content.as_kind(kind)


_default_factory: Optional[ContentFactory] = None


def default_factory() -> ContentFactory:
    """Return the process-wide factory built from default settings."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ContentFactory()
    return _default_factory


def from_path(path, name=None, *, kind=ContentKind.GENERIC) -> ContentObject:
    return default_factory().from_path(path, name, kind=kind)


def from_handle(handle, name=None, *, kind=ContentKind.GENERIC) -> ContentObject:
    return default_factory().from_handle(handle, name, kind=kind)


def from_buffer(data, name=None, *, kind=ContentKind.GENERIC) -> ContentObject:
    return default_factory().from_buffer(data, name, kind=kind)


def from_base64(text, name=None, *, kind=ContentKind.GENERIC) -> ContentObject:
    return default_factory().from_base64(text, name, kind=kind)


def from_best_guess(value, name=None, *, kind=ContentKind.GENERIC) -> ContentObject:
    return default_factory().from_best_guess(value, name, kind=kind)


__all__ = [
    "ContentFactory",
    "default_factory",
    "from_path",
    "from_handle",
    "from_buffer",
    "from_base64",
    "from_best_guess",
]
