"""Content objects: uniform access to bytes, base64, hashes and MIME types."""

from __future__ import annotations

from enum import Enum
from typing import IO, TYPE_CHECKING, Optional, Union, cast

from contentwrap.errors import NotAnImageError

from .codec import WrapperCodec, WrapperInfo, is_hex
from .extractors import ImageMetadataReader, ImageSize, PillowImageReader
from .resolver import MetadataResolver
from .storage import FilePathStorage, TemporaryBufferStorage, WrappedStringStorage

if TYPE_CHECKING:
    from PIL import Image

Storage = Union[FilePathStorage, WrappedStringStorage, TemporaryBufferStorage]


class ContentKind(str, Enum):
    """Capability set a content object is built with."""

    GENERIC = "generic"
    IMAGE = "image"


class ContentObject:
    """File-like content normalized to raw bytes with lazily resolved metadata.

    Instances own their storage. The underlying bytes never change after
    construction; only ``name`` and the MIME type can be overridden.
    """

    kind = ContentKind.GENERIC

    def __init__(
        self,
        storage: Storage,
        *,
        name: str,
        codec: WrapperCodec,
        resolver: MetadataResolver,
        image_reader: Optional[ImageMetadataReader] = None,
        mime_type: Optional[str] = None,
    ) -> None:
        self._storage = storage
        self._codec = codec
        self._resolver = resolver
        self._image_reader = image_reader
        self.name = name
        info = storage.wrapper_info
        if mime_type is None and info is not None and info.mime_annotation:
            mime_type = info.mime_annotation
        self._mime_type = mime_type

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, storage={type(self._storage).__name__})"

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = str(value)

    @property
    def storage(self) -> Storage:
        return self._storage

    @property
    def wrapper_info(self) -> Optional[WrapperInfo]:
        """Wrapper annotation when the storage is a wrapped string, else None."""
        return self._storage.wrapper_info

    @property
    def raw(self) -> bytes:
        """The canonical decoded bytes.

        Materialized from storage on every access; this can be expensive for
        large content.
        """
        return self._storage.read()

    def open(self) -> IO[bytes]:
        """Return a fresh readable binary stream positioned at the start."""
        return self._storage.open()

    def base64(self, chunked: bool = True) -> str:
        """Return the raw bytes as base64, RFC 2045 line-chunked by default."""
        return self._codec.base64_encode(self.raw, chunked=chunked)

    # MIME type ---------------------------------------------------------

    @property
    def mime_type(self) -> str:
        """The resolved MIME type; resolved on first access and then cached."""
        return self._resolver.resolve_mime(self)

    @mime_type.setter
    def mime_type(self, value: Optional[str]) -> None:
        self._mime_type = None if value is None else str(value)

    @property
    def cached_mime_type(self) -> Optional[str]:
        return self._mime_type

    def cache_mime_type(self, value: str) -> None:
        if self._mime_type is None:
            self._mime_type = value

    def detect_mime_type(self) -> str:
        """Sniff the raw bytes now, ignoring any cached or annotated MIME type."""
        return self._resolver.sniff_mime(self.raw)

    def is_image(self) -> bool:
        return self._top_level_type() == "image"

    def is_text(self) -> bool:
        return self._top_level_type() == "text"

    def is_audio(self) -> bool:
        return self._top_level_type() == "audio"

    def is_video(self) -> bool:
        return self._top_level_type() == "video"

    def _top_level_type(self) -> str:
        return self.mime_type.split("/", 1)[0].lower()

    # Hashes and names --------------------------------------------------

    def hash(self, algorithm: Optional[str] = None) -> str:
        """Hex digest of the raw bytes; equal content hashes equally however it was built."""
        return self._resolver.resolve_hash(self, algorithm)

    def name_hash(self, algorithm: Optional[str] = None) -> str:
        return self._resolver.name_hash(self, algorithm)

    def extension(self, with_dot: bool = False) -> str:
        return self._resolver.resolve_extension(self, with_dot=with_dot)

    def obfuscated_name(self, with_extension: bool = True, algorithm: Optional[str] = None) -> str:
        return self._resolver.obfuscated_name(
            self, with_extension=with_extension, algorithm=algorithm
        )

    # Wrapper predicates -------------------------------------------------

    def is_wrapped(self) -> bool:
        return self.wrapper_info is not None

    def is_wrapped_base64(self) -> bool:
        info = self.wrapper_info
        return info is not None and info.is_base64

    def is_wrapped_hex(self) -> bool:
        """True when the storage is wrapped and its payload is all hex digits."""
        info = self.wrapper_info
        if info is None or info.is_base64:
            return False
        return isinstance(self._storage, WrappedStringStorage) and is_hex(self._storage.payload)

    # Kinds -------------------------------------------------------------

    def as_kind(self, kind: ContentKind) -> "ContentObject":
        """Return a view of this content with the capabilities of ``kind``.

        Raises:
            NotAnImageError: If ``kind`` is IMAGE and the MIME type is not ``image/*``.
        """
        kind = ContentKind(kind)
        if kind is self.kind:
            return self
        if kind is ContentKind.IMAGE:
            if not self.is_image():
                raise NotAnImageError(
                    f"Content {self.name!r} has MIME type {self.mime_type}, not an image."
                )
            target: type[ContentObject] = ImageContent
        else:
            target = ContentObject
        return target(
            self._storage,
            name=self.name,
            codec=self._codec,
            resolver=self._resolver,
            image_reader=self._image_reader,
            mime_type=self._mime_type,
        )

    def as_image(self) -> "ImageContent":
        return cast(ImageContent, self.as_kind(ContentKind.IMAGE))


class ImageContent(ContentObject):
    """Content known to be an image, with dimension and channel accessors."""

    kind = ContentKind.IMAGE

    @property
    def image_reader(self) -> ImageMetadataReader:
        if self._image_reader is None:
            self._image_reader = PillowImageReader()
        return self._image_reader

    def size(self) -> ImageSize:
        """Decode the image header and return its size record."""
        return self.image_reader.read(self.raw)

    def meta(self) -> ImageSize:
        return self.size()

    def load(self) -> "Image.Image":
        """Return the decoded Pillow image."""
        return self.image_reader.load(self.raw)

    @property
    def width(self) -> int:
        return self.size().width

    @property
    def height(self) -> int:
        return self.size().height

    @property
    def image_format(self) -> Optional[str]:
        return self.size().format

    @property
    def image_mime_type(self) -> Optional[str]:
        """MIME type according to the image decoder rather than the sniffer."""
        return self.size().mime_type

    @property
    def channels(self) -> int:
        return self.size().channels

    @property
    def bits(self) -> int:
        return self.size().bits

    @property
    def dimensions_string(self) -> str:
        return self.size().dimensions


__all__ = ["ContentKind", "ContentObject", "ImageContent", "Storage"]
