"""Derive MIME type, hashes and file extensions for content objects."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from contentwrap.config.models import ContentSettings
from contentwrap.errors import MimeDetectionUnavailableError

from .detectors import HashComputer, MimeDetector

if TYPE_CHECKING:
    from .objects import ContentObject

LOGGER = logging.getLogger(__name__)


def extension_from_mime(mime_type: str) -> str:
    """Guess an extension from a MIME subtype.

    The subtype is the text after the last ``/``; one leading qualifier ending
    in ``-`` or ``.`` is stripped, so ``text/x-php`` gives ``php`` and
    ``image/jpeg`` gives ``jpeg``. Structured suffixes such as ``+xml`` are kept.
    """
    subtype = mime_type.rsplit("/", 1)[-1]
    for index, char in enumerate(subtype):
        if char in "-.":
            return subtype[index + 1 :]
    return subtype


class MetadataResolver:
    """Resolve advisory metadata from a content object's current snapshot."""

    def __init__(
        self,
        settings: ContentSettings | None = None,
        detector: Optional[MimeDetector] = None,
    ) -> None:
        self.settings = settings or ContentSettings()
        self.detector = detector if self.settings.sniff_mime else None
        self.hasher = HashComputer(self.settings.hash_algorithm)

    def sniff_mime(self, data: bytes) -> str:
        """Sniff ``data`` with the detector, falling back to the generic MIME type."""
        if self.detector is None:
            return self.settings.fallback_mime_type
        try:
            detected = self.detector.detect(data)
        except MimeDetectionUnavailableError as exc:
            LOGGER.debug("MIME sniffing failed (%s); using fallback.", exc)
            return self.settings.fallback_mime_type
        return detected or self.settings.fallback_mime_type

    def resolve_mime(self, content: "ContentObject") -> str:
        """Return the wrapper annotation, an explicit override, or a sniffed MIME type.

        Resolution runs once; the result is cached on ``content``.
        """
        cached = content.cached_mime_type
        if cached is not None:
            return cached
        info = content.wrapper_info
        if info is not None and info.mime_annotation:
            resolved = info.mime_annotation
        else:
            resolved = self.sniff_mime(content.raw)
            LOGGER.debug("Sniffed MIME type %s for %r", resolved, content.name)
        content.cache_mime_type(resolved)
        return resolved

    def resolve_hash(self, content: "ContentObject", algorithm: Optional[str] = None) -> str:
        """Return the hex digest of the decoded raw bytes."""
        return self.hasher.compute(content.raw, algorithm)

    def name_hash(self, content: "ContentObject", algorithm: Optional[str] = None) -> str:
        """Return the hex digest of the logical name."""
        return self.hasher.compute(content.name.encode("utf-8"), algorithm)

    def resolve_extension(self, content: "ContentObject", with_dot: bool = False) -> str:
        """Return the name's extension, or one guessed from the MIME type."""
        name = content.name
        if "." in name:
            extension = name.rsplit(".", 1)[-1]
        else:
            extension = extension_from_mime(self.resolve_mime(content))
        if with_dot and extension:
            return f".{extension}"
        return extension

    def obfuscated_name(
        self,
        content: "ContentObject",
        with_extension: bool = True,
        algorithm: Optional[str] = None,
    ) -> str:
        """Return a content-addressed name: the content hash plus an optional extension."""
        digest = self.resolve_hash(content, algorithm)
        if not with_extension:
            return digest
        return digest + self.resolve_extension(content, with_dot=True)


__all__ = ["MetadataResolver", "extension_from_mime"]
