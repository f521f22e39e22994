"""MIME sniffing and content hashing."""

from __future__ import annotations

import hashlib
import logging
from typing import Optional, Protocol

try:  # pragma: no cover - libmagic is a system library
    import magic
except ImportError:  # pragma: no cover - executed when libmagic is missing
    magic = None

from contentwrap.errors import MimeDetectionUnavailableError, UnsupportedHashAlgorithmError

LOGGER = logging.getLogger(__name__)


class MimeDetector(Protocol):
    """Anything that can sniff a MIME type from a byte buffer."""

    def detect(self, data: bytes) -> Optional[str]:
        """Return the sniffed MIME type, or None when inconclusive."""


class MagicMimeDetector:
    """Sniff MIME types from content using python-magic (libmagic)."""

    def __init__(self) -> None:
        if magic is None:
            raise MimeDetectionUnavailableError(
                "python-magic could not load libmagic; MIME sniffing is unavailable."
            )
        self._magic = magic.Magic(mime=True)

    def detect(self, data: bytes) -> Optional[str]:
        try:
            detected = self._magic.from_buffer(data)
        except magic.MagicException as exc:
            raise MimeDetectionUnavailableError(f"libmagic failed to sniff content: {exc}") from exc
        return detected or None


def default_mime_detector() -> Optional[MimeDetector]:
    """Return a libmagic-backed detector, or None when libmagic is not installed."""
    try:
        return MagicMimeDetector()
    except MimeDetectionUnavailableError as exc:
        LOGGER.info("%s Falling back to a generic MIME type.", exc)
        return None


class HashComputer:
    """Compute hex digests of byte content with any ``hashlib`` algorithm."""

    def __init__(self, algorithm: str = "sha256") -> None:
        self.algorithm = algorithm

    def compute(self, data: bytes, algorithm: Optional[str] = None) -> str:
        """Return the hex digest of ``data``.

        Raises:
            UnsupportedHashAlgorithmError: If the host lacks the algorithm, or it
                has no fixed digest size (``shake_*``).
        """
        name = algorithm or self.algorithm
        try:
            digest = hashlib.new(name)
        except (ValueError, TypeError) as exc:
            raise UnsupportedHashAlgorithmError(f"Unsupported hash algorithm '{name}'.") from exc
        if digest.digest_size == 0:
            raise UnsupportedHashAlgorithmError(
                f"Hash algorithm '{name}' has a variable digest length."
            )
        digest.update(data)
        return digest.hexdigest()


__all__ = [
    "MimeDetector",
    "MagicMimeDetector",
    "default_mime_detector",
    "HashComputer",
]
