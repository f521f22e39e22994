"""Typed failures raised while building and inspecting content objects."""


class ContentError(Exception):
    """Base exception for content construction and resolution."""


class InvalidBase64DataError(ContentError, ValueError):
    """Raised when strict base64 decoding rejects the input."""


class MalformedHexPayloadError(ContentError, ValueError):
    """Raised when a hex payload has non-hex characters or an odd digit count."""


class UnsupportedInputTypeError(ContentError, TypeError):
    """Raised when a value matches none of the recognized input shapes."""


class UnsupportedHandleKindError(ContentError, TypeError):
    """Raised when a handle is not a readable file or stream."""


class ContentNotFoundError(ContentError, FileNotFoundError):
    """Raised when a referenced path does not exist."""


class UnreadableContentError(ContentError, PermissionError):
    """Raised when a referenced path exists but cannot be opened for reading."""


class UnsupportedHashAlgorithmError(ContentError, ValueError):
    """Raised when the host does not provide the requested hash algorithm."""


class MimeDetectionUnavailableError(ContentError):
    """Raised by a MIME detector that cannot sniff content."""


class NotAnImageError(ContentError, ValueError):
    """Raised when image-only accessors are requested for non-image content."""


class InvalidMimeTypeError(ContentError, ValueError):
    """Raised when a MIME type cannot be written into a wrapper header."""


__all__ = [
    "ContentError",
    "InvalidBase64DataError",
    "MalformedHexPayloadError",
    "UnsupportedInputTypeError",
    "UnsupportedHandleKindError",
    "ContentNotFoundError",
    "UnreadableContentError",
    "UnsupportedHashAlgorithmError",
    "MimeDetectionUnavailableError",
    "NotAnImageError",
    "InvalidMimeTypeError",
]
