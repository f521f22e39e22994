"""Configuration models describing contentwrap settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ContentWrapBaseModel(BaseModel):
    """Shared configuration for contentwrap Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class CodecSettings(ContentWrapBaseModel):
    """Options for the wrapper codec and base64 rendering.

    Attributes:
        wrapper_scheme: Scheme tag written by ``wrap``.
        probe_length: Number of leading characters inspected when probing for a wrapper.
        base64_line_length: Encoded characters per line in chunked base64 output.
        base64_line_separator: Line break appended after each chunked base64 line.
    """

    wrapper_scheme: str = Field(default="data", pattern=r"^[A-Za-z0-9]+$")
    probe_length: int = Field(default=100, gt=0)
    base64_line_length: int = Field(default=76, gt=0)
    base64_line_separator: str = "\r\n"


class ContentSettings(ContentWrapBaseModel):
    """Options consumed by the metadata resolver and constructors.

    Attributes:
        default_name: Logical name given to objects built without one.
        hash_algorithm: Default ``hashlib`` algorithm for content hashes.
        fallback_mime_type: MIME type used when sniffing is unavailable or inconclusive.
        sniff_mime: Whether to sniff MIME types from content at all.
        copy_chunk_size: Read size used when copying external handles.
        spool_max_size: Bytes kept in memory before a handle copy spills to disk;
            0 keeps copies in memory regardless of size.
    """

    default_name: str = "temp"
    hash_algorithm: str = "sha256"
    fallback_mime_type: str = "application/octet-stream"
    sniff_mime: bool = True
    copy_chunk_size: int = Field(default=64 * 1024, gt=0)
    spool_max_size: int = Field(default=8 * 1024 * 1024, ge=0)


class LoggingSettings(ContentWrapBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: str = "WARNING"


class ContentWrapConfig(ContentWrapBaseModel):
    """Top-level configuration struct for contentwrap.

    Attributes:
        codec: Wrapper codec settings.
        content: Construction and metadata settings.
        logging: Logging configuration.
    """

    codec: CodecSettings = Field(default_factory=CodecSettings)
    content: ContentSettings = Field(default_factory=ContentSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


__all__ = [
    "ContentWrapBaseModel",
    "CodecSettings",
    "ContentSettings",
    "LoggingSettings",
    "ContentWrapConfig",
]
