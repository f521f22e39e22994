"""Backing stores a content object materializes its raw bytes from."""

from __future__ import annotations

import io
import os
import tempfile
from pathlib import Path
from typing import IO, Optional

from contentwrap.errors import (
    ContentNotFoundError,
    UnreadableContentError,
    UnsupportedHandleKindError,
)

from .codec import Unwrapped, WrapperCodec, WrapperInfo


class FilePathStorage:
    """Content read directly from a file on disk."""

    wrapper_info: Optional[WrapperInfo] = None

    def __init__(self, path: Path) -> None:
        path = Path(path).expanduser()
        if not path.is_file():
            raise ContentNotFoundError(f"No readable file at {path}")
        if not os.access(path, os.R_OK):
            raise UnreadableContentError(f"File at {path} is not readable")
        self.path = path

    def read(self) -> bytes:
        try:
            return self.path.read_bytes()
        except PermissionError as exc:
            raise UnreadableContentError(f"File at {self.path} is not readable") from exc
        except FileNotFoundError as exc:
            raise ContentNotFoundError(f"No readable file at {self.path}") from exc

    def open(self) -> IO[bytes]:
        return self.path.open("rb")


class WrappedStringStorage:
    """Content held as a wrapped string; decoded on every read."""

    def __init__(self, unwrapped: Unwrapped, codec: WrapperCodec) -> None:
        codec.validate_payload(unwrapped.payload, unwrapped.info.is_base64)
        self._unwrapped = unwrapped
        self._codec = codec

    @property
    def wrapper_info(self) -> WrapperInfo:
        return self._unwrapped.info

    @property
    def payload(self) -> str:
        return self._unwrapped.payload

    def read(self) -> bytes:
        return self._codec.decode_payload(self._unwrapped.payload, self._unwrapped.info.is_base64)

    def open(self) -> IO[bytes]:
        return io.BytesIO(self.read())


class TemporaryBufferStorage:
    """An owned temporary copy of content taken from an external handle.

    The copy lives in memory until it exceeds ``max_size`` bytes and then
    spills to an anonymous temporary file.
    """

    wrapper_info: Optional[WrapperInfo] = None

    def __init__(self, max_size: int = 0) -> None:
        self._buffer = tempfile.SpooledTemporaryFile(max_size=max_size, mode="w+b")

    @classmethod
    def copy_from(
        cls,
        handle: IO,
        *,
        chunk_size: int,
        max_size: int = 0,
    ) -> "TemporaryBufferStorage":
        """Copy ``handle`` from its start to exhaustion, then restore its position.

        Non-seekable streams are copied from their current position and left
        exhausted. Text handles are re-encoded with their own encoding.

        Raises:
            UnsupportedHandleKindError: If ``handle`` is closed or not readable.
        """
        if not isinstance(handle, io.IOBase) or handle.closed or not handle.readable():
            raise UnsupportedHandleKindError(
                f"Expected an open, readable file or stream handle, got {type(handle).__name__}"
            )
        encoding = getattr(handle, "encoding", None) or "utf-8"
        seekable = handle.seekable()
        position = handle.tell() if seekable else None

        storage = cls(max_size=max_size)
        try:
            if seekable:
                handle.seek(0)
            while True:
                chunk = handle.read(chunk_size)
                if not chunk:
                    break
                if isinstance(chunk, str):
                    chunk = chunk.encode(encoding)
                storage._buffer.write(chunk)
        except BaseException:
            storage.close()
            raise
        finally:
            if position is not None:
                handle.seek(position)
        return storage

    def read(self) -> bytes:
        self._buffer.seek(0)
        return self._buffer.read()

    def open(self) -> IO[bytes]:
        return io.BytesIO(self.read())

    def close(self) -> None:
        self._buffer.close()


__all__ = ["FilePathStorage", "WrappedStringStorage", "TemporaryBufferStorage"]
