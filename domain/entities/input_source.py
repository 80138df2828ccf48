# domain/entities/input_source.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class BytesSource:
    """Owned in-memory file content."""

    filename: str
    content: bytes


@dataclass(frozen=True)
class BufferSource:
    """Borrowed view over a caller-owned buffer (bytearray, mmap, ...)."""

    filename: str
    buffer: memoryview


@dataclass(frozen=True)
class PathSource:
    """File on disk; read when the request is sent, not when it is built."""

    path: Path

    @property
    def filename(self) -> str:
        return self.path.name


InputSource = Union[BytesSource, BufferSource, PathSource]


@dataclass(frozen=True)
class FileInput:
    source: InputSource

    @classmethod
    def from_path(cls, path: Union[str, Path]):
        return cls(PathSource(Path(path)))

    @classmethod
    def from_bytes(cls, filename: str, content: bytes):
        return cls(BytesSource(filename, bytes(content)))

    @classmethod
    def from_buffer(cls, filename: str, buffer):
        return cls(BufferSource(filename, memoryview(buffer)))


class AudioInput(FileInput):
    pass


class ImageInput(FileInput):
    pass
