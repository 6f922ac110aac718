"""Read-only view over the entries of a content package archive."""

from __future__ import annotations

import io
import logging
import struct
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from pkgcheck.validator.errors import ArchiveUnreadable, CorruptArchive

logger = logging.getLogger(__name__)

_DECODE_ERRORS = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    zlib.error,
    EOFError,
    NotImplementedError,
    RuntimeError,
    ValueError,
    OSError,
    struct.error,
)


@dataclass(frozen=True)
class ArchiveEntry:
    """One member of the archive, as stored (path uses forward slashes)."""

    path: str
    is_directory: bool
    data: bytes = b""

    @property
    def file_name(self) -> str:
        """Last non-empty path segment, for files and directories alike."""
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    @property
    def directory_segments(self) -> list[str]:
        """Segments of the path above the entry's own name."""
        return self.path.split("/")[:-1]

    def text(self) -> str:
        return self.data.decode("utf-8", errors="replace")


class PackageArchive:
    """Immutable, ordered set of entries decoded once from a zip package."""

    def __init__(self, name: str, size: int, entries: list[ArchiveEntry]) -> None:
        self._name = name
        self._size = size
        self._entries = tuple(entries)
        self._by_path = {e.path: e for e in self._entries}

    @classmethod
    def from_bytes(cls, data: bytes, name: str = "") -> PackageArchive:
        """Decode raw archive bytes. Raises CorruptArchive if they are not a zip."""
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as zf:
                entries = [
                    ArchiveEntry(
                        path=info.filename,
                        is_directory=info.is_dir(),
                        data=b"" if info.is_dir() else zf.read(info),
                    )
                    for info in zf.infolist()
                ]
        except _DECODE_ERRORS as e:
            logger.warning("Failed to decode archive %r: %s", name, e)
            raise CorruptArchive(f"Cannot decode archive {name or '<bytes>'}: {e}") from e
        return cls(name=name, size=len(data), entries=entries)

    @classmethod
    def open(cls, path: str | Path, name: str | None = None) -> PackageArchive:
        """Read an archive from disk; the archive name defaults to the file name."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.warning("Failed to read archive %s: %s", path, e)
            raise ArchiveUnreadable(f"Cannot read archive {path}: {e}") from e
        return cls.from_bytes(data, name=name if name is not None else path.name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> int:
        """Size of the encoded archive in bytes."""
        return self._size

    def count(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ArchiveEntry]:
        return iter(self._entries)

    def entry(self, path: str) -> ArchiveEntry | None:
        return self._by_path.get(path)

    def entries_with_prefix(self, prefix: str) -> list[ArchiveEntry]:
        return [e for e in self._entries if e.path.startswith(prefix)]

    def entries_with_suffix(self, suffix: str) -> list[ArchiveEntry]:
        return [e for e in self._entries if e.path.endswith(suffix)]

    def has_prefix(self, prefix: str) -> bool:
        return any(e.path.startswith(prefix) for e in self._entries)
