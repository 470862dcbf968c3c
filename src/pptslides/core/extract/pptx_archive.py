"""
pptx_archive.py — Read-only access to the zip container of a .pptx package.

    pkg = open_package(data)            # bytes, path or binary file object
    pkg.list_entries("ppt/slides/")     # -> set of entry names
    pkg.read_bytes("ppt/media/image1.png")

ArchiveCorrupt is raised by open_package only. Per-entry failures raise
EntryMissing so callers can skip one part and carry on.
"""
from __future__ import annotations

import io
import logging
import zipfile
import zlib
from pathlib import Path
from typing import BinaryIO, Union

from pptslides.core.extract.errors import ArchiveCorrupt, EntryMissing

logger = logging.getLogger(__name__)

PackageSource = Union[bytes, bytearray, memoryview, str, Path, BinaryIO]


class Package:
    """A mapping-like view of the zip entries. Never writes."""

    def __init__(self, zf: zipfile.ZipFile, *, origin: str = "<bytes>") -> None:
        self._zf = zf
        self.origin = origin
        # directory entries carry no content
        self._names: frozenset[str] = frozenset(
            n for n in zf.namelist() if not n.endswith("/")
        )

    def __enter__(self) -> "Package":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and path in self._names

    def __len__(self) -> int:
        return len(self._names)

    def close(self) -> None:
        self._zf.close()

    @property
    def names(self) -> frozenset[str]:
        return self._names

    def has(self, path: str) -> bool:
        return path in self._names

    def list_entries(self, prefix: str = "") -> set[str]:
        return {n for n in self._names if n.startswith(prefix)}

    def read_bytes(self, path: str) -> bytes:
        if path not in self._names:
            raise EntryMissing(path)
        try:
            return self._zf.read(path)
        except (zipfile.BadZipFile, zlib.error, EOFError, OSError, NotImplementedError, RuntimeError) as exc:
            # a damaged or encrypted member fails only this entry
            raise EntryMissing(path, f"unreadable: {exc}") from exc

    def read_text(self, path: str, encoding: str = "utf-8-sig") -> str:
        raw = self.read_bytes(path)
        return raw.decode(encoding, errors="replace")


def open_package(source: PackageSource) -> Package:
    """Open a .pptx package from bytes, a filesystem path or a binary stream."""
    origin = "<bytes>"
    try:
        if isinstance(source, (bytes, bytearray, memoryview)):
            fp: Union[str, BinaryIO] = io.BytesIO(bytes(source))
        elif isinstance(source, (str, Path)):
            origin = str(source)
            fp = str(source)
        else:
            origin = str(getattr(source, "name", "<stream>"))
            fp = source
        zf = zipfile.ZipFile(fp, "r")
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError, EOFError) as exc:
        raise ArchiveCorrupt(f"not a readable zip container: {origin} ({exc})") from exc

    pkg = Package(zf, origin=origin)
    logger.debug("opened package %s (%d entries)", origin, len(pkg))
    return pkg
