"""
errors.py — Failure taxonomy for pptx slide extraction.

Only ArchiveCorrupt is fatal to a batch. Everything else is raised below the
slide boundary and converted into a per-slide or per-image skip.
"""
from __future__ import annotations


class PptxError(Exception):
    """Base class for every extraction failure."""


class ArchiveCorrupt(PptxError):
    """The input is not a readable zip container."""


class EntryMissing(PptxError):
    """A named entry is absent from the package (or cannot be decompressed)."""

    def __init__(self, path: str, detail: str = "") -> None:
        self.path = path
        msg = f"entry not found: {path}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class SlideParseError(PptxError):
    """A slide or relationship part is not well-formed XML of the expected kind."""

    def __init__(self, part: str, detail: str = "") -> None:
        self.part = part
        msg = f"cannot parse {part}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class UnsupportedImageType(PptxError):
    """An image reference whose extension the renderer cannot display."""

    def __init__(self, path: str, ext: str) -> None:
        self.path = path
        self.ext = ext
        super().__init__(f"unsupported image type '{ext or '?'}': {path}")
