"""
models.py — Typed records produced by the slide extractor.

All records are immutable once built. `to_dict()` gives the JSON shape
described by core/schemas/slides.schema.json.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

SCHEMA_VERSION = "0.1"


@dataclass(frozen=True)
class Run:
    """A span of text with uniform formatting. `text` is never empty."""

    text: str
    is_bold: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "is_bold": self.is_bold}


@dataclass(frozen=True)
class Paragraph:
    """A block of runs. `"\\n"` runs separate its lines.

    `line_levels` holds one nesting level per line for blocks fused from
    several source paragraphs; when empty every line sits at `level`.
    """

    runs: tuple[Run, ...]
    is_list: bool = True
    level: int = 0
    line_levels: tuple[int, ...] = ()

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)

    @property
    def levels(self) -> tuple[int, ...]:
        if self.line_levels:
            return self.line_levels
        return (self.level,) * (self.text.count("\n") + 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "is_list": self.is_list,
            "level": self.level,
            "line_levels": list(self.levels),
            "runs": [r.to_dict() for r in self.runs],
        }


@dataclass(frozen=True)
class Slide:
    ordinal: int
    title: str
    paragraphs: tuple[Paragraph, ...] = ()
    images: tuple[str, ...] = ()
    source: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "ordinal": self.ordinal,
            "title": self.title,
            "paragraphs": [p.to_dict() for p in self.paragraphs],
            "images": list(self.images),
            "source": self.source,
        }


@dataclass(frozen=True)
class Relationship:
    id: str
    type: str
    target: str
    external: bool = False


@dataclass(frozen=True)
class SlidePartRef:
    """A located slide part and its companion rels part (None when absent)."""

    ordinal: int
    slide_path: str
    rels_path: Optional[str] = None


@dataclass(frozen=True)
class SlideResult:
    """Outcome of assembling one slide: a Slide, or a skip reason."""

    ordinal: int
    source: str
    slide: Optional[Slide] = None
    reason: Optional[str] = None
    warnings: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.slide is not None


@dataclass(frozen=True)
class Extraction:
    slides: tuple[Slide, ...] = ()
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "slide_count": len(self.slides),
            "slides": [s.to_dict() for s in self.slides],
            "warnings": list(self.warnings),
        }
