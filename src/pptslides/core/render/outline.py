"""
outline.py — Plain-text rendering of extracted slides.

The visual renderer lives outside this package; anything that can turn a
sequence of Slide records into output satisfies SlideRenderer. OutlineRenderer
is the bundled text implementation used by `pptslides extract --format text`:

    [1] Welcome
    • Hello world

    [2] Agenda
    First
    Second
    (image) ppt/media/image1.png
"""
from __future__ import annotations

from typing import Iterable, Protocol

from pptslides.core.extract.models import Paragraph, Slide

BULLET = "• "
INDENT = "  "


class SlideRenderer(Protocol):
    def render(self, slides: Iterable[Slide]) -> str: ...


def paragraph_lines(para: Paragraph) -> list[str]:
    lines = para.text.split("\n")
    if not para.is_list:
        return lines
    return [f"{INDENT * lvl}{BULLET}{ln}" for ln, lvl in zip(lines, para.levels)]


class OutlineRenderer:
    def __init__(self, *, show_images: bool = True) -> None:
        self.show_images = show_images

    def render_slide(self, slide: Slide) -> str:
        lines = [f"[{slide.ordinal}] {slide.title}".rstrip()]
        for para in slide.paragraphs:
            lines.extend(paragraph_lines(para))
        if self.show_images:
            lines.extend(f"(image) {path}" for path in slide.images)
        return "\n".join(lines)

    def render(self, slides: Iterable[Slide]) -> str:
        return "\n\n".join(self.render_slide(s) for s in slides)
