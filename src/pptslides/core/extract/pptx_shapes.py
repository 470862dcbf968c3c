"""
pptx_shapes.py — Shape tree -> title + styled paragraphs.

The slide XML is parsed once into ShapeNode records (placeholder role plus
already-parsed paragraphs); title detection and the paragraph stream then work
on those records only.

Relevant DrawingML / PresentationML structure:

    p:sld/p:cSld/p:spTree
        p:sp                            text-bearing shape
            p:nvSpPr/p:nvPr/p:ph@type   placeholder role (title, ctrTitle, body, ...)
            p:txBody/a:p                paragraphs
                a:pPr@lvl, a:pPr/a:buNone
                a:r/a:rPr@b, a:r/a:t    runs
        p:grpSp                         group; walked recursively
        p:pic, p:graphicFrame, p:cxnSp  no text body; skipped
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union

from pptx.oxml.ns import qn

from pptslides.core.extract.errors import SlideParseError
from pptslides.core.extract.models import Paragraph, Run

logger = logging.getLogger(__name__)

TITLE_PLACEHOLDER_TYPES: frozenset[str] = frozenset({"title", "ctrTitle"})
# Date / footer / slide-number placeholders repeat on every slide
SKIPPED_PLACEHOLDER_TYPES: frozenset[str] = frozenset({"dt", "ftr", "sldNum"})

_TRUE_VALUES = frozenset({"1", "true", "on"})


class TitleStrategy(str, Enum):
    """How the slide title is picked. One strategy per batch."""

    PLACEHOLDER = "placeholder"
    POSITIONAL = "positional"


@dataclass(frozen=True)
class ShapeNode:
    name: str
    placeholder_type: Optional[str]
    paragraphs: tuple[Paragraph, ...]

    @property
    def is_title(self) -> bool:
        return self.placeholder_type in TITLE_PLACEHOLDER_TYPES

    @property
    def text(self) -> str:
        return _one_line(" ".join(p.text for p in self.paragraphs))


def _one_line(s: str) -> str:
    return " ".join(s.split())


# ---------------------------------------------------------------------------
# Paragraph / run parsing
# ---------------------------------------------------------------------------


def _is_bold(rpr: Optional[ET.Element]) -> bool:
    if rpr is None:
        return False
    return (rpr.get("b") or "").lower() in _TRUE_VALUES


def _level(ppr: Optional[ET.Element]) -> int:
    if ppr is None:
        return 0
    try:
        lvl = int(ppr.get("lvl", "0"))
    except ValueError:
        return 0
    return lvl if lvl >= 0 else 0


def _trim_runs(runs: list[Run]) -> list[Run]:
    """Strip leading whitespace off the first runs and trailing off the last."""
    out = list(runs)
    while out:
        head = out[0].text.lstrip()
        if head:
            out[0] = Run(head, out[0].is_bold)
            break
        out.pop(0)
    while out:
        tail = out[-1].text.rstrip()
        if tail:
            out[-1] = Run(tail, out[-1].is_bold)
            break
        out.pop()
    return out


def parse_paragraph(p_el: ET.Element) -> Optional[Paragraph]:
    """One a:p element -> Paragraph, or None when it carries no visible text."""
    runs: list[Run] = []
    for child in p_el:
        if child.tag in (qn("a:r"), qn("a:fld")):
            t = child.find(qn("a:t"))
            text = t.text if t is not None and t.text else ""
            if text:
                runs.append(Run(text, _is_bold(child.find(qn("a:rPr")))))
        elif child.tag == qn("a:br"):
            runs.append(Run("\n", _is_bold(child.find(qn("a:rPr")))))

    runs = _trim_runs(runs)
    if not runs:
        return None

    ppr = p_el.find(qn("a:pPr"))
    is_list = ppr is None or ppr.find(qn("a:buNone")) is None
    return Paragraph(runs=tuple(runs), is_list=is_list, level=_level(ppr))


# ---------------------------------------------------------------------------
# Shape tree
# ---------------------------------------------------------------------------


def _placeholder_type(sp: ET.Element) -> Optional[str]:
    ph = sp.find(f"{qn('p:nvSpPr')}/{qn('p:nvPr')}/{qn('p:ph')}")
    if ph is None:
        return None
    # ST_PlaceholderType defaults to "obj"
    return ph.get("type") or "obj"


def _shape_name(sp: ET.Element) -> str:
    c_nv_pr = sp.find(f"{qn('p:nvSpPr')}/{qn('p:cNvPr')}")
    return (c_nv_pr.get("name") or "") if c_nv_pr is not None else ""


def _iter_sp(container: ET.Element) -> Iterator[ET.Element]:
    for el in container:
        if el.tag == qn("p:sp"):
            yield el
        elif el.tag == qn("p:grpSp"):
            yield from _iter_sp(el)


def parse_shape_tree(slide_xml: Union[str, bytes], *, part: str = "<slide>") -> list[ShapeNode]:
    """Parse slide XML into text-bearing shapes, in document order."""
    try:
        root = ET.fromstring(slide_xml)
    except ET.ParseError as exc:
        raise SlideParseError(part, str(exc)) from exc

    if root.tag != qn("p:sld"):
        raise SlideParseError(part, f"unexpected root element {root.tag}")

    sp_tree = root.find(f"{qn('p:cSld')}/{qn('p:spTree')}")
    if sp_tree is None:
        logger.debug("%s: no shape tree", part)
        return []

    shapes: list[ShapeNode] = []
    for sp in _iter_sp(sp_tree):
        ph_type = _placeholder_type(sp)
        if ph_type in SKIPPED_PLACEHOLDER_TYPES:
            continue
        tx_body = sp.find(qn("p:txBody"))
        if tx_body is None:
            continue
        paragraphs = []
        for p_el in tx_body.findall(qn("a:p")):
            para = parse_paragraph(p_el)
            if para is not None:
                paragraphs.append(para)
        shapes.append(
            ShapeNode(name=_shape_name(sp), placeholder_type=ph_type, paragraphs=tuple(paragraphs))
        )
    return shapes


# ---------------------------------------------------------------------------
# Title detection
# ---------------------------------------------------------------------------


def _without_title_runs(paragraphs: list[Paragraph], title: str) -> list[Paragraph]:
    out: list[Paragraph] = []
    for para in paragraphs:
        runs = _trim_runs([r for r in para.runs if r.text.strip() != title])
        if not runs:
            continue
        if len(runs) == len(para.runs):
            out.append(para)
        else:
            out.append(Paragraph(runs=tuple(runs), is_list=para.is_list, level=para.level))
    return out


def split_title(
    shapes: list[ShapeNode],
    strategy: TitleStrategy = TitleStrategy.PLACEHOLDER,
) -> tuple[str, list[Paragraph]]:
    strategy = TitleStrategy(strategy)
    title = ""
    title_shape: Optional[ShapeNode] = None

    if strategy is TitleStrategy.POSITIONAL:
        for shape in shapes:
            if shape.paragraphs:
                title_shape = shape
                break
    else:
        for shape in shapes:
            if shape.is_title and shape.paragraphs:
                title_shape = shape
                break

    if title_shape is not None:
        title = title_shape.text

    paragraphs: list[Paragraph] = []
    for shape in shapes:
        if shape is title_shape:
            continue
        paragraphs.extend(shape.paragraphs)

    if strategy is TitleStrategy.PLACEHOLDER and title:
        paragraphs = _without_title_runs(paragraphs, title)

    return title, paragraphs


def extract(
    slide_xml: Union[str, bytes],
    *,
    strategy: TitleStrategy = TitleStrategy.PLACEHOLDER,
    part: str = "<slide>",
) -> tuple[str, list[Paragraph]]:
    """Slide XML -> (title, paragraphs in document order)."""
    shapes = parse_shape_tree(slide_xml, part=part)
    return split_title(shapes, strategy)
