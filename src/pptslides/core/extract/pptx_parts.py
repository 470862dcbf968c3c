"""
pptx_parts.py — Locate slide parts and their relationship parts.

Slides are ordered by the number in the part name (slide2 before slide10),
never by zip enumeration or lexical order.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from pptslides.core.extract.models import SlidePartRef
from pptslides.core.extract.pptx_archive import Package

logger = logging.getLogger(__name__)

SLIDES_DIR = "ppt/slides"
RELS_DIR = f"{SLIDES_DIR}/_rels"

# Anything shaped like a slide part; the suffix is validated separately
_SLIDE_PART_RE = re.compile(r"^ppt/slides/slide([^/]*)\.xml$")
_RELS_PART_RE = re.compile(r"^ppt/slides/_rels/slide([0-9]+)\.xml\.rels$")


def _parse_ordinal(suffix: str) -> Optional[int]:
    if not suffix.isascii() or not suffix.isdigit():
        return None
    n = int(suffix)
    return n if n >= 1 else None


def slide_ordinal(path: str) -> Optional[int]:
    """1-based ordinal from `ppt/slides/slideN.xml`, or None."""
    m = _SLIDE_PART_RE.match(path)
    if not m:
        return None
    return _parse_ordinal(m.group(1))


def rels_path_for(slide_path: str) -> str:
    """ppt/slides/slide1.xml -> ppt/slides/_rels/slide1.xml.rels"""
    head, _, name = slide_path.rpartition("/")
    return f"{head}/_rels/{name}.rels" if head else f"_rels/{name}.rels"


def build_rels_index(package: Package) -> dict[str, str]:
    """Map the slide number as spelled in the part name -> rels part path."""
    index: dict[str, str] = {}
    for name in sorted(package.list_entries(RELS_DIR + "/")):
        m = _RELS_PART_RE.match(name)
        if m:
            index[m.group(1)] = name
    return index


def _rels_for(index: dict[str, str], digits: str, n: int) -> Optional[str]:
    # exact spelling first (slide01.xml -> slide01.xml.rels), then by value
    if digits in index:
        return index[digits]
    if str(n) in index:
        return index[str(n)]
    for key in sorted(index):
        if int(key) == n:
            return index[key]
    return None


def locate_slide_parts(package: Package) -> tuple[list[SlidePartRef], list[str]]:
    """Return slide parts sorted by ordinal, plus warnings for excluded parts."""
    warnings: list[str] = []
    rels_index = build_rels_index(package)

    by_ordinal: dict[int, tuple[str, str]] = {}
    for name in sorted(package.list_entries(SLIDES_DIR + "/")):
        m = _SLIDE_PART_RE.match(name)
        if not m:
            continue
        n = _parse_ordinal(m.group(1))
        if n is None:
            msg = f"{name}: cannot derive slide number from part name; skipped"
            logger.warning(msg)
            warnings.append(msg)
            continue
        if n in by_ordinal:
            msg = f"{name}: duplicate slide number {n} (already {by_ordinal[n][0]}); skipped"
            logger.warning(msg)
            warnings.append(msg)
            continue
        by_ordinal[n] = (name, m.group(1))

    refs = [
        SlidePartRef(
            ordinal=n,
            slide_path=by_ordinal[n][0],
            rels_path=_rels_for(rels_index, by_ordinal[n][1], n),
        )
        for n in sorted(by_ordinal)
    ]

    orphans = sorted(p for k, p in rels_index.items() if int(k) not in by_ordinal)
    if orphans:
        logger.debug("ignoring rels parts without a slide: %s", orphans)

    logger.debug("located %d slide part(s)", len(refs))
    return refs, warnings
