"""
pptx_normalize.py — Text-level transforms applied after shape-tree extraction.

- capitalize_lead: uppercase the first character of each paragraph.
- merge_adjacent: fuse consecutive paragraphs of the same kind (list / plain)
  into one block, one line per source paragraph.

Both transforms are idempotent and keep per-run bold spans intact.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from pptslides.core.extract.models import Paragraph, Run

LINE_BREAK = "\n"


def capitalize_lead(paragraphs: Iterable[Paragraph]) -> list[Paragraph]:
    out: list[Paragraph] = []
    for para in paragraphs:
        if not para.runs or not para.runs[0].text:
            out.append(para)
            continue
        first = para.runs[0]
        lead = first.text[0].upper()
        # "ß".upper() == "SS": leave characters without a single-char capital
        if len(lead) != 1 or lead == first.text[0]:
            out.append(para)
            continue
        runs = (Run(lead + first.text[1:], first.is_bold),) + para.runs[1:]
        out.append(replace(para, runs=runs))
    return out


def merge_adjacent(paragraphs: Iterable[Paragraph]) -> list[Paragraph]:
    """Merge runs of paragraphs sharing `is_list` into single blocks.

    The merged block keeps the level of its first member as `level` and
    every member line's own level in `line_levels`.
    """
    out: list[Paragraph] = []
    for para in paragraphs:
        if out and out[-1].is_list == para.is_list:
            prev = out[-1]
            out[-1] = Paragraph(
                runs=prev.runs + (Run(LINE_BREAK),) + para.runs,
                is_list=prev.is_list,
                level=prev.level,
                line_levels=prev.levels + para.levels,
            )
        else:
            out.append(para)
    return out


def normalize_paragraphs(
    paragraphs: Iterable[Paragraph],
    *,
    capitalize: bool = True,
    merge: bool = True,
) -> list[Paragraph]:
    out = list(paragraphs)
    if capitalize:
        out = capitalize_lead(out)
    if merge:
        out = merge_adjacent(out)
    return out
