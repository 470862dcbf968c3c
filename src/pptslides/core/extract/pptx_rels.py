"""
pptx_rels.py — Parse a slide relationship part and resolve image targets.

A slide rels part looks like:

    <Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
      <Relationship Id="rId2" Type=".../relationships/image" Target="../media/image1.png"/>
    </Relationships>

Targets are relative to the directory of the owning part (ppt/slides), so
`../media/image1.png` resolves to `ppt/media/image1.png`.
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Union

from pptx.opc.constants import RELATIONSHIP_TARGET_MODE as RTM
from pptx.opc.constants import RELATIONSHIP_TYPE as RT

from pptslides.core.extract.errors import SlideParseError
from pptslides.core.extract.models import Relationship

logger = logging.getLogger(__name__)

# Transitional URI (what PowerPoint writes) and the ISO strict spelling
IMAGE_REL_TYPES: frozenset[str] = frozenset(
    {
        RT.IMAGE,
        "http://purl.oclc.org/ooxml/officeDocument/relationships/image",
    }
)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def parse_relationships(rels_xml: Union[str, bytes], *, part: str = "<rels>") -> list[Relationship]:
    """All relationships declared in a rels part, in document order."""
    try:
        root = ET.fromstring(rels_xml)
    except ET.ParseError as exc:
        raise SlideParseError(part, str(exc)) from exc

    if _local(root.tag) != "Relationships":
        raise SlideParseError(part, f"unexpected root element <{_local(root.tag)}>")

    rels: list[Relationship] = []
    for el in root:
        if _local(el.tag) != "Relationship":
            continue
        rid = el.get("Id") or ""
        target = el.get("Target") or ""
        if not rid or not target:
            logger.debug("%s: relationship without Id/Target ignored", part)
            continue
        rels.append(
            Relationship(
                id=rid,
                type=el.get("Type") or "",
                target=target,
                external=(el.get("TargetMode") or "") == RTM.EXTERNAL,
            )
        )
    return rels


def resolve_target(target: str, base_dir: str = "ppt/slides") -> str:
    """Resolve a relationship target to a package entry name.

    Leading "/" means package-absolute. ".." above the package root is clamped.
    """
    if target.startswith("/"):
        segments: list[str] = []
        rest = target.lstrip("/")
    else:
        segments = [s for s in base_dir.split("/") if s]
        rest = target

    for seg in rest.split("/"):
        if seg in ("", "."):
            continue
        if seg == "..":
            if segments:
                segments.pop()
            continue
        segments.append(seg)
    return "/".join(segments)


def is_image_relationship(rel: Relationship) -> bool:
    return rel.type in IMAGE_REL_TYPES


def resolve(rels_xml: Union[str, bytes], *, base_dir: str = "ppt/slides", part: str = "<rels>") -> dict[str, str]:
    """Map relationship id -> package path, for internal image relationships only."""
    out: dict[str, str] = {}
    for rel in parse_relationships(rels_xml, part=part):
        if not is_image_relationship(rel):
            continue
        if rel.external:
            logger.debug("%s: %s links an external image (%s); skipped", part, rel.id, rel.target)
            continue
        out[rel.id] = resolve_target(rel.target, base_dir)
    return out
