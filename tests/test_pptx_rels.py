from __future__ import annotations

import pytest

from pptslides.core.extract import SlideParseError, resolve
from pptslides.core.extract.pptx_rels import parse_relationships, resolve_target
from pptx_factory import HYPERLINK_REL, LAYOUT_REL, rel, rels_xml


def test_relative_target_resolves_to_package_path():
    xml = rels_xml(rel("rId2", "../media/image1.png"))
    assert resolve(xml) == {"rId2": "ppt/media/image1.png"}


def test_non_image_relationships_dropped():
    xml = rels_xml(
        rel("rId1", "../slideLayouts/slideLayout2.xml", LAYOUT_REL),
        rel("rId2", "../media/image1.png"),
        rel("rId3", "https://example.com", HYPERLINK_REL, external=True),
    )
    assert resolve(xml) == {"rId2": "ppt/media/image1.png"}


def test_external_image_dropped():
    xml = rels_xml(rel("rId4", "https://example.com/logo.png", external=True))
    assert resolve(xml) == {}


def test_order_follows_document():
    xml = rels_xml(rel("rId9", "../media/b.png"), rel("rId2", "../media/a.png"))
    assert list(resolve(xml).values()) == ["ppt/media/b.png", "ppt/media/a.png"]


@pytest.mark.parametrize(
    "target, expected",
    [
        ("../media/image1.png", "ppt/media/image1.png"),
        ("/ppt/media/image2.jpeg", "ppt/media/image2.jpeg"),
        ("media/x.png", "ppt/slides/media/x.png"),
        ("./../media/y.jpg", "ppt/media/y.jpg"),
        ("../../../../z.png", "z.png"),
    ],
)
def test_resolve_target(target, expected):
    assert resolve_target(target, "ppt/slides") == expected


def test_parse_relationships_keeps_all_types():
    xml = rels_xml(rel("rId1", "../slideLayouts/slideLayout2.xml", LAYOUT_REL), rel("rId2", "../media/i.png"))
    rels = parse_relationships(xml)
    assert [r.id for r in rels] == ["rId1", "rId2"]
    assert rels[0].type == LAYOUT_REL
    assert not rels[1].external


def test_malformed_rels_raise_parse_error():
    with pytest.raises(SlideParseError):
        resolve("<Relationships><Relationship")


def test_wrong_root_raises_parse_error():
    with pytest.raises(SlideParseError):
        resolve("<foo/>")


def test_strict_ooxml_image_relationship_accepted():
    strict = "http://purl.oclc.org/ooxml/officeDocument/relationships/image"
    xml = rels_xml(rel("rId3", "../media/image3.png", strict))
    assert resolve(xml) == {"rId3": "ppt/media/image3.png"}
