from __future__ import annotations

import io
import zipfile

import pytest

from pptslides.core.extract import ArchiveCorrupt, EntryMissing, open_package
from pptx_factory import PNG_BYTES, build_pptx, with_compress_type


def test_open_from_bytes_lists_entries():
    data = build_pptx({"ppt/slides/slide1.xml": "<x/>", "ppt/media/image1.png": PNG_BYTES})
    with open_package(data) as pkg:
        assert pkg.list_entries("ppt/slides/") == {"ppt/slides/slide1.xml"}
        assert "ppt/media/image1.png" in pkg
        assert pkg.read_bytes("ppt/media/image1.png") == PNG_BYTES
        assert pkg.read_text("ppt/slides/slide1.xml") == "<x/>"


def test_open_from_path_and_stream(tmp_path):
    data = build_pptx({"ppt/slides/slide1.xml": "<x/>"})
    path = tmp_path / "deck.pptx"
    path.write_bytes(data)

    with open_package(path) as pkg:
        assert pkg.origin == str(path)
        assert pkg.has("ppt/slides/slide1.xml")

    with open_package(io.BytesIO(data)) as pkg:
        assert pkg.has("ppt/slides/slide1.xml")


def test_directory_entries_are_not_listed():
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("ppt/slides/", b"")
        zf.writestr("ppt/slides/slide1.xml", "<x/>")
    with open_package(buf.getvalue()) as pkg:
        assert pkg.list_entries("ppt/") == {"ppt/slides/slide1.xml"}


@pytest.mark.parametrize("data", [b"", b"not a zip at all", b"PK\x03\x04truncated"])
def test_garbage_is_archive_corrupt(data):
    with pytest.raises(ArchiveCorrupt):
        open_package(data)


def test_missing_file_is_archive_corrupt(tmp_path):
    with pytest.raises(ArchiveCorrupt):
        open_package(tmp_path / "nope.pptx")


def test_missing_entry_raises_entry_missing():
    with open_package(build_pptx({})) as pkg:
        with pytest.raises(EntryMissing) as exc_info:
            pkg.read_bytes("ppt/slides/slide9.xml")
        assert exc_info.value.path == "ppt/slides/slide9.xml"
        with pytest.raises(EntryMissing):
            pkg.read_text("ppt/slides/slide9.xml")


def test_read_text_strips_bom():
    data = build_pptx({"a.xml": b"\xef\xbb\xbf<a/>"})
    with open_package(data) as pkg:
        assert pkg.read_text("a.xml") == "<a/>"


def test_unsupported_compression_is_entry_missing():
    data = with_compress_type(build_pptx({"ppt/media/image1.png": PNG_BYTES}), "ppt/media/image1.png", 9)
    with open_package(data) as pkg:
        with pytest.raises(EntryMissing) as exc_info:
            pkg.read_bytes("ppt/media/image1.png")
    assert isinstance(exc_info.value.__cause__, NotImplementedError)
