from __future__ import annotations

import json

from pptslides.apps.cli import main as cli_main
from pptslides.apps.cli.main import run
from pptslides.core.utils.schema_validate import validate_extraction
from pptx_factory import PNG_BYTES, build_pptx, para, rel, rels_xml, slide_entries, titled_slide, with_compress_type
from pptx_factory import run as xrun


def _deck(tmp_path):
    entries: dict[str, object] = {}
    entries.update(slide_entries(1, titled_slide("Welcome", para(xrun("hello world")))))
    entries.update(slide_entries(2, titled_slide("Pics"), rels_xml(rel("rId2", "../media/image1.png"))))
    entries["ppt/media/image1.png"] = PNG_BYTES
    path = tmp_path / "deck.pptx"
    path.write_bytes(build_pptx(entries))
    return path


def test_extract_json(tmp_path, capsys):
    out = tmp_path / "out" / "slides.json"
    assert run(["extract", str(_deck(tmp_path)), "--out", str(out)]) == 0

    data = json.loads(out.read_text(encoding="utf-8"))
    assert validate_extraction(data) == []
    assert [s["title"] for s in data["slides"]] == ["Welcome", "Pics"]
    assert "[OK] extracted 2 slide(s)" in capsys.readouterr().out


def test_extract_text_outline(tmp_path):
    out = tmp_path / "slides.txt"
    assert run(["extract", str(_deck(tmp_path)), "--out", str(out), "--format", "text"]) == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith("[1] Welcome\n• Hello world\n")
    assert "(image) ppt/media/image1.png" in text


def test_extract_image_ext_flag(tmp_path, capsys):
    out = tmp_path / "slides.json"
    assert run(["extract", str(_deck(tmp_path)), "--out", str(out), "--image-ext", ".jpg"]) == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["slides"][1]["images"] == []
    assert "[WARN]" in capsys.readouterr().out


def test_extract_missing_input(tmp_path, capsys):
    assert run(["extract", str(tmp_path / "none.pptx"), "--out", str(tmp_path / "o.json")]) == 2
    assert "[NG] input not found" in capsys.readouterr().out


def test_extract_corrupt_archive_removes_stale_output(tmp_path, capsys):
    bad = tmp_path / "bad.pptx"
    bad.write_bytes(b"garbage")
    out = tmp_path / "o.json"
    out.write_text("stale", encoding="utf-8")

    assert run(["extract", str(bad), "--out", str(out)]) == 2
    assert not out.exists()
    assert "[NG] extract failed" in capsys.readouterr().out


def test_validate_command(tmp_path, capsys):
    out = tmp_path / "slides.json"
    run(["extract", str(_deck(tmp_path)), "--out", str(out)])
    assert run(["validate", str(out)]) == 0

    out.write_text(json.dumps({"schema_version": "9"}), encoding="utf-8")
    assert run(["validate", str(out)]) == 2
    assert "[NG]" in capsys.readouterr().out


def test_media_command_writes_referenced_images(tmp_path):
    out_dir = tmp_path / "media"
    assert run(["media", str(_deck(tmp_path)), "--out-dir", str(out_dir)]) == 0
    assert (out_dir / "image1.png").read_bytes() == PNG_BYTES


def test_paths_command(capsys):
    assert run(["paths"]) == 0
    assert "slides.schema.json" in capsys.readouterr().out


def test_extract_schema_failure_removes_stale_output(tmp_path, capsys, monkeypatch):
    out = tmp_path / "o.json"
    out.write_text("stale", encoding="utf-8")
    monkeypatch.setattr(cli_main, "validate_extraction", lambda data: ["- $['slides']: broken"])

    assert run(["extract", str(_deck(tmp_path)), "--out", str(out)]) == 2
    assert not out.exists()
    assert "[NG] extraction does not conform to schema" in capsys.readouterr().out


def test_extract_accepts_other_presentation_suffixes(tmp_path):
    macro = tmp_path / "deck.pptm"
    macro.write_bytes(_deck(tmp_path).read_bytes())
    out = tmp_path / "slides.json"
    assert run(["extract", str(macro), "--out", str(out)]) == 0
    assert json.loads(out.read_text(encoding="utf-8"))["slide_count"] == 2


def test_extract_rejects_non_presentation_suffix(tmp_path, capsys):
    doc = tmp_path / "report.docx"
    doc.write_bytes(b"PK")
    assert run(["extract", str(doc), "--out", str(tmp_path / "o.json")]) == 2
    assert "[NG] unsupported input type: .docx" in capsys.readouterr().out


def test_media_command_warns_on_unreadable_image(tmp_path, capsys):
    deck = _deck(tmp_path)
    deck.write_bytes(with_compress_type(deck.read_bytes(), "ppt/media/image1.png", 9))
    out_dir = tmp_path / "media"

    assert run(["media", str(deck), "--out-dir", str(out_dir)]) == 0
    out = capsys.readouterr().out
    assert "[WARN] entry not found: ppt/media/image1.png" in out
    assert "[OK] wrote 0 image(s)" in out
