from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path, PurePosixPath

from pptslides.core.extract import (
    ArchiveCorrupt,
    EntryMissing,
    ExtractOptions,
    TitleStrategy,
    extract_slides,
    iter_slide_results,
    open_package,
)
from pptslides.core.extract.pptx_slides import DEFAULT_IMAGE_EXTENSIONS
from pptslides.core.render.outline import OutlineRenderer
from pptslides.core.utils.schema_validate import (
    SLIDES_SCHEMA,
    validate_extraction,
    validate_json_against_schema,
)


# PresentationML packages share the ppt/slides layout
INPUT_SUFFIXES = (".pptx", ".pptm", ".ppsx", ".ppsm", ".potx", ".potm")


def _print_errors(errors: list[str], limit: int = 30) -> None:
    for m in errors[:limit]:
        print(f"  {m}")
    if len(errors) > limit:
        print(f"  ... ({len(errors)} errors)")


def _options_from_args(args: argparse.Namespace) -> ExtractOptions:
    exts = DEFAULT_IMAGE_EXTENSIONS
    if args.image_ext:
        exts = frozenset(e.lower().lstrip(".") for e in args.image_ext)
    return ExtractOptions(
        title_strategy=TitleStrategy(args.title_strategy),
        image_extensions=exts,
        capitalize=not args.no_capitalize,
        merge=not args.no_merge,
    )


def _check_input(in_path: Path) -> bool:
    if not in_path.exists():
        print(f"[NG] input not found: {in_path}")
        return False
    if in_path.suffix.lower() not in INPUT_SUFFIXES:
        print(f"[NG] unsupported input type: {in_path.suffix} (use {', '.join(INPUT_SUFFIXES)})")
        return False
    return True


def _remove_stale(out_path: Path) -> None:
    if out_path.exists():
        out_path.unlink()


def cmd_paths(_: argparse.Namespace) -> int:
    print(f"schema.slides: {SLIDES_SCHEMA}")
    return 0


def cmd_extract(args: argparse.Namespace) -> int:
    in_path = Path(args.input).resolve()
    out_path = Path(args.out).resolve()

    if not _check_input(in_path):
        return 2

    try:
        result = extract_slides(in_path, options=_options_from_args(args))
    except ArchiveCorrupt as e:
        # Do not leave stale output behind.
        _remove_stale(out_path)
        print("[NG] extract failed")
        print(f"      detail: {e}")
        return 2

    data = result.to_dict()
    errors = validate_extraction(data)
    if errors:
        _remove_stale(out_path)
        print("[NG] extraction does not conform to schema")
        _print_errors(errors)
        return 2

    out_path.parent.mkdir(parents=True, exist_ok=True)
    if args.format == "text":
        out_path.write_text(OutlineRenderer().render(result.slides) + "\n", encoding="utf-8")
    else:
        out_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    for w in result.warnings:
        print(f"[WARN] {w}")
    print(f"[OK] extracted {len(result.slides)} slide(s): {out_path}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    schema_path = Path(args.schema).resolve()
    instance_path = Path(args.instance).resolve()

    errors = validate_json_against_schema(schema_path, instance_path)
    if not errors:
        print(f"[OK] {instance_path.as_posix()}")
        return 0
    if errors[0].startswith("[ERR]"):
        print(f"[NG] {errors[0]}")
        return 2
    print(f"[NG] {instance_path.as_posix()}")
    _print_errors(errors)
    return 2


def cmd_media(args: argparse.Namespace) -> int:
    in_path = Path(args.input).resolve()
    out_dir = Path(args.out_dir).resolve()

    if not _check_input(in_path):
        return 2

    try:
        package = open_package(in_path)
    except ArchiveCorrupt as e:
        print("[NG] media export failed")
        print(f"      detail: {e}")
        return 2

    written: set[str] = set()
    with package:
        for res in iter_slide_results(package, options=_options_from_args(args)):
            if res.slide is None:
                print(f"[WARN] slide {res.ordinal} skipped: {res.reason}")
                continue
            for image_path in res.slide.images:
                if image_path in written:
                    continue
                try:
                    blob = package.read_bytes(image_path)
                except EntryMissing as e:
                    print(f"[WARN] {e}")
                    continue
                out_dir.mkdir(parents=True, exist_ok=True)
                (out_dir / PurePosixPath(image_path).name).write_bytes(blob)
                written.add(image_path)

    print(f"[OK] wrote {len(written)} image(s): {out_dir}")
    return 0


def _add_extract_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--title-strategy",
        choices=[s.value for s in TitleStrategy],
        default=TitleStrategy.PLACEHOLDER.value,
        help="how slide titles are detected (default: placeholder)",
    )
    p.add_argument(
        "--image-ext",
        action="append",
        metavar="EXT",
        help="accepted image extension; repeatable (default: png, jpeg, jpg)",
    )
    p.add_argument("--no-merge", action="store_true", help="keep one block per source paragraph")
    p.add_argument("--no-capitalize", action="store_true", help="keep paragraph text as written")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pptslides")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging to stderr")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_paths = sub.add_parser("paths", help="show the bundled schema location")
    p_paths.set_defaults(func=cmd_paths)

    p_ext = sub.add_parser("extract", help="extract slides from a .pptx into json (or a text outline)")
    p_ext.add_argument("input", help="path to input .pptx")
    p_ext.add_argument("--out", required=True, help="output path")
    p_ext.add_argument("--format", choices=["json", "text"], default="json")
    _add_extract_flags(p_ext)
    p_ext.set_defaults(func=cmd_extract)

    p_val = sub.add_parser("validate", help="validate an extraction json against the slides schema")
    p_val.add_argument("instance", help="path to extraction json")
    p_val.add_argument("--schema", default=str(SLIDES_SCHEMA), help="schema path (default: bundled)")
    p_val.set_defaults(func=cmd_validate)

    p_med = sub.add_parser("media", help="write the images referenced by extracted slides")
    p_med.add_argument("input", help="path to input .pptx")
    p_med.add_argument("--out-dir", required=True, help="directory for image files")
    _add_extract_flags(p_med)
    p_med.set_defaults(func=cmd_media)

    return parser


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
