from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

SCHEMAS_DIR = Path(__file__).resolve().parents[1] / "schemas"
SLIDES_SCHEMA = SCHEMAS_DIR / "slides.schema.json"


def load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _json_path(e: Any) -> str:
    path = "$"
    for p in e.path:
        path += f"[{p!r}]" if isinstance(p, str) else f"[{p}]"
    return path


def validate_instance(schema: Any, instance: Any) -> list[str]:
    """Validate an in-memory instance; returns "- <jsonpath>: <message>" strings."""
    v = Draft202012Validator(schema)
    errors = sorted(v.iter_errors(instance), key=lambda e: list(e.path))
    return [f"- {_json_path(e)}: {e.message}" for e in errors]


def validate_extraction(instance: Any) -> list[str]:
    """Validate an Extraction.to_dict() document against slides.schema.json."""
    return validate_instance(load_json(SLIDES_SCHEMA), instance)


def validate_json_against_schema(schema_path: Path, instance_path: Path) -> list[str]:
    """
    Validate a JSON file against a JSON schema file.
    Returns a list of human-readable error strings (empty if valid).
    """
    if not schema_path.exists():
        return [f"[ERR] schema not found: {schema_path}"]
    if not instance_path.exists():
        return [f"[ERR] instance not found: {instance_path}"]

    try:
        inst = load_json(instance_path)
    except json.JSONDecodeError as e:
        return [f"[ERR] instance is not valid JSON: {instance_path} ({e})"]

    return validate_instance(load_json(schema_path), inst)


def main() -> int:
    ap = argparse.ArgumentParser(prog="schema_validate")
    ap.add_argument("--schema", default=str(SLIDES_SCHEMA), help="path to *.schema.json")
    ap.add_argument("--instance", required=True, help="path to json to validate")
    args = ap.parse_args()

    schema_path = Path(args.schema)
    instance_path = Path(args.instance)

    errors = validate_json_against_schema(schema_path, instance_path)
    if not errors:
        print(f"[OK] {instance_path} conforms to {schema_path}")
        return 0
    if errors[0].startswith("[ERR]"):
        print(errors[0])
        return 2
    print(f"[NG] {instance_path} does NOT conform to {schema_path}")
    for err in errors:
        print(err)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
