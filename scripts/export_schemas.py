#!/usr/bin/env python3
"""Export deterministic JSON schemas for the language result models."""

from __future__ import annotations

import json
import pathlib
import sys
from typing import Optional

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from langsvc.models.language import AnswersResult, IntentResult  # noqa: E402

SCHEMAS = {
    "answers_result.schema.json": AnswersResult,
    "intent_result.schema.json": IntentResult,
}


def export(out_dir: pathlib.Path) -> list[pathlib.Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[pathlib.Path] = []
    for filename, model in SCHEMAS.items():
        out_path = out_dir / filename
        schema = model.model_json_schema(by_alias=True)
        out_path.write_text(
            json.dumps(schema, indent=2, sort_keys=True, ensure_ascii=True) + "\n",
            encoding="utf-8",
        )
        written.append(out_path)
    return written


def main(argv: Optional[list[str]] = None) -> None:
    args = argv if argv is not None else sys.argv[1:]
    out_dir = pathlib.Path(args[0]) if args else ROOT / "schemas"
    for path in export(out_dir):
        print(f"wrote {path}")


if __name__ == "__main__":
    main()
