from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import orjson


def parse_json_object(raw_bytes: bytes) -> dict[str, Any]:
    try:
        payload = orjson.loads(raw_bytes)
    except orjson.JSONDecodeError:
        # NaN and Infinity are rejected by orjson
        payload = json.loads(raw_bytes.decode("utf-8"))
    return payload if isinstance(payload, dict) else {}


def load_json(path: Path) -> dict[str, Any]:
    return parse_json_object(path.read_bytes())


def write_json_atomic(path: Path, payload: Any) -> None:
    """Write ``payload`` as indented JSON through a sibling ``.tmp`` file."""
    try:
        content = orjson.dumps(payload, option=orjson.OPT_INDENT_2)
    except TypeError:
        content = json.dumps(payload, ensure_ascii=True, indent=2).encode("utf-8")
    path.parent.mkdir(parents=True, exist_ok=True)
    staging = path.with_name(f"{path.name}.tmp")
    staging.write_bytes(content)
    staging.replace(path)
