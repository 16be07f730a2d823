from __future__ import annotations

import json
from typing import Any, cast

from lzstring import LZString  # type: ignore[import-untyped]

from domain.models import ExcalidrawDocument


def encode_scene_payload(scene: dict[str, Any]) -> str:
    payload = json.dumps(scene, ensure_ascii=True, separators=(",", ":"))
    encoded = LZString().compressToEncodedURIComponent(payload)
    return cast(str, encoded)


def build_excalidraw_url(base_url: str, scene: dict[str, Any]) -> str:
    clean_base = base_url.split("#", 1)[0]
    encoded = encode_scene_payload(scene)
    return f"{clean_base}#json={encoded}"


def build_document_url(
    base_url: str, document: ExcalidrawDocument, max_length: int | None = None
) -> str | None:
    """Link that opens ``document`` in Excalidraw, or None when it exceeds ``max_length``."""
    url = build_excalidraw_url(
        base_url, {"elements": document.elements, "appState": document.app_state}
    )
    if max_length is not None and len(url) > max_length:
        return None
    return url
