from __future__ import annotations

import json

from lzstring import LZString  # type: ignore[import-untyped]

from adapters.excalidraw.url_encoder import (
    build_document_url,
    build_excalidraw_url,
    encode_scene_payload,
)
from domain.models import ExcalidrawDocument
from tests.helpers.scene_fixtures import app_state, shape


def test_encode_scene_payload_roundtrip() -> None:
    payload = {
        "elements": [],
        "appState": {"theme": "light"},
        "files": {},
    }
    encoded = encode_scene_payload(payload)
    decoded = LZString().decompressFromEncodedURIComponent(encoded)
    assert json.loads(decoded) == payload


def test_build_excalidraw_url_drops_existing_fragment() -> None:
    url = build_excalidraw_url("https://excalidraw.com/#room=abc", {"elements": []})

    assert url.startswith("https://excalidraw.com/#json=")
    assert "room=abc" not in url


def test_build_document_url_respects_max_length() -> None:
    document = ExcalidrawDocument(
        elements=[shape(f"el-{index}", x=float(index)) for index in range(20)],
        app_state=app_state(["el-0"]),
        files={},
    )

    url = build_document_url("/excalidraw", document)

    assert url is not None
    encoded = url.split("#json=", 1)[1]
    decoded = json.loads(LZString().decompressFromEncodedURIComponent(encoded))
    assert decoded["appState"]["selectedElementIds"] == {"el-0": True}
    assert len(decoded["elements"]) == 20
    assert build_document_url("/excalidraw", document, max_length=len(url)) == url
    assert build_document_url("/excalidraw", document, max_length=len(url) - 1) is None
