from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, cast

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import ORJSONResponse
from pydantic import ValidationError

from adapters.excalidraw.url_encoder import build_document_url
from adapters.filesystem.json_utils import parse_json_object
from adapters.filesystem.scene_repository import FileSystemSceneRepository
from app.config import AppSettings, load_settings
from domain.models import DuplicationResult, ExcalidrawDocument, SceneDocument
from domain.services.duplicate_selection import DuplicateSelection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorContext:
    settings: AppSettings
    scene_repo: FileSystemSceneRepository
    duplicate_selection: DuplicateSelection


def create_app(settings: AppSettings) -> FastAPI:
    app = FastAPI(title="Scene Duplicator", default_response_class=ORJSONResponse)
    app.state.context = EditorContext(
        settings=settings,
        scene_repo=FileSystemSceneRepository(),
        duplicate_selection=DuplicateSelection(grid_size=settings.editor.grid_size),
    )

    @app.get("/api/health")
    def api_health() -> ORJSONResponse:
        return ORJSONResponse({"status": "ok"})

    @app.post("/api/duplicate")
    async def api_duplicate(
        request: Request, context: EditorContext = Depends(get_context)
    ) -> ORJSONResponse:
        raw_bytes = await request.body()
        if not raw_bytes:
            raise HTTPException(status_code=400, detail="Empty scene")
        document = parse_scene_document(raw_bytes)
        result = run_duplication(context, document)
        return ORJSONResponse(build_response_payload(context, document, result))

    @app.post("/api/scenes/{scene_id}/duplicate")
    def api_duplicate_stored_scene(
        scene_id: str, context: EditorContext = Depends(get_context)
    ) -> ORJSONResponse:
        try:
            path = context.scene_repo.path_for(context.settings.editor.scenes_dir, scene_id)
        except ValueError as exc:
            raise HTTPException(status_code=404, detail="Scene not found") from exc
        if not path.exists():
            raise HTTPException(status_code=404, detail="Scene not found")
        try:
            payload = context.scene_repo.load(path)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail="Invalid Excalidraw JSON") from exc
        document = validate_scene(payload)
        result = run_duplication(context, document)
        if result.commit_to_history:
            updated = ExcalidrawDocument(
                elements=result.elements, app_state=result.app_state, files=document.files
            )
            try:
                context.scene_repo.save(updated.to_dict(), path)
            except OSError as exc:
                logger.exception("Failed to store duplicated scene %s.", scene_id)
                raise HTTPException(status_code=500, detail="Failed to store scene") from exc
        return ORJSONResponse(build_response_payload(context, document, result))

    return app


def get_context(request: Request) -> EditorContext:
    return cast(EditorContext, request.app.state.context)


def parse_scene_document(raw_bytes: bytes) -> ExcalidrawDocument:
    try:
        payload = parse_json_object(raw_bytes)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid Excalidraw JSON") from exc
    return validate_scene(payload)


def validate_scene(payload: dict[str, Any]) -> ExcalidrawDocument:
    try:
        return SceneDocument.model_validate(payload).to_excalidraw_document()
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail="Invalid scene") from exc


def run_duplication(context: EditorContext, document: ExcalidrawDocument) -> DuplicationResult:
    result = context.duplicate_selection.perform(document.elements, document.app_state)
    if result is None:
        return DuplicationResult(
            elements=document.elements, app_state=document.app_state, commit_to_history=False
        )
    return result


def build_response_payload(
    context: EditorContext, document: ExcalidrawDocument, result: DuplicationResult
) -> dict[str, Any]:
    payload = result.to_dict()
    url = build_document_url(
        context.settings.editor.excalidraw_base_url,
        ExcalidrawDocument(
            elements=result.elements, app_state=result.app_state, files=document.files
        ),
        context.settings.editor.excalidraw_max_url_length,
    )
    if url is not None:
        payload["url"] = url
    return payload


app = create_app(load_settings())
