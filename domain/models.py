from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator

GRID_SIZE = 20

Element = Dict[str, Any]
AppState = Dict[str, Any]


class SceneElement(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    x: float = 0.0
    y: float = 0.0
    group_ids: List[str] = Field(default_factory=list, alias="groupIds")
    frame_id: Optional[str] = Field(default=None, alias="frameId")
    is_deleted: bool = Field(default=False, alias="isDeleted")

    @field_validator("group_ids", mode="before")
    @classmethod
    def default_group_ids(cls, value: object) -> object:
        return [] if value is None else value


class SceneDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    elements: List[SceneElement] = Field(default_factory=list)
    app_state: Dict[str, Any] = Field(default_factory=dict, alias="appState")
    files: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("app_state", "files", mode="before")
    @classmethod
    def default_mappings(cls, value: object) -> object:
        return {} if value is None else value

    @field_validator("elements", mode="after")
    @classmethod
    def ensure_unique_element_ids(cls, elements: List[SceneElement]) -> List[SceneElement]:
        seen: Set[str] = set()
        for element in elements:
            if element.id in seen:
                msg = f"Duplicate element id found: {element.id}"
                raise ValueError(msg)
            seen.add(element.id)
        return elements

    def to_excalidraw_document(self) -> ExcalidrawDocument:
        return ExcalidrawDocument(
            elements=[element.model_dump(by_alias=True) for element in self.elements],
            app_state=dict(self.app_state),
            files=dict(self.files),
        )


@dataclass(frozen=True)
class ExcalidrawDocument:
    elements: List[Element]
    app_state: AppState
    files: dict

    def to_dict(self) -> dict:
        return {
            "type": "excalidraw",
            "version": 2,
            "source": "scene-duplicator",
            "elements": self.elements,
            "appState": self.app_state,
            "files": self.files,
        }


@dataclass(frozen=True)
class DuplicationResult:
    elements: List[Element]
    app_state: AppState
    commit_to_history: bool

    def to_dict(self) -> dict:
        return {
            "elements": self.elements,
            "appState": self.app_state,
            "commitToHistory": self.commit_to_history,
        }


@dataclass(frozen=True)
class KeyEvent:
    key: str
    ctrl_key: bool = False
    meta_key: bool = False
    is_darwin: bool = False

    @property
    def ctrl_or_cmd(self) -> bool:
        return self.meta_key if self.is_darwin else self.ctrl_key
