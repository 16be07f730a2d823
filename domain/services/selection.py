from __future__ import annotations

from collections.abc import Sequence

from domain.models import AppState, Element
from domain.services.frames import get_frame_elements, is_frame_element
from domain.services.text_binding import is_bound_to_container


def get_non_deleted_elements(elements: Sequence[Element]) -> list[Element]:
    return [element for element in elements if not element.get("isDeleted")]


def is_some_element_selected(elements: Sequence[Element], app_state: AppState) -> bool:
    selected_element_ids = app_state.get("selectedElementIds") or {}
    return any(selected_element_ids.get(element.get("id")) for element in elements)


def get_selected_elements(
    elements: Sequence[Element],
    app_state: AppState,
    include_bound_text_element: bool = False,
    include_elements_in_frames: bool = False,
) -> list[Element]:
    """Resolve ``selectedElementIds`` against ``elements``.

    Ids that do not match any element are ignored. With
    ``include_bound_text_element`` a text bound to a selected container counts
    as selected; with ``include_elements_in_frames`` each selected frame is
    preceded by the elements it contains.
    """
    selected_element_ids = app_state.get("selectedElementIds") or {}
    selected: list[Element] = []
    for element in elements:
        if selected_element_ids.get(element.get("id")):
            selected.append(element)
        elif (
            include_bound_text_element
            and is_bound_to_container(element)
            and selected_element_ids.get(element["containerId"])
        ):
            selected.append(element)

    if not include_elements_in_frames:
        return selected

    with_frame_members: list[Element] = []
    for element in selected:
        if is_frame_element(element):
            with_frame_members.extend(get_frame_elements(elements, element["id"]))
        with_frame_members.append(element)
    return with_frame_members
