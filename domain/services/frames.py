from __future__ import annotations

from collections.abc import Mapping, Sequence

from domain.models import Element


def is_frame_element(element: Element | None) -> bool:
    return element is not None and element.get("type") == "frame"


def get_frame_elements(elements: Sequence[Element], frame_id: str) -> list[Element]:
    return [element for element in elements if element.get("frameId") == frame_id]


def exclude_elements_in_frames_from_selection(elements: Sequence[Element]) -> list[Element]:
    frames_in_selection = {element.get("id") for element in elements if is_frame_element(element)}
    return [
        element
        for element in elements
        if not (element.get("frameId") and element.get("frameId") in frames_in_selection)
    ]


def bind_elements_to_frames_after_duplication(
    next_elements: Sequence[Element],
    old_elements: Sequence[Element],
    old_id_to_duplicated_id: Mapping[str, str],
) -> None:
    next_element_map = {element.get("id"): element for element in next_elements}
    for element in old_elements:
        frame_id = element.get("frameId")
        if not frame_id:
            continue
        new_element_id = old_id_to_duplicated_id.get(element["id"])
        if not new_element_id:
            continue
        next_element = next_element_map.get(new_element_id)
        if next_element is not None:
            next_element["frameId"] = old_id_to_duplicated_id.get(frame_id, frame_id)
