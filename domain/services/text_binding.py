from __future__ import annotations

from collections.abc import Mapping, Sequence

from domain.models import Element

LINEAR_ELEMENT_TYPES = frozenset({"arrow", "line"})


def is_text_element(element: Element | None) -> bool:
    return element is not None and element.get("type") == "text"


def is_linear_element(element: Element | None) -> bool:
    return element is not None and element.get("type") in LINEAR_ELEMENT_TYPES


def is_bound_to_container(element: Element | None) -> bool:
    return is_text_element(element) and bool(element.get("containerId"))


def get_bound_text_element_id(element: Element | None) -> str | None:
    if element is None:
        return None
    for bound in element.get("boundElements") or []:
        if bound.get("type") == "text":
            return bound.get("id")
    return None


def get_bound_text_element(
    element: Element | None, elements_map: Mapping[str, Element]
) -> Element | None:
    bound_text_id = get_bound_text_element_id(element)
    if not bound_text_id:
        return None
    return elements_map.get(bound_text_id)


def bind_text_to_shape_after_duplication(
    scene_elements: Sequence[Element],
    old_elements: Sequence[Element],
    old_id_to_duplicated_id: Mapping[str, str],
) -> None:
    scene_element_map = {element.get("id"): element for element in scene_elements}
    for element in old_elements:
        bound_text_id = get_bound_text_element_id(element)
        if not bound_text_id:
            continue
        new_text_id = old_id_to_duplicated_id.get(bound_text_id)
        if not new_text_id:
            continue
        new_element_id = old_id_to_duplicated_id.get(element["id"])
        new_container = scene_element_map.get(new_element_id) if new_element_id else None
        if new_container is not None:
            new_container["boundElements"] = [
                dict(bound)
                for bound in element.get("boundElements") or []
                if bound.get("id") not in {new_text_id, bound_text_id}
            ] + [{"type": "text", "id": new_text_id}]
        new_text = scene_element_map.get(new_text_id)
        if is_text_element(new_text):
            new_text["containerId"] = new_element_id if new_container is not None else None
