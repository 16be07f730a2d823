from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from domain.models import Element
from domain.services.text_binding import is_linear_element

BINDING_KEYS = ("startBinding", "endBinding")


def fix_bindings_after_duplication(
    scene_elements: Sequence[Element],
    old_elements: Sequence[Element],
    old_id_to_duplicated_id: Mapping[str, str],
) -> None:
    """Point arrow bindings of duplicates at the duplicated targets.

    Arrows get their ``startBinding``/``endBinding`` rewritten, bindable shapes
    get their ``boundElements`` rewritten. Only duplicates are touched and ids
    outside the mapping keep pointing at the original elements.
    """
    bound_element_ids: set[str] = set()
    bindable_element_ids: set[str] = set()
    for old_element in old_elements:
        duplicated_id = old_id_to_duplicated_id.get(old_element["id"])
        if not duplicated_id:
            continue
        if old_element.get("boundElements"):
            bindable_element_ids.add(duplicated_id)
        if is_linear_element(old_element) and any(
            old_element.get(key) is not None for key in BINDING_KEYS
        ):
            bound_element_ids.add(duplicated_id)

    for element in scene_elements:
        element_id = element.get("id")
        if element_id in bound_element_ids:
            for key in BINDING_KEYS:
                element[key] = _binding_after_duplication(element.get(key), old_id_to_duplicated_id)
        if element_id in bindable_element_ids:
            element["boundElements"] = [
                {**bound, "id": old_id_to_duplicated_id[bound.get("id")]}
                if bound.get("id") in old_id_to_duplicated_id
                else bound
                for bound in element.get("boundElements") or []
            ]


def _binding_after_duplication(
    binding: dict[str, Any] | None, old_id_to_duplicated_id: Mapping[str, str]
) -> dict[str, Any] | None:
    if binding is None:
        return None
    element_id = binding.get("elementId")
    return {**binding, "elementId": old_id_to_duplicated_id.get(element_id, element_id)}
