from __future__ import annotations

import copy
import random
import time
import uuid
from collections.abc import Callable, MutableMapping
from typing import Any

from domain.models import Element
from domain.services.groups import get_new_group_ids_for_duplication

IdFactory = Callable[[], str]


def random_id() -> str:
    return uuid.uuid4().hex


def random_seed() -> int:
    return random.randint(1, 2**31 - 1)


def duplicate_element(
    editing_group_id: str | None,
    group_id_map: MutableMapping[str, str],
    element: Element,
    overrides: dict[str, Any] | None = None,
    id_factory: IdFactory | None = None,
) -> Element:
    """Deep-copy ``element`` under a fresh identity.

    ``group_id_map`` is shared by all elements duplicated in one operation so
    that members of a source group end up in the same new group.
    """
    make_id = id_factory or random_id

    def remap_group(group_id: str) -> str:
        if group_id not in group_id_map:
            group_id_map[group_id] = make_id()
        return group_id_map[group_id]

    duplicated = copy.deepcopy(element)
    duplicated["id"] = make_id()
    duplicated["seed"] = random_seed()
    duplicated["versionNonce"] = random_seed()
    duplicated["updated"] = int(time.time() * 1000)
    duplicated["groupIds"] = get_new_group_ids_for_duplication(
        duplicated.get("groupIds") or [], editing_group_id, remap_group
    )
    if overrides:
        duplicated.update(overrides)
    return duplicated
