"""``#/components/schemas/<name>`` pointers and split-schema naming."""
from __future__ import annotations

from typing import Any, Callable

from src.shared.constants import SCHEMAS_REF_PREFIX
from src.shared.errors import MalformedComponentError
from src.shared.utils import compact_timestamp


def ref_for(name: str) -> dict[str, str]:
    """Return a reference object pointing at ``components.schemas[name]``."""
    return {"$ref": SCHEMAS_REF_PREFIX + name}


def schema_name_from_ref(ref: str) -> str:
    """Extract the schema name from a local ``#/components/schemas/<name>`` pointer.

    Raises:
        MalformedComponentError: *ref* does not point into ``components.schemas``.
    """
    parts = ref.split("/") if isinstance(ref, str) else []
    if len(parts) != 4 or parts[:3] != ["#", "components", "schemas"] or not parts[3]:
        raise MalformedComponentError(
            f"Reference {ref!r} does not point to a schema in components.schemas."
        )
    return parts[3]


class NameAllocator:
    """Hands out unused names for schemas extracted by the splitter.

    Names follow ``<parent>_<property>_<YYYYMMDDHHMMSS>``.  When that name is
    already taken in the schema map (or was handed out earlier in the same
    run), ``_2``, ``_3``, ... is appended until it is free.
    """

    def __init__(
        self,
        schemas: dict[str, Any],
        clock: Callable[[], str] = compact_timestamp,
    ) -> None:
        self._schemas = schemas
        self._clock = clock
        self._issued: set[str] = set()

    def _taken(self, name: str) -> bool:
        return name in self._schemas or name in self._issued

    def allocate(self, parent: str, property_name: str) -> str:
        base = f"{parent}_{property_name}_{self._clock()}"
        name = base
        counter = 2
        while self._taken(name):
            name = f"{base}_{counter}"
            counter += 1
        self._issued.add(name)
        return name
