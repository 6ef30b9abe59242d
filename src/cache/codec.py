"""JSON codec for the persistent cache table."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Type

KIND_TAG = "__kind__"
FIELDS_TAG = "fields"

_DEFAULT_TYPES: Dict[str, Type] = {}


def register_default_type(cls: Type) -> Type:
    """Make ``cls`` known to every codec created from now on."""
    _DEFAULT_TYPES[cls.KIND] = cls
    return cls


class CacheCodec:
    """
    Encode the persistent table as sorted, indented JSON.

    Registered types must expose a ``KIND`` name, ``to_dict()`` and a
    ``from_dict()`` classmethod. They are written as
    ``{"__kind__": KIND, "fields": {...}}``; their fields hold plain data only,
    so related resources are persisted as references (URIs), not as objects.
    """

    def __init__(self, types: Iterable[Type] = ()) -> None:
        self._types: Dict[str, Type] = dict(_DEFAULT_TYPES)
        for cls in types:
            self.register(cls)

    def register(self, cls: Type) -> None:
        self._types[cls.KIND] = cls

    def _default(self, obj: Any) -> Any:
        kind = getattr(type(obj), "KIND", None)
        if kind in self._types:
            return {KIND_TAG: kind, FIELDS_TAG: obj.to_dict()}
        if isinstance(obj, (set, frozenset)):
            return sorted(obj)
        raise TypeError(f"Object of type {type(obj).__name__} is not cacheable")

    def _object_hook(self, data: Dict[str, Any]) -> Any:
        if KIND_TAG not in data:
            return data
        kind = data[KIND_TAG]
        if kind not in self._types:
            raise ValueError(f"Unknown cached kind: {kind!r}")
        return self._types[kind].from_dict(data.get(FIELDS_TAG) or {})

    def dumps(self, table: Dict[str, Any]) -> str:
        return json.dumps(
            table,
            default=self._default,
            sort_keys=True,
            indent=1,
            ensure_ascii=False,
        ) + "\n"

    def loads(self, text: str) -> Dict[str, Any]:
        table = json.loads(text, object_hook=self._object_hook)
        if not isinstance(table, dict):
            raise ValueError(f"Cache root must be an object, got {type(table).__name__}")
        return table
