"""Attribute filters over lists of resources."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union


@dataclass(frozen=True)
class Intersection:
    attribute_value: Any
    left: Any
    right: Any


class Filters:
    """
    Match objects on their attributes.

    Each criterion maps an attribute name to an expected value:
    - compiled regex: ``re.search`` on the attribute (each element for lists)
    - anything else: equality, or membership when the attribute is a list

    Filters({"fullname": re.compile("^Finn")}).filter(languages)
    """

    def __init__(self, criteria: Optional[Mapping[str, Any]] = None) -> None:
        self.criteria: Dict[str, Any] = dict(criteria or {})

    def matches(self, obj: Any) -> bool:
        for attr, expected in self.criteria.items():
            if not _match(getattr(obj, attr, None), expected):
                return False
        return True

    def filter(self, objects: Iterable[Any]) -> List[Any]:
        return [obj for obj in objects if self.matches(obj)]

    def intersect(
        self,
        left: Iterable[Any],
        right: Iterable[Any],
        left_attr: str,
        right_attr: str,
    ) -> List[Intersection]:
        """Values of ``left_attr`` on ``left`` that also appear in ``right_attr`` on ``right``."""
        right_index: Dict[Any, Any] = {}
        for obj in right:
            for value in _values(getattr(obj, right_attr, None)):
                right_index.setdefault(value, obj)

        seen = set()
        shared: List[Intersection] = []
        for obj in left:
            for value in _values(getattr(obj, left_attr, None)):
                if value in right_index and value not in seen:
                    seen.add(value)
                    shared.append(Intersection(value, obj, right_index[value]))
        return shared

    def cache_token(self) -> Dict[str, Any]:
        return self.criteria

    def __repr__(self) -> str:
        return f"Filters({self.criteria!r})"


def _values(attribute: Any) -> Sequence[Any]:
    if attribute is None:
        return []
    if isinstance(attribute, (list, tuple, set, frozenset)):
        return list(attribute)
    return [attribute]


def _match(actual: Any, expected: Any) -> bool:
    if isinstance(expected, re.Pattern):
        return any(expected.search(str(v)) for v in _values(actual))
    if isinstance(actual, (list, tuple, set, frozenset)) and not isinstance(expected, (list, tuple)):
        return expected in actual
    return actual == expected


# ── Selectors ────────────────────────────────────────────────────


@dataclass(frozen=True)
class Resolved:
    """Resources the caller already holds."""

    items: Sequence[Any]

    def cache_token(self) -> Dict[str, Any]:
        return {"resolved": [getattr(item, "resource_uri", item) for item in self.items]}


@dataclass(frozen=True)
class Criteria:
    """Filter criteria to resolve through the matching find operation."""

    filters: Mapping[str, Any]

    def cache_token(self) -> Dict[str, Any]:
        return {"criteria": self.filters}


Selector = Union[Resolved, Criteria]


def as_selector(value: Union[Selector, Mapping[str, Any], Filters, Sequence[Any], None]) -> Selector:
    """Accept a bare mapping, Filters or list of resources where a selector is expected."""
    if isinstance(value, (Resolved, Criteria)):
        return value
    if isinstance(value, Filters):
        return Criteria(value.criteria)
    if isinstance(value, (list, tuple)):
        return Resolved(tuple(value))
    return Criteria(dict(value or {}))
