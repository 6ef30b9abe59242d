#!/usr/bin/env python3
"""
Cache Key Generation — Canonical Rendering of Operation Inputs

Implements:
- render(value) → canonical, order-independent text
- generate_cache_key(operation, *inputs) → "<operation> <rendered inputs>"
- Same inputs built differently (dict order, tuple vs list, regex vs
  compiled regex) = identical key = cache hit
"""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)


class CacheKeyGenerator:
    """
    Generate deterministic cache keys from an operation name and its inputs.

    Design:
    - Cache key = operation + " " + canonical JSON of every input
    - Mappings render with sorted keys, sets as sorted lists
    - Lists keep their order
    - Objects with cache_token() render as that token
    - An empty filter set renders as "{}", never as nothing
    """

    def __init__(self, log: logging.Logger = None):
        self.log = log or logger

    def generate_cache_key(self, operation: str, *inputs: Any) -> str:
        """
        Generate deterministic cache key.

        Args:
            operation: Logical operation name (findLanguages, searchStores, ...)
            *inputs: Filters, selectors or resources the result depends on

        Returns:
            Human readable key, e.g. 'findLanguages {"code":"fi"}'
        """
        key = operation + " " + "".join(self.render(value) for value in inputs)
        self.log.debug(f"Generated key: {key}")
        return key

    def render(self, value: Any) -> str:
        return json.dumps(self._normalize(value), sort_keys=True,
                          separators=(",", ":"), ensure_ascii=False)

    def _normalize(self, value: Any) -> Any:
        if hasattr(value, "cache_token"):
            return self._normalize(value.cache_token())
        if isinstance(value, re.Pattern):
            return {"regex": value.pattern, "flags": int(value.flags)}
        if isinstance(value, dict):
            return {str(k): self._normalize(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._normalize(v) for v in value]
        if isinstance(value, (set, frozenset)):
            return sorted((self._normalize(v) for v in value), key=self.render)
        if value is None or isinstance(value, (str, int, float, bool)):
            return value
        return repr(value)
