"""Recursive merge of plain mapping trees"""

from collections.abc import Mapping
from typing import Any


def clone(value: Any) -> Any:
    """Copy mappings and lists recursively; leave every other value shared."""
    if isinstance(value, Mapping):
        return {k: clone(v) for k, v in value.items()}
    if isinstance(value, list):
        return [clone(v) for v in value]
    return value


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new dict with override merged over base.

    Nested mappings merge key-wise; lists and scalars from override replace
    the base value. Neither input is mutated and the result shares no
    mappings or lists with them. Callables and other objects (hooks,
    loaders) are carried by reference.
    """
    merged = clone(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = clone(value)
    return merged
