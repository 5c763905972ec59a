from __future__ import annotations

from typing import Any, Dict

Store = Dict[str, Dict[str, Any]]


def deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge `source` into `target` in place and return `target`.

    Nested dicts are merged key by key; any other value from `source`
    (lists included, and None) replaces what `target` holds. Dicts are
    copied on insert so `target` never aliases a dict owned by `source`.
    """
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            deep_merge(current, value)
        elif isinstance(value, dict):
            target[key] = deep_merge({}, value)
        else:
            target[key] = value
    return target


__all__ = ["Store", "deep_merge"]
