"""
Canonical store keys for HAL hrefs.

Two hrefs that differ only in the order of their query parameters name the
same resource, so the query is re-emitted with its distinct keys sorted.
Values of a repeated key keep their original relative order.
"""

from __future__ import annotations

from typing import Callable, Dict, List
from urllib.parse import parse_qsl, urlencode

UriNormalizer = Callable[[str], str]


def sort_query_params(uri: str) -> str:
    """
    Re-emit the query string of `uri` with its keys sorted.
    Example: '/users?role=admin&active=true' -> '/users?active=true&role=admin'
    """
    prefix, sep, query = uri.partition("?")
    if not sep:
        return uri

    grouped: Dict[str, List[str]] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        grouped.setdefault(key, []).append(value)

    pairs = [(key, value) for key in sorted(grouped) for value in grouped[key]]
    if not pairs:
        return prefix
    return f"{prefix}?{urlencode(pairs)}"


def canonicalize_uri(uri: str, base_url: str = "") -> str:
    """
    Turn a raw href into a store key: sorted query, `base_url` prefix removed.
    The empty string is a valid result (the API root once the base is stripped).
    """
    if not isinstance(uri, str):
        raise TypeError(f"Expected href string, got {type(uri).__name__}")

    canonical = sort_query_params(uri)
    if base_url and canonical.startswith(base_url):
        canonical = canonical[len(base_url) :]
    return canonical


def make_uri_normalizer(base_url: str = "") -> UriNormalizer:
    def _normalize(uri: str) -> str:
        return canonicalize_uri(uri, base_url)

    return _normalize


def identity_uri(uri: str) -> str:
    return uri


__all__ = [
    "UriNormalizer",
    "sort_query_params",
    "canonicalize_uri",
    "make_uri_normalizer",
    "identity_uri",
]
