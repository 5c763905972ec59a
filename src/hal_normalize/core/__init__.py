"""Core HAL normalization surface (transport-agnostic)."""

from .casing import camel_case, camelize_keys, split_words
from .config import load_options_from_env
from .errors import CyclicEmbedError, HalNormalizeError, OptionsError
from .extract import extract_resource, normalize_link
from .hal import (
    get_embedded,
    get_link,
    get_link_href,
    get_self_href,
    is_link_collection,
    is_reference,
    is_resource,
    is_single_link_object,
)
from .logging import setup_logging
from .merge import Store, deep_merge
from .normalize import normalize
from .observability import log_event
from .options import DEFAULT_META_KEY, NormalizeOptions, resolve_options
from .standalone import reconcile_collections, virtual_key
from .uri import canonicalize_uri, make_uri_normalizer, sort_query_params

__all__ = [
    # Entry point
    "normalize",
    "extract_resource",
    "reconcile_collections",
    "virtual_key",
    "Store",
    # Options
    "NormalizeOptions",
    "DEFAULT_META_KEY",
    "resolve_options",
    "load_options_from_env",
    # Exceptions
    "HalNormalizeError",
    "OptionsError",
    "CyclicEmbedError",
    # URI / keys
    "canonicalize_uri",
    "make_uri_normalizer",
    "sort_query_params",
    "camel_case",
    "camelize_keys",
    "split_words",
    "deep_merge",
    "normalize_link",
    # HAL utilities
    "is_resource",
    "is_reference",
    "is_single_link_object",
    "is_link_collection",
    "get_link",
    "get_link_href",
    "get_self_href",
    "get_embedded",
    # Logging
    "setup_logging",
    "log_event",
]
