from __future__ import annotations

import logging
import time
from typing import Any

from .extract import extract_resource
from .hal import is_reference
from .observability import log_event
from .options import OptionsLike, resolve_options

log = logging.getLogger("hal_normalize")


def normalize(document: Any, options: OptionsLike = None, **overrides: Any) -> Any:
    """
    Flatten a HAL document into a store mapping canonical URI -> record.

    `options` may be a NormalizeOptions, a mapping of option names (snake_case
    or camelCase) or None; keyword overrides are applied on top.
    Example:
        normalize(post, base_url="http://example.com/api")
        -> {"/posts/1": {..., "author": {"href": "/users/42"}}, "/users/42": {...}}

    A document that is not a resource is returned unchanged.
    """
    opts = resolve_options(options, **overrides)

    if opts.filter_references and is_reference(document):
        # A bare top-level reference carries no attributes; nothing to store.
        log_event("hal_normalize.skipped_reference", log, level=logging.DEBUG)
        return {}

    start = time.perf_counter()
    store = extract_resource(document, opts)
    log_event(
        "hal_normalize",
        log,
        level=logging.DEBUG,
        records=len(store) if isinstance(store, dict) else None,
        duration_ms=int((time.perf_counter() - start) * 1000),
    )
    return store


__all__ = ["normalize"]
