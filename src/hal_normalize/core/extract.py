"""
Recursive extraction of HAL resources into a flat store.

Every resource becomes one record keyed by its canonical self href; embedded
resources are lifted into their own records and replaced in the owner by a
copy of their self link.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Set

from .casing import camel_case, camelize_keys
from .errors import CyclicEmbedError
from .hal import EMBEDDED, HREF, LINKS, SELF, is_reference, is_resource, is_templated
from .merge import Store, deep_merge
from .options import NormalizeOptions, OptionsLike, resolve_options
from .standalone import reconcile_collections
from .uri import UriNormalizer

log = logging.getLogger("hal_normalize.extract")


@dataclass
class _Context:
    options: NormalizeOptions
    normalize_uri: UriNormalizer
    # id() of the resource dicts on the current recursion path
    active: Set[int] = field(default_factory=set)

    def relation_key(self, key: str) -> str:
        return camel_case(key) if self.options.camelize_keys else key


def normalize_link(link: Any, normalize_uri: UriNormalizer) -> Any:
    """
    Canonicalize the href of one link object.
    Templated links and links without an href are returned unchanged.
    """
    if not isinstance(link, dict) or not link.get(HREF) or is_templated(link):
        return link
    return {**link, HREF: normalize_uri(link[HREF])}


def _normalize_relation_links(value: Any, normalize_uri: UriNormalizer) -> Any:
    value = copy.deepcopy(value)
    if isinstance(value, list):
        return [normalize_link(link, normalize_uri) for link in value]
    return normalize_link(value, normalize_uri)


def _self_reference(resource: Dict[str, Any], ctx: _Context) -> Dict[str, Any]:
    """
    Copy of the embed's self link pointing at its store key.
    Unlike normalize_link this ignores `templated`: the href must equal the
    key the embed was stored under.
    """
    link = copy.deepcopy(resource[LINKS][SELF])
    link[HREF] = ctx.normalize_uri(link[HREF])
    return link


def _extract_attributes(json: Dict[str, Any], ctx: _Context) -> Dict[str, Any]:
    meta_key = ctx.options.meta_key
    record: Dict[str, Any] = {}

    for key, value in json.items():
        if key in (LINKS, EMBEDDED):
            continue
        value = copy.deepcopy(value)
        if not ctx.options.camelize_keys:
            record[key] = value
        elif key == meta_key:
            record[meta_key] = camelize_keys(value)
        else:
            record[camel_case(key)] = camelize_keys(value)

    return record


def _extract_single_embed(embed: Any, store: Store, ctx: _Context) -> Any:
    if embed is None:
        return None

    if not is_resource(embed):
        # No self link: nothing to address it by, keep it inline.
        value = copy.deepcopy(embed)
        return camelize_keys(value) if ctx.options.camelize_keys else value

    if not (ctx.options.filter_references and is_reference(embed)):
        deep_merge(store, _extract(embed, ctx))
    return _self_reference(embed, ctx)


def _extract_embedded(json: Dict[str, Any], uri: str, ctx: _Context) -> Store:
    store: Store = {uri: {}}
    embedded = json.get(EMBEDDED)
    if not isinstance(embedded, dict):
        return store

    for key, value in embedded.items():
        if isinstance(value, list):
            ref = [_extract_single_embed(v, store, ctx) for v in value]
        else:
            ref = _extract_single_embed(value, store, ctx)
        store[uri][ctx.relation_key(key)] = ref

    return store


def _extract_links(json: Dict[str, Any], uri: str, ctx: _Context) -> Store:
    store: Store = {uri: {}}

    for key, value in json[LINKS].items():
        if key == SELF:
            continue
        store[uri][ctx.relation_key(key)] = _normalize_relation_links(
            value, ctx.normalize_uri
        )

    return store


def _extract(json: Any, ctx: _Context) -> Any:
    if not is_resource(json):
        return json

    marker = id(json)
    if marker in ctx.active:
        raise CyclicEmbedError(json[LINKS][SELF][HREF])

    ctx.active.add(marker)
    try:
        uri = ctx.normalize_uri(json[LINKS][SELF][HREF])
        store: Store = {uri: _extract_attributes(json, ctx)}

        embedded = _extract_embedded(json, uri, ctx)
        links = _extract_links(json, uri, ctx)

        if ctx.options.standalone_collections:
            deep_merge(store, reconcile_collections(uri, embedded, links, ctx.options))
        else:
            # embedded references win over plain links of the same name
            deep_merge(store, links)
            deep_merge(store, embedded)
    finally:
        ctx.active.discard(marker)

    meta_key = ctx.options.meta_key
    if not isinstance(store[uri].get(meta_key), dict):
        store[uri][meta_key] = {}
    store[uri][meta_key][SELF] = uri

    log.debug("extract.resource", extra={"uri": uri, "records": len(store)})
    return store


def extract_resource(json: Any, options: OptionsLike = None) -> Any:
    """
    Flatten one HAL resource (and everything it embeds) into a store.

    Values that are not resources are returned unchanged.
    Raises CyclicEmbedError if a resource object is embedded inside itself.
    """
    opts = resolve_options(options)
    ctx = _Context(options=opts, normalize_uri=opts.uri_normalizer())
    return _extract(json, ctx)


__all__ = ["normalize_link", "extract_resource"]
