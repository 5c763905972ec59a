"""
Standalone and virtual collections.

An embedded array relation has no self href of its own. When the owner also
links the same relation to a single URI, that URI becomes the collection's
record; otherwise, with virtual self links enabled, the collection is keyed
as `<owner uri>#<relation>`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Set

from .hal import HREF, SELF, is_templated
from .merge import Store, deep_merge
from .options import NormalizeOptions

VIRTUAL = "virtual"
OWNING_RESOURCE = "owningResource"
OWNING_RELATION = "owningRelation"


def virtual_key(owner_uri: str, relation: str) -> str:
    return f"{owner_uri}#{relation}"


def _is_addressable(link: Any) -> bool:
    return isinstance(link, dict) and link.get(HREF) is not None and not is_templated(link)


def _hoist_virtual(
    result: Store,
    owner_uri: str,
    relation: str,
    members: List[Any],
    options: NormalizeOptions,
) -> None:
    key = virtual_key(owner_uri, relation)
    result[owner_uri][relation] = {HREF: key, VIRTUAL: True}
    deep_merge(
        result,
        {
            key: {
                options.embedded_standalone_list_key: members,
                options.meta_key: {
                    SELF: key,
                    VIRTUAL: True,
                    OWNING_RESOURCE: owner_uri,
                    OWNING_RELATION: relation,
                },
            }
        },
    )


def reconcile_collections(
    uri: str, embedded: Store, links: Store, options: NormalizeOptions
) -> Store:
    """
    Merge the embedded and link fragments of the resource at `uri`, hoisting
    array relations into their own records where an identity is available.
    """
    list_key = options.embedded_standalone_list_key
    # read both fragments before merging; the merge writes into the result only
    owner_links: Dict[str, Any] = dict(links.get(uri, {}))
    owner_embeds: Dict[str, Any] = dict(embedded.get(uri, {}))

    result: Store = {}
    deep_merge(result, links)
    deep_merge(result, embedded)
    owner = result.setdefault(uri, {})
    handled: Set[str] = set()

    for relation, members in owner_embeds.items():
        if not isinstance(members, list):
            continue
        link = owner_links.get(relation)
        if _is_addressable(link):
            href = link[HREF]
            owner[relation] = link
            deep_merge(
                result,
                {href: {list_key: members, options.meta_key: {SELF: href}}},
            )
            handled.add(relation)
        elif options.virtual_self_links and relation != list_key:
            _hoist_virtual(result, uri, relation, members, options)
            handled.add(relation)

    if options.virtual_self_links:
        for relation, value in owner_links.items():
            if relation in handled or relation in owner_embeds or relation == list_key:
                continue
            if isinstance(value, list):
                _hoist_virtual(result, uri, relation, value, options)

    return result


__all__ = [
    "VIRTUAL",
    "OWNING_RESOURCE",
    "OWNING_RELATION",
    "virtual_key",
    "reconcile_collections",
]
