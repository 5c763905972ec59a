"""
HAL+JSON predicates and accessors.

A resource is any mapping whose `_links.self.href` is set; a reference is a
resource that carries nothing but that self link.
"""

from typing import Any, Dict, Optional

LINKS = "_links"
EMBEDDED = "_embedded"
SELF = "self"
HREF = "href"
TEMPLATED = "templated"


def _has_single_key(value: Any, key: str) -> bool:
    return isinstance(value, dict) and len(value) == 1 and key in value


def is_resource(value: Any) -> bool:
    if not isinstance(value, dict):
        return False
    links = value.get(LINKS)
    if not isinstance(links, dict):
        return False
    self_link = links.get(SELF)
    return isinstance(self_link, dict) and self_link.get(HREF) is not None


def is_reference(value: Any) -> bool:
    return _has_single_key(value, LINKS) and _has_single_key(value[LINKS], SELF)


def is_single_link_object(value: Any) -> bool:
    return _has_single_key(value, HREF)


def is_link_collection(value: Any) -> bool:
    return isinstance(value, list)


def is_templated(link: Any) -> bool:
    return isinstance(link, dict) and bool(link.get(TEMPLATED))


def get_link(payload: Dict[str, Any], relation: str) -> Any:
    """
    Safely retrieves a link object (or link array) from the _links dictionary.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get(LINKS), dict):
        return None
    return payload[LINKS].get(relation)


def get_link_href(payload: Dict[str, Any], relation: str) -> Optional[str]:
    """
    Extracts the 'href' from a single link relation.
    Example: get_link_href(post_json, 'author') -> 'http://example.com/users/42'
    """
    link = get_link(payload, relation)
    return link.get(HREF) if isinstance(link, dict) else None


def get_self_href(payload: Dict[str, Any]) -> Optional[str]:
    return get_link_href(payload, SELF)


def get_embedded(payload: Dict[str, Any], relation: str) -> Any:
    """
    Extracts an embedded resource (or list of resources) from _embedded.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get(EMBEDDED), dict):
        return None
    return payload[EMBEDDED].get(relation)


__all__ = [
    "LINKS",
    "EMBEDDED",
    "SELF",
    "HREF",
    "TEMPLATED",
    "is_resource",
    "is_reference",
    "is_single_link_object",
    "is_link_collection",
    "is_templated",
    "get_link",
    "get_link_href",
    "get_self_href",
    "get_embedded",
]
