from __future__ import annotations

import re
from typing import Any, List

# Runs of letters and digits in any script; everything else is a delimiter.
_CHUNK_RE = re.compile(r"[^\W_]+")
_APOSTROPHES_RE = re.compile("['’]")

# Word rules over a per-character class string: U upper, L lower or uncased
# letter (CJK, Hebrew, ...), D digit.
_WORD_RE = re.compile(
    r"U?L+"  # 'foo', 'Bar'
    r"|U+(?=UL)"  # 'HTML' in 'HTMLParser'
    r"|U+"  # trailing acronym
    r"|D+"
)


def _char_class(char: str) -> str:
    if char.isdecimal():
        return "D"
    if char.isupper():
        return "U"
    return "L"


def split_words(key: str) -> List[str]:
    """
    Break a key into words on delimiters, case changes and digit boundaries.
    Example: 'post-blocks_HTMLParser2' -> ['post', 'blocks', 'HTML', 'Parser', '2']
    """
    words: List[str] = []
    for chunk in _CHUNK_RE.findall(_APOSTROPHES_RE.sub("", key)):
        classes = "".join(_char_class(c) for c in chunk)
        words.extend(chunk[m.start() : m.end()] for m in _WORD_RE.finditer(classes))
    return words


def camel_case(key: Any) -> Any:
    """
    Camel-case a single mapping key; non-string keys are returned unchanged.
    Example: 'key-is-camelized' -> 'keyIsCamelized', '_meta' -> 'meta'
    """
    if not isinstance(key, str):
        return key
    words = split_words(key)
    if not words:
        return ""
    head, *rest = words
    return head.lower() + "".join(w[:1].upper() + w[1:].lower() for w in rest)


def camelize_keys(value: Any) -> Any:
    """Recursively camel-case mapping keys; lists keep their order, scalars pass through."""
    if isinstance(value, dict):
        return {camel_case(k): camelize_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [camelize_keys(v) for v in value]
    return value


__all__ = ["split_words", "camel_case", "camelize_keys"]
