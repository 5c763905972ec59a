from __future__ import annotations

from typing import Optional


class HalNormalizeError(Exception):
    """Base error for normalization failures."""


class OptionsError(HalNormalizeError, ValueError):
    """Invalid normalization options."""


class CyclicEmbedError(HalNormalizeError):
    def __init__(self, uri: Optional[str]):
        super().__init__(f"Resource {uri!r} embeds itself (cyclic embed graph)")
        self.uri = uri


__all__ = ["HalNormalizeError", "OptionsError", "CyclicEmbedError"]
