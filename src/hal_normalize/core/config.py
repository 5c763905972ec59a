from __future__ import annotations

import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .options import DEFAULT_META_KEY, NormalizeOptions, resolve_options

ENV_PREFIX = "HAL_NORMALIZE_"


def _get_bool_env(name: str, default: bool) -> bool:
    """Parse a boolean environment variable with a safe default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if val in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _get_str_env(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def load_options_from_env(*, use_dotenv: bool = True, **overrides: Any) -> NormalizeOptions:
    """Load normalize options from HAL_NORMALIZE_* environment variables (optional .env)."""
    if use_dotenv:
        load_dotenv()

    data: Dict[str, Any] = {
        "camelize_keys": _get_bool_env(f"{ENV_PREFIX}CAMELIZE_KEYS", True),
        "base_url": _get_str_env(f"{ENV_PREFIX}BASE_URL") or "",
        "meta_key": _get_str_env(f"{ENV_PREFIX}META_KEY") or DEFAULT_META_KEY,
        "filter_references": _get_bool_env(f"{ENV_PREFIX}FILTER_REFERENCES", False),
        "embedded_standalone_list_key": _get_str_env(f"{ENV_PREFIX}LIST_KEY"),
        "virtual_self_links": _get_bool_env(f"{ENV_PREFIX}VIRTUAL_SELF_LINKS", False),
    }
    return resolve_options(data, **overrides)


__all__ = ["ENV_PREFIX", "load_options_from_env"]
