"""hal_normalize package exports."""

from .client import HalClient, HalClientError, HalHTTPError, HalParseError, RetryConfig
from .core import (
    DEFAULT_META_KEY,
    CyclicEmbedError,
    HalNormalizeError,
    NormalizeOptions,
    OptionsError,
    camelize_keys,
    canonicalize_uri,
    extract_resource,
    load_options_from_env,
    normalize,
    setup_logging,
)

__all__ = [
    # Normalization
    "normalize",
    "extract_resource",
    "canonicalize_uri",
    "camelize_keys",
    "NormalizeOptions",
    "DEFAULT_META_KEY",
    "load_options_from_env",
    "setup_logging",
    # Exceptions
    "HalNormalizeError",
    "OptionsError",
    "CyclicEmbedError",
    # Client
    "HalClient",
    "RetryConfig",
    "HalClientError",
    "HalHTTPError",
    "HalParseError",
]
