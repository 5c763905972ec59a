from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import OptionsError
from .uri import UriNormalizer, identity_uri, make_uri_normalizer

DEFAULT_META_KEY = "_meta"


class NormalizeOptions(BaseModel):
    """
    Settings for one normalize() call.

    Field names are snake_case; the camelCase names used by JS HAL tooling
    (camelizeKeys, normalizeUri, baseUrl, ...) are accepted as aliases.
    At most one URI style is active: a `normalize_uri` callable or a
    declarative `base_url` prefix.
    """

    camelize_keys: bool = Field(default=True, alias="camelizeKeys")
    normalize_uri: Optional[Callable[[str], str]] = Field(
        default=None, alias="normalizeUri"
    )
    base_url: str = Field(default="", alias="baseUrl")
    meta_key: str = Field(default=DEFAULT_META_KEY, alias="metaKey", min_length=1)
    filter_references: bool = Field(default=False, alias="filterReferences")
    embedded_standalone_list_key: Optional[str] = Field(
        default=None, alias="embeddedStandaloneListKey"
    )
    virtual_self_links: bool = Field(default=False, alias="virtualSelfLinks")

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _check_exclusive(self) -> "NormalizeOptions":
        if self.normalize_uri is not None and self.base_url:
            raise ValueError("normalize_uri and base_url are mutually exclusive")
        if self.virtual_self_links and not self.embedded_standalone_list_key:
            raise ValueError(
                "virtual_self_links requires embedded_standalone_list_key"
            )
        return self

    @property
    def standalone_collections(self) -> bool:
        return bool(self.embedded_standalone_list_key)

    def uri_normalizer(self) -> UriNormalizer:
        if self.normalize_uri is not None:
            return self.normalize_uri
        if self.base_url:
            return make_uri_normalizer(self.base_url)
        return identity_uri


OptionsLike = Union[NormalizeOptions, Mapping[str, Any], None]


def _by_field_name(data: Mapping[str, Any]) -> Dict[str, Any]:
    aliases = {
        field.alias: name
        for name, field in NormalizeOptions.model_fields.items()
        if field.alias
    }
    return {aliases.get(key, key): value for key, value in data.items()}


def resolve_options(options: OptionsLike = None, **overrides: Any) -> NormalizeOptions:
    """Build NormalizeOptions from a model, a mapping or nothing, applying overrides."""
    if isinstance(options, NormalizeOptions):
        if not overrides:
            return options
        data = options.model_dump(exclude_unset=True)
    else:
        data = _by_field_name(options or {})

    data.update(_by_field_name(overrides))
    try:
        return NormalizeOptions.model_validate(data)
    except ValidationError as exc:
        raise OptionsError(f"Invalid normalize options: {exc}") from exc


__all__ = ["DEFAULT_META_KEY", "NormalizeOptions", "OptionsLike", "resolve_options"]
