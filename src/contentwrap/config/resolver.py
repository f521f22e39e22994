"""Merge configuration layers into a validated ``ContentWrapConfig``."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from .exceptions import ConfigError
from .models import ContentWrapConfig

ENV_PREFIX = "CONTENTWRAP__"


def resolve_with_precedence(
    *,
    defaults: ContentWrapConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ContentWrapConfig:
    """Layer overrides on top of defaults: file, then environment, then explicit values.

    Keys in any layer may be nested mappings or dotted paths such as
    ``"content.hash_algorithm"``.
    """
    merged = defaults.model_dump(mode="python")
    for source_name, layer in (
        ("file", file_overrides),
        ("environment", env_overrides),
        ("explicit", overrides),
    ):
        if layer is None:
            continue
        merged = _deep_merge(merged, _expand_dotted(layer, source_name=source_name))

    try:
        return ContentWrapConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def flatten_for_env(config: ContentWrapConfig) -> Dict[str, str]:
    """Render the config as ``CONTENTWRAP__SECTION__KEY`` environment variables."""
    flat: Dict[str, str] = {}
    for section, values in config.model_dump(mode="python").items():
        for key, value in values.items():
            env_key = f"{ENV_PREFIX}{section.upper()}__{key.upper()}"
            flat[env_key] = "null" if value is None else str(value)
    return flat


def _expand_dotted(source: Mapping[str, Any], *, source_name: str) -> dict[str, Any]:
    if not isinstance(source, MappingABC):
        raise ConfigError(f"{source_name.capitalize()} overrides must be a mapping.")

    expanded: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise ConfigError(f"{source_name.capitalize()} override keys must be strings.")
        *parents, leaf = key.split(".")
        node = expanded
        for segment in parents:
            child = node.setdefault(segment, {})
            if not isinstance(child, dict):
                raise ConfigError(
                    f"{source_name.capitalize()} override for {key} conflicts with existing value."
                )
            node = child
        if isinstance(value, MappingABC):
            value = _expand_dotted(value, source_name=source_name)
            existing = node.get(leaf)
            if isinstance(existing, dict):
                value = _deep_merge(existing, value)
        node[leaf] = value
    return expanded


def _deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = deepcopy(dict(base))
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, MappingABC) and isinstance(current, MappingABC):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


__all__ = ["ENV_PREFIX", "resolve_with_precedence", "flatten_for_env"]
