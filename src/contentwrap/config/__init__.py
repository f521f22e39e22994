"""Configuration management for contentwrap."""

from __future__ import annotations

import os
import textwrap
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import CodecSettings, ContentSettings, ContentWrapConfig, LoggingSettings
from .resolver import ENV_PREFIX, flatten_for_env, resolve_with_precedence

DEFAULT_CONFIG_PATH = Path("~/.contentwrap/config.yaml")
_CONFIG_HEADER = textwrap.dedent(
    """\
    # contentwrap configuration file
    # Sections: codec (wrapper/base64 rendering), content (names, hashing, MIME), logging.
    """
)


class ConfigManager:
    """Load and persist configuration data, applying precedence rules."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = env if env is not None else os.environ

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    def load(
        self,
        *,
        overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
    ) -> ContentWrapConfig:
        """Return the effective configuration.

        A missing file is not an error; defaults apply. Environment variables
        named ``CONTENTWRAP__SECTION__KEY`` override the file, and ``overrides``
        override both.
        """
        return resolve_with_precedence(
            defaults=ContentWrapConfig(),
            file_overrides=self._read_file(),
            env_overrides=self._extract_env(self._env) if include_env else None,
            overrides=overrides,
        )

    def save(self, config: ContentWrapConfig | Mapping[str, Any]) -> None:
        """Persist configuration data to disk."""
        if isinstance(config, ContentWrapConfig):
            data = config.model_dump(mode="python")
        else:
            data = dict(config)
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        serialized = yaml.safe_dump(data, sort_keys=False)
        self._config_path.write_text(_CONFIG_HEADER + serialized, encoding="utf-8")

    def _read_file(self) -> dict[str, Any]:
        if not self._config_path.exists():
            return {}

        try:
            raw = yaml.safe_load(self._config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")

        return raw

    def _extract_env(self, env: Mapping[str, str]) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        for key, raw_value in env.items():
            if not key.startswith(ENV_PREFIX):
                continue
            segments = [segment.lower() for segment in key[len(ENV_PREFIX) :].split("__")]
            if not all(segments):
                continue
            try:
                value = yaml.safe_load(raw_value)
            except yaml.YAMLError:
                value = raw_value
            overrides[".".join(segments)] = value
        return overrides


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "ContentWrapConfig",
    "CodecSettings",
    "ContentSettings",
    "LoggingSettings",
    "resolve_with_precedence",
    "flatten_for_env",
    "ConfigError",
]
