# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Type-safe configuration with YAML/TOML files, env vars, and property binding."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast, get_type_hints

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

from corsgate.kernel.exceptions import ConfigurationError

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")

_CONFIG_PROPERTIES_ATTR = "__corsgate_config_prefix__"

PROFILES_ENV_VAR = "CORSGATE_PROFILES_ACTIVE"


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a class as bindable to a configuration prefix.

    Works with both dataclasses and Pydantic BaseModel subclasses.
    When used with Pydantic models, Config.bind() uses model_validate()
    for automatic type coercion, nested model support, and fail-fast
    validation at startup.

    Usage:
        @config_properties(prefix="corsgate.web")
        @dataclass
        class WebProperties:
            port: int = 8080
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def active_profiles_from_env() -> list[str]:
    """Read the comma-separated active profile list from the environment."""
    raw = os.environ.get(PROFILES_ENV_VAR, "")
    return [p.strip() for p in raw.split(",") if p.strip()]


class Config:
    """Hierarchical configuration with dot-notation access and env var overrides.

    Priority (highest wins):
    1. Environment variables (CORSGATE_SECTION_KEY format)
    2. Configuration dict / YAML file values
    3. Dataclass or model defaults
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """List of config file paths that were loaded, in merge order."""
        return list(self._loaded_sources)

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the raw configuration data."""
        return dict(self._data)

    @classmethod
    def from_sources(
        cls,
        base_dir: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load and merge config from multiple sources.

        Merge order (later wins):
        1. Package defaults (corsgate-defaults.yaml)
        2. config/corsgate.yaml or config/corsgate.toml
        3. corsgate.yaml or corsgate.toml (base directory)
        4. Profile overlays: config/corsgate-{profile}.yaml, corsgate-{profile}.yaml
        5. Environment variables (handled at read time in get())
        """
        base_dir = Path(base_dir)
        data: dict[str, Any] = {}
        sources: list[str] = []

        if load_defaults:
            data = cls._load_package_defaults()
            sources.append("corsgate-defaults.yaml (package defaults)")

        for search_dir in (base_dir / "config", base_dir):
            for ext in (".yaml", ".toml"):
                candidate = search_dir / f"corsgate{ext}"
                if candidate.is_file():
                    data = cls._deep_merge(data, cls._load_config_data(candidate))
                    sources.append(str(candidate))

        for profile in active_profiles or []:
            for search_dir in (base_dir / "config", base_dir):
                for ext in (".yaml", ".toml"):
                    candidate = search_dir / f"corsgate-{profile}{ext}"
                    if candidate.is_file():
                        data = cls._deep_merge(data, cls._load_config_data(candidate))
                        sources.append(f"{candidate} (profile: {profile})")

        instance = cls(data)
        instance._loaded_sources = sources
        return instance

    @staticmethod
    def _load_config_data(path: Path) -> dict[str, Any]:
        """Load config data from a YAML or TOML file."""
        try:
            if path.suffix == ".toml":
                with open(path, "rb") as f:
                    return tomllib.load(f) or {}
            with open(path) as f:
                return yaml.safe_load(f) or {}
        except (yaml.YAMLError, tomllib.TOMLDecodeError) as exc:
            raise ConfigurationError(
                f"Cannot parse configuration file '{path}': {exc}",
                code="CORS_CONFIG_INVALID",
                context={"path": str(path)},
            ) from exc

    @staticmethod
    def _load_package_defaults() -> dict[str, Any]:
        """Load built-in defaults from corsgate.resources."""
        defaults_file = importlib.resources.files("corsgate.resources").joinpath("corsgate-defaults.yaml")
        with importlib.resources.as_file(defaults_file) as p, open(p) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge override into base, with override values winning."""
        merged = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = Config._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first.

        String values containing ``${...}`` placeholders are resolved:
        - ``${ENV_VAR}`` — resolved from environment variables
        - ``${config.key}`` — resolved from other config values
        - ``${key:default}`` — uses default if key/env not found
        """
        # corsgate.web.port -> CORSGATE_WEB_PORT
        env_base = key.removeprefix("corsgate.")
        env_key = "CORSGATE_" + env_base.upper().replace(".", "_").replace("-", "_")
        env_val = os.environ.get(env_key)
        if env_val is not None:
            return env_val

        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict):
                current = current.get(part)
                if current is None:
                    return default
            else:
                return default

        if isinstance(current, str) and "${" in current:
            return self._resolve_placeholders(current)

        return current

    def _resolve_placeholders(self, value: str, _depth: int = 0) -> str:
        """Resolve ``${...}`` placeholders in a string value.

        Supports environment variables, config references, and defaults.
        Guards against circular references with a max recursion depth.
        """
        if _depth > 10:
            raise ConfigurationError(
                f"Max recursion depth exceeded resolving placeholders in '{value}'. Check for circular references.",
                code="CORS_CONFIG_INVALID",
            )

        def _replace(match: re.Match[str]) -> str:
            inner = match.group(1)

            if ":" in inner:
                ref_key, default_val = inner.split(":", 1)
            else:
                ref_key, default_val = inner, None

            env_val = os.environ.get(ref_key)
            if env_val is not None:
                return env_val

            parts = ref_key.split(".")
            current: Any = self._data
            for part in parts:
                if isinstance(current, dict):
                    current = current.get(part)
                    if current is None:
                        break
                else:
                    current = None
                    break

            if current is not None:
                resolved = str(current)
                if "${" in resolved:
                    resolved = self._resolve_placeholders(resolved, _depth + 1)
                return resolved

            if default_val is not None:
                return cast(str, default_val)

            raise ConfigurationError(
                f"Cannot resolve placeholder '${{{inner}}}': not found in environment or config",
                code="CORS_CONFIG_INVALID",
                context={"placeholder": inner},
            )

        return _PLACEHOLDER_RE.sub(_replace, value)

    def _resolve_tree(self, value: Any) -> Any:
        """Resolve placeholders in every string nested under *value*."""
        if isinstance(value, dict):
            return {k: self._resolve_tree(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._resolve_tree(v) for v in value]
        if isinstance(value, str) and "${" in value:
            return self._resolve_placeholders(value)
        return value

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get all values under a prefix, with placeholders resolved."""
        parts = prefix.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict):
                current = current.get(part, {})
            else:
                return {}
        if not isinstance(current, dict):
            return {}
        return cast(dict[str, Any], self._resolve_tree(current))

    def bind(self, config_cls: type[T]) -> T:
        """Bind configuration to a @config_properties dataclass or Pydantic model.

        Scalar fields can be overridden by environment variables following
        the ``get()`` naming rule.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ConfigurationError(
                f"{config_cls.__name__} is not decorated with @config_properties",
                code="CORS_CONFIG_INVALID",
            )

        section = self.get_section(prefix)

        if isinstance(config_cls, type) and issubclass(config_cls, BaseModel):
            for name in config_cls.model_fields:
                value = self.get(f"{prefix}.{name}")
                # only scalars; nested sections keep their resolved form
                if isinstance(value, (str, int, float, bool)):
                    section[name] = value
            try:
                return cast(T, config_cls.model_validate(section))
            except ValidationError as exc:
                raise ConfigurationError(
                    f"Configuration validation failed for '{config_cls.__name__}' (prefix='{prefix}'):\n{exc}",
                    code="CORS_CONFIG_INVALID",
                    context={"prefix": prefix},
                ) from exc

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}")
            if value is None:
                continue
            expected_type = hints.get(field.name)
            try:
                if expected_type is int and isinstance(value, str):
                    value = int(value)
                elif expected_type is float and isinstance(value, str):
                    value = float(value)
                elif expected_type is bool and isinstance(value, str):
                    value = value.lower() in ("true", "1", "yes")
            except ValueError as exc:
                raise ConfigurationError(
                    f"Invalid value {value!r} for '{prefix}.{field.name}'",
                    code="CORS_CONFIG_INVALID",
                    context={"key": f"{prefix}.{field.name}"},
                ) from exc
            kwargs[field.name] = value

        return config_cls(**kwargs)
