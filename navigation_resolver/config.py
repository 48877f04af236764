"""Resolver settings and YAML settings loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .paths import (
    DEFAULT_ACTION_WORDS,
    DEFAULT_ENTERPRISE_NAMESPACE,
    DEFAULT_INDUSTRY_PREFIXES,
)

ENV_PREFIX = "NAVIGATION_RESOLVER_"


class ResolverSettings(BaseSettings):
    """Configuration for navigation resolution and component loading."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_file=".env", extra="ignore")

    # Administrative scope that holds the cross-tenant alias definitions
    platform_scope: str = "00000000-0000-0000-0000-000000000000"

    # Cache
    cache_ttl_seconds: float = Field(default=300.0, ge=0)

    # Path rewriting
    enterprise_namespace: str = DEFAULT_ENTERPRISE_NAMESPACE
    industry_prefixes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_INDUSTRY_PREFIXES)
    )
    action_words: List[str] = Field(default_factory=lambda: list(DEFAULT_ACTION_WORDS))

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    @field_validator("enterprise_namespace")
    @classmethod
    def _validate_namespace(cls, value: str) -> str:
        if not (value.startswith("/") and value.endswith("/")) or value == "/":
            raise ValueError(f"enterprise_namespace must look like '/name/': {value!r}")
        return value

    @field_validator("industry_prefixes")
    @classmethod
    def _validate_prefixes(cls, value: List[str]) -> List[str]:
        for prefix in value:
            if not (prefix.startswith("/") and prefix.endswith("/")) or prefix == "/":
                raise ValueError(f"industry prefix must look like '/name/': {prefix!r}")
        return value

    @field_validator("action_words")
    @classmethod
    def _validate_action_words(cls, value: List[str]) -> List[str]:
        cleaned = [word.strip().strip("/") for word in value]
        if any(not word for word in cleaned):
            raise ValueError("action words must be non-empty")
        return cleaned

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


def _lower_keys(d: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize dictionary keys to lowercase."""
    return {k.lower(): v for k, v in d.items()}


def _apply_env_overrides(cfg: Dict[str, Any], env: Dict[str, str], prefix: str) -> None:
    """Apply flat env overrides with basic type coercion.

    Example: NAVIGATION_RESOLVER_CACHE_TTL_SECONDS=60 overrides cache_ttl_seconds.
    Comma-separated values override list settings; string settings are kept
    verbatim, so a numeric-looking scope stays a string.
    """
    plen = len(prefix)
    for key, value in env.items():
        if not key.startswith(prefix):
            continue
        leaf = key[plen:].lower()
        field = ResolverSettings.model_fields.get(leaf)
        if isinstance(cfg.get(leaf), list) or leaf in {"industry_prefixes", "action_words"}:
            cfg[leaf] = [part.strip() for part in value.split(",") if part.strip()]
        elif field is not None and field.annotation is str:
            cfg[leaf] = value
        elif value.lower() in {"true", "false"}:
            cfg[leaf] = value.lower() == "true"
        else:
            try:
                if "." in value:
                    cfg[leaf] = float(value)
                else:
                    cfg[leaf] = int(value)
            except ValueError:
                cfg[leaf] = value


def load_resolver_settings(
    path: Path | str,
    *,
    env_overrides: bool = True,
    env: Optional[Dict[str, str]] = None,
    env_prefix: str = ENV_PREFIX,
) -> ResolverSettings:
    """Load YAML settings and return a typed `ResolverSettings`.

    - Top-level keys are case-insensitive
    - Environment overrides (``env`` or ``os.environ``) win over file values
    """
    p = Path(path)
    if not p.exists():
        raise ConfigurationError(f"Settings file not found: {p}")

    with open(p, "r") as fh:
        raw = yaml.safe_load(fh) or {}

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Settings file must contain a mapping: {p}")

    data = _lower_keys(raw)

    if env_overrides:
        _apply_env_overrides(data, env if env is not None else dict(os.environ), env_prefix)

    try:
        # Validate from the merged mapping only, without re-reading the environment
        return ResolverSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid resolver settings: {e}", original_exception=e) from e


_settings: Optional[ResolverSettings] = None


def get_settings() -> ResolverSettings:
    """Get the process settings instance, created from the environment on first use."""
    global _settings
    if _settings is None:
        try:
            _settings = ResolverSettings()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid resolver settings: {e}", original_exception=e) from e
    return _settings
