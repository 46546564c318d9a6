"""Centralized flowkit configuration sourced from environment."""

from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Literal, Mapping

from flowkit.runtime.root import AfterFinishPolicy

type FlowkitProfileName = Literal["dev", "release"]


@dataclass(frozen=True, slots=True)
class FlowkitProfile:
    """Resolved profile defaults."""

    name: FlowkitProfileName
    strict_discipline: bool
    log_level: str


_PROFILE_PRESETS: dict[FlowkitProfileName, FlowkitProfile] = {
    "dev": FlowkitProfile(name="dev", strict_discipline=True, log_level="DEBUG"),
    "release": FlowkitProfile(name="release", strict_discipline=False, log_level="INFO"),
}


@dataclass(frozen=True, slots=True)
class FlowkitConfig:
    profile: FlowkitProfile
    strict_discipline: bool
    log_level: str
    log_format: str
    log_file: str | None
    root_policy: AfterFinishPolicy
    journal_capacity: int


_FLOWKIT_CONFIG: ContextVar[FlowkitConfig | None] = ContextVar("flowkit_config", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def normalize_profile_name(raw: str | None) -> FlowkitProfileName:
    value = (raw or "").strip().lower()
    if value in {"dev", "development", "debug"}:
        return "dev"
    return "release"


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with flowkit-prefixed override."""
    value = _raw("FLOWKIT_LOG_LEVEL", env=env)
    if value is None or not value.strip():
        value = _raw("LOG_LEVEL", env=env) or default
    return value.strip().upper()


def _normalize_log_format(raw: str) -> str:
    value = raw.strip().lower()
    return value if value in {"text", "json"} else "text"


def load_flowkit_config(*, env: Mapping[str, str] | None = None) -> FlowkitConfig:
    profile = _PROFILE_PRESETS[normalize_profile_name(_raw("FLOWKIT_PROFILE", env=env))]
    log_file = _text("FLOWKIT_LOG_FILE", "", env=env)
    return FlowkitConfig(
        profile=profile,
        strict_discipline=_flag("FLOWKIT_STRICT", profile.strict_discipline, env=env),
        log_level=resolve_log_level_name(profile.log_level, env=env),
        log_format=_normalize_log_format(_text("FLOWKIT_LOG_FORMAT", "text", env=env)),
        log_file=log_file or None,
        root_policy=AfterFinishPolicy.parse(_raw("FLOWKIT_ROOT_POLICY", env=env)),
        journal_capacity=_int("FLOWKIT_JOURNAL_CAPACITY", 512, minimum=16, env=env),
    )


def initialize_flowkit_config(*, env: Mapping[str, str] | None = None) -> FlowkitConfig:
    config = load_flowkit_config(env=env)
    _FLOWKIT_CONFIG.set(config)
    return config


def set_flowkit_config(config: FlowkitConfig) -> FlowkitConfig:
    _FLOWKIT_CONFIG.set(config)
    return config


def get_flowkit_config() -> FlowkitConfig:
    config = _FLOWKIT_CONFIG.get()
    if config is not None:
        return config
    return initialize_flowkit_config()


__all__ = [
    "FlowkitConfig",
    "FlowkitProfile",
    "FlowkitProfileName",
    "get_flowkit_config",
    "initialize_flowkit_config",
    "load_flowkit_config",
    "normalize_profile_name",
    "resolve_log_level_name",
    "set_flowkit_config",
]
