"""Application configuration and env loading."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Item browser settings; flow-tree settings live in ``FlowkitConfig``."""

    items_path: str | None = None
    failure_rate: float = 0.0
    latency_ms: int = 0
    seed: int | None = None


_DEFAULT_ENV_FILES = (".env.flowkit", ".env.flowkit.local", ".env.app", ".env.app.local")
_QUOTES = frozenset({"'", '"'})


def parse_env_text(text: str) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines; blanks, comments and malformed lines are skipped."""
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if line.startswith("#") or not sep or not key:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
            value = value[1:-1]
        values[key] = value
    return values


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> int:
    """Copy an env file into ``os.environ``. Returns number of variables applied.

    A missing file is not an error. Existing variables win unless
    ``override_existing`` is set.
    """
    env_path = _resolve_env_path(path)
    if not env_path.is_file():
        return 0
    applied = 0
    for key, value in parse_env_text(env_path.read_text(encoding="utf-8")).items():
        if override_existing or key not in os.environ:
            os.environ[key] = value
            applied += 1
    return applied


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load flowkit then app env files, each followed by its ``.local`` override.

    Later files win over earlier ones when ``override_existing`` is set.
    """
    for path in _DEFAULT_ENV_FILES if paths is None else paths:
        load_env_file(path, override_existing=override_existing)


def load_app_config(*, env: Mapping[str, str] | None = None) -> AppConfig:
    source = os.environ if env is None else env
    items_path = source.get("ITEMBROWSER_ITEMS_PATH", "").strip()
    return AppConfig(
        items_path=items_path or None,
        failure_rate=_rate(source.get("ITEMBROWSER_FAILURE_RATE")),
        latency_ms=_non_negative_int(source.get("ITEMBROWSER_LATENCY_MS")) or 0,
        seed=_non_negative_int(source.get("ITEMBROWSER_SEED")),
    )


def _rate(raw: str | None) -> float:
    if raw is None:
        return 0.0
    try:
        value = float(raw.strip())
    except ValueError:
        return 0.0
    return min(1.0, max(0.0, value))


def _non_negative_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return max(0, int(raw.strip()))
    except ValueError:
        return None


def _resolve_env_path(path: str) -> Path:
    """Resolve relative env paths against the cwd first, then the project root."""
    candidate = Path(path)
    if candidate.is_absolute() or candidate.exists():
        return candidate
    return Path(__file__).resolve().parents[2] / candidate
