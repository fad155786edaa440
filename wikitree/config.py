"""Persistent JSON config helpers.

Stores the default version to resolve pages at, history page size, the
pygments style used for rendering, and the git command timeout.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .pagination import DEFAULT_PER_PAGE
from .version_store.git import DEFAULT_GIT_TIMEOUT_SECONDS

APP_NAME = "wikitree"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_VERSION = "master"
DEFAULT_RENDER_STYLE = "default"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_nonempty_str(key: str, default: str) -> str:
    value = load_config().get(key)
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


def load_default_version() -> str:
    """Load the version identifier used when a lookup names none."""
    return _load_nonempty_str("default_version", DEFAULT_VERSION)


def save_default_version(version: str) -> None:
    stripped = str(version).strip()
    if not stripped:
        return
    config = load_config()
    config["default_version"] = stripped
    save_config(config)


def load_per_page() -> int:
    """Load history page size.

    Booleans, non-integers, and values below 1 fall back to the default.
    """
    value = load_config().get("per_page")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_PER_PAGE
    return value


def save_per_page(per_page: int) -> None:
    if per_page <= 0:
        return
    config = load_config()
    config["per_page"] = int(per_page)
    save_config(config)


def load_render_style() -> str:
    """Load the pygments style name used for HTML rendering."""
    return _load_nonempty_str("render_style", DEFAULT_RENDER_STYLE)


def load_git_timeout_seconds() -> float:
    value = load_config().get("git_timeout_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DEFAULT_GIT_TIMEOUT_SECONDS
    return float(value)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_VERSION",
    "DEFAULT_RENDER_STYLE",
    "load_config",
    "save_config",
    "load_default_version",
    "save_default_version",
    "load_per_page",
    "save_per_page",
    "load_render_style",
    "load_git_timeout_seconds",
]
