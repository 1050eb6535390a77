"""Read-only user config loader for sfmanager."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from ..constants import DEFAULT_THEME, THEME_NAMES
from .file_operations import DeletePolicy

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    """User-facing configuration. Never written back; there is no session state."""

    theme: str = DEFAULT_THEME
    show_hidden: bool = True
    delete_policy: DeletePolicy = DeletePolicy.TRASH
    max_operations: int = 0


def default_config_path() -> Path:
    """Return config path: $SFMANAGER_CONFIG or ~/.config/sfmanager/config.toml."""
    override = os.environ.get("SFMANAGER_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "sfmanager" / "config.toml"


def _coerce_bool(value, default=False):
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lower = value.strip().lower()
        if lower in ("1", "true", "yes", "on"):
            return True
        if lower in ("0", "false", "no", "off"):
            return False
    return default


def _coerce_count(value, default=0):
    if isinstance(value, bool):
        return default
    try:
        count = int(value)
    except (TypeError, ValueError):
        return default
    return count if count >= 0 else default


def _normalize_config(raw: dict) -> AppConfig:
    ui = raw.get("ui", {})
    if not isinstance(ui, dict):
        ui = {}
    ops = raw.get("operations", {})
    if not isinstance(ops, dict):
        ops = {}

    theme = str(ui.get("theme", DEFAULT_THEME)).strip().lower() or DEFAULT_THEME
    if theme not in THEME_NAMES:
        LOGGER.warning("unknown theme %r, using %s", theme, DEFAULT_THEME)
        theme = DEFAULT_THEME

    policy_raw = str(ops.get("delete_policy", DeletePolicy.TRASH.value)).strip().lower()
    try:
        delete_policy = DeletePolicy(policy_raw)
    except ValueError:
        LOGGER.warning("unknown delete_policy %r, using trash", policy_raw)
        delete_policy = DeletePolicy.TRASH

    return AppConfig(
        theme=theme,
        show_hidden=_coerce_bool(ui.get("show_hidden"), default=True),
        delete_policy=delete_policy,
        max_operations=_coerce_count(ops.get("max_operations"), default=0),
    )


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from TOML file; return defaults when missing/invalid."""
    cfg_path = Path(path) if path is not None else default_config_path()
    try:
        text = cfg_path.read_text(encoding="utf-8")
    except OSError:
        return AppConfig()
    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        LOGGER.warning("ignoring invalid config %s: %s", cfg_path, exc)
        return AppConfig()
    return _normalize_config(raw)
