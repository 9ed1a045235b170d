"""Application settings: defaults, optional TOML file, environment overrides."""
from __future__ import annotations

import logging
import os
import shlex
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from .options import FormatOptions

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "jsfmt-studio.toml"
CONFIG_PATH_ENV = "JSFMT_STUDIO_CONFIG"


@dataclass(frozen=True)
class StudioSettings:
    """Resolved settings shared by every browser session."""

    debounce_ms: int = 500
    formatted_status_ms: int = 2000
    error_status_ms: int = 5000
    max_input_chars: int = 500_000
    max_file_bytes: int = 1024 * 1024
    prettier_command: Tuple[str, ...] = ("prettier",)
    engine_timeout_seconds: float = 20.0
    default_options: FormatOptions = field(default_factory=FormatOptions)

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


# section -> {toml key: settings field}
_SECTION_KEY_MAP: Dict[str, Dict[str, str]] = {
    "timing": {
        "debounce_ms": "debounce_ms",
        "formatted_status_ms": "formatted_status_ms",
        "error_status_ms": "error_status_ms",
    },
    "limits": {
        "max_input_chars": "max_input_chars",
        "max_file_bytes": "max_file_bytes",
    },
    "engine": {
        "command": "prettier_command",
        "timeout_seconds": "engine_timeout_seconds",
    },
}

_FORMAT_KEYS = frozenset({"tab_width", "print_width", "trailing_comma", "semicolons", "single_quote"})

_ENV_OVERRIDE_MAP: Dict[str, str] = {
    "JSFMT_STUDIO_DEBOUNCE_MS": "debounce_ms",
    "JSFMT_STUDIO_FORMATTED_STATUS_MS": "formatted_status_ms",
    "JSFMT_STUDIO_ERROR_STATUS_MS": "error_status_ms",
    "JSFMT_STUDIO_MAX_INPUT_CHARS": "max_input_chars",
    "JSFMT_STUDIO_MAX_FILE_BYTES": "max_file_bytes",
    "JSFMT_STUDIO_PRETTIER_COMMAND": "prettier_command",
    "JSFMT_STUDIO_ENGINE_TIMEOUT_SECONDS": "engine_timeout_seconds",
}

_FLOAT_FIELDS = frozenset({"engine_timeout_seconds"})


def _coerce_file_value(field_name: str, raw_value: Any, source: str) -> Any:
    if field_name == "prettier_command":
        if isinstance(raw_value, str):
            parts = shlex.split(raw_value)
        elif isinstance(raw_value, list) and all(isinstance(p, str) for p in raw_value):
            parts = [p.strip() for p in raw_value if p.strip()]
        else:
            raise ValueError(
                f"Invalid value for '{source}': expected str or array[str], got "
                f"{type(raw_value).__name__} ({raw_value!r})."
            )
        if not parts:
            raise ValueError(f"Invalid value for '{source}': expected a non-empty command.")
        return tuple(parts)

    if field_name in _FLOAT_FIELDS:
        if isinstance(raw_value, bool) or not isinstance(raw_value, (int, float)):
            raise ValueError(
                f"Invalid value for '{source}': expected float, got "
                f"{type(raw_value).__name__} ({raw_value!r})."
            )
        value = float(raw_value)
    else:
        if isinstance(raw_value, bool) or not isinstance(raw_value, int):
            raise ValueError(
                f"Invalid value for '{source}': expected int, got "
                f"{type(raw_value).__name__} ({raw_value!r})."
            )
        value = raw_value

    if value <= 0:
        raise ValueError(f"Invalid value for '{source}': expected a positive number, got {raw_value!r}.")
    return value


def _coerce_env_value(field_name: str, raw_value: str, env_name: str) -> Any:
    if field_name == "prettier_command":
        return _coerce_file_value(field_name, raw_value, env_name)
    try:
        parsed: Any = float(raw_value.strip()) if field_name in _FLOAT_FIELDS else int(raw_value.strip())
    except ValueError:
        expected = "float" if field_name in _FLOAT_FIELDS else "int"
        raise ValueError(
            f"Invalid environment override '{env_name}': expected {expected}, got {raw_value!r}."
        ) from None
    return _coerce_file_value(field_name, parsed, env_name)


def _format_options_from_table(raw_value: Any, defaults: FormatOptions) -> FormatOptions:
    if not isinstance(raw_value, dict):
        raise ValueError("Invalid value for 'format': expected table.")
    changes: Dict[str, Any] = {}
    for key, value in raw_value.items():
        if key not in _FORMAT_KEYS:
            logger.warning("Ignoring unknown config key 'format.%s'.", key)
            continue
        changes[key] = value
    try:
        return defaults.with_changes(**changes)
    except (TypeError, ValueError) as error:
        raise ValueError(f"Invalid value in 'format': {error}") from error


def settings_from_mapping(payload: Mapping[str, Any], base: Optional[StudioSettings] = None) -> StudioSettings:
    """Apply a parsed TOML document on top of `base` (defaults when omitted)."""
    settings = base or StudioSettings()
    changes: Dict[str, Any] = {}

    for section, value in payload.items():
        if section == "format":
            changes["default_options"] = _format_options_from_table(value, settings.default_options)
            continue
        key_map = _SECTION_KEY_MAP.get(section)
        if key_map is None:
            logger.warning("Ignoring unknown config section '%s'.", section)
            continue
        if not isinstance(value, dict):
            raise ValueError(f"Invalid value for '{section}': expected table.")
        for key, raw in value.items():
            field_name = key_map.get(key)
            if field_name is None:
                logger.warning("Ignoring unknown config key '%s.%s'.", section, key)
                continue
            changes[field_name] = _coerce_file_value(field_name, raw, f"{section}.{key}")

    return replace(settings, **changes)


def _apply_env_overrides(settings: StudioSettings, environ: Mapping[str, str]) -> StudioSettings:
    changes: Dict[str, Any] = {}
    for env_name, field_name in _ENV_OVERRIDE_MAP.items():
        raw = environ.get(env_name)
        if raw is None or not raw.strip():
            continue
        changes[field_name] = _coerce_env_value(field_name, raw, env_name)
    return replace(settings, **changes) if changes else settings


def load_settings(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> StudioSettings:
    """Resolve settings from defaults, a TOML file and the environment.

    The file is `path` when given, else `$JSFMT_STUDIO_CONFIG`, else
    `jsfmt-studio.toml` in the working directory. A missing file is not an
    error.
    """
    env = os.environ if environ is None else environ
    if path is None:
        configured = env.get(CONFIG_PATH_ENV)
        path = Path(configured) if configured else Path.cwd() / DEFAULT_CONFIG_FILENAME

    settings = StudioSettings()
    if path.is_file():
        with path.open("rb") as f:
            payload = tomllib.load(f)
        settings = settings_from_mapping(payload, settings)

    return _apply_env_overrides(settings, env)
