"""
Central configuration loader for tiercache.

Reads ``config/config.yaml`` and ``.env``, merges environment-variable
overrides (``TIERCACHE_`` prefix), and exposes a typed :class:`Settings`
singleton via :func:`get_settings`.
"""

import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from tiercache.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Resolve project root (directory containing ``config/``)
# ---------------------------------------------------------------------------

_THIS_DIR = Path(__file__).resolve().parent          # tiercache/
_PROJECT_ROOT = _THIS_DIR.parent                     # repo root


def _project_path(*parts: str) -> Path:
    """Build an absolute path relative to the project root."""
    return _PROJECT_ROOT.joinpath(*parts)


# ---------------------------------------------------------------------------
# Nested settings dataclasses
# ---------------------------------------------------------------------------


@dataclass
class CacheSettings:
    log_hits: bool = True


@dataclass
class RemoteSettings:
    simulated_delay_seconds: float = 0.0


@dataclass
class LoggingSettings:
    level: str = "INFO"
    format: str = "json"


@dataclass
class Settings:
    """Top-level settings container."""
    cache: CacheSettings = field(default_factory=CacheSettings)
    remote: RemoteSettings = field(default_factory=RemoteSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


# ---------------------------------------------------------------------------
# Value casting  (shared by YAML values and env-var overrides)
# ---------------------------------------------------------------------------

_TRUE_WORDS = ("1", "true", "yes", "on")
_FALSE_WORDS = ("0", "false", "no", "off")


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError(f"not a number: {value!r}")
    return float(value)


def _to_int(value: Any) -> int:
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"not an integer: {value!r}")
    return int(value)


def _to_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"not a string: {value!r}")
    return value


_TYPE_MAP = {
    int: _to_int,
    float: _to_float,
    bool: _to_bool,
    str: _to_str,
}


# ---------------------------------------------------------------------------
# YAML loader
# ---------------------------------------------------------------------------

def _load_yaml(path: Path) -> Dict[str, Any]:
    """Read and parse a YAML file.  Returns ``{}`` if the file is missing."""
    if not path.exists():
        logger.warning("Config file not found: %s", path)
        return {}
    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _apply_dict(target: object, data: Dict[str, Any]) -> None:
    """Apply *data* values onto a dataclass instance, ignoring unknown keys.

    Each value is cast to the type of the field's default.

    Raises:
        ConfigurationError: If a value cannot be cast.
    """
    for key, value in data.items():
        if not hasattr(target, key):
            logger.debug("Ignoring unknown config key: %s", key)
            continue
        current = getattr(target, key)
        cast = _TYPE_MAP.get(type(current), _to_str)
        try:
            setattr(target, key, cast(value))
        except (ValueError, TypeError) as exc:
            raise ConfigurationError(
                f"Invalid value for '{key}': {value!r} ({exc})"
            ) from exc


# ---------------------------------------------------------------------------
# Env-var overrides  (TIERCACHE_SECTION_KEY  e.g. TIERCACHE_LOGGING_LEVEL)
# ---------------------------------------------------------------------------

_SECTIONS = ["cache", "remote", "logging"]


def _apply_env_overrides(settings: Settings) -> None:
    """Override scalar fields via ``TIERCACHE_<SECTION>_<KEY>`` env vars."""
    for section_name in _SECTIONS:
        section = getattr(settings, section_name, None)
        if section is None:
            continue
        prefix = f"TIERCACHE_{section_name.upper()}_"
        for key in list(vars(section)):
            env_key = prefix + key.upper()
            env_val = os.environ.get(env_key)
            if env_val is None:
                continue
            current = getattr(section, key)
            cast = _TYPE_MAP.get(type(current), _to_str)
            try:
                setattr(section, key, cast(env_val))
                logger.debug("Env override applied: %s=%s", env_key, env_val)
            except (ValueError, TypeError):
                logger.warning("Invalid env override %s=%s", env_key, env_val)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

LOG_FORMATS = ("json", "text")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


def validate_logging(section: LoggingSettings) -> None:
    """Check the logging section.

    Raises:
        ConfigurationError: On an unknown format or level.
    """
    if section.format not in LOG_FORMATS:
        raise ConfigurationError(
            f"logging.format must be one of {LOG_FORMATS}, got {section.format!r}"
        )
    if not isinstance(section.level, str) or section.level.upper() not in LOG_LEVELS:
        raise ConfigurationError(
            f"logging.level must be one of {LOG_LEVELS}, got {section.level!r}"
        )


def _validate(settings: Settings) -> None:
    validate_logging(settings.logging)
    if settings.remote.simulated_delay_seconds < 0:
        raise ConfigurationError("remote.simulated_delay_seconds must be >= 0")


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_settings: Optional[Settings] = None
_lock = threading.Lock()


def get_settings(
    *,
    yaml_path: Optional[Path] = None,
    env_path: Optional[Path] = None,
    _force_reload: bool = False,
) -> Settings:
    """Return the process-wide :class:`Settings` singleton.

    On first call (or when ``_force_reload=True``) the function:

    1. Calls ``load_dotenv()`` to populate env vars from ``.env``.
    2. Reads ``config/config.yaml``.
    3. Applies ``TIERCACHE_*`` environment-variable overrides.
    4. Validates the result.

    Args:
        yaml_path: Override the YAML config file path (testing).
        env_path: Override the ``.env`` file path (testing).
        _force_reload: Re-read everything even if already loaded.

    Returns:
        The global ``Settings`` instance.

    Raises:
        ConfigurationError: If the YAML file cannot be parsed or a
            value is invalid.
    """
    global _settings

    if _settings is not None and not _force_reload:
        return _settings

    with _lock:
        if _settings is not None and not _force_reload:
            return _settings

        dotenv_path = env_path or _project_path(".env")
        load_dotenv(dotenv_path, override=True)

        config_path = yaml_path or _project_path("config", "config.yaml")
        raw = _load_yaml(config_path)

        settings = Settings()
        for section_name in _SECTIONS:
            section_data = raw.get(section_name)
            if isinstance(section_data, dict):
                _apply_dict(getattr(settings, section_name), section_data)

        _apply_env_overrides(settings)
        _validate(settings)

        _settings = settings
        logger.info("Settings loaded from %s", config_path)
        return _settings


def reset_settings() -> None:
    """Clear the cached singleton (for testing)."""
    global _settings
    with _lock:
        _settings = None
