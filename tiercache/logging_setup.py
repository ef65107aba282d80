"""
Logging bootstrap for tiercache.

Modules log through ``logging.getLogger(__name__)`` and attach
structured fields via ``extra=``.  :func:`configure_logging` installs a
single root handler that renders those records as JSON lines or as
plain text, according to :class:`~tiercache.config.LoggingSettings`.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from tiercache.config import LoggingSettings, get_settings, validate_logging

# Attributes present on every LogRecord; anything else came from ``extra``.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED}


class JsonFormatter(logging.Formatter):
    """Render a record and its ``extra`` fields as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Plain-text formatter that appends ``extra`` fields as ``key=value``."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _extra_fields(record)
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in sorted(extras.items()))
        return line


_FORMATTERS = {"json": JsonFormatter, "text": TextFormatter}


def configure_logging(settings: Optional[LoggingSettings] = None) -> logging.Handler:
    """Install a root handler according to *settings*.

    Any handler previously installed by this function is replaced, so
    calling it twice does not duplicate output.

    Args:
        settings: Logging section to apply.  Defaults to
            ``get_settings().logging``.

    Returns:
        The installed handler.

    Raises:
        ConfigurationError: If the format or level is unknown.
    """
    settings = settings or get_settings().logging
    validate_logging(settings)
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_tiercache", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._tiercache = True  # type: ignore[attr-defined]
    handler.setFormatter(_FORMATTERS[settings.format]())
    root.addHandler(handler)
    root.setLevel(settings.level.upper())
    return handler
