"""Tagged console logging for the rope demo.

Every message carries a level and a short component tag, e.g.
``[INFO][FrameLoop] Started | interval_ms=16.7``. Trailing key=value fields
are rendered compactly: floats to three decimals, points as ``(x, y)``.
"""
from __future__ import annotations

import logging
from typing import Any

LOGGER_NAME = "bezierrope"
DEFAULT_TAG = "Rope"

_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}

_logger = logging.getLogger(LOGGER_NAME)
if not _logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter("[%(levelname)s][%(tag)s] %(message)s"))
    _logger.addHandler(_handler)
    _logger.setLevel(logging.INFO)
    # Our records carry a custom "tag" field the root formatter knows nothing about
    _logger.propagate = False


class _TagAdapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: dict[str, Any]):
        kwargs.setdefault("extra", {})["tag"] = kwargs.pop("tag", DEFAULT_TAG)
        return msg, kwargs


_tagged = _TagAdapter(_logger, {})


def _level_value(level: str) -> int:
    name = (level or "INFO").upper()
    name = _LEVEL_ALIASES.get(name, name)
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def _format_value(value: Any) -> str:
    if hasattr(value, "as_tuple"):
        value = value.as_tuple()
    if isinstance(value, float):
        return f"{value:.3f}"
    if isinstance(value, tuple) and value and all(isinstance(v, (int, float)) for v in value):
        return "(" + ", ".join(_format_value(v) for v in value) + ")"
    return str(value)


def log_event(level: str, tag: str, message: str, **fields: Any) -> None:
    """Log a message with level+tag, appending key=value fields when provided."""
    if fields:
        extras = " ".join(f"{key}={_format_value(value)}" for key, value in fields.items())
        message = f"{message} | {extras}"
    _tagged.log(_level_value(level), message, tag=tag)


def set_log_level(level: str) -> None:
    """Set global log level (DEBUG/INFO/WARNING/ERROR)."""
    _logger.setLevel(_level_value(level))


def get_log_level() -> str:
    return logging.getLevelName(_logger.level)
