from __future__ import annotations

import json
import logging
from logging.config import dictConfig
from typing import Any, Dict

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from .config import Settings

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line. Attributes passed through ``extra=`` or set by
    the request context filter end up under ``context``.
    """

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - formatting only
        data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and value is not None
        }
        if context:
            data["context"] = context
        return json.dumps(data, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO") -> None:
    """Install the JSON handler on the root logger. Safe to call repeatedly."""

    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_context": {
                "()": "memberboard.logging_context.RequestContextFilter",
            }
        },
        "formatters": {
            "json": {
                "()": "memberboard.logging_utils.JSONFormatter",
                "datefmt": "%Y-%m-%dT%H:%M:%S%z",
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "filters": ["request_context"],
                "level": level,
            }
        },
        "root": {
            "handlers": ["default"],
            "level": level,
        },
    }
    dictConfig(config)


def setup_sentry(settings: Settings) -> bool:
    if not settings.sentry_dsn:
        return False
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=settings.sentry_traces_sample_rate,
        integrations=[LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)],
    )
    return True
