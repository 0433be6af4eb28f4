from __future__ import annotations

import logging
from contextvars import ContextVar, Token
from typing import Any

import sentry_sdk

_CONTEXT_KEYS = ("request_id", "user_id", "resource_id")

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


class RequestContextFilter(logging.Filter):
    """Stamp records with the request id, Whop user id and the company/experience being viewed."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = _log_context.get({})
        for key in _CONTEXT_KEYS:
            setattr(record, key, context.get(key))
        return True


def push_request_context(request_id: str) -> Token:
    return _log_context.set(dict.fromkeys(_CONTEXT_KEYS) | {"request_id": request_id})


def pop_request_context(token: Token) -> None:
    _log_context.reset(token)


def _update_context(key: str, value: str | None) -> None:
    context = _log_context.get({})
    if context:
        context[key] = value
    else:  # middleware bypassed (tests)
        _log_context.set(dict.fromkeys(_CONTEXT_KEYS) | {key: value})


def set_user_context(user_id: str | None) -> None:
    _update_context("user_id", user_id)
    sentry_sdk.set_user({"id": user_id} if user_id else None)


def set_resource_context(resource_id: str | None) -> None:
    """Record which company or experience page the request renders."""
    _update_context("resource_id", resource_id)
    sentry_sdk.set_tag("whop_resource_id", resource_id)


__all__ = [
    "RequestContextFilter",
    "push_request_context",
    "pop_request_context",
    "set_resource_context",
    "set_user_context",
]
