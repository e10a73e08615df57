"""Log formatting and the per-request log context.

Request middleware binds who is asking and which post a view is working on
(``post_id`` from ``<uuid:pk>`` routes, ``post_slug`` from ``<slug:slug>``
routes). ``RequestContextFilter`` copies that context onto each record as a
single ``log_context`` mapping, which the formatters render apart from the
``extra`` fields a call site passes.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
from collections.abc import Iterator, Mapping
from datetime import UTC, datetime
from typing import Any

# Attributes every LogRecord has; anything else came in through ``extra``.
_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "log_context"}

_log_context: contextvars.ContextVar[Mapping[str, Any]] = contextvars.ContextVar(
    "the_shire_log_context", default={}
)


def bind_log_context(**fields: Any) -> contextvars.Token:
    """Add ``fields`` to the current log context, keeping fields already bound.

    Empty values (``None`` or ``""``) are skipped. Pass the returned token to
    :func:`reset_log_context` to restore the context as it was.
    """
    merged = dict(_log_context.get())
    merged.update({key: value for key, value in fields.items() if value not in (None, "")})
    return _log_context.set(merged)


def reset_log_context(token: contextvars.Token) -> None:
    # A token from another context (e.g. a thread) cannot be reset; ignore it.
    with contextlib.suppress(ValueError):
        _log_context.reset(token)


def current_log_context() -> dict[str, Any]:
    return dict(_log_context.get())


@contextlib.contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Bind ``fields`` for the duration of a ``with`` block."""
    token = bind_log_context(**fields)
    try:
        yield
    finally:
        reset_log_context(token)


class RequestContextFilter(logging.Filter):
    """Stamp the bound request/post context onto each record as ``log_context``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.log_context = current_log_context()
        return True


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
    }


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class JsonFormatter(logging.Formatter):
    """One JSON object per line.

    Shape::

        {"timestamp": ..., "level": ..., "logger": ..., "message": ...,
         "context": {"request_id": ..., "post_id": ...},
         "post_id": ..., "slug": ...}

    ``context`` holds the request-scoped fields; ``extra`` fields from the
    call site are top-level keys. Values that cannot be serialized are
    rendered with ``str()``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "log_context", None)
        if context:
            entry["context"] = {key: _jsonable(value) for key, value in context.items()}
        for key, value in _extra_fields(record).items():
            entry.setdefault(key, _jsonable(value))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


class DevFormatter(logging.Formatter):
    """Readable single-line output for runserver.

    ``2024-03-01 10:00:00 INFO     the_shire.apps.blog.repository [ab12cd34 post=...] Blog post updated | fields=['title']``
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        line = f"{timestamp} {record.levelname:8} {record.name}"

        context = getattr(record, "log_context", None) or {}
        tags = []
        if "request_id" in context:
            tags.append(str(context["request_id"])[:8])
        if "post_id" in context:
            tags.append(f"post={context['post_id']}")
        if "post_slug" in context:
            tags.append(f"slug={context['post_slug']}")
        if tags:
            line = f"{line} [{' '.join(tags)}]"
        line = f"{line} {record.getMessage()}"

        extras = _extra_fields(record)
        if extras:
            line = f"{line} | " + " ".join(f"{key}={value!r}" for key, value in extras.items())
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line
