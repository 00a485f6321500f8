"""Structured JSON events for the autofix extension.

Events are flat dicts named like `autofix.hook.fallback`; `Span` and
`with_span` add `.start` / `.end` / `.error` events with a duration around a
repair attempt. The repair credential is masked before anything is written.
"""

from __future__ import annotations

import datetime
import functools
import inspect
import json
import sys
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Protocol, TextIO

from autofix.config import get_config_value


class Logger(Protocol):
    def info(self, event: str, **fields: Any) -> None: ...
    def warn(self, event: str, **fields: Any) -> None: ...
    def error(self, event: str, **fields: Any) -> None: ...

class NullLogger:
    def info(self, event: str, **fields): pass
    def warn(self, event: str, **fields): pass
    def error(self, event: str, **fields): pass


def redact(value: Optional[str], secret: str | None = None) -> Optional[str]:
    """Mask the repair credential wherever it appears in `value`."""
    if not isinstance(value, str) or not value:
        return value
    secret = secret if secret is not None else get_config_value("SYNTHETIC_API_KEY")
    if not secret:
        return value
    return value.replace(secret, "***")


class JsonStdoutLogger:
    """Writes one JSON object per event; errors go to stderr unless a stream is given."""

    def __init__(self, service: str = "autofix", env: str = "dev", stream: TextIO | None = None):
        self.service = service
        self.env = env
        self._stream = stream

    def _emit(self, level: str, event: str, **fields: Any) -> None:
        ts = (
            datetime.datetime.now(datetime.timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )
        rec = {"ts": ts, "level": level, "event": event, "service": self.service, "env": self.env, **fields}
        stream = self._stream or (sys.stderr if level == "error" else sys.stdout)
        print(redact(json.dumps(rec, default=str)), file=stream)

    def info(self, event, **fields): self._emit("info", event, **fields)
    def warn(self, event, **fields): self._emit("warn", event, **fields)
    def error(self, event, **fields): self._emit("error", event, **fields)


@dataclass(slots=True)
class Span:
    logger: Logger
    event: str
    fields: Mapping[str, Any]
    start_ns: int = 0

    def __enter__(self):
        self.start_ns = time.time_ns()
        self.logger.info(self.event + ".start", **self.fields)
        return self

    def __exit__(self, exc_type, exc, tb):
        dur_ms = (time.time_ns() - self.start_ns) / 1e6
        if exc:
            self.logger.error(
                self.event + ".error",
                duration_ms=dur_ms,
                error_type=type(exc).__name__,
                error=str(exc),
                **self.fields,
            )
        else:
            self.logger.info(self.event + ".end", duration_ms=dur_ms, **self.fields)


def with_span(
    event: str,
    *,
    logger_attr: str = "_obs",
    fields: Mapping[str, Any] | None = None,
    fields_fn: Callable[..., Mapping[str, Any]] | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Wrap a method (sync or async) in a `Span` using `self.<logger_attr>`."""

    def _open(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Span:
        obs = getattr(args[0], logger_attr, None) if args else None
        span_fields = dict(fields or {})
        if fields_fn:
            span_fields.update(fields_fn(*args, **kwargs))
        return Span(obs or NullLogger(), event, span_fields)

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(fn):

            @functools.wraps(fn)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with _open(args, kwargs):
                    return await fn(*args, **kwargs)

            return async_wrapper

        @functools.wraps(fn)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _open(args, kwargs):
                return fn(*args, **kwargs)

        return sync_wrapper

    return decorator
