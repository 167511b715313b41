"""Request context utilities for per-request state management."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .utils import generate_correlation_id


@dataclass
class RequestContext:
    """Structured context data attached to each inbound request."""

    correlation_id: str = field(default_factory=generate_correlation_id)

    # Request metadata
    path: Optional[str] = None
    method: Optional[str] = None

    # Where the rendered report was written, if anywhere
    dump_path: Optional[str] = None

    def to_dict(self, include_none: bool = False) -> Dict[str, Any]:
        """Serialize context for structured logging."""
        result: Dict[str, Any] = {}

        for key, value in {
            'correlation_id': self.correlation_id,
            'path': self.path,
            'method': self.method,
            'dump_path': self.dump_path,
        }.items():
            if include_none or value is not None:
                result[key] = value

        return result


UNSET_CORRELATION_ID = '-'

request_context_var: ContextVar[Optional[RequestContext]] = ContextVar('request_context', default=None)


def get_request_context() -> RequestContext:
    """Return the active request context.

    Outside a request a fresh, unregistered context is returned, so changes to
    it never leak into later requests.
    """

    context = request_context_var.get()
    return context if context is not None else RequestContext(correlation_id=UNSET_CORRELATION_ID)


def set_request_context(context: RequestContext) -> None:
    """Replace the current request context."""

    request_context_var.set(context)


def get_correlation_id() -> str:
    """Expose the correlation ID for log formatting helpers."""

    return get_request_context().correlation_id


__all__ = [
    'RequestContext',
    'UNSET_CORRELATION_ID',
    'get_request_context',
    'set_request_context',
    'get_correlation_id',
    'request_context_var',
]
