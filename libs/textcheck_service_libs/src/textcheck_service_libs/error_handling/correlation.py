"""Correlation context extracted from incoming requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID, uuid4, uuid5

CORRELATION_HEADER = "X-Correlation-ID"

# Namespace for deriving stable UUIDs from non-UUID correlation strings
_CORRELATION_NAMESPACE = UUID("6f1c3a52-5a7e-4c55-9d1b-2f3e6c8a9b10")


@dataclass(frozen=True)
class CorrelationContext:
    """
    Correlation identifiers for one request.

    ``original`` is the value the client sent (or a generated one);
    ``uuid`` is always a UUID, derived deterministically when the client
    value is not a UUID.
    """

    original: str
    uuid: UUID
    source: str = "generated"


def correlation_context_from_value(value: str | None, source: str = "header") -> CorrelationContext:
    if not value:
        generated = uuid4()
        return CorrelationContext(original=str(generated), uuid=generated)
    try:
        return CorrelationContext(original=value, uuid=UUID(value), source=source)
    except ValueError:
        return CorrelationContext(
            original=value, uuid=uuid5(_CORRELATION_NAMESPACE, value), source=source
        )


def extract_correlation_context_from_request(request: Any) -> CorrelationContext:
    """Read the correlation id from the header, falling back to the query string."""
    header_value = request.headers.get(CORRELATION_HEADER)
    if header_value:
        return correlation_context_from_value(header_value, source="header")
    query_value = request.args.get("correlation_id")
    if query_value:
        return correlation_context_from_value(query_value, source="query")
    return correlation_context_from_value(None)
