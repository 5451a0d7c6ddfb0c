"""Structured error detail model shared by all error factories."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .error_codes import ErrorCode


class ErrorDetail(BaseModel):
    """Immutable description of a failure, suitable for logging and API responses."""

    model_config = ConfigDict(frozen=True)

    error_code: ErrorCode
    message: str
    correlation_id: UUID
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    service: str
    operation: str
    details: dict[str, Any] = Field(default_factory=dict)
