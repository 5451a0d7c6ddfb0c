"""
Centralized error code definitions for the text check service.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"  # For APIs
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"

    # Text check request errors
    UNKNOWN_LANGUAGE = "UNKNOWN_LANGUAGE"
    RETIRED_PARAMETER = "RETIRED_PARAMETER"

    # Generic external service errors
    TIMEOUT = "TIMEOUT"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    PROCESSING_ERROR = "PROCESSING_ERROR"  # Internal processing failures


# Client-side request errors; surfaced as 400 Bad Request
BAD_REQUEST_CODES: frozenset[ErrorCode] = frozenset(
    {
        ErrorCode.VALIDATION_ERROR,
        ErrorCode.MISSING_REQUIRED_FIELD,
        ErrorCode.UNKNOWN_LANGUAGE,
        ErrorCode.RETIRED_PARAMETER,
    }
)
