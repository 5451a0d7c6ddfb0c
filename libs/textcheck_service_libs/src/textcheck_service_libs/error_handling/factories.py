"""
Factory functions for raising structured service errors.

Each factory builds an ErrorDetail with the matching ErrorCode and raises a
TextCheckServiceError. Extra keyword arguments land in ``details``.
"""

from __future__ import annotations

from typing import Any, NoReturn
from uuid import UUID

from .error_codes import ErrorCode
from .error_detail import ErrorDetail
from .text_check_error import TextCheckServiceError


def _raise(
    error_code: ErrorCode,
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    details: dict[str, Any],
) -> NoReturn:
    raise TextCheckServiceError(
        ErrorDetail(
            error_code=error_code,
            message=message,
            correlation_id=correlation_id,
            service=service,
            operation=operation,
            details=details,
        )
    )


def raise_validation_error(
    service: str,
    operation: str,
    field: str,
    message: str,
    correlation_id: UUID,
    value: Any = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise a VALIDATION_ERROR for a client-supplied parameter."""
    details: dict[str, Any] = {"field": field}
    if value is not None:
        details["value"] = value
    details.update(additional_context)
    _raise(ErrorCode.VALIDATION_ERROR, service, operation, message, correlation_id, details)


def raise_missing_required_field(
    service: str,
    operation: str,
    field: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise a MISSING_REQUIRED_FIELD error."""
    details: dict[str, Any] = {"field": field, **additional_context}
    _raise(
        ErrorCode.MISSING_REQUIRED_FIELD, service, operation, message, correlation_id, details
    )


def raise_retired_parameter(
    service: str,
    operation: str,
    parameter: str,
    replacement: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise a RETIRED_PARAMETER error naming the parameter that replaces it."""
    details: dict[str, Any] = {
        "parameter": parameter,
        "replacement": replacement,
        **additional_context,
    }
    _raise(ErrorCode.RETIRED_PARAMETER, service, operation, message, correlation_id, details)


def raise_unknown_language(
    service: str,
    operation: str,
    language_code: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise an UNKNOWN_LANGUAGE error naming the unsupported code."""
    details: dict[str, Any] = {"language_code": language_code, **additional_context}
    _raise(ErrorCode.UNKNOWN_LANGUAGE, service, operation, message, correlation_id, details)


def raise_configuration_error(
    service: str,
    operation: str,
    config_key: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise a CONFIGURATION_ERROR; fatal to the component being constructed."""
    details: dict[str, Any] = {"config_key": config_key, **additional_context}
    _raise(ErrorCode.CONFIGURATION_ERROR, service, operation, message, correlation_id, details)


def raise_external_service_error(
    service: str,
    operation: str,
    external_service: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise an EXTERNAL_SERVICE_ERROR for a failing downstream dependency."""
    details: dict[str, Any] = {"external_service": external_service, **additional_context}
    _raise(
        ErrorCode.EXTERNAL_SERVICE_ERROR, service, operation, message, correlation_id, details
    )


def raise_service_unavailable(
    service: str,
    operation: str,
    unavailable_service: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise a SERVICE_UNAVAILABLE error."""
    details: dict[str, Any] = {"unavailable_service": unavailable_service, **additional_context}
    _raise(ErrorCode.SERVICE_UNAVAILABLE, service, operation, message, correlation_id, details)


def raise_timeout_error(
    service: str,
    operation: str,
    timeout_seconds: float,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise a TIMEOUT error."""
    details: dict[str, Any] = {"timeout_seconds": timeout_seconds, **additional_context}
    _raise(ErrorCode.TIMEOUT, service, operation, message, correlation_id, details)


def raise_processing_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise a PROCESSING_ERROR for internal failures."""
    _raise(
        ErrorCode.PROCESSING_ERROR, service, operation, message, correlation_id, additional_context
    )
