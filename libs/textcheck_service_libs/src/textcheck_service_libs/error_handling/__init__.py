"""
Structured error handling for the text check service.

Import framework handlers directly from
``textcheck_service_libs.error_handling.quart_handlers``.
"""

from .correlation import (
    CORRELATION_HEADER,
    CorrelationContext,
    correlation_context_from_value,
    extract_correlation_context_from_request,
)
from .error_codes import BAD_REQUEST_CODES, ErrorCode
from .error_detail import ErrorDetail
from .factories import (
    raise_configuration_error,
    raise_external_service_error,
    raise_missing_required_field,
    raise_processing_error,
    raise_retired_parameter,
    raise_service_unavailable,
    raise_timeout_error,
    raise_unknown_language,
    raise_validation_error,
)
from .text_check_error import TextCheckServiceError

__all__ = [
    "BAD_REQUEST_CODES",
    "CORRELATION_HEADER",
    "CorrelationContext",
    "ErrorCode",
    "ErrorDetail",
    "TextCheckServiceError",
    "correlation_context_from_value",
    "extract_correlation_context_from_request",
    "raise_configuration_error",
    "raise_external_service_error",
    "raise_missing_required_field",
    "raise_processing_error",
    "raise_retired_parameter",
    "raise_service_unavailable",
    "raise_timeout_error",
    "raise_unknown_language",
    "raise_validation_error",
]
