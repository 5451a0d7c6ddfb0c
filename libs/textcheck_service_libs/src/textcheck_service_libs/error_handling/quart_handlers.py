"""Quart integration: map TextCheckServiceError to HTTP responses."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quart import Response, jsonify

from ..logging_utils import create_service_logger
from .error_codes import BAD_REQUEST_CODES, ErrorCode
from .error_detail import ErrorDetail
from .text_check_error import TextCheckServiceError

if TYPE_CHECKING:
    from quart import Quart

logger = create_service_logger("textcheck_service_libs.error_handling.quart")

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.CONFIGURATION_ERROR: 500,
    ErrorCode.PROCESSING_ERROR: 500,
    ErrorCode.UNKNOWN_ERROR: 500,
    ErrorCode.EXTERNAL_SERVICE_ERROR: 502,
    ErrorCode.SERVICE_UNAVAILABLE: 503,
    ErrorCode.TIMEOUT: 504,
}


def status_code_for(error_code: ErrorCode) -> int:
    if error_code in BAD_REQUEST_CODES:
        return 400
    return _STATUS_BY_CODE.get(error_code, 500)


def create_error_response(error_detail: ErrorDetail) -> tuple[Response, int]:
    """Build the JSON error body and status code for an ErrorDetail."""
    body = {
        "error": {
            "code": error_detail.error_code.value,
            "message": error_detail.message,
            "correlation_id": str(error_detail.correlation_id),
            "timestamp": error_detail.timestamp.isoformat(),
            "service": error_detail.service,
            "operation": error_detail.operation,
            "details": error_detail.details,
        }
    }
    return jsonify(body), status_code_for(error_detail.error_code)


def register_error_handlers(app: Quart) -> None:
    """Register structured error handlers on the Quart app."""

    @app.errorhandler(TextCheckServiceError)
    async def handle_text_check_error(error: TextCheckServiceError) -> tuple[Response, int]:
        detail = error.error_detail
        if error.is_bad_request:
            logger.warning(
                f"Request rejected: {detail.message}",
                correlation_id=str(detail.correlation_id),
                error_code=detail.error_code.value,
            )
        else:
            logger.error(
                f"Request failed: {detail.message}",
                correlation_id=str(detail.correlation_id),
                error_code=detail.error_code.value,
            )
        return create_error_response(detail)
