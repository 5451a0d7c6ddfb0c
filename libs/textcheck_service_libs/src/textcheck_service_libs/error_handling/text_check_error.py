"""Core exception carrying a structured ErrorDetail."""

from __future__ import annotations

from .error_codes import BAD_REQUEST_CODES, ErrorCode
from .error_detail import ErrorDetail


class TextCheckServiceError(Exception):
    """
    Single exception type for all service failures.

    The failure class is carried by ``error_detail.error_code`` rather than by
    subclassing; ``is_bad_request`` and ``is_configuration_error`` expose the
    two families callers branch on.
    """

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail

    def __str__(self) -> str:
        return f"[{self.error_detail.error_code.value}] {self.error_detail.message}"

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    @property
    def is_bad_request(self) -> bool:
        return self.error_detail.error_code in BAD_REQUEST_CODES

    @property
    def is_configuration_error(self) -> bool:
        return self.error_detail.error_code is ErrorCode.CONFIGURATION_ERROR
