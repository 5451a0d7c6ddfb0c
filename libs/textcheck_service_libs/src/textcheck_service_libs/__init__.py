"""
Text Check Service Libraries Package.

Shared infrastructure for the text check service: structured logging and
structured error handling with Quart integration.
"""

from .logging_utils import configure_service_logging, create_service_logger

__all__ = [
    "configure_service_logging",
    "create_service_logger",
]

# Framework-specific error handlers should be imported directly from:
# - textcheck_service_libs.error_handling.quart_handlers
