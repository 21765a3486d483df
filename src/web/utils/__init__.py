# src/web/utils/__init__.py
"""
Web utilities for Flask routes and request handling.
"""

from .request_helpers import (
    RequestValidationError,
    get_date_parameter,
    get_day_parameter,
    validate_json_request,
    create_json_response,
    create_success_response,
    create_error_response,
    safe_get_service,
    log_requests,
    handle_request_errors,
)

__all__ = [
    "RequestValidationError",
    "get_date_parameter",
    "get_day_parameter",
    "validate_json_request",
    "create_json_response",
    "create_success_response",
    "create_error_response",
    "safe_get_service",
    "log_requests",
    "handle_request_errors",
]
