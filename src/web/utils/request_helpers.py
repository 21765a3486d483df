# src/web/utils/request_helpers.py
"""
Request and response helper utilities for Flask routes.
"""
import logging
from datetime import date
from functools import wraps
from typing import Any, Dict, List, Optional
import json

from flask import request, Response

from src.models.errors import EntityNotFoundError, InvalidCsvHeaderError, ValidationFailedError
from src.utils.formatters import serialize_for_json

logger = logging.getLogger(__name__)


class RequestValidationError(Exception):
    """Raised when request parameters are invalid."""
    pass


class ServiceUnavailableError(Exception):
    """Raised when a service cannot be resolved from the container."""
    pass


def get_date_parameter(name: str = 'date') -> date:
    """Get an ISO date query parameter, defaulting to today."""
    raw = request.args.get(name, '').strip()
    if not raw:
        return date.today()
    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise RequestValidationError(f"Invalid {name}: {raw!r} (expected YYYY-MM-DD)") from e


def get_day_parameter(name: str = 'day') -> Optional[int]:
    """Get the optional visit-plan day (1-6) query parameter."""
    raw = request.args.get(name, '').strip()
    if not raw:
        return None
    if not raw.isdigit() or not 1 <= int(raw) <= 6:
        raise RequestValidationError(f"Invalid {name}: {raw!r} (must be 1-6)")
    return int(raw)


def validate_json_request(required_fields: Optional[List[str]] = None) -> Dict[str, Any]:
    """Return the JSON body, checking that required fields are present."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise RequestValidationError("Request body must be a JSON object")
    missing = [f for f in (required_fields or []) if f not in data]
    if missing:
        raise RequestValidationError(f"Missing required field(s): {', '.join(missing)}")
    return data


def create_json_response(data: Any, status_code: int = 200) -> Response:
    """Create standardized JSON response."""
    try:
        return Response(serialize_for_json(data), status=status_code, mimetype='application/json')
    except TypeError as e:
        logger.error(f"Error creating JSON response: {e}")
        error_data = json.dumps({'success': False, 'error': 'Serialization failed', 'status': 500})
        return Response(error_data, status=500, mimetype='application/json')


def create_success_response(data: Any, message: Optional[str] = None, status_code: int = 200) -> Response:
    """Create standardized success response."""
    response_data = {'success': True, 'data': data}
    if message:
        response_data['message'] = message
    return create_json_response(response_data, status_code)


def create_error_response(error_message: str, status_code: int = 400,
                          error_code: Optional[str] = None,
                          details: Optional[Dict[str, Any]] = None) -> Response:
    """Create standardized error response."""
    response_data = {'success': False, 'error': error_message, 'status': status_code}
    if error_code:
        response_data['error_code'] = error_code
    if details:
        response_data['details'] = details
    return create_json_response(response_data, status_code)


def safe_get_service(container, service_name: str):
    """Resolve a service or fail with a 503-mapped error."""
    try:
        return container.get(service_name)
    except Exception as e:
        logger.error(f"Failed to get service '{service_name}': {e}")
        raise ServiceUnavailableError(f"Service '{service_name}' is not available") from e


def log_requests(func):
    """Decorator to log request information."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        logger.debug(f"Request: {request.method} {request.path}")
        return func(*args, **kwargs)
    return wrapper


def handle_request_errors(func):
    """Decorator mapping domain errors onto HTTP error responses."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (RequestValidationError, InvalidCsvHeaderError) as e:
            return create_error_response(str(e), 400, "VALIDATION_ERROR")
        except ValidationFailedError as e:
            return create_error_response(str(e), 400, "VALIDATION_ERROR", e.result.to_dict())
        except EntityNotFoundError as e:
            return create_error_response(str(e), 404, "NOT_FOUND")
        except ServiceUnavailableError as e:
            return create_error_response(str(e), 503, "SERVICE_UNAVAILABLE")
        except Exception as e:
            logger.exception(f"Unexpected error in {func.__name__}: {e}")
            return create_error_response("An unexpected error occurred", 500, "INTERNAL_ERROR")
    return wrapper
