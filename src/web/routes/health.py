# src/web/routes/health.py
"""
Health check endpoint.
"""

import logging
from datetime import datetime, timezone

from flask import Blueprint

from src.services.container import get_container
from src.web.utils.request_helpers import (
    create_success_response,
    create_error_response,
    log_requests,
)

logger = logging.getLogger(__name__)

# Create health blueprint
health_bp = Blueprint("health", __name__)


@health_bp.route("/health")
@log_requests
def health_check():
    """Report registered services and the current snapshot version."""
    container = get_container()
    try:
        repository = container.get("snapshot_repository")
        return create_success_response({
            "status": "healthy",
            "environment": container.get_config("ENVIRONMENT"),
            "services": container.list_services(),
            "snapshot_version": repository.version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return create_error_response(f"Health check failed: {e}", 503, "UNHEALTHY")
