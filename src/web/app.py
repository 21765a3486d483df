# src/web/app.py
"""
Flask application factory with dependency injection.
Route handlers live in blueprints; this module only configures the app.
"""

import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from src.config.settings import get_settings
from src.models.entities import Snapshot
from src.services.container import ServiceCreationError, get_container, reset_container
from src.services.factory import initialize_services
from src.web.routes.dashboard import dashboard_bp
from src.web.routes.health import health_bp

logger = logging.getLogger(__name__)


def create_app(environment: Optional[str] = None, snapshot: Optional[Snapshot] = None) -> Flask:
    """
    Create the Flask app.

    Args:
        environment: dev | prod | test (default from APP_ENV)
        snapshot: Initial state; default loads SNAPSHOT_PATH or starts empty
    """
    settings = get_settings(environment)

    # Fresh container per app so test apps do not share state
    reset_container()
    try:
        initialize_services(settings, snapshot, get_container())
        get_container().get("snapshot_repository")
        logger.info("Service container initialized successfully")
    except ServiceCreationError as e:
        logger.error(f"Failed to initialize services: {e}")
        raise

    app = Flask(__name__)
    app.config.update({
        'SECRET_KEY': settings.web.secret_key,
        'DEBUG': settings.web.debug,
        'MAX_CONTENT_LENGTH': settings.web.max_content_length,
        'ENVIRONMENT': settings.environment,
        'TESTING': settings.environment == 'test',
    })

    app.register_blueprint(health_bp)
    app.register_blueprint(dashboard_bp)

    logger.info(f"Flask app created for environment: {settings.environment}")
    return app


if __name__ == '__main__':
    load_dotenv()
    settings = get_settings()
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()

    logger.info(f"Starting server on {settings.web.host}:{settings.web.port}")
    app.run(
        debug=settings.web.debug,
        host=settings.web.host,
        port=settings.web.port,
    )
