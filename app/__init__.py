"""Retirement Runway Planner Flask Application Factory."""

import logging
from typing import Optional

from flask import Flask

from app.config import Settings, get_global_settings


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        settings: Settings to use instead of the global ones

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    settings = settings or get_global_settings()
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["DATABASE_URL"] = settings.db_url
    app.config["STORAGE_TYPE"] = settings.storage_type
    app.config["SNAPSHOT_KEY"] = settings.snapshot_key
    app.config["ENV"] = settings.flask_env
    app.config["DEBUG"] = settings.app_env == "development"

    app.logger.setLevel(settings.log_level)
    logging.getLogger("app").setLevel(settings.log_level)

    # Snapshot persistence
    from app.services.snapshot_store import SnapshotStore
    from app.storage.factory import create_storage_service

    app.extensions["snapshot_store"] = SnapshotStore(
        create_storage_service(settings), key=settings.snapshot_key
    )

    # Register blueprints
    from app.blueprints.health import health_bp
    from app.blueprints.snapshot import snapshot_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(snapshot_bp)

    return app
