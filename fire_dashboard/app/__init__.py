"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask
from flask_cors import CORS
from loguru import logger

from fire_dashboard.app.api.routes import api_bp
from fire_dashboard.config import AppConfig, configure_logging, load_config
from fire_dashboard.core.persistence import (
    InputSnapshotStore,
    KeyValueStore,
    MemoryStore,
    SqliteStore,
)


def _build_snapshots(config: AppConfig) -> InputSnapshotStore:
    store: KeyValueStore = SqliteStore(config.storage_path) if config.storage_path else MemoryStore()
    snapshots = InputSnapshotStore(store, config.dashboard_defaults, config.storage_key)
    snapshots.load()
    logger.info(f"Input snapshot '{config.storage_key}' loaded from {config.storage_path or 'memory'}")
    return snapshots


def create_app(config: Optional[AppConfig] = None) -> Flask:
    """Build the Flask app instance."""
    config = config or load_config()
    configure_logging(config.log_level)

    app = Flask(__name__)
    app.config["FIRE_DASHBOARD"] = config
    app.config["INPUT_SNAPSHOTS"] = _build_snapshots(config)

    CORS(
        app,
        resources={r"/api/*": {"origins": config.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info(f"API ready; CORS origins: {', '.join(config.cors_origins)}")
    return app
