"""
PrintIntakeWeb - Flask Application Entry Point.

This is a slim app factory that:
1. Loads .env and configures logging
2. Builds the engine (pricing, page ranges, layout composer)
3. Creates the server-side session store
4. Registers route blueprints
5. Sets up JSON error handlers

ARCHITECTURE:
    Flask request threads
    ├── SessionStore lookup (lock-guarded) per request
    ├── Price previews computed on the request thread
    └── Photo layouts composed on the request thread, one image at a time

Kiosk state never lives in the cookie: the Flask session only carries
the id of the KioskSession holding uploads, layout and queue.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from flask import Flask, g, session
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from logging_config import bind_session, get_logger, release_session, setup_logging
from core.exceptions import PrintIntakeError
from modules.composer import DocumentComposer, PageGeometry, ReportLabRenderer
from modules.document_source import DocumentSource
from modules.image_store import ImageStore
from modules.pricing import PricingEngine
from routes import register_blueprints
from routes.helpers import SESSION_KEY, error_response
from services.intake_service import IntakeService
from services.session_store import SessionStore


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def _get_base_path() -> Path:
    """
    Get the base path for the application.

    In PyInstaller bundle: Returns the directory containing the executable
    In development: Returns the directory containing app.py
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent


def _build_intake_service(
    app: Flask, image_store: ImageStore, document_source: DocumentSource
) -> IntakeService:
    """Engine wired from the app's config values."""
    config = app.config
    pricing = PricingEngine(
        color_page=config["PRICE_COLOR_PAGE"],
        bw_page=config["PRICE_BW_PAGE"],
        bw_duplex_sheet=config["PRICE_BW_DUPLEX_SHEET"],
    )
    geometry = PageGeometry(
        width=config["PAGE_WIDTH_MM"],
        height=config["PAGE_HEIGHT_MM"],
        margin=config["PAGE_MARGIN_MM"],
        padding=config["CELL_PADDING_MM"],
    )
    composer = DocumentComposer(
        image_source=image_store,
        renderer=ReportLabRenderer(jpeg_quality=config["COMPOSE_JPEG_QUALITY"]),
        geometry=geometry,
    )
    return IntakeService(
        composer=composer,
        image_store=image_store,
        pricing=pricing,
        document_source=document_source,
        max_copies=config["MAX_COPIES"],
    )


def create_app(
    config_object: str | type = "config.Config",
    config_overrides: Optional[Dict[str, Any]] = None,
) -> Flask:
    """
    Application factory - creates and configures Flask app.

    Args:
        config_object: Import path or class passed to app.config.from_object
        config_overrides: Values applied on top (tests point UPLOAD_FOLDER
            at a temporary directory this way)

    Returns:
        Configured Flask application
    """
    # Load .env from base path (next to executable in production)
    # Use override=True so .env file always takes precedence over shell environment
    base_path = _get_base_path()
    env_file = base_path / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    app = Flask(__name__)
    app.config.from_object(config_object)
    if config_overrides:
        app.config.update(config_overrides)

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting PrintIntakeWeb in {app.config.get('ENVIRONMENT')} mode")

    upload_folder = Path(app.config["UPLOAD_FOLDER"])
    upload_folder.mkdir(parents=True, exist_ok=True)

    # =========================================================================
    # SERVICES INITIALIZATION
    # =========================================================================

    image_store = ImageStore(upload_folder)
    app.config["IMAGE_STORE"] = image_store
    document_source = DocumentSource()
    app.config["DOCUMENT_SOURCE"] = document_source
    app.config["SESSION_STORE"] = SessionStore(
        idle_seconds=app.config["SESSION_IDLE_MINUTES"] * 60
    )
    app.config["INTAKE_SERVICE"] = _build_intake_service(app, image_store, document_source)
    logger.info("Intake service initialized")

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # REQUEST CONTEXT
    # =========================================================================

    @app.before_request
    def tag_request_logs():
        g.log_token = bind_session(session.get(SESSION_KEY, ""))

    @app.teardown_request
    def untag_request_logs(exc):
        token = g.pop("log_token", None)
        if token is not None:
            release_session(token)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(PrintIntakeError)
    def handle_intake_error(e):
        logger.warning(f"Unhandled application error: {e}")
        return error_response(e)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_file_too_large(e):
        max_mb = app.config.get("MAX_CONTENT_LENGTH", 16 * 1024 * 1024) / (1024 * 1024)
        return {"error": f"File too large. Maximum upload size is {max_mb:.0f} MB."}, 413

    @app.errorhandler(404)
    def handle_not_found(e):
        return {"error": "Not found."}, 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return {"error": "Method not allowed."}, 405

    @app.errorhandler(500)
    def handle_server_error(e):
        original = getattr(e, "original_exception", None) or e
        if not isinstance(original, HTTPException):
            logger.error(f"500 error: {original}", exc_info=original)
        return {"error": "An unexpected error occurred. Please try again."}, 500

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)
