"""
Configuration for PrintIntakeWeb.

Pricing rates and composition geometry live here so a kiosk operator can
tune them from .env without touching the engine modules.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    UPLOAD_FOLDER = os.environ.get(
        "UPLOAD_FOLDER", str(BASE_DIR / "static" / "uploads")
    )
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16 MB uploads
    SESSION_COOKIE_NAME = "print_intake_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # ==========================================================================
    # Pricing (smallest currency unit, integers only)
    # ==========================================================================
    # PRICE_COLOR_PAGE: per printed page in color, duplex does not matter
    # PRICE_BW_PAGE: per printed page in black & white, single sided,
    #   also charged for the unpaired last page of a duplex job
    # PRICE_BW_DUPLEX_SHEET: per sheet carrying two black & white pages
    # ==========================================================================
    PRICE_COLOR_PAGE = int(os.environ.get("PRICE_COLOR_PAGE", "10"))
    PRICE_BW_PAGE = int(os.environ.get("PRICE_BW_PAGE", "2"))
    PRICE_BW_DUPLEX_SHEET = int(os.environ.get("PRICE_BW_DUPLEX_SHEET", "3"))

    MAX_COPIES = int(os.environ.get("MAX_COPIES", "99"))

    # Upper bound for a client-supplied page count on the range checker
    MAX_PAGE_RANGE_PAGES = int(os.environ.get("MAX_PAGE_RANGE_PAGES", "10000"))

    # Idle kiosk sessions are dropped, uploads included, after this long
    SESSION_IDLE_MINUTES = int(os.environ.get("SESSION_IDLE_MINUTES", "60"))

    # ==========================================================================
    # Photo layout composition (millimetres, A4 portrait)
    # ==========================================================================
    PAGE_WIDTH_MM = float(os.environ.get("PAGE_WIDTH_MM", "210"))
    PAGE_HEIGHT_MM = float(os.environ.get("PAGE_HEIGHT_MM", "297"))
    PAGE_MARGIN_MM = float(os.environ.get("PAGE_MARGIN_MM", "10"))
    CELL_PADDING_MM = float(os.environ.get("CELL_PADDING_MM", "2"))
    COMPOSE_JPEG_QUALITY = int(os.environ.get("COMPOSE_JPEG_QUALITY", "92"))


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    SECRET_KEY = "testing-secret-key"
