"""
Flask route blueprints for PrintIntakeWeb.

This module contains all route handlers organized by functionality:
- main: Catalog/price table and health check
- uploads: PDF and image uploads
- pricing: Live price preview and page range checking
- layouts: Photo layout switching and image selection
- queue: Print queue (add, remove, total)
- checkout: Hand-off to the checkout flow, start over

Each blueprint is registered with the Flask app in create_app().
"""

from .main import main_bp
from .uploads import uploads_bp
from .pricing import pricing_bp
from .layouts import layouts_bp
from .queue import queue_bp
from .checkout import checkout_bp

__all__ = [
    "main_bp",
    "uploads_bp",
    "pricing_bp",
    "layouts_bp",
    "queue_bp",
    "checkout_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(uploads_bp)
    app.register_blueprint(pricing_bp)
    app.register_blueprint(layouts_bp)
    app.register_blueprint(queue_bp)
    app.register_blueprint(checkout_bp)
