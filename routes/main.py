"""
Main routes (index, health).

Landing data for the kiosk front end: the layout catalog and price table.
"""

from flask import Blueprint, current_app

from modules.layouts import list_layouts


main_bp = Blueprint("main", __name__)


@main_bp.route("/", methods=["GET"])
def index():
    """Catalog of photo layouts and the current price table."""
    pricing = current_app.config["INTAKE_SERVICE"].pricing
    return {
        "layouts": [layout.to_dict() for layout in list_layouts()],
        "prices": {
            "colorPage": pricing.color_page,
            "bwPage": pricing.bw_page,
            "bwDuplexSheet": pricing.bw_duplex_sheet,
        },
        "maxCopies": current_app.config["MAX_COPIES"],
    }


@main_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint with service status."""
    health_status = {
        "status": "ok",
        "environment": current_app.config.get("ENVIRONMENT", "unknown"),
        "checks": {},
    }

    for key, name in (("SESSION_STORE", "sessions"), ("INTAKE_SERVICE", "intake")):
        if current_app.config.get(key) is not None:
            health_status["checks"][name] = "ok"
        else:
            health_status["checks"][name] = "not_available"
            health_status["status"] = "degraded"

    store = current_app.config.get("SESSION_STORE")
    if store is not None:
        health_status["activeSessions"] = len(store)

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code
