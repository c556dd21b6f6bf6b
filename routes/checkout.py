"""
Checkout routes.

The payment flow is an external collaborator: it receives the queue
total and the job list and nothing else.
"""

from flask import Blueprint, current_app, session

from core.exceptions import PrintIntakeError
from logging_config import get_logger
from routes.helpers import SESSION_KEY, current_kiosk, error_response


# Module logger
logger = get_logger(__name__)

checkout_bp = Blueprint("checkout", __name__)


@checkout_bp.route("/api/checkout", methods=["POST"])
def checkout():
    """Hand the queue total and job list to the checkout collaborator."""
    kiosk = current_kiosk(create=False)
    try:
        summary = current_app.config["INTAKE_SERVICE"].checkout_summary(kiosk)
    except PrintIntakeError as e:
        return error_response(e)
    return summary


@checkout_bp.route("/api/start-over", methods=["POST"])
def start_over():
    """Forget this session's uploads, layout and queue."""
    kiosk_id = session.pop(SESSION_KEY, None)
    if kiosk_id:
        current_app.config["SESSION_STORE"].discard(kiosk_id)
        logger.info("Session cleared for new order")
    return {"cleared": bool(kiosk_id)}
