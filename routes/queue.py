"""
Print queue routes.

Queueing freezes the price: an item's cost never changes after it has
been added. Changing settings means removing the item and adding it again.
"""

from flask import Blueprint, current_app

from core.exceptions import PrintIntakeError
from logging_config import get_logger
from models.settings import PrintSettings
from routes.helpers import current_kiosk, error_response, json_payload


# Module logger
logger = get_logger(__name__)

queue_bp = Blueprint("queue", __name__)


@queue_bp.route("/api/queue", methods=["GET"])
def view_queue():
    """Queue items with their snapshotted costs and the total."""
    kiosk = current_kiosk(create=False)
    return kiosk.queue.to_dict()


@queue_bp.route("/api/queue/documents", methods=["POST"])
def queue_document():
    """
    Queue an uploaded document with the posted settings.

    Body: {documentId, copies, colorMode, duplex, pageRange}
    """
    data = json_payload()
    kiosk = current_kiosk(create=False)

    document = kiosk.documents.get(str(data.get("documentId", "")))
    if document is None:
        return {"error": "Unknown document. Please upload it again."}, 404

    intake = current_app.config["INTAKE_SERVICE"]
    try:
        settings = PrintSettings.from_dict(data, max_copies=current_app.config["MAX_COPIES"])
        item = intake.queue_document(kiosk, document, settings)
    except PrintIntakeError as e:
        logger.info(f"Document not queued: {e}")
        return error_response(e)

    return {"item": item.to_dict(), "total": kiosk.queue.total()}, 201


@queue_bp.route("/api/queue/layout", methods=["POST"])
def queue_layout():
    """
    Compose the current photo layout and queue it.

    Body: {copies, colorMode}
    On any composition failure nothing is queued.
    """
    data = json_payload()
    kiosk = current_kiosk(create=False)
    intake = current_app.config["INTAKE_SERVICE"]

    try:
        item = intake.queue_image_layout(
            kiosk,
            copies=data.get("copies", 1),
            color_mode=data.get("colorMode", "color"),
        )
    except PrintIntakeError as e:
        logger.error(f"Photo layout not queued: {e}")
        return error_response(e)

    return {"item": item.to_dict(), "total": kiosk.queue.total()}, 201


@queue_bp.route("/api/queue/<int:item_id>", methods=["DELETE"])
def remove_item(item_id: int):
    """Remove a queue item; removing an unknown id is a no-op."""
    kiosk = current_kiosk(create=False)
    removed = kiosk.queue.remove(item_id)
    return {"removed": removed, "total": kiosk.queue.total()}
