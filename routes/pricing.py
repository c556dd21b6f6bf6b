"""
Pricing routes.

Live price preview while the customer edits document settings, and page
range checking for the custom range field.
"""

from flask import Blueprint, current_app

from core.exceptions import PrintIntakeError
from logging_config import get_logger
from models.settings import PrintSettings
from routes.helpers import current_kiosk, error_response, json_payload


# Module logger
logger = get_logger(__name__)

pricing_bp = Blueprint("pricing", __name__)


@pricing_bp.route("/api/price", methods=["POST"])
def price_preview():
    """
    Price a document with the posted settings.

    Body: {documentId, copies, colorMode, duplex, pageRange}
    A range that selects nothing prices as 0 with canQueue = false.
    """
    data = json_payload()
    kiosk = current_kiosk(create=False)

    document = kiosk.documents.get(str(data.get("documentId", "")))
    if document is None:
        return {"error": "Unknown document. Please upload it again."}, 404

    try:
        settings = PrintSettings.from_dict(data, max_copies=current_app.config["MAX_COPIES"])
        preview = current_app.config["INTAKE_SERVICE"].preview_document(document, settings)
    except PrintIntakeError as e:
        return error_response(e)

    return preview.to_dict()


@pricing_bp.route("/api/page-range", methods=["POST"])
def page_range():
    """
    Expand a page range against a page count.

    Body: {pageRange, maxPages} or {pageRange, documentId}
    """
    data = json_payload()
    max_pages = data.get("maxPages")

    if max_pages is None and data.get("documentId"):
        document = current_kiosk(create=False).documents.get(str(data["documentId"]))
        if document is None:
            return {"error": "Unknown document. Please upload it again."}, 404
        max_pages = document.total_pages

    try:
        max_pages = int(max_pages)
    except (TypeError, ValueError):
        return {"error": "maxPages must be an integer."}, 400

    # Uploaded documents are already bounded by the upload size limit
    limit = current_app.config["MAX_PAGE_RANGE_PAGES"]
    if "maxPages" in data and (max_pages < 1 or max_pages > limit):
        return {"error": f"maxPages must be between 1 and {limit}."}, 400

    expander = current_app.config["INTAKE_SERVICE"].expander
    report = expander.expand_with_report(data.get("pageRange", ""), max_pages)
    return report.to_dict()
