"""
Photo layout routes.

Layout switching, adding and removing images from the grid. The
selection belongs to the caller's kiosk session.
"""

from flask import Blueprint, current_app

from core.exceptions import PrintIntakeError
from logging_config import get_logger
from modules.composer import grid_rects
from modules.layouts import get_layout, list_layouts
from routes.helpers import current_kiosk, error_response, json_payload


# Module logger
logger = get_logger(__name__)

layouts_bp = Blueprint("layouts", __name__)


@layouts_bp.route("/api/layouts", methods=["GET"])
def catalog():
    """Fixed layout catalog."""
    return {"layouts": [layout.to_dict() for layout in list_layouts()]}


@layouts_bp.route("/api/layout", methods=["GET"])
def current_layout():
    """Current layout and selection, plus the page cells the images fill, in mm."""
    kiosk = current_kiosk(create=False)
    data = kiosk.layout.to_dict()
    layout = get_layout(data["layout"]["id"])
    geometry = current_app.config["INTAKE_SERVICE"].composer.geometry
    data["cells"] = [rect.to_dict() for rect in grid_rects(layout, geometry)]
    return data


@layouts_bp.route("/api/layout", methods=["POST"])
def switch_layout():
    """
    Switch layout.

    The selection is reseeded with the first uploads that fit the new
    grid; images added or removed by hand are not carried over.
    """
    data = json_payload()
    try:
        layout = get_layout(str(data.get("layoutId", "")))
    except PrintIntakeError as e:
        return error_response(e)

    kiosk = current_kiosk()
    kiosk.layout.select_layout(layout)
    logger.debug(f"Session switched to layout {layout.id}")
    return kiosk.layout.to_dict()


@layouts_bp.route("/api/layout/images", methods=["POST"])
def add_image():
    """
    Add an uploaded image (by its position in the upload list).

    Adding to a full grid is a no-op; ``added`` reports what happened.
    """
    data = json_payload()
    kiosk = current_kiosk(create=False)
    try:
        index = int(data.get("imageIndex"))
    except (TypeError, ValueError):
        return {"error": "imageIndex must be an integer."}, 400

    if index < 0 or index >= len(kiosk.images):
        return {"error": f"No uploaded image at index {index}."}, 404

    try:
        added = kiosk.layout.add_image(kiosk.images[index])
    except PrintIntakeError as e:
        return error_response(e)
    return dict(kiosk.layout.to_dict(), added=added)


@layouts_bp.route("/api/layout/images/<int:index>", methods=["DELETE"])
def remove_image(index: int):
    """Remove the selected image at ``index``; the cell is not refilled."""
    kiosk = current_kiosk(create=False)
    removed = kiosk.layout.remove_image(index)
    return dict(kiosk.layout.to_dict(), removed=removed)


@layouts_bp.route("/api/layout/price", methods=["POST"])
def layout_price():
    """Price of the current photo layout for the posted copies and color mode."""
    data = json_payload()
    intake = current_app.config["INTAKE_SERVICE"]
    try:
        cost = intake.price_image_layout(data.get("colorMode", "color"), data.get("copies", 1))
    except PrintIntakeError as e:
        return error_response(e)
    return {"cost": cost}
