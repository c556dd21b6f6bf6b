"""
Upload routes.

Handles PDF and image uploads: validation, storage and page counting.
Uploaded files are registered on the caller's kiosk session.
"""

from pathlib import Path

import bleach
from flask import Blueprint, current_app, request

from core.exceptions import DocumentError
from logging_config import get_logger
from modules.image_store import allowed_image, stored_name
from routes.helpers import current_kiosk, error_response


# Module logger
logger = get_logger(__name__)

uploads_bp = Blueprint("uploads", __name__)

# Constants
ALLOWED_DOCUMENT_EXTENSIONS = {"pdf"}
MAX_FILENAME_LENGTH = 255


def _allowed_document(filename: str) -> bool:
    """Check if file extension is allowed."""
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_DOCUMENT_EXTENSIONS


def _sanitize_text(text: str, max_length: int = None) -> str:
    """Strip markup and whitespace from user text, truncating if needed."""
    if not text:
        return ""
    text = bleach.clean(text.strip(), tags=[], strip=True)
    if max_length and len(text) > max_length:
        text = text[:max_length]
    return text


@uploads_bp.route("/api/documents", methods=["POST"])
def upload_document():
    """
    Upload one PDF.

    Returns the document id and page count used by the price preview.
    """
    pdf_file = request.files.get("file")

    if not pdf_file or pdf_file.filename == "":
        return {"error": "Please choose a PDF file to upload."}, 400

    if not _allowed_document(pdf_file.filename):
        return {"error": "Unsupported file type. Please upload a PDF document."}, 400

    if len(pdf_file.filename) > MAX_FILENAME_LENGTH:
        return {"error": f"Filename too long. Maximum {MAX_FILENAME_LENGTH} characters."}, 400

    upload_folder = Path(current_app.config["UPLOAD_FOLDER"])
    upload_folder.mkdir(parents=True, exist_ok=True)
    stored_path = upload_folder / stored_name(pdf_file.filename)

    logger.info(f"Saving uploaded document: {stored_path.name}")
    pdf_file.save(stored_path)

    document_source = current_app.config["DOCUMENT_SOURCE"]
    try:
        total_pages = document_source.page_count(stored_path)
    except DocumentError as e:
        logger.warning(f"Rejected upload {stored_path.name}: {e}")
        stored_path.unlink(missing_ok=True)
        return error_response(e)

    kiosk = current_kiosk()
    document = kiosk.add_document(
        filename=_sanitize_text(pdf_file.filename, MAX_FILENAME_LENGTH),
        stored_path=str(stored_path),
        total_pages=total_pages,
    )
    return {"document": document.to_dict()}, 201


@uploads_bp.route("/api/documents", methods=["GET"])
def list_documents():
    """Documents uploaded in this session."""
    kiosk = current_kiosk(create=False)
    return {"documents": [doc.to_dict() for doc in kiosk.documents.values()]}


@uploads_bp.route("/api/images", methods=["POST"])
def upload_images():
    """
    Upload one or more images for photo layouts.

    Files with an unsupported extension are skipped and reported back.
    """
    files = [f for f in request.files.getlist("images") if f and f.filename]
    if not files:
        return {"error": "Please choose at least one image to upload."}, 400

    image_store = current_app.config["IMAGE_STORE"]
    accepted = []
    rejected = []
    for image_file in files:
        if not allowed_image(image_file.filename):
            rejected.append(_sanitize_text(image_file.filename, MAX_FILENAME_LENGTH))
            continue
        accepted.append(image_store.save(image_file))

    if not accepted:
        return {"error": "No supported images uploaded.", "rejected": rejected}, 400

    kiosk = current_kiosk()
    kiosk.add_images(accepted)
    return {
        "images": [asset.to_dict() for asset in accepted],
        "rejected": rejected,
        "layout": kiosk.layout.to_dict(),
    }, 201


@uploads_bp.route("/api/images", methods=["GET"])
def list_images():
    """Images uploaded in this session, in upload order."""
    kiosk = current_kiosk(create=False)
    return {"images": [asset.to_dict() for asset in kiosk.images]}
