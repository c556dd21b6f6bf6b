"""
Shared helpers for route handlers.

Kiosk state lives server-side in the SessionStore; the Flask session only
remembers which KioskSession belongs to the browser.
"""

from typing import Any, Dict, Tuple

from flask import current_app, request, session

from core.exceptions import (
    CapacityExceededError,
    CompositionError,
    DocumentError,
    EmptyQueueError,
    EmptySelectionError,
    InvalidSettingsError,
    NothingToPrintError,
    PrintIntakeError,
    UnknownLayoutError,
)
from services.session_store import KioskSession


SESSION_KEY = "kiosk_id"

# Most specific classes first
ERROR_STATUS = (
    (InvalidSettingsError, 400),
    (UnknownLayoutError, 404),
    (EmptySelectionError, 409),
    (CapacityExceededError, 409),
    (NothingToPrintError, 409),
    (EmptyQueueError, 409),
    (DocumentError, 422),
    (CompositionError, 422),
)


def current_kiosk(create: bool = True) -> KioskSession:
    """
    KioskSession of the current browser session.

    Args:
        create: Store a new session when none exists. Read-only handlers pass
            False and get an empty, unsaved session instead, so cookieless
            requests do not fill the store.
    """
    store = current_app.config["SESSION_STORE"]
    if not create:
        kiosk_id = session.get(SESSION_KEY)
        kiosk = store.get(kiosk_id) if kiosk_id else None
        return kiosk if kiosk is not None else KioskSession(session_id="")

    kiosk = store.get_or_create(session.get(SESSION_KEY))
    if session.get(SESSION_KEY) != kiosk.session_id:
        session[SESSION_KEY] = kiosk.session_id
        session.modified = True
    return kiosk


def json_payload() -> Dict[str, Any]:
    """Request body as a dict; form fields are accepted too."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def status_for(error: PrintIntakeError) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 500


def error_response(error: PrintIntakeError) -> Tuple[Dict[str, Any], int]:
    """JSON body and status code for an application error."""
    return {
        "error": error.message,
        "type": type(error).__name__,
        "details": error.details,
    }, status_for(error)
