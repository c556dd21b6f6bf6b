"""
Custom exceptions for PrintIntakeWeb.

Exception Hierarchy:
    PrintIntakeError (base)
    ├── ParseError             - Malformed page-range token (recovered locally)
    ├── EmptySelectionError    - Compose/queue attempted with zero images
    ├── CapacityExceededError  - More images than the layout can hold
    ├── UnknownLayoutError     - Layout id not in the catalog
    ├── InvalidSettingsError   - Print settings payload cannot be understood
    ├── DocumentError          - Uploaded document unreadable or empty
    ├── CompositionError       - Composition failed, no artifact produced
    │   └── DecodeError        - One image could not be decoded
    ├── NothingToPrintError    - Page range selects no page, cannot queue
    └── EmptyQueueError        - Checkout with an empty queue

Usage:
    ParseError never leaves the page-range module; the offending token is
    dropped and parsing continues. Everything else reaches the caller as a
    terminal failure for that operation. There is no internal retry.
"""

from typing import Optional, Dict, Any


class PrintIntakeError(Exception):
    """
    Base exception for all PrintIntakeWeb errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class ParseError(PrintIntakeError):
    """
    A single page-range token could not be understood.

    Raised and caught inside the page-range expander; the token is dropped.
    """

    def __init__(self, token: str, reason: str):
        message = f"Cannot parse page range token '{token}': {reason}"
        super().__init__(message, {"token": token, "reason": reason})
        self.token = token
        self.reason = reason


class InvalidSettingsError(PrintIntakeError):
    """
    Print settings payload has a value outside its allowed set.

    Typical causes:
    - colorMode other than "color" / "bw"
    - duplex other than "single" / "double"
    - copies not an integer
    """

    def __init__(self, field_name: str, value: Any):
        message = f"Invalid value for {field_name}: {value!r}"
        details = {
            "field": field_name,
            "value": value,
            "resolution": "Correct the print settings and try again"
        }
        super().__init__(message, details)
        self.field_name = field_name
        self.value = value


class DocumentError(PrintIntakeError):
    """
    Uploaded document could not be opened or has no pages.

    The upload is rejected; nothing is added to the session.
    """

    def __init__(self, filename: str, reason: str):
        message = f"Cannot read document '{filename}': {reason}"
        details = {
            "filename": filename,
            "resolution": "Upload a valid, non-empty PDF document"
        }
        super().__init__(message, details)
        self.filename = filename


# =============================================================================
# LAYOUT ERRORS
# =============================================================================

class UnknownLayoutError(PrintIntakeError):
    """Requested layout id is not part of the fixed catalog."""

    def __init__(self, layout_id: str, known_ids: Optional[list] = None):
        message = f"Unknown layout: {layout_id}"
        details = {"layout_id": layout_id}
        if known_ids:
            details["known_layouts"] = list(known_ids)
        super().__init__(message, details)
        self.layout_id = layout_id


class EmptySelectionError(PrintIntakeError):
    """
    Composition or queueing was attempted with no selected images.

    Never silently defaulted: the caller must block submission.
    """

    def __init__(self, layout_id: Optional[str] = None):
        message = "No images selected for the layout"
        details = {"resolution": "Add at least one image to the layout"}
        if layout_id:
            details["layout_id"] = layout_id
        super().__init__(message, details)
        self.layout_id = layout_id


class CapacityExceededError(PrintIntakeError):
    """More images than the layout's grid has cells."""

    def __init__(self, layout_id: str, capacity: int, requested: int):
        message = (
            f"Layout {layout_id} holds {capacity} image(s), "
            f"{requested} requested"
        )
        details = {
            "layout_id": layout_id,
            "capacity": capacity,
            "requested": requested,
        }
        super().__init__(message, details)
        self.layout_id = layout_id
        self.capacity = capacity
        self.requested = requested


# =============================================================================
# COMPOSITION ERRORS - fatal for the current attempt, nothing is retained
# =============================================================================

class CompositionError(PrintIntakeError):
    """
    Building the photo layout page failed.

    No partial document is returned. The caller may start again from a
    clean selection; the engine does not retry.
    """

    def __init__(
        self,
        message: str,
        layout_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if layout_id:
            error_details["layout_id"] = layout_id
        super().__init__(message, error_details)
        self.layout_id = layout_id


class DecodeError(CompositionError):
    """
    An image asset could not be decoded into pixels.

    Typical causes:
    - Corrupt or truncated upload
    - Unsupported image format
    - File removed from the upload folder
    """

    def __init__(
        self,
        asset_name: str,
        reason: str,
        index: Optional[int] = None,
        layout_id: Optional[str] = None
    ):
        message = f"Failed to decode image '{asset_name}': {reason}"
        details = {
            "asset": asset_name,
            "resolution": "Remove the image from the layout or upload it again"
        }
        if index is not None:
            details["index"] = index
        super().__init__(message, layout_id, details)
        self.asset_name = asset_name
        self.index = index


# =============================================================================
# QUEUE ERRORS
# =============================================================================

class NothingToPrintError(PrintIntakeError):
    """
    The page range selects no page of the document.

    A zero-page preview is valid (it prices as zero); queueing it is not.
    """

    def __init__(self, filename: str, page_range: str):
        message = f"Page range '{page_range}' selects no page of {filename}"
        details = {
            "filename": filename,
            "page_range": page_range,
            "resolution": "Enter a page range inside the document",
        }
        super().__init__(message, details)
        self.filename = filename
        self.page_range = page_range


class EmptyQueueError(PrintIntakeError):
    """Checkout attempted with nothing in the print queue."""

    def __init__(self, message: str = "Print queue is empty"):
        details = {"resolution": "Add at least one item to the queue"}
        super().__init__(message, details)
