"""
Services layer for PrintIntakeWeb.

This module contains the stateful parts of the application:
- PrintQueue: Ordered, lock-guarded list of billable jobs
- SessionStore: Server-side uploads, layout and queue per kiosk session
- IntakeService: Price previews, composition and queueing

Thread Model:
    Flask request threads share the SessionStore. Each session's queue
    has its own lock; composition runs on the request thread, one image
    at a time.
"""

from .print_queue import PrintQueue
from .session_store import KioskSession, SessionStore, UploadedDocument
from .intake_service import IntakeService, DocumentPreview

__all__ = [
    "PrintQueue",
    "KioskSession",
    "SessionStore",
    "UploadedDocument",
    "IntakeService",
    "DocumentPreview",
]
