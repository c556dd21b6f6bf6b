"""
Core module for PrintIntakeWeb.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
"""

from .exceptions import (
    PrintIntakeError,
    ParseError,
    InvalidSettingsError,
    DocumentError,
    UnknownLayoutError,
    EmptySelectionError,
    CapacityExceededError,
    CompositionError,
    DecodeError,
    NothingToPrintError,
    EmptyQueueError,
)

__all__ = [
    "PrintIntakeError",
    "ParseError",
    "InvalidSettingsError",
    "DocumentError",
    "UnknownLayoutError",
    "EmptySelectionError",
    "CapacityExceededError",
    "CompositionError",
    "DecodeError",
    "NothingToPrintError",
    "EmptyQueueError",
]
