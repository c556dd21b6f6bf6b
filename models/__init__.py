"""
Data models for PrintIntakeWeb.

This module contains dataclasses for:
- PrintSettings: Customer's choices for a document (frozen)
- Layout / ImageAsset: Photo grid and uploaded image handles
- DocumentJob / ImageLayoutJob: The two kinds of queue item (frozen)

Queue items are frozen so a cost snapshot can never drift from the
settings it was computed from.
"""

from .settings import ColorMode, Duplex, PrintSettings, clamp_copies
from .layout import Layout, ImageAsset
from .queue_item import (
    QueueItem,
    QueueItemKind,
    DocumentJob,
    ImageLayoutJob,
    describe_item,
)

__all__ = [
    # Settings models
    "ColorMode",
    "Duplex",
    "PrintSettings",
    "clamp_copies",
    # Layout models
    "Layout",
    "ImageAsset",
    # Queue models
    "QueueItem",
    "QueueItemKind",
    "DocumentJob",
    "ImageLayoutJob",
    "describe_item",
]
