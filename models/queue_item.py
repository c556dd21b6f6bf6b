"""
Print queue item models.

A queue item is one billable unit of print work. There are exactly two
kinds, modelled as separate frozen dataclasses tagged by QueueItemKind:

    DocumentJob      - an uploaded PDF printed with PrintSettings
    ImageLayoutJob   - a composed photo page (layout + selected images)

Cost is computed once, when the item is built, and never recomputed.
Every consumer branches on the kind explicitly (see describe_item) and
fails loudly on anything else.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Tuple, Union

from models.layout import ImageAsset, Layout
from models.settings import ColorMode, Duplex, PrintSettings


class QueueItemKind(Enum):
    """Discriminator for queue items."""

    DOCUMENT = "document"
    IMAGE_LAYOUT = "image_layout"


@dataclass(frozen=True)
class DocumentJob:
    """An uploaded document with its print settings and cost snapshot."""

    settings: PrintSettings
    """Settings as they were when the job was queued."""

    total_pages: int
    """Pages in the source document."""

    pages_to_print: int
    """Pages selected by the range, per copy."""

    cost: int
    """Snapshotted total cost in smallest currency units."""

    filename: str = ""
    """Display filename."""

    stored_path: str = ""
    """Where the uploaded document lives on disk."""

    id: int = 0
    """Queue identity, assigned by PrintQueue.add()."""

    kind: QueueItemKind = field(default=QueueItemKind.DOCUMENT, init=False)

    @property
    def copies(self) -> int:
        return self.settings.copies

    @property
    def color_mode(self) -> ColorMode:
        return self.settings.color_mode

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "filename": self.filename,
            "settings": self.settings.to_dict(),
            "totalPages": self.total_pages,
            "pagesToPrint": self.pages_to_print,
            "cost": self.cost,
        }


@dataclass(frozen=True)
class ImageLayoutJob:
    """A composed one-page photo layout with its cost snapshot."""

    layout: Layout
    images: Tuple[ImageAsset, ...]
    copies: int
    color_mode: ColorMode
    cost: int

    filename: str = ""
    """Filename of the composed PDF."""

    stored_path: str = ""
    """Where the composed PDF was written."""

    id: int = 0

    kind: QueueItemKind = field(default=QueueItemKind.IMAGE_LAYOUT, init=False)

    @property
    def pages_to_print(self) -> int:
        # A composed layout is always a single page
        return 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "filename": self.filename,
            "layout": self.layout.to_dict(),
            "images": [asset.name for asset in self.images],
            "copies": self.copies,
            "colorMode": self.color_mode.value,
            "pagesToPrint": self.pages_to_print,
            "cost": self.cost,
        }


QueueItem = Union[DocumentJob, ImageLayoutJob]


def describe_item(item: QueueItem) -> str:
    """
    One-line summary of a queue item for the queue list.

    Raises:
        TypeError: If item is not one of the known queue item kinds
    """
    if isinstance(item, DocumentJob):
        settings = item.settings
        copies = f"{settings.copies} {'copies' if settings.copies > 1 else 'copy'}"
        mode = "Color" if settings.color_mode is ColorMode.COLOR else "B&W"
        sides = "Duplex" if settings.duplex is Duplex.DOUBLE else "Single"
        return f"{copies} • {settings.page_range} • {mode} • {sides}"
    if isinstance(item, ImageLayoutJob):
        copies = f"{item.copies} {'copies' if item.copies > 1 else 'copy'}"
        mode = "Color" if item.color_mode is ColorMode.COLOR else "B&W"
        return f"{item.layout.id} layout • {len(item.images)} image(s) • {copies} • {mode}"
    raise TypeError(f"Unknown queue item type: {type(item).__name__}")
