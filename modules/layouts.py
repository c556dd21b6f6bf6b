"""
Fixed photo layout catalog and per-session image selection.

Switching layouts reseeds the selection from the available uploads, in
upload order, truncated to the new capacity. Any images the customer had
added or removed by hand are forgotten. This matches the kiosk's
long-standing behaviour; intersecting with the previous selection instead
needs product sign-off before it changes.
"""

from __future__ import annotations

import threading
from typing import List, Sequence, Tuple

from core.exceptions import CapacityExceededError, UnknownLayoutError
from logging_config import get_logger
from models.layout import ImageAsset, Layout


logger = get_logger(__name__)


LAYOUTS: tuple[Layout, ...] = (
    Layout(id="1x1", columns=1, rows=1),
    Layout(id="2x1", columns=2, rows=1),
    Layout(id="2x2", columns=2, rows=2),
    Layout(id="3x3", columns=3, rows=3),
)

DEFAULT_LAYOUT = LAYOUTS[0]


def list_layouts() -> List[Layout]:
    """Catalog in display order."""
    return list(LAYOUTS)


def get_layout(layout_id: str) -> Layout:
    """
    Look up a catalog layout by id.

    Raises:
        UnknownLayoutError: If the id is not in the catalog
    """
    for layout in LAYOUTS:
        if layout.id == layout_id:
            return layout
    raise UnknownLayoutError(layout_id, [layout.id for layout in LAYOUTS])


def select_layout(
    new_layout: Layout,
    available_assets: Sequence[ImageAsset],
    previously_selected: Sequence[ImageAsset] = (),
) -> List[ImageAsset]:
    """
    Selection after switching to ``new_layout``.

    Returns the first min(capacity, len(available_assets)) available
    assets in their original order. ``previously_selected`` is accepted
    for the caller's convenience but deliberately not consulted.
    """
    selected = list(available_assets[:new_layout.capacity])
    logger.debug(
        f"Layout {new_layout.id}: reseeded selection with {len(selected)} of "
        f"{len(available_assets)} image(s), previous selection had "
        f"{len(previously_selected)}"
    )
    return selected


class LayoutSelection:
    """
    The layout and image selection of one photo print being arranged.

    Starts on the first catalog layout seeded with the first upload.
    Request threads may share one selection, so every read and change
    goes through one lock; use snapshot() to read layout and images together.
    """

    def __init__(
        self,
        available_assets: Sequence[ImageAsset] = (),
        layout: Layout = DEFAULT_LAYOUT,
        strict: bool = False,
    ) -> None:
        self.strict = strict
        self._lock = threading.RLock()
        self._available: List[ImageAsset] = list(available_assets)
        self._layout = layout
        self._selected: List[ImageAsset] = select_layout(layout, self._available)

    @property
    def layout(self) -> Layout:
        with self._lock:
            return self._layout

    @property
    def selected(self) -> List[ImageAsset]:
        """Copy of the current selection, in placement order."""
        with self._lock:
            return list(self._selected)

    @property
    def available(self) -> List[ImageAsset]:
        with self._lock:
            return list(self._available)

    @property
    def is_full(self) -> bool:
        with self._lock:
            return len(self._selected) >= self._layout.capacity

    def snapshot(self) -> Tuple[Layout, List[ImageAsset]]:
        """Layout and selection read together, never torn by a concurrent switch."""
        with self._lock:
            return self._layout, list(self._selected)

    def set_available(self, assets: Sequence[ImageAsset]) -> None:
        """Replace the upload pool; the selection is reseeded from it."""
        with self._lock:
            self._available = list(assets)
            self._selected = select_layout(self._layout, self._available, self._selected)

    def select_layout(self, layout: Layout) -> List[ImageAsset]:
        """Switch layout and reseed the selection from the upload pool."""
        with self._lock:
            self._selected = select_layout(layout, self._available, self._selected)
            self._layout = layout
            return list(self._selected)

    def add_image(self, asset: ImageAsset) -> bool:
        """
        Append an image if the grid has a free cell.

        Returns:
            True if the image was added. When the layout is full this is a
            no-op returning False, or CapacityExceededError in strict mode.
        """
        with self._lock:
            if len(self._selected) >= self._layout.capacity:
                if self.strict:
                    raise CapacityExceededError(
                        self._layout.id, self._layout.capacity, len(self._selected) + 1
                    )
                logger.debug(f"Layout {self._layout.id} full, ignoring {asset.name}")
                return False
            self._selected.append(asset)
            return True

    def remove_image(self, index: int) -> bool:
        """Remove the image at ``index``; the gap is not refilled."""
        with self._lock:
            if index < 0 or index >= len(self._selected):
                return False
            del self._selected[index]
            return True

    def to_dict(self) -> dict:
        with self._lock:
            return {
                "layout": self._layout.to_dict(),
                "selected": [asset.to_dict() for asset in self._selected],
                "available": [asset.to_dict() for asset in self._available],
            }
