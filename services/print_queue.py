"""
Print queue: the ordered list of billable jobs of one kiosk session.

Queue items are frozen; the queue only ever appends or removes whole items.
Identities come from a nanosecond clock, bumped when two items arrive in
the same tick, so they are unique and strictly increasing within the
process. Callers must treat them as opaque.

Thread Safety:
    - add(), remove() and every read take the same lock, so total() never
      sees a half-applied change.
"""

from __future__ import annotations

import dataclasses
import threading
import time
from typing import Dict, Any, Iterator, List, Optional

from logging_config import get_logger
from models.queue_item import DocumentJob, ImageLayoutJob, QueueItem, describe_item


logger = get_logger(__name__)


class _IdSource:
    """Strictly increasing nanosecond timestamps."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            self._last = max(time.time_ns(), self._last + 1)
            return self._last


_ids = _IdSource()


class PrintQueue:
    """
    Ordered, append-only-or-remove collection of queue items.

    Usage:
        queue = PrintQueue()
        item = queue.add(DocumentJob(settings=..., total_pages=10,
                                     pages_to_print=4, cost=8))
        queue.total()          # 8
        queue.remove(item.id)  # True
        queue.remove(item.id)  # False, no-op
    """

    def __init__(self, owner: str = "") -> None:
        self.owner = owner
        self._items: List[QueueItem] = []
        self._lock = threading.Lock()

    def add(self, item: QueueItem) -> QueueItem:
        """
        Append an item under a fresh identity.

        Returns:
            The stored item (a copy of ``item`` carrying the new id)
        """
        if not isinstance(item, (DocumentJob, ImageLayoutJob)):
            raise TypeError(f"Unknown queue item type: {type(item).__name__}")
        if item.cost < 0:
            raise ValueError(f"Queue item cost must be >= 0, got {item.cost}")

        stored = dataclasses.replace(item, id=_ids.next_id())
        with self._lock:
            self._items.append(stored)
            count = len(self._items)
        logger.info(
            f"Queued {stored.kind.value} {stored.id} "
            f"({describe_item(stored)}), cost={stored.cost}, items={count}"
        )
        return stored

    def remove(self, item_id: int) -> bool:
        """Delete the item with ``item_id``. Returns False if there was none."""
        with self._lock:
            for position, item in enumerate(self._items):
                if item.id == item_id:
                    del self._items[position]
                    break
            else:
                return False
        logger.info(f"Removed queue item {item_id}")
        return True

    def get(self, item_id: int) -> Optional[QueueItem]:
        with self._lock:
            for item in self._items:
                if item.id == item_id:
                    return item
        return None

    def items(self) -> List[QueueItem]:
        """Snapshot of the queue in insertion order."""
        with self._lock:
            return list(self._items)

    def total(self) -> int:
        """Sum of item costs, recomputed on every call."""
        with self._lock:
            return sum(item.cost for item in self._items)

    def total_pages(self) -> int:
        """Printed pages over all items, copies included."""
        with self._lock:
            return sum(item.pages_to_print * item.copies for item in self._items)

    def clear(self) -> int:
        """Remove everything. Returns the number of items removed."""
        with self._lock:
            count = len(self._items)
            self._items.clear()
        if count:
            logger.info(f"Cleared {count} queue item(s)")
        return count

    def to_dict(self) -> Dict[str, Any]:
        """Checkout summary: items, total cost and total printed pages."""
        with self._lock:
            items = list(self._items)
        return {
            "items": [
                dict(item.to_dict(), summary=describe_item(item)) for item in items
            ],
            "count": len(items),
            "total": sum(item.cost for item in items),
            "totalPages": sum(item.pages_to_print * item.copies for item in items),
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[QueueItem]:
        return iter(self.items())
