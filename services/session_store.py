"""
Server-side state of kiosk sessions.

The Flask session cookie only carries a session id; uploads, the photo
layout being arranged and the print queue live here, keyed by that id.
Sessions idle for longer than the configured time are evicted and their
stored files deleted, both checked opportunistically on lookup.

Thread Safety:
    - SessionStore uses threading.Lock for lookups, creation and eviction
    - Each KioskSession's PrintQueue and LayoutSelection have their own lock
"""

from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set

from logging_config import get_logger, get_session_logger
from models.layout import ImageAsset
from modules.layouts import LayoutSelection
from services.print_queue import PrintQueue


logger = get_logger(__name__)

# Minimum seconds between two idle sweeps
SWEEP_INTERVAL_SECONDS = 60.0


@dataclass
class UploadedDocument:
    """A PDF uploaded in this session, not yet queued."""

    id: str
    filename: str
    stored_path: str
    total_pages: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "filename": self.filename,
            "totalPages": self.total_pages,
        }


@dataclass
class KioskSession:
    """Everything one customer has uploaded, arranged and queued."""

    session_id: str
    documents: Dict[str, UploadedDocument] = field(default_factory=dict)
    images: List[ImageAsset] = field(default_factory=list)
    layout: LayoutSelection = field(default_factory=LayoutSelection)
    queue: PrintQueue = field(default_factory=PrintQueue)
    last_seen: float = field(default_factory=time.monotonic)

    def __post_init__(self):
        self.queue.owner = self.session_id
        self.log = get_session_logger(self.session_id)

    def add_document(self, filename: str, stored_path: str, total_pages: int) -> UploadedDocument:
        document = UploadedDocument(
            id=uuid.uuid4().hex,
            filename=filename,
            stored_path=stored_path,
            total_pages=total_pages,
        )
        self.documents[document.id] = document
        self.log.info(f"Document {filename} uploaded ({total_pages} pages)")
        return document

    def add_images(self, assets: List[ImageAsset]) -> None:
        """Grow the upload pool; the layout selection is reseeded from it."""
        self.images.extend(assets)
        self.layout.set_available(self.images)
        self.log.info(f"{len(assets)} image(s) uploaded, {len(self.images)} in pool")

    def stored_files(self) -> Set[str]:
        """Every file this session wrote: uploads and queued job outputs."""
        paths = {doc.stored_path for doc in self.documents.values()}
        paths.update(asset.handle for asset in self.images)
        paths.update(item.stored_path for item in self.queue.items())
        paths.discard("")
        return paths

    def purge_files(self) -> int:
        """Delete the session's files. Returns how many were removed."""
        removed = 0
        for path in self.stored_files():
            try:
                Path(path).unlink(missing_ok=True)
                removed += 1
            except OSError as e:
                self.log.warning(f"Could not delete {path}: {e}")
        return removed


class SessionStore:
    """
    Thread-safe map of session id to KioskSession.

    Usage:
        kiosk = store.get_or_create(session.get("kiosk_id"))
        session["kiosk_id"] = kiosk.session_id

    Args:
        idle_seconds: Evict sessions not seen for this long (None keeps them)
        clock: Monotonic time source, replaceable in tests
    """

    def __init__(
        self,
        idle_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.idle_seconds = idle_seconds
        self._clock = clock
        self._sessions: Dict[str, KioskSession] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def get_or_create(self, session_id: Optional[str] = None) -> KioskSession:
        now = self._clock()
        with self._lock:
            evicted = self._sweep_locked(now)
            kiosk = self._sessions.get(session_id) if session_id else None
            if kiosk is None:
                new_id = session_id or uuid.uuid4().hex
                kiosk = KioskSession(session_id=new_id, last_seen=now)
                self._sessions[new_id] = kiosk
                logger.debug(f"Created kiosk session {new_id[:8]}")
            kiosk.last_seen = now
        self._purge(evicted)
        return kiosk

    def get(self, session_id: str) -> Optional[KioskSession]:
        """Existing session or None; never creates one."""
        now = self._clock()
        with self._lock:
            evicted = self._sweep_locked(now)
            kiosk = self._sessions.get(session_id)
            if kiosk is not None:
                kiosk.last_seen = now
        self._purge(evicted)
        return kiosk

    def discard(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed:
            removed.purge_files()
            logger.info(f"Discarded kiosk session {session_id[:8]}")
        return removed is not None

    def evict_idle(self) -> int:
        """Drop every session idle longer than idle_seconds. Returns the count."""
        now = self._clock()
        with self._lock:
            evicted = self._sweep_locked(now, force=True)
        self._purge(evicted)
        return len(evicted)

    def _sweep_locked(self, now: float, force: bool = False) -> List[KioskSession]:
        if self.idle_seconds is None:
            return []
        if not force and now - self._last_sweep < SWEEP_INTERVAL_SECONDS:
            return []
        self._last_sweep = now
        cutoff = now - self.idle_seconds
        evicted = [k for k in self._sessions.values() if k.last_seen < cutoff]
        for kiosk in evicted:
            del self._sessions[kiosk.session_id]
        return evicted

    @staticmethod
    def _purge(evicted: List[KioskSession]) -> None:
        # File deletion happens outside the store lock
        for kiosk in evicted:
            files = kiosk.purge_files()
            logger.info(f"Evicted idle kiosk session {kiosk.session_id[:8]} ({files} file(s))")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
