"""
Order intake service.

Glue between the request handlers and the engine: price previews, turning
an uploaded document or an arranged photo layout into a queue item, and
the checkout summary.

Flow:
    1. Customer uploads PDFs / images (routes.uploads)
    2. preview_document() prices the current settings on every change
    3. queue_document() / queue_image_layout() freeze the cost and append
    4. checkout_summary() hands total + job list to the checkout collaborator

A composition failure leaves the queue untouched: the item is only built
after the composer has returned a complete document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from config import Config
from core.exceptions import EmptyQueueError, EmptySelectionError, NothingToPrintError
from logging_config import get_logger
from models.queue_item import DocumentJob, ImageLayoutJob
from models.settings import ColorMode, Duplex, PrintSettings, clamp_copies
from modules.composer import DocumentComposer
from modules.document_source import DocumentSource
from modules.image_store import ImageStore
from modules.page_range import PageRangeExpander
from modules.pricing import PricingEngine, PriceQuote
from services.session_store import KioskSession, UploadedDocument


logger = get_logger(__name__)


@dataclass(frozen=True)
class DocumentPreview:
    """Live price preview for one document and its current settings."""

    settings: PrintSettings
    total_pages: int
    pages: list
    dropped_tokens: list
    quote: PriceQuote

    @property
    def pages_to_print(self) -> int:
        return len(self.pages)

    @property
    def can_queue(self) -> bool:
        # Zero pages is a valid preview but must not be submitted
        return self.pages_to_print > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "settings": self.settings.to_dict(),
            "totalPages": self.total_pages,
            "pages": list(self.pages),
            "pagesToPrint": self.pages_to_print,
            "droppedTokens": list(self.dropped_tokens),
            "quote": self.quote.to_dict(),
            "cost": self.quote.total,
            "canQueue": self.can_queue,
        }


class IntakeService:
    """Prices, composes and queues print jobs for kiosk sessions."""

    def __init__(
        self,
        composer: DocumentComposer,
        image_store: ImageStore,
        pricing: Optional[PricingEngine] = None,
        expander: Optional[PageRangeExpander] = None,
        max_copies: Optional[int] = None,
        document_source: Optional[DocumentSource] = None,
    ) -> None:
        self.composer = composer
        self.image_store = image_store
        self.pricing = pricing or PricingEngine()
        self.expander = expander or PageRangeExpander()
        self.max_copies = Config.MAX_COPIES if max_copies is None else max_copies
        self.document_source = document_source or DocumentSource()

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def preview_document(
        self,
        document: UploadedDocument,
        settings: PrintSettings,
    ) -> DocumentPreview:
        report = self.expander.expand_with_report(settings.page_range, document.total_pages)
        quote = self.pricing.quote(
            report.page_count, settings.color_mode, settings.duplex, settings.copies
        )
        return DocumentPreview(
            settings=settings,
            total_pages=document.total_pages,
            pages=report.pages,
            dropped_tokens=report.dropped_tokens,
            quote=quote,
        )

    def queue_document(
        self,
        kiosk: KioskSession,
        document: UploadedDocument,
        settings: PrintSettings,
    ) -> DocumentJob:
        """
        Price the document once and append it to the session queue.

        The queued file holds only the selected pages, in ascending order.

        Raises:
            NothingToPrintError: If the page range selects no page
            DocumentError: If the upload can no longer be read (queue unchanged)
        """
        preview = self.preview_document(document, settings)
        if not preview.can_queue:
            raise NothingToPrintError(document.filename, settings.page_range)

        data = self.document_source.extract_pages(document.stored_path, preview.pages)
        stem = document.filename.rsplit(".", 1)[0] or "document"
        stored_path = self.image_store.save_output(f"{stem}-pages.pdf", data)

        job = DocumentJob(
            settings=settings,
            total_pages=document.total_pages,
            pages_to_print=preview.pages_to_print,
            cost=preview.quote.total,
            filename=document.filename,
            stored_path=str(stored_path),
        )
        return kiosk.queue.add(job)

    # ------------------------------------------------------------------
    # Photo layouts
    # ------------------------------------------------------------------

    def price_image_layout(self, color_mode: ColorMode | str, copies: Any) -> int:
        """A composed layout is one single-sided page per copy."""
        return self.pricing.price(
            1, color_mode, Duplex.SINGLE, clamp_copies(copies, self.max_copies)
        )

    def queue_image_layout(
        self,
        kiosk: KioskSession,
        copies: Any,
        color_mode: ColorMode | str,
    ) -> ImageLayoutJob:
        """
        Compose the session's current layout selection and queue it.

        Raises:
            EmptySelectionError: If no image is selected
            CompositionError: If composition fails (queue left unchanged)
        """
        color_mode = ColorMode.parse(color_mode)
        copies = clamp_copies(copies, self.max_copies)
        layout, images = kiosk.layout.snapshot()
        if not images:
            raise EmptySelectionError(layout.id)

        output = self.composer.compose(images, layout, color_mode)
        stored_path = self.image_store.save_output(output.filename, output.data)

        job = ImageLayoutJob(
            layout=layout,
            images=tuple(images),
            copies=copies,
            color_mode=color_mode,
            cost=self.pricing.price(1, color_mode, Duplex.SINGLE, copies),
            filename=output.filename,
            stored_path=str(stored_path),
        )
        return kiosk.queue.add(job)

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    def checkout_summary(self, kiosk: KioskSession) -> Dict[str, Any]:
        """
        Total and job list for the checkout collaborator.

        Raises:
            EmptyQueueError: If the queue is empty
        """
        summary = kiosk.queue.to_dict()
        if not summary["count"]:
            raise EmptyQueueError()
        summary["sessionId"] = kiosk.session_id
        logger.info(
            f"Checkout for session {kiosk.session_id[:8]}: "
            f"{summary['count']} item(s), total={summary['total']}"
        )
        return summary
