"""PDF document access: page counts and page extraction."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Sequence

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError

from core.exceptions import DocumentError
from logging_config import get_logger


logger = get_logger(__name__)

# Anything pypdf raises on a damaged file
_READ_ERRORS = (PdfReadError, OSError, ValueError, KeyError)


class DocumentSource:
    """Reads uploaded PDFs, failing loudly on unreadable or empty files."""

    def page_count(self, pdf_path: str | Path) -> int:
        """
        Number of pages in the document.

        Raises:
            DocumentError: If the file cannot be parsed or has no pages
        """
        reader = self._open(pdf_path)
        return self._count(reader, Path(pdf_path).name)

    def extract_pages(self, pdf_path: str | Path, pages: Sequence[int]) -> bytes:
        """
        Write the given 1-based pages, in order, to a new PDF.

        Raises:
            DocumentError: If the file is unreadable or a page is out of range
        """
        name = Path(pdf_path).name
        reader = self._open(pdf_path)
        writer = PdfWriter()
        total = self._count(reader, name)
        for page_number in pages:
            if page_number < 1 or page_number > total:
                raise DocumentError(name, f"page {page_number} outside 1-{total}")
            writer.add_page(reader.pages[page_number - 1])

        buffer = BytesIO()
        writer.write(buffer)
        logger.debug(f"Extracted {len(pages)} page(s) from {name}")
        return buffer.getvalue()

    @staticmethod
    def _open(pdf_path: str | Path) -> PdfReader:
        path = Path(pdf_path)
        if not path.exists():
            raise DocumentError(path.name, "file not found")
        try:
            return PdfReader(str(path))
        except _READ_ERRORS as exc:
            logger.warning(f"PDF parse failed for {path.name}: {exc}")
            raise DocumentError(path.name, str(exc)) from exc

    @staticmethod
    def _count(reader: PdfReader, name: str) -> int:
        # The page tree is read lazily, so a broken one only fails here
        try:
            count = len(reader.pages)
        except _READ_ERRORS as exc:
            logger.warning(f"PDF page tree unreadable for {name}: {exc}")
            raise DocumentError(name, str(exc)) from exc
        if count < 1:
            raise DocumentError(name, "document has no pages")
        return count
