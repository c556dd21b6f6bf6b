"""Page range expansion for user-typed print ranges."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Tuple

from core.exceptions import ParseError
from logging_config import get_logger


logger = get_logger(__name__)

ALL_PAGES = "all"

# Leading integer of a bound; trailing text such as "abc" or ".5" is ignored
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class RangeReport:
    """Expanded pages plus the tokens that were ignored."""

    pages: List[int]
    dropped_tokens: List[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def to_dict(self) -> dict:
        return {
            "pages": list(self.pages),
            "pageCount": self.page_count,
            "droppedTokens": list(self.dropped_tokens),
        }


class PageRangeExpander:
    """
    Turns text such as "1-3, 7, 10-8" into a sorted list of page numbers.

    Parsing favours partial success: a malformed or out-of-range token is
    dropped and the rest of the expression still counts. The result is
    deduplicated, ascending and always within [1, max_pages]. An empty
    result is valid and means nothing will be printed.
    """

    def expand(self, range_spec: str | None, max_pages: int) -> List[int]:
        return self.expand_with_report(range_spec, max_pages).pages

    def expand_with_report(self, range_spec: str | None, max_pages: int) -> RangeReport:
        """
        Expand a range expression and report which tokens were dropped.

        Args:
            range_spec: Range text; empty or "all" selects every page
            max_pages: Page count of the document

        Returns:
            RangeReport with the page set and the ignored tokens
        """
        if max_pages <= 0:
            return RangeReport(pages=[])

        text = (range_spec or "").strip()
        if not text or text.lower() == ALL_PAGES:
            return RangeReport(pages=list(range(1, max_pages + 1)))

        pages: set[int] = set()
        dropped: List[str] = []

        for raw_token in text.split(","):
            token = raw_token.strip()
            try:
                selected = self._expand_token(token, max_pages)
            except ParseError as exc:
                logger.debug(f"Dropping page range token: {exc}")
                dropped.append(token)
                continue
            pages.update(selected)

        return RangeReport(pages=sorted(pages), dropped_tokens=dropped)

    def _expand_token(self, token: str, max_pages: int) -> List[int]:
        if not token:
            raise ParseError(token, "empty token")

        if "-" in token:
            start, end = self._parse_span(token)
            low, high = min(start, end), max(start, end)
            selected = [page for page in range(max(low, 1), min(high, max_pages) + 1)]
            if not selected:
                raise ParseError(token, f"no page of the span lies within 1-{max_pages}")
            return selected

        page = self._parse_int(token)
        if page <= 0 or page > max_pages:
            raise ParseError(token, f"page outside 1-{max_pages}")
        return [page]

    def _parse_span(self, token: str) -> Tuple[int, int]:
        # Only the first two parts count: "1-2-3" is the span 1-2
        parts = token.split("-")
        return self._parse_int(parts[0], token), self._parse_int(parts[1], token)

    @staticmethod
    def _parse_int(text: str, token: str | None = None) -> int:
        """Leading integer of ``text``: "3abc" is 3, "2.5" is 2, "abc" fails."""
        match = _LEADING_INT.match(text)
        if match is None:
            raise ParseError(token if token is not None else text, "not an integer")
        return int(match.group(1))
