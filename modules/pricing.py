"""Tiered, duplex-aware print pricing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Any

from config import Config
from logging_config import get_logger
from models.settings import ColorMode, Duplex


logger = get_logger(__name__)


@dataclass(frozen=True)
class PriceQuote:
    """Breakdown of one price calculation for the live preview."""

    pages: int
    copies: int
    color_mode: ColorMode
    duplex: Duplex
    sheets_per_copy: int
    per_copy: int
    total: int
    reasoning: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pages": self.pages,
            "copies": self.copies,
            "colorMode": self.color_mode.value,
            "duplex": self.duplex.value,
            "sheetsPerCopy": self.sheets_per_copy,
            "perCopy": self.per_copy,
            "total": self.total,
            "reasoning": self.reasoning,
        }


class PricingEngine:
    """
    Computes integer cost in the smallest currency unit.

    Policy per copy:
        color              pages * color_page   (duplex ignored)
        bw, single sided   pages * bw_page
        bw, double sided   (pages // 2) * duplex_sheet + (pages % 2) * bw_page

    Copies multiply the per-copy price. Copies are assumed to be a valid
    positive integer; clamping is the caller's job (see clamp_copies).
    """

    def __init__(
        self,
        color_page: int | None = None,
        bw_page: int | None = None,
        bw_duplex_sheet: int | None = None,
    ) -> None:
        self.color_page = Config.PRICE_COLOR_PAGE if color_page is None else color_page
        self.bw_page = Config.PRICE_BW_PAGE if bw_page is None else bw_page
        self.bw_duplex_sheet = (
            Config.PRICE_BW_DUPLEX_SHEET if bw_duplex_sheet is None else bw_duplex_sheet
        )

    def price(
        self,
        page_count: int,
        color_mode: ColorMode | str,
        duplex: Duplex | str,
        copies: int,
    ) -> int:
        """Total cost for ``copies`` copies of ``page_count`` pages."""
        return self.per_copy_price(page_count, color_mode, duplex) * copies

    def per_copy_price(
        self,
        page_count: int,
        color_mode: ColorMode | str,
        duplex: Duplex | str,
    ) -> int:
        color_mode = ColorMode.parse(color_mode)
        duplex = Duplex.parse(duplex)

        if color_mode is ColorMode.COLOR:
            return page_count * self.color_page
        if duplex is Duplex.SINGLE:
            return page_count * self.bw_page

        full_sheets, leftover = divmod(page_count, 2)
        return full_sheets * self.bw_duplex_sheet + leftover * self.bw_page

    def quote(
        self,
        page_count: int,
        color_mode: ColorMode | str,
        duplex: Duplex | str,
        copies: int,
    ) -> PriceQuote:
        """Price plus the numbers behind it, for showing to the customer."""
        color_mode = ColorMode.parse(color_mode)
        duplex = Duplex.parse(duplex)

        per_copy = self.per_copy_price(page_count, color_mode, duplex)
        total = per_copy * copies
        sheets = self._sheets_per_copy(page_count, color_mode, duplex)

        logger.debug(
            f"Quote: pages={page_count}, mode={color_mode.value}, "
            f"duplex={duplex.value}, copies={copies} -> "
            f"per_copy={per_copy}, total={total}"
        )

        return PriceQuote(
            pages=page_count,
            copies=copies,
            color_mode=color_mode,
            duplex=duplex,
            sheets_per_copy=sheets,
            per_copy=per_copy,
            total=total,
            reasoning=self._build_reasoning(page_count, color_mode, duplex),
        )

    @staticmethod
    def _sheets_per_copy(page_count: int, color_mode: ColorMode, duplex: Duplex) -> int:
        if duplex is Duplex.DOUBLE:
            return (page_count + 1) // 2
        return page_count

    def _build_reasoning(self, page_count: int, color_mode: ColorMode, duplex: Duplex) -> str:
        if page_count == 0:
            return "No pages selected; nothing will be printed."
        if color_mode is ColorMode.COLOR:
            return f"Color pages cost {self.color_page} each, single or double sided."
        if duplex is Duplex.SINGLE:
            return f"Black & white pages cost {self.bw_page} each."
        full_sheets, leftover = divmod(page_count, 2)
        reasoning = (
            f"Double sided black & white: {full_sheets} sheet(s) "
            f"at {self.bw_duplex_sheet} each"
        )
        if leftover:
            reasoning += f", plus 1 single page at {self.bw_page}"
        return reasoning + "."
