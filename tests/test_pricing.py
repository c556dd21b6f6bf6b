"""
Unit tests for the pricing engine.

Prices are integers in the smallest currency unit. Duplex only matters in
black & white, where two pages share a cheaper sheet.
"""

import pytest

from core.exceptions import InvalidSettingsError
from models.settings import ColorMode, Duplex
from modules.pricing import PricingEngine


# Fixtures

@pytest.fixture
def pricing():
    """Create a pricing engine with the default rates (10 / 2 / 3)."""
    return PricingEngine(color_page=10, bw_page=2, bw_duplex_sheet=3)


# Tests for the price table

class TestPrice:
    """Test price() against the published rates."""

    def test_color_single(self, pricing):
        """Test color pages cost 10 each."""
        assert pricing.price(5, ColorMode.COLOR, Duplex.SINGLE, 1) == 50

    def test_color_ignores_duplex(self, pricing):
        """Test color duplex costs the same as color single."""
        assert pricing.price(5, ColorMode.COLOR, Duplex.DOUBLE, 1) == 50

    def test_bw_single(self, pricing):
        """Test black & white pages cost 2 each."""
        assert pricing.price(5, ColorMode.BLACK_WHITE, Duplex.SINGLE, 1) == 10

    def test_bw_double_with_leftover(self, pricing):
        """Test 5 pages double sided: 2 sheets x 3 + 1 page x 2."""
        assert pricing.price(5, ColorMode.BLACK_WHITE, Duplex.DOUBLE, 1) == 8

    def test_bw_double_even(self, pricing):
        """Test 4 pages double sided: 2 sheets x 3."""
        assert pricing.price(4, ColorMode.BLACK_WHITE, Duplex.DOUBLE, 1) == 6

    def test_bw_double_single_page(self, pricing):
        """Test a single page double sided is charged as a single page."""
        assert pricing.price(1, ColorMode.BLACK_WHITE, Duplex.DOUBLE, 1) == 2

    def test_copies_multiply(self, pricing):
        """Test copies multiply the per-copy price."""
        assert pricing.price(5, ColorMode.BLACK_WHITE, Duplex.DOUBLE, 3) == 24

    def test_zero_pages_cost_nothing(self, pricing):
        """Test an empty selection prices as zero."""
        for mode in ColorMode:
            for duplex in Duplex:
                assert pricing.price(0, mode, duplex, 4) == 0

    def test_wire_values_accepted(self, pricing):
        """Test "color" / "bw" / "single" / "double" strings are accepted."""
        assert pricing.price(3, "bw", "double", 2) == 10
        assert pricing.price(3, "color", "single", 1) == 30

    def test_unknown_mode_rejected(self, pricing):
        """Test an unknown color mode raises InvalidSettingsError."""
        with pytest.raises(InvalidSettingsError):
            pricing.price(3, "sepia", "single", 1)

    def test_custom_rates(self):
        """Test rates can be overridden at construction."""
        engine = PricingEngine(color_page=25, bw_page=5, bw_duplex_sheet=8)
        assert engine.price(3, ColorMode.BLACK_WHITE, Duplex.DOUBLE, 1) == 13
        assert engine.price(2, ColorMode.COLOR, Duplex.SINGLE, 2) == 100

    def test_default_rates_from_config(self):
        """Test an engine without arguments uses the configured rates."""
        engine = PricingEngine()
        assert engine.price(5, ColorMode.COLOR, Duplex.SINGLE, 1) == 50


# Tests for quotes

class TestQuote:
    """Test quote() breakdowns."""

    def test_quote_matches_price(self, pricing):
        """Test the quoted total equals price()."""
        quote = pricing.quote(5, "bw", "double", 3)

        assert quote.total == 24
        assert quote.per_copy == 8
        assert quote.sheets_per_copy == 3
        assert quote.color_mode is ColorMode.BLACK_WHITE
        assert quote.duplex is Duplex.DOUBLE

    def test_quote_reasoning_mentions_leftover(self, pricing):
        """Test the reasoning explains the unpaired page."""
        quote = pricing.quote(5, "bw", "double", 1)
        assert "1 single page" in quote.reasoning

    def test_quote_zero_pages(self, pricing):
        """Test the zero-page quote says nothing will be printed."""
        quote = pricing.quote(0, "color", "single", 1)
        assert quote.total == 0
        assert "nothing will be printed" in quote.reasoning

    def test_quote_to_dict(self, pricing):
        """Test the wire shape of a quote."""
        data = pricing.quote(2, "color", "single", 2).to_dict()

        assert data["total"] == 40
        assert data["perCopy"] == 20
        assert data["colorMode"] == "color"
        assert data["duplex"] == "single"
        assert data["sheetsPerCopy"] == 2
