"""
Unit tests for settings, layout and queue item models.
"""

import dataclasses

import pytest

from core.exceptions import InvalidSettingsError
from models import (
    ColorMode,
    DocumentJob,
    Duplex,
    ImageAsset,
    ImageLayoutJob,
    PrintSettings,
    QueueItemKind,
    clamp_copies,
    describe_item,
)
from modules.layouts import get_layout


class TestEnums:
    """Test parsing of wire values."""

    def test_color_mode_parse(self):
        """Test wire values and members are accepted."""
        assert ColorMode.parse("color") is ColorMode.COLOR
        assert ColorMode.parse(" BW ") is ColorMode.BLACK_WHITE
        assert ColorMode.parse(ColorMode.COLOR) is ColorMode.COLOR

    def test_duplex_parse(self):
        """Test duplex wire values."""
        assert Duplex.parse("double") is Duplex.DOUBLE
        assert Duplex.parse("Single") is Duplex.SINGLE

    def test_invalid_values(self):
        """Test unknown values raise InvalidSettingsError with the field name."""
        with pytest.raises(InvalidSettingsError) as exc_info:
            ColorMode.parse("sepia")
        assert exc_info.value.field_name == "colorMode"

        with pytest.raises(InvalidSettingsError) as exc_info:
            Duplex.parse(None)
        assert exc_info.value.field_name == "duplex"


class TestClampCopies:
    """Test copy count clamping."""

    @pytest.mark.parametrize("value, expected", [
        (3, 3),
        ("4", 4),
        (0, 1),
        (-5, 1),
        ("abc", 1),
        (None, 1),
        (150, 99),
    ])
    def test_clamp(self, value, expected):
        """Test input is forced into [1, 99]."""
        assert clamp_copies(value, 99) == expected

    def test_no_upper_bound(self):
        """Test no maximum means no cap."""
        assert clamp_copies(500) == 500


class TestPrintSettings:
    """Test the frozen settings model."""

    def test_defaults(self):
        """Test defaults are 1 copy, B&W, single sided, all pages."""
        settings = PrintSettings()
        assert settings.to_dict() == {
            "copies": 1,
            "colorMode": "bw",
            "duplex": "single",
            "pageRange": "all",
        }

    def test_frozen(self):
        """Test settings cannot be mutated after creation."""
        settings = PrintSettings()
        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.copies = 5

    @pytest.mark.parametrize("copies", [0, -1, 2.5, "3", True])
    def test_invalid_copies(self, copies):
        """Test copies must be a positive integer."""
        with pytest.raises(InvalidSettingsError):
            PrintSettings(copies=copies)

    def test_from_dict_camel_case(self):
        """Test the request payload shape."""
        settings = PrintSettings.from_dict({
            "copies": "3",
            "colorMode": "color",
            "duplex": "double",
            "pageRange": "1-4",
        })
        assert settings == PrintSettings(3, ColorMode.COLOR, Duplex.DOUBLE, "1-4")

    def test_from_dict_snake_case_and_clamp(self):
        """Test snake_case keys and copy clamping."""
        settings = PrintSettings.from_dict(
            {"copies": 500, "color_mode": "bw", "page_range": "2"}, max_copies=99
        )
        assert settings.copies == 99
        assert settings.color_mode is ColorMode.BLACK_WHITE
        assert settings.page_range == "2"

    def test_from_dict_bad_mode(self):
        """Test an unknown mode in the payload is rejected."""
        with pytest.raises(InvalidSettingsError):
            PrintSettings.from_dict({"colorMode": "rainbow"})


class TestQueueItems:
    """Test the two queue item kinds."""

    def test_kinds(self):
        """Test each item carries its discriminator."""
        doc = DocumentJob(PrintSettings(), total_pages=3, pages_to_print=3, cost=6)
        photo = ImageLayoutJob(
            layout=get_layout("1x1"),
            images=(ImageAsset("h", "h.png"),),
            copies=1,
            color_mode=ColorMode.COLOR,
            cost=10,
        )
        assert doc.kind is QueueItemKind.DOCUMENT
        assert photo.kind is QueueItemKind.IMAGE_LAYOUT
        assert photo.pages_to_print == 1

    def test_document_to_dict(self):
        """Test the document item wire shape."""
        doc = DocumentJob(
            PrintSettings(copies=2, duplex=Duplex.DOUBLE),
            total_pages=5,
            pages_to_print=5,
            cost=16,
            filename="a.pdf",
        )
        data = doc.to_dict()
        assert data["kind"] == "document"
        assert data["pagesToPrint"] == 5
        assert data["settings"]["duplex"] == "double"
        assert doc.copies == 2

    def test_describe_document(self):
        """Test the one-line description of a document."""
        doc = DocumentJob(
            PrintSettings(copies=1, color_mode=ColorMode.COLOR, page_range="1-3"),
            total_pages=5,
            pages_to_print=3,
            cost=30,
        )
        assert describe_item(doc) == "1 copy • 1-3 • Color • Single"

    def test_describe_layout(self):
        """Test the one-line description of a photo layout."""
        photo = ImageLayoutJob(
            layout=get_layout("2x2"),
            images=(ImageAsset("a", "a.png"), ImageAsset("b", "b.png")),
            copies=3,
            color_mode=ColorMode.BLACK_WHITE,
            cost=6,
        )
        assert describe_item(photo) == "2x2 layout • 2 image(s) • 3 copies • B&W"

    def test_describe_unknown(self):
        """Test anything else fails loudly."""
        with pytest.raises(TypeError):
            describe_item({"kind": "document"})

    def test_image_asset_round_trip(self):
        """Test ImageAsset survives to_dict/from_dict."""
        asset = ImageAsset("/up/x.png", "x.png", 640, 480)
        assert ImageAsset.from_dict(asset.to_dict()) == asset
