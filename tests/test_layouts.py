"""
Unit tests for the layout catalog and per-session image selection.
"""

import threading

import pytest

from core.exceptions import CapacityExceededError, UnknownLayoutError
from models.layout import ImageAsset
from modules.layouts import (
    DEFAULT_LAYOUT,
    LayoutSelection,
    get_layout,
    list_layouts,
    select_layout,
)


# Fixtures

@pytest.fixture
def assets():
    """Create five uploaded image handles, in upload order."""
    return [ImageAsset(handle=f"/uploads/img{i}.png", name=f"img{i}.png") for i in range(5)]


# Tests for the catalog

class TestCatalog:
    """Test the fixed layout catalog."""

    def test_catalog_order_and_capacity(self):
        """Test the catalog lists 1x1, 2x1, 2x2, 3x3 with their capacities."""
        layouts = list_layouts()
        assert [layout.id for layout in layouts] == ["1x1", "2x1", "2x2", "3x3"]
        assert [layout.capacity for layout in layouts] == [1, 2, 4, 9]

    def test_default_layout(self):
        """Test the first catalog entry is the default."""
        assert DEFAULT_LAYOUT.id == "1x1"

    def test_get_layout(self):
        """Test lookup by id."""
        layout = get_layout("2x1")
        assert (layout.columns, layout.rows) == (2, 1)

    def test_unknown_layout(self):
        """Test an unknown id raises UnknownLayoutError naming the catalog."""
        with pytest.raises(UnknownLayoutError) as exc_info:
            get_layout("4x4")
        assert exc_info.value.details["known_layouts"] == ["1x1", "2x1", "2x2", "3x3"]


# Tests for select_layout()

class TestSelectLayout:
    """Test selection after a layout switch."""

    def test_takes_first_n_available(self, assets):
        """Test the selection is the first capacity assets in upload order."""
        assert select_layout(get_layout("2x2"), assets) == assets[:4]

    def test_fewer_assets_than_capacity(self, assets):
        """Test a large grid takes every available asset."""
        assert select_layout(get_layout("3x3"), assets) == assets

    def test_previous_selection_ignored(self, assets):
        """Test shrinking reseeds from the pool, not from the previous selection."""
        previous = [assets[4], assets[2], assets[3]]
        selected = select_layout(get_layout("2x1"), assets, previous)
        assert selected == [assets[0], assets[1]]

    def test_no_assets(self):
        """Test an empty pool gives an empty selection."""
        assert select_layout(get_layout("2x2"), []) == []


# Tests for LayoutSelection

class TestLayoutSelection:
    """Test the stateful selection held by a kiosk session."""

    def test_snapshot_consistent_under_concurrent_switch(self, assets):
        """Test snapshot() never pairs one layout with another layout's selection."""
        selection = LayoutSelection(assets)
        small, large = get_layout("1x1"), get_layout("3x3")
        stop = threading.Event()

        def switch_back_and_forth():
            while not stop.is_set():
                selection.select_layout(large)
                selection.select_layout(small)

        switcher = threading.Thread(target=switch_back_and_forth)
        switcher.start()
        try:
            for _ in range(2000):
                layout, images = selection.snapshot()
                assert len(images) == min(layout.capacity, len(assets))
        finally:
            stop.set()
            switcher.join()

    def test_initial_state(self, assets):
        """Test a new selection starts on 1x1 with the first upload."""
        selection = LayoutSelection(assets)
        assert selection.layout.id == "1x1"
        assert selection.selected == [assets[0]]

    def test_switch_discards_manual_edits(self, assets):
        """Test a switch after manual edits reseeds from the upload pool."""
        selection = LayoutSelection(assets, layout=get_layout("3x3"))
        selection.remove_image(0)
        selection.remove_image(0)
        assert selection.selected[0] == assets[2]

        selection.select_layout(get_layout("2x1"))
        assert selection.selected == [assets[0], assets[1]]

    def test_add_until_full(self, assets):
        """Test add_image() is a no-op once the grid is full."""
        selection = LayoutSelection([], layout=get_layout("2x1"))
        assert selection.add_image(assets[0]) is True
        assert selection.add_image(assets[1]) is True
        assert selection.is_full
        assert selection.add_image(assets[2]) is False
        assert selection.selected == [assets[0], assets[1]]

    def test_add_strict_raises(self, assets):
        """Test strict mode raises instead of ignoring the extra image."""
        selection = LayoutSelection(assets, strict=True)
        with pytest.raises(CapacityExceededError) as exc_info:
            selection.add_image(assets[1])
        assert exc_info.value.capacity == 1
        assert exc_info.value.requested == 2

    def test_same_asset_may_repeat(self, assets):
        """Test the same upload can fill several cells."""
        selection = LayoutSelection([], layout=get_layout("2x2"))
        selection.add_image(assets[0])
        selection.add_image(assets[0])
        assert selection.selected == [assets[0], assets[0]]

    def test_remove_does_not_refill(self, assets):
        """Test removing an image leaves the cell empty."""
        selection = LayoutSelection(assets, layout=get_layout("2x2"))
        assert selection.remove_image(1) is True
        assert selection.selected == [assets[0], assets[2], assets[3]]
        assert not selection.is_full

    def test_remove_out_of_range(self, assets):
        """Test removing a missing index is a no-op."""
        selection = LayoutSelection(assets)
        assert selection.remove_image(5) is False
        assert selection.remove_image(-1) is False
        assert selection.selected == [assets[0]]

    def test_set_available_reseeds(self, assets):
        """Test new uploads reseed the current layout."""
        selection = LayoutSelection([], layout=get_layout("2x2"))
        assert selection.selected == []

        selection.set_available(assets[:3])
        assert selection.selected == assets[:3]

    def test_selected_is_a_copy(self, assets):
        """Test callers cannot mutate the selection through the property."""
        selection = LayoutSelection(assets)
        selection.selected.clear()
        assert selection.selected == [assets[0]]

    def test_to_dict(self, assets):
        """Test the wire shape."""
        data = LayoutSelection(assets[:2], layout=get_layout("2x1")).to_dict()
        assert data["layout"]["id"] == "2x1"
        assert [a["name"] for a in data["selected"]] == ["img0.png", "img1.png"]
        assert len(data["available"]) == 2
