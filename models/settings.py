"""
Print settings models.

PrintSettings is what the customer picks for a document: copies, color
mode, duplex and the page range text. It is frozen so that the copy
attached to a queued job cannot drift from the price snapshotted with it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Optional

from core.exceptions import InvalidSettingsError


class ColorMode(Enum):
    """Color mode of a print job."""

    COLOR = "color"
    """Full color, priced per page regardless of duplex."""

    BLACK_WHITE = "bw"
    """Black & white; duplex pairs pages onto cheaper sheets."""

    @classmethod
    def parse(cls, value: Any) -> "ColorMode":
        """Accept an enum member or its wire value ("color" / "bw")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidSettingsError("colorMode", value) from None


class Duplex(Enum):
    """Single- or double-sided printing."""

    SINGLE = "single"
    DOUBLE = "double"

    @classmethod
    def parse(cls, value: Any) -> "Duplex":
        """Accept an enum member or its wire value ("single" / "double")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidSettingsError("duplex", value) from None


def clamp_copies(value: Any, maximum: Optional[int] = None) -> int:
    """
    Turn user input into a valid copy count.

    Anything unparseable or below 1 becomes 1; values above ``maximum``
    (when given) are capped.
    """
    try:
        copies = int(value)
    except (TypeError, ValueError):
        copies = 1
    copies = max(1, copies)
    if maximum is not None:
        copies = min(copies, maximum)
    return copies


@dataclass(frozen=True)
class PrintSettings:
    """
    Customer's choices for one document.

    Immutable once attached to a queued job; change settings by removing
    the job and queueing it again.
    """

    copies: int = 1
    """Number of copies, always >= 1."""

    color_mode: ColorMode = ColorMode.BLACK_WHITE
    """Color or black & white."""

    duplex: Duplex = Duplex.SINGLE
    """Single or double sided."""

    page_range: str = "all"
    """Raw page range text as typed, e.g. "1-3, 7"."""

    def __post_init__(self):
        if isinstance(self.copies, bool) or not isinstance(self.copies, int):
            raise InvalidSettingsError("copies", self.copies)
        if self.copies < 1:
            raise InvalidSettingsError("copies", self.copies)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire/session shape."""
        return {
            "copies": self.copies,
            "colorMode": self.color_mode.value,
            "duplex": self.duplex.value,
            "pageRange": self.page_range,
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        max_copies: Optional[int] = None
    ) -> "PrintSettings":
        """
        Create from a request payload or session dict.

        Both camelCase and snake_case keys are accepted. Copies are clamped
        to [1, max_copies] the way the kiosk form does it.
        """
        color_mode = data.get("colorMode", data.get("color_mode", "bw"))
        duplex = data.get("duplex", "single")
        page_range = data.get("pageRange", data.get("page_range", "all"))
        return cls(
            copies=clamp_copies(data.get("copies", 1), max_copies),
            color_mode=ColorMode.parse(color_mode),
            duplex=Duplex.parse(duplex),
            page_range=str(page_range if page_range is not None else "all"),
        )
