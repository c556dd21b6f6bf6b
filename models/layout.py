"""
Photo layout models.

A Layout is a fixed grid; an ImageAsset is a handle to one uploaded image.
Layouts never own assets, they only reference a subset of the session's
uploads in the order the customer picked them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class Layout:
    """A columns x rows grid on one output page."""

    id: str
    columns: int
    rows: int

    @property
    def capacity(self) -> int:
        """Number of image cells in the grid."""
        return self.columns * self.rows

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "columns": self.columns,
            "rows": self.rows,
            "capacity": self.capacity,
        }


@dataclass(frozen=True)
class ImageAsset:
    """
    One uploaded image.

    ``handle`` is opaque to the engine; the image store resolves it to
    bytes. Two uploads of the same file are distinct assets.
    """

    handle: str
    """Stored path (or any key the image source understands)."""

    name: str
    """Display name, already sanitized."""

    width: Optional[int] = None
    """Pixel width if known at upload time."""

    height: Optional[int] = None
    """Pixel height if known at upload time."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "handle": self.handle,
            "name": self.name,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImageAsset":
        return cls(
            handle=data.get("handle", ""),
            name=data.get("name", ""),
            width=data.get("width"),
            height=data.get("height"),
        )
