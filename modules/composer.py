"""
Photo layout composition.

Places the selected images of a layout into the grid cells of a single
A4 page and exports it as PDF. Geometry is expressed in millimetres with
the origin at the top-left corner of the page:

    cell_w = (W - 2m) / columns        cell_h = (H - 2m) / rows
    image i -> row = i // columns, col = i % columns
    drawn rect = (m + col*cell_w + p, m + row*cell_h + p, cell_w - 2p, cell_h - 2p)

Images are stretched to fill the drawn rect exactly; aspect ratio is not
preserved.

Images are processed strictly one at a time: load -> decode -> grayscale
(black & white only) -> embed, and only then the next one. At most one
full-resolution raster is held in memory and the placement order always
equals the selection order. If any image fails, the whole composition
fails and the half-built page is thrown away.

The rendering backend is injected (PageRenderer) so the composer can be
exercised without reportlab; ReportLabRenderer is the production one.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

import numpy as np
from PIL import Image
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from config import Config
from core.exceptions import (
    CapacityExceededError,
    CompositionError,
    DecodeError,
    EmptySelectionError,
)
from logging_config import get_logger
from models.layout import ImageAsset, Layout
from models.settings import ColorMode


logger = get_logger(__name__)

# ITU-R 601 luma weights, scaled to integers so the result is exact
LUMA_WEIGHTS = (299, 587, 114)
LUMA_SCALE = 1000


# =============================================================================
# GEOMETRY
# =============================================================================

@dataclass(frozen=True)
class PageGeometry:
    """Physical page size, outer margin and per-cell padding, in mm."""

    width: float = 210.0
    height: float = 297.0
    margin: float = 10.0
    padding: float = 2.0

    @classmethod
    def from_config(cls) -> "PageGeometry":
        return cls(
            width=Config.PAGE_WIDTH_MM,
            height=Config.PAGE_HEIGHT_MM,
            margin=Config.PAGE_MARGIN_MM,
            padding=Config.CELL_PADDING_MM,
        )


@dataclass(frozen=True)
class Rect:
    """Rectangle in page coordinates (mm, top-left origin)."""

    x: float
    y: float
    width: float
    height: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class Placement:
    """Where one selected image ended up on the page."""

    index: int
    asset_name: str
    rect: Rect

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, "asset": self.asset_name, "rect": self.rect.to_dict()}


def cell_size(layout: Layout, geometry: PageGeometry) -> Tuple[float, float]:
    """Width and height of one grid cell, padding included."""
    cell_width = (geometry.width - 2 * geometry.margin) / layout.columns
    cell_height = (geometry.height - 2 * geometry.margin) / layout.rows
    return cell_width, cell_height


def placement_rect(index: int, layout: Layout, geometry: PageGeometry) -> Rect:
    """
    Drawn rectangle for the image at flattened grid position ``index``.

    Raises:
        CapacityExceededError: If index does not fit in the grid
    """
    if index < 0 or index >= layout.capacity:
        raise CapacityExceededError(layout.id, layout.capacity, index + 1)

    cell_width, cell_height = cell_size(layout, geometry)
    row, col = divmod(index, layout.columns)
    x = geometry.margin + col * cell_width
    y = geometry.margin + row * cell_height
    padding = geometry.padding
    return Rect(
        x=x + padding,
        y=y + padding,
        width=cell_width - 2 * padding,
        height=cell_height - 2 * padding,
    )


def grid_rects(layout: Layout, geometry: PageGeometry) -> List[Rect]:
    """Drawn rectangles of every cell, row by row."""
    return [placement_rect(i, layout, geometry) for i in range(layout.capacity)]


# =============================================================================
# PIXEL TRANSFORMS
# =============================================================================

def normalize_mode(image: Image.Image) -> Image.Image:
    """Bring any decoded image to RGB, or RGBA when it carries transparency."""
    has_alpha = "A" in image.getbands() or "transparency" in image.info
    target = "RGBA" if has_alpha else "RGB"
    if image.mode == target:
        return image
    return image.convert(target)


def to_grayscale(image: Image.Image) -> Image.Image:
    """
    Luminance-weighted desaturation.

    gray = 0.299 R + 0.587 G + 0.114 B, rounded half up, written to all
    three color channels. Alpha is left untouched. Integer arithmetic keeps
    the output identical on every platform.

    Browser canvas pixel arrays (Uint8ClampedArray) round exact halves to
    even instead, so the two can differ by one level: (0, 0, 250) has luma
    28.5 and becomes 29 here but 28 in a browser.
    """
    image = normalize_mode(image)
    pixels = np.asarray(image, dtype=np.uint32)

    red_weight, green_weight, blue_weight = LUMA_WEIGHTS
    gray = (
        pixels[..., 0] * red_weight
        + pixels[..., 1] * green_weight
        + pixels[..., 2] * blue_weight
        + LUMA_SCALE // 2
    ) // LUMA_SCALE

    result = pixels.copy()
    result[..., 0] = gray
    result[..., 1] = gray
    result[..., 2] = gray
    return Image.fromarray(result.astype(np.uint8))


# =============================================================================
# COLLABORATORS
# =============================================================================

class ImageSource(Protocol):
    """Resolves an asset handle to its encoded bytes."""

    def load(self, asset: ImageAsset) -> bytes:
        ...


class PageRenderer(Protocol):
    """Decode, place and export capability used by the composer."""

    def decode(self, data: bytes) -> Image.Image:
        ...

    def new_page(self, geometry: PageGeometry) -> Any:
        ...

    def embed(self, page: Any, image: Image.Image, rect: Rect) -> None:
        ...

    def export(self, page: Any) -> bytes:
        ...


@dataclass
class _ReportLabPage:
    pdf: canvas.Canvas
    buffer: BytesIO
    geometry: PageGeometry


class ReportLabRenderer:
    """Pillow for decoding, reportlab for the PDF page."""

    def __init__(self, jpeg_quality: Optional[int] = None) -> None:
        self.jpeg_quality = Config.COMPOSE_JPEG_QUALITY if jpeg_quality is None else jpeg_quality

    def decode(self, data: bytes) -> Image.Image:
        image = Image.open(BytesIO(data))
        # Force the full decode now so truncated files fail here
        image.load()
        return normalize_mode(image)

    def new_page(self, geometry: PageGeometry) -> _ReportLabPage:
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=(geometry.width * mm, geometry.height * mm))
        return _ReportLabPage(pdf=pdf, buffer=buffer, geometry=geometry)

    def embed(self, page: _ReportLabPage, image: Image.Image, rect: Rect) -> None:
        # reportlab measures y from the bottom edge
        bottom = page.geometry.height - rect.y - rect.height
        if image.mode == "RGBA":
            reader = ImageReader(image)
            mask = "auto"
        else:
            encoded = BytesIO()
            image.save(encoded, format="JPEG", quality=self.jpeg_quality)
            encoded.seek(0)
            reader = ImageReader(encoded)
            mask = None
        page.pdf.drawImage(
            reader,
            rect.x * mm,
            bottom * mm,
            width=rect.width * mm,
            height=rect.height * mm,
            mask=mask,
        )

    def export(self, page: _ReportLabPage) -> bytes:
        page.pdf.showPage()
        page.pdf.save()
        return page.buffer.getvalue()


# =============================================================================
# COMPOSER
# =============================================================================

@dataclass(frozen=True)
class OutputDocument:
    """A composed, exported photo layout page."""

    data: bytes
    layout_id: str
    color_mode: ColorMode
    placements: Tuple[Placement, ...]
    filename: str
    content_type: str = "application/pdf"
    page_count: int = 1

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "layout": self.layout_id,
            "colorMode": self.color_mode.value,
            "placements": [p.to_dict() for p in self.placements],
            "pageCount": self.page_count,
            "sizeBytes": self.size_bytes,
        }


class DocumentComposer:
    """Composes selected images into one grid page."""

    def __init__(
        self,
        image_source: ImageSource,
        renderer: Optional[PageRenderer] = None,
        geometry: Optional[PageGeometry] = None,
    ) -> None:
        self.image_source = image_source
        self.renderer = renderer or ReportLabRenderer()
        self.geometry = geometry or PageGeometry.from_config()

    def compose(
        self,
        selected_assets: Sequence[ImageAsset],
        layout: Layout,
        color_mode: ColorMode | str,
        filename: Optional[str] = None,
    ) -> OutputDocument:
        """
        Build the page for ``selected_assets`` on ``layout``.

        Cells beyond the number of selected images stay empty.

        Raises:
            EmptySelectionError: No image selected
            CapacityExceededError: More images than grid cells
            DecodeError: An image could not be loaded or decoded
            CompositionError: Placing or exporting failed
        """
        color_mode = ColorMode.parse(color_mode)
        assets = list(selected_assets)
        if not assets:
            raise EmptySelectionError(layout.id)
        if len(assets) > layout.capacity:
            raise CapacityExceededError(layout.id, layout.capacity, len(assets))

        grayscale = color_mode is ColorMode.BLACK_WHITE
        logger.info(
            f"Composing {len(assets)} image(s) on layout {layout.id} "
            f"({'grayscale' if grayscale else 'color'})"
        )

        page = self._new_page(layout)
        placements: List[Placement] = []

        for index, asset in enumerate(assets):
            rect = placement_rect(index, layout, self.geometry)
            decoded = self._decode(asset, index, layout)
            image = decoded
            try:
                if grayscale:
                    image = to_grayscale(decoded)
                self.renderer.embed(page, image, rect)
            except CompositionError:
                raise
            except Exception as exc:
                raise CompositionError(
                    f"Failed to place image '{asset.name}': {exc}",
                    layout.id,
                    {"index": index, "asset": asset.name},
                ) from exc
            finally:
                if image is not decoded:
                    image.close()
                decoded.close()

            placements.append(Placement(index=index, asset_name=asset.name, rect=rect))
            logger.debug(f"Placed {asset.name} at cell {index}: {rect}")

        try:
            data = self.renderer.export(page)
        except Exception as exc:
            raise CompositionError(f"Failed to export page: {exc}", layout.id) from exc

        output = OutputDocument(
            data=data,
            layout_id=layout.id,
            color_mode=color_mode,
            placements=tuple(placements),
            filename=filename or f"photo-print-{layout.id}-{int(time.time() * 1000)}.pdf",
        )
        logger.info(f"Composed {output.filename} ({output.size_bytes} bytes)")
        return output

    def _new_page(self, layout: Layout) -> Any:
        try:
            return self.renderer.new_page(self.geometry)
        except Exception as exc:
            raise CompositionError(f"Failed to start page: {exc}", layout.id) from exc

    def _decode(self, asset: ImageAsset, index: int, layout: Layout) -> Image.Image:
        try:
            data = self.image_source.load(asset)
            return self.renderer.decode(data)
        except DecodeError:
            raise
        except Exception as exc:
            logger.warning(f"Decode failed for {asset.name} at cell {index}: {exc}")
            raise DecodeError(asset.name, str(exc), index, layout.id) from exc
