"""
SVG Rasterizer - Renders SVG documents to RGBA images with CairoSVG
"""
from dataclasses import dataclass
from typing import Optional
import io
import logging
import math

import cairosvg
from cairosvg.helpers import node_format
from cairosvg.parser import Tree
from PIL import Image

from .color import Color

logger = logging.getLogger(__name__)


class _SizingContext:
    """Surface attributes CairoSVG's unit helpers read, at CSS defaults"""
    dpi = 96
    font_size = 16  # 12pt
    context_width = None
    context_height = None


@dataclass(frozen=True)
class RasterSize:
    """Output raster dimensions in pixels"""
    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def resolve_size(
    base: RasterSize,
    width: Optional[int] = None,
    height: Optional[int] = None,
    scale: float = 1.0,
) -> RasterSize:
    """
    Resolve final raster dimensions.

    Explicit width/height win over scale. When only one of them is given,
    the other follows the document's aspect ratio (truncated). Without
    either, both sides are scaled and rounded.

    Args:
        base: Intrinsic size of the document
        width: Requested width in pixels
        height: Requested height in pixels
        scale: Scale factor, used only when width and height are absent

    Returns:
        RasterSize with both sides at least 1 pixel
    """
    if base.width <= 0 or base.height <= 0:
        raise ValueError(f"SVG has an empty intrinsic size: {base}")

    if width is not None or height is not None:
        if width is None:
            width = int(base.width * (height / base.height))
        if height is None:
            height = int(base.height * (width / base.width))
    else:
        if scale <= 0:
            raise ValueError(f"Scale must be positive, got {scale}")
        width = _round_half_up(base.width * scale)
        height = _round_half_up(base.height * scale)

    if width <= 0 or height <= 0:
        raise ValueError(f"Output size must not be zero, got {width}x{height}")

    return RasterSize(width, height)


class SvgRasterizer:
    """
    Vector to raster conversion backed by CairoSVG.

    Rendering always happens on a transparent canvas; backgrounds are
    composited afterwards so one rendering can serve several formats.
    """

    def _render(self, data: bytes, size: RasterSize) -> Image.Image:
        png = cairosvg.svg2png(
            bytestring=data,
            output_width=size.width,
            output_height=size.height,
        )
        image = Image.open(io.BytesIO(png))
        image.load()
        return image.convert("RGBA")

    def intrinsic_size(self, data: bytes) -> RasterSize:
        """
        Document size in pixels, rounded up.

        Only the root element is measured; nothing is drawn.
        """
        tree = Tree(bytestring=data)
        width, height, _ = node_format(_SizingContext(), tree)
        return RasterSize(int(math.ceil(width)), int(math.ceil(height)))

    def rasterize(self, data: bytes, size: RasterSize, base: RasterSize) -> Image.Image:
        """
        Render an SVG document at the given size.

        The document is stretched when `size` does not share the aspect
        ratio of `base`: it is drawn uniformly at the larger of the two
        scale factors, then resampled to `size`.

        Returns:
            Transparent RGBA image of exactly `size`
        """
        factor = max(size.width / base.width, size.height / base.height)
        uniform = RasterSize(
            max(1, _round_half_up(base.width * factor)),
            max(1, _round_half_up(base.height * factor)),
        )
        logger.debug(f"Rendering SVG at {uniform} for {size}")
        image = self._render(data, uniform)

        if image.size != (size.width, size.height):
            image = image.resize((size.width, size.height), Image.Resampling.LANCZOS)

        return image

    @staticmethod
    def fill_background(image: Image.Image, color: Color) -> Image.Image:
        """Composite a rendered image over a solid background color"""
        if color.a == 0:
            return image.copy()
        background = Image.new("RGBA", image.size, tuple(color))
        return Image.alpha_composite(background, image)
