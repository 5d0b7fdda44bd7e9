# Rasterization module
# Converts SVG documents into RGBA pixel grids:
# - Background color parsing (#RRGGBB / #RRGGBBAA)
# - Output size resolution from width/height/scale
# - Rendering via CairoSVG

from .color import Color, parse_color, TRANSPARENT, WHITE
from .rasterizer import RasterSize, SvgRasterizer, resolve_size

__all__ = [
    "Color",
    "parse_color",
    "TRANSPARENT",
    "WHITE",
    "RasterSize",
    "SvgRasterizer",
    "resolve_size",
]
