"""
vec2x - Convert a vector image into raster formats
"""

__version__ = "0.1.0"
