# Export module
# Encodes raster images in various formats:
# - AVIF (modern, lossy)
# - JPEG (no alpha channel)
# - PNG (lossless)
# - TIFF (print/archival)
# - WebP (web friendly)

from .exporter import ExportFormat, ImageExporter, parse_formats

__all__ = ["ExportFormat", "ImageExporter", "parse_formats"]
