# Ingestion module
# Resolves where the SVG comes from and reads it:
# - Files on disk (must carry a .svg extension)
# - Standard input, requested with "-"

from .loader import InputSource, LoadedSvg, SvgLoader

__all__ = ["InputSource", "LoadedSvg", "SvgLoader"]
