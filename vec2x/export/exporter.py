"""
Image Exporter - Encodes raster images to various formats
"""
from pathlib import Path
from typing import Union, Optional, List, Iterable
from enum import Enum
import logging

from PIL import Image

logger = logging.getLogger(__name__)


class ExportFormat(Enum):
    AVIF = "avif"         # AV1 still image
    JPEG = "jpeg"         # Lossy, no transparency
    PNG = "png"           # Lossless
    TIFF = "tiff"         # Print/archival
    WEBP = "webp"         # Web

    @property
    def extension(self) -> str:
        return self.value

    @property
    def has_alpha_channel(self) -> bool:
        return self is not ExportFormat.JPEG

    @classmethod
    def parse(cls, value: Union["ExportFormat", str]) -> "ExportFormat":
        if isinstance(value, cls):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"Unsupported format: {value!r} "
                f"(expected one of {', '.join(f.value for f in cls)})"
            ) from None


def parse_formats(values: Optional[Iterable[Union[ExportFormat, str]]]) -> List[ExportFormat]:
    """
    Parse requested formats, dropping duplicates in order of first appearance.

    An empty or missing request means every supported format.
    """
    if not values:
        return list(ExportFormat)

    formats = []
    for value in values:
        fmt = ExportFormat.parse(value)
        if fmt not in formats:
            formats.append(fmt)
    return formats


class ImageExporter:
    """
    Writes rendered images with Pillow's default encoder settings.

    Supported formats:
    - AVIF: Requires Pillow built with libavif
    - JPEG: Alpha is dropped, the background must already be applied
    - PNG, TIFF, WebP: Saved as RGBA
    """

    def __init__(self, output_dir: Union[str, Path] = None):
        self.output_dir = Path(output_dir) if output_dir else Path.cwd()
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def output_path(self, filename: str, format: ExportFormat) -> Path:
        return self.output_dir / f"{filename}.{format.extension}"

    def export(
        self,
        image: Image.Image,
        filename: str,
        format: Union[ExportFormat, str],
    ) -> Path:
        """
        Export image to specified format.

        Args:
            image: RGBA image to encode
            filename: Output filename (without extension)
            format: Target format

        Returns:
            Path to exported file
        """
        format = ExportFormat.parse(format)
        output_path = self.output_path(filename, format)

        logger.debug(f"Exporting to {format.value}: {output_path}")

        exporters = {
            ExportFormat.AVIF: self._export_avif,
            ExportFormat.JPEG: self._export_jpeg,
            ExportFormat.PNG: self._export_png,
            ExportFormat.TIFF: self._export_tiff,
            ExportFormat.WEBP: self._export_webp,
        }

        exporter = exporters.get(format)
        if not exporter:
            raise ValueError(f"Unsupported format: {format}")

        exporter(image, output_path)
        return output_path

    def _export_avif(self, image: Image.Image, path: Path):
        image.convert("RGBA").save(path, format="AVIF")

    def _export_jpeg(self, image: Image.Image, path: Path):
        image.convert("RGB").save(path, format="JPEG")

    def _export_png(self, image: Image.Image, path: Path):
        image.convert("RGBA").save(path, format="PNG")

    def _export_tiff(self, image: Image.Image, path: Path):
        image.convert("RGBA").save(path, format="TIFF")

    def _export_webp(self, image: Image.Image, path: Path):
        image.convert("RGBA").save(path, format="WEBP")
