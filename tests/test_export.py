"""
Tests for format parsing and image encoding
"""
import pytest
from PIL import Image, features

from vec2x.export import ExportFormat, ImageExporter, parse_formats

requires_avif = pytest.mark.skipif(not features.check("avif"), reason="Pillow built without AVIF")


@pytest.fixture
def rgba_image():
    image = Image.new("RGBA", (16, 8), (0, 0, 0, 0))
    image.paste((255, 0, 0, 255), (0, 0, 8, 8))
    return image


class TestExportFormat:
    """Test format enum"""

    def test_format_values(self):
        assert [f.value for f in ExportFormat] == ["avif", "jpeg", "png", "tiff", "webp"]

    def test_alpha_channel(self):
        assert not ExportFormat.JPEG.has_alpha_channel
        assert all(f.has_alpha_channel for f in ExportFormat if f is not ExportFormat.JPEG)

    def test_parse_is_case_insensitive(self):
        assert ExportFormat.parse(" PNG ") is ExportFormat.PNG

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            ExportFormat.parse("gif")


class TestParseFormats:
    """Test format list handling"""

    def test_default_is_all_formats(self):
        assert parse_formats(None) == list(ExportFormat)
        assert parse_formats([]) == list(ExportFormat)

    def test_duplicates_removed_in_order(self):
        assert parse_formats(["webp", "png", "WEBP", "png"]) == [ExportFormat.WEBP, ExportFormat.PNG]


class TestImageExporter:
    """Test encoding to disk"""

    def test_creates_output_dir(self, tmp_path):
        target = tmp_path / "a" / "b"
        ImageExporter(output_dir=target)
        assert target.is_dir()

    def test_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert ImageExporter().output_dir == tmp_path

    @pytest.mark.parametrize(
        "fmt,mode",
        [
            (ExportFormat.PNG, "RGBA"),
            (ExportFormat.TIFF, "RGBA"),
            (ExportFormat.WEBP, "RGBA"),
            (ExportFormat.JPEG, "RGB"),
            pytest.param(ExportFormat.AVIF, "RGBA", marks=requires_avif),
        ],
    )
    def test_export(self, output_dir, rgba_image, fmt, mode):
        path = ImageExporter(output_dir).export(rgba_image, "icon", fmt)

        assert path == output_dir / f"icon.{fmt.extension}"
        with Image.open(path) as written:
            assert written.format == fmt.name
            assert written.size == (16, 8)
            assert written.mode == mode

    def test_png_is_lossless(self, output_dir, rgba_image):
        path = ImageExporter(output_dir).export(rgba_image, "icon", "png")
        with Image.open(path) as written:
            assert written.getpixel((2, 2)) == (255, 0, 0, 255)
            assert written.getpixel((12, 2)) == (0, 0, 0, 0)

