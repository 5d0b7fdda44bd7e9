"""
SVG Loader - Reads the vector input from a file or stdin
"""
from pathlib import Path
from typing import Union, Optional, BinaryIO
from dataclasses import dataclass
import logging
import sys

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


@dataclass(frozen=True)
class InputSource:
    """Either standard input or a non-empty path"""
    path: Optional[Path] = None

    @property
    def is_stdin(self) -> bool:
        return self.path is None

    @classmethod
    def parse(cls, value: Union[str, Path]) -> "InputSource":
        """Build a source from a CLI value, treating '-' as stdin"""
        value = str(value)
        if not value:
            raise ValueError("Input must not be empty")
        if value == STDIN_MARKER:
            return cls()
        return cls(path=Path(value))

    def __str__(self) -> str:
        return "<stdin>" if self.is_stdin else str(self.path)


@dataclass
class LoadedSvg:
    """Container for loaded SVG data"""
    source: InputSource
    data: bytes
    stem: str  # Output filename without extension


class SvgLoader:
    """
    Loads SVG documents for rasterization.

    The loader only checks what can be checked without parsing: the file
    exists and has an .svg extension. Parsing is left to the rasterizer.
    """

    SUPPORTED_EXTENSIONS = {'.svg'}

    def __init__(self, stdin: Optional[BinaryIO] = None):
        self._stdin = stdin

    def is_svg_file(self, path: Path) -> bool:
        """Check that path is a regular file with a valid extension"""
        return path.is_file() and path.suffix in self.SUPPORTED_EXTENSIONS

    def resolve_stem(self, source: InputSource, filename: Optional[str] = None) -> str:
        """
        Resolve the output filename (without extension).

        Args:
            source: Where the SVG comes from
            filename: Explicit name requested by the user

        Returns:
            The explicit filename, or the input file's stem
        """
        if filename:
            return filename
        if source.is_stdin:
            raise ValueError("'--filename' is required because the input comes from stdin.")
        return source.path.stem

    def load(self, source: Union[InputSource, str, Path], filename: Optional[str] = None) -> LoadedSvg:
        """Load an SVG document from a path or stdin"""
        if not isinstance(source, InputSource):
            source = InputSource.parse(source)

        if not source.is_stdin and not self.is_svg_file(source.path):
            raise ValueError(
                f"Invalid SVG file: '{source.path}'. Please provide a valid SVG input."
            )

        stem = self.resolve_stem(source, filename)

        if source.is_stdin:
            data = self._read_stdin()
        else:
            data = self._read_file(source.path)

        logger.info(f"Loaded {len(data)} bytes from {source}")
        return LoadedSvg(source=source, data=data, stem=stem)

    def _read_file(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise OSError(f"Failed to read file '{path}'.") from e

    def _read_stdin(self) -> bytes:
        stream = self._stdin if self._stdin is not None else sys.stdin.buffer
        try:
            return stream.read()
        except OSError as e:
            raise OSError("Failed to read from stdin.") from e
