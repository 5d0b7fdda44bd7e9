"""
Pipeline Orchestrator - Coordinates the full conversion workflow
"""
from pathlib import Path
from typing import Optional, Callable, List, Dict, Union, BinaryIO
from dataclasses import dataclass, field
from concurrent.futures import ThreadPoolExecutor, as_completed
from enum import Enum
import logging
import os
import time

from .export import ExportFormat, ImageExporter, parse_formats
from .ingestion import InputSource, SvgLoader
from .rasterization import (
    Color,
    RasterSize,
    SvgRasterizer,
    parse_color,
    resolve_size,
    TRANSPARENT,
    WHITE,
)

logger = logging.getLogger(__name__)


class PipelineStage(Enum):
    INGESTION = "ingestion"
    RASTERIZATION = "rasterization"
    EXPORT = "export"


@dataclass
class ConversionConfig:
    """Configuration for one conversion run"""
    # Input
    input: Union[InputSource, str, Path]
    filename: Optional[str] = None  # Defaults to the input file's stem

    # Geometry
    width: Optional[int] = None
    height: Optional[int] = None
    scale: float = 1.0

    # Background, per-format default when None
    background: Optional[Union[Color, str]] = None

    # Export
    output_dir: Optional[Path] = None  # Current directory when None
    formats: Optional[List[Union[ExportFormat, str]]] = None
    max_workers: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.input, InputSource):
            self.input = InputSource.parse(self.input)
        if isinstance(self.background, str):
            self.background = parse_color(self.background)
        self.formats = parse_formats(self.formats)
        if self.output_dir is not None:
            self.output_dir = Path(self.output_dir)


@dataclass
class PipelineResult:
    """Result of pipeline execution"""
    success: bool
    output_files: List[Path]
    stages_completed: List[PipelineStage]
    error: Optional[str] = None
    size: Optional[RasterSize] = None
    timing: dict = field(default_factory=dict)
    failed_formats: Dict[ExportFormat, str] = field(default_factory=dict)


def format_elapsed(seconds: float) -> str:
    """Whole seconds from one second up, milliseconds below"""
    if seconds >= 1:
        return f"{int(seconds)}s"
    return f"{int(seconds * 1000)}ms"


def background_for(fmt: ExportFormat, background: Optional[Color]) -> Color:
    """Explicit color, else transparent where the format has alpha, else white"""
    if background is not None:
        return background
    return TRANSPARENT if fmt.has_alpha_channel else WHITE


class Pipeline:
    """
    Main pipeline orchestrator for SVG -> raster conversion.

    Pipeline stages:
    1. Ingestion: Read the SVG from a file or stdin
    2. Rasterization: Resolve the output size and render once
    3. Export: Fill the background and encode each format in a thread pool
    """

    def __init__(
        self,
        config: ConversionConfig,
        loader: Optional[SvgLoader] = None,
        rasterizer: Optional[SvgRasterizer] = None,
        stdin: Optional[BinaryIO] = None,
    ):
        self.config = config
        self.loader = loader or SvgLoader(stdin=stdin)
        self.rasterizer = rasterizer or SvgRasterizer()
        self._progress_callback: Optional[Callable] = None
        self._current_stage: Optional[PipelineStage] = None
        self._timing: dict = {}

    def set_progress_callback(self, callback: Callable[[PipelineStage, float, str], None]):
        """
        Set callback for progress updates.

        Callback signature: (stage: PipelineStage, progress: float, message: str)
        """
        self._progress_callback = callback

    def _report_progress(self, progress: float, message: str):
        """Report progress to callback if set"""
        if self._progress_callback and self._current_stage:
            self._progress_callback(self._current_stage, progress, message)

    def run(self) -> PipelineResult:
        """
        Execute the full pipeline.

        Returns:
            PipelineResult with output files and status
        """
        logger.info(f"Starting conversion for: {self.config.input}")
        stages_completed = []
        start_time = time.monotonic()

        try:
            # Stage 1: Ingestion
            self._current_stage = PipelineStage.INGESTION
            self._report_progress(0.0, "Reading SVG...")
            document = self.loader.load(self.config.input, self.config.filename)
            exporter = ImageExporter(output_dir=self.config.output_dir)
            stages_completed.append(PipelineStage.INGESTION)

            # Stage 2: Rasterization
            self._current_stage = PipelineStage.RASTERIZATION
            self._report_progress(0.0, "Rendering...")
            size, image = self._run_rasterization(document.data)
            stages_completed.append(PipelineStage.RASTERIZATION)

        except Exception as e:
            logger.error(f"Conversion failed at {self._current_stage.value}: {e}")
            return PipelineResult(
                success=False,
                output_files=[],
                stages_completed=stages_completed,
                error=str(e),
            )

        # Stage 3: Export
        self._current_stage = PipelineStage.EXPORT
        self._report_progress(0.0, "Encoding...")
        output_files, failed = self._run_export(exporter, image, document.stem)
        stages_completed.append(PipelineStage.EXPORT)
        self._report_progress(1.0, "Export complete")

        self._timing["total"] = time.monotonic() - start_time
        logger.info(f"Conversion completed in {format_elapsed(self._timing['total'])}")

        error = None
        if failed:
            error = "Failed to generate: " + ", ".join(f.value for f in failed)

        return PipelineResult(
            success=not failed,
            output_files=output_files,
            stages_completed=stages_completed,
            error=error,
            size=size,
            timing=self._timing,
            failed_formats=failed,
        )

    def _run_rasterization(self, data: bytes):
        """Stage 2: Resolve dimensions and render on a transparent canvas"""
        start = time.monotonic()

        base = self.rasterizer.intrinsic_size(data)
        size = resolve_size(
            base,
            width=self.config.width,
            height=self.config.height,
            scale=self.config.scale,
        )
        logger.info(f"Intrinsic size {base}, output size {size}")
        self._report_progress(0.5, f"Rendering at {size}...")

        image = self.rasterizer.rasterize(data, size, base)

        self._timing["rasterization"] = time.monotonic() - start
        self._report_progress(1.0, "Rendered")
        return size, image

    def _export_one(self, exporter: ImageExporter, image, stem: str, fmt: ExportFormat) -> Path:
        start = time.monotonic()
        background = background_for(fmt, self.config.background)
        filled = self.rasterizer.fill_background(image, background)
        path = exporter.export(filled, stem, fmt)
        self._timing[fmt.value] = time.monotonic() - start
        return path

    def _run_export(self, exporter: ImageExporter, image, stem: str):
        """Stage 3: Encode every requested format, one task per format"""
        formats = self.config.formats
        cores = os.cpu_count() or 1
        workers = self.config.max_workers or cores
        logger.info(f"Detected {cores} CPU cores for parallelization.")

        output_files: List[Path] = []
        failed: Dict[ExportFormat, str] = {}

        with ThreadPoolExecutor(max_workers=min(workers, len(formats))) as executor:
            futures = {
                executor.submit(self._export_one, exporter, image, stem, fmt): fmt
                for fmt in formats
            }
            for done, future in enumerate(as_completed(futures), start=1):
                fmt = futures[future]
                name = exporter.output_path(stem, fmt).name
                try:
                    path = future.result()
                except Exception as e:
                    logger.error(f"Failed to generate '{name}' Caused by: {e}")
                    failed[fmt] = str(e)
                else:
                    logger.info(f"Generated: '{name}' in {format_elapsed(self._timing[fmt.value])}")
                    output_files.append(path)
                self._report_progress(done / len(formats), f"Encoded {fmt.value}")

        # Keep results in the order formats were requested
        order = {exporter.output_path(stem, fmt): i for i, fmt in enumerate(formats)}
        output_files.sort(key=lambda p: order[p])
        return output_files, failed


def run_pipeline(
    input_path: Union[str, Path],
    output_dir: Optional[Union[str, Path]] = None,
    formats: Optional[List[str]] = None,
    **kwargs
) -> PipelineResult:
    """
    Convenience function to run the pipeline.

    Args:
        input_path: Path to the SVG file, or "-" for stdin
        output_dir: Directory for output files
        formats: List of output formats, all formats when omitted
        **kwargs: Additional ConversionConfig options

    Returns:
        PipelineResult
    """
    stdin = kwargs.pop("stdin", None)
    config = ConversionConfig(
        input=input_path,
        output_dir=Path(output_dir) if output_dir else None,
        formats=formats,
        **kwargs
    )

    pipeline = Pipeline(config, stdin=stdin)
    return pipeline.run()
