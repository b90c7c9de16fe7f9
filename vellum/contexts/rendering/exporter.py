"""
Export Pipeline

Turns a visual tree into a downloadable one-page PDF:

1. Measure: lay the tree out and take its bounding box (CSS px)
2. Capture: rasterize at CAPTURE_SCALE (2x) for sharpness
3. Encode: one PDF page in points equal to the unscaled bounding box,
   the image filling the page exactly

The pipeline only reads the visual tree it is given. Visual trees are
immutable, so an export is a point-in-time capture of the snapshot the tree
was rendered from; edits made while an export runs never affect it.
"""

import asyncio
import os
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

from vellum.contexts.document.resume_data_structure import PersonalInfo, ResumeDocument
from vellum.contexts.rendering.capture import CAPTURE_SCALE, MAX_CAPTURE_PIXELS, capture_layout
from vellum.contexts.rendering.exceptions import ExportFailure, ExportInProgressError
from vellum.contexts.rendering.layout import measure_layout
from vellum.contexts.rendering.logger import (
    _log_info,
    _log_warning,
    log_export_failed,
    log_export_result,
    log_export_start,
)
from vellum.contexts.rendering.pdf_encoder import image_to_document
from vellum.contexts.templating.renderer import render
from vellum.contexts.templating.style_sheet import StyleSheet, load_style_sheet
from vellum.utils.timestamp import now_exact, today

load_dotenv()
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))

DEFAULT_NAME_PART = "resume"
_PATH_SEPARATORS = re.compile(r"[\\/]")


def file_name_hint(personal: PersonalInfo) -> str:
    """
    Base name for an exported file: "{firstName}-{lastName}".

    Each part falls back to "resume" when empty; path separators become "_".
    """
    first = personal.first_name or DEFAULT_NAME_PART
    last = personal.last_name or DEFAULT_NAME_PART
    return _PATH_SEPARATORS.sub("_", f"{first}-{last}")


def export_filename(personal: PersonalInfo) -> str:
    """Download name for a résumé, e.g. "Jane-Doe.pdf"."""
    return _pdf_name(file_name_hint(personal))


def _pdf_name(hint: str) -> str:
    stem = _PATH_SEPARATORS.sub("_", hint) or f"{DEFAULT_NAME_PART}-{DEFAULT_NAME_PART}"
    return f"{stem}.pdf"


@dataclass
class ExportResult:
    """
    Result of one export.

    Attributes:
        filename: Download name ("{hint}.pdf")
        content: PDF bytes
        page_size: (width, height) of the page in points
        image_size: (width, height) of the captured image in pixels
        variant: Template variant of the exported tree
        elapsed_s: Wall time of measure + capture + encode
        created_at: ISO timestamp of completion
    """

    filename: str
    content: bytes
    page_size: Tuple[float, float]
    image_size: Tuple[int, int]
    variant: str
    elapsed_s: float = 0.0
    created_at: str = field(default_factory=now_exact)


class ExportPipeline:
    """
    Measure, capture and encode visual trees into PDFs.

    Args:
        style_sheet: Style sheet for layout and drawing (default: packaged styles)
        scale: Capture upscaling factor
        max_pixels: Largest capture allowed (width * height)
        single_flight: Reject an export while another one is running
    """

    def __init__(
        self,
        style_sheet: Optional[StyleSheet] = None,
        scale: float = CAPTURE_SCALE,
        max_pixels: int = MAX_CAPTURE_PIXELS,
        single_flight: bool = True,
    ):
        if scale <= 0:
            raise ValueError(f"Capture scale must be positive, got {scale}")
        self.style_sheet = style_sheet or load_style_sheet()
        self.scale = scale
        self.max_pixels = max_pixels
        self.single_flight = single_flight
        self._in_flight = 0

    @property
    def in_progress(self) -> bool:
        return self._in_flight > 0

    def _enter(self, file_name_hint: str) -> None:
        if self.single_flight and self._in_flight:
            _log_warning(f"Export already in progress, rejecting: {file_name_hint}")
            raise ExportInProgressError(f"Export already in progress: {file_name_hint}")
        self._in_flight += 1

    def _leave(self) -> None:
        self._in_flight -= 1

    def export(self, tree, file_name_hint: str) -> ExportResult:
        """
        Export a visual tree as a one-page PDF.

        Args:
            tree: VisualTree to capture
            file_name_hint: Base file name, e.g. "Jane-Doe"

        Returns:
            ExportResult

        Raises:
            ExportCaptureError: If measuring or rasterizing fails
            ExportEncodeError: If PDF encoding fails
            ExportInProgressError: If single_flight and another export is running
        """
        self._enter(file_name_hint)
        try:
            return self._export(tree, file_name_hint)
        finally:
            self._leave()

    async def export_async(self, tree, file_name_hint: str) -> ExportResult:
        """Same as export(), with the work run in a worker thread."""
        self._enter(file_name_hint)
        try:
            return await asyncio.to_thread(self._export, tree, file_name_hint)
        finally:
            self._leave()

    def export_document(self, document: ResumeDocument, variant=None) -> ExportResult:
        """Render a document (in its own template unless variant is given) and export it."""
        tree = render(document, variant)
        return self.export(tree, file_name_hint(document.personal))

    def _export(self, tree, file_name_hint: str) -> ExportResult:
        log_export_start(file_name_hint, tree.variant.value, self.scale)
        start_time = time.time()
        filename = _pdf_name(file_name_hint)

        try:
            try:
                layout = measure_layout(tree, self.style_sheet, self.scale)
            except (KeyError, ValueError, OSError) as e:
                raise ExportFailure(
                    "Failed to lay out visual tree", stage="measure", original_error=e
                ) from e

            page_size = layout.bounding_box
            image = capture_layout(layout, self.style_sheet, self.scale, self.max_pixels)
            content = image_to_document(image, page_size, title=Path(filename).stem)
        except ExportFailure as e:
            log_export_failed(file_name_hint, e, time.time() - start_time)
            raise

        result = ExportResult(
            filename=filename,
            content=content,
            page_size=page_size,
            image_size=image.size,
            variant=tree.variant.value,
            elapsed_s=time.time() - start_time,
        )
        log_export_result(result)
        return result


def save_export(result: ExportResult, output_dir: Optional[Path] = None) -> Path:
    """
    Write an exported PDF to disk.

    Args:
        result: ExportResult from ExportPipeline
        output_dir: Target directory (default: RESULTS_PATH/<today>)

    Returns:
        Path of the written file
    """
    output_dir = Path(output_dir) if output_dir else RESULTS_PATH / today()
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / result.filename
    output_path.write_bytes(result.content)
    _log_info(f"Saved export: {output_path}")
    return output_path
