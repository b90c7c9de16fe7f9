"""
Rendering Context

Responsibilities:
- Lays visual trees out and measures their bounding box
- Rasterizes layouts at 2x with Pillow
- Encodes the raster into a one-page PDF sized to the content
- Guards against overlapping exports

Owns: Layout measurement, raster capture, PDF encoding, export results
Never: Mutates documents or decides what a résumé looks like
"""

from vellum.contexts.rendering.capture import capture_layout, capture_visual_tree
from vellum.contexts.rendering.exceptions import (
    ExportCaptureError,
    ExportEncodeError,
    ExportFailure,
    ExportInProgressError,
)
from vellum.contexts.rendering.exporter import (
    ExportPipeline,
    ExportResult,
    export_filename,
    file_name_hint,
    save_export,
)
from vellum.contexts.rendering.layout import LayoutBox, measure_layout
from vellum.contexts.rendering.pdf_encoder import image_to_document

__all__ = [
    # Pipeline
    "ExportPipeline",
    "ExportResult",
    "export_filename",
    "file_name_hint",
    "save_export",
    # Stages
    "measure_layout",
    "LayoutBox",
    "capture_layout",
    "capture_visual_tree",
    "image_to_document",
    # Errors
    "ExportFailure",
    "ExportCaptureError",
    "ExportEncodeError",
    "ExportInProgressError",
]
