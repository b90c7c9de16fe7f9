"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"

# Height of one conventional (A4) page in points
A4_HEIGHT_PT = 842


def setup_rendering_logger(log_dir: Path, capture_scale: float = None) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        capture_scale: Raster upscaling factor for provenance

    Returns:
        Path to log file

    Example:
        from vellum.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir)
        _log_info("Starting export...")
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Capture scale": capture_scale},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_export_start(file_name_hint: str, variant: str, scale: float) -> None:
    """Log start of an export with context."""
    _log_info(f"Starting export: {file_name_hint} ({variant})")
    _log_debug(f"  Capture scale: {scale}")


def log_export_result(result) -> None:
    """
    Log a finished export.

    Args:
        result: ExportResult from ExportPipeline.export()
    """
    width, height = result.page_size
    _log_success(f"{result.filename}: exported ({result.elapsed_s:.2f}s)")
    _log_debug(f"  Page: {width:.1f} x {height:.1f} pt")
    _log_debug(f"  Image: {result.image_size[0]} x {result.image_size[1]} px")
    _log_debug(f"  Size: {len(result.content)} bytes")
    if height > A4_HEIGHT_PT:
        _log_warning(f"Content is {height:.0f} pt tall and exports as one oversized page")


def log_export_failed(file_name_hint: str, error: Exception, elapsed_time: float) -> None:
    """Log a failed export."""
    _log_error(f"Export failed: {file_name_hint} ({elapsed_time:.2f}s)")
    _log_error(f"  {error}")
