"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path, variant: str = None) -> Path:
    """
    Setup logger for templating context.

    Args:
        log_dir: Directory for this templating session
        variant: Template variant for provenance

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Template": variant},
    )


# Wrapper functions with automatic [template] prefix


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating-specific logging helpers


def log_render(variant: str, tree) -> None:
    """Log a completed render."""
    node_count = sum(1 for _ in tree.root.iter_nodes())
    _log_debug(f"Rendered {variant} layout ({node_count} nodes)")


def log_preview_failed(error: Exception) -> None:
    """Log a live preview refresh that failed. The previous preview is kept."""
    _log_error(f"Preview refresh failed: {error}")
