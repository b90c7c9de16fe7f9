"""
Document context logger.

Provides logging interface for document context with automatic [document] prefix.
All document modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[document]"


def setup_document_logger(log_dir: Path, slot: str = None) -> Path:
    """
    Setup logger for document context.

    Args:
        log_dir: Directory for this session
        slot: Draft slot name for provenance

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="document",
        log_dir=log_dir,
        extra_provenance={"Draft slot": slot},
    )


# Wrapper functions with automatic [document] prefix


def _log_info(message: str) -> None:
    """Log info message with [document] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [document] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [document] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [document] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [document] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level document-specific logging helpers


def log_store_seeded(source: str, document) -> None:
    """Log the snapshot a DocumentStore starts from."""
    _log_info(f"Document store seeded from {source}")
    _log_debug(
        f"  Experience entries: {len(document.experience)}, "
        f"education entries: {len(document.education)}, skills: {len(document.skills)}"
    )


def log_mutation(operation: str, document) -> None:
    """Log a committed mutation."""
    _log_debug(f"{operation} committed (template: {document.template.value})")


def log_ignored_mutation(operation: str, error: Exception) -> None:
    """Log a mutation rejected as a no-op."""
    _log_debug(f"{operation} ignored: {error}")


def log_draft_fallback(slot: str, error: Exception) -> None:
    """Log a stored draft that could not be decoded."""
    _log_warning(f"Stored draft in '{slot}' is unreadable, using default document")
    _log_debug(f"  {error}")


def log_draft_write_failed(slot: str, error: Exception) -> None:
    """Log a failed write-through. The session keeps its in-memory document."""
    _log_warning(f"Could not save draft to '{slot}', keeping in-memory document")
    _log_debug(f"  {error}")
