"""Custom exceptions for rendering context."""

from typing import Optional


class ExportFailure(Exception):
    """
    Base exception for a failed export. The résumé document is never affected.

    Attributes:
        message: Error description
        stage: Pipeline stage that failed ("measure", "capture", "encode")
        original_error: The underlying error, if any
    """

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.stage = stage
        self.original_error = original_error

        parts = [message]
        if stage:
            parts.append(f"Stage: {stage}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class ExportCaptureError(ExportFailure):
    """The visual tree could not be rasterized."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, stage="capture", original_error=original_error)


class ExportEncodeError(ExportFailure):
    """The raster image could not be encoded into a PDF."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, stage="encode", original_error=original_error)


class ExportInProgressError(ExportFailure):
    """An export was requested while another is still running."""

    pass
