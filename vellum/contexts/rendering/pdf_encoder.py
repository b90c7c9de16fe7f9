"""
PDF Encoding

Wraps a captured raster image in a single-page PDF whose page is exactly the
size of the captured content.
"""

from io import BytesIO
from typing import Optional, Tuple

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from vellum.contexts.rendering.exceptions import ExportEncodeError


def image_to_document(
    image: Image.Image,
    page_size: Tuple[float, float],
    title: Optional[str] = None,
    author: Optional[str] = None,
) -> bytes:
    """
    Encode an image as a one-page PDF.

    The image is drawn at (0, 0) stretched to the page, so a capture taken at
    2x lands on the page at its original size with double pixel density.

    Args:
        image: Captured raster image
        page_size: (width, height) of the page in points
        title: Optional document title metadata
        author: Optional document author metadata

    Returns:
        PDF bytes

    Raises:
        ExportEncodeError: If the page size is empty or encoding fails
    """
    width, height = page_size
    if width <= 0 or height <= 0:
        raise ExportEncodeError(f"Invalid page size: {width} x {height}")

    buffer = BytesIO()
    try:
        pdf = canvas.Canvas(buffer, pagesize=(width, height))
        if title:
            pdf.setTitle(title)
        if author:
            pdf.setAuthor(author)
        pdf.drawImage(ImageReader(image), 0, 0, width=width, height=height)
        pdf.showPage()
        pdf.save()
    except (OSError, ValueError, TypeError) as e:
        raise ExportEncodeError("Failed to encode PDF", original_error=e) from e

    return buffer.getvalue()
