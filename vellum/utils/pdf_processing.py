"""
PDF processing utilities for inspecting exported résumé PDFs.

Main class:
    ExportedPDF: Parsed PDF with page geometry and embedded image metadata.

Helper functions:
    page_count: Quick page count without full extraction.
"""

from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pdfplumber


def _open(source: Union[str, Path, bytes]):
    if isinstance(source, bytes):
        return pdfplumber.open(BytesIO(source))
    return pdfplumber.open(str(source))


def page_count(source: Union[str, Path, bytes]) -> Optional[int]:
    """Get page count from PDF path or bytes, or None if unreadable."""
    try:
        with _open(source) as pdf:
            return len(pdf.pages)
    except Exception:
        return None


class ExportedPDF:
    """
    Page geometry and embedded images of an exported PDF.

    Page data is lazily loaded and cached on first access.

    Args:
        source: Path to PDF file, or the PDF bytes themselves

    Example:
        >>> pdf = ExportedPDF(result.content)
        >>> pdf.page_size(1)
        (850.0, 1012.0)
    """

    def __init__(self, source: Union[str, Path, bytes]):
        if isinstance(source, str):
            source = Path(source)
        if isinstance(source, Path) and not source.exists():
            raise FileNotFoundError(f"PDF not found: {source}")

        self.source = source
        self._pages_cache: Optional[Dict[int, Dict]] = None

    def _extract_pages(self) -> Dict[int, Dict]:
        """
        Read the size and image placements of every page.

        Returns:
            Dict mapping page_num (1-indexed) to {"size": (w, h), "images": [...]},
            where each image is {"bbox": (x0, top, x1, bottom), "srcsize": (w, h)}.
        """
        pages_data: Dict[int, Dict] = {}

        with _open(self.source) as pdf:
            for page_num, page in enumerate(pdf.pages, start=1):
                images = [
                    {
                        "bbox": (img["x0"], img["top"], img["x1"], img["bottom"]),
                        "srcsize": tuple(img["srcsize"]),
                    }
                    for img in page.images
                ]
                pages_data[page_num] = {
                    "size": (float(page.width), float(page.height)),
                    "images": images,
                }

        return pages_data

    def _ensure_loaded(self) -> None:
        """Lazily load page data if not already cached."""
        if self._pages_cache is None:
            self._pages_cache = self._extract_pages()

    @property
    def page_count(self) -> int:
        self._ensure_loaded()
        return len(self._pages_cache)

    def page_size(self, page: int = 1) -> Optional[Tuple[float, float]]:
        """Page (width, height) in points, or None if the page doesn't exist."""
        self._ensure_loaded()
        page_data = self._pages_cache.get(page)
        return page_data["size"] if page_data else None

    def images(self, page: int = 1) -> List[Dict]:
        """Embedded images on a page, in drawing order."""
        self._ensure_loaded()
        page_data = self._pages_cache.get(page)
        return page_data["images"] if page_data else []
