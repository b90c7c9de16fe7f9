"""
VELLUM - Visual Editor for Live Layout of Updatable Manuscripts

A résumé builder core: form edits flow into a canonical résumé document, a live
preview re-renders it through one of several layout templates, drafts persist
across sessions, and the preview exports as a single-page PDF.

Architecture:
- Document Context: Canonical résumé model, mutation operations, draft persistence
- Templating Context: Pure mapping from document to visual tree (Modern, Classic)
- Rendering Context: Layout measurement, raster capture, and PDF export
"""

__version__ = "0.1.0"
