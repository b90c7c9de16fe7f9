"""
Shared utilities for VELLUM.

Common functionality used across contexts:
- Logger setup
- Timestamps
- Reading exported PDFs back
"""

from vellum.utils.timestamp import now, now_exact, today

__all__ = ["now", "now_exact", "today"]
