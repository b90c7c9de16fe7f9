"""
Draft Persistence

Serializes résumé documents to a single named slot in a key-value store and
reads them back, falling back to the built-in default document whenever the
slot is absent or unreadable.

Key-value stores:
- InMemoryKeyValueStore: dict-backed, with an optional byte quota
- FileKeyValueStore: one JSON file per key, written atomically

Usage:
    adapter = PersistenceAdapter(FileKeyValueStore(Path("outs/drafts")))
    document = adapter.load()
    adapter.save(document)
"""

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from dotenv import load_dotenv

from vellum.contexts.document.defaults import default_document
from vellum.contexts.document.exceptions import (
    InvalidDocumentStructureError,
    PersistenceDecodeError,
    PersistenceWriteError,
)
from vellum.contexts.document.logger import (
    _log_debug,
    log_draft_fallback,
    log_draft_write_failed,
)
from vellum.contexts.document.resume_data_structure import ResumeDocument

load_dotenv()
DRAFT_SLOT = os.getenv("DRAFT_SLOT", "wf_resume_draft")

# Keys become file names, so keep them to a safe character set
KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    """Durable string storage addressed by key."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """
    Dict-backed key-value store.

    Args:
        quota_bytes: Maximum UTF-8 size of a single value (None = unlimited).
                     Writes above the quota raise PersistenceWriteError.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        size = len(value.encode("utf-8"))
        if self.quota_bytes is not None and size > self.quota_bytes:
            raise PersistenceWriteError(
                f"Quota exceeded: {size} bytes > {self.quota_bytes} bytes", slot=key
            )
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class FileKeyValueStore:
    """
    Key-value store keeping each key in <root_dir>/<key>.json.

    The directory is created on first write. Writes go to a temp file in the
    same directory and are moved into place, so a crash never leaves a
    half-written draft.
    """

    def __init__(self, root_dir: Path):
        self.root_dir = Path(root_dir)

    def path_for(self, key: str) -> Path:
        if not KEY_PATTERN.match(key):
            raise ValueError(f"Invalid key: {key!r}")
        return self.root_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Atomic write pattern
        temp_fd, temp_path = tempfile.mkstemp(suffix=".json", dir=path.parent, text=True)
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(temp_path, path)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        if path.exists():
            path.unlink()


class PersistenceAdapter:
    """
    Reads and writes one résumé draft in a named key-value slot.

    load() never raises and never returns a partially decoded document.
    save() never raises: a failed write is logged and the caller's in-memory
    document remains the source of truth.
    """

    def __init__(self, store: KeyValueStore, slot: str = DRAFT_SLOT):
        self.store = store
        self.slot = slot

    @staticmethod
    def encode(document: ResumeDocument) -> str:
        """Encode a document as human-inspectable JSON."""
        return json.dumps(document.to_dict(), indent=2, ensure_ascii=False)

    def decode(self, payload: str) -> ResumeDocument:
        """
        Decode a stored payload.

        Raises:
            PersistenceDecodeError: If payload is not valid JSON or not a valid document
        """
        try:
            return ResumeDocument.from_dict(json.loads(payload))
        except (ValueError, RecursionError, InvalidDocumentStructureError) as e:
            # ValueError also covers JSONDecodeError and oversized integer literals
            raise PersistenceDecodeError(
                "Stored draft is malformed", slot=self.slot, original_error=e
            ) from e

    def load(self) -> ResumeDocument:
        """
        Load the stored draft, or the default document if absent or unreadable.

        Returns:
            ResumeDocument instance
        """
        try:
            payload = self.store.get(self.slot)
        except (OSError, ValueError) as e:
            log_draft_fallback(
                self.slot,
                PersistenceDecodeError("Stored draft is unreadable", self.slot, e),
            )
            return default_document()

        if payload is None:
            _log_debug(f"No stored draft in '{self.slot}', using default document")
            return default_document()

        try:
            document = self.decode(payload)
        except PersistenceDecodeError as e:
            log_draft_fallback(self.slot, e)
            return default_document()

        _log_debug(f"Loaded draft from '{self.slot}'")
        return document

    def save(self, document: ResumeDocument) -> bool:
        """
        Overwrite the slot with the full document.

        Returns:
            True if written, False if the write failed (logged, non-fatal)
        """
        try:
            self.store.set(self.slot, self.encode(document))
        except PersistenceWriteError as e:
            log_draft_write_failed(self.slot, e)
            return False
        except (OSError, ValueError) as e:
            # UnicodeEncodeError for lone surrogates in document text
            log_draft_write_failed(
                self.slot, PersistenceWriteError("Draft write failed", self.slot, e)
            )
            return False
        return True

    def clear(self) -> None:
        """Remove the stored draft."""
        try:
            self.store.delete(self.slot)
        except OSError as e:
            log_draft_write_failed(
                self.slot, PersistenceWriteError("Draft removal failed", self.slot, e)
            )
            return
        _log_debug(f"Cleared draft in '{self.slot}'")
