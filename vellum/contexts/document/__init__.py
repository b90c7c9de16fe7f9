"""
Document Context

Responsibilities:
- Defines the canonical résumé document (immutable snapshots)
- Applies mutation operations and notifies observers
- Persists drafts to a key-value slot with default-document fallback
- Maps form edits and button actions onto store operations

Owns: Résumé data model, mutation semantics, draft persistence
Never: Decides how a document looks on the page
"""

from vellum.contexts.document.defaults import default_document
from vellum.contexts.document.form import FormController
from vellum.contexts.document.persistence import (
    FileKeyValueStore,
    InMemoryKeyValueStore,
    PersistenceAdapter,
)
from vellum.contexts.document.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
    TemplateVariant,
)
from vellum.contexts.document.store import DocumentStore

__all__ = [
    # Data structure classes
    "ResumeDocument",
    "PersonalInfo",
    "ExperienceEntry",
    "EducationEntry",
    "TemplateVariant",
    "default_document",
    # Store and form binding
    "DocumentStore",
    "FormController",
    # Persistence
    "PersistenceAdapter",
    "InMemoryKeyValueStore",
    "FileKeyValueStore",
]
