"""
Document Store

Owns the current résumé snapshot and applies every mutation to it.

Each operation is atomic: it either produces a complete new snapshot, which is
written through to the PersistenceAdapter and then pushed to every subscribed
observer, or it is rejected as a no-op (nothing persisted, nobody notified).
Rejected input never raises to the caller; UI races such as a double-click on
an already removed entry simply do nothing.

Entry ids come from a monotonic counter shared by the experience and education
collections, so ids are unique across the whole document and never reused
within a store's lifetime.
"""

import functools
from dataclasses import replace
from typing import Any, Callable, List, Optional

from vellum.contexts.document.defaults import SAMPLE_EXPERIENCE, default_document
from vellum.contexts.document.exceptions import InvalidMutationInput
from vellum.contexts.document.logger import (
    _log_error,
    _log_success,
    log_ignored_mutation,
    log_mutation,
    log_store_seeded,
)
from vellum.contexts.document.persistence import PersistenceAdapter
from vellum.contexts.document.resume_data_structure import (
    EDUCATION_FIELDS,
    EXPERIENCE_FIELDS,
    EducationEntry,
    ExperienceEntry,
    ResumeDocument,
    TemplateVariant,
    resolve_personal_field,
)

Observer = Callable[[ResumeDocument], None]


def mutation(method):
    """
    Wrap a method that computes a new snapshot into a committed store operation.

    The wrapped method returns the new snapshot or raises InvalidMutationInput.
    Rejected input becomes a no-op returning the unchanged snapshot.
    """

    @functools.wraps(method)
    def wrapper(self: "DocumentStore", *args, **kwargs) -> ResumeDocument:
        try:
            new_snapshot = method(self, *args, **kwargs)
        except InvalidMutationInput as e:
            log_ignored_mutation(method.__name__, e)
            return self._snapshot
        return self._commit(method.__name__, new_snapshot)

    return wrapper


def _require_text(operation: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidMutationInput(
            f"Expected text, got {type(value).__name__}", operation=operation, value=value
        )
    return value


class DocumentStore:
    """
    Holds the canonical ResumeDocument snapshot.

    Args:
        persistence: Adapter used to seed the store and to write through every
                     committed snapshot. None keeps the document in memory only,
                     seeded with the default document.

    Example:
        store = DocumentStore(PersistenceAdapter(InMemoryKeyValueStore()))
        unsubscribe = store.subscribe(lambda doc: print(doc.personal.full_name))
        store.set_personal_field("firstName", "Ada")
    """

    def __init__(self, persistence: Optional[PersistenceAdapter] = None):
        self.persistence = persistence
        if persistence is None:
            self._snapshot = default_document()
            log_store_seeded("default document", self._snapshot)
        else:
            self._snapshot = persistence.load()
            log_store_seeded(f"slot '{persistence.slot}'", self._snapshot)

        self._observers: List[Observer] = []
        self._next_id = max(self._snapshot.entry_ids(), default=0) + 1

    @property
    def snapshot(self) -> ResumeDocument:
        """Current immutable snapshot. Always fully replaced, never edited in place."""
        return self._snapshot

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register an observer called with every committed snapshot.

        Returns:
            Function that unsubscribes the observer
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _allocate_id(self) -> int:
        """Next counter value not used by any live entry."""
        live_ids = set(self._snapshot.entry_ids())
        while self._next_id in live_ids:
            self._next_id += 1
        entry_id = self._next_id
        self._next_id += 1
        return entry_id

    def _commit(self, operation: str, new_snapshot: ResumeDocument) -> ResumeDocument:
        self._snapshot = new_snapshot
        if self.persistence is not None:
            self.persistence.save(new_snapshot)
        log_mutation(operation, new_snapshot)
        self._notify()
        return new_snapshot

    def _notify(self) -> None:
        snapshot = self._snapshot
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception as e:
                # One broken observer must not starve the others
                _log_error(f"Observer {observer!r} failed: {e}")

    # Personal, summary, template

    @mutation
    def set_personal_field(self, field: str, value: str) -> ResumeDocument:
        """Replace one personal field. Accepts "first_name" or "firstName" style names."""
        try:
            attribute = resolve_personal_field(field)
        except (KeyError, TypeError):
            raise InvalidMutationInput(
                f"Unknown personal field: {field!r}", operation="set_personal_field", value=field
            )
        value = _require_text("set_personal_field", value)
        personal = replace(self._snapshot.personal, **{attribute: value})
        return replace(self._snapshot, personal=personal)

    @mutation
    def set_summary(self, value: str) -> ResumeDocument:
        return replace(self._snapshot, summary=_require_text("set_summary", value))

    @mutation
    def set_template(self, variant: Any) -> ResumeDocument:
        """Switch layout template. Unknown variants are rejected."""
        try:
            template = TemplateVariant.coerce(variant)
        except ValueError as e:
            raise InvalidMutationInput(str(e), operation="set_template", value=variant) from e
        return replace(self._snapshot, template=template)

    # Skills

    @mutation
    def add_skill(self, text: str) -> ResumeDocument:
        """Append a skill. Empty or whitespace-only text is ignored."""
        text = _require_text("add_skill", text)
        if not text.strip():
            raise InvalidMutationInput("Empty skill", operation="add_skill", value=text)
        return replace(self._snapshot, skills=self._snapshot.skills + (text,))

    @mutation
    def remove_skill(self, index: int) -> ResumeDocument:
        skills = self._snapshot.skills
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(skills):
            raise InvalidMutationInput(
                f"Skill index out of range: {index!r} (have {len(skills)})",
                operation="remove_skill",
                value=index,
            )
        return replace(self._snapshot, skills=skills[:index] + skills[index + 1 :])

    @mutation
    def clear_skills(self) -> ResumeDocument:
        return replace(self._snapshot, skills=())

    # Experience

    @mutation
    def add_experience(self) -> ResumeDocument:
        """Append an empty experience entry with a fresh id."""
        entry = ExperienceEntry(id=self._allocate_id())
        return replace(self._snapshot, experience=self._snapshot.experience + (entry,))

    @mutation
    def update_experience(self, entry_id: int, field: str, value: str) -> ResumeDocument:
        return replace(
            self._snapshot,
            experience=self._updated_entries(
                "update_experience", self._snapshot.experience, EXPERIENCE_FIELDS,
                entry_id, field, value,
            ),
        )

    @mutation
    def remove_experience(self, entry_id: int) -> ResumeDocument:
        return replace(
            self._snapshot,
            experience=self._without_entry(
                "remove_experience", self._snapshot.experience, entry_id
            ),
        )

    @mutation
    def reset_experience_to_sample(self) -> ResumeDocument:
        """Replace all experience entries with a copy of the sample entry."""
        sample = replace(SAMPLE_EXPERIENCE, id=self._allocate_id())
        return replace(self._snapshot, experience=(sample,))

    # Education

    @mutation
    def add_education(self) -> ResumeDocument:
        """Append an empty education entry with a fresh id."""
        entry = EducationEntry(id=self._allocate_id())
        return replace(self._snapshot, education=self._snapshot.education + (entry,))

    @mutation
    def update_education(self, entry_id: int, field: str, value: str) -> ResumeDocument:
        return replace(
            self._snapshot,
            education=self._updated_entries(
                "update_education", self._snapshot.education, EDUCATION_FIELDS,
                entry_id, field, value,
            ),
        )

    @mutation
    def remove_education(self, entry_id: int) -> ResumeDocument:
        return replace(
            self._snapshot,
            education=self._without_entry("remove_education", self._snapshot.education, entry_id),
        )

    # Whole document

    def reset_to_default(self) -> ResumeDocument:
        """
        Replace the whole document with the default and clear the stored draft.

        Unconditional: any "are you sure?" gate belongs to the caller.
        """
        self._snapshot = default_document()
        if self.persistence is not None:
            self.persistence.clear()
        _log_success("Document reset to default")
        self._notify()
        return self._snapshot

    # Collection helpers

    @staticmethod
    def _updated_entries(operation, entries, allowed_fields, entry_id, field, value) -> tuple:
        if field not in allowed_fields:
            raise InvalidMutationInput(
                f"Unknown field: {field!r}. Valid fields: {list(allowed_fields)}",
                operation=operation,
                value=field,
            )
        value = _require_text(operation, value)
        index = next((i for i, e in enumerate(entries) if e.id == entry_id), -1)
        if index < 0:
            raise InvalidMutationInput(
                f"No entry with id {entry_id!r}", operation=operation, value=entry_id
            )
        updated = replace(entries[index], **{field: value})
        return entries[:index] + (updated,) + entries[index + 1 :]

    @staticmethod
    def _without_entry(operation, entries, entry_id) -> tuple:
        remaining = tuple(e for e in entries if e.id != entry_id)
        if len(remaining) == len(entries):
            raise InvalidMutationInput(
                f"No entry with id {entry_id!r}", operation=operation, value=entry_id
            )
        return remaining
