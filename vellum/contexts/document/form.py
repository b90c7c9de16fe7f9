"""
Form Controller

Binds form field edits and button actions 1:1 to DocumentStore operations.

Field paths:
    personal.<field>          e.g. "personal.firstName"
    summary
    experience.<id>.<field>   e.g. "experience.3.company"
    education.<id>.<field>    e.g. "education.2.year"

Actions:
    add_skill, remove_skill(index), clear_skills, add_experience,
    remove_experience(id), reset_experience_to_sample, add_education,
    remove_education(id), select_template(variant), reset
"""

from typing import Any, Callable, Optional

from vellum.contexts.document.exceptions import InvalidMutationInput
from vellum.contexts.document.logger import log_ignored_mutation
from vellum.contexts.document.resume_data_structure import ResumeDocument
from vellum.contexts.document.store import DocumentStore

RESET_CONFIRMATION = "Reset resume to default template? This will clear your current draft."


class FormController:
    """
    Translates form events into store operations.

    Args:
        store: Store receiving the operations
        confirm: Gate asked before a reset, called with the confirmation
                 message. Defaults to refusing, so a reset needs an explicit gate.
    """

    def __init__(self, store: DocumentStore, confirm: Optional[Callable[[str], bool]] = None):
        self.store = store
        self.confirm = confirm or (lambda message: False)
        self.pending_skill = ""

        self._actions = {
            "add_skill": self._add_skill,
            "remove_skill": self.store.remove_skill,
            "clear_skills": lambda target: self.store.clear_skills(),
            "add_experience": lambda target: self.store.add_experience(),
            "remove_experience": self.store.remove_experience,
            "reset_experience_to_sample": lambda target: self.store.reset_experience_to_sample(),
            "add_education": lambda target: self.store.add_education(),
            "remove_education": self.store.remove_education,
            "select_template": self.store.set_template,
            "reset": lambda target: self.reset(),
        }

    def edit(self, field_path: str, value: str) -> ResumeDocument:
        """
        Apply a single field edit.

        Malformed paths are ignored like any other invalid input.
        """
        try:
            section, *rest = field_path.split(".")
            if section == "summary" and not rest:
                return self.store.set_summary(value)
            if section == "personal" and len(rest) == 1:
                return self.store.set_personal_field(rest[0], value)
            if section in ("experience", "education") and len(rest) == 2:
                entry_id, field = int(rest[0]), rest[1]
                if section == "experience":
                    return self.store.update_experience(entry_id, field, value)
                return self.store.update_education(entry_id, field, value)
            raise InvalidMutationInput(f"Unknown field path: {field_path!r}", operation="edit")
        except (InvalidMutationInput, ValueError, AttributeError) as e:
            log_ignored_mutation("edit", e)
            return self.store.snapshot

    def type_skill(self, text: str) -> None:
        """Update the skill adder's pending text."""
        self.pending_skill = text

    def submit_skill(self) -> ResumeDocument:
        """Add the pending skill and clear the adder."""
        document = self.store.add_skill(self.pending_skill)
        self.pending_skill = ""
        return document

    def _add_skill(self, text: Optional[str]) -> ResumeDocument:
        # The Add button submits the adder's pending text
        if text is None:
            return self.submit_skill()
        return self.store.add_skill(text)

    def click(self, action: str, target: Any = None) -> ResumeDocument:
        """
        Dispatch a button action.

        Args:
            action: Action name (see module docstring)
            target: Index, entry id, variant or skill text, depending on action
        """
        handler = self._actions.get(action)
        if handler is None:
            log_ignored_mutation("click", InvalidMutationInput(f"Unknown action: {action!r}"))
            return self.store.snapshot
        return handler(target)

    def reset(self) -> ResumeDocument:
        """Reset to the default document if the confirmation gate agrees."""
        if not self.confirm(RESET_CONFIRMATION):
            return self.store.snapshot
        return self.store.reset_to_default()
