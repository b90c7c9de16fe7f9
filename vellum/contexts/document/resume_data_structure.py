"""
Resume Document Structure

Defines the canonical résumé representation shared by all VELLUM contexts.

Every class here is a frozen dataclass: a ResumeDocument is an immutable
snapshot, and mutations (owned by DocumentStore) produce new snapshots via
dataclasses.replace. Absence of data is an empty string or empty tuple, never
a missing field.

Serialized form uses the field names of the draft format (camelCase for the
personal block), e.g.:

    {
      "personal": {"firstName": "Jane", "lastName": "Doe", ...},
      "summary": "...",
      "skills": ["Roadmapping"],
      "experience": [{"id": 1, "title": "...", "company": "...", ...}],
      "education": [{"id": 2, "degree": "...", "school": "...", "year": "2019"}],
      "template": "modern"
    }
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

from vellum.contexts.document.exceptions import InvalidDocumentStructureError

# Attribute name -> serialized name
PERSONAL_FIELDS = {
    "first_name": "firstName",
    "last_name": "lastName",
    "title": "title",
    "email": "email",
    "phone": "phone",
    "location": "location",
    "linkedin": "linkedin",
    "website": "website",
}

EXPERIENCE_FIELDS = ("title", "company", "start", "end", "description")
EDUCATION_FIELDS = ("degree", "school", "year")


class TemplateVariant(str, Enum):
    """Closed set of layout templates."""

    MODERN = "modern"
    CLASSIC = "classic"

    @classmethod
    def coerce(cls, value: Any) -> "TemplateVariant":
        """
        Resolve a variant from an enum member, its value, or its name (case-insensitive).

        Raises:
            ValueError: If value doesn't name a known variant
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for variant in cls:
                if normalized in (variant.value, variant.name.lower()):
                    return variant
        raise ValueError(
            f"Unknown template variant: {value!r}. Valid variants: {[v.value for v in cls]}"
        )


def resolve_personal_field(name: str) -> str:
    """
    Map a personal field name (attribute or serialized form) to its attribute name.

    Raises:
        KeyError: If name is not a personal field
    """
    if name in PERSONAL_FIELDS:
        return name
    for attribute, serialized in PERSONAL_FIELDS.items():
        if name == serialized:
            return attribute
    raise KeyError(name)


@dataclass(frozen=True)
class PersonalInfo:
    first_name: str = ""
    last_name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    website: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> Dict[str, str]:
        return {serialized: getattr(self, attr) for attr, serialized in PERSONAL_FIELDS.items()}


@dataclass(frozen=True)
class ExperienceEntry:
    """
    One position in the experience section.

    The id is assigned at creation, stable across edits, and used only for
    identity and removal.
    """

    id: int
    title: str = ""
    company: str = ""
    start: str = ""
    end: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, **{name: getattr(self, name) for name in EXPERIENCE_FIELDS}}


@dataclass(frozen=True)
class EducationEntry:
    """One degree in the education section. Same identity rule as ExperienceEntry."""

    id: int
    degree: str = ""
    school: str = ""
    year: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, **{name: getattr(self, name) for name in EDUCATION_FIELDS}}


@dataclass(frozen=True)
class ResumeDocument:
    """
    Immutable snapshot of a complete résumé.

    Attributes:
        personal: Name, title and contact details
        summary: Professional summary paragraph
        skills: Skills in display (insertion) order, duplicates allowed
        experience: Positions in display order
        education: Degrees in display order
        template: Active layout template
    """

    personal: PersonalInfo = field(default_factory=PersonalInfo)
    summary: str = ""
    skills: Tuple[str, ...] = ()
    experience: Tuple[ExperienceEntry, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    template: TemplateVariant = TemplateVariant.MODERN

    def entry_ids(self) -> List[int]:
        """Ids of all experience and education entries, in display order."""
        return [entry.id for entry in self.experience] + [entry.id for entry in self.education]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to plain JSON-compatible data using draft field names."""
        return {
            "personal": self.personal.to_dict(),
            "summary": self.summary,
            "skills": list(self.skills),
            "experience": [entry.to_dict() for entry in self.experience],
            "education": [entry.to_dict() for entry in self.education],
            "template": self.template.value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ResumeDocument":
        """
        Build a document from serialized data, validating the whole structure.

        Every field must be present with the right type. Unknown extra keys are
        ignored. Entry ids must be positive integers, unique across the document.

        Args:
            data: Parsed draft payload

        Returns:
            ResumeDocument instance

        Raises:
            InvalidDocumentStructureError: If data doesn't conform to the schema
        """
        root = _require_mapping(data, "document")

        personal_data = _require_mapping(root.get("personal"), "personal")
        personal = PersonalInfo(
            **{
                attr: _require_str(personal_data, serialized, "personal")
                for attr, serialized in PERSONAL_FIELDS.items()
            }
        )

        skills = tuple(
            _require_item_str(item, f"skills[{i}]")
            for i, item in enumerate(_require_list(root, "skills"))
        )

        experience = []
        for i, item in enumerate(_require_list(root, "experience")):
            where = f"experience[{i}]"
            entry = _require_mapping(item, where)
            experience.append(
                ExperienceEntry(
                    id=_require_id(entry, where),
                    **{name: _require_str(entry, name, where) for name in EXPERIENCE_FIELDS},
                )
            )

        education = []
        for i, item in enumerate(_require_list(root, "education")):
            where = f"education[{i}]"
            entry = _require_mapping(item, where)
            education.append(
                EducationEntry(
                    id=_require_id(entry, where),
                    **{name: _require_str(entry, name, where) for name in EDUCATION_FIELDS},
                )
            )

        try:
            template = TemplateVariant(_require_str(root, "template", "document"))
        except ValueError as e:
            raise InvalidDocumentStructureError(str(e)) from e

        document = cls(
            personal=personal,
            summary=_require_str(root, "summary", "document"),
            skills=skills,
            experience=tuple(experience),
            education=tuple(education),
            template=template,
        )

        ids = document.entry_ids()
        if len(ids) != len(set(ids)):
            raise InvalidDocumentStructureError(f"Duplicate entry ids: {ids}")

        return document


# Validation helpers for from_dict


def _require_mapping(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise InvalidDocumentStructureError(
            f"Expected an object at '{where}', got {type(value).__name__}"
        )
    return value


def _require_list(mapping: Dict[str, Any], key: str) -> list:
    if key not in mapping:
        raise InvalidDocumentStructureError(f"Missing field '{key}'")
    value = mapping[key]
    if not isinstance(value, list):
        raise InvalidDocumentStructureError(
            f"Expected a list at '{key}', got {type(value).__name__}"
        )
    return value


def _require_str(mapping: Dict[str, Any], key: str, where: str) -> str:
    if key not in mapping:
        raise InvalidDocumentStructureError(f"Missing field '{key}' in '{where}'")
    return _require_item_str(mapping[key], f"{where}.{key}")


def _require_item_str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise InvalidDocumentStructureError(
            f"Expected a string at '{where}', got {type(value).__name__}"
        )
    return value


def _require_id(mapping: Dict[str, Any], where: str) -> int:
    if "id" not in mapping:
        raise InvalidDocumentStructureError(f"Missing field 'id' in '{where}'")
    value = mapping["id"]
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidDocumentStructureError(
            f"Expected a positive integer id at '{where}', got {value!r}"
        )
    return value
