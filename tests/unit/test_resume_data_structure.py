"""Unit tests for the résumé document model and its serialized form."""

import copy

import pytest

from vellum.contexts.document.defaults import default_document
from vellum.contexts.document.exceptions import InvalidDocumentStructureError
from vellum.contexts.document.resume_data_structure import (
    PersonalInfo,
    ResumeDocument,
    TemplateVariant,
    resolve_personal_field,
)


@pytest.fixture
def document_data():
    return default_document().to_dict()


@pytest.mark.unit
def test_default_document_contents():
    """Test the built-in default document."""
    doc = default_document()

    assert doc.personal.full_name == "Jane Doe"
    assert doc.personal.title == "Product Manager"
    assert doc.personal.email == "jane.doe@example.com"
    assert doc.skills == (
        "Product Strategy",
        "Roadmapping",
        "User Research",
        "Stakeholder Management",
    )
    assert [e.id for e in doc.experience] == [1]
    assert doc.experience[0].company == "TechCorp"
    assert [e.id for e in doc.education] == [2]
    assert doc.education[0].school == "University of Delaware"
    assert doc.template is TemplateVariant.MODERN


@pytest.mark.unit
def test_default_document_equal_on_every_call():
    """Test that default_document() returns equal values."""
    assert default_document() == default_document()


@pytest.mark.unit
def test_to_dict_uses_draft_field_names(document_data):
    """Test serialized personal block uses camelCase names."""
    assert document_data["personal"]["firstName"] == "Jane"
    assert document_data["personal"]["lastName"] == "Doe"
    assert "first_name" not in document_data["personal"]
    assert document_data["template"] == "modern"
    assert document_data["experience"][0]["id"] == 1
    assert isinstance(document_data["skills"], list)


@pytest.mark.unit
def test_from_dict_round_trip(document_data):
    """Test that from_dict restores an equal document."""
    assert ResumeDocument.from_dict(document_data) == default_document()


@pytest.mark.unit
def test_from_dict_ignores_unknown_keys(document_data):
    """Test that extra keys are ignored."""
    document_data["theme"] = "dark"
    document_data["personal"]["nickname"] = "JD"

    assert ResumeDocument.from_dict(document_data) == default_document()


@pytest.mark.unit
@pytest.mark.parametrize(
    "mutate",
    [
        lambda d: d.pop("summary"),
        lambda d: d["personal"].pop("email"),
        lambda d: d.update(skills="Python"),
        lambda d: d["skills"].append(3),
        lambda d: d.update(template="fancy"),
        lambda d: d["experience"][0].pop("id"),
        lambda d: d["experience"][0].update(id=0),
        lambda d: d["experience"][0].update(id="1"),
        lambda d: d["experience"][0].update(id=True),
        lambda d: d["education"][0].update(id=1),
        lambda d: d["education"][0].update(year=2019),
        lambda d: d.update(personal=None),
    ],
    ids=[
        "missing-summary",
        "missing-personal-field",
        "skills-not-list",
        "skill-not-string",
        "unknown-template",
        "missing-id",
        "zero-id",
        "string-id",
        "bool-id",
        "duplicate-id-across-collections",
        "year-not-string",
        "personal-not-object",
    ],
)
def test_from_dict_rejects_malformed_data(document_data, mutate):
    """Test that any schema violation raises InvalidDocumentStructureError."""
    data = copy.deepcopy(document_data)
    mutate(data)

    with pytest.raises(InvalidDocumentStructureError):
        ResumeDocument.from_dict(data)


@pytest.mark.unit
def test_from_dict_rejects_non_object():
    """Test that from_dict rejects non-object payloads."""
    with pytest.raises(InvalidDocumentStructureError):
        ResumeDocument.from_dict(["not", "a", "document"])


@pytest.mark.unit
def test_template_variant_coerce():
    """Test variant lookup by member, value and name."""
    assert TemplateVariant.coerce(TemplateVariant.CLASSIC) is TemplateVariant.CLASSIC
    assert TemplateVariant.coerce("classic") is TemplateVariant.CLASSIC
    assert TemplateVariant.coerce("MODERN") is TemplateVariant.MODERN
    assert TemplateVariant.coerce(" Modern ") is TemplateVariant.MODERN

    with pytest.raises(ValueError, match="Unknown template variant"):
        TemplateVariant.coerce("minimal")
    with pytest.raises(ValueError):
        TemplateVariant.coerce(None)


@pytest.mark.unit
def test_resolve_personal_field():
    """Test resolving attribute and serialized personal field names."""
    assert resolve_personal_field("first_name") == "first_name"
    assert resolve_personal_field("firstName") == "first_name"
    assert resolve_personal_field("linkedin") == "linkedin"

    with pytest.raises(KeyError):
        resolve_personal_field("nickname")


@pytest.mark.unit
def test_documents_are_immutable():
    """Test that documents cannot be modified in place."""
    doc = default_document()

    with pytest.raises(AttributeError):
        doc.summary = "changed"
    with pytest.raises(AttributeError):
        doc.personal.first_name = "Ada"


@pytest.mark.unit
def test_entry_ids_across_collections():
    """Test entry_ids covers experience and education."""
    doc = default_document()
    assert doc.entry_ids() == [1, 2]
    assert ResumeDocument().entry_ids() == []
    assert PersonalInfo().full_name == " "
