"""Unit tests for the Modern and Classic layout renderers."""

from dataclasses import replace

import pytest

from vellum.contexts.document.defaults import default_document
from vellum.contexts.document.resume_data_structure import (
    ExperienceEntry,
    ResumeDocument,
    TemplateVariant,
)
from vellum.contexts.templating.renderer import render
from vellum.contexts.templating.visual_tree import VisualNode, block, row, text


def section_texts(tree, name):
    return tree.find(f"section:{name}").texts()


@pytest.fixture
def document():
    return default_document()


@pytest.mark.unit
def test_render_uses_document_template(document):
    """Test that render uses the document's template by default."""
    assert render(document).variant is TemplateVariant.MODERN

    classic_doc = replace(document, template=TemplateVariant.CLASSIC)
    assert render(classic_doc).variant is TemplateVariant.CLASSIC


@pytest.mark.unit
def test_render_variant_override(document):
    """Test rendering with an explicit variant."""
    assert render(document, "classic").variant is TemplateVariant.CLASSIC
    with pytest.raises(ValueError):
        render(document, "minimal")


@pytest.mark.unit
def test_render_is_pure(document):
    """Test that rendering leaves the document unchanged."""
    before = document.to_dict()
    assert render(document) == render(document)
    assert document.to_dict() == before


@pytest.mark.unit
def test_modern_header(document):
    """Test the Modern header: name and title left, contact right."""
    tree = render(document, TemplateVariant.MODERN)

    assert tree.find("name").text == "Jane Doe"
    assert tree.find("title").text == "Product Manager"

    contact = tree.find("contact")
    assert contact.texts() == [
        "jane.doe@example.com",
        "(555) 555-5555",
        "Wilmington, DE",
        "linkedin.com/in/janedoe",
        "janedoe.com",
    ]
    assert all(child.align == "right" for child in contact.children)


@pytest.mark.unit
def test_modern_two_column_body(document):
    """Test the Modern 2:1 two-column body."""
    tree = render(document, TemplateVariant.MODERN)
    columns = tree.find("columns")

    assert columns.kind == "row"
    assert columns.weights == (2, 1)

    main, side = columns.children
    assert [n.role for n in main.children] == ["section:experience", "section:education"]
    assert [n.role for n in side.children] == ["section:skills"]
    assert side.find("skills").items == document.skills


@pytest.mark.unit
def test_modern_section_order(document):
    """Test Modern section order in each column."""
    tree = render(document, TemplateVariant.MODERN)
    roles = [n.role for n in tree.root.iter_nodes() if n.role.startswith("section:")]

    assert roles == ["section:summary", "section:experience", "section:education", "section:skills"]
    assert tree.root.children[1].kind == "rule"


@pytest.mark.unit
def test_modern_experience_entry(document):
    """Test Modern experience entry content."""
    entry = render(document, "modern").find("experience-entry")

    assert entry.key == "1"
    assert entry.texts() == [
        "Associate Product Manager",
        "TechCorp",
        "Jan 2021 — Present",
        "Owned feature lifecycle from discovery to launch. "
        "Led A/B tests and improved retention by 12%.",
    ]
    assert entry.find("dates").align == "right"


@pytest.mark.unit
def test_classic_header(document):
    """Test the Classic centered header lines."""
    tree = render(document, TemplateVariant.CLASSIC)
    header = tree.find("header")

    assert header.texts() == [
        "Jane Doe",
        "Product Manager • Wilmington, DE",
        "jane.doe@example.com • (555) 555-5555 • linkedin.com/in/janedoe",
    ]
    assert all(child.align == "center" for child in header.children)


@pytest.mark.unit
def test_classic_single_column_order(document):
    """Test Classic single-column section order."""
    tree = render(document, TemplateVariant.CLASSIC)
    sections = [n for n in tree.root.children if n.role.startswith("section:")]

    assert [n.role for n in sections] == [
        "section:summary",
        "section:experience",
        "section:education",
        "section:skills",
    ]
    assert sections[0].find("heading").text == "Professional Summary"
    assert tree.find("columns") is None


@pytest.mark.unit
def test_classic_experience_entry(document):
    """Test Classic experience entry with right-aligned dates."""
    entry = render(document, "classic").find("experience-entry")

    assert entry.kind == "row"
    assert entry.key == "1"
    assert entry.texts()[0] == "Associate Product Manager — TechCorp"
    assert entry.find("dates").text == "Jan 2021 — Present"


@pytest.mark.unit
@pytest.mark.parametrize("variant", list(TemplateVariant))
def test_education_entry_same_in_both_variants(document, variant):
    """Test that education entries render the same in both variants."""
    entry = render(document, variant).find("education-entry")
    assert entry.texts() == ["B.A. Business Administration", "University of Delaware • 2019"]


@pytest.mark.unit
@pytest.mark.parametrize("variant", list(TemplateVariant))
def test_entries_in_stored_order(document, variant):
    """Test that entries render in stored order."""
    experience = (
        ExperienceEntry(id=7, title="Third"),
        ExperienceEntry(id=3, title="First"),
        ExperienceEntry(id=5, title="Second"),
    )
    tree = render(replace(document, experience=experience), variant)

    assert [n.key for n in tree.find_all("experience-entry")] == ["7", "3", "5"]


@pytest.mark.unit
@pytest.mark.parametrize("variant", list(TemplateVariant))
def test_empty_document_renders_empty_sections(variant):
    """Test that empty collections render as empty sections."""
    tree = render(ResumeDocument(), variant)

    for name in ("summary", "experience", "education", "skills"):
        assert tree.find(f"section:{name}") is not None
    assert tree.find_all("experience-entry") == []
    assert tree.find("skills").items == ()


@pytest.mark.unit
def test_text_placed_verbatim(document):
    """Test that text is placed literally, without truncation."""
    long_summary = "<b>Bold</b> & " + "very long " * 200
    tree = render(replace(document, summary=long_summary), "classic")

    assert section_texts(tree, "summary")[1] == long_summary


@pytest.mark.unit
def test_visual_node_validation():
    """Test VisualNode rejects invalid kinds and alignments."""
    with pytest.raises(ValueError, match="Invalid node kind"):
        VisualNode(kind="table")
    with pytest.raises(ValueError, match="Invalid alignment"):
        text("x", "body", align="justify")
    with pytest.raises(ValueError, match="weights"):
        row(text("a", "body"), weights=(1, 2))

    assert block(text("a", "body"), text("b", "body")).texts() == ["a", "b"]
