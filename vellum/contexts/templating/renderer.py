"""
Template Renderer

Pure mapping from a ResumeDocument and a template variant to a visual tree.

Layouts:
- Modern: header with name/title left and contact block right, summary, then a
  2:1 two-column body (Experience then Education left, Skills as tags right)
- Classic: single centered column: name, "title • location",
  "email • phone • linkedin", then Summary, Experience, Education, Skills

Both layouts keep entries in stored order, render empty collections as empty
sections, and place text verbatim.
"""

from typing import Callable, Dict

from vellum.contexts.document.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    ResumeDocument,
    TemplateVariant,
)
from vellum.contexts.templating.logger import log_render
from vellum.contexts.templating.visual_tree import (
    VisualNode,
    VisualTree,
    block,
    row,
    rule,
    tags,
    text,
)

SEPARATOR = " • "
DATE_SEPARATOR = " — "


def _section(name: str, heading: str, *content: VisualNode) -> VisualNode:
    return block(
        text(heading, "heading", role="heading"),
        *content,
        style="section",
        role=f"section:{name}",
    )


def _date_range(entry: ExperienceEntry) -> str:
    return f"{entry.start}{DATE_SEPARATOR}{entry.end}"


def _education_entry(entry: EducationEntry) -> VisualNode:
    return block(
        text(entry.degree, "entry_title"),
        text(f"{entry.school}{SEPARATOR}{entry.year}", "muted"),
        style="entry",
        role="education-entry",
        key=str(entry.id),
    )


def _education_section(document: ResumeDocument) -> VisualNode:
    entries = [_education_entry(entry) for entry in document.education]
    return _section("education", "Education", block(*entries, style="entry_list"))


def _skills_section(document: ResumeDocument) -> VisualNode:
    return _section("skills", "Skills", tags(document.skills, role="skills"))


# Modern


def _modern_experience_entry(entry: ExperienceEntry) -> VisualNode:
    return block(
        row(
            block(text(entry.title, "entry_title"), text(entry.company, "muted")),
            text(_date_range(entry), "muted", align="right", role="dates"),
            weights=(3, 1),
            style="columns",
        ),
        text(entry.description, "body"),
        style="entry",
        role="experience-entry",
        key=str(entry.id),
    )


def _render_modern(document: ResumeDocument) -> VisualNode:
    p = document.personal
    header = row(
        block(
            text(p.full_name, "name", role="name"),
            text(p.title, "subtitle", role="title"),
            style="header_stack",
        ),
        block(
            *(
                text(value, "contact", align="right")
                for value in (p.email, p.phone, p.location, p.linkedin, p.website)
            ),
            style="header_stack",
            role="contact",
        ),
        style="header",
        role="header",
    )

    experience = [_modern_experience_entry(entry) for entry in document.experience]
    body = row(
        block(
            _section("experience", "Experience", block(*experience, style="entry_list")),
            _education_section(document),
            style="column",
            role="main-column",
        ),
        block(_skills_section(document), style="column", role="side-column"),
        weights=(2, 1),
        style="columns",
        role="columns",
    )

    return block(
        header,
        rule(),
        _section("summary", "Summary", text(document.summary, "body")),
        body,
        style="page",
        role="resume",
    )


# Classic


def _classic_experience_entry(entry: ExperienceEntry) -> VisualNode:
    return row(
        block(
            text(f"{entry.title}{DATE_SEPARATOR}{entry.company}", "entry_title"),
            text(entry.description, "body"),
            style="entry",
        ),
        text(_date_range(entry), "muted", align="right", role="dates"),
        weights=(3, 1),
        style="columns",
        role="experience-entry",
        key=str(entry.id),
    )


def _render_classic(document: ResumeDocument) -> VisualNode:
    p = document.personal
    header = block(
        text(p.full_name, "name", align="center", role="name"),
        text(f"{p.title}{SEPARATOR}{p.location}", "contact_muted", align="center", role="title"),
        text(
            SEPARATOR.join((p.email, p.phone, p.linkedin)),
            "contact_muted",
            align="center",
            role="contact",
        ),
        style="header_stack",
        role="header",
    )

    experience = [_classic_experience_entry(entry) for entry in document.experience]

    return block(
        header,
        rule(),
        _section("summary", "Professional Summary", text(document.summary, "body")),
        _section("experience", "Experience", block(*experience, style="entry_list")),
        _education_section(document),
        _skills_section(document),
        style="page",
        role="resume",
    )


RENDERERS: Dict[TemplateVariant, Callable[[ResumeDocument], VisualNode]] = {
    TemplateVariant.MODERN: _render_modern,
    TemplateVariant.CLASSIC: _render_classic,
}


def render(document: ResumeDocument, variant=None) -> VisualTree:
    """
    Render a document into a visual tree.

    Args:
        document: Snapshot to render (never modified)
        variant: Template to use (default: the document's own template)

    Returns:
        VisualTree instance

    Raises:
        ValueError: If variant is not a known template
    """
    variant = document.template if variant is None else TemplateVariant.coerce(variant)
    tree = VisualTree(root=RENDERERS[variant](document), variant=variant)
    log_render(variant.value, tree)
    return tree
