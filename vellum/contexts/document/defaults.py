"""
Default values for VELLUM résumé documents.

Provides the built-in default document used by:
- PersistenceAdapter.load() (no stored draft, or an unreadable one)
- DocumentStore.reset_to_default()
- DocumentStore.reset_experience_to_sample()
"""

from vellum.contexts.document.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
    TemplateVariant,
)

DEFAULT_PERSONAL = PersonalInfo(
    first_name="Jane",
    last_name="Doe",
    title="Product Manager",
    email="jane.doe@example.com",
    phone="(555) 555-5555",
    location="Wilmington, DE",
    linkedin="linkedin.com/in/janedoe",
    website="janedoe.com",
)

DEFAULT_SUMMARY = (
    "Product manager with 5+ years of experience launching customer-focused features "
    "and leading cross-functional teams."
)

DEFAULT_SKILLS = ("Product Strategy", "Roadmapping", "User Research", "Stakeholder Management")

SAMPLE_EXPERIENCE = ExperienceEntry(
    id=1,
    title="Associate Product Manager",
    company="TechCorp",
    start="Jan 2021",
    end="Present",
    description=(
        "Owned feature lifecycle from discovery to launch. "
        "Led A/B tests and improved retention by 12%."
    ),
)

SAMPLE_EDUCATION = EducationEntry(
    id=2,
    degree="B.A. Business Administration",
    school="University of Delaware",
    year="2019",
)


def default_document() -> ResumeDocument:
    """
    Get the built-in default document.

    Returns an equal (and, being frozen, safely shareable) value on every call.
    """
    return ResumeDocument(
        personal=DEFAULT_PERSONAL,
        summary=DEFAULT_SUMMARY,
        skills=DEFAULT_SKILLS,
        experience=(SAMPLE_EXPERIENCE,),
        education=(SAMPLE_EDUCATION,),
        template=TemplateVariant.MODERN,
    )
