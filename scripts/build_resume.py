#!/usr/bin/env python3
"""
Résumé Builder CLI

Edits the stored résumé draft, previews it as HTML and exports it as a PDF.
Every edit is written through to the draft slot in DRAFTS_PATH.

Commands:
    show        - Show the current draft
    set-field   - Set a personal field (name, title, contact details)
    set-summary - Set the professional summary
    template    - Switch layout template (modern, classic)
    skill       - Add, remove or clear skills
    experience  - Add, update, remove or reset experience entries
    education   - Add, update or remove education entries
    preview     - Write an HTML preview
    export      - Export a one-page PDF to RESULTS_PATH
    reset       - Reset the draft to the default résumé

Examples:\n

    build_resume.py show                                   # Show draft

    build_resume.py set-field firstName Ada                # Edit personal field

    build_resume.py skill add "Python"                     # Add a skill

    build_resume.py experience update 3 company Acme       # Edit an entry

    build_resume.py export --template classic              # Export PDF
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vellum.contexts.document import (
    DocumentStore,
    FileKeyValueStore,
    FormController,
    PersistenceAdapter,
    ResumeDocument,
)
from vellum.contexts.document.logger import setup_document_logger
from vellum.contexts.document.persistence import DRAFT_SLOT
from vellum.contexts.document.resume_data_structure import (
    EDUCATION_FIELDS,
    EXPERIENCE_FIELDS,
    PERSONAL_FIELDS,
)
from vellum.contexts.rendering import ExportFailure, ExportPipeline, file_name_hint, save_export
from vellum.contexts.rendering.capture import CAPTURE_SCALE
from vellum.contexts.rendering.exporter import RESULTS_PATH
from vellum.contexts.rendering.logger import setup_rendering_logger
from vellum.contexts.templating import load_style_sheet, render, render_html
from vellum.contexts.templating.logger import setup_templating_logger
from vellum.utils.pdf_processing import page_count
from vellum.utils.timestamp import now, today

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
DRAFTS_PATH = Path(os.getenv("DRAFTS_PATH", "outs/drafts"))


def load_store() -> DocumentStore:
    return DocumentStore(PersistenceAdapter(FileKeyValueStore(DRAFTS_PATH)))


def open_store(command: str) -> DocumentStore:
    """Set up logging for a command and open the stored draft."""
    setup_document_logger(LOGS_PATH / f"{command}_{now()}", slot=DRAFT_SLOT)
    return load_store()


def apply_or_fail(before: ResumeDocument, after: ResumeDocument, message: str) -> None:
    """Exit with an error if an operation was ignored (snapshot unchanged)."""
    if after is before:
        typer.secho(f"✗ {message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho("✓ Draft updated", fg=typer.colors.GREEN)


def print_document(document: ResumeDocument) -> None:
    p = document.personal
    typer.secho(f"\n{p.full_name}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  {p.title}")
    for attribute, serialized in PERSONAL_FIELDS.items():
        if attribute not in ("first_name", "last_name", "title"):
            typer.echo(f"  {serialized}: {getattr(p, attribute)}")
    typer.echo(f"  Template: {document.template.value}")

    typer.secho("\nSummary", bold=True)
    typer.echo(f"  {document.summary}")

    typer.secho("\nSkills", bold=True)
    for i, skill in enumerate(document.skills):
        typer.echo(f"  [{i}] {skill}")

    typer.secho("\nExperience", bold=True)
    for entry in document.experience:
        typer.echo(f"  #{entry.id} {entry.title} @ {entry.company} ({entry.start} - {entry.end})")

    typer.secho("\nEducation", bold=True)
    for entry in document.education:
        typer.echo(f"  #{entry.id} {entry.degree}, {entry.school} ({entry.year})")
    typer.echo("")


app = typer.Typer(
    help="Edit, preview and export the résumé draft",
    add_completion=False,
    invoke_without_command=True,
)
skill_app = typer.Typer(help="Add, remove or clear skills", no_args_is_help=True)
experience_app = typer.Typer(help="Manage experience entries", no_args_is_help=True)
education_app = typer.Typer(help="Manage education entries", no_args_is_help=True)
app.add_typer(skill_app, name="skill")
app.add_typer(experience_app, name="experience")
app.add_typer(education_app, name="education")


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("show")
def show_command(
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the stored JSON draft instead"),
    ] = False,
):
    """
    Show the current draft.

    Examples:\n

        $ build_resume.py show            # Readable summary

        $ build_resume.py show --json     # Draft as stored
    """
    store = open_store("show")
    if as_json:
        typer.echo(PersistenceAdapter.encode(store.snapshot))
    else:
        print_document(store.snapshot)


@app.command("set-field")
def set_field_command(
    field: Annotated[str, typer.Argument(help=f"Personal field: {list(PERSONAL_FIELDS.values())}")],
    value: Annotated[str, typer.Argument(help="New value (may be empty)")],
):
    """
    Set a personal field.

    Examples:\n

        $ build_resume.py set-field firstName Ada

        $ build_resume.py set-field website ""
    """
    store = open_store("set-field")
    before = store.snapshot
    after = FormController(store).edit(f"personal.{field}", value)
    apply_or_fail(before, after, f"Unknown field: {field}. Valid: {list(PERSONAL_FIELDS.values())}")


@app.command("set-summary")
def set_summary_command(
    value: Annotated[str, typer.Argument(help="Professional summary")],
):
    """Set the professional summary."""
    store = open_store("set-summary")
    store.set_summary(value)
    typer.secho("✓ Draft updated", fg=typer.colors.GREEN)


@app.command("template")
def template_command(
    variant: Annotated[str, typer.Argument(help="Layout template: modern or classic")],
):
    """Switch the layout template."""
    store = open_store("template")
    before = store.snapshot
    after = FormController(store).click("select_template", variant)
    apply_or_fail(before, after, f"Unknown template: {variant}")


@skill_app.command("add")
def skill_add_command(
    text: Annotated[str, typer.Argument(help="Skill to append")],
):
    """Append a skill."""
    store = open_store("skill-add")
    controller = FormController(store)
    controller.type_skill(text)
    before = store.snapshot
    apply_or_fail(before, controller.submit_skill(), "Skill is empty")


@skill_app.command("remove")
def skill_remove_command(
    index: Annotated[int, typer.Argument(help="Position shown by 'show' (0-based)")],
):
    """Remove the skill at a position."""
    store = open_store("skill-remove")
    before = store.snapshot
    apply_or_fail(
        before,
        store.remove_skill(index),
        f"No skill at position {index} (have {len(before.skills)})",
    )


@skill_app.command("clear")
def skill_clear_command():
    """Remove all skills."""
    store = open_store("skill-clear")
    store.clear_skills()
    typer.secho("✓ Skills cleared", fg=typer.colors.GREEN)


@experience_app.command("add")
def experience_add_command(
    title: Annotated[Optional[str], typer.Option("--title", help="Job title")] = None,
    company: Annotated[Optional[str], typer.Option("--company", help="Company")] = None,
    start: Annotated[Optional[str], typer.Option("--start", help="Start date")] = None,
    end: Annotated[Optional[str], typer.Option("--end", help="End date")] = None,
    description: Annotated[
        Optional[str], typer.Option("--description", help="What you did there")
    ] = None,
):
    """
    Append an experience entry, optionally filling its fields.

    Examples:\n

        $ build_resume.py experience add --title Engineer --company Acme
    """
    store = open_store("experience-add")
    entry_id = store.add_experience().experience[-1].id
    values = dict(title=title, company=company, start=start, end=end, description=description)
    for field, value in values.items():
        if value is not None:
            store.update_experience(entry_id, field, value)
    typer.secho(f"✓ Added experience #{entry_id}", fg=typer.colors.GREEN)


@experience_app.command("update")
def experience_update_command(
    entry_id: Annotated[int, typer.Argument(help="Entry id shown by 'show'")],
    field: Annotated[str, typer.Argument(help=f"Field: {list(EXPERIENCE_FIELDS)}")],
    value: Annotated[str, typer.Argument(help="New value")],
):
    """Update one field of an experience entry."""
    store = open_store("experience-update")
    before = store.snapshot
    after = FormController(store).edit(f"experience.{entry_id}.{field}", value)
    apply_or_fail(before, after, f"No experience #{entry_id} or unknown field '{field}'")


@experience_app.command("remove")
def experience_remove_command(
    entry_id: Annotated[int, typer.Argument(help="Entry id shown by 'show'")],
):
    """Remove an experience entry."""
    store = open_store("experience-remove")
    before = store.snapshot
    apply_or_fail(before, store.remove_experience(entry_id), f"No experience #{entry_id}")


@experience_app.command("sample")
def experience_sample_command():
    """Replace all experience entries with the sample entry."""
    store = open_store("experience-sample")
    store.reset_experience_to_sample()
    typer.secho("✓ Experience reset to sample", fg=typer.colors.GREEN)


@education_app.command("add")
def education_add_command(
    degree: Annotated[Optional[str], typer.Option("--degree", help="Degree")] = None,
    school: Annotated[Optional[str], typer.Option("--school", help="School")] = None,
    year: Annotated[Optional[str], typer.Option("--year", help="Graduation year")] = None,
):
    """Append an education entry, optionally filling its fields."""
    store = open_store("education-add")
    entry_id = store.add_education().education[-1].id
    for field, value in dict(degree=degree, school=school, year=year).items():
        if value is not None:
            store.update_education(entry_id, field, value)
    typer.secho(f"✓ Added education #{entry_id}", fg=typer.colors.GREEN)


@education_app.command("update")
def education_update_command(
    entry_id: Annotated[int, typer.Argument(help="Entry id shown by 'show'")],
    field: Annotated[str, typer.Argument(help=f"Field: {list(EDUCATION_FIELDS)}")],
    value: Annotated[str, typer.Argument(help="New value")],
):
    """Update one field of an education entry."""
    store = open_store("education-update")
    before = store.snapshot
    after = FormController(store).edit(f"education.{entry_id}.{field}", value)
    apply_or_fail(before, after, f"No education #{entry_id} or unknown field '{field}'")


@education_app.command("remove")
def education_remove_command(
    entry_id: Annotated[int, typer.Argument(help="Entry id shown by 'show'")],
):
    """Remove an education entry."""
    store = open_store("education-remove")
    before = store.snapshot
    apply_or_fail(before, store.remove_education(entry_id), f"No education #{entry_id}")


@app.command("preview")
def preview_command(
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="HTML file (default: RESULTS_PATH/<date>/<name>.html)"),
    ] = None,
    template: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Override the draft's template"),
    ] = None,
    presets: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Style preset (repeatable)"),
    ] = None,
):
    """
    Write an HTML preview of the draft.

    Examples:\n

        $ build_resume.py preview                       # Draft's own template

        $ build_resume.py preview -t classic -p compact
    """
    setup_templating_logger(LOGS_PATH / f"preview_{now()}", variant=template)
    store = load_store()
    document = store.snapshot
    try:
        tree = render(document, template)
        html = render_html(tree, load_style_sheet(presets=presets))
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output is None:
        output = RESULTS_PATH / today() / f"{file_name_hint(document.personal)}.html"
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    typer.secho(f"✓ Preview written: {output}", fg=typer.colors.GREEN)


@app.command("export")
def export_command(
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory (default: RESULTS_PATH/<date>)"),
    ] = None,
    template: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Override the draft's template"),
    ] = None,
    presets: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Style preset (repeatable)"),
    ] = None,
    scale: Annotated[
        Optional[float],
        typer.Option("--scale", "-s", help="Capture scale (default: CAPTURE_SCALE)", min=0.5, max=4),
    ] = None,
):
    """
    Export the draft as a one-page PDF sized to its content.

    Examples:\n

        $ build_resume.py export                          # Draft's own template

        $ build_resume.py export -t classic -o out/       # Classic layout, custom directory
    """
    scale = scale or CAPTURE_SCALE
    setup_rendering_logger(LOGS_PATH / f"export_{now()}", capture_scale=scale)
    document = load_store().snapshot

    try:
        style_sheet = load_style_sheet(presets=presets)
        pipeline = ExportPipeline(style_sheet, scale=scale)
        result = pipeline.export_document(document, template)
    except ExportFailure as e:
        typer.secho("\n✗ Export failed", fg=typer.colors.RED, bold=True)
        typer.secho(f"  {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    output_path = save_export(result, output_dir or RESULTS_PATH / today())

    typer.secho("\n✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  PDF: {output_path}")
    typer.echo(f"  Pages: {page_count(output_path)}")
    typer.echo(f"  Page size: {result.page_size[0]:.0f} x {result.page_size[1]:.0f} pt")
    typer.echo(f"  Image: {result.image_size[0]} x {result.image_size[1]} px")
    typer.echo("")


@app.command("reset")
def reset_command(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip the confirmation prompt"),
    ] = False,
):
    """Reset the draft to the default résumé (asks for confirmation)."""
    store = open_store("reset")
    controller = FormController(
        store, confirm=lambda message: yes or typer.confirm(message, default=False)
    )
    before = store.snapshot
    if controller.reset() is before:
        typer.echo("Reset cancelled")
        raise typer.Exit(code=0)
    typer.secho("✓ Draft reset to default", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
