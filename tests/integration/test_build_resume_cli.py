"""
Integration tests for the build_resume.py CLI.
Tests: command line → stored draft on disk → preview HTML / exported PDF.
"""

import importlib.util
import json
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from vellum.utils.pdf_processing import ExportedPDF

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "build_resume.py"

runner = CliRunner()


@pytest.fixture
def cli(tmp_path, monkeypatch):
    script = importlib.util.spec_from_file_location("build_resume", SCRIPT_PATH)
    module = importlib.util.module_from_spec(script)
    script.loader.exec_module(module)

    monkeypatch.setattr(module, "LOGS_PATH", tmp_path / "logs")
    monkeypatch.setattr(module, "DRAFTS_PATH", tmp_path / "drafts")
    monkeypatch.setattr(module, "RESULTS_PATH", tmp_path / "results")
    yield module

    # Handlers point at the runner's captured stdout
    logger.remove()


def invoke(cli, *args, input=None):
    return runner.invoke(cli.app, list(args), input=input)


def draft(tmp_path):
    return json.loads((tmp_path / "drafts" / "wf_resume_draft.json").read_text(encoding="utf-8"))


@pytest.mark.integration
def test_no_command_shows_help(cli):
    """Test that running without a command shows help."""
    result = invoke(cli)
    assert result.exit_code == 0
    assert "set-field" in result.output


@pytest.mark.integration
def test_show_default_draft(cli):
    """Test showing the default draft."""
    result = invoke(cli, "show")

    assert result.exit_code == 0
    assert "Jane Doe" in result.output
    assert "#1 Associate Product Manager @ TechCorp" in result.output


@pytest.mark.integration
def test_show_json(cli):
    """Test showing the draft as stored JSON."""
    result = invoke(cli, "show", "--json")

    assert result.exit_code == 0
    assert '"firstName": "Jane"' in result.output


@pytest.mark.integration
def test_edits_are_persisted(cli, tmp_path):
    """Test that CLI edits are written to the draft file."""
    assert invoke(cli, "set-field", "firstName", "Ada").exit_code == 0
    assert invoke(cli, "set-summary", "Builds engines.").exit_code == 0
    assert invoke(cli, "template", "classic").exit_code == 0
    assert invoke(cli, "skill", "add", "Python").exit_code == 0
    assert invoke(cli, "skill", "remove", "0").exit_code == 0

    data = draft(tmp_path)
    assert data["personal"]["firstName"] == "Ada"
    assert data["summary"] == "Builds engines."
    assert data["template"] == "classic"
    assert data["skills"] == ["Roadmapping", "User Research", "Stakeholder Management", "Python"]
    assert any((tmp_path / "logs").iterdir())


@pytest.mark.integration
def test_invalid_edits_fail_without_saving(cli, tmp_path):
    """Test that ignored edits exit with an error and save nothing."""
    assert invoke(cli, "set-field", "nickname", "JD").exit_code == 1
    assert invoke(cli, "template", "minimal").exit_code == 1
    assert invoke(cli, "skill", "remove", "99").exit_code == 1
    assert invoke(cli, "skill", "add", "   ").exit_code == 1

    assert not (tmp_path / "drafts" / "wf_resume_draft.json").exists()


@pytest.mark.integration
def test_experience_and_education_commands(cli, tmp_path):
    """Test the experience and education sub-commands."""
    result = invoke(cli, "experience", "add", "--title", "Engineer", "--company", "Acme")
    assert result.exit_code == 0
    assert "#3" in result.output

    assert invoke(cli, "experience", "update", "3", "end", "Present").exit_code == 0
    assert invoke(cli, "experience", "remove", "1").exit_code == 0
    assert invoke(cli, "experience", "remove", "1").exit_code == 1
    assert invoke(cli, "education", "add", "--degree", "M.S.", "--year", "2024").exit_code == 0
    assert invoke(cli, "education", "update", "2", "school", "MIT").exit_code == 0
    assert invoke(cli, "education", "update", "2", "gpa", "4.0").exit_code == 1

    data = draft(tmp_path)
    assert [(e["id"], e["title"], e["company"], e["end"]) for e in data["experience"]] == [
        (3, "Engineer", "Acme", "Present")
    ]
    assert [(e["id"], e["degree"], e["school"]) for e in data["education"]] == [
        (2, "B.A. Business Administration", "MIT"),
        (4, "M.S.", ""),
    ]

    assert invoke(cli, "experience", "sample").exit_code == 0
    assert draft(tmp_path)["experience"][0]["company"] == "TechCorp"


@pytest.mark.integration
def test_reset_asks_for_confirmation(cli, tmp_path):
    """Test that reset only proceeds after confirmation."""
    invoke(cli, "set-field", "firstName", "Ada")

    result = invoke(cli, "reset", input="n\n")
    assert "Reset cancelled" in result.output
    assert draft(tmp_path)["personal"]["firstName"] == "Ada"

    result = invoke(cli, "reset", input="y\n")
    assert result.exit_code == 0
    assert not (tmp_path / "drafts" / "wf_resume_draft.json").exists()

    assert "Jane Doe" in invoke(cli, "show").output


@pytest.mark.integration
def test_preview_writes_html(cli, tmp_path):
    """Test writing the HTML preview."""
    output = tmp_path / "preview.html"
    result = invoke(cli, "preview", "--output", str(output), "--template", "classic")

    assert result.exit_code == 0
    html = output.read_text(encoding="utf-8")
    assert 'data-template="classic"' in html
    assert "Jane Doe" in html


@pytest.mark.integration
def test_preview_unknown_preset(cli, tmp_path):
    """Test that an unknown preset fails the preview."""
    result = invoke(cli, "preview", "--output", str(tmp_path / "p.html"), "--preset", "neon")
    assert result.exit_code == 1


@pytest.mark.integration
def test_export_writes_pdf(cli, tmp_path):
    """Test exporting a one-page PDF to a custom directory."""
    invoke(cli, "set-field", "lastName", "")
    result = invoke(cli, "export", "--output-dir", str(tmp_path / "out"), "--preset", "compact")

    assert result.exit_code == 0
    pdf_path = tmp_path / "out" / "Jane-resume.pdf"
    assert pdf_path.exists()
    assert ExportedPDF(pdf_path).page_count == 1
    assert "Pages: 1" in result.output


@pytest.mark.integration
def test_export_default_location(cli, tmp_path):
    """Test exporting to the dated results directory."""
    result = invoke(cli, "export")

    assert result.exit_code == 0
    assert len(list((tmp_path / "results").glob("*/Jane-Doe.pdf"))) == 1
