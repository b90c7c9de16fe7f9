"""Unit tests for style sheet loading and presets."""

import pytest

from vellum.contexts.templating.exceptions import InvalidStyleSheetError
from vellum.contexts.templating.style_sheet import (
    DEFAULT_STYLE,
    StyleSheet,
    apply_style_presets,
    load_style_config,
    load_style_sheet,
)


@pytest.mark.unit
def test_load_packaged_style_sheet():
    """Test loading the packaged styles.yaml."""
    sheet = load_style_sheet()

    assert sheet.page["width"] == 850
    assert sheet.page["padding"] == 24
    assert sheet.style("heading")["size"] == 16
    assert sheet.style("heading")["bold"] is True
    assert sheet.fonts["regular"].endswith(".ttf")


@pytest.mark.unit
def test_style_merges_defaults():
    """Test that styles are filled from defaults."""
    sheet = load_style_sheet()
    body = sheet.style("body")

    assert body["size"] == 14
    assert body["line_height"] == DEFAULT_STYLE["line_height"]
    assert body["padding"] == 0


@pytest.mark.unit
def test_empty_style_name_gives_defaults():
    """Test that an empty style name yields the defaults."""
    assert load_style_sheet().style("") == DEFAULT_STYLE


@pytest.mark.unit
def test_unknown_style_raises():
    """Test that an unknown style name raises KeyError."""
    with pytest.raises(KeyError, match="Unknown style"):
        load_style_sheet().style("sparkle")


@pytest.mark.unit
def test_presets_override_in_order():
    """Test that later presets override earlier ones."""
    config = load_style_config()
    result = apply_style_presets(config, ["compact", "large_print"])
    sheet = StyleSheet(result)

    # large_print applied last wins
    assert sheet.style("body")["size"] == 16
    # compact-only keys survive
    assert sheet.page["padding"] == 16
    # untouched keys kept
    assert sheet.page["width"] == 850


@pytest.mark.unit
def test_presets_do_not_modify_input():
    """Test that applying presets leaves the input config unchanged."""
    config = load_style_config()
    apply_style_presets(config, ["letter_width"])

    assert config["styles"]["page"]["width"] == 850


@pytest.mark.unit
def test_unknown_preset_raises():
    """Test that an unknown preset raises InvalidStyleSheetError."""
    with pytest.raises(ValueError, match="Preset 'neon' not found"):
        load_style_sheet(presets=["neon"])


@pytest.mark.unit
def test_custom_style_file(tmp_path):
    """Test loading a style sheet from a custom path."""
    path = tmp_path / "styles.yaml"
    path.write_text("styles:\n  page: {width: 400}\n  body: {size: 10}\n", encoding="utf-8")
    sheet = load_style_sheet(path)

    assert sheet.page["width"] == 400
    assert sheet.style("body")["size"] == 10
    assert sheet.fonts == {}


@pytest.mark.unit
@pytest.mark.parametrize(
    "config",
    [{}, {"styles": []}, {"styles": {"body": {"size": 10}}}],
    ids=["no-styles", "styles-not-mapping", "no-page"],
)
def test_invalid_style_sheet(config):
    """Test that a malformed style sheet raises InvalidStyleSheetError."""
    with pytest.raises(InvalidStyleSheetError):
        StyleSheet(config)
