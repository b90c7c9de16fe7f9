"""
Style Sheet Resolution

Loads the layout style sheet (styles.yaml) and applies named presets on top of
it. Presets are composable: later presets override earlier ones.

Examples:
    >>> sheet = load_style_sheet()
    >>> sheet.style("heading")["size"]
    16

    >>> sheet = load_style_sheet(presets=["compact", "letter_width"])
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Sequence

from dotenv import load_dotenv
from omegaconf import OmegaConf

from vellum.contexts.templating.exceptions import InvalidStyleSheetError

load_dotenv()
STYLES_PATH = Path(os.getenv("VELLUM_STYLES_PATH", Path(__file__).parent / "styles.yaml"))

# Every style is this mapping with its own overrides on top
DEFAULT_STYLE = {
    "size": 14,
    "bold": False,
    "color": "#111827",
    "line_height": 1.4,
    "gap": 0,
    "padding": 0,
    "background": None,
    "padding_x": 0,
    "padding_y": 0,
    "radius": 0,
    "thickness": 1,
}


class StyleSheet:
    """
    Resolved style sheet.

    Attributes:
        fonts: Font file names ("regular", "bold") and CSS font family ("family")
        styles: Style name -> partial style mapping
    """

    def __init__(self, config: Dict[str, Any]):
        if "styles" not in config or not isinstance(config["styles"], dict):
            raise InvalidStyleSheetError("Style sheet must contain a 'styles' mapping")
        if "page" not in config["styles"]:
            raise InvalidStyleSheetError("Style sheet must define a 'page' style")

        self.fonts: Dict[str, str] = dict(config.get("fonts") or {})
        self.styles: Dict[str, Dict[str, Any]] = {
            name: dict(style or {}) for name, style in config["styles"].items()
        }

    def style(self, name: str) -> Dict[str, Any]:
        """
        Get a complete style (defaults merged with the named entry).

        An empty name yields the defaults.

        Raises:
            KeyError: If the style sheet has no such style
        """
        if not name:
            return dict(DEFAULT_STYLE)
        if name not in self.styles:
            raise KeyError(f"Unknown style '{name}'. Available styles: {sorted(self.styles)}")
        return {**DEFAULT_STYLE, **self.styles[name]}

    @property
    def page(self) -> Dict[str, Any]:
        return self.style("page")

    def resolved_styles(self) -> Dict[str, Dict[str, Any]]:
        """All styles, fully resolved."""
        return {name: self.style(name) for name in self.styles}


def load_style_config(config_path: Path = None) -> Dict[str, Any]:
    """
    Load styles.yaml as a plain dict.

    Args:
        config_path: Optional path (defaults to VELLUM_STYLES_PATH env variable,
                     then the packaged styles.yaml)
    """
    if config_path is None:
        config_path = STYLES_PATH
    return OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)


def apply_style_presets(config: Dict[str, Any], preset_names: Sequence[str]) -> Dict[str, Any]:
    """
    Overlay named presets onto a style config.

    Presets are applied in order, with later presets overriding earlier ones.
    Only the keys a preset names change; everything else is kept.

    Args:
        config: Style config (as loaded by load_style_config)
        preset_names: Preset names to apply (e.g., ["compact", "letter_width"])

    Returns:
        New config with presets applied (input is not modified)

    Raises:
        ValueError: If a preset is not defined
    """
    presets = config.get("presets") or {}
    merged = OmegaConf.create({k: v for k, v in config.items() if k != "presets"})

    for preset_name in preset_names:
        if preset_name not in presets:
            available = list(presets.keys())
            raise ValueError(f"Preset '{preset_name}' not found. Available presets: {available}")
        merged = OmegaConf.merge(merged, presets[preset_name])

    result = OmegaConf.to_container(merged, resolve=True)
    result["presets"] = presets
    return result


def load_style_sheet(config_path: Path = None, presets: List[str] = None) -> StyleSheet:
    """Load the style sheet and apply presets, if any."""
    config = load_style_config(config_path)
    if presets:
        config = apply_style_presets(config, presets)
    return StyleSheet(config)
