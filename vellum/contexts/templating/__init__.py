"""
Templating Context

Responsibilities:
- Maps résumé snapshots onto visual trees (Modern and Classic layouts)
- Resolves layout styles from the style sheet and its presets
- Renders visual trees to an HTML preview through Jinja2 templates
- Keeps a live preview in sync with the document store

Owns: Layout templates, visual tree structure, style sheet, HTML preview
Never: Mutates documents or rasterizes output
"""

from vellum.contexts.templating.preview import LivePreview
from vellum.contexts.templating.renderer import render
from vellum.contexts.templating.style_sheet import StyleSheet, load_style_sheet
from vellum.contexts.templating.template_registry import TemplateRegistry, render_html
from vellum.contexts.templating.visual_tree import VisualNode, VisualTree

__all__ = [
    # Rendering
    "render",
    "render_html",
    "LivePreview",
    # Structures
    "VisualNode",
    "VisualTree",
    # Styles and templates
    "StyleSheet",
    "load_style_sheet",
    "TemplateRegistry",
]
