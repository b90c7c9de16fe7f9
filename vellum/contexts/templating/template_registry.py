import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateNotFound,
)

from vellum.contexts.templating.exceptions import TemplateRenderError
from vellum.contexts.templating.style_sheet import StyleSheet, load_style_sheet
from vellum.contexts.templating.visual_tree import VisualTree

load_dotenv()
TEMPLATES_PATH = Path(os.getenv("VELLUM_TEMPLATES_PATH", Path(__file__).parent / "templates"))


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for the HTML preview.

    Templates are stored in vellum/contexts/templating/templates/{name}.html.jinja.
    Autoescaping is on, so résumé text containing markup displays literally.
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding the templates. Defaults to
                            VELLUM_TEMPLATES_PATH from environment
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def get_template(self, name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            name: Template name (e.g., 'preview')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        template_file = f"{name}.html.jinja"

        try:
            template = self.env.get_template(template_file)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template '{name}' not found at {self.templates_path / template_file}"
            ) from e

        self._cache[name] = template
        return template

    def get_template_path(self, name: str) -> Path:
        """Get the file path for a template."""
        return self.templates_path / f"{name}.html.jinja"

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        return name in self._cache

    def render_html(
        self, tree: VisualTree, style_sheet: StyleSheet, template_name: str = "preview"
    ) -> str:
        """
        Render a visual tree to a standalone HTML page.

        Raises:
            TemplateRenderError: If the template fails to render
        """
        template = self.get_template(template_name)
        name_node = tree.find("name")
        try:
            return template.render(
                root=tree.root,
                variant=tree.variant.value,
                title=name_node.text.strip() if name_node else "",
                page=style_sheet.page,
                styles=style_sheet.resolved_styles(),
                fonts=style_sheet.fonts,
            )
        except TemplateError as e:
            raise TemplateRenderError(
                "Failed to render HTML preview",
                template_name=template_name,
                template_path=self.get_template_path(template_name),
                original_error=e,
            ) from e


def render_html(
    tree: VisualTree, style_sheet: StyleSheet = None, registry: TemplateRegistry = None
) -> str:
    """Render a visual tree to HTML with the default registry and style sheet."""
    registry = registry or TemplateRegistry()
    return registry.render_html(tree, style_sheet or load_style_sheet())
