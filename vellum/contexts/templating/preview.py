"""
Live Preview

Keeps a rendered preview in sync with a DocumentStore: every committed
snapshot is re-rendered into a new visual tree as soon as the store notifies.
"""

from typing import Optional

from vellum.contexts.document.resume_data_structure import ResumeDocument
from vellum.contexts.document.store import DocumentStore
from vellum.contexts.templating.logger import log_preview_failed
from vellum.contexts.templating.renderer import render
from vellum.contexts.templating.style_sheet import StyleSheet, load_style_sheet
from vellum.contexts.templating.template_registry import TemplateRegistry
from vellum.contexts.templating.visual_tree import VisualTree


class LivePreview:
    """
    Store observer holding the current visual tree and its HTML.

    The HTML is rendered lazily, on first access after each refresh.

    Example:
        preview = LivePreview(store)
        store.set_template("classic")
        preview.tree.variant  # TemplateVariant.CLASSIC
        preview.close()
    """

    def __init__(
        self,
        store: DocumentStore,
        style_sheet: StyleSheet = None,
        registry: TemplateRegistry = None,
    ):
        self.store = store
        self.style_sheet = style_sheet or load_style_sheet()
        self.registry = registry or TemplateRegistry()
        self.refresh_count = 0

        self._tree = render(store.snapshot)
        self._html: Optional[str] = None
        self._unsubscribe = store.subscribe(self.refresh)

    def refresh(self, document: ResumeDocument) -> None:
        """Re-render from a new snapshot. On failure the previous preview is kept."""
        try:
            tree = render(document)
        except ValueError as e:
            log_preview_failed(e)
            return
        self._tree = tree
        self._html = None
        self.refresh_count += 1

    @property
    def tree(self) -> VisualTree:
        return self._tree

    @property
    def html(self) -> str:
        if self._html is None:
            self._html = self.registry.render_html(self._tree, self.style_sheet)
        return self._html

    def close(self) -> None:
        """Stop following the store."""
        self._unsubscribe()
