"""
Visual Tree

In-memory representation of a rendered résumé layout, produced by the
renderer and consumed by the HTML preview and the export pipeline.

Node kinds:
- block: children stacked vertically
- row:   children side by side, widths split by weights
- text:  wrapped text in one style
- tags:  wrapping list of chips (one per item in `items`)
- rule:  horizontal separator

Nodes carry style names only; sizes and colors are resolved against a style
sheet at layout time. Trees are immutable, so a tree rendered from a snapshot
stays a faithful picture of that snapshot.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from vellum.contexts.document.resume_data_structure import TemplateVariant

NODE_KINDS = ("block", "row", "text", "tags", "rule")
ALIGNMENTS = ("left", "center", "right")


@dataclass(frozen=True)
class VisualNode:
    """
    One node of the visual tree.

    Attributes:
        kind: One of NODE_KINDS
        style: Style sheet entry used for this node
        text: Text content (text nodes)
        items: Chip labels (tags nodes)
        children: Child nodes (block and row nodes)
        align: Horizontal text alignment
        weights: Relative column widths (row nodes, defaults to equal)
        role: Semantic tag, e.g. "section:experience", "experience-entry"
        key: Entry id for entry nodes
    """

    kind: str
    style: str = ""
    text: str = ""
    items: Tuple[str, ...] = ()
    children: Tuple["VisualNode", ...] = ()
    align: str = "left"
    weights: Tuple[float, ...] = ()
    role: str = ""
    key: str = ""

    def __post_init__(self):
        if self.kind not in NODE_KINDS:
            raise ValueError(f"Invalid node kind: {self.kind}. Must be one of {NODE_KINDS}")
        if self.align not in ALIGNMENTS:
            raise ValueError(f"Invalid alignment: {self.align}. Must be one of {ALIGNMENTS}")
        if self.weights and len(self.weights) != len(self.children):
            raise ValueError(
                f"Row has {len(self.children)} children but {len(self.weights)} weights"
            )

    @property
    def column_weights(self) -> Tuple[float, ...]:
        return self.weights or tuple(1.0 for _ in self.children)

    def iter_nodes(self) -> Iterator["VisualNode"]:
        """Depth-first, document-order traversal including self."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def find_all(self, role: str) -> List["VisualNode"]:
        """All nodes with the given role, in document order."""
        return [node for node in self.iter_nodes() if node.role == role]

    def find(self, role: str) -> Optional["VisualNode"]:
        return next((node for node in self.iter_nodes() if node.role == role), None)

    def texts(self) -> List[str]:
        """Every text and chip label under this node, in document order."""
        collected = []
        for node in self.iter_nodes():
            if node.kind == "text":
                collected.append(node.text)
            elif node.kind == "tags":
                collected.extend(node.items)
        return collected


@dataclass(frozen=True)
class VisualTree:
    """A rendered résumé: root node plus the template that produced it."""

    root: VisualNode
    variant: TemplateVariant

    def find_all(self, role: str) -> List[VisualNode]:
        return self.root.find_all(role)

    def find(self, role: str) -> Optional[VisualNode]:
        return self.root.find(role)


# Builders


def block(*children: VisualNode, style: str = "", role: str = "", key: str = "") -> VisualNode:
    return VisualNode(kind="block", style=style, children=tuple(children), role=role, key=key)


def row(
    *children: VisualNode,
    weights: Tuple[float, ...] = (),
    style: str = "",
    role: str = "",
    key: str = "",
) -> VisualNode:
    return VisualNode(
        kind="row", style=style, children=tuple(children), weights=weights, role=role, key=key
    )


def text(value: str, style: str, align: str = "left", role: str = "") -> VisualNode:
    return VisualNode(kind="text", style=style, text=value, align=align, role=role)


def tags(items, style: str = "tag", role: str = "") -> VisualNode:
    return VisualNode(kind="tags", style=style, items=tuple(items), role=role)


def rule(style: str = "rule") -> VisualNode:
    return VisualNode(kind="rule", style=style, role="rule")
