"""
Layout Measurement

Lays a visual tree out in CSS pixels: every node gets a position and size,
text nodes get their wrapped lines, tag lists get their chip positions. The
root box's size is the bounding box the export pipeline captures and uses as
the PDF page size.

Text is measured with the same Pillow fonts the capture step draws with, at
the capture scale, and reported back in unscaled pixels, so wrapping in the
layout matches what ends up in the raster image.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Tuple, Union

from PIL import ImageFont

from vellum.contexts.rendering.logger import _log_debug
from vellum.contexts.templating.style_sheet import StyleSheet, load_style_sheet
from vellum.contexts.templating.visual_tree import VisualNode, VisualTree

FontType = Union[ImageFont.ImageFont, ImageFont.FreeTypeFont]

_TOKEN_PATTERN = re.compile(r"\S+|\s+")


class FontBook:
    """
    Pillow fonts for each style of a style sheet, sized for a raster scale.

    Font files come from the style sheet ("bold" for bold styles, then
    "regular"); when none can be opened, Pillow's built-in font is used.

    Args:
        style_sheet: Style sheet providing sizes and font files
        scale: Raster scale the fonts are sized for
    """

    def __init__(self, style_sheet: StyleSheet, scale: float = 1.0):
        self.style_sheet = style_sheet
        self.scale = scale
        self._cache: Dict[str, FontType] = {}

    def font(self, style_name: str) -> FontType:
        if style_name not in self._cache:
            style = self.style_sheet.style(style_name)
            size = max(1, round(style["size"] * self.scale))
            self._cache[style_name] = self._load(size, bool(style["bold"]))
        return self._cache[style_name]

    def _load(self, size: int, bold: bool) -> FontType:
        fonts = self.style_sheet.fonts
        candidates = ([fonts.get("bold")] if bold else []) + [fonts.get("regular")]
        for candidate in candidates:
            if not candidate:
                continue
            try:
                return ImageFont.truetype(candidate, size)
            except OSError:
                _log_debug(f"Font not available: {candidate}")
        return ImageFont.load_default(size=size)

    def text_width(self, value: str, style_name: str) -> float:
        """Width of a single line of text, in unscaled pixels."""
        return self.font(style_name).getlength(value) / self.scale

    def line_height(self, style_name: str) -> float:
        style = self.style_sheet.style(style_name)
        return style["size"] * style["line_height"]


@dataclass
class Chip:
    """One tag of a tags node."""

    x: float
    y: float
    width: float
    height: float
    lines: List[str]


@dataclass
class LayoutBox:
    """
    Position and size of one visual node, in unscaled pixels.

    Attributes:
        node: The laid out node
        x, y: Top-left corner
        width, height: Box size
        lines: Wrapped lines (text nodes)
        line_height: Height of one line (text and tags nodes)
        chips: Chip placements (tags nodes)
        children: Child boxes (block and row nodes)
    """

    node: VisualNode
    x: float
    y: float
    width: float
    height: float = 0.0
    lines: List[str] = field(default_factory=list)
    line_height: float = 0.0
    chips: List[Chip] = field(default_factory=list)
    children: List["LayoutBox"] = field(default_factory=list)

    @property
    def bounding_box(self) -> Tuple[float, float]:
        return self.width, self.height

    def iter_boxes(self) -> Iterator["LayoutBox"]:
        """Depth-first traversal including self."""
        yield self
        for child in self.children:
            yield from child.iter_boxes()


def wrap_text(value: str, max_width: float, measure: Callable[[str], float]) -> List[str]:
    """
    Greedy word wrap.

    Explicit newlines start new lines. Whitespace inside a line is kept as is;
    a word wider than max_width is split across lines by characters.

    Args:
        value: Text to wrap
        max_width: Available width
        measure: Returns the width of a string

    Returns:
        Wrapped lines (empty list for empty text)
    """
    if not value:
        return []

    lines = []
    for paragraph in value.split("\n"):
        current = ""
        for token in _TOKEN_PATTERN.findall(paragraph):
            if measure(current + token) <= max_width:
                current += token
                continue
            if token.isspace():
                # Break at the whitespace, which doesn't carry to the next line
                lines.append(current)
                current = ""
                continue
            if current.strip():
                lines.append(current.rstrip())
                current = ""
            for char in token:
                if current and measure(current + char) > max_width:
                    lines.append(current)
                    current = ""
                current += char
        lines.append(current.rstrip())

    return lines


def _layout_text(node, x, y, width, fonts) -> LayoutBox:
    lines = wrap_text(node.text, width, lambda s: fonts.text_width(s, node.style))
    line_height = fonts.line_height(node.style)
    return LayoutBox(
        node, x, y, width, height=len(lines) * line_height, lines=lines, line_height=line_height
    )


def _layout_tags(node, x, y, width, fonts, style) -> LayoutBox:
    line_height = fonts.line_height(node.style)
    pad_x, pad_y, gap = style["padding_x"], style["padding_y"], style["gap"]
    inner_max = max(width - 2 * pad_x, 1)

    chips = []
    cx, cy, row_height = x, y, 0.0
    for item in node.items:
        text_width = fonts.text_width(item, node.style)
        if text_width <= inner_max:
            chip_lines, chip_width = [item], text_width + 2 * pad_x
        else:
            chip_lines = wrap_text(item, inner_max, lambda s: fonts.text_width(s, node.style))
            chip_width = width
        chip_height = max(len(chip_lines), 1) * line_height + 2 * pad_y

        # Wrap to the next chip row
        if cx > x and cx + chip_width > x + width:
            cx, cy, row_height = x, cy + row_height + gap, 0.0

        chips.append(Chip(cx, cy, chip_width, chip_height, chip_lines))
        cx += chip_width + gap
        row_height = max(row_height, chip_height)

    height = (cy - y + row_height) if chips else 0.0
    return LayoutBox(node, x, y, width, height=height, line_height=line_height, chips=chips)


def _layout_row(node, x, y, width, fonts, style) -> LayoutBox:
    gap = style["gap"]
    weights = node.column_weights
    total = sum(weights)
    available = max(width - gap * (len(node.children) - 1), 0)

    children = []
    cx = x
    for child, weight in zip(node.children, weights):
        child_width = available * weight / total if total > 0 else 0.0
        children.append(_layout(child, cx, y, child_width, fonts))
        cx += child_width + gap

    height = max((box.height for box in children), default=0.0)
    return LayoutBox(node, x, y, width, height=height, children=children)


def _layout_block(node, x, y, width, fonts, style) -> LayoutBox:
    padding, gap = style["padding"], style["gap"]
    inner_width = max(width - 2 * padding, 0)

    children = []
    cy = y + padding
    for i, child in enumerate(node.children):
        if i:
            cy += gap
        box = _layout(child, x + padding, cy, inner_width, fonts)
        children.append(box)
        cy += box.height

    return LayoutBox(node, x, y, width, height=cy - y + padding, children=children)


def _layout(node: VisualNode, x: float, y: float, width: float, fonts: FontBook) -> LayoutBox:
    style = fonts.style_sheet.style(node.style)
    if node.kind == "text":
        return _layout_text(node, x, y, width, fonts)
    if node.kind == "tags":
        return _layout_tags(node, x, y, width, fonts, style)
    if node.kind == "rule":
        return LayoutBox(node, x, y, width, height=style["thickness"])
    if node.kind == "row":
        return _layout_row(node, x, y, width, fonts, style)
    if node.kind == "block":
        return _layout_block(node, x, y, width, fonts, style)
    raise ValueError(f"Unknown node kind: {node.kind}")


def measure_layout(
    tree: VisualTree, style_sheet: StyleSheet = None, scale: float = 1.0
) -> LayoutBox:
    """
    Lay out a visual tree at the page width of the style sheet.

    Args:
        tree: Visual tree to lay out
        style_sheet: Style sheet (default: packaged styles.yaml)
        scale: Raster scale to measure text at

    Returns:
        Root LayoutBox; its bounding_box is the tree's width x height in px

    Raises:
        KeyError: If a node references a style the sheet doesn't define
    """
    style_sheet = style_sheet or load_style_sheet()
    fonts = FontBook(style_sheet, scale)
    return _layout(tree.root, 0.0, 0.0, float(style_sheet.page["width"]), fonts)
