"""
Raster Capture

Draws a laid out visual tree into a Pillow image at an upscaling factor
(2x by default) for a sharper exported page.
"""

import math
import os

from dotenv import load_dotenv
from PIL import Image, ImageDraw

from vellum.contexts.rendering.exceptions import ExportCaptureError
from vellum.contexts.rendering.layout import FontBook, LayoutBox, measure_layout
from vellum.contexts.templating.style_sheet import StyleSheet, load_style_sheet
from vellum.contexts.templating.visual_tree import VisualTree

load_dotenv()
CAPTURE_SCALE = float(os.getenv("CAPTURE_SCALE", "2"))
MAX_CAPTURE_PIXELS = int(os.getenv("MAX_CAPTURE_PIXELS", "40000000"))


def _draw_lines(draw, lines, box_x, box_width, top, line_height, style, font, align, scale):
    # Center each line's glyphs vertically within its line box
    half_leading = (line_height - style["size"]) / 2
    for i, line in enumerate(lines):
        line_width = font.getlength(line)
        if align == "right":
            left = (box_x + box_width) * scale - line_width
        elif align == "center":
            left = (box_x + box_width / 2) * scale - line_width / 2
        else:
            left = box_x * scale
        line_top = (top + i * line_height + half_leading) * scale
        draw.text((left, line_top), line, fill=style["color"], font=font)


def _draw_box(draw: ImageDraw.ImageDraw, box: LayoutBox, fonts: FontBook, scale: float) -> None:
    node = box.node
    if node.kind not in ("text", "tags", "rule"):
        return

    style = fonts.style_sheet.style(node.style)

    if node.kind == "text":
        _draw_lines(
            draw, box.lines, box.x, box.width, box.y, box.line_height,
            style, fonts.font(node.style), node.align, scale,
        )
    elif node.kind == "rule":
        top = box.y * scale
        bottom = max(top, (box.y + box.height) * scale - 1)
        draw.rectangle(
            [box.x * scale, top, (box.x + box.width) * scale, bottom], fill=style["color"]
        )
    else:
        font = fonts.font(node.style)
        for chip in box.chips:
            if style["background"]:
                draw.rounded_rectangle(
                    [
                        chip.x * scale,
                        chip.y * scale,
                        (chip.x + chip.width) * scale,
                        (chip.y + chip.height) * scale,
                    ],
                    radius=style["radius"] * scale,
                    fill=style["background"],
                )
            _draw_lines(
                draw, chip.lines, chip.x + style["padding_x"], chip.width - 2 * style["padding_x"],
                chip.y + style["padding_y"], box.line_height, style, font, "left", scale,
            )


def capture_layout(
    layout: LayoutBox,
    style_sheet: StyleSheet = None,
    scale: float = CAPTURE_SCALE,
    max_pixels: int = MAX_CAPTURE_PIXELS,
) -> Image.Image:
    """
    Rasterize a layout into an RGB image of ceil(width*scale) x ceil(height*scale).

    Args:
        layout: Root box from measure_layout()
        style_sheet: Style sheet the layout was measured with
        scale: Upscaling factor
        max_pixels: Largest image (width * height) allowed

    Returns:
        PIL Image

    Raises:
        ExportCaptureError: If the layout is empty, too large, or drawing fails
    """
    style_sheet = style_sheet or load_style_sheet()
    width_px = math.ceil(layout.width * scale)
    height_px = math.ceil(layout.height * scale)

    if width_px <= 0 or height_px <= 0:
        raise ExportCaptureError(f"Nothing to capture: bounding box is {width_px}x{height_px} px")
    if width_px * height_px > max_pixels:
        raise ExportCaptureError(
            f"Capture of {width_px}x{height_px} px exceeds the {max_pixels} pixel limit"
        )

    fonts = FontBook(style_sheet, scale)
    try:
        image = Image.new("RGB", (width_px, height_px), style_sheet.page["background"] or "white")
        draw = ImageDraw.Draw(image)
        for box in layout.iter_boxes():
            _draw_box(draw, box, fonts, scale)
    except (OSError, ValueError, KeyError, MemoryError) as e:
        raise ExportCaptureError("Failed to rasterize visual tree", original_error=e) from e

    return image


def capture_visual_tree(
    tree: VisualTree, style_sheet: StyleSheet = None, scale: float = CAPTURE_SCALE
) -> Image.Image:
    """Measure and rasterize a visual tree in one step."""
    style_sheet = style_sheet or load_style_sheet()
    try:
        layout = measure_layout(tree, style_sheet, scale)
    except (KeyError, ValueError) as e:
        raise ExportCaptureError("Failed to lay out visual tree", original_error=e) from e
    return capture_layout(layout, style_sheet, scale)
