from __future__ import annotations

import io
from typing import Iterable, Optional

from PIL import Image, ImageDraw

from ...core.constants import BACKGROUND_COLOR, CANVAS_HEIGHT, CANVAS_WIDTH
from ...core.enums import DrawingTool
from .elements import DrawingElement, Shape, Stroke


def new_surface(width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT, background: str = BACKGROUND_COLOR) -> Image.Image:
    return Image.new("RGB", (width, height), background)


def _pixel_width(width: float) -> int:
    return max(1, int(round(width)))


def _draw_element(draw: ImageDraw.ImageDraw, element: DrawingElement) -> None:
    width = _pixel_width(element.width)

    if isinstance(element, Stroke):
        # A single point is not a line; same as the browser canvas.
        if len(element.points) > 1:
            draw.line([p.as_tuple() for p in element.points], fill=element.color, width=width, joint="curve")
        return

    assert isinstance(element, Shape)
    if element.tool == DrawingTool.LINE:
        draw.line([element.start.as_tuple(), element.end.as_tuple()], fill=element.color, width=width)
    elif element.tool == DrawingTool.CIRCLE:
        r = element.radius
        cx, cy = element.start.as_tuple()
        draw.ellipse((cx - r, cy - r, cx + r, cy + r), outline=element.color, width=width)
    elif element.tool == DrawingTool.RECTANGLE:
        # Pillow rejects x1 < x0, so a drag up/left is normalised first.
        draw.rectangle(element.bounds(), outline=element.color, width=width)


def redraw(
    surface: Optional[Image.Image],
    elements: Iterable[DrawingElement],
    *,
    background: str = BACKGROUND_COLOR,
) -> None:
    """Clear ``surface`` and replay every element in order.

    Full repaint on each call; a missing surface is a no-op.
    """

    if surface is None:
        return

    draw = ImageDraw.Draw(surface)
    draw.rectangle((0, 0, surface.width, surface.height), fill=background)
    for element in elements:
        _draw_element(draw, element)


def render_png(elements: Iterable[DrawingElement], *, width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT) -> bytes:
    surface = new_surface(width, height)
    redraw(surface, elements)
    buf = io.BytesIO()
    surface.save(buf, format="PNG")
    return buf.getvalue()
