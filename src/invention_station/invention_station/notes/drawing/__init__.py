"""Freehand drawing model of the invention notebook.

A drawing is an ordered log of immutable elements (strokes and shapes) that
is replayed in full onto a raster surface whenever it changes.
"""

from .elements import DrawingElement, Point, Shape, Stroke
from .log import DrawingLog
from .renderer import new_surface, redraw, render_png
from .session import DrawingSession

__all__ = [
    "DrawingElement",
    "DrawingLog",
    "DrawingSession",
    "Point",
    "Shape",
    "Stroke",
    "new_surface",
    "redraw",
    "render_png",
]
