from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Tuple, Union

from PIL import ImageColor

from ...core.constants import BACKGROUND_COLOR, ERASER_WIDTH, INK_COLOR, PEN_WIDTH
from ...core.enums import DrawingTool


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


def _check_style(color, width) -> None:
    if not isinstance(color, str):
        raise ValueError(f"Expected a color string, got {color!r}")
    ImageColor.getrgb(color)
    if width < 0:
        raise ValueError(f"Width must not be negative, got {width!r}")


@dataclass(frozen=True)
class Stroke:
    """Freehand (pencil) or eraser stroke: a polyline in drawing order."""

    tool: DrawingTool
    points: Tuple[Point, ...] = field(default_factory=tuple)
    color: str = INK_COLOR
    width: float = PEN_WIDTH

    def __post_init__(self):
        if not DrawingTool(self.tool).is_stroke:
            raise ValueError(f"{self.tool} is not a stroke tool")
        _check_style(self.color, self.width)
        object.__setattr__(self, "tool", DrawingTool(self.tool))
        object.__setattr__(self, "points", tuple(self.points))

    @classmethod
    def pencil(cls, *points: Point) -> "Stroke":
        return cls(DrawingTool.PENCIL, points, INK_COLOR, PEN_WIDTH)

    @classmethod
    def eraser(cls, *points: Point) -> "Stroke":
        # Erasing paints background over earlier elements, it never removes them.
        return cls(DrawingTool.ERASER, points, BACKGROUND_COLOR, ERASER_WIDTH)

    def with_point(self, point: Point) -> "Stroke":
        return Stroke(self.tool, self.points + (point,), self.color, self.width)


@dataclass(frozen=True)
class Shape:
    """Line, circle or rectangle defined by the drag start and end points."""

    tool: DrawingTool
    start: Point
    end: Point
    color: str = INK_COLOR
    width: float = PEN_WIDTH

    def __post_init__(self):
        if DrawingTool(self.tool).is_stroke:
            raise ValueError(f"{self.tool} is not a shape tool")
        _check_style(self.color, self.width)
        object.__setattr__(self, "tool", DrawingTool(self.tool))

    @property
    def radius(self) -> float:
        """Circle radius: distance from the centre (start) to end."""
        return math.hypot(self.end.x - self.start.x, self.end.y - self.start.y)

    def bounds(self) -> Tuple[float, float, float, float]:
        """Axis-aligned box spanning start and end, normalised to x0<=x1, y0<=y1."""
        return (
            min(self.start.x, self.end.x),
            min(self.start.y, self.end.y),
            max(self.start.x, self.end.x),
            max(self.start.y, self.end.y),
        )


DrawingElement = Union[Stroke, Shape]


def element_to_wire(element: DrawingElement) -> dict:
    if isinstance(element, Stroke):
        return {
            "type": element.tool.value,
            "points": [{"x": p.x, "y": p.y} for p in element.points],
            "color": element.color,
            "width": element.width,
        }
    return {
        "type": element.tool.value,
        "startX": element.start.x,
        "startY": element.start.y,
        "endX": element.end.x,
        "endY": element.end.y,
        "color": element.color,
        "width": element.width,
    }


def _number(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Expected a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"Expected a finite number, got {value!r}")
    return value


def element_from_wire(data: dict) -> DrawingElement:
    """Build an element from its JSON object form.

    Raises ValueError (or KeyError/TypeError) when the object is not a
    well-formed element.
    """

    if not isinstance(data, dict):
        raise ValueError(f"Expected an object, got {type(data).__name__}")

    tool = DrawingTool(data["type"])
    color = data.get("color") or INK_COLOR
    width = data.get("width")
    width = PEN_WIDTH if width is None else _number(width)

    if tool.is_stroke:
        points = tuple(Point(_number(p["x"]), _number(p["y"])) for p in data.get("points") or [])
        return Stroke(tool, points, color, width)

    return Shape(
        tool,
        Point(_number(data["startX"]), _number(data["startY"])),
        Point(_number(data["endX"]), _number(data["endY"])),
        color,
        width,
    )
