from __future__ import annotations

from typing import Callable, Optional

from ...core.enums import DrawingTool
from .elements import Point, Shape, Stroke
from .log import DrawingLog


class DrawingSession:
    """Turns pointer events into log mutations.

    - pencil/eraser: pointer-down starts a stroke, each move adds a point
    - line/circle/rectangle: one shape from the down point to the up point

    ``on_change`` is called after every mutation (typically a full redraw).
    """

    def __init__(
        self,
        log: Optional[DrawingLog] = None,
        *,
        tool: DrawingTool = DrawingTool.PENCIL,
        on_change: Optional[Callable[[DrawingLog], None]] = None,
    ):
        self.log = log if log is not None else DrawingLog()
        self.tool = DrawingTool(tool)
        self._on_change = on_change
        self._start: Optional[Point] = None

    @property
    def is_drawing(self) -> bool:
        return self._start is not None

    def select_tool(self, tool: DrawingTool | str) -> None:
        self.tool = DrawingTool(tool)

    def _changed(self) -> None:
        if self._on_change:
            self._on_change(self.log)

    def pointer_down(self, point: Point) -> None:
        self._start = point
        if self.tool == DrawingTool.PENCIL:
            self.log.append(Stroke.pencil(point))
            self._changed()
        elif self.tool == DrawingTool.ERASER:
            self.log.append(Stroke.eraser(point))
            self._changed()

    def pointer_move(self, point: Point) -> None:
        if not self.is_drawing or not self.tool.is_stroke:
            return
        if self.log.extend_last_freehand_stroke(point):
            self._changed()

    def pointer_up(self, point: Point) -> None:
        if not self.is_drawing:
            return
        if not self.tool.is_stroke:
            self.log.append(Shape(self.tool, self._start, point))
            self._changed()
        self._start = None

    def clear(self) -> None:
        self.log.clear()
        self._start = None
        self._changed()
