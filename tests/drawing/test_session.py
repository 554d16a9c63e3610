from __future__ import annotations

from src.invention_station.invention_station.core.enums import DrawingTool
from src.invention_station.invention_station.notes.drawing import DrawingSession, Point, Shape, Stroke


def test_pencil_drag_builds_one_stroke():
    changes = []
    session = DrawingSession(on_change=changes.append)

    session.pointer_down(Point(0, 0))
    for i in range(1, 4):
        session.pointer_move(Point(i, i))
    session.pointer_up(Point(3, 3))

    (stroke,) = session.log.elements
    assert isinstance(stroke, Stroke)
    assert stroke.tool == DrawingTool.PENCIL
    assert len(stroke.points) == 4
    assert (stroke.color, stroke.width) == ("#000000", 2)
    assert len(changes) == 4
    assert not session.is_drawing


def test_eraser_stroke_is_appended_not_removing_anything():
    session = DrawingSession()
    session.pointer_down(Point(0, 0))
    session.pointer_move(Point(5, 5))
    session.pointer_up(Point(5, 5))

    session.select_tool("eraser")
    session.pointer_down(Point(1, 1))
    session.pointer_move(Point(2, 2))
    session.pointer_up(Point(2, 2))

    first, second = session.log.elements
    assert first.tool == DrawingTool.PENCIL
    assert second.tool == DrawingTool.ERASER
    assert (second.color, second.width) == ("#ffffff", 20)


def test_shape_is_added_on_pointer_up_only():
    session = DrawingSession(tool=DrawingTool.RECTANGLE)

    session.pointer_down(Point(10, 10))
    session.pointer_move(Point(20, 20))
    assert len(session.log) == 0

    session.pointer_up(Point(30, 25))
    assert session.log.elements == (Shape(DrawingTool.RECTANGLE, Point(10, 10), Point(30, 25)),)


def test_move_without_pointer_down_is_ignored():
    session = DrawingSession()
    session.pointer_move(Point(1, 1))
    session.pointer_up(Point(1, 1))

    assert len(session.log) == 0


def test_clear_resets_log():
    session = DrawingSession()
    session.pointer_down(Point(0, 0))
    session.clear()

    assert len(session.log) == 0
    assert not session.is_drawing
