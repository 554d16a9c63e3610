from __future__ import annotations

import json

import pytest

from src.invention_station.invention_station.core.enums import DrawingTool
from src.invention_station.invention_station.notes.drawing import DrawingLog, Point, Shape, Stroke


def _sample_log() -> DrawingLog:
    log = DrawingLog()
    log.append(Stroke.pencil(Point(1, 1), Point(5, 5), Point(9, 2)))
    log.append(Shape(DrawingTool.RECTANGLE, Point(10, 10), Point(50, 40)))
    log.append(Stroke.eraser(Point(3, 3), Point(4, 4)))
    log.append(Shape(DrawingTool.CIRCLE, Point(100, 100), Point(110, 100)))
    log.append(Shape(DrawingTool.LINE, Point(0, 0), Point(20, 30)))
    return log


def test_serialize_then_deserialize_gives_equal_log():
    log = _sample_log()

    restored = DrawingLog()
    assert restored.deserialize(log.serialize()) is True

    assert restored == log
    assert restored.elements == log.elements


def test_wire_format_uses_point_list_and_start_end_fields():
    payload = json.loads(_sample_log().serialize())

    assert payload[0] == {
        "type": "pencil",
        "points": [{"x": 1, "y": 1}, {"x": 5, "y": 5}, {"x": 9, "y": 2}],
        "color": "#000000",
        "width": 2,
    }
    assert payload[1] == {
        "type": "rectangle",
        "startX": 10,
        "startY": 10,
        "endX": 50,
        "endY": 40,
        "color": "#000000",
        "width": 2,
    }
    assert payload[2]["color"] == "#ffffff"
    assert payload[2]["width"] == 20


def test_extending_pencil_stroke_n_times_adds_n_points():
    log = DrawingLog([Stroke.pencil(Point(0, 0))])

    for i in range(1, 8):
        assert log.extend_last_freehand_stroke(Point(i, i)) is True

    assert len(log) == 1
    assert len(log.last().points) == 8


def test_extend_is_noop_on_empty_log_or_after_shape():
    empty = DrawingLog()
    assert empty.extend_last_freehand_stroke(Point(1, 1)) is False
    assert len(empty) == 0

    shape = Shape(DrawingTool.LINE, Point(0, 0), Point(3, 3))
    log = DrawingLog([shape])
    assert log.extend_last_freehand_stroke(Point(1, 1)) is False
    assert log.elements == (shape,)


def test_extend_leaves_earlier_elements_untouched():
    first = Stroke.pencil(Point(0, 0), Point(1, 1))
    log = DrawingLog([first, Stroke.pencil(Point(5, 5))])

    log.extend_last_freehand_stroke(Point(6, 6))

    assert log.elements[0] is first


def test_clear_empties_log():
    log = _sample_log()
    log.clear()

    assert len(log) == 0
    assert log.serialize() == "[]"


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        '{"type": "pencil"}',
        '[{"type": "spray", "points": []}]',
        '[{"type": "line", "startX": 0, "startY": 0}]',
        '[{"type": "pencil", "points": [{"x": "a", "y": 1}]}]',
        '[{"type": "pencil", "points": [], "color": "not-a-color"}]',
    ],
)
def test_malformed_text_keeps_prior_state(text, caplog):
    log = _sample_log()
    before = log.elements

    with caplog.at_level("WARNING"):
        assert log.deserialize(text) is False

    assert log.elements == before
    assert "Failed to parse drawing data" in caplog.text


def test_load_accepts_nested_array_and_legacy_string():
    payload = _sample_log().to_payload()

    assert DrawingLog.load(payload) == _sample_log()
    assert DrawingLog.load(json.dumps(payload)) == _sample_log()
    assert len(DrawingLog.load(None)) == 0
    assert len(DrawingLog.load("garbage")) == 0


def test_stroke_rejects_shape_tool():
    with pytest.raises(ValueError):
        Stroke(DrawingTool.CIRCLE, (Point(0, 0),))


def test_zero_width_is_kept():
    log = DrawingLog()

    assert log.deserialize('[{"type": "line", "startX": 0, "startY": 0, "endX": 5, "endY": 5, "width": 0}]')
    assert log.elements[0].width == 0
    assert log.to_payload()[0]["width"] == 0


def test_missing_width_uses_pen_width():
    log = DrawingLog.load([{"type": "pencil", "points": []}])

    assert log.elements[0].width == 2


@pytest.mark.parametrize(
    "build",
    [
        lambda: Stroke(DrawingTool.PENCIL, (), "nope"),
        lambda: Shape(DrawingTool.LINE, Point(0, 0), Point(1, 1), color=5),
        lambda: Shape(DrawingTool.RECTANGLE, Point(0, 0), Point(1, 1), width=-1),
    ],
)
def test_elements_reject_bad_color_or_width(build):
    with pytest.raises(ValueError):
        build()
