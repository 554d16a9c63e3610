from __future__ import annotations

import json
import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from .elements import DrawingElement, Point, Stroke, element_from_wire, element_to_wire

logger = logging.getLogger(__name__)


class DrawingLog:
    """Append-only, ordered log of drawing elements.

    Elements are immutable once appended. The only in-place growth is adding
    points to the stroke currently being drawn (the last element). The log is
    replaced wholesale by ``clear()`` or by loading stored data.
    """

    def __init__(self, elements: Iterable[DrawingElement] = ()):
        self._elements: List[DrawingElement] = list(elements)

    @property
    def elements(self) -> Tuple[DrawingElement, ...]:
        return tuple(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[DrawingElement]:
        return iter(tuple(self._elements))

    def __eq__(self, other) -> bool:
        if not isinstance(other, DrawingLog):
            return NotImplemented
        return self._elements == other._elements

    def __repr__(self) -> str:
        return f"DrawingLog({len(self._elements)} elements)"

    def append(self, element: DrawingElement) -> None:
        self._elements.append(element)

    def extend_last_freehand_stroke(self, point: Point) -> bool:
        """Add a point to the in-progress pencil/eraser stroke.

        No-op (returns False) when the log is empty or ends with a shape.
        """

        if not self._elements or not isinstance(self._elements[-1], Stroke):
            return False
        self._elements[-1] = self._elements[-1].with_point(point)
        return True

    def clear(self) -> None:
        self._elements = []

    def to_payload(self) -> List[dict]:
        return [element_to_wire(e) for e in self._elements]

    def serialize(self) -> str:
        return json.dumps(self.to_payload())

    @classmethod
    def from_payload(cls, data) -> "DrawingLog":
        """Strict: raises ValueError/KeyError/TypeError on malformed data."""
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of elements, got {type(data).__name__}")
        return cls(element_from_wire(item) for item in data)

    def deserialize(self, text: str) -> bool:
        """Replace the log with the elements encoded in ``text``.

        Malformed input is logged and leaves the log unchanged.
        """

        try:
            loaded = DrawingLog.from_payload(json.loads(text))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Failed to parse drawing data: %s", e)
            return False
        self._elements = loaded._elements
        return True

    @classmethod
    def parse_stored(cls, raw) -> "DrawingLog":
        """Strict form of ``load``: raises ValueError/KeyError/TypeError."""

        if raw is None or raw == "":
            return cls()
        if isinstance(raw, str):
            raw = json.loads(raw)
        return cls.from_payload(raw)

    @classmethod
    def load(cls, raw) -> "DrawingLog":
        """Hydrate from stored note data.

        Accepts the nested element array as well as the older string form that
        held the array JSON-encoded a second time. Malformed data is logged and
        read as an empty log.
        """

        try:
            return cls.parse_stored(raw)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Failed to load drawing data: %s", e)
            return cls()

    def last(self) -> Optional[DrawingElement]:
        return self._elements[-1] if self._elements else None
