"""QR frame decoding and the scan loop used by attendance capture.

A scan loop owns its frame source. Whatever way the loop ends (a decoded
payload, an explicit ``stop()`` or leaving the ``with`` block) the source is
released exactly once.
"""

from __future__ import annotations

import io
import logging
import threading
from typing import Callable, Iterable, Iterator, Optional, Protocol

from PIL import Image

logger = logging.getLogger(__name__)


class QrFrameDecoder:
    """Decode the first QR code found in a frame, via pyzbar."""

    def decode(self, image: Image.Image) -> Optional[str]:
        # libzbar is loaded by pyzbar at import time; only load it when decoding.
        from pyzbar.pyzbar import decode as pyzbar_decode

        for symbol in pyzbar_decode(image.convert("RGB")):
            text = symbol.data.decode("utf-8").strip()
            if text:
                return text
        return None


class FrameSource(Protocol):
    def read(self) -> Optional[Image.Image]:
        """Next frame, or None once the source is exhausted."""
        raise NotImplementedError

    def release(self) -> None:
        raise NotImplementedError


class UploadedFrames(FrameSource):
    """Frame source over encoded image blobs (e.g. files posted by the browser)."""

    def __init__(self, blobs: Iterable[bytes]):
        self._blobs: Iterator[bytes] = iter(blobs)
        self.released = False

    def read(self) -> Optional[Image.Image]:
        if self.released:
            return None
        for blob in self._blobs:
            try:
                with Image.open(io.BytesIO(blob)) as img:
                    return img.convert("RGB")
            except (OSError, ValueError):
                logger.warning("Skipping unreadable frame (%d bytes)", len(blob))
        return None

    def release(self) -> None:
        self.released = True


class QrScanLoop:
    """Poll a frame source until a QR payload is decoded.

    Usage::

        with QrScanLoop(source) as loop:
            payload = loop.run()
    """

    def __init__(
        self,
        source: FrameSource,
        decoder: Optional[QrFrameDecoder] = None,
        *,
        max_frames: Optional[int] = None,
        on_frame: Optional[Callable[[int], None]] = None,
    ):
        self._source = source
        self._decoder = decoder or QrFrameDecoder()
        self._max_frames = max_frames
        self._on_frame = on_frame
        self._stop = threading.Event()
        self._released = False
        self._lock = threading.Lock()
        self.frames_read = 0

    @property
    def running(self) -> bool:
        return not self._released

    def run(self) -> Optional[str]:
        """Return the first decoded payload, or None when stopped or out of frames."""

        try:
            while not self._stop.is_set():
                if self._max_frames is not None and self.frames_read >= self._max_frames:
                    return None
                frame = self._source.read()
                if frame is None:
                    return None
                self.frames_read += 1
                if self._on_frame:
                    self._on_frame(self.frames_read)
                payload = self._decoder.decode(frame)
                if payload:
                    logger.debug("QR decoded after %d frame(s)", self.frames_read)
                    return payload
            return None
        finally:
            self._release()

    def stop(self) -> None:
        self._stop.set()
        self._release()

    def _release(self) -> None:
        with self._lock:
            if self._released:
                return
            self._released = True
        self._source.release()

    def __enter__(self) -> "QrScanLoop":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
