from __future__ import annotations

import io
import threading

import pytest
from PIL import Image

from src.invention_station.invention_station.attendance.qr_codes import user_qr_png
from src.invention_station.invention_station.attendance.scanner import (
    QrFrameDecoder,
    QrScanLoop,
    UploadedFrames,
)


class FakeSource:
    def __init__(self, frames):
        self._frames = list(frames)
        self.release_calls = 0

    def read(self):
        return self._frames.pop(0) if self._frames else None

    def release(self):
        self.release_calls += 1


class ScriptedDecoder:
    """Returns the scripted payload for each frame in turn."""

    def __init__(self, payloads):
        self._payloads = list(payloads)

    def decode(self, image):
        return self._payloads.pop(0)


def _frames(n):
    return [Image.new("RGB", (8, 8), "white") for _ in range(n)]


def test_loop_stops_and_releases_on_first_payload():
    source = FakeSource(_frames(5))
    loop = QrScanLoop(source, ScriptedDecoder([None, None, "3", "4", "5"]))

    assert loop.run() == "3"
    assert loop.frames_read == 3
    assert source.release_calls == 1
    assert not loop.running


def test_loop_releases_when_source_runs_dry():
    source = FakeSource(_frames(2))

    assert QrScanLoop(source, ScriptedDecoder([None, None])).run() is None
    assert source.release_calls == 1


def test_explicit_stop_releases_once():
    source = FakeSource(_frames(3))
    loop = QrScanLoop(source, ScriptedDecoder([None] * 3))

    loop.stop()
    loop.stop()

    assert loop.run() is None
    assert loop.frames_read == 0
    assert source.release_calls == 1


def test_stop_from_frame_callback_ends_loop():
    source = FakeSource(_frames(10))
    holder = {}

    def on_frame(count):
        if count == 2:
            holder["loop"].stop()

    loop = QrScanLoop(source, ScriptedDecoder([None] * 10), on_frame=on_frame)
    holder["loop"] = loop

    assert loop.run() is None
    assert loop.frames_read == 2
    assert source.release_calls == 1


def test_context_exit_releases_even_without_run():
    source = FakeSource(_frames(1))

    with QrScanLoop(source, ScriptedDecoder([None])):
        pass

    assert source.release_calls == 1


def test_context_exit_releases_on_error():
    source = FakeSource(_frames(1))

    with pytest.raises(RuntimeError):
        with QrScanLoop(source, ScriptedDecoder([None])):
            raise RuntimeError("view closed")

    assert source.release_calls == 1


def test_max_frames_bounds_polling():
    source = FakeSource(_frames(10))
    loop = QrScanLoop(source, ScriptedDecoder([None] * 10), max_frames=4)

    assert loop.run() is None
    assert loop.frames_read == 4
    assert source.release_calls == 1


def test_stop_from_another_thread():
    release = threading.Event()

    class BlockingSource(FakeSource):
        def read(self):
            release.wait(timeout=5)
            return super().read()

    source = BlockingSource(_frames(100))
    loop = QrScanLoop(source, ScriptedDecoder([None] * 100))
    result = {}
    worker = threading.Thread(target=lambda: result.setdefault("payload", loop.run()))
    worker.start()

    loop.stop()
    release.set()
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert result["payload"] is None
    assert source.release_calls == 1


def test_uploaded_frames_skip_unreadable_blobs():
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), "white").save(buf, format="PNG")
    source = UploadedFrames([b"not an image", buf.getvalue()])

    frame = source.read()
    assert frame is not None and frame.size == (4, 4)
    assert source.read() is None

    source.release()
    assert source.released


def test_user_qr_png_decodes_to_user_id():
    pytest.importorskip("pyzbar.pyzbar")

    with Image.open(io.BytesIO(user_qr_png("3"))) as img:
        assert QrFrameDecoder().decode(img) == "3"


def test_scan_loop_with_real_decoder():
    pytest.importorskip("pyzbar.pyzbar")
    blank = io.BytesIO()
    Image.new("RGB", (64, 64), "white").save(blank, format="PNG")

    source = UploadedFrames([blank.getvalue(), user_qr_png("instructor-2")])
    with QrScanLoop(source) as loop:
        assert loop.run() == "instructor-2"
    assert loop.frames_read == 2
    assert source.released
