from __future__ import annotations

import io

import pytest
from PIL import Image

from src.invention_station.invention_station.main import create_app


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(
        {
            "STORAGE_BACKEND": "file",
            "DATA_DIR": str(tmp_path / "data"),
            "AUTO_SEED_DB": True,
            "TESTING": True,
        }
    )


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username, password):
    return client.post("/api/login", json={"username": username, "password": password})


def test_login_me_logout(client):
    resp = login(client, "admin001", "admin123")
    assert resp.status_code == 200
    assert resp.get_json()["user"]["role_label"] == "職員"
    assert "passwordHash" not in resp.get_json()["user"]

    assert client.get("/api/me").get_json()["user"]["username"] == "admin001"

    client.post("/api/logout")
    resp = client.get("/api/me")
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_bad_login_is_401_and_missing_fields_400(client):
    assert login(client, "admin001", "nope").status_code == 401
    assert login(client, "", "").status_code == 400


def test_dashboard_access_flags(client):
    login(client, "parent001", "parent123")
    data = client.get("/api/dashboard").get_json()

    assert data["access"]["schedule"] is True
    assert data["access"]["attendance"] is False
    assert data["material_count"] == 0
    assert [n["id"] for n in data["recent_notices"]] == ["1"]
    assert data["user_count"] is None


def test_role_guards(client):
    login(client, "student001", "student123")

    assert client.get("/api/accounts").status_code == 403
    assert client.get("/api/attendance").status_code == 403
    assert client.get("/api/shifts").status_code == 403
    assert client.get("/api/schedule").status_code == 200


def test_domain_errors_map_to_status(client):
    login(client, "instructor001", "inst123")

    assert client.get("/api/materials/999").status_code == 404
    assert client.post("/api/materials", json={"title": ""}).status_code == 400

    assert client.post("/api/attendance", json={"user_id": "3"}).status_code == 201
    resp = client.post("/api/attendance", json={"user_id": "3"})
    assert resp.status_code == 409
    assert resp.get_json()["message"] == "生徒 一郎さんは既に出席済みです。"

    roster = client.get("/api/attendance/roster").get_json()["students"]
    assert roster == [
        {"user_id": "3", "name": "生徒 一郎", "grade": "5年", "classroom": "A教室", "recorded": True}
    ]


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_account_bulk_import(client):
    login(client, "admin001", "admin123")

    resp = client.post("/api/accounts/bulk", json={"text": "student002,pw0002,生徒 二郎,student"})
    assert resp.status_code == 201
    assert resp.get_json()["created"] == 1

    resp = client.post("/api/accounts/bulk", json={"text": "x,y,z,coach"})
    assert resp.status_code == 400
    assert "行1" in resp.get_json()["message"]


def test_change_password_then_login(client):
    login(client, "student001", "student123")
    resp = client.post(
        "/api/me/password",
        json={"current_password": "student123", "new_password": "newpass1", "confirm_password": "newpass1"},
    )
    assert resp.status_code == 200

    client.post("/api/logout")
    assert login(client, "student001", "newpass1").status_code == 200


def test_note_lifecycle_with_drawing(client):
    login(client, "student001", "student123")
    drawing = [
        {"type": "pencil", "points": [{"x": 1, "y": 1}, {"x": 30, "y": 30}], "color": "#000000", "width": 2},
        {"type": "rectangle", "startX": 50, "startY": 50, "endX": 10, "endY": 10, "color": "#000000", "width": 2},
    ]

    resp = client.post("/api/notes", json={"title": "ロボットアーム", "drawing": drawing})
    assert resp.status_code == 201
    note_id = resp.get_json()["note"]["id"]

    detail = client.get(f"/api/notes/{note_id}").get_json()["note"]
    assert detail["drawing"] == drawing

    png = client.get(f"/api/notes/{note_id}/drawing.png")
    assert png.mimetype == "image/png"

    bad = client.put(f"/api/notes/{note_id}", json={"title": "x", "drawing": [{"type": "spray"}]})
    assert bad.status_code == 400

    client.post("/api/logout")
    login(client, "parent001", "parent123")
    assert [n["id"] for n in client.get("/api/notes").get_json()["notes"]] == [note_id]
    assert client.delete(f"/api/notes/{note_id}").status_code == 403


def test_my_qr_png(client):
    login(client, "student001", "student123")
    resp = client.get("/api/me/qr.png")

    assert resp.status_code == 200
    assert resp.mimetype == "image/png"


class FixedDecoder:
    def __init__(self, payload):
        self.payload = payload

    def decode(self, image):
        return self.payload


def _png_frame() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (32, 32), "white").save(buf, format="PNG")
    return buf.getvalue()


def _scan(client, *frames):
    return client.post(
        "/api/attendance/scan",
        data={"frame": [(io.BytesIO(f), f"frame{i}.png") for i, f in enumerate(frames)]},
        content_type="multipart/form-data",
    )


def _use_decoder(app, decoder):
    # Container is frozen; swap the decoder for this app only.
    object.__setattr__(app.extensions["invention_station"], "qr_decoder", decoder)


def test_scan_records_decoded_user(client, app):
    login(client, "instructor001", "inst123")
    _use_decoder(app, FixedDecoder("3"))

    resp = _scan(client, _png_frame(), _png_frame())
    assert resp.status_code == 201
    assert resp.get_json()["record"]["user_id"] == "3"

    assert _scan(client, _png_frame()).status_code == 409


def test_scan_without_qr_is_rejected(client, app):
    login(client, "instructor001", "inst123")
    _use_decoder(app, FixedDecoder(None))

    assert _scan(client, _png_frame()).status_code == 422
    assert _scan(client).status_code == 400
