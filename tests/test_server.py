import json

import pytest
from fastapi.testclient import TestClient

import main
from bezier3d.config import SurfaceSettings


@pytest.fixture
def client():
    main.scene.apply(SurfaceSettings())
    yield TestClient(main.app)
    main.scene.apply(SurfaceSettings())


def test_root_snapshot(client):
    data = client.get("/").json()
    assert data["type"] == "state"
    assert data["settings"]["accuracy"] == 5


def test_mesh_endpoint(client):
    data = client.get("/mesh").json()
    assert data["accuracy"] == 5
    assert len(data["positions"]) == 36
    assert len(data["indices"]) == 150


def test_wireframe_follows_grid_toggle(client):
    assert client.get("/wireframe").status_code == 404
    response = client.post("/settings", json={"show_grid": True, "accuracy": 2})
    assert response.status_code == 200
    assert response.json()["show_grid"] is True
    wire = client.get("/wireframe").json()
    assert len(wire["line_indices"]) == 40
    assert all(p[2] == 0.0 for p in wire["positions"])


def test_invalid_settings_rejected(client):
    response = client.post("/settings", json={"accuracy": 0})
    assert response.status_code == 422
    assert client.get("/mesh").json()["accuracy"] == 5


def test_shading_uniforms(client):
    client.post("/settings", json={"kd": 0.25})
    assert client.get("/shading").json()["uKd"] == 0.25


def test_websocket_settings_round_trip(client):
    with client.websocket_connect("/ws") as ws:
        hello = ws.receive_json()
        assert hello["type"] == "state"

        ws.send_text(json.dumps({"accuracy": 3}))
        reply = ws.receive_json()
        assert reply["type"] == "settings"
        assert reply["settings"]["accuracy"] == 3

        ws.send_text("{not json")
        assert ws.receive_json()["type"] == "error"

        ws.send_text(json.dumps({"ks": 4}))
        assert ws.receive_json()["type"] == "error"
    assert main.scene.settings.accuracy == 3


def test_frame_loop_runs_for_app_lifetime():
    with TestClient(main.app) as client:
        assert client.get("/").status_code == 200
        assert main._frame_task is not None
        assert not main._frame_task.done()
    assert main._frame_task.done()
