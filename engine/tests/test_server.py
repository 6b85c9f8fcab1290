"""Tests for FastAPI server."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi.testclient import TestClient
from server.main import app, MAX_BOARD_SIDE, MAX_ENTITIES, VERSION
from beamfield.core.generator import generate_board
from beamfield.core.notation import decode, encode


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


class TestHealthEndpoint:
    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == VERSION


class TestPresets:
    def test_list_presets(self, client):
        response = client.get("/presets")
        assert response.status_code == 200
        data = response.json()
        assert data[0]["id"] == "default"
        assert data[0]["default"] is True
        assert data[0]["width"] == 10


class TestGenerateBoard:
    def test_default_board(self, client):
        response = client.post("/boards", json={})
        assert response.status_code == 200
        data = response.json()

        assert data["text"] == encode(generate_board(10, 10, 1, 1, 1))
        assert data["state"]["turn"] == "D"
        assert len(data["state"]["field"]) == 100

    def test_overrides(self, client):
        response = client.post("/boards", json={"width": 5, "height": 4, "pawns": 3, "seed": "s"})
        assert response.status_code == 200
        data = response.json()

        assert data["text"] == encode(generate_board(5, 4, 1, 3, 1, seed="s"))
        assert len(data["state"]["pawns"]) == 3

    def test_unknown_preset(self, client):
        response = client.post("/boards", json={"preset": "huge"})
        assert response.status_code == 404

    def test_invalid_size(self, client):
        response = client.post("/boards", json={"width": 0})
        assert response.status_code == 422

    def test_oversized_board_rejected(self, client):
        response = client.post("/boards", json={"width": MAX_BOARD_SIDE + 1, "height": 10})
        assert response.status_code == 422
        response = client.post("/boards", json={"width": 1500, "height": 1500})
        assert response.status_code == 422

    def test_largest_board_accepted(self, client):
        response = client.post("/boards", json={"width": MAX_BOARD_SIDE, "height": 2})
        assert response.status_code == 200
        assert response.json()["state"]["width"] == MAX_BOARD_SIDE

    def test_too_many_entities_rejected(self, client):
        response = client.post("/boards", json={"pawns": MAX_ENTITIES + 1})
        assert response.status_code == 422


class TestDecodeBoard:
    def test_decode(self, client):
        response = client.post("/boards/decode", json={"text": "2 1\n\nA\nb0   .\n"})
        assert response.status_code == 200
        data = response.json()

        assert data["text"] == "2 1\nA\nb0 .\n"
        assert data["state"] == decode("2 1\nA\nb0 .\n").to_dict()

    def test_malformed(self, client):
        response = client.post("/boards/decode", json={"text": "2 1\nA\nb0 ?\n"})
        assert response.status_code == 400


class TestBattles:
    def test_short_battle(self, client):
        response = client.post("/battles", json={"max_turns": 4})
        assert response.status_code == 200
        data = response.json()

        assert data["turns"] == 5
        assert len(data["frames"]) == 5
        assert [f["turn"] for f in data["frames"]] == ["D", "A", "D", "A", "D"]
        assert data["final_turn"] == "A"
        assert data["initial_board"] == encode(generate_board(10, 10, 1, 1, 1))

    def test_frames_name_movable_entities(self, client):
        response = client.post("/battles", json={"max_turns": 20, "seed": "abc"})
        data = response.json()

        for frame in data["frames"]:
            if frame["turn"] == "A":
                assert frame["entity_type"] in ("beam", "pawn")
            else:
                assert frame["entity_type"] == "target"

    def test_reproducible(self, client):
        body = {"max_turns": 10, "seed": "r", "agent_seeds": [5, 6]}
        first = client.post("/battles", json=body).json()
        second = client.post("/battles", json=body).json()
        assert first == second

    def test_unknown_preset(self, client):
        response = client.post("/battles", json={"preset": "huge"})
        assert response.status_code == 404
