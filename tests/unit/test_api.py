"""Tests for the HTTP endpoints, served over a fake upstream."""

import base64
import json

import pytest
from fastapi.testclient import TestClient

from app.container import container
from tests.conftest import ALICE, API_KEY, BOB
from web.app import app


@pytest.fixture
def client(upstream, tmp_path, monkeypatch):
    monkeypatch.setattr("web.app.LEADERBOARD_INDEX_PATH", tmp_path / "leaderboards.json")
    monkeypatch.setattr("web.app.LOG_TO_FILE", False)
    container.init(db_path=":memory:", hypixel_key=API_KEY, transport=upstream.transport())
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
    assert not container.initialized


def card_data(**fields) -> str:
    return base64.urlsafe_b64encode(json.dumps(fields).encode()).decode().rstrip("=")


class TestRoot:
    def test_version(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.text.startswith("Nadeshiko version ")

    def test_index_written_on_startup(self, client, tmp_path):
        index = json.loads((tmp_path / "leaderboards.json").read_text())
        assert "BEDWARS_WINS" in index["BEDWARS"]


class TestStats:
    def test_player(self, client):
        resp = client.get("/stats", params={"name": "Alice"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["uuid"] == ALICE
        assert body["profile"]["karma"] == 5_000
        assert "quests" not in body
        assert "achievements_one_time" not in body
        assert container.statistics.count("stats") == 1

    def test_missing_name(self, client):
        resp = client.get("/stats")
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "cause": "Missing name parameter"}

    def test_unknown_player(self, client):
        resp = client.get("/stats", params={"name": "Nobody"})
        assert resp.status_code == 404
        assert resp.json()["success"] is False
        assert resp.json()["status"] == 404

    def test_upstream_failure(self, client, upstream):
        upstream.fail["/v2/player"] = 502
        resp = client.get("/stats", params={"name": "Alice"})
        assert resp.status_code == 502
        assert resp.json() == {"success": False, "status": 502, "cause": "Upstream exploded"}

    def test_unexpected_error(self, client, monkeypatch):
        async def broken(identity):
            raise RuntimeError("boom")

        monkeypatch.setattr(container.stats, "get", broken)
        resp = client.get("/stats", params={"name": "Alice"})
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "cause": "boom"}

    def test_achievements(self, client):
        body = client.get("/achievements", params={"name": "Alice"}).json()
        assert body["achievements"] == {"bedwars_level": 10}
        assert body["achievements_one_time"] == ["general_first_join"]

    def test_quests(self, client, upstream):
        container.resources.quests = upstream.quests
        body = client.get("/quests", params={"name": "Alice"}).json()
        assert body["global"] == upstream.quests
        assert body["player"]["quests"]["daily"]["completions"] == [{"time": 1}, {"time": 2}]


class TestGuild:
    def test_by_name(self, client):
        resp = client.get("/guild", params={"name": "Sakura"})
        assert resp.status_code == 200
        assert [m["uuid"] for m in resp.json()["members"]] == [ALICE, BOB]

    def test_by_player(self, client):
        resp = client.get("/guild", params={"player": "Bob"})
        assert resp.json()["name"] == "Sakura"

    def test_missing_parameters(self, client):
        resp = client.get("/guild")
        assert resp.status_code == 400
        assert resp.json()["cause"] == "Missing name or player parameter"

    def test_guildless(self, client):
        resp = client.get("/guild", params={"player": "Carol"})
        assert resp.status_code == 404
        assert resp.json()["cause"] == "This player is not in a guild!"
        assert resp.json()["status"] == 404


class TestLeaderboard:
    def test_page(self, client):
        client.get("/stats", params={"name": "Alice"})
        client.get("/stats", params={"name": "Bob"})

        resp = client.get("/leaderboard", params={"leaderboard": "bedwars_wins"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["leaderboard"] == "BEDWARS_WINS"
        assert body["total_count"] == 2
        assert [(e["uuid"], e["rank"], e["value"]) for e in body["entries"]] == [(BOB, 1, 80.0), (ALICE, 2, 50.0)]
        assert body["entries"][0]["percentile"] == 50.0

    def test_unknown_leaderboard(self, client):
        resp = client.get("/leaderboard", params={"leaderboard": "MOST_DIRT"})
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "cause": "Unknown leaderboard!"}

    @pytest.mark.parametrize("page", ["0", "-1", "abc"])
    def test_invalid_page(self, client, page):
        resp = client.get("/leaderboard", params={"leaderboard": "BEDWARS_WINS", "page": page})
        assert resp.status_code == 400
        assert resp.json()["cause"] == "Invalid page number!"

    def test_page_past_the_end(self, client):
        body = client.get("/leaderboard", params={"leaderboard": "BEDWARS_WINS", "page": "5"}).json()
        assert body["entries"] == []
        assert body["page"] == 5

    def test_huge_page_is_empty(self, client):
        client.get("/stats", params={"name": "Alice"})
        resp = client.get("/leaderboard", params={"leaderboard": "BEDWARS_WINS", "page": str(10**20)})

        assert resp.status_code == 200
        assert resp.json()["entries"] == []
        assert resp.json()["total_count"] == 1

    def test_index(self, client):
        body = client.get("/leaderboards").json()
        assert "NETWORK_KARMA" in body["leaderboards"]["NETWORK"]

    def test_placements_after_rebuild(self, client):
        client.get("/stats", params={"name": "Alice"})
        client.get("/stats", params={"name": "Bob"})
        container.leaderboards.rebuild()

        body = client.get("/placements", params={"name": "Alice"}).json()
        placements = {p["leaderboard"]: p for p in body["placements"]}

        assert body["uuid"] == ALICE
        assert placements["BEDWARS_WINS"]["rank"] == 2
        assert placements["BEDWARS_WINS"]["total"] == 2


class TestSkyBlock:
    def test_profile(self, client, upstream):
        container.resources.collections = {"WHEAT": "Wheat"}
        resp = client.get("/skyblock", params={"name": "Alice", "profile": "Apple"})

        assert resp.status_code == 200
        assert resp.json()["skyblock_profile"]["collections"] == ["Wheat"]

    def test_still_loading(self, upstream, tmp_path, monkeypatch):
        upstream.fail["/v2/resources/skyblock/collections"] = 500
        monkeypatch.setattr("web.app.LEADERBOARD_INDEX_PATH", tmp_path / "leaderboards.json")
        monkeypatch.setattr("web.app.LOG_TO_FILE", False)
        container.init(db_path=":memory:", hypixel_key=API_KEY, transport=upstream.transport())

        with TestClient(app) as client:
            resp = client.get("/skyblock", params={"name": "Alice"})

        assert resp.status_code == 503
        assert resp.json()["success"] is False


class TestCard:
    def test_from_data(self, client):
        resp = client.get(f"/card/{card_data(name='Alice', game='bedwars', size='compact')}")

        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/png"
        assert resp.content.startswith(b"\x89PNG")
        assert container.statistics.count("card") == 1

    def test_query_parameters(self, client):
        resp = client.get("/card", params={"name": "Bob", "game": "network", "size": "full"})
        assert resp.status_code == 200

    def test_never_joined(self, client):
        resp = client.get("/card", params={"name": "Carol", "game": "bedwars", "size": "full"})
        assert resp.status_code == 404

    def test_skyblock(self, client):
        container.resources.collections = {"WHEAT": "Wheat"}
        resp = client.get("/card", params={"name": "Alice", "game": "skyblock_general", "size": "compact"})

        assert resp.status_code == 200
        assert resp.content.startswith(b"\x89PNG")

    def test_skyblock_still_loading(self, upstream, tmp_path, monkeypatch):
        upstream.fail["/v2/resources/skyblock/collections"] = 500
        monkeypatch.setattr("web.app.LEADERBOARD_INDEX_PATH", tmp_path / "leaderboards.json")
        monkeypatch.setattr("web.app.LOG_TO_FILE", False)
        container.init(db_path=":memory:", hypixel_key=API_KEY, transport=upstream.transport())

        with TestClient(app) as client:
            resp = client.get("/card", params={"name": "Alice", "game": "skyblock_general", "size": "full"})

        assert resp.status_code == 503
        assert resp.json()["success"] is False

    def test_invalid_game(self, client):
        resp = client.get("/card", params={"name": "Alice", "game": "pit", "size": "full"})
        assert resp.status_code == 400
        assert resp.json()["cause"].startswith("Invalid game")
