import base64
import json
from collections import Counter

import httpx
import pytest

from app.repositories.db import Database

API_KEY = "0123456789abcdef0123456789abcdef-test"

ALICE = "a1" * 16
BOB = "b2" * 16
CAROL = "c3" * 16


def dashed(uuid: str) -> str:
    return f"{uuid[:8]}-{uuid[8:12]}-{uuid[12:16]}-{uuid[16:20]}-{uuid[20:]}"


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def hypixel_player(name: str, **extra) -> dict:
    player = {
        "displayname": name,
        "newPackageRank": "MVP_PLUS",
        "rankPlusColor": "GOLD",
        "firstLogin": 1_400_000_000_000,
        "lastLogin": 1_700_000_000_000,
        "networkExp": 250_000,
        "karma": 5_000,
        "achievementPoints": 1_200,
        "quests": {"daily": {"completions": [{"time": 1}, {"time": 2}]}},
        "achievements": {"bedwars_level": 10},
        "achievementsOneTime": ["general_first_join"],
        "stats": {},
    }
    player.update(extra)
    return player


class FakeUpstream:
    """In-memory PlayerDB, Mojang and Hypixel behind one httpx.MockTransport handler."""

    def __init__(self):
        self.accounts = {
            "alice": ("Alice", ALICE),
            "bob": ("Bob", BOB),
            "carol": ("Carol", CAROL),
        }
        self.players = {
            ALICE: hypixel_player(
                "Alice",
                stats={
                    "Bedwars": {
                        "wins_bedwars": 50,
                        "losses_bedwars": 25,
                        "final_kills_bedwars": 120,
                        "final_deaths_bedwars": 0,
                        "Experience": 10_000,
                    }
                },
            ),
            BOB: hypixel_player("Bob", karma=9_000, stats={"Bedwars": {"wins_bedwars": 80, "losses_bedwars": 10}}),
        }
        self.guilds = [
            {
                "name": "Sakura",
                "tag": "SKR",
                "tagColor": "LIGHT_PURPLE",
                "exp": 250_000,
                "created": 1_500_000_000_000,
                "members": [{"uuid": ALICE, "joined": 1_600_000_000_000}, {"uuid": BOB, "joined": 1_650_000_000_000}],
            }
        ]
        self.profiles = {
            ALICE: [
                {
                    "profile_id": "p1",
                    "cute_name": "Apple",
                    "selected": True,
                    "banking": {"balance": 1000.5},
                    "members": {
                        ALICE: {
                            "currencies": {"coin_purse": 42.0},
                            "player_data": {"experience": {"SKILL_FARMING": 5000.0}},
                            "collection": {"WHEAT": 100, "UNKNOWN_ITEM": 5},
                        }
                    },
                },
                {"profile_id": "p2", "cute_name": "Banana", "selected": False, "members": {ALICE: {}}},
            ]
        }
        self.collections = {"collections": {"FARMING": {"name": "Farming", "items": {"WHEAT": {"name": "Wheat"}}}}}
        self.quests = {"success": True, "quests": {"bedwars": [{"id": "bedwars_daily_win"}]}}
        self.fail: dict[str, int] = {}
        self.calls = Counter()

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls[path] += 1
        if path in self.fail:
            return httpx.Response(self.fail[path], json={"success": False, "cause": "Upstream exploded"})

        host = request.url.host
        if host == "playerdb.co":
            return self._playerdb(path.rsplit("/", 1)[-1])
        if host == "sessionserver.mojang.com":
            return self._textures(path.rsplit("/", 1)[-1])
        if host == "api.mojang.com":
            return httpx.Response(200, json={"id": "hypixel"})
        if host == "api.hypixel.net":
            return self._hypixel(path.removeprefix("/v2/"), request.url.params)
        return httpx.Response(404, json={})

    def _account(self, identity: str):
        key = identity.replace("-", "").lower()
        for name, uuid in self.accounts.values():
            if key in (name.lower(), uuid):
                return name, uuid
        return None

    def _playerdb(self, identity: str) -> httpx.Response:
        account = self._account(identity)
        if account is None:
            return httpx.Response(400, json={"code": "minecraft.invalid_username", "success": False, "data": {}})
        name, uuid = account
        return httpx.Response(
            200,
            json={
                "code": "player.found",
                "success": True,
                "data": {"player": {"username": name, "id": dashed(uuid), "raw_id": uuid}},
            },
        )

    def _textures(self, uuid: str) -> httpx.Response:
        if self._account(uuid) is None:
            return httpx.Response(204)
        value = {"textures": {"SKIN": {"url": f"http://textures.minecraft.net/{uuid}", "metadata": {"model": "slim"}}}}
        encoded = base64.b64encode(json.dumps(value).encode()).decode()
        return httpx.Response(200, json={"id": uuid, "properties": [{"name": "textures", "value": encoded}]})

    def _hypixel(self, path: str, params) -> httpx.Response:
        uuid = params.get("uuid") or params.get("player")
        if path == "player":
            return httpx.Response(200, json={"success": True, "player": self.players.get(uuid)})
        if path == "status":
            return httpx.Response(200, json={"success": True, "session": {"online": True, "gameType": "BEDWARS"}})
        if path == "guild":
            if "name" in params:
                guild = next((g for g in self.guilds if g["name"].lower() == params["name"].lower()), None)
            else:
                guild = next((g for g in self.guilds if any(m["uuid"] == uuid for m in g["members"])), None)
            return httpx.Response(200, json={"success": True, "guild": guild})
        if path == "skyblock/profiles":
            return httpx.Response(200, json={"success": True, "profiles": self.profiles.get(uuid)})
        if path == "counts":
            return httpx.Response(200, json={"success": True, "playerCount": 100_000})
        if path == "resources/quests":
            return httpx.Response(200, json=self.quests)
        if path == "resources/skyblock/collections":
            return httpx.Response(200, json=self.collections)
        return httpx.Response(404, json={"success": False, "cause": "Unknown endpoint"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def db():
    database = Database(":memory:")
    yield database
    database.close()
