"""Tests for card request parsing, game providers and rendering."""

import base64
import json
from io import BytesIO

import pytest
from PIL import Image

from app.services.cards import CardGame, CardSize, decode_card_data, parse_card_request, render_card
from stats_client.errors import ValidationError
from tests.conftest import ALICE

RECORD = {
    "name": "Alice",
    "uuid": ALICE,
    "badge": "DEVELOPER",
    "profile": {"tagged_name": "§b[MVP§6+§b] Alice", "network_level": 42.5, "karma": 5_000},
    "stats": {"Bedwars": {"wins_bedwars": 50, "losses_bedwars": 25, "final_kills_bedwars": 120}},
}


def encode(fields: dict) -> str:
    return base64.urlsafe_b64encode(json.dumps(fields).encode()).decode().rstrip("=")


class TestParseCardRequest:
    def test_from_data(self):
        request = parse_card_request(encode({"name": "Alice", "game": "bedwars", "size": "full"}))
        assert request.name == "Alice"
        assert request.game is CardGame.BEDWARS
        assert request.size is CardSize.FULL

    def test_query_overrides_data(self):
        data = encode({"name": "Alice", "game": "bedwars", "size": "full"})
        request = parse_card_request(data, name="Bob", size="COMPACT")
        assert request.name == "Bob"
        assert request.game is CardGame.BEDWARS
        assert request.size is CardSize.COMPACT

    def test_query_only(self):
        request = parse_card_request(None, name="Alice", game="build_battle", size="compact")
        assert request.game is CardGame.BUILD_BATTLE

    @pytest.mark.parametrize(
        "fields, cause",
        [
            ({"game": "bedwars", "size": "full"}, "Missing name parameter"),
            ({"name": "Alice", "size": "full"}, "Missing game parameter"),
            ({"name": "Alice", "game": "bedwars"}, "Missing size parameter"),
        ],
    )
    def test_missing_fields(self, fields, cause):
        with pytest.raises(ValidationError) as exc:
            parse_card_request(encode(fields))
        assert exc.value.cause == cause
        assert exc.value.status == 400

    def test_invalid_game(self):
        with pytest.raises(ValidationError) as exc:
            parse_card_request(None, name="Alice", game="pit", size="full")
        assert exc.value.cause.startswith("Invalid game 'pit'")

    def test_invalid_size(self):
        with pytest.raises(ValidationError):
            parse_card_request(None, name="Alice", game="duels", size="huge")

    def test_garbage_data(self):
        with pytest.raises(ValidationError):
            decode_card_data("!!!not-base64!!!")
        with pytest.raises(ValidationError):
            decode_card_data(encode(["not", "an", "object"]))

    def test_no_data(self):
        assert decode_card_data(None) == {}
        assert decode_card_data("") == {}


class TestProviders:
    def test_bedwars_lines(self):
        lines = dict(CardGame.BEDWARS.provider.lines(RECORD))
        assert lines["FKDR"] == "120.00"
        assert lines["WLR"] == "2.00"
        assert lines["Wins"] == "50"
        assert lines["Winstreak"] == "Unknown"

    def test_network_lines(self):
        lines = dict(CardGame.NETWORK.provider.lines(RECORD))
        assert lines["Level"] == "42.50"
        assert lines["Karma"] == "5.0K"

    def test_missing_game_stats(self):
        lines = dict(CardGame.SKYWARS.provider.lines(RECORD))
        assert lines["Wins"] == "0"

    def test_skyblock_lines(self):
        record = {
            **RECORD,
            "skyblock_profile": {
                "cute_name": "Apple",
                "purse": 42.0,
                "bank": 1500.0,
                "skills": {"farming": 5000.0, "mining": 300.0},
                "collections": ["Wheat"],
            },
        }
        lines = dict(CardGame.SKYBLOCK_GENERAL.provider.lines(record))
        assert lines["Profile"] == "Apple"
        assert lines["Bank"] == "1.5K"
        assert lines["Skill XP"] == "5.3K"
        assert lines["Top Skill"] == "Farming"
        assert lines["Collections"] == "1"

    def test_only_skyblock_reads_skyblock_record(self):
        assert [g for g in CardGame if g.provider.skyblock] == [CardGame.SKYBLOCK_GENERAL]


class TestRender:
    @pytest.mark.parametrize("size", list(CardSize))
    def test_png_of_requested_size(self, size):
        png = render_card(CardGame.BEDWARS, size, RECORD)

        assert png.startswith(b"\x89PNG")
        assert Image.open(BytesIO(png)).size == size.dimensions

    @pytest.mark.parametrize("game", list(CardGame))
    def test_every_game_renders(self, game):
        assert render_card(game, CardSize.COMPACT, RECORD).startswith(b"\x89PNG")
