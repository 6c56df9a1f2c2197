"""Tests for leaderboard definitions, the stat repository and the leaderboard store."""

import json
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import polars as pl
import pytest

from app.models.leaderboards import LEADERBOARDS, LeaderboardCategory, SortDirection, leaderboard_index, percentile
from app.models.stats import PlayerStatRow
from app.repositories.leaderboards import PlacementRepository
from app.repositories.stats import PlayerStatRepository
from app.services.leaderboards import LeaderboardStore, derive_row, rank_placements
from stats_client.errors import LeaderboardNotFound, NotFoundError, ValidationError


def row(uuid: str, **stats) -> PlayerStatRow:
    return PlayerStatRow(
        uuid=uuid,
        display_name=f"player_{uuid}",
        last_updated=datetime(2024, 1, 1),
        stat_fields=stats,
    )


@pytest.fixture
def store(db):
    return LeaderboardStore(PlayerStatRepository(db), PlacementRepository(db), page_size=100)


class TestPercentile:
    def test_first_of_200(self):
        assert percentile(1, 200) == 99.5

    def test_last_of_200(self):
        assert percentile(200, 200) == 0.0

    def test_empty(self):
        assert percentile(1, 0) == 0.0


class TestDefinitions:
    def test_category_selects_input(self):
        record = {"profile": {"karma": 5}, "stats": {"Bedwars": {"wins_bedwars": 3}}}
        assert LeaderboardCategory.NETWORK.select(record) == {"karma": 5}
        assert LeaderboardCategory.BEDWARS.select(record) == {"wins_bedwars": 3}
        assert LeaderboardCategory.DUELS.select(record) == {}

    def test_missing_field_is_absent(self):
        assert LEADERBOARDS["BEDWARS_WINS"].derive_value({"stats": {"Bedwars": {}}}) is None

    def test_missing_category_is_absent(self):
        assert LEADERBOARDS["NETWORK_KARMA"].derive_value({"name": "Carol"}) is None

    def test_ratio_zero_denominator_counts_as_one(self):
        record = {"stats": {"Bedwars": {"final_kills_bedwars": 120, "final_deaths_bedwars": 0}}}
        assert LEADERBOARDS["BEDWARS_FKDR"].derive_value(record) == 120.0

    def test_ratio(self):
        record = {"stats": {"Bedwars": {"wins_bedwars": 50, "losses_bedwars": 25}}}
        assert LEADERBOARDS["BEDWARS_WLR"].derive_value(record) == 2.0

    def test_nested_field(self):
        record = {"stats": {"Bedwars": {"slumber": {"total_tickets_earned": 77}}}}
        assert LEADERBOARDS["BEDWARS_TICKETS_EARNED"].derive_value(record) == 77.0

    def test_first_login_ascending(self):
        assert LEADERBOARDS["NETWORK_FIRST_LOGIN"].sort_direction is SortDirection.ASCENDING
        assert LEADERBOARDS["NETWORK_KARMA"].sort_direction is SortDirection.DESCENDING

    def test_index_groups_by_category(self):
        index = leaderboard_index()
        assert "NETWORK_KARMA" in index["NETWORK"]
        assert "BEDWARS_SOLO_FKDR" in index["BEDWARS"]
        assert sum(len(names) for names in index.values()) == len(LEADERBOARDS)


class TestDeriveRow:
    def test_derives_every_present_stat(self):
        record = {
            "uuid": "u1",
            "name": "Alice",
            "profile": {"karma": 10, "network_level": 5.5, "first_login": 123},
            "stats": {"Bedwars": {"wins_bedwars": 4}},
        }
        derived = derive_row(record, now=datetime(2024, 5, 1))

        assert derived.uuid == "u1"
        assert derived.display_name == "Alice"
        assert derived.last_updated == datetime(2024, 5, 1)
        assert derived.stat_fields["NETWORK_KARMA"] == 10.0
        assert derived.stat_fields["BEDWARS_WINS"] == 4.0
        assert derived.stat_fields["BEDWARS_WLR"] == 4.0
        assert "BEDWARS_FINALS" not in derived.stat_fields

    def test_never_joined_player_has_no_stats(self):
        assert derive_row({"uuid": "u2", "name": "Carol"}).stat_fields == {}


class TestInsertOrReplace:
    def test_replace_drops_stale_fields(self, db, store):
        repo = PlayerStatRepository(db)
        store.insert_or_replace(row("u1", BEDWARS_WINS=5, NETWORK_KARMA=10))
        store.insert_or_replace(row("u1", NETWORK_KARMA=20))

        stored = repo.get("u1")
        assert stored.stat_fields == {"NETWORK_KARMA": 20.0}
        assert repo.count() == 1

    def test_unknown_player(self, db):
        assert PlayerStatRepository(db).get("nobody") is None

    def test_concurrent_inserts_for_different_players(self, db, store):
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda i: store.insert_or_replace(row(f"u{i:03d}", BEDWARS_WINS=i + 1)), range(40)))

        assert PlayerStatRepository(db).count() == 40
        assert store.query("BEDWARS_WINS", 1).total_count == 40

    def test_concurrent_inserts_for_same_player_last_write_wins(self, db, store):
        with ThreadPoolExecutor(max_workers=4) as pool:
            list(pool.map(lambda i: store.insert_or_replace(row("same", BEDWARS_WINS=i + 1)), range(20)))

        stored = PlayerStatRepository(db).get("same")
        assert PlayerStatRepository(db).count() == 1
        assert 1 <= stored.stat_fields["BEDWARS_WINS"] <= 20


class TestQuery:
    def test_filters_absent_and_ranks_descending(self, store):
        store.insert_or_replace(row("a", BEDWARS_WINS=10))
        store.insert_or_replace(row("b", NETWORK_KARMA=99))
        store.insert_or_replace(row("c", BEDWARS_WINS=30))

        page = store.query("BEDWARS_WINS", 1)
        assert page.total_count == 2
        assert [(e.uuid, e.rank, e.value) for e in page.entries] == [("c", 1, 30.0), ("a", 2, 10.0)]
        assert page.entries[0].percentile == 50.0
        assert page.entries[1].percentile == 0.0

    def test_ascending_leaderboard(self, store):
        store.insert_or_replace(row("a", NETWORK_FIRST_LOGIN=200))
        store.insert_or_replace(row("b"))
        store.insert_or_replace(row("c", NETWORK_FIRST_LOGIN=100))

        page = store.query(LEADERBOARDS["NETWORK_FIRST_LOGIN"], 1)
        assert [e.uuid for e in page.entries] == ["c", "a"]

    def test_huge_page_is_empty(self, store):
        store.insert_or_replace(row("a", BEDWARS_WINS=10))

        page = store.query("BEDWARS_WINS", 10**20)
        assert page.entries == []
        assert page.total_count == 1
        assert page.page == 10**20

    def test_zero_values_do_not_rank(self, store):
        store.insert_or_replace(row("a", BEDWARS_WINS=0))
        store.insert_or_replace(row("b", BEDWARS_WINS=1))

        page = store.query("BEDWARS_WINS", 1)
        assert page.total_count == 1
        assert [e.uuid for e in page.entries] == ["b"]

    def test_pages_are_contiguous_and_disjoint(self, store):
        # Few distinct values so most positions are decided by the uuid tiebreak
        for i in range(250):
            store.insert_or_replace(row(f"u{i:03d}", BEDWARS_WINS=i % 7 + 1))

        first = store.query("BEDWARS_WINS", 1)
        second = store.query("BEDWARS_WINS", 2)
        third = store.query("BEDWARS_WINS", 3)

        assert [e.rank for e in first.entries] == list(range(1, 101))
        assert [e.rank for e in second.entries] == list(range(101, 201))
        assert [e.rank for e in third.entries] == list(range(201, 251))

        uuids = [e.uuid for p in (first, second, third) for e in p.entries]
        assert len(set(uuids)) == 250

        ordered = [(-e.value, e.uuid) for p in (first, second, third) for e in p.entries]
        assert ordered == sorted(ordered)

    def test_repeated_queries_are_identical(self, store):
        for i in range(30):
            store.insert_or_replace(row(f"u{i:02d}", BEDWARS_WINS=5))

        assert store.query("BEDWARS_WINS", 1) == store.query("BEDWARS_WINS", 1)

    def test_percentile_of_200(self, store):
        for i in range(200):
            store.insert_or_replace(row(f"u{i:03d}", NETWORK_KARMA=i + 1))

        assert store.query("NETWORK_KARMA", 1).entries[0].percentile == 99.5
        assert store.query("NETWORK_KARMA", 2).entries[-1].percentile == 0.0

    def test_page_past_end_is_empty(self, store):
        store.insert_or_replace(row("a", BEDWARS_WINS=1))
        page = store.query("BEDWARS_WINS", 5)
        assert page.entries == []
        assert page.total_count == 1

    @pytest.mark.parametrize("page", [0, -1])
    def test_page_below_one_rejected(self, store, page):
        with pytest.raises(ValidationError):
            store.query("BEDWARS_WINS", page)

    def test_unknown_leaderboard(self, store):
        with pytest.raises(LeaderboardNotFound) as exc:
            store.query("BEDWARS_NOPE", 1)
        assert isinstance(exc.value, NotFoundError)

    def test_name_is_case_insensitive(self, store):
        assert store.definition("bedwars_wins").name == "BEDWARS_WINS"


class TestRebuild:
    def test_rank_placements(self):
        snapshot = pl.DataFrame(
            {
                "uuid": ["a", "b", "c", "a", "b"],
                "stat": ["BEDWARS_WINS", "BEDWARS_WINS", "BEDWARS_WINS", "NETWORK_FIRST_LOGIN", "NETWORK_FIRST_LOGIN"],
                "value": [5.0, 9.0, 5.0, 300.0, 100.0],
            }
        )
        placements = rank_placements(snapshot, LEADERBOARDS)
        ranks = {(r["leaderboard"], r["uuid"]): (r["rank"], r["total"]) for r in placements.iter_rows(named=True)}

        assert ranks[("BEDWARS_WINS", "b")] == (1, 3)
        assert ranks[("BEDWARS_WINS", "a")] == (2, 3)
        assert ranks[("BEDWARS_WINS", "c")] == (3, 3)
        assert ranks[("NETWORK_FIRST_LOGIN", "b")] == (1, 2)
        assert ranks[("NETWORK_FIRST_LOGIN", "a")] == (2, 2)

    def test_unknown_stats_are_not_ranked(self):
        snapshot = pl.DataFrame({"uuid": ["a"], "stat": ["RETIRED_STAT"], "value": [1.0]})
        assert rank_placements(snapshot, LEADERBOARDS).height == 0

    def test_no_placements_before_first_rebuild(self, store):
        store.insert_or_replace(row("a", BEDWARS_WINS=1))
        assert store.placements("a") == []
        assert store.last_rebuild is None

    def test_placements_match_query(self, store):
        for i in range(20):
            store.insert_or_replace(row(f"u{i:02d}", BEDWARS_WINS=i % 4 + 1, NETWORK_KARMA=i + 1))

        assert store.rebuild() == 40
        assert store.last_rebuild is not None

        page = store.query("BEDWARS_WINS", 1)
        for entry in page.entries:
            placement = next(p for p in store.placements(entry.uuid) if p.leaderboard == "BEDWARS_WINS")
            assert placement.rank == entry.rank
            assert placement.total == 20
            assert placement.percentile == entry.percentile

    def test_rebuild_replaces_previous_placements(self, db, store):
        store.insert_or_replace(row("a", BEDWARS_WINS=1))
        store.rebuild()
        store.insert_or_replace(row("a", NETWORK_KARMA=3))
        store.rebuild()

        assert [p.leaderboard for p in store.placements("a")] == ["NETWORK_KARMA"]
        assert PlacementRepository(db).count() == 1

    def test_overlapping_rebuild_skipped(self, store):
        store._rebuild_lock.acquire()
        try:
            assert store.rebuild() is None
        finally:
            store._rebuild_lock.release()
        assert store.rebuild() == 0

    def test_queries_run_during_rebuild(self, store):
        for i in range(50):
            store.insert_or_replace(row(f"u{i:02d}", BEDWARS_WINS=i + 1))

        done = threading.Event()

        def rebuild():
            store.rebuild()
            done.set()

        worker = threading.Thread(target=rebuild)
        worker.start()
        assert store.query("BEDWARS_WINS", 1).total_count == 50
        worker.join(timeout=10)
        assert done.is_set()


class TestIndexDump:
    def test_write_index(self, store, tmp_path):
        path = tmp_path / "leaderboards.json"
        store.write_index(path)
        assert json.loads(path.read_text()) == store.index()
