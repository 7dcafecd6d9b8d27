import pytest

from journal.errors import InvalidInput, NotFound, QuotaExceeded
from journal.services.creativity_svc import CreativityService
from journal.services.gratitude_svc import DAILY_LIMIT, GratitudeService


class TestGratitude:
    @pytest.fixture(autouse=True)
    def _setup(self, store, clock):
        self.clock = clock
        self.svc = GratitudeService(store, clock)

    def test_add_defaults_to_today(self):
        item = self.svc.add("sunshine")
        assert item["entry_date"] == "2024-01-10"
        assert self.svc.has_today()
        assert self.svc.count_today() == 1

    def test_sixth_item_same_day_is_rejected(self):
        for i in range(DAILY_LIMIT):
            self.svc.add(f"thing {i}", "2024-01-01")
        with pytest.raises(QuotaExceeded):
            self.svc.add("one too many", "2024-01-01")
        assert len(self.svc.items_for_date("2024-01-01")) == 5
        # other days are unaffected
        assert self.svc.add("next day", "2024-01-02")["entry_date"] == "2024-01-02"

    def test_delete_frees_a_slot(self):
        items = [self.svc.add(f"thing {i}") for i in range(DAILY_LIMIT)]
        self.svc.delete(items[0]["id"])
        self.svc.add("replacement")
        assert self.svc.count_today() == 5

    def test_items_for_date_in_creation_order(self):
        self.svc.add("a")
        self.clock.advance(minutes=1)
        self.svc.add("b")
        assert [i["text"] for i in self.svc.today_items()] == ["a", "b"]

    def test_entries_grouped_newest_day_first(self):
        self.svc.add("old", "2024-01-01")
        self.svc.add("mid 1", "2024-01-05")
        self.svc.add("mid 2", "2024-01-05")
        self.svc.add("new", "2024-01-09")
        entries = self.svc.entries()
        assert [e["date"] for e in entries] == ["2024-01-09", "2024-01-05", "2024-01-01"]
        assert [i["text"] for i in entries[1]["items"]] == ["mid 1", "mid 2"]
        assert [e["date"] for e in self.svc.last_n_days(2)] == ["2024-01-09", "2024-01-05"]

    def test_update_and_errors(self):
        item = self.svc.add("rain")
        assert self.svc.update(item["id"], "warm rain")["text"] == "warm rain"
        with pytest.raises(NotFound):
            self.svc.update(999, "x")
        with pytest.raises(InvalidInput):
            self.svc.add("ok", "not-a-date")

    def test_streak(self):
        for d in ("2024-01-10", "2024-01-09", "2024-01-08", "2024-01-06"):
            self.svc.add("x", d)
        assert self.svc.streak() == 3


class TestCreativity:
    @pytest.fixture(autouse=True)
    def _setup(self, store, clock):
        self.clock = clock
        self.svc = CreativityService(store, clock)

    def test_save_is_an_upsert(self):
        first = self.svc.save("draft A", "2024-01-01")
        self.clock.advance(minutes=15)
        second = self.svc.save("draft B", "2024-01-01")

        assert second["id"] == first["id"]
        assert second["text"] == "draft B"
        assert second["created_at"] == first["created_at"]
        assert second["updated_at"] > first["updated_at"]
        assert len(self.svc.list_all()) == 1
        assert self.svc.get_by_date("2024-01-01")["text"] == "draft B"

    def test_add_saves_for_today(self):
        entry = self.svc.add("a poem")
        assert entry["entry_date"] == "2024-01-10"
        assert self.svc.has_entry_for_date("2024-01-10")
        assert not self.svc.has_entry_for_date("2024-01-09")
        assert self.svc.get_by_date("2024-01-09") is None

    def test_rejects_empty_and_bad_date(self):
        with pytest.raises(InvalidInput):
            self.svc.save("", "2024-01-01")
        with pytest.raises(InvalidInput):
            self.svc.save("text", "2024-13-01")

    def test_update_delete(self):
        entry = self.svc.save("sketch", "2024-01-03")
        self.clock.advance(hours=1)
        updated = self.svc.update(entry["id"], "sketch v2")
        assert updated["updated_at"] > entry["updated_at"]
        self.svc.delete(entry["id"])
        with pytest.raises(NotFound):
            self.svc.get_by_id(entry["id"])
        with pytest.raises(NotFound):
            self.svc.delete(entry["id"])

    def test_streak(self):
        assert self.svc.streak() == 0
        self.svc.save("x", "2024-01-09")
        self.svc.save("y", "2024-01-08")
        assert self.svc.streak() == 2
        self.clock.advance(days=2)
        assert self.svc.streak() == 0
