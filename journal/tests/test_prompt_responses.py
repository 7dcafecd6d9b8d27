import sqlite3

import pytest

from journal.errors import InvalidInput, NotFound
from journal.repository import prompt_repo
from journal.services.prompt_svc import PromptService
from journal.services.response_svc import ResponseService


class TestPromptService:
    @pytest.fixture(autouse=True)
    def _setup(self, store, clock):
        self.clock = clock
        self.prompts = PromptService(store, clock)
        self.responses = ResponseService(store, clock)

    def test_add_returns_hydrated_prompt(self):
        p = self.prompts.add("What inspired you today?")
        assert p["id"] > 0
        assert p["text"] == "What inspired you today?"
        assert p["assigned_date"] is None
        assert p["created_at"].startswith("2024-01-10 09:30:00")

    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    def test_add_rejects_empty_text(self, text):
        with pytest.raises(InvalidInput):
            self.prompts.add(text)
        assert self.prompts.count() == 0

    def test_get_missing_raises_not_found(self):
        with pytest.raises(NotFound):
            self.prompts.get_by_id(999)

    def test_list_all_newest_first(self):
        self.prompts.add("old")
        self.clock.advance(seconds=1)
        self.prompts.add("new")
        assert [p["text"] for p in self.prompts.list_all()] == ["new", "old"]

    def test_update(self):
        p = self.prompts.add("draft")
        assert self.prompts.update(p["id"], "final")["text"] == "final"
        with pytest.raises(NotFound):
            self.prompts.update(12345, "x")
        with pytest.raises(InvalidInput):
            self.prompts.update(p["id"], " ")

    def test_delete_cascades_to_responses(self):
        p = self.prompts.add("q")
        other = self.prompts.add("other")
        for i in range(3):
            self.responses.add(p["id"], f"answer {i}")
        kept = self.responses.add(other["id"], "unrelated")

        assert self.prompts.delete(p["id"]) == 3
        assert [x["id"] for x in self.prompts.list_all()] == [other["id"]]
        assert [r["id"] for r in self.responses.list_all()] == [kept["id"]]
        with pytest.raises(NotFound):
            self.prompts.delete(p["id"])

    def test_failed_delete_leaves_everything_intact(self, monkeypatch):
        p = self.prompts.add("q")
        for i in range(3):
            self.responses.add(p["id"], f"answer {i}")

        def _boom(conn, prompt_id):
            raise sqlite3.OperationalError("disk I/O error")

        monkeypatch.setattr(prompt_repo, "delete", _boom)
        with pytest.raises(sqlite3.OperationalError):
            self.prompts.delete(p["id"])

        assert self.prompts.get_by_id(p["id"])["text"] == "q"
        assert len(self.responses.history_for_prompt(p["id"])) == 3

    def test_ids_are_not_reused(self):
        p = self.prompts.add("a")
        self.prompts.delete(p["id"])
        assert self.prompts.add("b")["id"] > p["id"]

    def test_random_prompt(self):
        with pytest.raises(NotFound):
            self.prompts.random()
        p = self.prompts.add("only")
        assert self.prompts.random()["id"] == p["id"]


class TestResponseService:
    @pytest.fixture(autouse=True)
    def _setup(self, store, clock):
        self.clock = clock
        self.prompts = PromptService(store, clock)
        self.responses = ResponseService(store, clock)
        self.prompt = self.prompts.add("How are you?")

    def test_add_requires_existing_prompt(self):
        with pytest.raises(NotFound):
            self.responses.add(999, "orphan")
        assert self.responses.list_all() == []

    def test_add_rejects_empty_text(self):
        with pytest.raises(InvalidInput):
            self.responses.add(self.prompt["id"], "  ")

    def test_history_keeps_every_answer(self):
        self.responses.add(self.prompt["id"], "first")
        self.clock.advance(days=1)
        self.responses.add(self.prompt["id"], "second")
        history = self.responses.history_for_prompt(self.prompt["id"])
        assert [r["text"] for r in history] == ["second", "first"]

    def test_update_refreshes_updated_at_only(self):
        r = self.responses.add(self.prompt["id"], "first")
        self.clock.advance(hours=2)
        updated = self.responses.update(r["id"], "edited")
        assert updated["text"] == "edited"
        assert updated["created_at"] == r["created_at"]
        assert updated["updated_at"] > r["updated_at"]
        with pytest.raises(NotFound):
            self.responses.update(999, "x")

    def test_delete(self):
        r = self.responses.add(self.prompt["id"], "first")
        self.responses.delete(r["id"])
        with pytest.raises(NotFound):
            self.responses.get_by_id(r["id"])
        with pytest.raises(NotFound):
            self.responses.delete(r["id"])

    def test_recent_and_for_date(self):
        self.clock.set(self.clock.now().replace(day=7))
        self.responses.add(self.prompt["id"], "jan 7")
        self.clock.set(self.clock.now().replace(day=9))
        self.responses.add(self.prompt["id"], "jan 9")
        self.clock.set(self.clock.now().replace(day=10))
        self.responses.add(self.prompt["id"], "jan 10")

        assert [r["text"] for r in self.responses.recent(2)] == ["jan 10", "jan 9"]
        assert len(self.responses.recent(7)) == 3
        assert [r["text"] for r in self.responses.for_date("2024-01-09")] == ["jan 9"]
        with pytest.raises(InvalidInput):
            self.responses.recent(0)

    def test_todays_answered(self):
        assert self.responses.todays_answered() == {"response": None, "prompt": None}
        r = self.responses.add(self.prompt["id"], "today")
        out = self.responses.todays_answered()
        assert out["response"]["id"] == r["id"]
        assert out["prompt"]["id"] == self.prompt["id"]
        self.clock.advance(days=1)
        assert self.responses.todays_answered()["response"] is None
