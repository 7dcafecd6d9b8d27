import sqlite3

import pytest

from journal.errors import InvalidInput, NotFound
from journal.repository import affirmation_repo
from journal.services.affirmation_svc import AffirmationService


@pytest.fixture()
def svc(store, clock):
    return AffirmationService(store, clock)


def test_active_is_newest(svc, clock):
    assert svc.active() is None
    svc.add("I am calm")
    clock.advance(minutes=1)
    newest = svc.save("I am focused")
    assert svc.active()["id"] == newest["id"]
    assert len(svc.list_all()) == 2


def test_add_rejects_empty(svc):
    with pytest.raises(InvalidInput):
        svc.add("")


def test_update_and_not_found(svc, clock):
    a = svc.add("I am calm")
    clock.advance(minutes=5)
    out = svc.update(a["id"], "I am very calm")
    assert out["text"] == "I am very calm"
    assert out["updated_at"] > out["created_at"]
    with pytest.raises(NotFound):
        svc.update(999, "x")
    with pytest.raises(NotFound):
        svc.get_by_id(999)


def test_log_completion_requires_affirmation(svc):
    with pytest.raises(NotFound):
        svc.log_completion(42)
    assert svc.list_logs() == []


def test_completed_today_counts_any_affirmation(svc, clock):
    a = svc.add("first")
    b = svc.add("second")
    assert svc.completed_today(a["id"]) is False
    svc.log_completion(b["id"])
    assert svc.completed_today(b["id"]) is True
    # completing any affirmation marks the day as done for all of them
    assert svc.completed_today(a["id"]) is True
    clock.advance(days=1)
    assert svc.completed_today(a["id"]) is False


def test_streak_collapses_same_day_completions(svc, clock):
    a = svc.add("I am enough")
    for day in (7, 8, 9, 10):
        clock.set(clock.now().replace(day=day, hour=8))
        svc.log_completion(a["id"])
        clock.advance(hours=10)
        svc.log_completion(a["id"])
    assert len(svc.list_logs()) == 8
    assert svc.streak() == 4


def test_streak_broken_by_missed_yesterday(svc, clock):
    a = svc.add("I am enough")
    clock.set(clock.now().replace(day=7))
    svc.log_completion(a["id"])
    clock.set(clock.now().replace(day=10))
    assert svc.streak() == 0


def test_delete_cascades_to_logs(svc):
    a = svc.add("one")
    b = svc.add("two")
    svc.log_completion(a["id"])
    svc.log_completion(a["id"])
    kept = svc.log_completion(b["id"])

    assert svc.delete(a["id"]) == 2
    assert [x["id"] for x in svc.list_all()] == [b["id"]]
    assert [log["id"] for log in svc.list_logs()] == [kept["id"]]


def test_failed_delete_keeps_logs(svc, monkeypatch):
    a = svc.add("one")
    svc.log_completion(a["id"])

    def _boom(conn, affirmation_id):
        raise sqlite3.OperationalError("locked")

    monkeypatch.setattr(affirmation_repo, "delete", _boom)
    with pytest.raises(sqlite3.OperationalError):
        svc.delete(a["id"])
    assert svc.get_by_id(a["id"])["text"] == "one"
    assert len(svc.list_logs(a["id"])) == 1


def test_delete_single_log(svc):
    a = svc.add("one")
    log = svc.log_completion(a["id"])
    svc.delete_log(log["id"])
    assert svc.list_logs() == []
    with pytest.raises(NotFound):
        svc.delete_log(log["id"])
