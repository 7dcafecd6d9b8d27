import pytest

from journal.errors import ExhaustedPool
from journal.services.prompt_svc import PromptService
from journal.services.rotation_svc import RotationSelector


def _assigned_on(prompts, day):
    return [p for p in prompts.list_all() if p["assigned_date"] == day]


def test_select_is_idempotent_within_a_day(store, clock):
    prompts = PromptService(store, clock)
    for i in range(5):
        prompts.add(f"question {i}")
    selector = RotationSelector(store, clock)

    first = selector.select_for_today()
    assert first["assigned_date"] == "2024-01-10"
    for _ in range(10):
        clock.advance(minutes=30)
        assert selector.select_for_today()["id"] == first["id"]
    assert len(_assigned_on(prompts, "2024-01-10")) == 1
    assert selector.remaining() == 4


def test_new_day_picks_a_new_prompt_and_keeps_the_old_assignment(store, clock):
    prompts = PromptService(store, clock)
    for i in range(3):
        prompts.add(f"question {i}")
    selector = RotationSelector(store, clock)

    day1 = selector.select_for_today()
    clock.advance(days=1)
    day2 = selector.select_for_today()

    assert day2["id"] != day1["id"]
    assert day2["assigned_date"] == "2024-01-11"
    assert prompts.get_by_id(day1["id"])["assigned_date"] == "2024-01-10"


def test_exhausted_pool(store, clock):
    prompts = PromptService(store, clock)
    prompts.add("only one")
    selector = RotationSelector(store, clock)
    selector.select_for_today()

    clock.advance(days=1)
    with pytest.raises(ExhaustedPool):
        selector.select_for_today()
    # nothing was reassigned by the failed attempt
    assert _assigned_on(prompts, "2024-01-11") == []


def test_empty_pool_is_exhausted(store, clock):
    with pytest.raises(ExhaustedPool):
        RotationSelector(store, clock).select_for_today()


def test_prompt_added_later_becomes_eligible(store, clock):
    prompts = PromptService(store, clock)
    prompts.add("first")
    selector = RotationSelector(store, clock)
    selector.select_for_today()
    clock.advance(days=1)
    late = prompts.add("added after exhaustion")
    assert selector.select_for_today()["id"] == late["id"]
