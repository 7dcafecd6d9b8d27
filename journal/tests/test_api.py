from journal.seeds import DEFAULT_PROMPTS


def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("status") == "ok"

    v = client.get("/version")
    assert v.status_code == 200
    assert v.json().get("app") == "reflection-journal-api"


def test_startup_seeds_prompts(client):
    items = client.get("/api/prompts/list").json()["items"]
    assert len(items) == len(DEFAULT_PROMPTS)


def test_prompt_of_the_day_is_stable(client):
    first = client.post("/api/prompts/today").json()
    second = client.post("/api/prompts/today").json()
    assert first["id"] == second["id"]
    assert first["assigned_date"] == "2024-01-10"
    assert client.get("/api/prompts/today").status_code == 405

    logs = client.get("/api/logs/search", params={"action": "ROTATE_PROMPT"}).json()
    assert logs["total"] == 2
    assert {item["result"] for item in logs["items"]} == {"OK"}
    assert str(first["id"]) in logs["items"][0]["after_json"]


def test_answer_flow_and_cascade(client):
    prompt = client.post("/api/prompts/add", json={"text": "Custom question?"})
    assert prompt.status_code == 201
    pid = prompt.json()["id"]

    for i in range(3):
        res = client.post("/api/responses/add", json={"prompt_id": pid, "text": f"answer {i}"})
        assert res.status_code == 201

    history = client.get(f"/api/responses/history/{pid}").json()["items"]
    assert len(history) == 3
    today = client.get("/api/responses/today").json()
    assert today["prompt"]["id"] == pid

    res = client.post("/api/prompts/delete", json={"id": pid})
    assert res.status_code == 200
    assert res.json()["responses_deleted"] == 3
    assert client.get(f"/api/prompts/get/{pid}").status_code == 404
    assert client.get(f"/api/responses/history/{pid}").json()["items"] == []


def test_error_mapping(client):
    r = client.post("/api/prompts/add", json={"text": "   "})
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "invalid_input"

    r = client.post("/api/responses/add", json={"prompt_id": 99999, "text": "orphan"})
    assert r.status_code == 404
    assert r.json()["detail"]["code"] == "not_found"

    for i in range(5):
        assert client.post("/api/gratitude/add", json={"text": f"g{i}"}).status_code == 201
    r = client.post("/api/gratitude/add", json={"text": "g6"})
    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "quota_exceeded"
    assert client.get("/api/gratitude/today").json()["count"] == 5


def test_mutations_are_audited(client):
    client.post("/api/affirmations/add", json={"text": "I am steady"})
    client.post("/api/prompts/add", json={"text": ""})

    ok = client.get("/api/logs/search", params={"action": "ADD_AFFIRMATION"}).json()
    assert ok["total"] == 1
    assert ok["items"][0]["result"] == "OK"

    err = client.get("/api/logs/search", params={"action": "ADD_PROMPT"}).json()
    assert err["total"] == 1
    assert err["items"][0]["result"] == "ERROR"


def test_affirmation_streak_endpoint(client, clock):
    aid = client.post("/api/affirmations/add", json={"text": "I am steady"}).json()["id"]
    clock.advance(days=-1)
    assert client.post("/api/affirmations/complete", json={"affirmation_id": aid}).status_code == 201
    clock.advance(days=1)
    assert client.post("/api/affirmations/complete", json={"affirmation_id": aid}).status_code == 201

    assert client.get("/api/affirmations/streak").json()["streak"] == 2
    assert client.get("/api/affirmations/completed-today", params={"affirmation_id": aid}).json()["completed"]
    assert client.get("/api/affirmations/active").json()["item"]["id"] == aid


def test_creativity_upsert_endpoint(client):
    a = client.post("/api/creativity/save", json={"text": "draft A", "entry_date": "2024-01-01"}).json()
    b = client.post("/api/creativity/save", json={"text": "draft B", "entry_date": "2024-01-01"}).json()
    assert a["id"] == b["id"]
    got = client.get("/api/creativity/by-date", params={"date": "2024-01-01"}).json()
    assert got["item"]["text"] == "draft B"
    assert client.post("/api/creativity/save", json={"text": "x", "entry_date": "01-01-2024"}).status_code == 422


def test_settings_roundtrip(client):
    cfg = client.get("/api/settings/get").json()
    assert cfg["recent_answers_days"] == 7

    r = client.post("/api/settings/update", json={"updates": {"recent_answers_days": 3}})
    assert r.status_code == 200
    assert r.json()["updated"] == ["recent_answers_days"]
    assert client.get("/api/responses/recent").json()["days"] == 3

    bad = client.post("/api/settings/update", json={"updates": {"nope": 1}})
    assert bad.status_code == 400


def test_settings_reject_unparseable_values(client):
    r = client.post("/api/settings/update", json={"updates": {"recent_answers_days": "abc"}})
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "invalid_input"

    r = client.post("/api/settings/update", json={"updates": {"gratitude_history_days": 0}})
    assert r.status_code == 400

    cfg = client.get("/api/settings/get").json()
    assert cfg["recent_answers_days"] == 7
    assert client.get("/api/responses/recent").status_code == 200


def test_activity_and_export(client, tmp_path):
    client.post("/api/gratitude/add", json={"text": "tea"})
    summary = client.get("/api/activity/summary").json()
    assert summary["streaks"]["gratitude"] == 1
    daily = client.get("/api/activity/daily").json()["items"]
    assert daily[0]["date"] == "2024-01-10"

    out = tmp_path / "export"
    r = client.post("/api/maintenance/export", json={"out_dir": str(out)})
    assert r.status_code == 200
    assert (out / "prompts.csv").exists()


def test_import_endpoint(client, tmp_path):
    client.post("/api/gratitude/add", json={"text": "tea"})
    out = tmp_path / "export"
    assert client.post("/api/maintenance/export", json={"out_dir": str(out)}).status_code == 200

    r = client.post("/api/maintenance/import", json={"in_dir": str(out)})
    assert r.status_code == 200
    assert r.json()["imported"]["gratitude_items"] == 1
    assert r.json()["imported"]["prompts"] == len(DEFAULT_PROMPTS)
    assert client.get("/api/gratitude/today").json()["count"] == 2

    (out / "gratitude_items.csv").write_text("text,entry_date\nbad,not-a-date\n", encoding="utf-8")
    r = client.post("/api/maintenance/import", json={"in_dir": str(out)})
    assert r.status_code == 400
    assert len(client.get("/api/prompts/list").json()["items"]) == 2 * len(DEFAULT_PROMPTS)

    logs = client.get("/api/logs/search", params={"action": "IMPORT_CSV"}).json()
    assert [item["result"] for item in logs["items"]] == ["ERROR", "OK"]
