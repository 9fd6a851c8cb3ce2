import pytest


@pytest.mark.asyncio
async def test_score_endpoints_require_auth(client):
    assert (await client.post("/api/scores", json={"score": 10})).status_code == 401
    resp = await client.get("/api/scores/monthly/2024-03", headers={"Authorization": "Bearer bogus"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}


@pytest.mark.asyncio
async def test_record_and_read_back(client, auth_headers):
    first = await client.post(
        "/api/scores", json={"score": 10, "date": "2024-03-01"}, headers=auth_headers
    )
    assert first.status_code == 200, first.text
    assert first.json() == {"success": True, "updated": True}

    lower = await client.post(
        "/api/scores", json={"score": 5, "date": "2024-03-01"}, headers=auth_headers
    )
    assert lower.json() == {"success": True, "updated": False}

    await client.post("/api/scores", json={"score": 20, "date": "2024-03-02"}, headers=auth_headers)

    daily = await client.get("/api/scores/daily/2024-03-01", headers=auth_headers)
    assert daily.status_code == 200
    assert daily.json()["highestScore"] == 10
    assert daily.json()["date"] == "2024-03-01"

    empty_day = await client.get("/api/scores/daily/2024-03-09", headers=auth_headers)
    assert empty_day.status_code == 200
    assert empty_day.json() is None

    monthly = await client.get("/api/scores/monthly/2024-03", headers=auth_headers)
    payload = monthly.json()
    assert payload["practiceDays"] == 2
    assert payload["bestScore"] == 20
    assert payload["averageScore"] == 15
    assert [d["date"] for d in payload["dailyScores"]] == ["2024-03-01", "2024-03-02"]

    heatmap = await client.get(
        "/api/scores/heatmap", params={"from": "2024-03-01", "to": "2024-03-02"}, headers=auth_headers
    )
    assert heatmap.json() == {
        "scores": {"2024-03-01": 10, "2024-03-02": 20},
        "from": "2024-03-01",
        "to": "2024-03-02",
    }


@pytest.mark.asyncio
async def test_record_rejects_non_numeric_score(client, auth_headers, store):
    writes_before = list(store.writes)

    for body in ({"score": "10"}, {"date": "2024-03-01"}, {"score": None}):
        resp = await client.post("/api/scores", json=body, headers=auth_headers)
        assert resp.status_code == 400, body
        assert "error" in resp.json()

    assert store.writes == writes_before


@pytest.mark.asyncio
async def test_heatmap_validation(client, auth_headers, store):
    reads_before = len(store.reads)
    resp = await client.get(
        "/api/scores/heatmap", params={"from": "2024-03-05", "to": "2024-03-01"}, headers=auth_headers
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": '"from" must be before "to"'}

    missing = await client.get("/api/scores/heatmap", params={"from": "2024-03-05"}, headers=auth_headers)
    assert missing.status_code == 400

    # only the auth lookups touched the store
    assert all(key.startswith("memory:user:") for key in store.reads[reads_before:])


@pytest.mark.asyncio
async def test_empty_month_summary(client, auth_headers):
    resp = await client.get("/api/scores/monthly/2023-07", headers=auth_headers)
    assert resp.json() == {
        "month": "2023-07",
        "practiceDays": 0,
        "bestScore": 0,
        "averageScore": 0,
        "dailyScores": [],
    }


@pytest.mark.asyncio
async def test_recent_days(client, auth_headers):
    await client.post("/api/scores", json={"score": 7, "date": "2024-03-04"}, headers=auth_headers)

    resp = await client.get(
        "/api/scores/recent", params={"end": "2024-03-05", "days": 3}, headers=auth_headers
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "days": [
            {"date": "2024-03-03", "score": None},
            {"date": "2024-03-04", "score": 7},
            {"date": "2024-03-05", "score": None},
        ]
    }

    bad = await client.get("/api/scores/recent", params={"days": 365}, headers=auth_headers)
    assert bad.status_code == 400


@pytest.mark.asyncio
async def test_store_failure_is_a_generic_500(client, auth_headers, store, monkeypatch):
    async def broken_set(key, value):
        raise RuntimeError("connection reset by peer")

    monkeypatch.setattr(store, "set", broken_set)

    resp = await client.post("/api/scores", json={"score": 3, "date": "2024-03-01"}, headers=auth_headers)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


@pytest.mark.asyncio
async def test_integer_score_beyond_float_range_is_recorded(client, auth_headers):
    huge = 10 ** 400
    resp = await client.post(
        "/api/scores", json={"score": huge, "date": "2024-03-01"}, headers=auth_headers
    )
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"success": True, "updated": True}

    monthly = await client.get("/api/scores/monthly/2024-03", headers=auth_headers)
    assert monthly.status_code == 200
    assert monthly.json()["bestScore"] == huge
    assert monthly.json()["averageScore"] == huge


@pytest.mark.asyncio
async def test_heatmap_rejects_span_over_a_year(client, auth_headers, store):
    reads_before = len(store.reads)
    resp = await client.get(
        "/api/scores/heatmap", params={"from": "0001-01-01", "to": "9999-12-31"}, headers=auth_headers
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Heatmap range is limited to 366 days"}
    assert all(key.startswith("memory:user:") for key in store.reads[reads_before:])
