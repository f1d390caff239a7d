from datetime import date
from unittest.mock import AsyncMock

from app.services.ai_service import AIResponse, AIService, parse_categories
from app.services.quotes_service import QUOTES, QuotesService
from app.services.stripe_service import StripeService
from tests.conftest import auth_headers, grant_pro


async def test_metric_stats_and_daily(client, pro_headers):
    for metric_type, value, day in [
        ("water", 2, "2026-03-01"),
        ("water", 4, "2026-03-02"),
        ("sleep", 7.5, "2026-03-01"),
    ]:
        response = await client.post(
            "/api/v1/metrics",
            json={"metricType": metric_type, "value": value, "date": day, "metadata": {"unit": "x"}},
            headers=pro_headers,
        )
        assert response.status_code == 201
        assert response.json()["data"]["metadata"] == {"unit": "x"}

    stats = (await client.get("/api/v1/metrics/stats", headers=pro_headers)).json()["data"]
    by_type = {s["type"]: s for s in stats}
    assert by_type["water"] == {"type": "water", "total": 6.0, "average": 3.0, "count": 2, "min": 2.0, "max": 4.0}
    assert by_type["sleep"]["count"] == 1

    daily = (await client.get("/api/v1/metrics/daily", params={"date": "2026-03-01"}, headers=pro_headers)).json()
    assert [m["metricType"] for m in daily["data"]] == ["sleep", "water"]

    listing = (await client.get("/api/v1/metrics", headers=pro_headers)).json()["data"]
    assert [m["date"] for m in listing][0] == "2026-03-02"


async def test_delete_missing_metric(client, pro_headers):
    response = await client.delete("/api/v1/metrics/nope", headers=pro_headers)
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Metric not found"


async def test_pomodoro_lifecycle_and_stats(client, pro_headers):
    work = (await client.post("/api/v1/pomodoro", json={"duration": 25, "type": "work"}, headers=pro_headers)).json()["data"]
    assert work["completed"] is False
    assert work["startedAt"] is None

    started = (await client.patch(f"/api/v1/pomodoro/{work['id']}/start", headers=pro_headers)).json()["data"]
    assert started["startedAt"] is not None

    done = (await client.patch(f"/api/v1/pomodoro/{work['id']}/complete", headers=pro_headers)).json()["data"]
    assert done["completed"] is True
    assert done["completedAt"] is not None

    await client.post("/api/v1/pomodoro", json={"duration": 5, "type": "short_break"}, headers=pro_headers)

    stats = (await client.get("/api/v1/pomodoro/stats", headers=pro_headers)).json()["data"]
    assert stats == [{"type": "work", "count": 1, "totalMinutes": 25}]

    incomplete = (await client.get("/api/v1/pomodoro", params={"completed": "false"}, headers=pro_headers)).json()
    assert [s["type"] for s in incomplete["data"]] == ["short_break"]


async def test_pomodoro_rejects_unknown_type(client, pro_headers):
    response = await client.post("/api/v1/pomodoro", json={"duration": 25, "type": "nap"}, headers=pro_headers)
    assert response.status_code == 400


async def test_countdowns_ordered_by_target(client, pro_headers):
    later = await client.post(
        "/api/v1/countdowns", json={"name": "Launch", "targetDate": "2027-01-01T00:00:00"}, headers=pro_headers
    )
    sooner = await client.post(
        "/api/v1/countdowns", json={"name": "Demo", "targetDate": "2026-12-01T00:00:00"}, headers=pro_headers
    )
    assert later.status_code == 201

    listing = (await client.get("/api/v1/countdowns", headers=pro_headers)).json()["data"]
    assert [c["name"] for c in listing] == ["Demo", "Launch"]

    countdown_id = sooner.json()["data"]["id"]
    updated = await client.put(f"/api/v1/countdowns/{countdown_id}", json={"notifyBefore": 30}, headers=pro_headers)
    assert updated.json()["data"]["notifyBefore"] == 30
    assert updated.json()["data"]["name"] == "Demo"

    await client.delete(f"/api/v1/countdowns/{countdown_id}", headers=pro_headers)
    missing = await client.get(f"/api/v1/countdowns/{countdown_id}", headers=pro_headers)
    assert missing.status_code == 404
    assert missing.json()["error"]["message"] == "Countdown not found"


async def test_tab_stash_keeps_tab_fields(client, pro_headers):
    created = await client.post(
        "/api/v1/tabstash",
        json={
            "name": "Research",
            "tabs": [{"url": "https://example.com", "title": "Example", "favIconUrl": "https://example.com/f.ico"}],
        },
        headers=pro_headers,
    )
    assert created.status_code == 201
    stash = created.json()["data"]
    assert stash["tabs"][0]["favIconUrl"] == "https://example.com/f.ico"

    fetched = (await client.get(f"/api/v1/tabstash/{stash['id']}", headers=pro_headers)).json()["data"]
    assert fetched["tabs"] == stash["tabs"]


async def test_integration_upsert_hides_tokens(client, pro_headers):
    first = await client.post(
        "/api/v1/integrations", json={"service": "notion", "accessToken": "secret-1"}, headers=pro_headers
    )
    assert first.status_code == 201
    body = first.json()["data"]
    assert body["hasAccessToken"] is True
    assert body["hasRefreshToken"] is False
    assert "accessToken" not in body

    second = await client.post(
        "/api/v1/integrations",
        json={"service": "notion", "accessToken": "secret-2", "refreshToken": "r"},
        headers=pro_headers,
    )
    assert second.status_code == 200
    assert second.json()["data"]["id"] == body["id"]
    assert second.json()["data"]["hasRefreshToken"] is True

    listing = (await client.get("/api/v1/integrations", headers=pro_headers)).json()["data"]
    assert len(listing) == 1
    assert "secret" not in str(listing)

    synced = (await client.post(f"/api/v1/integrations/{body['id']}/sync", headers=pro_headers)).json()
    assert synced["message"] == "Sync initiated for notion"
    assert synced["data"] == {"synced": 0}


def test_daily_quote_depends_on_calendar_day():
    assert QuotesService.get_daily_quote(date(2026, 1, 1)) == QUOTES[1]
    assert QuotesService.get_daily_quote(date(2026, 1, 1)) == QuotesService.get_daily_quote(date(2026, 1, 1))


async def test_quote_routes(client):
    daily = await client.get("/api/v1/quotes/daily")
    assert daily.status_code == 200
    assert set(daily.json()["data"]) == {"text", "author", "category"}

    themed = (await client.get("/api/v1/quotes/random", params={"category": "resilience"})).json()["data"]
    assert themed["author"] == "Maya Angelou"

    fallback = await client.get("/api/v1/quotes/random", params={"category": "unheard-of"})
    assert fallback.json()["data"] in QUOTES


def test_parse_categories():
    text = "- Work\n* Personal\n\n• Ideas \n  Reading"
    assert parse_categories(text) == ["Work", "Personal", "Ideas", "Reading"]


async def test_conversation_message_round_trip(client, pro_headers, monkeypatch):
    chat = AsyncMock(return_value=AIResponse(message="Hi there", usage={"totalTokens": 12}))
    monkeypatch.setattr(AIService, "chat", chat)

    conversation = (await client.post(
        "/api/v1/ai/conversations", json={"type": "notes", "title": "Planning"}, headers=pro_headers
    )).json()["data"]
    assert conversation["messages"] == []

    reply = await client.post(
        f"/api/v1/ai/conversations/{conversation['id']}/message", json={"message": "Hello"}, headers=pro_headers
    )
    assert reply.status_code == 200
    data = reply.json()["data"]
    assert data["response"] == "Hi there"
    assert data["usage"] == {"totalTokens": 12}
    assert [m["role"] for m in data["conversation"]["messages"]] == ["user", "assistant"]

    sent_history = chat.await_args.args[0]
    assert sent_history[0]["content"] == "Hello"

    summaries = (await client.get("/api/v1/ai/conversations", headers=pro_headers)).json()["data"]
    assert summaries[0]["messageCount"] == 2


async def test_summarize_and_organize(client, pro_headers, monkeypatch):
    monkeypatch.setattr(AIService, "generate_note_summary", AsyncMock(return_value="Short."))
    monkeypatch.setattr(AIService, "suggest_note_organization", AsyncMock(return_value=["Work", "Home"]))

    summary = await client.post("/api/v1/ai/summarize", json={"content": "Long notes"}, headers=pro_headers)
    assert summary.json()["data"] == {"summary": "Short."}

    organized = await client.post("/api/v1/ai/organize", json={"notes": ["a", "b"]}, headers=pro_headers)
    assert organized.json()["data"] == {"categories": ["Work", "Home"]}


async def test_ai_requires_pro(client, db, bob):
    headers = await auth_headers(db, bob)
    response = await client.post("/api/v1/ai/summarize", json={"content": "x"}, headers=headers)
    assert response.status_code == 403


async def test_subscription_endpoints(client, db, alice):
    headers = await auth_headers(db, alice)

    none = (await client.get("/api/v1/subscriptions", headers=headers)).json()
    assert none == {"success": True, "data": None}

    check = (await client.get("/api/v1/subscriptions/check", headers=headers)).json()
    assert check["data"] == {"hasActiveSubscription": False}

    missing = await client.post("/api/v1/subscriptions/cancel", json={}, headers=headers)
    assert missing.status_code == 404
    assert missing.json()["error"]["message"] == "No active subscription found"

    await grant_pro(db, alice)
    assert (await client.get("/api/v1/subscriptions/check", headers=headers)).json()["data"] == {
        "hasActiveSubscription": True
    }

    later = (await client.post("/api/v1/subscriptions/cancel", json={}, headers=headers)).json()
    assert later["message"] == "Subscription will be canceled at the end of the billing period"
    assert later["data"]["cancelAtPeriodEnd"] is True
    assert later["data"]["status"] == "active"

    now = (await client.post("/api/v1/subscriptions/cancel", json={"cancelImmediately": True}, headers=headers)).json()
    assert now["message"] == "Subscription canceled immediately"
    assert now["data"]["status"] == "canceled"


async def test_checkout_session(client, db, alice, monkeypatch):
    headers = await auth_headers(db, alice)

    missing = await client.post("/api/v1/stripe/checkout", json={}, headers=headers)
    assert missing.status_code == 400
    assert missing.json()["error"]["message"] == "Plan ID is required"

    create = AsyncMock(return_value={"id": "cs_123", "url": "https://checkout.stripe.com/cs_123"})
    monkeypatch.setattr(StripeService, "create_checkout_session", create)

    response = await client.post("/api/v1/stripe/checkout", json={"planId": "price_pro"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["data"] == {"sessionId": "cs_123", "url": "https://checkout.stripe.com/cs_123"}

    args = create.await_args.args
    assert alice.id in args
    assert "price_pro" in args
