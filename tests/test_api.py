from tests.conftest import ADMIN_ID, make_settings


# ========== /api/auth ==========

def test_auth_registers_new_user(make_client, fake_db, fake_bot):
    client = make_client()

    response = client.post("/api/auth", json={"telegram_user_id": 555, "username": "maria", "first_name": "Maria"})

    assert response.status_code == 200
    assert response.json() == {"status": "pending"}
    assert response.headers["access-control-allow-origin"] == "*"
    assert fake_db.tables["app_users"][0]["telegram_user_id"] == "555"
    assert fake_bot.sent("send_message")[0]["chat_id"] == ADMIN_ID


def test_auth_returns_status_of_existing_user(make_client, fake_db, fake_bot):
    fake_db.tables["app_users"].append({"telegram_user_id": "555", "status": "rejected"})
    client = make_client()

    response = client.post("/api/auth", json={"telegram_user_id": "555"})

    assert response.json() == {"status": "rejected"}
    assert fake_bot.calls == []


def test_auth_reports_unsent_admin_notification(make_client, fake_bot):
    fake_bot.failing.add("send_message")
    client = make_client()

    response = client.post("/api/auth", json={"telegram_user_id": 555})

    assert response.status_code == 200
    assert response.json() == {"status": "pending", "admin_notified": False}


def test_auth_whole_float_id_matches_stored_user(make_client, fake_db, fake_bot):
    fake_db.tables["app_users"].append({"telegram_user_id": "555", "status": "approved"})
    client = make_client()

    response = client.post("/api/auth", json={"telegram_user_id": 555.0})

    assert response.json() == {"status": "approved"}
    assert fake_db.calls("POST") == []


def test_auth_without_user_id(make_client, fake_db):
    client = make_client()

    response = client.post("/api/auth", json={"username": "maria"})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing telegram_user_id"}
    assert fake_db.requests == []


def test_auth_with_malformed_body(make_client):
    client = make_client()

    response = client.post("/api/auth", content=b"{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert "error" in response.json()


def test_auth_without_configuration(make_client, fake_db):
    client = make_client(with_store=False)

    response = client.post("/api/auth", json={"telegram_user_id": 555})

    assert response.status_code == 500
    assert response.json() == {"error": "Missing env vars"}
    assert fake_db.requests == []


def test_auth_store_failure(make_client, fake_db):
    fake_db.fail("GET", "app_users", 500)
    client = make_client()

    response = client.post("/api/auth", json={"telegram_user_id": 555})

    assert response.status_code == 500
    assert "error" in response.json()


def test_auth_preflight(make_client):
    client = make_client()

    response = client.options("/api/auth")

    assert response.status_code == 200
    assert response.headers["access-control-allow-methods"] == "POST, OPTIONS"


def test_auth_rejects_other_methods(make_client):
    client = make_client()

    response = client.get("/api/auth")

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}


def test_unknown_route_uses_error_shape(make_client):
    response = make_client().get("/api/missing")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


# ========== /api/bot-webhook ==========

def approve_update(sender=ADMIN_ID):
    return {
        "update_id": 10,
        "callback_query": {
            "id": "cb",
            "from": {"id": int(sender)},
            "data": "approve_555",
            "message": {"message_id": 5, "chat": {"id": int(ADMIN_ID)}},
        },
    }


def test_webhook_approves_user(make_client, fake_db):
    fake_db.tables["app_users"].append({"telegram_user_id": "555", "status": "pending"})
    client = make_client()

    response = client.post("/api/bot-webhook", json=approve_update())

    assert response.status_code == 200
    assert response.json() == {"ok": True, "action": "approved"}
    assert fake_db.tables["app_users"][0]["status"] == "approved"


def test_webhook_store_error_still_returns_200(make_client, fake_db):
    fake_db.tables["app_users"].append({"telegram_user_id": "555", "status": "pending"})
    fake_db.fail("PATCH", "app_users", 500)
    client = make_client()

    response = client.post("/api/bot-webhook", json=approve_update())

    assert response.status_code == 200
    assert response.json() == {"ok": False, "error": "database_error"}


def test_webhook_keeps_decision_when_telegram_fails(make_client, fake_db, fake_bot):
    fake_db.tables["app_users"].append({"telegram_user_id": "555", "status": "pending"})
    fake_bot.failing.update({"answer_callback_query", "edit_message_text"})
    client = make_client()

    response = client.post("/api/bot-webhook", json=approve_update())

    assert response.status_code == 200
    assert response.json() == {"ok": True, "action": "approved"}
    assert fake_db.tables["app_users"][0]["status"] == "approved"


def test_webhook_unexpected_error_still_returns_200(make_client, fake_db, fake_bot):
    fake_bot.failing.add("answer_callback_query")
    client = make_client()

    response = client.post("/api/bot-webhook", json=approve_update(sender="999"))

    assert response.status_code == 200
    assert response.json()["ok"] is False
    assert "Forbidden" in response.json()["error"]
    assert fake_db.calls("PATCH") == []


def test_webhook_ignores_garbage(make_client, fake_db):
    client = make_client()

    assert client.post("/api/bot-webhook", content=b"not json").json() == {"ok": True}
    assert client.post("/api/bot-webhook", json={}).json() == {"ok": True}
    assert client.post("/api/bot-webhook", json={"callback_query": {"id": "x"}}).json() == {"ok": True}
    assert fake_db.requests == []


def test_webhook_without_configuration(make_client):
    client = make_client(with_bot=False)

    response = client.post("/api/bot-webhook", json=approve_update())

    assert response.status_code == 200
    assert response.json() == {"ok": False, "error": "Missing env"}


def test_webhook_ping(make_client):
    client = make_client()

    assert client.get("/api/bot-webhook").json() == {"ok": True}
    assert client.put("/api/bot-webhook").json() == {"ok": True}


# ========== /api/notify ==========

def test_notify_requires_secret(make_client, fake_db, fake_bot):
    client = make_client(make_settings(cron_secret="s3cret"))

    response = client.get("/api/notify")
    wrong = client.get("/api/notify", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
    assert wrong.status_code == 401
    assert fake_db.requests == []
    assert fake_bot.calls == []


def test_notify_accepts_bearer_and_key(make_client):
    client = make_client(make_settings(cron_secret="s3cret"))

    by_header = client.post("/api/notify", headers={"Authorization": "Bearer s3cret"})
    by_key = client.get("/api/notify", params={"key": "s3cret"})

    assert by_header.status_code == 200
    assert by_key.status_code == 200
    assert by_key.json()["message"] == "No updates to notify"


def test_notify_without_secret_configured_is_open(make_client, fake_db, fake_bot):
    fake_db.tables["listings"].append(
        {"listing_id": "1", "change_type": "NEW", "price": 99000, "first_seen_date": "2999-01-01T00:00:00.000Z"}
    )
    client = make_client()

    response = client.get("/api/notify")

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["new"] == 1
    assert len(fake_bot.sent("send_message")) == 1


def test_notify_configuration_errors(make_client):
    assert make_client(with_store=False).get("/api/notify").json() == {"error": "Missing Supabase credentials"}
    response = make_client(with_bot=False).get("/api/notify")
    assert response.status_code == 500
    assert response.json() == {"error": "Missing Telegram credentials"}


def test_notify_store_failure(make_client, fake_db, fake_bot):
    fake_db.fail("GET", "listings", 500)

    response = make_client().get("/api/notify")

    assert response.status_code == 500
    assert fake_bot.calls == []


# ========== /api/health ==========

def test_health_all_connected(make_client):
    response = make_client().get("/api/health")

    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "healthy"
    assert body["supabase_connected"] is True
    assert body["supabase_status"] == 200
    assert body["telegram_bot_name"] == "greecing_bot"
    assert body["timestamp"].endswith("Z")


def test_health_degraded(make_client, fake_db, fake_bot):
    fake_db.fail("GET", "listings", 503)
    fake_bot.failing.add("get_me")

    response = make_client().get("/api/health")

    body = response.json()
    assert response.status_code == 503
    assert body["status"] == "degraded"
    assert body["supabase_connected"] is False
    assert body["supabase_status"] == 503
    assert body["telegram_connected"] is False
    assert "Forbidden" in body["telegram_error"]


def test_health_without_configuration(make_client):
    response = make_client(make_settings(supabase_url="", supabase_key=""), with_store=False).get("/api/health")

    body = response.json()
    assert body["supabase_url"] is False
    assert "supabase_connected" not in body
    assert response.status_code == 503


def test_liveness(make_client):
    assert make_client().get("/api/health/live").json() == {"status": "alive"}
