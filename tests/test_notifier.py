from datetime import datetime, timezone

import pytest

from database.repositories import ListingRepository
from services.exceptions import SupabaseError
from services.notifier import DigestNotifier
from tests.conftest import ADMIN_ID, make_settings

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
SINCE = "2024-05-01T06:00:00.000Z"


@pytest.fixture
def notifier(store, fake_bot):
    settings = make_settings(app_url="https://app.example.com")
    return DigestNotifier(settings, ListingRepository(store), fake_bot, clock=lambda: NOW)


def add_listing(fake_db, listing_id, change_type, **fields):
    row = {
        "listing_id": listing_id,
        "property_type": "Διαμέρισμα",
        "area": "Κηφισιά",
        "price": 200000,
        "change_type": change_type,
        "first_seen_date": "2024-05-01T08:00:00.000Z",
        "last_seen_date": "2024-05-01T08:00:00.000Z",
    }
    row.update(fields)
    fake_db.tables["listings"].append(row)


def test_window_start_uses_interval(store, fake_bot):
    notifier = DigestNotifier(
        make_settings(notify_interval_hours=24), ListingRepository(store), fake_bot, clock=lambda: NOW
    )
    assert notifier.window_start() == "2024-04-30T12:00:00.000Z"


async def test_no_activity_sends_nothing(notifier, fake_bot):
    result = await notifier.run()

    assert result.to_response() == {
        "message": "No updates to notify",
        "checked_since": SINCE,
        "new": 0,
        "drops": 0,
        "ups": 0,
    }
    assert fake_bot.calls == []


async def test_digest_counts_only_changes_inside_window(notifier, fake_db, fake_bot):
    add_listing(fake_db, "1", "NEW")
    add_listing(fake_db, "2", "NEW", first_seen_date="2024-04-30T08:00:00.000Z")
    add_listing(fake_db, "3", "PRICE_DROP", price=180000, price_change=-20000)
    add_listing(fake_db, "4", "PRICE_UP", price=210000, price_change=10000)

    result = await notifier.run()

    assert result.to_response() == {"success": True, "checked_since": SINCE, "new": 1, "drops": 1, "ups": 1}
    message = fake_bot.sent("send_message")[0]
    assert message["chat_id"] == ADMIN_ID
    assert message["disable_preview"] is True
    assert "📢 <b>1 νέες αγγελίες:</b>" in message["text"]
    assert "200.000€ → 180.000€ (-10.0%)" in message["text"]
    assert "200.000€ → 210.000€ (+5.0%)" in message["text"]
    assert 'href="https://app.example.com"' in message["text"]


async def test_reads_use_window_start(notifier, fake_db):
    await notifier.run()

    params = [r.url.params for r in fake_db.calls("GET")]
    assert params[0]["first_seen_date"] == f"gte.{SINCE}"
    assert params[1]["last_seen_date"] == f"gte.{SINCE}"
    assert params[2]["last_seen_date"] == f"gte.{SINCE}"


async def test_failed_read_sends_nothing(notifier, fake_db, fake_bot):
    add_listing(fake_db, "1", "NEW")
    fake_db.fail("GET", "listings", 500)

    with pytest.raises(SupabaseError):
        await notifier.run()

    assert fake_bot.calls == []
