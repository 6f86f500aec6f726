from typing import Optional

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_store, get_telegram_bot
from main import app
from services.settings_manager import Settings, get_settings
from tests.fakes import STORE_KEY, STORE_URL, FakeSupabase, FakeTelegramBot

ADMIN_ID = "1000"


def make_settings(**overrides) -> Settings:
    values = dict(
        supabase_url=STORE_URL,
        supabase_key=STORE_KEY,
        telegram_bot_token="123456789:TEST-token",
        telegram_chat_id=ADMIN_ID,
        cron_secret="",
        notify_interval_hours=6,
        app_url="",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def fake_bot() -> FakeTelegramBot:
    return FakeTelegramBot()


@pytest.fixture
async def store(fake_db):
    async with fake_db.client() as client:
        yield client


@pytest.fixture
def make_client(fake_db, fake_bot):
    """TestClient с подменёнными настройками, хранилищем и ботом"""

    def factory(settings: Optional[Settings] = None, with_store: bool = True, with_bot: bool = True) -> TestClient:
        current = settings or make_settings()

        async def override_store():
            if not with_store:
                yield None
                return
            async with fake_db.client() as client:
                yield client

        app.dependency_overrides[get_settings] = lambda: current
        app.dependency_overrides[get_store] = override_store
        app.dependency_overrides[get_telegram_bot] = lambda: fake_bot if with_bot else None
        return TestClient(app)

    yield factory
    app.dependency_overrides.clear()
