from services.settings_manager import Settings, _parse_interval


def test_interval_parsing_follows_parse_int_semantics():
    assert _parse_interval("12") == 12
    assert _parse_interval(" 3h") == 3
    assert _parse_interval("") == 6
    assert _parse_interval("abc") == 6
    assert _parse_interval("0") == 6
    assert _parse_interval("-4") == 6


def test_from_env_reads_and_normalises(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://abc.supabase.co/")
    monkeypatch.setenv("SUPABASE_KEY", "key")
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "1:token")
    monkeypatch.setenv("TELEGRAM_CHAT_ID", " 42 ")
    monkeypatch.setenv("NOTIFY_INTERVAL_HOURS", "nope")
    monkeypatch.delenv("CRON_SECRET", raising=False)

    settings = Settings.from_env()

    assert settings.supabase_url == "https://abc.supabase.co"
    assert settings.telegram_chat_id == "42"
    assert settings.interval_hours == 6
    assert settings.cron_secret == ""
    assert settings.has_store_credentials()
    assert settings.has_telegram_credentials()


def test_admin_identity_compares_as_strings():
    settings = Settings(telegram_chat_id="1000")

    assert settings.is_admin(1000)
    assert settings.is_admin("1000")
    assert not settings.is_admin(1001)
    assert not Settings().is_admin(1000)
