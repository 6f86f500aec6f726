"""Менеджер настроек: читает переменные окружения в явный объект Settings"""
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Загрузка переменных окружения
load_dotenv()

DEFAULT_NOTIFY_INTERVAL_HOURS = 6
DEFAULT_HTTP_TIMEOUT = 10.0


def _parse_interval(raw: str) -> int:
    """Аналог parseInt(...) || 6: мусор, ноль и отрицательные значения дают значение по умолчанию"""
    raw = (raw or "").strip()
    digits = ""
    for i, ch in enumerate(raw):
        if ch.isdigit() or (i == 0 and ch in "+-"):
            digits += ch
        else:
            break
    try:
        value = int(digits)
    except ValueError:
        return DEFAULT_NOTIFY_INTERVAL_HOURS
    return value if value > 0 else DEFAULT_NOTIFY_INTERVAL_HOURS


def _parse_float(raw: str, default: float) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


class Settings(BaseModel):
    """Конфигурация приложения"""

    supabase_url: str = Field("", description="Базовый URL Supabase (без /rest/v1)")
    supabase_key: str = Field("", description="API-ключ Supabase")
    telegram_bot_token: str = Field("", description="Токен Telegram бота")
    telegram_chat_id: str = Field("", description="Chat ID администратора, он же получатель дайджеста")
    cron_secret: str = Field("", description="Секрет для вызова /api/notify")
    notify_interval_hours: int = Field(DEFAULT_NOTIFY_INTERVAL_HOURS, description="Окно дайджеста в часах")
    app_url: str = Field("", description="Публичный URL Mini App для ссылки в дайджесте")
    http_timeout: float = Field(DEFAULT_HTTP_TIMEOUT, description="Таймаут исходящих HTTP запросов, сек")
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            supabase_url=os.getenv("SUPABASE_URL", "").strip().rstrip("/"),
            supabase_key=os.getenv("SUPABASE_KEY", "").strip(),
            telegram_bot_token=os.getenv("TELEGRAM_BOT_TOKEN", "").strip(),
            telegram_chat_id=os.getenv("TELEGRAM_CHAT_ID", "").strip(),
            cron_secret=os.getenv("CRON_SECRET", "").strip(),
            notify_interval_hours=_parse_interval(os.getenv("NOTIFY_INTERVAL_HOURS", "")),
            app_url=os.getenv("APP_URL", "").strip(),
            http_timeout=_parse_float(os.getenv("HTTP_TIMEOUT_SECONDS"), DEFAULT_HTTP_TIMEOUT),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def interval_hours(self) -> int:
        if self.notify_interval_hours <= 0:
            return DEFAULT_NOTIFY_INTERVAL_HOURS
        return self.notify_interval_hours

    def has_store_credentials(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    def has_telegram_credentials(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)

    def is_admin(self, telegram_id) -> bool:
        """Сравнение идёт по строкам: id из Telegram приходит числом, из env - строкой"""
        if not self.telegram_chat_id or telegram_id is None:
            return False
        return str(telegram_id) == self.telegram_chat_id


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()


__all__ = ["Settings", "get_settings", "DEFAULT_NOTIFY_INTERVAL_HOURS"]
