"""
Зависимости FastAPI: настройки, клиенты внешних сервисов, проверка секрета cron
"""

import hmac
from typing import AsyncIterator, Dict, Optional

from fastapi import Depends, Request

from app.bot.telegram_bot import TelegramBot
from database.config import create_store
from database.supabase import SupabaseClient
from services.exceptions import UnauthorizedError
from services.logger import api_logger as logger
from services.settings_manager import Settings, get_settings

# Один экземпляр бота на токен: telegram.Bot держит пул HTTP-соединений
_bots: Dict[str, TelegramBot] = {}


async def get_store(settings: Settings = Depends(get_settings)) -> AsyncIterator[Optional[SupabaseClient]]:
    """Клиент Supabase на время запроса; None, если хранилище не настроено"""
    store = create_store(settings)
    if store is None:
        yield None
        return
    async with store:
        yield store


def get_telegram_bot(settings: Settings = Depends(get_settings)) -> Optional[TelegramBot]:
    """Бот Telegram; None, если не задан TELEGRAM_BOT_TOKEN"""
    token = settings.telegram_bot_token
    if not token:
        return None
    if token not in _bots:
        _bots[token] = TelegramBot(token=token)
    return _bots[token]


async def shutdown_bots() -> None:
    """Закрытие HTTP-соединений всех созданных ботов"""
    while _bots:
        _, bot = _bots.popitem()
        await bot.shutdown()


def _secret_matches(candidate: str, expected: str) -> bool:
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def verify_cron_secret(request: Request, settings: Settings = Depends(get_settings)) -> None:
    """
    Проверка вызова планировщика: заголовок "Authorization: Bearer <CRON_SECRET>"
    или параметр ?key=<CRON_SECRET>. Без CRON_SECRET проверка отключена.
    """
    secret = settings.cron_secret
    if not secret:
        return

    header = request.headers.get("authorization", "")
    key = request.query_params.get("key", "")
    if _secret_matches(header, f"Bearer {secret}") or _secret_matches(key, secret):
        return

    logger.warning(f"Отклонён вызов {request.url.path} без корректного секрета")
    raise UnauthorizedError("Unauthorized")


__all__ = ["get_store", "get_telegram_bot", "shutdown_bots", "verify_cron_secret"]
