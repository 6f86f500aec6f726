import asyncio
import traceback
from typing import Any, Dict

from app.bot.telegram_bot import TelegramBot
from database.config import create_store
from database.repositories import ListingRepository
from services.exceptions import ConfigurationError
from services.logger import celery_logger
from services.notifier import DigestNotifier
from services.settings_manager import get_settings

# Импортируем celery_app после создания, чтобы избежать циклического импорта
from services.celery_app import celery_app


async def _send_listings_digest_async() -> Dict[str, Any]:
    """Асинхронная часть: те же выборки и отправка, что и у /api/notify"""
    settings = get_settings()
    store = create_store(settings)
    if store is None:
        raise ConfigurationError("Missing Supabase credentials")
    if not settings.has_telegram_credentials():
        raise ConfigurationError("Missing Telegram credentials")

    bot = TelegramBot(token=settings.telegram_bot_token)
    try:
        async with store:
            notifier = DigestNotifier(settings, ListingRepository(store), bot)
            result = await notifier.run()
    finally:
        await bot.shutdown()
    return result.to_response()


@celery_app.task(name='services.celery_tasks.send_listings_digest')
def send_listings_digest():
    """Периодическая отправка дайджеста объявлений"""

    def run_async_task():
        """Запуск асинхронной задачи в синхронном контексте Celery"""
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        try:
            return loop.run_until_complete(_send_listings_digest_async())
        finally:
            loop.close()

    try:
        result = run_async_task()
        celery_logger.info(f"Дайджест обработан: {result}")
        return result
    except Exception as e:
        celery_logger.error(f"Ошибка при отправке дайджеста: {e}")
        celery_logger.error(traceback.format_exc())
        raise
