"""
Периодический дайджест новых объявлений и изменений цен

Запускается внешним планировщиком (cron → /api/notify) или Celery beat.
Все выборки выполняются до отправки: при ошибке любой из них сообщение не уходит.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from app.bot.telegram_bot import TelegramBot
from database.repositories import ListingRepository, isoformat_utc
from services.digest_formatter import build_digest
from services.logger import setup_logger
from services.settings_manager import Settings

logger = setup_logger(__name__)

NEW_QUERY_LIMIT = 20
DROPS_QUERY_LIMIT = 15
UPS_QUERY_LIMIT = 10


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DigestResult:
    """Итог запуска дайджеста"""

    checked_since: str
    new: int = 0
    drops: int = 0
    ups: int = 0
    sent: bool = False

    def to_response(self) -> Dict[str, Any]:
        counts = {"checked_since": self.checked_since, "new": self.new, "drops": self.drops, "ups": self.ups}
        if not self.sent:
            return {"message": "No updates to notify", **counts}
        return {"success": True, **counts}


class DigestNotifier:
    """Сборка и отправка дайджеста администратору"""

    def __init__(
        self,
        settings: Settings,
        listings: ListingRepository,
        bot: TelegramBot,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.settings = settings
        self.listings = listings
        self.bot = bot
        self.clock = clock or utcnow

    def window_start(self) -> str:
        """Начало окна: сейчас минус NOTIFY_INTERVAL_HOURS"""
        return isoformat_utc(self.clock() - timedelta(hours=self.settings.interval_hours))

    async def run(self) -> DigestResult:
        """
        Выборка изменений за окно и отправка дайджеста

        Raises:
            SupabaseError: ошибка выборки
            TelegramAPIError: ошибка отправки
        """
        hours = self.settings.interval_hours
        since = self.window_start()

        new_listings = await self.listings.new_since(since, limit=NEW_QUERY_LIMIT)
        price_drops = await self.listings.price_drops_since(since, limit=DROPS_QUERY_LIMIT)
        price_ups = await self.listings.price_ups_since(since, limit=UPS_QUERY_LIMIT)

        result = DigestResult(
            checked_since=since,
            new=len(new_listings),
            drops=len(price_drops),
            ups=len(price_ups),
        )

        message = build_digest(hours, new_listings, price_drops, price_ups, self.settings.app_url)
        if message is None:
            logger.info(f"Нет изменений с {since}, дайджест не отправлен")
            return result

        await self.bot.send_message(self.settings.telegram_chat_id, message, disable_preview=True)
        result.sent = True
        logger.info(
            f"Дайджест отправлен: новых {result.new}, снижений {result.drops}, повышений {result.ups}"
        )
        return result
