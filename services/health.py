"""Проверка конфигурации и доступности внешних сервисов"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.bot.telegram_bot import TelegramBot
from database.repositories import ListingRepository, isoformat_utc
from database.supabase import SupabaseClient
from services.exceptions import SupabaseError, TelegramAPIError
from services.logger import logger
from services.settings_manager import Settings


async def collect_health(
    settings: Settings,
    store: Optional[SupabaseClient],
    bot: Optional[TelegramBot],
) -> Dict[str, Any]:
    """
    Сбор состояния системы. Никогда не выбрасывает исключения:
    ошибки проверок попадают в ответ.
    """
    checks: Dict[str, Any] = {
        "supabase_url": bool(settings.supabase_url),
        "supabase_key": bool(settings.supabase_key),
        "telegram_bot": bool(settings.telegram_bot_token),
        "telegram_chat": bool(settings.telegram_chat_id),
        "timestamp": isoformat_utc(datetime.now(timezone.utc)),
    }

    # Проверка Supabase
    if store is not None:
        try:
            await ListingRepository(store).probe()
            checks["supabase_connected"] = True
            checks["supabase_status"] = 200
        except SupabaseError as e:
            checks["supabase_connected"] = False
            if e.upstream_status is not None:
                checks["supabase_status"] = e.upstream_status
            else:
                checks["supabase_error"] = e.message
        except Exception as e:
            logger.error(f"Ошибка проверки Supabase: {e}", exc_info=True)
            checks["supabase_connected"] = False
            checks["supabase_error"] = str(e)

    # Проверка Telegram Bot
    if bot is not None:
        try:
            me = await bot.get_me()
            checks["telegram_connected"] = True
            checks["telegram_bot_name"] = me.get("username")
        except TelegramAPIError as e:
            checks["telegram_connected"] = False
            checks["telegram_error"] = e.message
        except Exception as e:
            logger.error(f"Ошибка проверки Telegram: {e}", exc_info=True)
            checks["telegram_connected"] = False
            checks["telegram_error"] = str(e)

    healthy = bool(checks.get("supabase_connected") and checks.get("telegram_connected"))
    return {"status": "healthy" if healthy else "degraded", **checks}
