#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Вебхук Telegram бота: кнопки модерации и команда /start

Telegram повторяет доставку при любом статусе кроме 2xx, поэтому ответ
всегда HTTP 200, а результат обработки передаётся полями ok/action/error.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from api.dependencies import get_store, get_telegram_bot
from app.bot.telegram_bot import TelegramBot
from database.repositories import UserRepository
from database.supabase import SupabaseClient
from models.telegram import TelegramUpdate
from services.logger import api_logger as logger
from services.moderation import ModerationService, WebhookResult
from services.settings_manager import Settings, get_settings

router = APIRouter()

__all__ = ["router"]


@router.api_route("", methods=["GET", "PUT", "PATCH", "DELETE"])
async def webhook_ping() -> Dict[str, Any]:
    return {"ok": True}


@router.post("")
async def telegram_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    store: Optional[SupabaseClient] = Depends(get_store),
    bot: Optional[TelegramBot] = Depends(get_telegram_bot),
) -> Dict[str, Any]:
    """Приём обновления от Telegram"""
    if store is None or bot is None or not settings.has_telegram_credentials():
        logger.error("Вебхук вызван без настроенных SUPABASE_* / TELEGRAM_*")
        return {"ok": False, "error": "Missing env"}

    try:
        data = await request.json()
    except ValueError:
        logger.warning("Вебхук получил тело, которое не является JSON")
        return {"ok": True}

    if not data or not isinstance(data, dict):
        return {"ok": True}

    try:
        update = TelegramUpdate.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Неподдерживаемый формат обновления: {e.error_count()} ошибок")
        return {"ok": True}

    service = ModerationService(settings, UserRepository(store), bot)
    try:
        result = await service.handle_update(update)
    except Exception as e:
        logger.error(f"Ошибка обработки обновления {update.update_id}: {e}", exc_info=True)
        result = WebhookResult(ok=False, error=str(e))

    return result.to_response()
