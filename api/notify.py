#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
API запуска дайджеста объявлений (вызывается планировщиком)
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_store, get_telegram_bot, verify_cron_secret
from app.bot.telegram_bot import TelegramBot
from database.repositories import ListingRepository
from database.supabase import SupabaseClient
from services.exceptions import ConfigurationError
from services.notifier import DigestNotifier
from services.settings_manager import Settings, get_settings

router = APIRouter()

__all__ = ["router"]


@router.api_route("", methods=["GET", "POST"], dependencies=[Depends(verify_cron_secret)])
async def send_digest(
    settings: Settings = Depends(get_settings),
    store: Optional[SupabaseClient] = Depends(get_store),
    bot: Optional[TelegramBot] = Depends(get_telegram_bot),
) -> Dict[str, Any]:
    """Отправка дайджеста за последние NOTIFY_INTERVAL_HOURS часов"""
    if store is None:
        raise ConfigurationError("Missing Supabase credentials")
    if bot is None or not settings.telegram_chat_id:
        raise ConfigurationError("Missing Telegram credentials")

    notifier = DigestNotifier(settings, ListingRepository(store), bot)
    result = await notifier.run()
    return result.to_response()
