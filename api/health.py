#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
API проверки состояния: конфигурация, связь с Supabase и Telegram, liveness
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from typing import Dict, Optional

from api.dependencies import get_store, get_telegram_bot
from app.bot.telegram_bot import TelegramBot
from database.supabase import SupabaseClient
from services.health import collect_health
from services.settings_manager import Settings, get_settings

router = APIRouter()

__all__ = ["router"]


@router.get("")
async def health_check(
    settings: Settings = Depends(get_settings),
    store: Optional[SupabaseClient] = Depends(get_store),
    bot: Optional[TelegramBot] = Depends(get_telegram_bot),
) -> JSONResponse:
    """Проверка конфигурации и связи с Supabase и Telegram"""
    health_status = await collect_health(settings, store, bot)
    status_code = 200 if health_status["status"] == "healthy" else 503
    return JSONResponse(health_status, status_code=status_code)


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    """Проверка жизни приложения (для Kubernetes)"""
    return {"status": "alive"}
