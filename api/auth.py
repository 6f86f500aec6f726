#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
API регистрации пользователей Telegram Mini App

Новый пользователь получает статус pending и ждёт решения администратора,
существующему возвращается текущий статус.
"""

from typing import Optional, Union

from fastapi import APIRouter, Body, Depends, Response
from pydantic import BaseModel

from api.dependencies import get_store, get_telegram_bot
from app.bot.telegram_bot import TelegramBot
from database.repositories import UserRepository
from database.supabase import SupabaseClient
from services.exceptions import AppError, ConfigurationError
from services.logger import setup_logger
from services.registration import RegistrationService
from services.settings_manager import Settings, get_settings

logger = setup_logger(__name__)

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


# ========== МОДЕЛИ ЗАПРОСОВ ==========
class AuthRequest(BaseModel):
    """Модель запроса регистрации"""
    telegram_user_id: Optional[Union[int, str]] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


__all__ = ["router"]


@router.options("")
async def auth_preflight() -> Response:
    """Preflight-запрос Mini App"""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.api_route("", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def auth_method_not_allowed():
    raise AppError("Method not allowed", status_code=405)


@router.post("")
async def register_user(
    response: Response,
    payload: Optional[AuthRequest] = Body(None),
    settings: Settings = Depends(get_settings),
    store: Optional[SupabaseClient] = Depends(get_store),
    bot: Optional[TelegramBot] = Depends(get_telegram_bot),
):
    """Регистрация пользователя или получение его статуса"""
    response.headers.update(CORS_HEADERS)

    if store is None or bot is None or not settings.has_telegram_credentials():
        raise ConfigurationError("Missing env vars")

    payload = payload or AuthRequest()
    service = RegistrationService(settings, UserRepository(store), bot)
    result = await service.register(
        payload.telegram_user_id,
        username=payload.username,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )

    if result.created:
        logger.info(
            f"Новая заявка от {payload.telegram_user_id}, "
            f"администратор уведомлён: {result.admin_notified}"
        )
    return result.to_response()
