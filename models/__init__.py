#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Модели данных уведомителя об объявлениях недвижимости
"""

from .user import AppUser, UserStatus
from .listing import Listing, ChangeType
from .telegram import TelegramUpdate, CallbackQuery, TelegramMessage, TelegramChat, TelegramUser

__all__ = [
    "AppUser",
    "UserStatus",
    "Listing",
    "ChangeType",
    "TelegramUpdate",
    "CallbackQuery",
    "TelegramMessage",
    "TelegramChat",
    "TelegramUser",
]
