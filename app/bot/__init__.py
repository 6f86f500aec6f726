"""
Модуль интеграции с Telegram Bot для уведомителя об объявлениях недвижимости.
"""

from .telegram_bot import TelegramBot
from .keyboards import moderation_keyboard

__all__ = ["TelegramBot", "moderation_keyboard"]
