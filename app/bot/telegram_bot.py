"""
Telegram Bot для уведомителя об объявлениях недвижимости
"""

import os
from typing import Optional, Dict, Any, Tuple, Union

from telegram import Bot, InlineKeyboardMarkup, LinkPreviewOptions
from telegram.error import TelegramError
from telegram.request import HTTPXRequest

from services.exceptions import TelegramAPIError
from services.logger import bot_logger as logger

ChatId = Union[int, str]

# Пул соединений для основных запросов; getUpdates не используется (вебхук)
CONNECTION_POOL_SIZE = 8


class TelegramBot:
    """Класс для работы с Telegram Bot API"""

    def __init__(self, token: Optional[str] = None, bot: Optional[Bot] = None):
        """
        Инициализация бота

        Args:
            token: Токен бота (если None, берется из переменных окружения)
            bot: Готовый экземпляр telegram.Bot (для тестов)
        """
        self._requests: Tuple[HTTPXRequest, ...] = ()
        if bot is None:
            token = token or os.getenv("TELEGRAM_BOT_TOKEN")
            if not token:
                raise ValueError("TELEGRAM_BOT_TOKEN не найден в переменных окружения")
            # Клиенты HTTP создаём сами: Bot.shutdown() без initialize() их не закрывает
            self._requests = (
                HTTPXRequest(connection_pool_size=CONNECTION_POOL_SIZE),
                HTTPXRequest(),
            )
            bot = Bot(token=token, request=self._requests[0], get_updates_request=self._requests[1])

        self.bot = bot
        logger.info("Telegram Bot инициализирован")

    async def get_me(self) -> Dict[str, Any]:
        """Получение информации о боте"""
        try:
            bot_info = await self.bot.get_me()
            return {
                "id": bot_info.id,
                "username": bot_info.username,
                "first_name": bot_info.first_name,
                "is_bot": bot_info.is_bot
            }
        except TelegramError as e:
            logger.error(f"Ошибка получения информации о боте: {e}")
            raise TelegramAPIError(f"Telegram getMe error: {e}") from e

    async def send_message(
        self,
        chat_id: ChatId,
        text: str,
        parse_mode: str = "HTML",
        reply_markup: Optional[InlineKeyboardMarkup] = None,
        disable_preview: bool = False,
    ) -> Dict[str, Any]:
        """Отправка сообщения"""
        try:
            message = await self.bot.send_message(
                chat_id=chat_id,
                text=text,
                parse_mode=parse_mode,
                reply_markup=reply_markup,
                link_preview_options=LinkPreviewOptions(is_disabled=True) if disable_preview else None,
            )
            logger.info(f"Сообщение отправлено в чат {chat_id}")
            return {
                "message_id": message.message_id,
                "chat_id": message.chat.id,
            }
        except TelegramError as e:
            logger.error(f"Ошибка отправки сообщения в чат {chat_id}: {e}")
            raise TelegramAPIError(f"Telegram error: {e}") from e

    async def edit_message_text(
        self, chat_id: ChatId, message_id: int, text: str, parse_mode: str = "HTML"
    ) -> None:
        """Редактирование ранее отправленного сообщения"""
        try:
            await self.bot.edit_message_text(
                text=text,
                chat_id=chat_id,
                message_id=message_id,
                parse_mode=parse_mode,
            )
        except TelegramError as e:
            logger.error(f"Ошибка редактирования сообщения {message_id}: {e}")
            raise TelegramAPIError(f"Telegram editMessageText error: {e}") from e

    async def answer_callback_query(
        self, callback_query_id: str, text: str, show_alert: bool = False
    ) -> None:
        """Ответ на нажатие inline-кнопки"""
        try:
            await self.bot.answer_callback_query(
                callback_query_id=callback_query_id,
                text=text,
                show_alert=show_alert,
            )
        except TelegramError as e:
            logger.error(f"Ошибка ответа на callback {callback_query_id}: {e}")
            raise TelegramAPIError(f"Telegram answerCallbackQuery error: {e}") from e

    async def shutdown(self) -> None:
        """Закрытие HTTP-клиентов бота; повторный вызов безопасен"""
        await self.bot.shutdown()
        for request in self._requests:
            await request.shutdown()
