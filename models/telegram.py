#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Подмножество объекта Update из Telegram Bot API, которое разбирает вебхук
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _TelegramObject(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TelegramUser(_TelegramObject):
    id: int
    is_bot: bool = False
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class TelegramChat(_TelegramObject):
    id: int
    type: Optional[str] = None


class TelegramMessage(_TelegramObject):
    message_id: int
    chat: TelegramChat
    from_user: Optional[TelegramUser] = Field(None, alias="from")
    text: Optional[str] = None


class CallbackQuery(_TelegramObject):
    id: str
    from_user: TelegramUser = Field(..., alias="from")
    data: Optional[str] = None
    message: Optional[TelegramMessage] = None


class TelegramUpdate(_TelegramObject):
    update_id: Optional[int] = None
    message: Optional[TelegramMessage] = None
    callback_query: Optional[CallbackQuery] = None

    @property
    def is_start_command(self) -> bool:
        """Команда /start, в том числе /start@bot и /start <payload>"""
        if not self.message or not self.message.text:
            return False
        parts = self.message.text.split()
        command = parts[0] if parts else ""
        return command.split("@", 1)[0] == "/start"
