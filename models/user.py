#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Модель пользователя Mini App (таблица app_users в Supabase)
"""

import enum
from typing import Optional, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserStatus(str, enum.Enum):
    """Статус доступа пользователя"""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AppUser(BaseModel):
    """Пользователь, запросивший доступ к приложению"""

    model_config = ConfigDict(extra="ignore")

    telegram_user_id: str = Field(..., description="ID пользователя в Telegram")
    username: Optional[str] = Field(None, description="Username в Telegram")
    first_name: Optional[str] = Field(None, description="Имя пользователя")
    last_name: Optional[str] = Field(None, description="Фамилия пользователя")
    status: UserStatus = Field(UserStatus.PENDING, description="Статус доступа")
    approved_at: Optional[str] = Field(None, description="Время одобрения (ISO)")
    created_at: Optional[str] = None

    @field_validator("telegram_user_id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> str:
        return str(value)

    def __repr__(self):
        return f"<AppUser(telegram_user_id={self.telegram_user_id}, status='{self.status.value}')>"

    @property
    def display_name(self) -> str:
        """Имя для сообщения администратору"""
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        if self.first_name:
            return self.first_name
        return "Άγνωστο"

    @property
    def tag(self) -> str:
        return f"@{self.username}" if self.username else "χωρίς username"

    def to_row(self) -> dict:
        """Строка для вставки в app_users"""
        return {
            "telegram_user_id": self.telegram_user_id,
            "username": self.username or None,
            "first_name": self.first_name or None,
            "last_name": self.last_name or None,
            "status": self.status.value,
        }
