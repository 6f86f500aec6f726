"""
Регистрация пользователей Mini App

Новый пользователь создаётся со статусом pending, администратор получает
сообщение с кнопками одобрения. Создание пользователя и уведомление -
два отдельных шага: ошибка уведомления не откатывает регистрацию.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.bot.keyboards import moderation_keyboard
from app.bot.messages import registration_request_text
from app.bot.telegram_bot import TelegramBot
from database.repositories import UserRepository
from models.user import AppUser, UserStatus
from services.exceptions import BadRequestError, SupabaseError, TelegramAPIError
from services.logger import setup_logger
from services.settings_manager import Settings

logger = setup_logger(__name__)

HTTP_CONFLICT = 409


@dataclass
class RegistrationResult:
    """Результат регистрации"""

    status: UserStatus
    created: bool
    admin_notified: bool = False

    def to_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"status": self.status.value}
        if self.created and not self.admin_notified:
            # Пользователь создан, но администратор о нём не узнал
            body["admin_notified"] = False
        return body


def normalize_user_id(raw: Any) -> Optional[str]:
    """ID может прийти числом или строкой; пустые значения считаются отсутствующими"""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return str(raw) if raw else None
    if isinstance(raw, str):
        return raw.strip() or None
    return None


class RegistrationService:
    """Сервис регистрации пользователей"""

    def __init__(self, settings: Settings, users: UserRepository, bot: TelegramBot):
        self.settings = settings
        self.users = users
        self.bot = bot

    async def register(
        self,
        telegram_user_id: Any,
        username: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> RegistrationResult:
        """
        Регистрация пользователя или возврат статуса существующего

        Raises:
            BadRequestError: не передан telegram_user_id
            SupabaseError: ошибка хранилища
        """
        uid = normalize_user_id(telegram_user_id)
        if uid is None:
            raise BadRequestError("Missing telegram_user_id")

        existing = await self.users.get(uid)
        if existing:
            return RegistrationResult(status=existing.status, created=False)

        try:
            user = await self.users.create_pending(
                uid, username=username, first_name=first_name, last_name=last_name
            )
        except SupabaseError as e:
            if e.upstream_status != HTTP_CONFLICT:
                raise
            # Параллельная регистрация успела создать запись раньше нас
            logger.info(f"Пользователь {uid} уже создан параллельным запросом")
            existing = await self.users.get(uid)
            if existing is None:
                raise
            return RegistrationResult(status=existing.status, created=False)

        notified = await self.notify_admin(user)
        return RegistrationResult(status=UserStatus.PENDING, created=True, admin_notified=notified)

    async def notify_admin(self, user: AppUser) -> bool:
        """Отправка заявки администратору; False, если Telegram вернул ошибку"""
        try:
            await self.bot.send_message(
                self.settings.telegram_chat_id,
                registration_request_text(user),
                reply_markup=moderation_keyboard(user.telegram_user_id),
            )
        except TelegramAPIError as e:
            logger.error(f"Не удалось уведомить администратора о пользователе {user.telegram_user_id}: {e}")
            return False
        return True
