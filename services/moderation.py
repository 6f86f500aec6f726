"""
Обработка обновлений Telegram: одобрение/отклонение заявок и /start

Бизнес-результат (WebhookResult) отделён от транспортного ответа: Telegram
всегда получает HTTP 200, а неудача передаётся полем ok=false.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Union

from app.bot.keyboards import APPROVE_PREFIX, REJECT_PREFIX
from app.bot.messages import (
    DATABASE_ERROR_TEXT,
    ONLY_ADMIN_TEXT,
    USER_NOT_FOUND_TEXT,
    WELCOME_TEXT,
    already_decided_text,
    conflict_text,
    decision_ack_text,
    decision_text,
)
from app.bot.telegram_bot import TelegramBot
from database.repositories import UserRepository
from models.telegram import CallbackQuery, TelegramUpdate
from models.user import AppUser, UserStatus
from services.exceptions import SupabaseError, TelegramAPIError
from services.logger import bot_logger as logger
from services.settings_manager import Settings


# ========== ДЕЙСТВИЯ ИЗ CALLBACK_DATA ==========

@dataclass(frozen=True)
class Approve:
    user_id: str
    target_status: ClassVar[UserStatus] = UserStatus.APPROVED


@dataclass(frozen=True)
class Reject:
    user_id: str
    target_status: ClassVar[UserStatus] = UserStatus.REJECTED


@dataclass(frozen=True)
class Unknown:
    raw: str


Action = Union[Approve, Reject, Unknown]


def decode_action(data: Optional[str]) -> Action:
    """Разбор callback_data вида approve_<id> / reject_<id>"""
    data = data or ""
    for prefix, action_cls in ((APPROVE_PREFIX, Approve), (REJECT_PREFIX, Reject)):
        if data.startswith(prefix):
            user_id = data[len(prefix):].strip()
            return action_cls(user_id) if user_id else Unknown(data)
    return Unknown(data)


# ========== РЕЗУЛЬТАТ ==========

@dataclass
class WebhookResult:
    """Бизнес-результат обработки обновления"""

    ok: bool = True
    action: Optional[str] = None
    error: Optional[str] = None

    def to_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"ok": self.ok}
        if self.action:
            body["action"] = self.action
        if self.error:
            body["error"] = self.error
        return body


class ModerationService:
    """Обработчик обновлений бота"""

    def __init__(self, settings: Settings, users: UserRepository, bot: TelegramBot):
        self.settings = settings
        self.users = users
        self.bot = bot

    async def handle_update(self, update: TelegramUpdate) -> WebhookResult:
        if update.callback_query:
            return await self.handle_callback(update.callback_query)

        if update.is_start_command:
            chat_id = update.message.chat.id
            await self.bot.send_message(chat_id, WELCOME_TEXT)
            logger.info(f"Приветствие отправлено в чат {chat_id}")
            return WebhookResult()

        return WebhookResult()

    async def handle_callback(self, query: CallbackQuery) -> WebhookResult:
        sender_id = query.from_user.id
        if not self.settings.is_admin(sender_id):
            logger.warning(f"Попытка модерации не от администратора: user_id={sender_id}")
            await self.bot.answer_callback_query(query.id, ONLY_ADMIN_TEXT)
            return WebhookResult()

        action = decode_action(query.data)
        if isinstance(action, Unknown):
            logger.debug(f"Неизвестный callback_data: {action.raw!r}")
            return WebhookResult()

        target = action.target_status
        try:
            user = await self.users.transition(action.user_id, target)
            current = await self.users.get(action.user_id) if user is None else None
        except SupabaseError as e:
            logger.error(f"Ошибка смены статуса пользователя {action.user_id}: {e}")
            await self.bot.answer_callback_query(query.id, DATABASE_ERROR_TEXT)
            return WebhookResult(ok=False, error="database_error")

        if user is not None:
            await self._report_decision(query, decision_ack_text(target), target, action.user_id, user)
            return WebhookResult(action=target.value)

        if current is None:
            await self.bot.answer_callback_query(query.id, USER_NOT_FOUND_TEXT)
            return WebhookResult(ok=False, error="user_not_found")

        if current.status != target:
            logger.warning(
                f"Пользователь {action.user_id} уже в статусе {current.status.value}, "
                f"переход в {target.value} отклонён"
            )
            await self.bot.answer_callback_query(query.id, conflict_text(current.status))
            return WebhookResult(ok=False, error="conflict")

        # Повторное нажатие той же кнопки
        await self._report_decision(query, already_decided_text(target), target, action.user_id, current)
        return WebhookResult(action=target.value)

    async def _report_decision(
        self, query: CallbackQuery, ack_text: str, status: UserStatus, telegram_user_id: str, user: AppUser
    ) -> None:
        """
        Ответ на нажатие и правка исходного сообщения после записи решения

        Статус уже сохранён, поэтому ошибки Telegram только логируются.
        """
        try:
            await self.bot.answer_callback_query(query.id, ack_text)
        except TelegramAPIError as e:
            logger.warning(f"Не удалось ответить на callback {query.id}: {e}")

        try:
            await self._edit_origin(query, status, telegram_user_id, user)
        except TelegramAPIError as e:
            # В том числе "message is not modified" при повторном нажатии
            logger.warning(f"Сообщение модерации для {telegram_user_id} не обновлено: {e}")

    async def _edit_origin(
        self, query: CallbackQuery, status: UserStatus, telegram_user_id: str, user: AppUser
    ) -> None:
        """Заменяет сообщение с кнопками итоговым решением"""
        if query.message is None:
            return
        await self.bot.edit_message_text(
            query.message.chat.id,
            query.message.message_id,
            decision_text(status, telegram_user_id, user),
        )
