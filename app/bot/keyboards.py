from telegram import InlineKeyboardMarkup, InlineKeyboardButton

APPROVE_PREFIX = "approve_"
REJECT_PREFIX = "reject_"


def moderation_keyboard(telegram_user_id: str) -> InlineKeyboardMarkup:
    """Кнопки одобрения/отклонения заявки пользователя"""
    return InlineKeyboardMarkup([
        [
            InlineKeyboardButton("✅ Έγκριση", callback_data=f"{APPROVE_PREFIX}{telegram_user_id}"),
            InlineKeyboardButton("❌ Απόρριψη", callback_data=f"{REJECT_PREFIX}{telegram_user_id}"),
        ]
    ])
