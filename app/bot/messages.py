"""
Тексты сообщений бота (интерфейс на греческом, разметка HTML)
"""

from html import escape
from typing import Optional

from models.user import AppUser, UserStatus

WELCOME_TEXT = (
    "👋 Καλωσήρθες στο <b>Private Adds Attica</b>!\n\n"
    "Άνοιξε τις αγγελίες πατώντας το κουμπί <b>🏠 Αγγελίες</b> στο μενού."
)

ONLY_ADMIN_TEXT = "⛔ Μόνο ο admin μπορεί να κάνει αυτή την ενέργεια."
DATABASE_ERROR_TEXT = "❌ Σφάλμα βάσης δεδομένων"
USER_NOT_FOUND_TEXT = "❓ Ο χρήστης δεν βρέθηκε."

_PAST_TENSE = {
    UserStatus.APPROVED: "εγκριθεί",
    UserStatus.REJECTED: "απορριφθεί",
}


def registration_request_text(user: AppUser) -> str:
    """Сообщение администратору о новой заявке"""
    return (
        "🆕 <b>Νέο αίτημα πρόσβασης</b>\n\n"
        f"👤 <b>{escape(user.display_name)}</b> ({escape(user.tag)})\n"
        f"🆔 ID: <code>{escape(user.telegram_user_id)}</code>\n\n"
        "Θέλεις να εγκρίνεις αυτόν τον χρήστη;"
    )


def decision_ack_text(status: UserStatus) -> str:
    """Короткий ответ на нажатие кнопки"""
    if status == UserStatus.APPROVED:
        return "✅ Εγκρίθηκε!"
    return "❌ Απορρίφθηκε!"


def decision_text(status: UserStatus, telegram_user_id: str, user: Optional[AppUser] = None) -> str:
    """Итоговый текст исходного сообщения администратору"""
    name = (user.first_name if user else None) or "Χρήστης"
    tag = f"@{user.username}" if user and user.username else f"ID: {telegram_user_id}"
    if status == UserStatus.APPROVED:
        return f"✅ <b>Εγκρίθηκε:</b> {escape(name)} ({escape(tag)})"
    return f"❌ <b>Απορρίφθηκε:</b> {escape(name)} ({escape(tag)})"


def already_decided_text(status: UserStatus) -> str:
    return f"ℹ️ Ο χρήστης έχει ήδη {_PAST_TENSE[status]}."


def conflict_text(current: UserStatus) -> str:
    return f"⚠️ Δεν έγινε αλλαγή: ο χρήστης έχει ήδη {_PAST_TENSE.get(current, current.value)}."
