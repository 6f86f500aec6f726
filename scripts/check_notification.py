#!/usr/bin/env python3
"""
Скрипт для проверки отправки сообщений в чат администратора

Использование:
    python scripts/check_notification.py

Переменные окружения (должны быть в .env):
    TELEGRAM_BOT_TOKEN - токен бота
    TELEGRAM_CHAT_ID - Chat ID администратора
"""

import os
import sys
import requests
from dotenv import load_dotenv

# Загружаем переменные окружения
load_dotenv()

TELEGRAM_API = "https://api.telegram.org"


def send_test_notification() -> bool:
    """Отправляет тестовое сообщение администратору"""

    bot_token = os.getenv("TELEGRAM_BOT_TOKEN")
    chat_id = os.getenv("TELEGRAM_CHAT_ID")

    if not bot_token:
        print("❌ ОШИБКА: TELEGRAM_BOT_TOKEN не задан в .env")
        print("   Получите токен бота через @BotFather в Telegram")
        return False

    if not chat_id:
        print("❌ ОШИБКА: TELEGRAM_CHAT_ID не задан в .env")
        print("   Получите ваш Chat ID через @userinfobot в Telegram")
        return False

    message = "🧪 <b>Δοκιμαστικό μήνυμα</b>\n\n"
    message += "✅ Οι ειδοποιήσεις λειτουργούν σωστά!\n\n"
    message += "Θα λαμβάνεις:\n"
    message += "• Αιτήματα πρόσβασης νέων χρηστών\n"
    message += "• Περιοδική ενημέρωση για νέες αγγελίες και αλλαγές τιμών"

    url = f"{TELEGRAM_API}/bot{bot_token}/sendMessage"
    data = {
        "chat_id": chat_id,
        "text": message,
        "parse_mode": "HTML"
    }

    try:
        print("📤 Отправка сообщения в Telegram...")
        print(f"   Chat ID: {chat_id}")
        print()

        response = requests.post(url, json=data, timeout=10)

        if response.status_code == 200:
            result = response.json()
            print("✅ Успешно! Сообщение отправлено.")
            print(f"   Message ID: {result.get('result', {}).get('message_id')}")
            return True

        print(f"❌ ОШИБКА: Telegram API вернул статус {response.status_code}")
        print(f"   Ответ: {response.text}")
        return False

    except requests.Timeout:
        print("❌ ОШИБКА: Таймаут при отправке сообщения")
        return False
    except requests.RequestException as e:
        print(f"❌ ОШИБКА: {e}")
        return False


if __name__ == "__main__":
    success = send_test_notification()
    sys.exit(0 if success else 1)
