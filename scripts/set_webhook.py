#!/usr/bin/env python3
"""
Регистрация вебхука бота в Telegram

Использование:
    python scripts/set_webhook.py https://example.com
    python scripts/set_webhook.py --delete

Вебхук указывает на <PUBLIC_URL>/api/bot-webhook. Если URL не передан
аргументом, берётся из переменной PUBLIC_URL.
"""

import argparse
import os
import sys
from typing import Optional

import requests
from dotenv import load_dotenv

load_dotenv()

TELEGRAM_API = "https://api.telegram.org"
WEBHOOK_PATH = "/api/bot-webhook"
ALLOWED_UPDATES = ["message", "callback_query"]


def webhook_url(public_url: str) -> str:
    return public_url.rstrip("/") + WEBHOOK_PATH


def call_bot_api(token: str, method: str, payload: Optional[dict] = None) -> dict:
    """Вызов метода Bot API; исключение, если Telegram ответил ok=false"""
    response = requests.post(f"{TELEGRAM_API}/bot{token}/{method}", json=payload or {}, timeout=10)
    data = response.json()
    if not data.get("ok"):
        raise RuntimeError(f"{method}: {response.status_code} {data.get('description')}")
    return data


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Регистрация вебхука Telegram")
    parser.add_argument("public_url", nargs="?", default=os.getenv("PUBLIC_URL", ""))
    parser.add_argument("--delete", action="store_true", help="удалить вебхук")
    args = parser.parse_args(argv)

    token = os.getenv("TELEGRAM_BOT_TOKEN")
    if not token:
        print("❌ ОШИБКА: TELEGRAM_BOT_TOKEN не задан в .env")
        return 1

    try:
        if args.delete:
            call_bot_api(token, "deleteWebhook", {"drop_pending_updates": True})
            print("✅ Вебхук удалён")
            return 0

        if not args.public_url:
            print("❌ ОШИБКА: укажите публичный URL или PUBLIC_URL в .env")
            return 1

        url = webhook_url(args.public_url)
        call_bot_api(token, "setWebhook", {"url": url, "allowed_updates": ALLOWED_UPDATES})
        info = call_bot_api(token, "getWebhookInfo")["result"]
        print(f"✅ Вебхук установлен: {info.get('url')}")
        print(f"   Ожидающих обновлений: {info.get('pending_update_count', 0)}")
        return 0
    except (requests.RequestException, ValueError, RuntimeError) as e:
        print(f"❌ ОШИБКА: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
