from typing import Optional

import httpx

from database.supabase import SupabaseClient
from services.logger import store_logger as logger
from services.settings_manager import Settings


def safe_store_url(url: str) -> str:
    """URL хранилища для логов: только схема и хост"""
    parsed = httpx.URL(url)
    return f"{parsed.scheme}://{parsed.host}" if parsed.host else "<invalid url>"


def create_store(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[SupabaseClient]:
    """Создание клиента Supabase; None, если не заданы SUPABASE_URL / SUPABASE_KEY"""
    if not settings.has_store_credentials():
        logger.warning("SUPABASE_URL или SUPABASE_KEY не заданы")
        return None

    logger.debug(f"Using store: {safe_store_url(settings.supabase_url)}")
    return SupabaseClient(
        settings.supabase_url,
        settings.supabase_key,
        timeout=settings.http_timeout,
        transport=transport,
    )


__all__ = ["create_store", "safe_store_url"]
