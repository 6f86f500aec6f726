"""
Асинхронный клиент REST-интерфейса Supabase (PostgREST)

Фильтры передаются как параметры запроса вида field=eq.value / field=gte.value,
аутентификация - заголовками apikey и Authorization.
"""

from typing import Any, Dict, List, Optional

import httpx

from services.exceptions import SupabaseError
from services.logger import store_logger as logger


def eq(value: Any) -> str:
    """Фильтр равенства"""
    return f"eq.{value}"


def gte(value: Any) -> str:
    """Фильтр больше или равно"""
    return f"gte.{value}"


class SupabaseClient:
    """Тонкая обёртка над /rest/v1 с разбором ошибок"""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not base_url or not api_key:
            raise ValueError("Для клиента Supabase нужны base_url и api_key")

        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "SupabaseClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        returning: bool = False,
    ) -> List[Dict[str, Any]]:
        headers = {"Prefer": "return=representation"} if returning else None

        try:
            response = await self._client.request(
                method, f"/{table}", params=params, json=json, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error(f"Supabase {method} {table}: сетевая ошибка {e!r}")
            raise SupabaseError(f"Supabase {method.lower()} error: {e}") from e

        if response.is_error:
            body = response.text
            logger.error(f"Supabase {method} {table} вернул {response.status_code}: {body}")
            raise SupabaseError(
                f"Supabase {method.lower()} error: {response.status_code} — {body}",
                upstream_status=response.status_code,
                body=body,
            )

        if not response.content:
            return []
        data = response.json()
        # PostgREST всегда отдаёт массив, но на всякий случай нормализуем
        return data if isinstance(data, list) else [data]

    async def select(
        self,
        table: str,
        filters: Optional[Dict[str, str]] = None,
        columns: str = "*",
        order: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Чтение строк таблицы

        Args:
            table: Имя таблицы
            filters: Фильтры PostgREST, например {"status": eq("pending")}
            columns: Список колонок для select
            order: Сортировка, например "price.desc"
            limit: Ограничение количества строк
        """
        params: Dict[str, Any] = {"select": columns}
        params.update(filters or {})
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = limit
        return await self._request("GET", table, params=params)

    async def insert(self, table: str, row: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Вставка строки, возвращает созданные строки"""
        return await self._request("POST", table, json=row, returning=True)

    async def update(
        self, table: str, filters: Dict[str, str], values: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        """Частичное обновление строк по фильтрам, возвращает изменённые строки"""
        if not filters:
            # PATCH без фильтра изменил бы всю таблицу
            raise ValueError("update() требует хотя бы один фильтр")
        return await self._request("PATCH", table, params=filters, json=values, returning=True)


__all__ = ["SupabaseClient", "eq", "gte"]
