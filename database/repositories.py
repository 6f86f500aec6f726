"""Репозитории поверх REST-клиента Supabase"""

from datetime import datetime, timezone
from typing import List, Optional

from database.supabase import SupabaseClient, eq, gte
from models.listing import ChangeType, Listing
from models.user import AppUser, UserStatus
from services.logger import store_logger as logger

USERS_TABLE = "app_users"
LISTINGS_TABLE = "listings"


def isoformat_utc(moment: datetime) -> str:
    """Время в формате Date.toISOString(): 2024-01-01T12:00:00.000Z"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class UserRepository:
    """Доступ к таблице app_users"""

    def __init__(self, store: SupabaseClient):
        self.store = store

    async def get(self, telegram_user_id: str) -> Optional[AppUser]:
        rows = await self.store.select(
            USERS_TABLE, filters={"telegram_user_id": eq(telegram_user_id)}
        )
        return AppUser.model_validate(rows[0]) if rows else None

    async def create_pending(
        self,
        telegram_user_id: str,
        username: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> AppUser:
        """
        Создание пользователя со статусом pending

        Raises:
            SupabaseError: ошибка хранилища (409 - пользователь уже существует)
        """
        user = AppUser(
            telegram_user_id=telegram_user_id,
            username=username,
            first_name=first_name,
            last_name=last_name,
            status=UserStatus.PENDING,
        )
        rows = await self.store.insert(USERS_TABLE, user.to_row())
        logger.info(f"Создан пользователь {telegram_user_id} со статусом pending")
        return AppUser.model_validate(rows[0]) if rows else user

    async def transition(
        self,
        telegram_user_id: str,
        new_status: UserStatus,
        expected: UserStatus = UserStatus.PENDING,
        now: Optional[datetime] = None,
    ) -> Optional[AppUser]:
        """
        Смена статуса с условием на текущий статус

        approved_at выставляется только при одобрении.

        Returns:
            Обновлённый пользователь или None, если ни одна строка не подошла
            (пользователя нет либо его статус уже не expected)
        """
        values = {"status": new_status.value}
        if new_status == UserStatus.APPROVED:
            values["approved_at"] = isoformat_utc(now or datetime.now(timezone.utc))

        rows = await self.store.update(
            USERS_TABLE,
            filters={
                "telegram_user_id": eq(telegram_user_id),
                "status": eq(expected.value),
            },
            values=values,
        )
        if not rows:
            return None
        logger.info(f"Пользователь {telegram_user_id}: {expected.value} -> {new_status.value}")
        return AppUser.model_validate(rows[0])


class ListingRepository:
    """Выборки из таблицы listings для дайджеста"""

    def __init__(self, store: SupabaseClient):
        self.store = store

    async def _changed_since(
        self, change_type: ChangeType, date_field: str, since: str, order: str, limit: int
    ) -> List[Listing]:
        rows = await self.store.select(
            LISTINGS_TABLE,
            filters={
                "change_type": eq(change_type.value),
                date_field: gte(since),
            },
            order=order,
            limit=limit,
        )
        return [Listing.model_validate(row) for row in rows]

    async def new_since(self, since: str, limit: int = 20) -> List[Listing]:
        return await self._changed_since(ChangeType.NEW, "first_seen_date", since, "price.desc", limit)

    async def price_drops_since(self, since: str, limit: int = 15) -> List[Listing]:
        return await self._changed_since(
            ChangeType.PRICE_DROP, "last_seen_date", since, "price_change.asc", limit
        )

    async def price_ups_since(self, since: str, limit: int = 10) -> List[Listing]:
        return await self._changed_since(
            ChangeType.PRICE_UP, "last_seen_date", since, "price_change.desc", limit
        )

    async def probe(self) -> None:
        """Минимальный запрос для проверки доступности хранилища"""
        await self.store.select(LISTINGS_TABLE, columns="listing_id", limit=1)


__all__ = ["UserRepository", "ListingRepository", "isoformat_utc", "USERS_TABLE", "LISTINGS_TABLE"]
