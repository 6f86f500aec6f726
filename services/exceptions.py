"""Исключения приложения, которые превращаются в JSON-ответ вида {"error": ...}"""

from typing import Optional


class AppError(Exception):
    """Базовая ошибка приложения с HTTP-статусом"""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(AppError):
    """Не задана обязательная переменная окружения"""

    status_code = 500


class BadRequestError(AppError):
    """Некорректный запрос клиента"""

    status_code = 400


class UnauthorizedError(AppError):
    """Неверный или отсутствующий секрет"""

    status_code = 401


class UpstreamError(AppError):
    """Внешний API вернул ошибку

    Attributes:
        service: Название внешнего сервиса
        upstream_status: HTTP статус ответа внешнего сервиса (None - сетевой сбой)
        body: Текст ответа
    """

    status_code = 500
    service = "upstream"

    def __init__(self, message: str, upstream_status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.body = body


class SupabaseError(UpstreamError):
    service = "supabase"


class TelegramAPIError(UpstreamError):
    service = "telegram"
