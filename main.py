from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import uvicorn

from api.auth import router as auth_router
from api.bot_webhook import router as webhook_router
from api.notify import router as notify_router
from api.health import router as health_router
from api.dependencies import shutdown_bots
from services.exceptions import AppError
from services.logger import setup_logger
from services.settings_manager import get_settings

# Настройка логгера
logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    logger.info("Starting listings notifier - Telegram approval bot and digest")

    settings = get_settings()
    if not settings.has_store_credentials():
        logger.warning("SUPABASE_URL / SUPABASE_KEY не заданы - обработчики вернут ошибку конфигурации")
    if not settings.has_telegram_credentials():
        logger.warning("TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID не заданы")

    yield

    # Очистка при завершении
    await shutdown_bots()
    logger.info("System shutdown complete")


# Создание FastAPI приложения
app = FastAPI(
    title="🏠 Greecing Real Estate — Telegram notifier",
    description="Регистрация пользователей Mini App, модерация через Telegram и дайджест объявлений",
    version="1.0.0",
    lifespan=lifespan
)

# ========== НАСТРОЙКА CORS ==========
# Mini App открывается с домена Telegram, поэтому источник не ограничиваем
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Регистрация роутеров API
app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(webhook_router, prefix="/api/bot-webhook", tags=["telegram"])
app.include_router(notify_router, prefix="/api/notify", tags=["notify"])
app.include_router(health_router, prefix="/api/health", tags=["health"])


@app.get("/")
async def root():
    return {"service": "listings-notifier", "status": "ok"}


# ========== ОБРАБОТЧИКИ ОШИБОК ==========

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Ошибки приложения: {"error": ...} с кодом из исключения"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Некорректный запрос {request.url.path}: {exc.errors()}")
    return JSONResponse({"error": "Invalid request body"}, status_code=400)


# Глобальный обработчик ошибок
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Глобальный обработчик исключений"""
    logger.error(f"Необработанная ошибка: {exc}", exc_info=True)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
