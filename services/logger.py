import logging
import sys
import os
from datetime import datetime
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(name: str = None, level: str = None) -> logging.Logger:
    """Настройка логгера для приложения

    Файловые обработчики подключаются только если задана переменная LOG_DIR:
    в serverless-окружении файловая система доступна лишь на чтение.
    """

    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    # Создаем имя логгера
    logger = logging.getLogger(name or __name__)
    logger.setLevel(getattr(logging, level, logging.INFO))

    # Очищаем существующие обработчики
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # Обработчик для консоли
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_dir = os.getenv("LOG_DIR", "").strip()
    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        today = datetime.now().strftime('%Y-%m-%d')

        file_handler = logging.FileHandler(log_path / f'app_{today}.log', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        # Ошибки дублируем в отдельный файл
        error_handler = logging.FileHandler(log_path / f'errors_{today}.log', encoding='utf-8')
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        logger.addHandler(error_handler)

    return logger


# Основной логгер приложения
logger = setup_logger("listings_notifier")

# Логгер для HTTP API
api_logger = setup_logger("api")

# Логгер для Telegram бота
bot_logger = setup_logger("telegram")

# Логгер для REST-хранилища (Supabase)
store_logger = setup_logger("store")

# Логгер для Celery задач
celery_logger = setup_logger("celery")
