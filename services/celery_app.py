from celery import Celery
import os

from services.settings_manager import get_settings


def build_beat_schedule(interval_hours: int) -> dict:
    """Расписание задач: дайджест раз в NOTIFY_INTERVAL_HOURS часов"""
    return {
        'send-listings-digest': {
            'task': 'services.celery_tasks.send_listings_digest',
            'schedule': float(interval_hours * 3600),
        },
    }


def setup_celery() -> Celery:
    """Настройка и создание Celery приложения"""

    settings = get_settings()

    celery_app = Celery(
        "listings_notifier",
        broker=os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0"),
        backend=os.getenv("CELERY_RESULT_BACKEND", "redis://localhost:6379/0"),
        include=[
            'services.celery_tasks'
        ]
    )

    celery_app.conf.update(
        task_serializer="json",
        result_serializer="json",
        accept_content=['json'],
        timezone=os.getenv("CELERY_TIMEZONE", "Europe/Athens"),
        enable_utc=True,

        # Дайджест не повторяем: повторная отправка хуже пропуска
        task_acks_late=False,
        worker_prefetch_multiplier=1,

        # Логирование
        worker_log_format='[%(asctime)s: %(levelname)s/%(processName)s] %(message)s',
        worker_task_log_format='[%(asctime)s: %(levelname)s/%(processName)s][%(task_name)s(%(task_id)s)] %(message)s',

        beat_schedule=build_beat_schedule(settings.interval_hours),
        beat_scheduler='celery.beat:Scheduler',
    )

    return celery_app


# Создаем глобальный экземпляр Celery
celery_app = setup_celery()

if __name__ == "__main__":
    celery_app.start()
