from celery import Celery
from .core.config import settings

# Create Celery instance
celery_app = Celery(
    "sales_coach",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=["app.tasks"]
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    result_expires=3600,  # 1 hour
    task_routes={
        "app.tasks.sweep_sessions_task": {"queue": "maintenance"},
    },
    beat_schedule={
        "sweep-expired-sessions": {
            "task": "app.tasks.sweep_sessions_task",
            "schedule": float(settings.SESSION_REAPER_INTERVAL_SECONDS),
        },
    },
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    worker_max_tasks_per_child=1000,
)
