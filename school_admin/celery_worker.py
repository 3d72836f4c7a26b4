from celery import Celery

from .core.config import settings

# Celery configuration
celery_app = Celery(
    "school_admin",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["school_admin.tasks.email_tasks"]
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_ignore_result=True,
)
