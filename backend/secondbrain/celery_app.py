# FILE: backend/secondbrain/celery_app.py
# Defines the Celery application and discovers tasks. Holds no connections of its own.

from celery import Celery
import logging

from .core.config import settings

celery_app = Celery("secondbrain", broker=settings.REDIS_URL, backend=settings.REDIS_URL)

celery_app.conf.update(
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='UTC',
    enable_utc=True,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
)

celery_app.autodiscover_tasks([
    'secondbrain.tasks.summary_tasks',
], related_name=None)

logging.getLogger(__name__).info("--- [Celery App] Celery application configured successfully. ---")
