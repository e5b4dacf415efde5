# secondbrain/worker.py
# Entry point for the Celery worker:
# celery -A secondbrain.worker.celery_app worker --loglevel=info
from secondbrain.celery_app import celery_app
