# FILE: backend/secondbrain/tasks/summary_tasks.py
# Background summary backfill for content saved while summarization was unavailable.
# Same best-effort policy as creation: a failed attempt leaves the record unchanged.

import structlog
from bson import ObjectId
from bson.errors import InvalidId

from ..celery_app import celery_app
from ..core.db import connect_to_mongo
from ..core.errors import NotFound
from ..services.content_service import ContentService

logger = structlog.get_logger(__name__)

def _content_service() -> ContentService:
    return ContentService(connect_to_mongo())

@celery_app.task(name="resummarize_content_task")
def resummarize_content_task(content_id: str) -> bool:
    """Returns True when the content ends up with a summary."""
    try:
        summary = _content_service().resummarize(ObjectId(content_id))
    except (InvalidId, NotFound):
        logger.warning("summary_task.content_missing", content_id=content_id)
        return False
    logger.info("summary_task.finished", content_id=content_id, summarized=bool(summary))
    return bool(summary)

@celery_app.task(name="backfill_missing_summaries_task")
def backfill_missing_summaries_task(limit: int = 50) -> int:
    """Queues a resummarize task for up to `limit` records without a summary."""
    content_ids = _content_service().find_unsummarized_ids(limit)
    for content_id in content_ids:
        resummarize_content_task.delay(str(content_id))
    logger.info("summary_task.backfill_queued", count=len(content_ids))
    return len(content_ids)
