import logging

from celery import shared_task

from chat.models import ChatSession

logger = logging.getLogger(__name__)


@shared_task
def purge_expired_session_data():
    """
    Delete session-data records whose 24h lifetime has passed.
    Scheduled hourly through CELERY_BEAT_SCHEDULE.
    """
    deleted, _ = ChatSession.objects.expired().delete()
    if deleted:
        logger.info(f"Purged {deleted} expired chat session records")
    return deleted
