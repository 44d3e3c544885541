import logging

from celery import shared_task

from .services import publish_scheduled_posts as _publish_scheduled_posts

log = logging.getLogger(__name__)


# ---- Celery beat: 예약 시각이 지난 draft 발행 ----
@shared_task(bind=True, name="posts.tasks.publish_scheduled_posts", autoretry_for=(Exception,), retry_backoff=2, max_retries=5)
def publish_scheduled_posts(self):
    published = _publish_scheduled_posts()
    if not published:
        log.debug("No scheduled posts due.")
    return published
