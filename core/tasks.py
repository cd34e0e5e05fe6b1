"""
Celery tasks for background processing.

Tasks for writes that must stay off the request path.
"""
import logging
from datetime import datetime

from ClientLicenseService.celery import app
from core.metrics import last_seen_touch_failures_total

logger = logging.getLogger(__name__)


@app.task(ignore_result=True)
def touch_last_seen_task(client_id: str, seen_at: str):
    """
    Celery task recording when a license was last validated.

    Args:
        client_id: Normalized client id
        seen_at: ISO-8601 timestamp of the validation
    """
    from licenses.infrastructure.models import License

    try:
        updated = License.objects.filter(client_id=client_id).update(
            last_seen=datetime.fromisoformat(seen_at)
        )
    except Exception:
        last_seen_touch_failures_total.labels(stage="persist").inc()
        logger.error("Failed to record last_seen for %s", client_id, exc_info=True)
        raise

    if not updated:
        logger.info("License %s deleted before last_seen was recorded", client_id)
