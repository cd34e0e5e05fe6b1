"""
Celery implementation of LastSeenDispatcher port.

Publishes the last_seen write as a task so the validation response never
waits on it.
"""
import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from datetime import datetime
from functools import partial
from typing import Optional

from asgiref.sync import sync_to_async

from core.metrics import last_seen_touch_failures_total
from core.tasks import touch_last_seen_task
from licenses.ports.last_seen_dispatcher import LastSeenDispatcher

logger = logging.getLogger(__name__)

_publisher = ThreadPoolExecutor(max_workers=2, thread_name_prefix="last-seen-publish")


def _publish(client_id: str, seen_at: str) -> None:
    touch_last_seen_task.apply_async(args=(client_id, seen_at), retry=False)


def _report_publish_failure(client_id: str, future: Future) -> None:
    exc = future.exception()
    if exc is None:
        return
    last_seen_touch_failures_total.labels(stage="publish").inc()
    logger.warning("Failed to publish last_seen for %s", client_id, exc_info=exc)


class CeleryLastSeenDispatcher(LastSeenDispatcher):
    """
    Dispatch last_seen writes through the Celery broker.

    The broker publish runs on a background thread and is never awaited,
    so an unreachable broker cannot hold up the caller. In eager mode
    there is no broker and the task runs inline.
    """

    def __init__(self, executor: Optional[Executor] = None, inline: bool = False):
        """
        Initialize dispatcher.

        Args:
            executor: Executor running broker publishes
            inline: Publish on the calling path (eager Celery)
        """
        self.executor = executor or _publisher
        self.inline = inline

    async def dispatch(self, client_id: str, seen_at: datetime) -> None:
        """
        Publish a touch task.

        Publishing is not retried; failures are logged and counted.
        """
        if self.inline:
            await sync_to_async(_publish)(client_id, seen_at.isoformat())
            return

        future = self.executor.submit(_publish, client_id, seen_at.isoformat())
        future.add_done_callback(partial(_report_publish_failure, client_id))
