"""
Celery Tasks for Notifications.

deliver_notification performs a send in a worker when NOTIFICATION_ASYNC is
enabled. Delivery failures are retried a few times and then recorded.
"""

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    name='notifications.tasks.deliver_notification',
    max_retries=3,
    default_retry_delay=60,
    queue='notifications',
)
def deliver_notification(self, recipient, message, subject=None, backend=None):
    """
    Deliver one message through the configured notifier.

    Returns:
        dict: success flag, channel and provider id of the attempt.
    """
    from .services import NotificationDispatcher, get_notifier

    dispatcher = NotificationDispatcher(get_notifier(backend))
    result = dispatcher.dispatch(recipient, message, subject=subject)

    if not result.success and self.request.retries < self.max_retries:
        logger.warning(
            f"Retrying notification to {recipient} "
            f"(attempt {self.request.retries + 1}): {result.error_message}"
        )
        raise self.retry()

    return {
        'success': result.success,
        'channel': result.channel_type,
        'external_id': result.external_id,
        'error': result.error_message,
    }
