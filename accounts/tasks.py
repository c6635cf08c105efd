"""
Celery Tasks for Accounts.
"""

import logging

from celery import shared_task
from django.utils import timezone

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    name='accounts.tasks.purge_expired_otps',
    max_retries=3,
    default_retry_delay=300,
    autoretry_for=(Exception,),
    retry_backoff=True,
)
def purge_expired_otps(self):
    """
    Delete one-time passwords that are expired or already used.

    Returns:
        dict: number of rows removed.
    """
    from .models import OneTimePassword

    now = timezone.now()
    deleted, _ = OneTimePassword.objects.filter(expires_at__lte=now).delete()
    used, _ = OneTimePassword.objects.filter(is_used=True).delete()

    logger.info(f"Purged {deleted} expired and {used} used OTPs")
    return {'expired': deleted, 'used': used}
