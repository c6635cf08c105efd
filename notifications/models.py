"""
Notification delivery log.

One row per delivery attempt made by the dispatcher. Nothing in the job
lifecycle reads these rows; they exist for support and auditing.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.db.models import BaseModel


class NotificationLog(BaseModel):
    """Record of a single outbound message."""

    class Channel(models.TextChoices):
        EMAIL = 'email', _('Email')
        SMS = 'sms', _('SMS')
        LOG = 'log', _('Log only')

    class Status(models.TextChoices):
        SENT = 'sent', _('Sent')
        FAILED = 'failed', _('Failed')

    recipient = models.CharField(max_length=255, db_index=True)
    channel = models.CharField(max_length=10, choices=Channel.choices)
    subject = models.CharField(max_length=200, blank=True)
    message = models.TextField()
    status = models.CharField(max_length=10, choices=Status.choices, db_index=True)
    external_id = models.CharField(
        max_length=100,
        blank=True,
        help_text=_('Provider message id (e.g. Twilio SID)')
    )
    error = models.TextField(blank=True)

    class Meta(BaseModel.Meta):
        verbose_name = _('Notification log')
        verbose_name_plural = _('Notification logs')

    def __str__(self):
        return f"{self.channel} to {self.recipient} ({self.status})"
