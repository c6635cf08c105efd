"""
Notification Services.

Anything with ``send(recipient, message, subject=None)`` returning a
NotificationResult is a notifier. The concrete notifiers here cover email,
SMS (Twilio), log-only delivery, and handing the work to Celery.

NotificationDispatcher wraps a notifier for callers that must never fail
because a message could not be delivered: it catches and logs delivery
errors, records a NotificationLog row, and can defer sending until the
surrounding transaction commits.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.db import transaction

from .models import NotificationLog

logger = logging.getLogger(__name__)


@dataclass
class NotificationResult:
    """Result of a notification send operation."""
    success: bool
    channel_type: Optional[str] = None
    recipient: Optional[str] = None
    external_id: Optional[str] = None
    error_message: Optional[str] = None


class BaseNotifier(ABC):
    """Abstract base class for notifiers."""

    channel_type: str = None
    # Deferred notifiers hand the message to another process which records delivery itself
    deferred = False

    @abstractmethod
    def send(self, recipient: str, message: str, subject: str = None) -> NotificationResult:
        """Send a message. Must be implemented by subclasses."""


class LogNotifier(BaseNotifier):
    """Writes messages to the log instead of delivering them."""

    channel_type = NotificationLog.Channel.LOG

    def send(self, recipient, message, subject=None):
        logger.info("Notification for %s: %s", recipient, message)
        return NotificationResult(success=True, channel_type=self.channel_type, recipient=recipient)


class EmailNotifier(BaseNotifier):
    """Sends plain-text email through Django's configured email backend."""

    channel_type = NotificationLog.Channel.EMAIL
    default_subject = 'LabourHub notification'

    def send(self, recipient, message, subject=None):
        try:
            if not recipient or '@' not in recipient:
                raise ValueError("Recipient has no email address")

            email = EmailMultiAlternatives(
                subject=subject or self.default_subject,
                body=message,
                from_email=settings.DEFAULT_FROM_EMAIL,
                to=[recipient],
            )
            email.send(fail_silently=False)

            return NotificationResult(success=True, channel_type=self.channel_type, recipient=recipient)

        except Exception as e:
            error_msg = str(e)
            logger.error(f"Email notification failed: {error_msg}")
            return NotificationResult(
                success=False,
                channel_type=self.channel_type,
                recipient=recipient,
                error_message=error_msg,
            )


class SMSNotifier(BaseNotifier):
    """Sends SMS via Twilio."""

    channel_type = NotificationLog.Channel.SMS

    def __init__(self):
        self.account_sid = getattr(settings, 'TWILIO_ACCOUNT_SID', None)
        self.auth_token = getattr(settings, 'TWILIO_AUTH_TOKEN', None)
        self.from_number = getattr(settings, 'TWILIO_FROM_NUMBER', None)

    def get_client(self):
        from twilio.rest import Client

        return Client(self.account_sid, self.auth_token)

    def send(self, recipient, message, subject=None):
        try:
            if not all([self.account_sid, self.auth_token, self.from_number]):
                raise ValueError("Twilio is not configured")
            if not recipient:
                raise ValueError("Recipient has no phone number")

            # Twilio supports up to 1600 chars
            sms = self.get_client().messages.create(
                body=message[:1600],
                from_=self.from_number,
                to=str(recipient),
            )

            return NotificationResult(
                success=True,
                channel_type=self.channel_type,
                recipient=recipient,
                external_id=sms.sid,
            )

        except Exception as e:
            error_msg = str(e)
            logger.error(f"SMS notification failed: {error_msg}")
            return NotificationResult(
                success=False,
                channel_type=self.channel_type,
                recipient=recipient,
                error_message=error_msg,
            )


class AutoNotifier(BaseNotifier):
    """Emails addresses and texts phone numbers."""

    def __init__(self, email=None, sms=None):
        self.email = email or EmailNotifier()
        self.sms = sms or SMSNotifier()

    def send(self, recipient, message, subject=None):
        notifier = self.email if '@' in str(recipient) else self.sms
        return notifier.send(recipient, message, subject=subject)


class QueuedNotifier(BaseNotifier):
    """Hands delivery to the ``deliver_notification`` Celery task."""

    deferred = True

    def __init__(self, backend: str = None):
        self.backend = backend or settings.NOTIFICATION_BACKEND

    def send(self, recipient, message, subject=None):
        from .tasks import deliver_notification

        async_result = deliver_notification.delay(str(recipient), message, subject=subject, backend=self.backend)
        return NotificationResult(
            success=True,
            channel_type='queued',
            recipient=str(recipient),
            external_id=str(async_result.id),
        )


NOTIFIER_BACKENDS = {
    'log': LogNotifier,
    'email': EmailNotifier,
    'sms': SMSNotifier,
    'auto': AutoNotifier,
}


def get_notifier(backend: str = None) -> BaseNotifier:
    """Build the notifier registered under ``backend`` (defaults to settings)."""
    backend = backend or settings.NOTIFICATION_BACKEND
    try:
        notifier_class = NOTIFIER_BACKENDS[backend]
    except KeyError:
        raise ValueError(f"Unknown notification backend: {backend}")
    return notifier_class()


def get_default_notifier() -> BaseNotifier:
    """Notifier configured for this deployment."""
    if settings.NOTIFICATION_ASYNC:
        return QueuedNotifier()
    return get_notifier()


class NotificationDispatcher:
    """
    Fire-and-forget delivery around a notifier.

    ``dispatch`` never raises. ``dispatch_on_commit`` registers the send with
    the current transaction so rolled-back work produces no messages.
    """

    def __init__(self, notifier: BaseNotifier = None):
        self.notifier = notifier or get_default_notifier()

    def dispatch(self, recipient, message, subject=None) -> NotificationResult:
        recipient = str(recipient) if recipient else ''
        try:
            result = self.notifier.send(recipient, message, subject=subject)
        except Exception as e:
            logger.error(f"Notification to {recipient} failed: {e}")
            result = NotificationResult(
                success=False,
                channel_type=getattr(self.notifier, 'channel_type', None),
                recipient=recipient,
                error_message=str(e),
            )

        if not getattr(self.notifier, 'deferred', False):
            self._record(result, recipient, message, subject)
        return result

    def dispatch_on_commit(self, recipient, message, subject=None):
        transaction.on_commit(lambda: self.dispatch(recipient, message, subject=subject))

    def _record(self, result, recipient, message, subject):
        try:
            NotificationLog.objects.create(
                recipient=recipient[:255],
                channel=result.channel_type or NotificationLog.Channel.LOG,
                subject=(subject or '')[:200],
                message=message,
                status=NotificationLog.Status.SENT if result.success else NotificationLog.Status.FAILED,
                external_id=result.external_id or '',
                error=result.error_message or '',
            )
        except Exception as e:
            logger.error(f"Could not record notification log: {e}")


def contact_for(user, prefer: str = 'email') -> str:
    """Pick the address to reach ``user`` on, falling back to the other channel."""
    email = user.email or ''
    phone = str(user.phone) if user.phone else ''
    if prefer == 'sms':
        return phone or email
    return email or phone
