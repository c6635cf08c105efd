"""
One-time password issuing and verification for phone signups.
"""

import logging
import secrets

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from api.exceptions import InvalidOTPError, ResourceAlreadyExistsError
from notifications.services import NotificationDispatcher

from .models import OneTimePassword, User
from .phone import normalize_phone

logger = logging.getLogger(__name__)


class OTPService:
    """
    Issues 4-digit codes and checks them.

    A code is valid until ``OTP_TTL_MINUTES`` after issue and can be used once.
    """

    message_template = "Your LabourHub verification code is {code}. It is valid for {ttl} minutes."

    def __init__(self, notifier=None):
        self.dispatcher = NotificationDispatcher(notifier)

    @staticmethod
    def generate_code() -> str:
        fixed = getattr(settings, 'OTP_FIXED_CODE', '')
        if fixed:
            return fixed
        return f"{secrets.randbelow(10000):04d}"

    def issue(self, phone) -> OneTimePassword:
        """Create a fresh code for ``phone`` and send it by SMS."""
        phone = normalize_phone(phone)

        if User.objects.filter(phone=phone).exists():
            raise ResourceAlreadyExistsError(
                detail="User already exists with this phone number.",
                conflicting_fields=['phone'],
            )

        with transaction.atomic():
            OneTimePassword.objects.filter(phone=phone, is_used=False).update(is_used=True)
            otp = OneTimePassword.objects.create(phone=phone, code=self.generate_code())
            self.dispatcher.dispatch_on_commit(
                phone,
                self.message_template.format(code=otp.code, ttl=settings.OTP_TTL_MINUTES),
            )

        logger.info(f"OTP issued for {phone}")
        return otp

    def verify(self, phone, code) -> None:
        """Consume a matching, unexpired code or raise InvalidOTPError."""
        phone = normalize_phone(phone)

        with transaction.atomic():
            otp = (
                OneTimePassword.objects.select_for_update()
                .filter(phone=phone, code=str(code), is_used=False, expires_at__gt=timezone.now())
                .order_by('-created_at')
                .first()
            )
            if otp is None:
                logger.warning(f"OTP verification failed for {phone}")
                raise InvalidOTPError()

            otp.is_used = True
            otp.save(update_fields=['is_used', 'updated_at'])
