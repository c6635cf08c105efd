"""
Profile Services - signups and the labour approval gate.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from accounts.models import User
from accounts.otp import OTPService
from api.exceptions import (
    PermissionDeniedError,
    ResourceAlreadyExistsError,
    ResourceStateError,
    get_object_or_not_found,
)
from notifications.services import NotificationDispatcher, contact_for

from .models import Client, Labour

logger = logging.getLogger(__name__)
security_logger = logging.getLogger('security.profiles')


def _account_exists(email=None, phone=None) -> bool:
    lookup = Q()
    if email:
        lookup |= Q(email__iexact=email)
    if phone:
        lookup |= Q(phone=phone)
    return bool(lookup) and User.objects.filter(lookup).exists()


def _duplicate_account():
    return ResourceAlreadyExistsError(
        detail="User with this email or phone already exists.",
        conflicting_fields=['email', 'phone'],
    )


def register_labour(*, phone, otp, password, name, categories, hourly_rate, city,
                    otp_service: OTPService = None) -> Labour:
    """
    Create a verified labour account with a pending profile.

    The OTP is consumed in the same transaction, so a failed signup leaves
    the code usable.
    """
    otp_service = otp_service or OTPService()

    if _account_exists(phone=phone):
        raise _duplicate_account()

    try:
        with transaction.atomic():
            otp_service.verify(phone, otp)
            user = User.objects.create_user(
                phone=phone,
                password=password,
                role=User.Role.LABOUR,
                is_verified=True,
            )
            labour = Labour.objects.create(
                user=user,
                name=name,
                hourly_rate=hourly_rate,
                city=city,
            )
            labour.categories.set(categories)
    except IntegrityError:
        raise _duplicate_account()

    logger.info(f"Labour {labour.pk} registered, awaiting approval")
    return labour


def register_client(*, email, password, name, phone=None, company='', notifier=None) -> Client:
    """Create a verified client account and send the welcome email."""
    phone = phone or None

    if _account_exists(email=email, phone=phone):
        raise _duplicate_account()

    dispatcher = NotificationDispatcher(notifier)
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                phone=phone,
                password=password,
                role=User.Role.CLIENT,
                is_verified=True,
            )
            client = Client.objects.create(user=user, name=name, company=company or '')
            dispatcher.dispatch_on_commit(
                user.email,
                f"Hello {name}, welcome to LabourHub! You can now post jobs "
                f"and hire skilled workers in Hubli and Dharwad.",
                subject="Welcome to LabourHub",
            )
    except IntegrityError:
        raise _duplicate_account()

    logger.info(f"Client {client.pk} registered")
    return client


class LabourApprovalService:
    """
    One-shot admin decision on a labour profile.

    ``pending`` moves to ``approved`` or ``rejected`` exactly once. The move
    is a conditional UPDATE on ``approval_status='pending'``; any later call
    raises ResourceStateError and leaves the profile as it was.
    """

    def __init__(self, notifier=None):
        self.dispatcher = NotificationDispatcher(notifier)

    def decide(self, admin_user, labour_id, approve: bool) -> Labour:
        if not (admin_user.is_superuser or admin_user.role == User.Role.ADMIN):
            raise PermissionDeniedError(detail="Admin access required.")

        labour = get_object_or_not_found(Labour.objects.select_related('user'), 'Labour', pk=labour_id)
        decision = Labour.ApprovalStatus.APPROVED if approve else Labour.ApprovalStatus.REJECTED
        now = timezone.now()

        with transaction.atomic():
            updated = Labour.objects.filter(
                pk=labour.pk,
                approval_status=Labour.ApprovalStatus.PENDING,
            ).update(
                approval_status=decision,
                reviewed_at=now,
                reviewed_by=admin_user,
                updated_at=now,
            )
            if not updated:
                current = Labour.objects.values_list('approval_status', flat=True).get(pk=labour.pk)
                logger.warning(f"Labour {labour.pk} already reviewed ({current})")
                raise ResourceStateError(
                    current_state=current,
                    required_state=Labour.ApprovalStatus.PENDING,
                    detail="Labour profile has already been reviewed.",
                )

            self.dispatcher.dispatch_on_commit(
                contact_for(labour.user, prefer='sms'),
                f"Your LabourHub profile has been {decision.value}."
                + (" You can now apply for jobs." if approve else ""),
                subject="Profile review",
            )

        security_logger.info(
            f"Labour {labour.pk} {decision.value} by admin {admin_user.pk}"
        )
        labour.refresh_from_db()
        return labour

    def approve(self, admin_user, labour_id) -> Labour:
        return self.decide(admin_user, labour_id, approve=True)

    def reject(self, admin_user, labour_id) -> Labour:
        return self.decide(admin_user, labour_id, approve=False)
