"""
Job Lifecycle Service.

All writes to Job, JobApplication, Settlement and Rating go through
JobLifecycleService. Each operation:

1. resolves the acting profile (403 for the wrong role, 404 for a missing profile),
2. loads and locks the rows it changes,
3. checks the move against jobs.workflows,
4. applies the change inside one transaction,
5. registers its notification to run after commit.

The notifier is injected through the constructor so tests can pass a fake;
delivery failures are logged by the dispatcher and never reach the caller.
"""

import logging
import uuid
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.db import IntegrityError, transaction
from django.db.models import Count, Sum
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from api.exceptions import (
    AlreadyAppliedError,
    AlreadyRatedError,
    LabourNotApprovedError,
    NoEligibleLabourError,
    PermissionDeniedError,
    ResourceStateError,
    get_object_or_not_found,
)
from notifications.services import NotificationDispatcher, contact_for
from profiles.models import Labour
from profiles.queries import get_client_profile, get_labour_profile
from ratings.aggregation import RATING_VALUES, apply_rating
from ratings.models import Rating

from .models import Job, JobApplication, Settlement
from .workflows import APPLICATION_WORKFLOW, JOB_WORKFLOW

logger = logging.getLogger(__name__)


@dataclass
class AcceptanceResult:
    """An accepted application together with the job it started."""
    application: JobApplication
    job: Job
    rejected_count: int = 0


@dataclass
class RatingResult:
    """A finalized job, its rating and the worker's refreshed aggregate."""
    job: Job
    rating: Rating
    labour: Labour


def snapshot_rate(category, city) -> int:
    """
    Mean hourly rate of approved labour in ``category`` and ``city``.

    Rounded half-up to whole rupees. Raises NoEligibleLabourError if nobody
    qualifies.
    """
    stats = (
        Labour.objects.filter(
            approval_status=Labour.ApprovalStatus.APPROVED,
            categories=category,
            city=city,
        )
        .aggregate(total=Sum('hourly_rate'), count=Count('id', distinct=True))
    )
    if not stats['count']:
        raise NoEligibleLabourError(
            detail="No approved workers found for this category and city."
        )

    mean = Decimal(stats['total']) / Decimal(stats['count'])
    return int(mean.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def settlement_reference() -> str:
    return f"SIM-{uuid.uuid4().hex[:12].upper()}"


class JobLifecycleService:
    """
    State transitions for jobs and applications.

    Usage:
        service = JobLifecycleService(notifier=LogNotifier())
        job = service.create_job(request.user, category=cat, ...)
    """

    def __init__(self, notifier=None):
        self.dispatcher = NotificationDispatcher(notifier)

    # ==================== JOBS ====================

    def create_job(self, user, *, category, title, description, city, estimated_hours) -> Job:
        client = get_client_profile(user)
        hourly_rate = snapshot_rate(category, city)

        job = Job.objects.create(
            client=client,
            category=category,
            title=title,
            description=description,
            city=city,
            hourly_rate=hourly_rate,
            estimated_hours=estimated_hours,
        )
        logger.info(f"Job {job.pk} created by client {client.pk} at {hourly_rate}/h")
        return job

    def mark_work_done(self, user, job_id) -> Job:
        client = get_client_profile(user)

        with transaction.atomic():
            job = self._lock_job(job_id)
            self._check_owner(job, client)
            self._move_job(job, Job.Status.AWAITING_COMPLETION, 'work_completed_at')

            labour_user = job.labour.user
            self.dispatcher.dispatch_on_commit(
                contact_for(labour_user, prefer='sms'),
                f"Client has marked work as done for job: {job.title}. "
                f"Please confirm and mark payment received.",
                subject="Work Completed",
            )

        logger.info(f"Job {job.pk} marked as done by client {client.pk}")
        return job

    def confirm_payment(self, user, job_id) -> Job:
        labour = get_labour_profile(user)

        with transaction.atomic():
            job = self._lock_job(job_id)
            if job.labour_id != labour.pk:
                raise PermissionDeniedError(detail="Only the assigned worker can confirm payment.")

            now = self._move_job(job, Job.Status.COMPLETED, 'payment_received_at', 'completed_at')
            Settlement.objects.create(
                job=job,
                amount=job.estimated_cost,
                reference=settlement_reference(),
                recorded_at=now,
                confirmed_by=user,
            )

            self.dispatcher.dispatch_on_commit(
                contact_for(job.client.user),
                f"{labour.name} has confirmed payment for job: {job.title}. "
                f"Work completed successfully!",
                subject="Job Completed",
            )

        logger.info(f"Job {job.pk} completed, payment confirmed by labour {labour.pk}")
        return job

    def rate_job(self, user, job_id, rating, comment='') -> RatingResult:
        client = get_client_profile(user)
        if rating not in RATING_VALUES:
            raise ValidationError({'rating': ["Rating must be an integer between 1 and 5."]})

        with transaction.atomic():
            job = self._lock_job(job_id)
            self._check_owner(job, client)
            if job.status != Job.Status.COMPLETED:
                raise ResourceStateError(
                    current_state=job.status,
                    required_state=Job.Status.COMPLETED,
                    detail="Job must be completed before rating.",
                )
            if Rating.objects.filter(job=job).exists():
                raise AlreadyRatedError(current_state=job.status)

            try:
                with transaction.atomic():
                    rating_obj = Rating.objects.create(
                        job=job,
                        client=client,
                        labour_id=job.labour_id,
                        rating=rating,
                        comment=comment or '',
                    )
            except IntegrityError:
                raise AlreadyRatedError(current_state=job.status)

            apply_rating(job.labour_id, rating)

        labour = Labour.objects.get(pk=job.labour_id)
        logger.info(f"Job {job.pk} rated {rating} by client {client.pk}")
        return RatingResult(job=job, rating=rating_obj, labour=labour)

    def cancel_job(self, user, job_id) -> Job:
        client = get_client_profile(user)

        with transaction.atomic():
            job = self._lock_job(job_id)
            self._check_owner(job, client)
            now = self._move_job(job, Job.Status.CANCELLED, 'cancelled_at')
            rejected = self._reject_pending(job, now)

        logger.info(f"Job {job.pk} cancelled by client {client.pk}; {rejected} applications closed")
        return job

    # ==================== APPLICATIONS ====================

    def submit_application(self, user, job_id, message='') -> JobApplication:
        labour = get_labour_profile(user)
        if not labour.is_approved:
            logger.warning(f"Unapproved labour {labour.pk} tried to apply for job {job_id}")
            raise LabourNotApprovedError(
                detail="Your profile must be approved to apply for jobs."
            )

        with transaction.atomic():
            job = self._lock_job(job_id)
            if job.status != Job.Status.OPEN:
                raise ResourceStateError(
                    current_state=job.status,
                    required_state=Job.Status.OPEN,
                    detail="This job is no longer accepting applications.",
                )
            if JobApplication.objects.filter(job=job, labour=labour).exists():
                raise AlreadyAppliedError(current_state=job.status)

            try:
                with transaction.atomic():
                    application = JobApplication.objects.create(
                        job=job,
                        labour=labour,
                        message=message or '',
                    )
            except IntegrityError:
                raise AlreadyAppliedError(current_state=job.status)

            self.dispatcher.dispatch_on_commit(
                contact_for(job.client.user),
                f'{labour.name} has applied for your job "{job.title}". '
                f'Phone: {labour.user.phone or "not provided"}',
                subject="New Job Application",
            )

        logger.info(f"Labour {labour.pk} applied for job {job.pk}")
        return application

    def accept_application(self, user, application_id) -> AcceptanceResult:
        """
        Accept one application and start the job.

        The job row is locked before the application row, the same order
        as submit_application and cancel_job, so concurrent accepts queue
        on the job. The job leaves ``open`` through a conditional UPDATE; if
        another request moved it first, nothing is changed and
        ResourceStateError is raised. All other pending applications are
        rejected in the same transaction.
        """
        client = get_client_profile(user)

        with transaction.atomic():
            job_id = get_object_or_not_found(
                JobApplication.objects.values_list('job_id', flat=True),
                'Application',
                pk=application_id,
            )
            job = self._lock_job(job_id)
            application = self._lock_application(application_id)
            self._check_owner(job, client)

            APPLICATION_WORKFLOW.assert_transition(application.status, JobApplication.Status.ACCEPTED)
            JOB_WORKFLOW.assert_transition(job.status, Job.Status.IN_PROGRESS)

            now = timezone.now()
            moved = Job.objects.filter(pk=job.pk, status=Job.Status.OPEN).update(
                status=Job.Status.IN_PROGRESS,
                labour=application.labour,
                accepted_at=now,
                updated_at=now,
            )
            if not moved:
                logger.warning(f"Job {job.pk} left 'open' before application {application.pk} was accepted")
                raise ResourceStateError(
                    current_state=Job.objects.values_list('status', flat=True).get(pk=job.pk),
                    required_state=Job.Status.OPEN,
                    detail="Job is no longer open.",
                )

            application.status = JobApplication.Status.ACCEPTED
            application.responded_at = now
            application.save(update_fields=['status', 'responded_at', 'updated_at'])

            rejected = self._reject_pending(job, now)
            job.refresh_from_db()

            self.dispatcher.dispatch_on_commit(
                contact_for(application.labour.user),
                f'Congratulations! Your application for "{job.title}" has been accepted. '
                f'Please contact the client to begin work.',
                subject="Application Accepted",
            )

        logger.info(
            f"Application {application.pk} accepted; job {job.pk} in progress, "
            f"{rejected} other applications rejected"
        )
        return AcceptanceResult(application=application, job=job, rejected_count=rejected)

    def reject_application(self, user, application_id) -> JobApplication:
        client = get_client_profile(user)

        with transaction.atomic():
            application = self._lock_application(application_id)
            self._check_owner(application.job, client)
            APPLICATION_WORKFLOW.assert_transition(application.status, JobApplication.Status.REJECTED)

            application.status = JobApplication.Status.REJECTED
            application.responded_at = timezone.now()
            application.save(update_fields=['status', 'responded_at', 'updated_at'])

        logger.info(f"Application {application.pk} rejected by client {client.pk}")
        return application

    # ==================== HELPERS ====================

    @staticmethod
    def _lock_job(job_id) -> Job:
        return get_object_or_not_found(
            Job.objects.select_for_update(of=('self',)).select_related(
                'client__user', 'labour__user', 'category'
            ),
            'Job',
            pk=job_id,
        )

    @staticmethod
    def _lock_application(application_id) -> JobApplication:
        return get_object_or_not_found(
            JobApplication.objects.select_for_update(of=('self',)).select_related(
                'job__client', 'labour__user'
            ),
            'Application',
            pk=application_id,
        )

    @staticmethod
    def _check_owner(job, client):
        if job.client_id != client.pk:
            raise PermissionDeniedError(detail="Only the client who posted this job can do this.")

    @staticmethod
    def _move_job(job, to_state, *timestamp_fields):
        """Check and apply a status change on a locked job; returns the timestamp used."""
        JOB_WORKFLOW.assert_transition(job.status, to_state)

        now = timezone.now()
        job.status = to_state
        for field in timestamp_fields:
            setattr(job, field, now)
        job.save(update_fields=['status', *timestamp_fields, 'updated_at'])
        return now

    @staticmethod
    def _reject_pending(job, now) -> int:
        return (
            JobApplication.objects.filter(job=job, status=JobApplication.Status.PENDING)
            .update(status=JobApplication.Status.REJECTED, responded_at=now, updated_at=now)
        )
