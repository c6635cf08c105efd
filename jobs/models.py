"""
Jobs Models - posted work, applications for it, and settlement records.

Status fields are only ever written by jobs.services.JobLifecycleService,
which checks every change against the tables in jobs.workflows.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from core.db.models import BaseModel
from profiles.models import CITY_CHOICES


class Job(BaseModel):
    """
    A piece of work posted by a client.

    ``hourly_rate`` is a snapshot taken when the job is posted and is never
    recalculated afterwards.
    """

    class Status(models.TextChoices):
        OPEN = 'open', _('Open')
        IN_PROGRESS = 'in_progress', _('In progress')
        AWAITING_COMPLETION = 'awaiting_completion', _('Awaiting completion')
        COMPLETED = 'completed', _('Completed')
        CANCELLED = 'cancelled', _('Cancelled')

    client = models.ForeignKey(
        'profiles.Client',
        on_delete=models.CASCADE,
        related_name='jobs'
    )
    labour = models.ForeignKey(
        'profiles.Labour',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='jobs',
        help_text=_('Assigned when an application is accepted')
    )
    category = models.ForeignKey(
        'catalog.Category',
        on_delete=models.PROTECT,
        related_name='jobs'
    )
    title = models.CharField(max_length=100)
    description = models.TextField(max_length=1000)
    city = models.CharField(max_length=20, choices=CITY_CHOICES, db_index=True)
    hourly_rate = models.PositiveIntegerField(help_text=_('Snapshot rate in rupees per hour'))
    estimated_hours = models.PositiveIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(100)]
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.OPEN,
        db_index=True
    )

    # Lifecycle timestamps
    accepted_at = models.DateTimeField(null=True, blank=True)
    work_completed_at = models.DateTimeField(null=True, blank=True)
    payment_received_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta(BaseModel.Meta):
        verbose_name = _('Job')
        verbose_name_plural = _('Jobs')
        indexes = [
            models.Index(fields=['status', 'category', 'city'], name='jobs_job_discovery_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(estimated_hours__gte=1) & Q(estimated_hours__lte=100),
                name='job_estimated_hours_range',
            ),
            models.CheckConstraint(
                condition=Q(status='open') | Q(labour__isnull=False) | Q(status='cancelled'),
                name='job_labour_assigned_after_open',
            ),
        ]

    def __str__(self):
        return self.title

    @property
    def estimated_cost(self):
        return self.hourly_rate * self.estimated_hours


class JobApplication(BaseModel):
    """A labour's bid for an open job."""

    class Status(models.TextChoices):
        PENDING = 'pending', _('Pending')
        ACCEPTED = 'accepted', _('Accepted')
        REJECTED = 'rejected', _('Rejected')

    job = models.ForeignKey(
        Job,
        on_delete=models.CASCADE,
        related_name='applications'
    )
    labour = models.ForeignKey(
        'profiles.Labour',
        on_delete=models.CASCADE,
        related_name='applications'
    )
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True
    )
    message = models.CharField(max_length=500, blank=True)
    responded_at = models.DateTimeField(null=True, blank=True)

    class Meta(BaseModel.Meta):
        verbose_name = _('Job application')
        verbose_name_plural = _('Job applications')
        constraints = [
            models.UniqueConstraint(
                fields=['job', 'labour'],
                name='unique_application_per_labour_job',
            ),
        ]

    def __str__(self):
        return f"{self.labour} -> {self.job}"


class Settlement(BaseModel):
    """
    Simulated payment record written when the worker confirms payment.

    No money moves; the row documents what the client owed.
    """

    job = models.OneToOneField(
        Job,
        on_delete=models.CASCADE,
        related_name='settlement'
    )
    amount = models.PositiveIntegerField(help_text=_('hourly_rate x estimated_hours, in rupees'))
    reference = models.CharField(max_length=40, unique=True)
    recorded_at = models.DateTimeField()
    confirmed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='confirmed_settlements'
    )

    class Meta(BaseModel.Meta):
        verbose_name = _('Settlement')
        verbose_name_plural = _('Settlements')

    def __str__(self):
        return f"{self.reference} ({self.amount})"
