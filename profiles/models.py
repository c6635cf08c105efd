"""
Profile Models - the two sides of the marketplace.

Models:
- Labour: a worker offering services in one city at an hourly rate. New
  profiles start ``pending`` and must be approved by an admin before the
  worker can apply for jobs. Rating aggregates are maintained by
  ratings.aggregation and never written from here.
- Client: a customer who posts jobs.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from core.db.models import BaseModel

CITY_CHOICES = [(city, city) for city in settings.SERVICE_CITIES]


class Labour(BaseModel):
    """Worker profile with approval state and running rating aggregate."""

    class ApprovalStatus(models.TextChoices):
        PENDING = 'pending', _('Pending')
        APPROVED = 'approved', _('Approved')
        REJECTED = 'rejected', _('Rejected')

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='labour_profile'
    )
    name = models.CharField(max_length=100)
    categories = models.ManyToManyField(
        'catalog.Category',
        related_name='labourers'
    )
    hourly_rate = models.PositiveIntegerField(
        validators=[
            MinValueValidator(settings.LABOUR_RATE_MIN),
            MaxValueValidator(settings.LABOUR_RATE_MAX),
        ],
        help_text=_('Rate in rupees per hour')
    )
    city = models.CharField(max_length=20, choices=CITY_CHOICES, db_index=True)

    approval_status = models.CharField(
        max_length=10,
        choices=ApprovalStatus.choices,
        default=ApprovalStatus.PENDING,
        db_index=True
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_labour'
    )

    # Running rating aggregate
    total_rating = models.PositiveIntegerField(default=0)
    rating_count = models.PositiveIntegerField(default=0)
    average_rating = models.FloatField(default=0, db_index=True)

    class Meta(BaseModel.Meta):
        verbose_name = _('Labour')
        verbose_name_plural = _('Labour')
        constraints = [
            models.CheckConstraint(
                condition=Q(hourly_rate__gte=settings.LABOUR_RATE_MIN) & Q(hourly_rate__lte=settings.LABOUR_RATE_MAX),
                name='labour_hourly_rate_range',
            ),
            models.CheckConstraint(
                condition=Q(average_rating__gte=0) & Q(average_rating__lte=5),
                name='labour_average_rating_range',
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.city})"

    @property
    def is_approved(self):
        return self.approval_status == self.ApprovalStatus.APPROVED


class Client(BaseModel):
    """Customer profile."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='client_profile'
    )
    name = models.CharField(max_length=100)
    company = models.CharField(max_length=100, blank=True)

    class Meta(BaseModel.Meta):
        verbose_name = _('Client')
        verbose_name_plural = _('Clients')

    def __str__(self):
        return self.name
