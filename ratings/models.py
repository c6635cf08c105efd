"""
Ratings Models.

A Rating is written once per completed job by the job's client and folded
into the worker's running average by ratings.aggregation.apply_rating.
"""

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from core.db.models import BaseModel


class Rating(BaseModel):
    """Client's 1-5 star rating of the worker on a completed job. Immutable."""

    job = models.OneToOneField(
        'jobs.Job',
        on_delete=models.CASCADE,
        related_name='rating'
    )
    client = models.ForeignKey(
        'profiles.Client',
        on_delete=models.CASCADE,
        related_name='ratings_given'
    )
    labour = models.ForeignKey(
        'profiles.Labour',
        on_delete=models.CASCADE,
        related_name='ratings'
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    comment = models.CharField(max_length=500, blank=True)

    class Meta(BaseModel.Meta):
        verbose_name = _('Rating')
        verbose_name_plural = _('Ratings')
        indexes = [
            models.Index(fields=['labour', '-created_at'], name='ratings_labour_recent_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(rating__gte=1) & Q(rating__lte=5),
                name='rating_value_range',
            ),
        ]

    def __str__(self):
        return f"{self.rating}/5 for {self.labour}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError(_('Ratings cannot be modified once submitted.'))
        super().save(*args, **kwargs)
