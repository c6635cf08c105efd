"""
Base Models for LabourHub

BaseModel gives every domain record a UUID primary key and creation and
modification timestamps. Listing order across the API is newest first,
so the default ordering lives here too.
"""

import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


class BaseModel(models.Model):
    """
    Abstract base model with UUID primary key and timestamps.

    Example:
        class Category(BaseModel):
            name = models.CharField(max_length=50)
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        verbose_name=_('ID')
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        verbose_name=_('Created at')
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name=_('Updated at')
    )

    class Meta:
        abstract = True
        ordering = ['-created_at', '-id']
        get_latest_by = 'created_at'
