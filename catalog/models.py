"""
Catalog Models - the kinds of work the marketplace offers.
"""

from django.db import models
from django.db.models.functions import Lower
from django.utils.translation import gettext_lazy as _

from core.db.models import BaseModel


class ActiveCategoryManager(models.Manager):
    def get_queryset(self):
        return super().get_queryset().filter(is_active=True)


class Category(BaseModel):
    """
    A category of work (plumbing, carpentry, ...).

    Names are unique regardless of case. Categories are never deleted, only
    deactivated, so historical jobs keep their category.
    """

    name = models.CharField(max_length=50)
    description = models.CharField(max_length=200, blank=True)
    is_active = models.BooleanField(
        default=True,
        db_index=True,
        help_text=_('Inactive categories are hidden from listings')
    )

    objects = models.Manager()
    active = ActiveCategoryManager()

    class Meta:
        verbose_name = _('Category')
        verbose_name_plural = _('Categories')
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(
                Lower('name'),
                name='catalog_category_name_ci_unique',
            ),
        ]

    def __str__(self):
        return self.name

    def deactivate(self):
        self.is_active = False
        self.save(update_fields=['is_active', 'updated_at'])
