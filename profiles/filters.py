"""
Filters for the public labour listing.

- category: category id (UUID)
- city: Hubli or Dharwad, case-insensitive
"""

from django_filters import rest_framework as django_filters

from .models import Labour


class LabourFilter(django_filters.FilterSet):
    category = django_filters.UUIDFilter(field_name='categories__id')
    city = django_filters.CharFilter(field_name='city', lookup_expr='iexact')

    class Meta:
        model = Labour
        fields = ['category', 'city']
