"""
Catalog Views - category listing for everyone, management for admins.
"""

import logging

from django.db import IntegrityError, transaction
from rest_framework import permissions

from accounts.permissions import IsAdminRole
from api.base import APIResponse, BaseViewSet
from api.exceptions import ResourceAlreadyExistsError, get_object_or_not_found

from .models import Category
from .serializers import CategorySerializer

logger = logging.getLogger(__name__)


class CategoryViewSet(BaseViewSet):
    """
    list:     active categories sorted by name (public)
    create:   admin only
    partial_update / destroy: admin only; destroy deactivates the category
    """

    serializer_class = CategorySerializer
    queryset = Category.active.all()
    permission_classes = [permissions.IsAuthenticated, IsAdminRole]
    action_permissions = {
        'list': [permissions.AllowAny],
    }

    def list(self, request):
        return self.paginated(Category.active.order_by('name'))

    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = self._save(serializer)
        logger.info(f"Category {category.pk} created: {category.name}")
        return APIResponse.created(CategorySerializer(category).data, message="Category created successfully.")

    def partial_update(self, request, pk=None):
        category = get_object_or_not_found(Category.active.all(), 'Category', pk=pk)
        serializer = self.get_serializer(category, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        category = self._save(serializer)
        return APIResponse.updated(CategorySerializer(category).data, message="Category updated successfully.")

    def destroy(self, request, pk=None):
        category = get_object_or_not_found(Category.active.all(), 'Category', pk=pk)
        category.deactivate()
        logger.info(f"Category {category.pk} deactivated")
        return APIResponse.success(message="Category deleted successfully.")

    @staticmethod
    def _save(serializer):
        # The case-insensitive unique index is the final arbiter under concurrency
        try:
            with transaction.atomic():
                return serializer.save()
        except IntegrityError:
            raise ResourceAlreadyExistsError(
                detail="Category with this name already exists.",
                conflicting_fields=['name'],
            )
