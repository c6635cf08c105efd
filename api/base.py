"""
API Base - Standard Response Envelope

Every successful LabourHub response follows this structure:
{
    "success": true,
    "data": {...} | [...],
    "message": str | null,
    "errors": null,
    "meta": {"timestamp": "ISO8601", "pagination": {...} | absent}
}

Errors use the same envelope; see api.exceptions.
"""

from typing import Any, Dict, List, Type

from django.utils import timezone
from rest_framework import permissions, status, viewsets
from rest_framework.response import Response


class APIResponse:
    """Standardized API response format for consistent client handling."""

    @staticmethod
    def success(
        data: Any = None,
        message: str = None,
        status_code: int = status.HTTP_200_OK,
        meta: Dict = None,
    ) -> Response:
        """Create a successful response."""
        response_meta = {
            "timestamp": timezone.now().isoformat(),
            **(meta or {})
        }
        response_data = {
            "success": True,
            "data": data,
            "message": message,
            "errors": None,
            "meta": response_meta
        }
        return Response(response_data, status=status_code)

    @staticmethod
    def created(data: Any = None, message: str = "Resource created successfully", meta: Dict = None) -> Response:
        """Create a 201 Created response."""
        return APIResponse.success(
            data=data,
            message=message,
            status_code=status.HTTP_201_CREATED,
            meta=meta
        )

    @staticmethod
    def updated(data: Any = None, message: str = "Resource updated successfully") -> Response:
        """Create a successful update response."""
        return APIResponse.success(data=data, message=message)


class BaseViewSet(viewsets.GenericViewSet):
    """
    Base ViewSet for marketplace endpoints.

    Usage:
        class JobViewSet(BaseViewSet):
            action_permissions = {
                'create': [IsAuthenticated, IsClient],
            }
    """

    permission_classes = [permissions.IsAuthenticated]

    # Override per-action permissions (optional)
    action_permissions: Dict[str, List[Type[permissions.BasePermission]]] = {}

    def get_permissions(self):
        if self.action in self.action_permissions:
            return [perm() for perm in self.action_permissions[self.action]]
        return super().get_permissions()

    def paginated(self, queryset, serializer_class=None, context=None):
        """Paginate ``queryset`` and return the standard list envelope."""
        serializer_class = serializer_class or self.get_serializer_class()
        context = context or self.get_serializer_context()
        page = self.paginate_queryset(queryset)
        serializer = serializer_class(page, many=True, context=context)
        return self.get_paginated_response(serializer.data)
