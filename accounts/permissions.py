"""
Accounts Permissions - role checks for the marketplace API.

- IsClient: authenticated user with the client role
- IsLabour: authenticated user with the labour role
- IsAdminRole: admin role or Django superuser
"""

from rest_framework import permissions

from .models import User


class HasRole(permissions.BasePermission):
    """Base class: grant access when the user's role is in ``roles``."""

    roles = ()

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.role in self.roles


class IsClient(HasRole):
    message = "Only clients can perform this action."
    roles = (User.Role.CLIENT,)


class IsLabour(HasRole):
    message = "Only labour accounts can perform this action."
    roles = (User.Role.LABOUR,)


class IsAdminRole(HasRole):
    message = "Admin access required."
    roles = (User.Role.ADMIN,)

    def has_permission(self, request, view):
        if request.user and request.user.is_authenticated and request.user.is_superuser:
            return True
        return super().has_permission(request, view)
