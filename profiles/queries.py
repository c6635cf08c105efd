"""
Read-side helpers for profiles.

Listing querysets come back ordered and with their joins loaded so the
serializers never trigger per-row queries for users or categories.
"""

from django.db.models import Prefetch

from accounts.models import User
from api.exceptions import PermissionDeniedError, ResourceNotFoundError, get_object_or_not_found
from ratings.aggregation import RECENT_COMMENTS_LIMIT
from ratings.models import Rating

from .models import Client, Labour


def get_client_profile(user) -> Client:
    """Client profile of ``user``; 403 for other roles, 404 if missing."""
    if user.role != User.Role.CLIENT:
        raise PermissionDeniedError(detail="Only clients can perform this action.")
    try:
        return user.client_profile
    except Client.DoesNotExist:
        raise ResourceNotFoundError(detail="Client profile not found.")


def get_labour_profile(user) -> Labour:
    """Labour profile of ``user``; 403 for other roles, 404 if missing."""
    if user.role != User.Role.LABOUR:
        raise PermissionDeniedError(detail="Only labour accounts can perform this action.")
    try:
        return user.labour_profile
    except Labour.DoesNotExist:
        raise ResourceNotFoundError(detail="Labour profile not found.")


def with_recent_comments(queryset, limit: int = RECENT_COMMENTS_LIMIT):
    """Attach the ``limit`` newest commented ratings as ``recent_comments``."""
    recent = (
        Rating.objects.exclude(comment='')
        .select_related('client')
        .order_by('-created_at', '-id')[:limit]
    )
    return queryset.prefetch_related(
        Prefetch('ratings', queryset=recent, to_attr='recent_comments')
    )


def approved_labour():
    """Approved workers, best rated first. Narrowed further by profiles.filters.LabourFilter."""
    queryset = (
        Labour.objects.filter(approval_status=Labour.ApprovalStatus.APPROVED)
        .select_related('user')
        .prefetch_related('categories')
        .order_by('-average_rating', '-created_at', '-id')
        .distinct()
    )
    return with_recent_comments(queryset)


def pending_labour():
    """Workers waiting for an approval decision, newest first."""
    return (
        Labour.objects.filter(approval_status=Labour.ApprovalStatus.PENDING)
        .select_related('user')
        .prefetch_related('categories')
        .order_by('-created_at', '-id')
    )


def labour_detail(labour_id, viewer=None) -> Labour:
    """
    One worker profile.

    Unapproved profiles are only visible to admins and to the worker.
    """
    labour = get_object_or_not_found(
        Labour.objects.select_related('user').prefetch_related('categories'),
        'Labour',
        pk=labour_id,
    )
    if labour.is_approved:
        return labour

    is_admin = viewer is not None and viewer.is_authenticated and viewer.is_admin_role
    is_self = viewer is not None and viewer.is_authenticated and labour.user_id == viewer.pk
    if not (is_admin or is_self):
        raise ResourceNotFoundError('Labour')
    return labour
