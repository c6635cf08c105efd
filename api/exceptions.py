"""
API Exceptions - Error Taxonomy for the LabourHub API

Every failure the marketplace can report to a caller is one of the classes
below. Services raise them directly; the DRF exception handler at the bottom
of this module turns them into the standard error envelope:

{
    "success": false,
    "data": null,
    "message": "Human-readable message",
    "error_code": "MACHINE_READABLE_CODE",
    "errors": [...],
    "meta": {...}
}
"""

import logging
from typing import Any, Dict, List

from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class LabourHubAPIException(APIException):
    """
    Base exception for all LabourHub API errors.

    ``error_code`` is the machine-readable code rendered in the envelope;
    ``extra_data`` is merged into the response ``meta``.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = _("An unexpected error occurred.")
    default_code = "ERROR"

    def __init__(self, detail: str = None, code: str = None, extra_data: Dict = None, **kwargs):
        self.error_code = code or self.default_code
        self.extra_data = extra_data or {}
        super().__init__(detail=str(self.default_detail) if detail is None else detail, code=self.error_code)


# =============================================================================
# RESOURCE EXCEPTIONS
# =============================================================================

class ResourceNotFoundError(LabourHubAPIException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = _("The requested resource was not found.")
    default_code = "NOT_FOUND"

    def __init__(self, resource_type: str = None, resource_id: Any = None, **kwargs):
        detail = kwargs.pop('detail', None) or str(self.default_detail)
        extra_data = kwargs.pop('extra_data', {})

        if resource_type:
            extra_data['resource_type'] = resource_type
            detail = f"{resource_type} not found."

        if resource_id:
            extra_data['resource_id'] = str(resource_id)
            detail = f"{resource_type or 'Resource'} with ID '{resource_id}' not found."

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


class ResourceAlreadyExistsError(LabourHubAPIException):
    """Raised when trying to create a duplicate account or category."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("A resource with these details already exists.")
    default_code = "ALREADY_EXISTS"

    def __init__(self, resource_type: str = None, conflicting_fields: List[str] = None, **kwargs):
        detail = kwargs.pop('detail', None) or str(self.default_detail)
        extra_data = kwargs.pop('extra_data', {})

        if resource_type:
            extra_data['resource_type'] = resource_type
            detail = f"A {resource_type} with these details already exists."

        if conflicting_fields:
            extra_data['conflicting_fields'] = conflicting_fields

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


class ResourceStateError(LabourHubAPIException):
    """Raised when a resource is in the wrong state for the operation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("This operation cannot be performed on the resource in its current state.")
    default_code = "STATE_CONFLICT"

    def __init__(self, current_state: str = None, required_state: str = None, **kwargs):
        detail = kwargs.pop('detail', None)
        extra_data = kwargs.pop('extra_data', {})

        if current_state:
            extra_data['current_state'] = current_state
        if required_state:
            extra_data['required_state'] = required_state

        # Subclasses with their own message keep it; the state goes to meta only
        if detail is None and self.default_detail is ResourceStateError.default_detail:
            detail = str(self.default_detail)
            if current_state:
                detail = f"Resource is in '{current_state}' state."
            if required_state:
                detail = f"{detail} Required state: '{required_state}'."

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


class AlreadyAppliedError(ResourceStateError):
    """Raised when a labour applies to the same job twice."""

    default_detail = _("You have already applied for this job.")
    default_code = "ALREADY_APPLIED"


class AlreadyRatedError(ResourceStateError):
    """Raised when a job already carries a rating."""

    default_detail = _("This job has already been rated.")
    default_code = "ALREADY_RATED"


class NoEligibleLabourError(ResourceStateError):
    """Raised when no approved labour exists to price a new job."""

    default_detail = _("No approved labour is available for this category and city.")
    default_code = "NO_ELIGIBLE_LABOUR"


# =============================================================================
# PERMISSION EXCEPTIONS
# =============================================================================

class PermissionDeniedError(LabourHubAPIException):
    """Raised when user doesn't have permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("You do not have permission to perform this action.")
    default_code = "PERMISSION_DENIED"

    def __init__(self, required_permission: str = None, **kwargs):
        extra_data = kwargs.pop('extra_data', {})
        if required_permission:
            extra_data['required_permission'] = required_permission
        super().__init__(extra_data=extra_data, **kwargs)


class LabourNotApprovedError(PermissionDeniedError):
    """Raised when a labour acts before an admin has approved the profile."""

    default_detail = _("Your profile is awaiting admin approval.")
    default_code = "LABOUR_NOT_APPROVED"


# =============================================================================
# AUTHENTICATION EXCEPTIONS
# =============================================================================

class AuthenticationFailedError(LabourHubAPIException):
    """Raised when authentication fails."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = _("Invalid credentials.")
    default_code = "AUTHENTICATION_FAILED"


class InvalidOTPError(LabourHubAPIException):
    """Raised when a one-time password is wrong, used or expired."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("Invalid or expired OTP.")
    default_code = "INVALID_OTP"


# =============================================================================
# EXCEPTION HANDLER
# =============================================================================

def _envelope(message, error_code, errors=None, meta=None) -> Dict:
    return {
        "success": False,
        "data": None,
        "message": message,
        "error_code": error_code,
        "errors": errors or [],
        "meta": {"timestamp": timezone.now().isoformat(), **(meta or {})},
    }


def _validation_envelope(exc: ValidationError) -> Dict:
    detail = exc.detail
    if isinstance(detail, dict):
        errors = [
            {"field": field, "messages": [str(m) for m in msgs] if isinstance(msgs, list) else [str(msgs)]}
            for field, msgs in detail.items()
        ]
        return _envelope("Validation failed.", "VALIDATION_ERROR", errors)
    if isinstance(detail, list):
        errors = [{"field": "non_field_errors", "messages": [str(m) for m in detail]}]
        return _envelope(str(detail[0]) if detail else "Validation failed.", "VALIDATION_ERROR", errors)
    return _envelope(str(detail), "VALIDATION_ERROR")


def labourhub_exception_handler(exc, context):
    """
    Render every API error in the standard envelope.

    LabourHub exceptions carry their own ``error_code`` and ``extra_data``
    (merged into ``meta``). DRF validation errors list per-field messages.
    Other DRF errors keep their status and use their default code.
    Anything DRF does not handle becomes a logged 500.
    """
    response = exception_handler(exc, context)

    if response is None:
        logger.exception(f"Unhandled exception: {exc}")
        return Response(
            _envelope("An unexpected error occurred.", "INTERNAL_ERROR"),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, LabourHubAPIException):
        body = _envelope(str(exc.detail), exc.error_code, meta=exc.extra_data)
        logger.warning("Request rejected with %s: %s", exc.error_code, exc.detail)
    elif isinstance(exc, ValidationError):
        body = _validation_envelope(exc)
    else:
        body = _envelope(str(exc.detail), getattr(exc, 'default_code', 'error').upper())

    response.data = body
    return response


# =============================================================================
# EXCEPTION UTILITIES
# =============================================================================

def get_object_or_not_found(queryset, resource_type: str, **lookup):
    """
    Fetch a single object or raise ResourceNotFoundError.

    Malformed identifiers (e.g. a non-UUID primary key) count as not found.

    Usage:
        job = get_object_or_not_found(Job.objects.all(), 'Job', pk=job_id)
    """
    from django.core.exceptions import ValidationError as DjangoValidationError

    try:
        return queryset.get(**lookup)
    except (queryset.model.DoesNotExist, DjangoValidationError, ValueError, TypeError):
        raise ResourceNotFoundError(resource_type)
