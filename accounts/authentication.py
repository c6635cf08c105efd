"""
Accounts Authentication

- EmailOrPhoneBackend: Django auth backend accepting an email or phone number
- LabourHubRefreshToken: simplejwt refresh token carrying the user's role
- issue_tokens / authenticate_credentials: helpers used by the auth views
"""

import logging
from typing import Dict

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.backends import ModelBackend
from rest_framework_simplejwt.tokens import RefreshToken

from api.exceptions import AuthenticationFailedError

from .phone import InvalidPhoneNumber, looks_like_email, normalize_phone

logger = logging.getLogger(__name__)
security_logger = logging.getLogger('security.accounts')


class EmailOrPhoneBackend(ModelBackend):
    """Authenticate with an email address or an Indian mobile number."""

    def authenticate(self, request, username=None, password=None, identifier=None, **kwargs):
        User = get_user_model()
        identifier = identifier or username or kwargs.get(User.USERNAME_FIELD)
        if not identifier or password is None:
            return None

        lookup = self._lookup_for(identifier)
        user = User.objects.filter(**lookup).first() if lookup else None

        if user is None:
            # Run the hasher once to reduce the timing difference with existing users
            User().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None

    @staticmethod
    def _lookup_for(identifier):
        identifier = identifier.strip()
        if looks_like_email(identifier):
            return {'email': identifier.lower()}
        try:
            return {'phone': normalize_phone(identifier)}
        except InvalidPhoneNumber:
            return None


class LabourHubRefreshToken(RefreshToken):
    """Refresh token whose access tokens carry the ``role`` claim."""

    @classmethod
    def for_user(cls, user):
        token = super().for_user(user)
        token['role'] = user.role
        return token


def issue_tokens(user) -> Dict[str, str]:
    refresh = LabourHubRefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


def authenticate_credentials(request, identifier: str, password: str):
    """Return the user for ``identifier``/``password`` or raise AuthenticationFailedError."""
    user = authenticate(request, identifier=identifier, password=password)
    if user is None:
        security_logger.warning(f"Failed login for identifier {identifier!r}")
        raise AuthenticationFailedError()
    if not user.is_verified:
        raise AuthenticationFailedError(detail="Account not verified.")
    return user
