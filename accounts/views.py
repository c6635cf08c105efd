"""
Accounts Views - OTP request and login.

Signup and the current-user endpoint live in profiles.views because they
create or return profile records.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import permissions, views

from api.base import APIResponse

from .authentication import authenticate_credentials, issue_tokens
from .otp import OTPService
from .serializers import LoginSerializer, RequestOTPSerializer, UserSerializer


class RequestOTPView(views.APIView):
    """
    POST: Send a signup OTP to a phone number not yet registered.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(request=RequestOTPSerializer)
    def post(self, request):
        serializer = RequestOTPSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        OTPService().issue(serializer.validated_data['phone'])
        return APIResponse.success(message="OTP sent successfully.")


class LoginView(views.APIView):
    """
    POST: Authenticate with email or phone and password, return tokens.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(request=LoginSerializer)
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate_credentials(
            request,
            serializer.validated_data['identifier'],
            serializer.validated_data['password'],
        )

        return APIResponse.success(
            data={
                'user': UserSerializer(user).data,
                'tokens': issue_tokens(user),
            },
            message="Login successful.",
        )
