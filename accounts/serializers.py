"""
Accounts Serializers.
"""

from rest_framework import serializers

from .models import User
from .phone import InvalidPhoneNumber, normalize_phone


class PhoneField(serializers.CharField):
    """CharField that normalises Indian mobile numbers to E.164."""

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        try:
            return normalize_phone(value)
        except InvalidPhoneNumber as e:
            raise serializers.ValidationError(str(e))

    def to_representation(self, value):
        return str(value) if value else None


class UserSerializer(serializers.ModelSerializer):
    phone = PhoneField(read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'phone', 'role', 'is_verified', 'date_joined']
        read_only_fields = fields


class RequestOTPSerializer(serializers.Serializer):
    phone = PhoneField()


class LoginSerializer(serializers.Serializer):
    identifier = serializers.CharField(help_text="Email address or phone number")
    password = serializers.CharField(write_only=True, trim_whitespace=False)
