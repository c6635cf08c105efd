"""
Accounts Models - identity records for the marketplace.

Models:
- User: login identity keyed by email and/or Indian mobile number, with a
  fixed role (labour, client or admin).
- OneTimePassword: short-lived numeric codes sent to a phone during labour
  signup.
"""

from datetime import timedelta

from django.conf import settings
from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.contrib.auth.models import PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from phonenumber_field.modelfields import PhoneNumberField

from core.db.models import BaseModel

from .phone import normalize_phone


class UserManager(BaseUserManager):
    """Manager that normalises contact details before saving."""

    use_in_migrations = True

    def _create_user(self, email, phone, password, **extra_fields):
        if not email and not phone:
            raise ValueError('Either email or phone is required.')

        email = self.normalize_email(email).lower() if email else None
        phone = normalize_phone(phone) if phone else None

        user = self.model(email=email, phone=phone, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email=None, phone=None, password=None, **extra_fields):
        extra_fields.setdefault('role', User.Role.CLIENT)
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, phone, password, **extra_fields)

    def create_superuser(self, email=None, password=None, phone=None, **extra_fields):
        extra_fields.setdefault('role', User.Role.ADMIN)
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_verified', True)
        return self._create_user(email, phone, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Marketplace user.

    At least one of email or phone must be present. The role is chosen at
    signup and never changes afterwards.
    """

    class Role(models.TextChoices):
        LABOUR = 'labour', _('Labour')
        CLIENT = 'client', _('Client')
        ADMIN = 'admin', _('Admin')

    email = models.EmailField(
        unique=True,
        null=True,
        blank=True,
        help_text=_('Lower-cased email address')
    )
    phone = PhoneNumberField(
        unique=True,
        null=True,
        blank=True,
        region='IN',
        help_text=_('Mobile number in E.164 form')
    )
    role = models.CharField(
        max_length=10,
        choices=Role.choices,
        db_index=True
    )
    is_verified = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    date_joined = models.DateTimeField(default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = _('User')
        verbose_name_plural = _('Users')
        ordering = ['-date_joined']
        constraints = [
            models.CheckConstraint(
                condition=Q(email__isnull=False) | Q(phone__isnull=False),
                name='user_email_or_phone_required',
            ),
        ]

    def __str__(self):
        return self.email or str(self.phone)

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._loaded_role = instance.__dict__.get('role')
        return instance

    def clean(self):
        super().clean()
        if self.email:
            self.email = self.email.lower()
        if not self.email and not self.phone:
            raise ValidationError(_('Either email or phone is required.'))

    def save(self, *args, **kwargs):
        loaded_role = getattr(self, '_loaded_role', None)
        if loaded_role and loaded_role != self.role:
            raise ValidationError({'role': _('Role cannot be changed after creation.')})
        if self.email:
            self.email = self.email.lower()
        super().save(*args, **kwargs)
        self._loaded_role = self.role

    @property
    def is_labour(self):
        return self.role == self.Role.LABOUR

    @property
    def is_client(self):
        return self.role == self.Role.CLIENT

    @property
    def is_admin_role(self):
        return self.role == self.Role.ADMIN or self.is_superuser


def default_otp_expiry():
    return timezone.now() + timedelta(minutes=settings.OTP_TTL_MINUTES)


class OneTimePassword(BaseModel):
    """
    A numeric code sent by SMS to prove ownership of a phone number.

    Codes are single use. Issuing a new code for a phone invalidates any
    unused code issued before it.
    """

    phone = PhoneNumberField(region='IN', db_index=True)
    code = models.CharField(max_length=4)
    expires_at = models.DateTimeField(default=default_otp_expiry, db_index=True)
    is_used = models.BooleanField(default=False)

    class Meta(BaseModel.Meta):
        verbose_name = _('One-time password')
        verbose_name_plural = _('One-time passwords')
        indexes = [
            models.Index(fields=['phone', 'is_used'], name='accounts_otp_phone_used_idx'),
        ]

    def __str__(self):
        return f"OTP for {self.phone}"

    @property
    def is_expired(self):
        return self.expires_at <= timezone.now()
