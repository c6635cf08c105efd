from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import OneTimePassword, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    ordering = ['-date_joined']
    list_display = ['email', 'phone', 'role', 'is_verified', 'is_active', 'date_joined']
    list_filter = ['role', 'is_verified', 'is_active', 'is_staff']
    search_fields = ['email', 'phone']
    readonly_fields = ['password', 'date_joined', 'last_login']
    filter_horizontal = ['groups', 'user_permissions']

    fieldsets = (
        (None, {'fields': ('email', 'phone', 'password')}),
        (_('Role'), {'fields': ('role', 'is_verified')}),
        (_('Permissions'), {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        (_('Dates'), {'fields': ('last_login', 'date_joined')}),
    )

    def get_readonly_fields(self, request, obj=None):
        fields = list(super().get_readonly_fields(request, obj))
        if obj is not None:
            fields.append('role')
        return fields


@admin.register(OneTimePassword)
class OneTimePasswordAdmin(admin.ModelAdmin):
    list_display = ['phone', 'is_used', 'expires_at', 'created_at']
    list_filter = ['is_used']
    search_fields = ['phone']
