import logging

from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _

from api.exceptions import ResourceStateError

from .models import Client, Labour
from .services import LabourApprovalService

logger = logging.getLogger(__name__)


@admin.register(Labour)
class LabourAdmin(admin.ModelAdmin):
    list_display = ['name', 'city', 'hourly_rate', 'approval_status', 'average_rating', 'rating_count', 'created_at']
    list_filter = ['approval_status', 'city', 'categories']
    search_fields = ['name', 'user__email', 'user__phone']
    filter_horizontal = ['categories']
    readonly_fields = [
        'approval_status', 'reviewed_at', 'reviewed_by',
        'total_rating', 'rating_count', 'average_rating',
    ]
    actions = ['approve_selected', 'reject_selected']

    @admin.action(description=_('Approve selected pending labour'))
    def approve_selected(self, request, queryset):
        self._decide(request, queryset, approve=True)

    @admin.action(description=_('Reject selected pending labour'))
    def reject_selected(self, request, queryset):
        self._decide(request, queryset, approve=False)

    def _decide(self, request, queryset, approve):
        service = LabourApprovalService()
        done, skipped = 0, 0
        for labour in queryset:
            try:
                service.decide(request.user, labour.pk, approve=approve)
                done += 1
            except ResourceStateError:
                skipped += 1

        self.message_user(request, _('%(done)d profile(s) updated.') % {'done': done}, messages.SUCCESS)
        if skipped:
            self.message_user(
                request,
                _('%(skipped)d profile(s) were already reviewed and left unchanged.') % {'skipped': skipped},
                messages.WARNING,
            )


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ['name', 'company', 'created_at']
    search_fields = ['name', 'company', 'user__email']
