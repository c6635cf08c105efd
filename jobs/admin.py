from django.contrib import admin

from .models import Job, JobApplication, Settlement


class JobApplicationInline(admin.TabularInline):
    model = JobApplication
    extra = 0
    fields = ['labour', 'status', 'message', 'responded_at']
    readonly_fields = fields
    can_delete = False


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'city', 'hourly_rate', 'status', 'client', 'labour', 'created_at']
    list_filter = ['status', 'city', 'category']
    search_fields = ['title', 'client__name', 'labour__name']
    # Status and pricing only change through JobLifecycleService
    readonly_fields = [
        'status', 'hourly_rate', 'labour',
        'accepted_at', 'work_completed_at', 'payment_received_at',
        'completed_at', 'cancelled_at',
    ]
    inlines = [JobApplicationInline]


@admin.register(Settlement)
class SettlementAdmin(admin.ModelAdmin):
    list_display = ['reference', 'job', 'amount', 'recorded_at']
    search_fields = ['reference', 'job__title']
    readonly_fields = [f.name for f in Settlement._meta.fields]

    def has_add_permission(self, request):
        return False
