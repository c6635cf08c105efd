from django.contrib import admin

from .models import Rating


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    list_display = ['labour', 'client', 'rating', 'created_at']
    list_filter = ['rating']
    search_fields = ['labour__name', 'client__name', 'comment']
    readonly_fields = [f.name for f in Rating._meta.fields]

    def has_add_permission(self, request):
        return False
