from django.contrib import admin
from .models import Calendar


@admin.register(Calendar)
class CalendarAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'color', 'is_public', 'deleted_after']
    list_filter = ['is_public']
    search_fields = ['name', 'description']
