from django.contrib import admin
from .models import APICredential


@admin.register(APICredential)
class APICredentialAdmin(admin.ModelAdmin):
    list_display = ['provider', 'has_api_token', 'updated_at']
    search_fields = ['provider']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Provider Information', {
            'fields': ('provider',)
        }),
        ('API Credentials', {
            'fields': ('api_token',)
        }),
        ('Audit Information', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def has_api_token(self, obj):
        """Display whether API token is set."""
        return bool(obj.api_token)
    has_api_token.boolean = True
    has_api_token.short_description = 'Has API Token'
