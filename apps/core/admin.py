"""
Core Admin - read-only audit trail
"""

from django.contrib import admin

from .models import AuditLog


class ReadOnlyAdmin(admin.ModelAdmin):
    """Admin for append-only models: browse and search, nothing else."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(AuditLog)
class AuditLogAdmin(ReadOnlyAdmin):
    list_display = ['timestamp', 'user_email', 'action', 'entity_type', 'entity_id', 'ip_address']
    list_filter = ['action', 'entity_type', 'timestamp']
    search_fields = ['user_email', 'entity_id', 'ip_address', 'request_id']
    readonly_fields = [
        'id', 'timestamp', 'user', 'user_email', 'action',
        'entity_type', 'entity_id', 'new_values',
        'ip_address', 'user_agent', 'request_id',
    ]
    ordering = ['-timestamp']
