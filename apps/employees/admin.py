"""Employee Admin Configuration"""

from django.contrib import admin

from .models import Document, EmployeeProfile


@admin.register(EmployeeProfile)
class EmployeeProfileAdmin(admin.ModelAdmin):
    list_display = ['employee_id', 'full_name', 'user', 'department', 'position', 'join_date']
    list_filter = ['department', 'contract_type', 'work_location']
    search_fields = ['employee_id', 'first_name', 'last_name', 'user__email']
    readonly_fields = ['employee_id', 'bank_details', 'created_at', 'updated_at']
    fieldsets = (
        (None, {'fields': ('user', 'employee_id')}),
        ('Personal', {'fields': ('first_name', 'middle_name', 'last_name', 'date_of_birth', 'gender',
                                 'marital_status', 'nationality')}),
        ('Contact', {'fields': ('phone', 'alternate_phone', 'personal_email', 'current_address',
                                'permanent_address', 'emergency_contact')}),
        ('Employment', {'fields': ('department', 'position', 'join_date', 'contract_type', 'work_location')}),
        ('Banking', {'fields': ('bank_details',)}),
        ('Timestamps', {'fields': ('created_at', 'updated_at')}),
    )


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ['file_name', 'document_type', 'user', 'file_size', 'mime_type', 'created_at']
    list_filter = ['document_type', 'mime_type']
    search_fields = ['file_name', 'user__email']
    readonly_fields = ['file_size', 'mime_type', 'created_at', 'updated_at']
