"""Onboarding Admin Configuration"""

from django.contrib import admin

from .models import EmployeeOnboarding, Invitation


@admin.register(Invitation)
class InvitationAdmin(admin.ModelAdmin):
    list_display = ['email', 'status', 'sent_at', 'expires_at', 'completed_at', 'invited_by']
    list_filter = ['status']
    search_fields = ['email']
    readonly_fields = ['temp_password', 'sent_at', 'completed_at', 'created_at', 'updated_at']
    ordering = ['-created_at']


@admin.register(EmployeeOnboarding)
class EmployeeOnboardingAdmin(admin.ModelAdmin):
    list_display = ['user', 'status', 'submitted_at', 'approved_at', 'rejected_at', 'reviewed_by']
    list_filter = ['status']
    search_fields = ['user__email', 'user__name']
    readonly_fields = ['submitted_at', 'approved_at', 'rejected_at', 'reviewed_by', 'created_at', 'updated_at']
