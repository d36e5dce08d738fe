"""
Authentication Admin
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .forms import CustomUserChangeForm, CustomUserCreationForm
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    add_form = CustomUserCreationForm
    form = CustomUserChangeForm
    list_display = ['email', 'name', 'role', 'is_active', 'is_first_login', 'last_login']
    list_filter = ['role', 'is_active', 'is_first_login', 'is_staff', 'is_superuser']
    search_fields = ['email', 'name']
    ordering = ['email']

    fieldsets = (
        (None, {'fields': ('email', 'name', 'password')}),
        ('Access', {'fields': ('role', 'is_active', 'is_first_login', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important dates', {'fields': ('last_login', 'date_joined', 'updated_at')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'name', 'role', 'password1', 'password2', 'is_staff'),
        }),
    )

    readonly_fields = ['last_login', 'date_joined', 'updated_at']
