"""
Role-based permission classes
"""

from rest_framework.permissions import BasePermission

from .models import REVIEWER_ROLES, Role


class HasRole(BasePermission):
    """Grants access when the caller's role is in ``allowed_roles``."""

    allowed_roles = frozenset()
    message = 'Insufficient permissions'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return Role.parse(user.role) in self.allowed_roles


class IsAdminOrHR(HasRole):
    allowed_roles = REVIEWER_ROLES


class IsOwnerOrReviewer(BasePermission):
    """Object access for the owning user or any ADMIN/HR."""

    message = 'You do not have access to this resource'

    def has_object_permission(self, request, view, obj):
        user = request.user
        if user.is_reviewer:
            return True
        return getattr(obj, 'user_id', None) == user.id
