"""
JWT Authentication with account status checks
"""

import logging

from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.settings import api_settings

from .models import Role

logger = logging.getLogger(__name__)


class RoleAwareJWTAuthentication(JWTAuthentication):
    """
    - Token user must still exist
    - Inactive accounts are rejected, except employees who are still
      going through onboarding
    - The role is always read from the database, never trusted from the token
    """

    def get_user(self, validated_token):
        try:
            user_id = validated_token[api_settings.USER_ID_CLAIM]
        except KeyError:
            raise InvalidToken(_('Token contained no recognizable user identification'))

        try:
            user = self.user_model.objects.get(**{api_settings.USER_ID_FIELD: user_id})
        except (self.user_model.DoesNotExist, ValueError):
            logger.warning("JWT rejected: user %s not found", user_id)
            raise AuthenticationFailed(_('User not found'), code='user_not_found')

        if not user.is_active and user.role_enum != Role.EMPLOYEE:
            logger.warning("JWT rejected: inactive account %s", user.id)
            raise AuthenticationFailed(_('Account is not active'), code='user_inactive')

        return user
