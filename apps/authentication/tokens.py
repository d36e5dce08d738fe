"""
Access token issuing.

Tokens are simplejwt ``AccessToken`` instances carrying the user id and
role; lifetime comes from ``SIMPLE_JWT['ACCESS_TOKEN_LIFETIME']``.
Verification happens in ``RoleAwareJWTAuthentication``.
"""

from rest_framework_simplejwt.tokens import AccessToken


def issue_token(user) -> str:
    token = AccessToken.for_user(user)
    token['role'] = user.role
    token['email'] = user.email
    return str(token)
