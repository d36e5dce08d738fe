"""Authentication Services - credential checks"""

from django.utils import timezone

from .audit import log_auth_event
from .exceptions import AccountInactive, InvalidCredential
from .models import User, normalize_email
from .tokens import issue_token


class AuthService:

    @staticmethod
    def login(*, email, password, request=None):
        """
        Verify credentials and issue an access token.

        Unknown email and wrong password fail with the same message so the
        response never reveals which accounts exist.
        """
        email = normalize_email(email)
        user = User.objects.filter(email=email).first()

        if user is None or not user.check_password(password):
            log_auth_event(request=request, action="login", success=False, user=user, email=email,
                           reason="invalid_credentials")
            raise InvalidCredential()

        if not user.is_active:
            log_auth_event(request=request, action="login", success=False, user=user, reason="inactive")
            raise AccountInactive()

        user.last_login = timezone.now()
        user.save(update_fields=['last_login', 'updated_at'])

        log_auth_event(request=request, action="login", success=True, user=user)
        return user, issue_token(user)
