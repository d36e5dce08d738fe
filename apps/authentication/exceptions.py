from apps.core.exceptions import AuthenticationException, ResourceNotFoundException


class InvalidCredential(AuthenticationException):
    default_code = 'invalid_credentials'
    default_message = 'Invalid credentials'


class AccountInactive(AuthenticationException):
    default_code = 'account_inactive'
    default_message = 'Account is not active'


class UserNotFound(ResourceNotFoundException):
    default_code = 'user_not_found'

    def __init__(self):
        super().__init__('User')
