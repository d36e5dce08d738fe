"""
Custom Exception Handler for DRF
"""

from rest_framework.views import exception_handler, set_rollback
from rest_framework.response import Response
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, NotAuthenticated, PermissionDenied, Throttled
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
import logging

logger = logging.getLogger(__name__)
security_logger = logging.getLogger("security.audit")


# ============================================================================
# SERVICE EXCEPTIONS
# ============================================================================

class ServiceException(Exception):
    """Base exception raised by the service layer"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = 'error'
    default_message = 'An error occurred.'

    def __init__(self, message=None, code=None, details=None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(ServiceException):
    """Validation error exception"""

    default_code = 'validation_error'
    default_message = 'Validation failed.'

    def __init__(self, message=None, field=None, code=None, details=None):
        if field and details is None:
            details = {field: [message or self.default_message]}
        super().__init__(message, code=code, details=details)
        self.field = field


class AuthenticationException(ServiceException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = 'authentication_failed'
    default_message = 'Authentication failed.'


class ResourceNotFoundException(ServiceException):
    """Resource not found exception"""

    status_code = status.HTTP_404_NOT_FOUND
    default_code = 'not_found'

    def __init__(self, resource_type='Resource', resource_id=None):
        message = f"{resource_type} not found"
        if resource_id:
            message = f"{resource_type} with ID {resource_id} not found"
        super().__init__(message)


class ConflictException(ServiceException):
    """State conflict (duplicate resource, wrong lifecycle state)"""

    default_code = 'conflict'
    default_message = 'The request conflicts with the current state of the resource.'


class InternalServiceException(ServiceException):
    """Unexpected failure; the caller only ever sees the generic message"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = 'internal_error'
    default_message = 'An unexpected error occurred.'


class FileTooLarge(ValidationException):
    default_code = 'file_too_large'
    default_message = 'File too large.'


class UnsupportedFormat(ValidationException):
    default_code = 'unsupported_format'
    default_message = 'Only images (JPEG, PNG), PDF and Word documents are allowed.'


# ============================================================================
# HANDLER
# ============================================================================

def custom_exception_handler(exc, context):
    """
    Custom exception handler that provides consistent error responses.
    """
    if isinstance(exc, ServiceException):
        set_rollback()
        return _service_exception_response(exc, context)

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        _log_security_event(exc, context, response.status_code)
        # Customize the response format
        custom_response_data = {
            'success': False,
            'error': {
                'code': response.status_code,
                'message': get_error_message(response.data),
                'details': response.data if isinstance(response.data, dict) else {'detail': response.data},
            }
        }
        response.data = custom_response_data
        return response

    set_rollback()

    # Handle Django ValidationError
    if isinstance(exc, DjangoValidationError):
        logger.warning("Validation error: %s", exc)
        return Response(
            {
                'success': False,
                'error': {
                    'code': 400,
                    'message': 'Validation Error',
                    'details': {'validation_errors': exc.messages if hasattr(exc, 'messages') else [str(exc)]},
                }
            },
            status=status.HTTP_400_BAD_REQUEST
        )

    # Handle 404
    if isinstance(exc, Http404):
        return Response(
            {
                'success': False,
                'error': {
                    'code': 404,
                    'message': 'Not Found',
                    'details': {'detail': str(exc)},
                }
            },
            status=status.HTTP_404_NOT_FOUND
        )

    # Log unexpected exceptions
    logger.exception("Unexpected error: %s", exc)

    # Return generic error for unexpected exceptions
    return _generic_server_error()


def _service_exception_response(exc, context):
    if exc.status_code >= 500:
        logger.error("service_failure code=%s message=%s", exc.code, exc.message, exc_info=exc)
        return _generic_server_error()

    _log_security_event(exc, context, exc.status_code)
    logger.info("service_rejected code=%s status=%s message=%s", exc.code, exc.status_code, exc.message)
    return Response(
        {
            'success': False,
            'error': {
                'code': exc.status_code,
                'type': exc.code,
                'message': exc.message,
                'details': exc.details,
            }
        },
        status=exc.status_code,
    )


def _generic_server_error():
    return Response(
        {
            'success': False,
            'error': {
                'code': 500,
                'message': 'Internal Server Error',
                'details': {'detail': 'An unexpected error occurred.'},
            }
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def _log_security_event(exc, context, status_code):
    if status_code not in (401, 403, 429):
        return

    request = context.get("request")
    if request is None:
        return

    user = getattr(request, "user", None)
    user_id = getattr(user, "id", None) if user and getattr(user, "is_authenticated", False) else None
    exc_name = exc.__class__.__name__
    if isinstance(exc, (AuthenticationFailed, NotAuthenticated, AuthenticationException)):
        event_type = "auth_failed"
    elif isinstance(exc, PermissionDenied):
        event_type = "permission_denied"
    elif isinstance(exc, Throttled):
        event_type = "throttled"
    else:
        event_type = "security_event"

    security_logger.warning(
        "api_security_event type=%s status=%s method=%s path=%s user_id=%s ip=%s error=%s",
        event_type,
        status_code,
        request.method,
        request.path,
        user_id,
        request.META.get("REMOTE_ADDR"),
        exc_name,
    )


def get_error_message(data):
    """Extract a user-friendly error message from response data"""
    if isinstance(data, dict):
        if 'detail' in data:
            return str(data['detail'])
        if 'non_field_errors' in data:
            return str(data['non_field_errors'][0])
        # Get first error message
        for key, value in data.items():
            if isinstance(value, list) and value:
                return f"{key}: {value[0]}"
            elif isinstance(value, str):
                return f"{key}: {value}"
            elif isinstance(value, dict) and value:
                return f"{key}: {get_error_message(value)}"
    elif isinstance(data, list) and data:
        return str(data[0])
    return str(data)
