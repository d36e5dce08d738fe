from apps.core.exceptions import ConflictException, InternalServiceException, ValidationException

from .models import Document


class ProfileLocked(ConflictException):
    default_code = 'profile_locked'
    default_message = 'Cannot update profile after approval'


class InvalidDocumentType(ValidationException):
    default_code = 'invalid_document_type'
    default_message = 'Invalid document type'

    def __init__(self, message=None):
        allowed = sorted(Document.valid_types())
        super().__init__(message, field='type', details={'type': [message or self.default_message], 'allowed': allowed})


class DocumentStorageError(InternalServiceException):
    default_code = 'storage_error'
