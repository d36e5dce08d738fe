"""Employee Services - profile and document intake"""

import logging

from django.db import transaction

from apps.core.audit import AuditLogger
from apps.core.encryption import encrypt_value, mask_value
from apps.core.upload_validators import validate_upload
from apps.onboarding.exceptions import NoOnboardingRecord
from apps.onboarding.models import EmployeeOnboarding

from .exceptions import DocumentStorageError, InvalidDocumentType, ProfileLocked
from .models import Document, EmployeeProfile

logger = logging.getLogger(__name__)


def protect_bank_details(bank_details):
    """Encrypt the account number and keep its last four digits for display."""
    account_number = str(bank_details.get('account_number', '')).strip()
    return {
        'bank_name': bank_details.get('bank_name', ''),
        'account_number': encrypt_value(account_number),
        'account_number_last4': account_number[-4:],
        'ifsc_code': bank_details.get('ifsc_code', ''),
    }


def _audit_values(data):
    values = dict(data)
    bank = values.get('bank_details')
    if bank:
        values['bank_details'] = {**bank, 'account_number': mask_value(bank.get('account_number', ''))}
    return values


class ProfileService:

    @staticmethod
    def update_profile(*, user, data, request=None):
        """
        Upsert the caller's profile from validated complete-profile data.
        Locked once onboarding is APPROVED.
        """
        with transaction.atomic():
            onboarding = EmployeeOnboarding.objects.select_for_update().filter(user=user).first()
            if onboarding is None:
                raise NoOnboardingRecord()
            if onboarding.is_locked:
                raise ProfileLocked()

            profile, created = EmployeeProfile.objects.get_or_create(user=user)

            for field, value in data.items():
                if field not in EmployeeProfile.EDITABLE_FIELDS:
                    continue
                if field == 'bank_details' and value:
                    value = protect_bank_details(value)
                elif isinstance(value, dict):
                    value = dict(value)
                setattr(profile, field, value)
            profile.save()

            AuditLogger.log(
                action='UPDATE_PROFILE',
                actor=user,
                entity_type='EmployeeProfile',
                entity_id=profile.id,
                new_values=_audit_values(data),
                request=request,
            )

        logger.info("profile_updated user_id=%s created=%s", user.id, created)
        return profile

    @staticmethod
    def get_profile(user):
        return EmployeeProfile.objects.filter(user=user).first()


class DocumentService:

    @staticmethod
    def upload(*, user, document_type, uploaded_file, request=None):
        """
        Validate and store an uploaded file, then record its metadata.
        Several documents of the same type may coexist.
        """
        if document_type not in Document.valid_types():
            raise InvalidDocumentType()

        mime_type = validate_upload(uploaded_file)

        document = Document(
            user=user,
            document_type=document_type,
            file_name=(uploaded_file.name or '')[:255],
            file_size=uploaded_file.size,
            mime_type=mime_type,
        )
        try:
            document.file.save(uploaded_file.name, uploaded_file, save=False)
        except OSError as exc:
            logger.error("document_storage_failed user_id=%s", user.id, exc_info=exc)
            raise DocumentStorageError() from exc

        try:
            with transaction.atomic():
                document.save()
                AuditLogger.log(
                    action='UPLOAD_DOCUMENT',
                    actor=user,
                    entity_type='Document',
                    entity_id=document.id,
                    new_values={
                        'type': document_type,
                        'file_name': document.file_name,
                        'file_size': document.file_size,
                        'mime_type': mime_type,
                    },
                    request=request,
                )
        except Exception:
            # Metadata did not commit; drop the orphaned file
            document.file.delete(save=False)
            raise

        logger.info("document_uploaded user_id=%s document_id=%s type=%s", user.id, document.id, document_type)
        return document

    @staticmethod
    def list_documents(user):
        return Document.objects.filter(user=user).order_by('-created_at')
