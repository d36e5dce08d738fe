from apps.core.exceptions import ConflictException, ResourceNotFoundException, ValidationException


class DuplicateUser(ConflictException):
    default_code = 'duplicate_user'
    default_message = 'User with this email already exists'


class DuplicateInvitation(ConflictException):
    default_code = 'duplicate_invitation'
    default_message = 'A pending invitation already exists for this email'


class InvitationExpired(ValidationException):
    default_code = 'invitation_expired'
    default_message = 'Invitation has expired. Please contact HR for a new invitation.'


class FirstLoginAlreadyCompleted(ConflictException):
    default_code = 'first_login_completed'
    default_message = 'First-time login already completed'


class InvalidState(ConflictException):
    default_code = 'invalid_state'
    default_message = 'Operation is not allowed in the current onboarding state'


class NoOnboardingRecord(ValidationException):
    """Employee-side operations called before first-time login."""

    default_code = 'onboarding_not_found'
    default_message = 'Onboarding record not found'


class OnboardingNotFound(ResourceNotFoundException):
    default_code = 'onboarding_not_found'

    def __init__(self, onboarding_id=None):
        super().__init__('Onboarding request', onboarding_id)


class ProfileIncomplete(ValidationException):
    default_code = 'profile_incomplete'
    default_message = 'Please complete your profile before submitting'


class MissingDocuments(ValidationException):
    default_code = 'missing_documents'

    def __init__(self, missing_types):
        self.missing_types = list(missing_types)
        super().__init__(
            f"Missing required documents: {', '.join(self.missing_types)}",
            details={'missing_documents': self.missing_types},
        )
