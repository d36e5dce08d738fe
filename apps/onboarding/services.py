"""Onboarding Services - Business Logic"""

import logging
import secrets
from datetime import timedelta
from functools import partial

from django.conf import settings
from django.contrib.auth.hashers import make_password
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.authentication.audit import log_auth_event
from apps.authentication.exceptions import InvalidCredential, UserNotFound
from apps.authentication.models import Role, User, normalize_email
from apps.authentication.tokens import issue_token
from apps.core.audit import AuditLogger
from apps.employees.models import Document, EmployeeProfile
from apps.notifications.notifiers import notify_invitation, notify_review_outcome

from .exceptions import (
    DuplicateInvitation,
    DuplicateUser,
    FirstLoginAlreadyCompleted,
    InvalidState,
    InvitationExpired,
    MissingDocuments,
    NoOnboardingRecord,
    OnboardingNotFound,
    ProfileIncomplete,
)
from .models import EmployeeOnboarding, Invitation

logger = logging.getLogger(__name__)


def generate_temp_password():
    """12 url-safe characters from the OS CSPRNG."""
    return secrets.token_urlsafe(9)


class InvitationService:
    """Service class for invitation operations"""

    @staticmethod
    def invite(*, email, name, invited_by, request=None):
        """
        Create (or renew) a placeholder account and a PENDING invitation.

        Returns ``(invitation, temp_password)``. The plaintext password is
        handed to the notifier and the caller, and is never stored.
        """
        email = normalize_email(email)
        temp_password = generate_temp_password()

        try:
            with transaction.atomic():
                invitation = InvitationService._create_invitation(
                    email=email,
                    name=name.strip(),
                    invited_by=invited_by,
                    temp_password=temp_password,
                    request=request,
                )
                transaction.on_commit(partial(notify_invitation, invitation, temp_password))
        except IntegrityError as exc:
            # A concurrent invite for the same email won the race
            logger.warning("invitation_conflict email=%s", email)
            raise DuplicateInvitation() from exc

        logger.info("invitation_created email=%s invitation_id=%s", email, invitation.id)
        return invitation, temp_password

    @staticmethod
    def _create_invitation(*, email, name, invited_by, temp_password, request):
        now = timezone.now()

        user = User.objects.select_for_update().filter(email=email).first()
        pending = list(
            Invitation.objects.select_for_update().filter(email=email, status=Invitation.STATUS_PENDING)
        )

        renewed = user is not None
        if user is not None and not InvitationService._is_renewable(user):
            raise DuplicateUser()
        if any(not invitation.is_expired for invitation in pending):
            raise DuplicateInvitation()

        # Lazily retire stale invitations so the new one can be PENDING
        stale_ids = [invitation.id for invitation in pending]
        if stale_ids:
            Invitation.objects.filter(pk__in=stale_ids).update(status=Invitation.STATUS_EXPIRED, updated_at=now)

        hashed = make_password(temp_password)
        if user is None:
            user = User(email=email, name=name, role=Role.EMPLOYEE, is_active=True, is_first_login=True)
            user.password = hashed
            user.save()
        else:
            user.name = name
            user.password = hashed
            user.is_active = True
            user.save(update_fields=['name', 'password', 'is_active', 'updated_at'])

        invitation = Invitation.objects.create(
            email=email,
            temp_password=hashed,
            status=Invitation.STATUS_PENDING,
            sent_at=now,
            expires_at=now + timedelta(days=settings.INVITATION_EXPIRY_DAYS),
            invited_by=invited_by,
            user=user,
        )

        AuditLogger.log(
            action='INVITE_EMPLOYEE',
            actor=invited_by,
            entity_type='User',
            entity_id=user.id,
            new_values={
                'email': email,
                'name': name,
                'invited_by': str(invited_by.id),
                'invitation_id': str(invitation.id),
                'expires_at': invitation.expires_at,
                'renewed': renewed,
                'expired_invitations': [str(pk) for pk in stale_ids],
            },
            request=request,
        )
        return invitation

    @staticmethod
    def _is_renewable(user):
        """A placeholder that never logged in and whose invitations all lapsed."""
        if not user.is_first_login or user.role != Role.EMPLOYEE:
            return False
        invitations = list(user.invitations.all())
        return bool(invitations) and all(invitation.is_expired for invitation in invitations)

    @staticmethod
    def list_invitations():
        return Invitation.objects.select_related('invited_by', 'user').order_by('-created_at')

    @staticmethod
    def expire_stale_invitations():
        """Flip every overdue PENDING invitation to EXPIRED. Returns the count."""
        now = timezone.now()
        with transaction.atomic():
            stale = list(
                Invitation.objects.select_for_update()
                .filter(status=Invitation.STATUS_PENDING, expires_at__lt=now)
                .values_list('id', 'email')
            )
            if not stale:
                return 0
            Invitation.objects.filter(pk__in=[pk for pk, _ in stale]).update(
                status=Invitation.STATUS_EXPIRED, updated_at=now
            )
            for pk, email in stale:
                AuditLogger.log(
                    action='EXPIRE_INVITATION',
                    actor=None,
                    entity_type='Invitation',
                    entity_id=pk,
                    new_values={'email': email, 'status': Invitation.STATUS_EXPIRED},
                )

        logger.info("invitations_expired count=%s", len(stale))
        return len(stale)


class OnboardingService:
    """Service class for onboarding operations"""

    @staticmethod
    def complete_first_login(*, email, temp_password, new_password, request=None):
        """
        Replace the temporary password, complete the invitation and open an
        onboarding record (with an empty profile) for the employee.

        Returns ``(user, token)``.
        """
        email = normalize_email(email)
        now = timezone.now()

        with transaction.atomic():
            user = User.objects.select_for_update().filter(email=email).first()
            if user is None:
                raise UserNotFound()
            if not user.is_first_login:
                raise FirstLoginAlreadyCompleted()
            if not user.check_password(temp_password):
                log_auth_event(request=request, action="first_time_login", success=False, user=user,
                               reason="invalid_temp_password")
                raise InvalidCredential('Invalid temporary password')

            invitation = user.invitations.select_for_update().order_by('-created_at').first()
            if invitation is not None and invitation.is_expired:
                raise InvitationExpired()

            user.set_password(new_password)
            user.is_first_login = False
            user.save(update_fields=['password', 'is_first_login', 'updated_at'])

            if invitation is not None and invitation.status == Invitation.STATUS_PENDING:
                invitation.status = Invitation.STATUS_COMPLETED
                invitation.completed_at = now
                invitation.save(update_fields=['status', 'completed_at', 'updated_at'])

            profile, _ = EmployeeProfile.objects.get_or_create(user=user)
            onboarding, _ = EmployeeOnboarding.objects.get_or_create(
                user=user,
                defaults={'status': EmployeeOnboarding.STATUS_PENDING},
            )

            AuditLogger.log(
                action='FIRST_TIME_LOGIN',
                actor=user,
                entity_type='User',
                entity_id=user.id,
                new_values={
                    'password_changed': True,
                    'invitation_id': str(invitation.id) if invitation else None,
                    'profile_id': str(profile.id),
                    'onboarding_id': str(onboarding.id),
                },
                request=request,
            )

        log_auth_event(request=request, action="first_time_login", success=True, user=user)
        return user, issue_token(user)

    @staticmethod
    def submit(*, user, request=None):
        """
        Move the caller's onboarding to SUBMITTED once the profile names
        are filled in and every required document type is on file.
        """
        now = timezone.now()

        with transaction.atomic():
            onboarding = EmployeeOnboarding.objects.select_for_update().filter(user=user).first()
            if onboarding is None:
                raise NoOnboardingRecord()
            if onboarding.status not in EmployeeOnboarding.SUBMITTABLE_STATUSES:
                raise InvalidState('Onboarding has already been approved')

            profile = EmployeeProfile.objects.filter(user=user).first()
            if profile is None or not profile.is_complete:
                raise ProfileIncomplete()

            present = set(
                Document.objects.filter(user=user).values_list('document_type', flat=True)
            )
            missing = [doc_type for doc_type in Document.REQUIRED_TYPES if doc_type not in present]
            if missing:
                raise MissingDocuments(missing)

            previous_status = onboarding.status
            onboarding.status = EmployeeOnboarding.STATUS_SUBMITTED
            onboarding.submitted_at = now
            if previous_status == EmployeeOnboarding.STATUS_REJECTED:
                onboarding.rejected_at = None
                onboarding.rejection_reason = ''
            onboarding.save()

            AuditLogger.log(
                action='SUBMIT_ONBOARDING',
                actor=user,
                entity_type='EmployeeOnboarding',
                entity_id=onboarding.id,
                new_values={
                    'status': onboarding.status,
                    'previous_status': previous_status,
                    'submitted_at': now,
                },
                request=request,
            )

        logger.info("onboarding_submitted onboarding_id=%s previous=%s", onboarding.id, previous_status)
        return onboarding

    @staticmethod
    def review(*, onboarding_id, approved, reviewer, notes=None, rejection_reason=None, request=None):
        """
        Approve or reject a SUBMITTED onboarding.

        The status check and the write happen in one conditional UPDATE, so
        of two concurrent reviews exactly one succeeds.
        """
        now = timezone.now()
        if approved:
            changes = {
                'status': EmployeeOnboarding.STATUS_APPROVED,
                'approved_at': now,
                'rejected_at': None,
                'rejection_reason': '',
            }
        else:
            changes = {
                'status': EmployeeOnboarding.STATUS_REJECTED,
                'rejected_at': now,
                'approved_at': None,
                'rejection_reason': rejection_reason or '',
            }
        changes.update(reviewed_by=reviewer, notes=notes or '', updated_at=now)

        with transaction.atomic():
            updated = EmployeeOnboarding.objects.filter(
                pk=onboarding_id,
                status=EmployeeOnboarding.STATUS_SUBMITTED,
            ).update(**changes)

            if not updated:
                if not EmployeeOnboarding.objects.filter(pk=onboarding_id).exists():
                    raise OnboardingNotFound(onboarding_id)
                raise InvalidState('Onboarding request is not in submitted status')

            if approved:
                user_id = EmployeeOnboarding.objects.values_list('user_id', flat=True).get(pk=onboarding_id)
                User.objects.filter(pk=user_id).update(
                    is_active=True, is_first_login=False, updated_at=now
                )
            onboarding = EmployeeOnboarding.objects.select_related('user', 'reviewed_by').get(pk=onboarding_id)

            AuditLogger.log(
                action='APPROVE_EMPLOYEE' if approved else 'REJECT_EMPLOYEE',
                actor=reviewer,
                entity_type='EmployeeOnboarding',
                entity_id=onboarding.id,
                new_values={
                    'approved': approved,
                    'status': onboarding.status,
                    'notes': onboarding.notes,
                    'rejection_reason': onboarding.rejection_reason,
                    'reviewed_by': str(reviewer.id),
                    'user_id': str(onboarding.user_id),
                },
                request=request,
            )
            transaction.on_commit(partial(notify_review_outcome, onboarding))

        logger.info("onboarding_reviewed onboarding_id=%s status=%s", onboarding.id, onboarding.status)
        return onboarding

    @staticmethod
    def pending_approvals():
        return (
            EmployeeOnboarding.objects.filter(status=EmployeeOnboarding.STATUS_SUBMITTED)
            .select_related('user', 'user__profile')
            .prefetch_related('user__documents')
            .order_by('-submitted_at')
        )

    @staticmethod
    def get_for_user(user):
        return EmployeeOnboarding.objects.filter(user=user).select_related('reviewed_by').first()
