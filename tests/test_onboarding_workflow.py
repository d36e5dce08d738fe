"""
Onboarding workflow tests
=========================
Submission gating, ADMIN/HR review and the pending-approvals queue.
"""

import uuid
from unittest.mock import patch

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from apps.core.models import AuditLog
from apps.employees.models import Document
from apps.onboarding.exceptions import (
    InvalidState,
    MissingDocuments,
    NoOnboardingRecord,
    OnboardingNotFound,
    ProfileIncomplete,
)
from apps.onboarding.models import EmployeeOnboarding
from apps.onboarding.services import OnboardingService

from tests.factories import (
    AdminFactory,
    DocumentFactory,
    EmployeeOnboardingFactory,
    EmployeeProfileFactory,
    HRFactory,
    UserFactory,
)

SUBMIT_URL = '/api/employee/submit-onboarding/'
PENDING_URL = '/api/admin/pending-approvals/'


def review_url(onboarding_id):
    return f'/api/admin/approve-employee/{onboarding_id}/'


def ready_employee(status=EmployeeOnboarding.STATUS_PENDING):
    """An employee with a complete profile and every required document."""
    user = UserFactory(is_active=False)
    EmployeeProfileFactory(user=user)
    DocumentFactory(user=user, document_type=Document.TYPE_ID_DOCUMENT)
    DocumentFactory(user=user, document_type=Document.TYPE_RESUME, file_name='cv.pdf')
    onboarding = EmployeeOnboardingFactory(user=user, status=status)
    return user, onboarding


class SubmitOnboardingServiceTests(TestCase):

    def test_submit_moves_to_submitted(self):
        user, onboarding = ready_employee()

        result = OnboardingService.submit(user=user)

        self.assertEqual(result.status, EmployeeOnboarding.STATUS_SUBMITTED)
        self.assertIsNotNone(result.submitted_at)
        entry = AuditLog.objects.get(action='SUBMIT_ONBOARDING')
        self.assertEqual(entry.entity_id, str(onboarding.id))
        self.assertEqual(entry.new_values['previous_status'], EmployeeOnboarding.STATUS_PENDING)

    def test_submit_without_record(self):
        with self.assertRaises(NoOnboardingRecord):
            OnboardingService.submit(user=UserFactory())

    def test_submit_with_incomplete_profile(self):
        user = UserFactory()
        EmployeeProfileFactory(user=user, last_name='  ')
        EmployeeOnboardingFactory(user=user)

        with self.assertRaises(ProfileIncomplete):
            OnboardingService.submit(user=user)

    def test_submit_without_profile(self):
        user = UserFactory()
        EmployeeOnboardingFactory(user=user)

        with self.assertRaises(ProfileIncomplete):
            OnboardingService.submit(user=user)

    def test_submit_reports_every_missing_document_type(self):
        user = UserFactory()
        EmployeeProfileFactory(user=user)
        EmployeeOnboardingFactory(user=user)

        with self.assertRaises(MissingDocuments) as ctx:
            OnboardingService.submit(user=user)

        self.assertEqual(ctx.exception.missing_types, [Document.TYPE_ID_DOCUMENT, Document.TYPE_RESUME])
        self.assertIn('ID_DOCUMENT', ctx.exception.message)

    def test_submit_reports_single_missing_type(self):
        user = UserFactory()
        EmployeeProfileFactory(user=user)
        DocumentFactory(user=user, document_type=Document.TYPE_ID_DOCUMENT)
        EmployeeOnboardingFactory(user=user)

        with self.assertRaises(MissingDocuments) as ctx:
            OnboardingService.submit(user=user)

        self.assertEqual(ctx.exception.missing_types, [Document.TYPE_RESUME])

    def test_resubmission_while_submitted_is_allowed(self):
        user, _ = ready_employee(status=EmployeeOnboarding.STATUS_SUBMITTED)

        result = OnboardingService.submit(user=user)

        self.assertEqual(result.status, EmployeeOnboarding.STATUS_SUBMITTED)

    def test_resubmission_after_rejection_clears_rejection(self):
        user, onboarding = ready_employee(status=EmployeeOnboarding.STATUS_REJECTED)
        onboarding.rejection_reason = 'Blurry ID'
        onboarding.save()

        result = OnboardingService.submit(user=user)

        self.assertEqual(result.status, EmployeeOnboarding.STATUS_SUBMITTED)
        self.assertEqual(result.rejection_reason, '')
        self.assertIsNone(result.rejected_at)

    def test_approved_onboarding_cannot_be_resubmitted(self):
        user, _ = ready_employee(status=EmployeeOnboarding.STATUS_APPROVED)

        with self.assertRaises(InvalidState):
            OnboardingService.submit(user=user)


class SubmitOnboardingAPITests(APITestCase):

    def setUp(self):
        self.client = APIClient()

    def test_submit_endpoint(self):
        user, _ = ready_employee()
        self.client.force_authenticate(user=user)

        response = self.client.post(SUBMIT_URL)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Onboarding submitted for review')
        self.assertEqual(response.data['data']['status'], EmployeeOnboarding.STATUS_SUBMITTED)

    def test_missing_documents_listed_in_error(self):
        user = UserFactory()
        EmployeeProfileFactory(user=user)
        EmployeeOnboardingFactory(user=user)
        self.client.force_authenticate(user=user)

        response = self.client.post(SUBMIT_URL)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data['error']['details']['missing_documents'],
            [Document.TYPE_ID_DOCUMENT, Document.TYPE_RESUME],
        )

    def test_no_record_is_400(self):
        self.client.force_authenticate(user=UserFactory())
        response = self.client.post(SUBMIT_URL)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['message'], 'Onboarding record not found')


class ReviewOnboardingServiceTests(TestCase):

    def setUp(self):
        self.reviewer = HRFactory()
        self.user, self.onboarding = ready_employee(status=EmployeeOnboarding.STATUS_SUBMITTED)

    def test_approve_activates_user(self):
        result = OnboardingService.review(
            onboarding_id=self.onboarding.id, approved=True, reviewer=self.reviewer, notes='Welcome'
        )

        self.assertEqual(result.status, EmployeeOnboarding.STATUS_APPROVED)
        self.assertIsNotNone(result.approved_at)
        self.assertEqual(result.reviewed_by, self.reviewer)
        self.assertEqual(result.notes, 'Welcome')
        self.user.refresh_from_db()
        self.assertTrue(self.user.is_active)
        self.assertFalse(self.user.is_first_login)

        entry = AuditLog.objects.get(action='APPROVE_EMPLOYEE')
        self.assertEqual(entry.user, self.reviewer)
        self.assertEqual(entry.entity_type, 'EmployeeOnboarding')

    def test_reject_records_reason_and_keeps_user(self):
        result = OnboardingService.review(
            onboarding_id=self.onboarding.id,
            approved=False,
            reviewer=self.reviewer,
            rejection_reason='Resume missing signature',
        )

        self.assertEqual(result.status, EmployeeOnboarding.STATUS_REJECTED)
        self.assertEqual(result.rejection_reason, 'Resume missing signature')
        self.assertIsNotNone(result.rejected_at)
        self.assertIsNone(result.approved_at)
        self.user.refresh_from_db()
        self.assertFalse(self.user.is_active)
        self.assertTrue(AuditLog.objects.filter(action='REJECT_EMPLOYEE').exists())

    def test_only_submitted_onboarding_can_be_reviewed(self):
        OnboardingService.review(onboarding_id=self.onboarding.id, approved=True, reviewer=self.reviewer)

        with self.assertRaises(InvalidState):
            OnboardingService.review(onboarding_id=self.onboarding.id, approved=False, reviewer=self.reviewer)

        self.onboarding.refresh_from_db()
        self.assertEqual(self.onboarding.status, EmployeeOnboarding.STATUS_APPROVED)
        self.assertEqual(AuditLog.objects.filter(action__in=['APPROVE_EMPLOYEE', 'REJECT_EMPLOYEE']).count(), 1)

    def test_stale_review_loses_to_concurrent_decision(self):
        # Another reviewer approves after this one read the row as SUBMITTED
        EmployeeOnboarding.objects.filter(pk=self.onboarding.pk).update(status=EmployeeOnboarding.STATUS_APPROVED)
        self.assertEqual(self.onboarding.status, EmployeeOnboarding.STATUS_SUBMITTED)

        with patch('apps.onboarding.services.notify_review_outcome') as notify:
            with self.captureOnCommitCallbacks(execute=True):
                with self.assertRaises(InvalidState):
                    OnboardingService.review(
                        onboarding_id=self.onboarding.id,
                        approved=False,
                        reviewer=self.reviewer,
                        rejection_reason='Too late',
                    )

        notify.assert_not_called()
        self.onboarding.refresh_from_db()
        self.assertEqual(self.onboarding.status, EmployeeOnboarding.STATUS_APPROVED)
        self.assertEqual(self.onboarding.rejection_reason, '')
        self.assertIsNone(self.onboarding.reviewed_by)
        self.assertFalse(AuditLog.objects.filter(action__in=['APPROVE_EMPLOYEE', 'REJECT_EMPLOYEE']).exists())

    def test_pending_onboarding_cannot_be_reviewed(self):
        _, pending = ready_employee()

        with self.assertRaises(InvalidState):
            OnboardingService.review(onboarding_id=pending.id, approved=True, reviewer=self.reviewer)

    def test_unknown_onboarding(self):
        with self.assertRaises(OnboardingNotFound):
            OnboardingService.review(onboarding_id=uuid.uuid4(), approved=True, reviewer=self.reviewer)

    def test_review_notification_runs_after_commit(self):
        with patch('apps.onboarding.services.notify_review_outcome') as notify:
            with self.captureOnCommitCallbacks(execute=True):
                result = OnboardingService.review(
                    onboarding_id=self.onboarding.id, approved=True, reviewer=self.reviewer
                )

        notify.assert_called_once_with(result)


class ReviewOnboardingAPITests(APITestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = AdminFactory()
        self.user, self.onboarding = ready_employee(status=EmployeeOnboarding.STATUS_SUBMITTED)

    def test_admin_approves(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.put(review_url(self.onboarding.id), {'approved': True, 'notes': 'ok'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Employee approved successfully')
        self.assertEqual(response.data['data']['status'], EmployeeOnboarding.STATUS_APPROVED)

    def test_hr_rejects(self):
        self.client.force_authenticate(user=HRFactory())

        response = self.client.put(
            review_url(self.onboarding.id),
            {'approved': False, 'rejection_reason': 'Wrong ID'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Employee rejected successfully')
        self.assertEqual(response.data['data']['rejection_reason'], 'Wrong ID')

    def test_reviewing_twice_is_400(self):
        self.client.force_authenticate(user=self.admin)
        self.client.put(review_url(self.onboarding.id), {'approved': True}, format='json')

        response = self.client.put(review_url(self.onboarding.id), {'approved': False}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['message'], 'Onboarding request is not in submitted status')

    def test_unknown_onboarding_is_404(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.put(review_url(uuid.uuid4()), {'approved': True}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_missing_decision_is_400(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.put(review_url(self.onboarding.id), {'notes': 'hm'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('approved', response.data['error']['details'])

    def test_employee_cannot_review(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.put(review_url(self.onboarding.id), {'approved': True}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class PendingApprovalsAPITests(APITestCase):

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(user=HRFactory())

    def test_lists_only_submitted_onboardings_with_details(self):
        submitted_user, submitted = ready_employee(status=EmployeeOnboarding.STATUS_SUBMITTED)
        ready_employee()
        ready_employee(status=EmployeeOnboarding.STATUS_APPROVED)

        response = self.client.get(PENDING_URL)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        rows = response.json()['data']
        self.assertEqual(len(rows), 1)
        row = rows[0]
        self.assertEqual(row['id'], str(submitted.id))
        self.assertEqual(row['user']['email'], submitted_user.email)
        self.assertEqual(row['profile']['first_name'], 'Asha')
        self.assertEqual(len(row['documents']), 2)

    def test_employee_cannot_see_queue(self):
        self.client.force_authenticate(user=UserFactory())
        response = self.client.get(PENDING_URL)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
