"""
End-to-end onboarding flow over the HTTP API with real bearer tokens:
invite -> first-time login -> profile -> documents -> submit -> approve.
"""

from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from apps.authentication.tokens import issue_token
from apps.core.models import AuditLog
from apps.onboarding.models import EmployeeOnboarding, Invitation

from tests.factories import PDF_BYTES, HRFactory
from tests.test_profile_documents import profile_payload

NEW_PASSWORD = 'N3w-Secure!Pass'


class OnboardingFlowTests(APITestCase):

    def setUp(self):
        self.hr = HRFactory()
        self.hr_client = APIClient()
        self.hr_client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(self.hr)}')
        self.employee_client = APIClient()

    def _upload(self, doc_type, name):
        upload = SimpleUploadedFile(name, PDF_BYTES, content_type='application/pdf')
        return self.employee_client.post(
            '/api/employee/upload-document/', {'document': upload, 'type': doc_type}, format='multipart'
        )

    def test_full_onboarding_flow(self):
        # HR invites
        response = self.hr_client.post(
            '/api/admin/invite-employee/', {'email': 'kiran@example.com', 'name': 'Kiran Rao'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        temp_password = response.data['data']['temp_password']

        # Employee swaps the temporary password
        response = self.employee_client.post(
            '/api/auth/first-time-login/',
            {'email': 'kiran@example.com', 'temp_password': temp_password, 'new_password': NEW_PASSWORD},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.employee_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['data']['token']}")

        # Submitting too early lists what is missing
        response = self.employee_client.post('/api/employee/submit-onboarding/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['type'], 'profile_incomplete')

        response = self.employee_client.put('/api/employee/complete-profile/', profile_payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.employee_client.post('/api/employee/submit-onboarding/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['details']['missing_documents'], ['ID_DOCUMENT', 'RESUME'])

        self.assertEqual(self._upload('ID_DOCUMENT', 'passport.pdf').status_code, status.HTTP_201_CREATED)
        self.assertEqual(self._upload('RESUME', 'resume.pdf').status_code, status.HTTP_201_CREATED)

        response = self.employee_client.post('/api/employee/submit-onboarding/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        onboarding_id = response.data['data']['id']

        # HR sees it in the queue and rejects
        response = self.hr_client.get('/api/admin/pending-approvals/')
        self.assertEqual([row['id'] for row in response.json()['data']], [str(onboarding_id)])

        response = self.hr_client.put(
            f'/api/admin/approve-employee/{onboarding_id}/',
            {'approved': False, 'rejection_reason': 'Resume is outdated'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        # Employee fixes and resubmits, HR approves
        self.assertEqual(self._upload('RESUME', 'resume-2024.pdf').status_code, status.HTTP_201_CREATED)
        response = self.employee_client.post('/api/employee/submit-onboarding/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.hr_client.put(
            f'/api/admin/approve-employee/{onboarding_id}/', {'approved': True}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        # Profile is now read-only
        response = self.employee_client.put(
            '/api/employee/complete-profile/', profile_payload(first_name='Changed'), format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.employee_client.get('/api/employee/profile/')
        data = response.data['data']
        self.assertEqual(data['onboarding']['status'], EmployeeOnboarding.STATUS_APPROVED)
        self.assertEqual(data['profile']['first_name'], 'Asha')
        self.assertEqual(len(data['documents']), 3)
        self.assertTrue(data['user']['is_active'])

        self.assertEqual(Invitation.objects.get(email='kiran@example.com').status, Invitation.STATUS_COMPLETED)
        actions = list(AuditLog.objects.order_by('timestamp').values_list('action', flat=True))
        for action in [
            'INVITE_EMPLOYEE', 'FIRST_TIME_LOGIN', 'UPDATE_PROFILE', 'UPLOAD_DOCUMENT',
            'SUBMIT_ONBOARDING', 'REJECT_EMPLOYEE', 'APPROVE_EMPLOYEE',
        ]:
            self.assertIn(action, actions)
