"""Notifier backends and the email task."""

from unittest.mock import patch

from django.core import mail
from django.test import TestCase, override_settings

from apps.notifications.notifiers import (
    EmailNotifier,
    LogNotifier,
    get_notifier,
    notify_invitation,
    notify_review_outcome,
)
from apps.onboarding.models import EmployeeOnboarding

from tests.factories import EmployeeOnboardingFactory, InvitationFactory, TEMP_PASSWORD


class NotifierSelectionTests(TestCase):

    def test_log_notifier_is_default_in_tests(self):
        self.assertIsInstance(get_notifier(), LogNotifier)

    @override_settings(NOTIFIER_BACKEND='apps.notifications.notifiers.EmailNotifier')
    def test_backend_comes_from_settings(self):
        self.assertIsInstance(get_notifier(), EmailNotifier)


class LogNotifierTests(TestCase):

    def test_invitation_log_never_contains_password(self):
        invitation = InvitationFactory()

        with self.assertLogs('apps.notifications.notifiers', level='INFO') as logs:
            LogNotifier().send_invitation(invitation, TEMP_PASSWORD)

        output = '\n'.join(logs.output)
        self.assertIn(invitation.email, output)
        self.assertNotIn(TEMP_PASSWORD, output)


@override_settings(
    NOTIFIER_BACKEND='apps.notifications.notifiers.EmailNotifier',
    COMPANY_NAME='Acme',
    FRONTEND_URL='https://hr.acme.test/',
)
class EmailNotifierTests(TestCase):

    def test_invitation_email(self):
        invitation = InvitationFactory(user__name='Priya')

        notify_invitation(invitation, TEMP_PASSWORD)

        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.to, [invitation.email])
        self.assertIn('Acme', message.subject)
        self.assertIn(TEMP_PASSWORD, message.body)
        self.assertIn('https://hr.acme.test/first-time-login', message.body)
        self.assertEqual(message.alternatives[0][1], 'text/html')

    def test_approval_email(self):
        onboarding = EmployeeOnboardingFactory(status=EmployeeOnboarding.STATUS_APPROVED)

        notify_review_outcome(onboarding)

        self.assertEqual(len(mail.outbox), 1)
        self.assertIn('approved', mail.outbox[0].subject)

    def test_rejection_email_carries_reason(self):
        onboarding = EmployeeOnboardingFactory(
            status=EmployeeOnboarding.STATUS_REJECTED,
            rejection_reason='Upload a clearer passport scan',
        )

        notify_review_outcome(onboarding)

        self.assertEqual(len(mail.outbox), 1)
        self.assertIn('Upload a clearer passport scan', mail.outbox[0].body)

    def test_delivery_is_logged_with_message_kind(self):
        onboarding = EmployeeOnboardingFactory(status=EmployeeOnboarding.STATUS_REJECTED)

        with self.assertLogs('apps.notifications.tasks', level='INFO') as logs:
            notify_review_outcome(onboarding)

        self.assertIn('kind=onboarding_rejected', logs.output[0])
        self.assertIn(onboarding.user.email, logs.output[0])

    def test_delivery_failure_is_logged_not_raised(self):
        invitation = InvitationFactory()

        with patch.object(EmailNotifier, 'send_invitation', side_effect=RuntimeError('smtp down')):
            with self.assertLogs('apps.notifications.notifiers', level='ERROR'):
                notify_invitation(invitation, TEMP_PASSWORD)

        self.assertEqual(len(mail.outbox), 0)
