"""Admin account management commands."""

from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from apps.authentication.models import Role, User
from apps.core.models import AuditLog
from apps.employees.models import EmployeeProfile

from tests.factories import AdminFactory, UserFactory


class CreateAdminCommandTests(TestCase):

    def test_creates_admin_with_profile(self):
        out = StringIO()
        call_command('create_admin', '--email', 'root@example.com', '--password', 'R00t-Secure!', stdout=out)

        admin = User.objects.get(email='root@example.com')
        self.assertEqual(admin.role, Role.ADMIN)
        self.assertTrue(admin.is_superuser)
        self.assertFalse(admin.is_first_login)
        self.assertTrue(admin.check_password('R00t-Secure!'))

        profile = EmployeeProfile.objects.get(user=admin)
        self.assertEqual(profile.employee_id, 'ADM001')
        self.assertEqual(profile.department, 'IT')
        self.assertIn('Successfully created ADMIN', out.getvalue())

        entry = AuditLog.objects.get(action='CREATE_ADMIN')
        self.assertEqual(entry.entity_id, str(admin.id))
        self.assertIsNone(entry.user)
        self.assertTrue(entry.new_values['profile_created'])

    def test_promotes_existing_user(self):
        UserFactory(email='promote@example.com')

        call_command('create_admin', '--email', 'promote@example.com', stdout=StringIO())

        user = User.objects.get(email='promote@example.com')
        self.assertEqual(user.role, Role.ADMIN)
        self.assertTrue(user.is_staff)

        entry = AuditLog.objects.get(action='PROMOTE_ADMIN', entity_id=str(user.id))
        self.assertEqual(entry.new_values['previous_role'], Role.EMPLOYEE)

    def test_is_idempotent(self):
        call_command('create_admin', stdout=StringIO())
        out = StringIO()
        call_command('create_admin', stdout=out)

        self.assertEqual(User.objects.filter(role=Role.ADMIN).count(), 1)
        self.assertIn('already an ADMIN', out.getvalue())
        self.assertEqual(AuditLog.objects.filter(action__in=['CREATE_ADMIN', 'PROMOTE_ADMIN']).count(), 1)


class ChangeAdminPasswordCommandTests(TestCase):

    def test_changes_password_and_audits(self):
        admin = AdminFactory(email='boss@example.com')

        call_command('change_admin_password', '--email', 'boss@example.com', '--password', 'Fresh-Secur3!', stdout=StringIO())

        admin.refresh_from_db()
        self.assertTrue(admin.check_password('Fresh-Secur3!'))
        self.assertTrue(AuditLog.objects.filter(action='CHANGE_ADMIN_PASSWORD', entity_id=str(admin.id)).exists())

    def test_rejects_weak_password(self):
        AdminFactory(email='boss@example.com')

        with self.assertRaises(CommandError):
            call_command('change_admin_password', '--email', 'boss@example.com', '--password', '123', stdout=StringIO())

    def test_unknown_admin(self):
        UserFactory(email='worker@example.com')

        with self.assertRaises(CommandError):
            call_command('change_admin_password', '--email', 'worker@example.com', '--password', 'Fresh-Secur3!')


class UpdateAdminEmailCommandTests(TestCase):

    def test_moves_email(self):
        admin = AdminFactory(email='old@example.com')

        call_command('update_admin_email', '--old-email', 'old@example.com', '--new-email', 'New@Example.com', stdout=StringIO())

        admin.refresh_from_db()
        self.assertEqual(admin.email, 'new@example.com')
        entry = AuditLog.objects.get(action='UPDATE_ADMIN_EMAIL')
        self.assertEqual(entry.new_values, {'old_email': 'old@example.com', 'new_email': 'new@example.com'})

    def test_refuses_taken_email(self):
        AdminFactory(email='old@example.com')
        UserFactory(email='taken@example.com')

        with self.assertRaises(CommandError):
            call_command('update_admin_email', '--old-email', 'old@example.com', '--new-email', 'taken@example.com')
