"""
Management command to seed the initial ADMIN account
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.authentication.models import Role, User, normalize_email
from apps.core.audit import AuditLogger
from apps.employees.models import EmployeeProfile


class Command(BaseCommand):
    help = 'Create (or promote) the ADMIN account with an employee profile'

    def add_arguments(self, parser):
        parser.add_argument('--email', type=str, default='admin@intelliod.com', help='Admin email')
        parser.add_argument('--password', type=str, default='Admin@123', help='Admin password')
        parser.add_argument('--name', type=str, default='System Administrator', help='Display name')
        parser.add_argument('--employee-id', type=str, default='ADM001', help='Employee ID for the admin profile')

    @transaction.atomic
    def handle(self, *args, **options):
        email = normalize_email(options['email'])
        password = options['password']
        action = None

        user = User.objects.filter(email=email).first()
        if user is not None:
            self.stdout.write(self.style.WARNING(f'User with email {email} already exists.'))
            if user.role != Role.ADMIN or not user.is_superuser:
                previous_role = user.role
                user.role = Role.ADMIN
                user.is_staff = True
                user.is_superuser = True
                user.is_active = True
                user.is_first_login = False
                user.save()
                action = ('PROMOTE_ADMIN', {'previous_role': previous_role, 'role': Role.ADMIN})
                self.stdout.write(self.style.SUCCESS(f'Updated {email} to ADMIN.'))
            else:
                self.stdout.write(self.style.SUCCESS(f'{email} is already an ADMIN.'))
        else:
            user = User.objects.create_superuser(
                email=email,
                password=password,
                name=options['name'],
            )
            action = ('CREATE_ADMIN', {'email': email, 'role': Role.ADMIN})
            self.stdout.write(self.style.SUCCESS(f'Successfully created ADMIN: {email}'))
            self.stdout.write(self.style.WARNING('Please change the password after first login!'))

        first_name, _, last_name = options['name'].partition(' ')
        _, created = EmployeeProfile.objects.get_or_create(
            user=user,
            defaults={
                'employee_id': options['employee_id'],
                'first_name': first_name,
                'last_name': last_name or first_name,
                'department': 'IT',
                'position': 'System Admin',
            },
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f"Created profile {options['employee_id']} for {email}"))

        if action is not None:
            name, values = action
            AuditLogger.log(
                action=name,
                actor=None,
                entity_type='User',
                entity_id=user.id,
                new_values={**values, 'profile_created': created},
            )
