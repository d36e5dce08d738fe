"""
Management command to reset an ADMIN password
"""

import getpass

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.authentication.models import Role, User, normalize_email
from apps.core.audit import AuditLogger


class Command(BaseCommand):
    help = 'Change the password of an ADMIN account'

    def add_arguments(self, parser):
        parser.add_argument('--email', type=str, default='admin@intelliod.com', help='Admin email')
        parser.add_argument('--password', type=str, help='New password (prompted when omitted)')

    def handle(self, *args, **options):
        email = normalize_email(options['email'])
        user = User.objects.filter(email=email, role=Role.ADMIN).first()
        if user is None:
            raise CommandError(f'Admin user with email {email} not found.')

        password = options.get('password')
        if not password:
            password = getpass.getpass('New password: ')
            if password != getpass.getpass('Confirm password: '):
                raise CommandError('Passwords do not match.')

        try:
            validate_password(password, user=user)
        except ValidationError as exc:
            raise CommandError('; '.join(exc.messages))

        with transaction.atomic():
            user.set_password(password)
            user.save(update_fields=['password', 'updated_at'])
            AuditLogger.log(
                action='CHANGE_ADMIN_PASSWORD',
                actor=None,
                entity_type='User',
                entity_id=user.id,
                new_values={'password_changed': True},
            )

        self.stdout.write(self.style.SUCCESS(f'Password updated for {email}'))
