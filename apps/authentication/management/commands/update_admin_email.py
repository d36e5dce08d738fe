"""
Management command to move an ADMIN account to a new email address
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.authentication.models import Role, User, normalize_email
from apps.core.audit import AuditLogger


class Command(BaseCommand):
    help = "Update an ADMIN account's email address"

    def add_arguments(self, parser):
        parser.add_argument('--old-email', type=str, default='admin@company.com', help='Current admin email')
        parser.add_argument('--new-email', type=str, default='admin@intelliod.com', help='New admin email')

    def handle(self, *args, **options):
        old_email = normalize_email(options['old_email'])
        new_email = normalize_email(options['new_email'])

        user = User.objects.filter(email=old_email, role=Role.ADMIN).first()
        if user is None:
            raise CommandError(f'Admin user with email {old_email} not found.')
        if User.objects.filter(email=new_email).exclude(pk=user.pk).exists():
            raise CommandError(f'Another account already uses {new_email}.')

        with transaction.atomic():
            user.email = new_email
            user.save(update_fields=['email', 'updated_at'])
            AuditLogger.log(
                action='UPDATE_ADMIN_EMAIL',
                actor=None,
                entity_type='User',
                entity_id=user.id,
                new_values={'old_email': old_email, 'new_email': new_email},
            )

        self.stdout.write(self.style.SUCCESS('Admin email updated successfully!'))
        self.stdout.write(f'Old email: {old_email}')
        self.stdout.write(f'New email: {new_email}')
