"""
Management command to expire overdue invitations
"""

from django.core.management.base import BaseCommand

from apps.onboarding.services import InvitationService


class Command(BaseCommand):
    help = 'Mark every overdue PENDING invitation as EXPIRED'

    def handle(self, *args, **options):
        count = InvitationService.expire_stale_invitations()
        self.stdout.write(self.style.SUCCESS(f'Expired {count} invitation(s).'))
