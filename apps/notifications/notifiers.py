"""
Outbound notifications for invitations and review outcomes.

The backend is chosen with ``NOTIFIER_BACKEND``. Delivery problems are
logged and never propagate into the operation that triggered them.
"""

import logging

from django.conf import settings
from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.module_loading import import_string

from .tasks import deliver_notification_email

logger = logging.getLogger(__name__)


class BaseNotifier:

    def send_invitation(self, invitation, temp_password):
        raise NotImplementedError

    def send_review_outcome(self, onboarding):
        raise NotImplementedError


class LogNotifier(BaseNotifier):
    """Writes notifications to the log; the default outside production."""

    def send_invitation(self, invitation, temp_password):
        logger.info(
            "invitation_issued email=%s invitation_id=%s expires_at=%s",
            invitation.email,
            invitation.id,
            invitation.expires_at.isoformat(),
        )

    def send_review_outcome(self, onboarding):
        logger.info(
            "onboarding_reviewed email=%s onboarding_id=%s status=%s",
            onboarding.user.email,
            onboarding.id,
            onboarding.status,
        )


class EmailNotifier(BaseNotifier):
    """Renders the email templates and queues them on celery."""

    def _context(self, **extra):
        context = {
            "company_name": settings.COMPANY_NAME,
            "login_url": f"{settings.FRONTEND_URL.rstrip('/')}/first-time-login",
            "year": timezone.now().year,
        }
        context.update(extra)
        return context

    def _send(self, template, subject, to_email, context):
        text = render_to_string(f"emails/{template}.txt", context)
        html = render_to_string(f"emails/{template}.html", context)
        deliver_notification_email.delay(
            kind=template, to_email=to_email, subject=subject, text=text, html=html
        )

    def send_invitation(self, invitation, temp_password):
        context = self._context(
            name=invitation.user.name,
            email=invitation.email,
            temp_password=temp_password,
            expires_at=invitation.expires_at,
        )
        self._send(
            "invitation",
            f"Welcome to {settings.COMPANY_NAME} - Complete Your Onboarding",
            invitation.email,
            context,
        )

    def send_review_outcome(self, onboarding):
        approved = onboarding.status == onboarding.STATUS_APPROVED
        context = self._context(
            name=onboarding.user.name,
            notes=onboarding.notes,
            rejection_reason=onboarding.rejection_reason,
        )
        if approved:
            subject = f"Welcome aboard! Your {settings.COMPANY_NAME} onboarding is approved"
        else:
            subject = f"Action required: your {settings.COMPANY_NAME} onboarding needs changes"
        self._send(
            "onboarding_approved" if approved else "onboarding_rejected",
            subject,
            onboarding.user.email,
            context,
        )


def get_notifier() -> BaseNotifier:
    return import_string(settings.NOTIFIER_BACKEND)()


def notify_invitation(invitation, temp_password):
    try:
        get_notifier().send_invitation(invitation, temp_password)
    except Exception:
        logger.exception("invitation_notification_failed invitation_id=%s", invitation.id)


def notify_review_outcome(onboarding):
    try:
        get_notifier().send_review_outcome(onboarding)
    except Exception:
        logger.exception("review_notification_failed onboarding_id=%s", onboarding.id)
