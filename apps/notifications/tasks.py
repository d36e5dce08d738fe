"""Celery delivery of rendered notification emails."""

import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import EmailMultiAlternatives

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(Exception,),
    retry_kwargs={"max_retries": 5, "countdown": 30},
    acks_late=True,
)
def deliver_notification_email(self, kind, to_email, subject, text, html):
    """Send one notification mail; ``kind`` names the template it came from."""
    message = EmailMultiAlternatives(
        subject=subject,
        body=text,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[to_email],
    )
    message.attach_alternative(html, "text/html")

    try:
        message.send()
    except Exception:
        logger.warning(
            "notification_email_failed kind=%s to=%s attempt=%s",
            kind,
            to_email,
            self.request.retries + 1,
            exc_info=True,
        )
        raise

    logger.info("notification_email_sent kind=%s to=%s", kind, to_email)
