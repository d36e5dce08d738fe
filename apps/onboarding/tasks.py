import logging

from celery import shared_task

from .services import InvitationService

logger = logging.getLogger(__name__)


@shared_task
def expire_stale_invitations_task():
    count = InvitationService.expire_stale_invitations()
    logger.info("expire_stale_invitations_task expired=%s", count)
    return count
