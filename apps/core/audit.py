"""
Audit trail writer.

Every service that changes state calls ``AuditLogger.log`` inside the same
transaction as the change, so the entry commits or rolls back with it.
"""

import ipaddress
import logging

logger = logging.getLogger(__name__)


def _valid_ip(value):
    if not value:
        return None
    try:
        return str(ipaddress.ip_address(value.strip()))
    except ValueError:
        return None


def client_ip(request):
    """First valid address from X-Forwarded-For, else REMOTE_ADDR, else None."""
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR', '').split(',')[0]
    return _valid_ip(forwarded) or _valid_ip(request.META.get('REMOTE_ADDR'))


class AuditLogger:
    """Writes ``AuditLog`` rows and mirrors them to the application log."""

    @staticmethod
    def log(
        *,
        action: str,
        actor,
        entity_type: str,
        entity_id,
        new_values: dict = None,
        request=None,
    ):
        """
        Write an audit entry.

        Parameters
        ----------
        action : str
            E.g. ``'INVITE_EMPLOYEE'``, ``'APPROVE_EMPLOYEE'``
        actor : User or None
            The user performing the action. ``None`` for scheduled jobs.
        entity_type : str
            E.g. ``'User'``, ``'EmployeeOnboarding'``, ``'Document'``
        entity_id : str or UUID
            PK of the affected entity.
        new_values : dict
            JSON payload describing the change. Never holds secrets.
        request : HttpRequest, optional
            For extracting IP / user-agent / request id.
        """
        from apps.core.models import AuditLog

        ip_address = None
        user_agent = None
        request_id = None

        if request is not None:
            ip_address = client_ip(request)
            user_agent = request.META.get('HTTP_USER_AGENT', '')[:500]
            request_id = getattr(request, 'request_id', None)

        entry = AuditLog.objects.create(
            user=actor,
            user_email=getattr(actor, 'email', None),
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id),
            new_values=new_values or {},
            ip_address=ip_address,
            user_agent=user_agent,
            request_id=request_id,
        )

        logger.info(
            "audit action=%s entity=%s:%s actor=%s",
            action,
            entity_type,
            entity_id,
            getattr(actor, 'id', None),
        )
        return entry
