import logging

logger = logging.getLogger("security.audit")


def log_auth_event(
    *,
    request,
    action: str,
    success: bool,
    user=None,
    email: str = "",
    reason: str = ""
):
    meta = getattr(request, "META", {}) if request is not None else {}
    logger.warning(
        "AUTH_EVENT action=%s success=%s reason=%s",
        action,
        success,
        reason,
        extra={
            "auth_action": action,
            "success": success,
            "user_id": str(user.id) if user is not None else None,
            "email": getattr(user, "email", None) or email or None,
            "ip": meta.get("REMOTE_ADDR"),
            "user_agent": meta.get("HTTP_USER_AGENT"),
            "reason": reason,
        }
    )
