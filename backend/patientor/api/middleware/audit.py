import logging

from fastapi import Request

audit_logger = logging.getLogger("patientor.audit")


def log_audit(
    action: str,
    resource: str,
    resource_id: str = None,
    details: str = None,
    request: Request = None,
):
    ip = request.client.host if request and request.client else None
    user_agent = request.headers.get("user-agent") if request else None

    audit_logger.info(
        "action=%s resource=%s resource_id=%s ip=%s user_agent=%s details=%s",
        action,
        resource,
        resource_id,
        ip,
        user_agent,
        details,
    )
