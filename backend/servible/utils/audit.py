from flask import g
from servible.extensions import db
from servible.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    if getattr(g, "current_tenant", None) is None:
        return  # Skip logging outside an admin request
    log = AuditLog()

    log.actor_id = getattr(g, "actor_id", None)
    log.organization_id = g.current_tenant.id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    db.session.add(log)
