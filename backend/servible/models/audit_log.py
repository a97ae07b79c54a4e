# servible/models/audit_log.py
from sqlalchemy import event
from servible.extensions import db
from .base import BaseModel
from .tenant_mixin import OrganizationMixin


class AuditLog(BaseModel, OrganizationMixin):
    __tablename__ = "audit_logs"

    __table_args__ = (
        db.Index("ix_audit_org_created", "organization_id", "created_at", "id"),
    )

    actor_id = db.Column(db.String(64), nullable=True, index=True)
    action = db.Column(db.String(50), nullable=False, index=True)

    entity_type = db.Column(db.String(50), nullable=False, index=True)
    entity_id = db.Column(db.String(36), nullable=False, index=True)

    payload = db.Column(db.JSON, nullable=False, default=dict)


@event.listens_for(AuditLog, 'before_update')
@event.listens_for(AuditLog, 'before_delete')
def prevent_audit_mutation(mapper, connection, target):
    raise RuntimeError("Audit logs are immutable")
