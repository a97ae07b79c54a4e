from flask import request, jsonify, g
from flask_jwt_extended import jwt_required
from servible.models.audit_log import AuditLog
from servible.normalizers.audit import normalize_audit_log
from servible.normalizers.pagination import normalize_pagination
from servible.utils.decorators import tenant_required, roles_required
from servible.utils.pagination import paginate_cursor, parse_limit
from . import v1_bp


@v1_bp.route("/audit-logs", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required("admin")
def list_audit_logs():
    query = AuditLog.query.filter(AuditLog.organization_id == g.current_tenant.id)

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        query = query.filter(AuditLog.entity_id == entity_id)

    logs, meta = paginate_cursor(
        query,
        model=AuditLog,
        cursor=request.args.get("cursor"),
        limit=parse_limit(request.args.get("limit")),
    )

    return jsonify(normalize_pagination(logs, normalize_audit_log, cursor=meta)), 200
