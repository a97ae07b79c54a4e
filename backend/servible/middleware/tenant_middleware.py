from flask import request, g, jsonify
from servible.models.organization import Organization

PUBLIC_ENDPOINTS = {"v1.health_check"}


def tenant_middleware(bp):
    @bp.before_request
    def load_tenant():
        if request.endpoint in PUBLIC_ENDPOINTS:
            return None

        tenant_id = request.headers.get('X-Tenant-ID')
        if not tenant_id:
            return jsonify({"error": "X-Tenant-ID header is missing"}), 400

        organization = Organization.query.filter_by(id=tenant_id, is_active=True).first()
        if not organization:
            return jsonify({"error": "Invalid tenant"}), 404

        # Attach tenant to global context
        g.current_tenant = organization
