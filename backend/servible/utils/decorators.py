from functools import wraps
from flask import g, jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity

def tenant_required(fn):
    """
    Require the access token's ``tenant_id`` claim to match the
    organization selected by the X-Tenant-ID header.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        tenant = getattr(g, "current_tenant", None)
        if not tenant:
            return jsonify({"error": "Tenant context missing"}), 400

        if get_jwt().get("tenant_id") != tenant.id:
            return jsonify({"error": "Tenant mismatch"}), 403

        g.actor_id = get_jwt_identity()
        return fn(*args, **kwargs)
    return wrapper

def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if get_jwt().get("role") not in allowed_roles:
                return jsonify({"error": "Insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator
