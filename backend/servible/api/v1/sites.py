# servible/api/v1/sites.py
from flask import current_app, g, jsonify, request
from flask_jwt_extended import jwt_required
from servible.application.sites.enrich_images import request_image_enrichment
from servible.application.sites.publish_site import publish_site as publish_site_service
from servible.application.sites.unpublish_site import unpublish_site as unpublish_site_service
from servible.application.sites.update_theme import update_theme as update_theme_service
from servible.models.site import Site
from servible.normalizers.site import normalize_site
from servible.normalizers.theme import normalize_theme, normalize_theme_context
from servible.sites.preview import generate_preview_token, preview_url
from servible.theming import resolve_theme
from servible.theming.presets import list_presets
from servible.utils.decorators import tenant_required, roles_required
from . import v1_bp


def _get_site(site_id):
    return Site.query.filter_by(id=site_id, organization_id=g.current_tenant.id).first_or_404()


def site_base_url(site):
    host = site.custom_domain or f"{site.subdomain}.{current_app.config['PLATFORM_DOMAIN']}"
    return f"https://{host}"


@v1_bp.route("/sites/<site_id>", methods=["GET"])
@jwt_required()
@tenant_required
def get_site(site_id):
    return jsonify(normalize_site(_get_site(site_id)))


@v1_bp.route("/sites/<site_id>/publish", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
def publish_site(site_id):
    site = publish_site_service(site=_get_site(site_id))
    return jsonify(normalize_site(site))


@v1_bp.route("/sites/<site_id>/unpublish", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
def unpublish_site(site_id):
    site = unpublish_site_service(site=_get_site(site_id))
    return jsonify(normalize_site(site))


@v1_bp.route("/sites/<site_id>/theme", methods=["PUT"])
@jwt_required()
@tenant_required
@roles_required("admin")
def update_theme(site_id):
    site = _get_site(site_id)
    data = request.get_json(silent=True) or {}

    theme = update_theme_service(site=site, data=data)

    return jsonify({
        "primary_color": site.primary_color,
        "secondary_color": site.secondary_color,
        "theme": normalize_theme(theme),
    })


@v1_bp.route("/sites/<site_id>/theme/css", methods=["GET"])
@jwt_required()
@tenant_required
def get_theme_css(site_id):
    site = _get_site(site_id)
    payload = normalize_theme_context(resolve_theme(site))
    payload["presets"] = list_presets()
    return jsonify(payload)


@v1_bp.route("/sites/<site_id>/preview-link", methods=["GET"])
@jwt_required()
@tenant_required
def get_preview_link(site_id):
    site = _get_site(site_id)
    if site.is_published:
        return jsonify({"url": site_base_url(site), "preview": False})

    token = generate_preview_token(site, current_app.config["PREVIEW_SALT"])
    return jsonify({
        "url": preview_url(site_base_url(site), token),
        "preview": True,
    })


@v1_bp.route("/sites/<site_id>/enrich-images", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
def enrich_images(site_id):
    site = _get_site(site_id)
    request_image_enrichment(site=site)
    current_app.logger.info("Stock image enrichment started for site %s", site.id)
    return jsonify({"status": "accepted", "site_id": site.id}), 202
