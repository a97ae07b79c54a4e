# servible/api/v1/pages.py
from flask import g, request, jsonify
from flask_jwt_extended import jwt_required
from servible.application.cms.create_page import create_page as create_page_service
from servible.application.cms.generated_blocks import normalize_generated_blocks
from servible.application.cms.update_page import update_page as update_page_service
from servible.models.page import Page
from servible.models.site import Site
from servible.normalizers.page import normalize_page
from servible.rendering import render_page
from servible.utils.decorators import tenant_required, roles_required
from servible.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp


def _get_site(site_id):
    return Site.query.filter_by(id=site_id, organization_id=g.current_tenant.id).first_or_404()


def _get_page(page_id):
    return (
        Page.query.join(Site)
        .filter(Page.id == page_id, Site.organization_id == g.current_tenant.id)
        .first_or_404()
    )


def _content_from_request(data):
    """Accept stored ``content`` or flat ``generated_blocks`` from the site generator."""
    if "generated_blocks" in data:
        data = dict(data)
        data["content"] = {"blocks": normalize_generated_blocks(data.pop("generated_blocks"))}
    return data


@v1_bp.route("/sites/<site_id>/pages", methods=["GET"])
@jwt_required()
@tenant_required
def list_pages(site_id):
    site = _get_site(site_id)
    pages = (
        Page.query.filter_by(site_id=site.id)
        .order_by(Page.is_homepage.desc(), Page.created_at.asc())
        .all()
    )
    return jsonify({"items": [normalize_page(p, include_content=False) for p in pages]})


@v1_bp.route("/sites/<site_id>/pages", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
def create_page(site_id):
    site = _get_site(site_id)
    data = _content_from_request(request.get_json(silent=True) or {})

    page = create_page_service(site=site, data=data)

    return jsonify(normalize_page(page)), 201


@v1_bp.route("/pages/<page_id>", methods=["GET"])
@jwt_required()
@tenant_required
def get_page(page_id):
    page = _get_page(page_id)
    response = jsonify(normalize_page(page))
    response.headers["ETag"] = f'"{page.version}"'
    return response


@v1_bp.route("/pages/<page_id>", methods=["PUT"])
@jwt_required()
@tenant_required
@roles_required("admin")
def update_page(page_id):
    page = _get_page(page_id)

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(page)

    data = _content_from_request(request.get_json(silent=True) or {})
    page = update_page_service(page=page, data=data)

    response = jsonify(normalize_page(page))
    response.headers["ETag"] = f'"{page.version}"'
    return response


@v1_bp.route("/pages/<page_id>/render", methods=["GET"])
@jwt_required()
@tenant_required
def render_page_preview(page_id):
    page = _get_page(page_id)
    return str(render_page(page.content)), 200, {"Content-Type": "text/html; charset=utf-8"}
