from flask import abort, current_app, g, render_template
from servible.models.page import Page
from servible.rendering import render_page
from servible.theming import resolve_theme
from .cache import CACHE_EXTENSION
from . import public_bp


def _find_page(resolved, slug):
    query = Page.query.filter_by(site_id=resolved.site.id)
    if slug:
        query = query.filter_by(slug=slug)
    else:
        query = query.filter_by(is_homepage=True)

    # Preview shows unpublished pages too
    if not resolved.preview:
        query = query.filter_by(is_published=True)

    return query.first()


def _layout_context(resolved):
    return {
        "site": resolved.site,
        "organization": resolved.organization,
        "theme": resolve_theme(resolved.site),
        "navigation": resolved.navigation,
        "preview": resolved.preview,
    }


@public_bp.route("/", defaults={"slug": ""}, methods=["GET"])
@public_bp.route("/<slug>", methods=["GET"])
def show_page(slug):
    resolved = g.current_site
    cache = current_app.extensions[CACHE_EXTENSION]

    if not resolved.preview:
        cached = cache.get(resolved.site.id, slug)
        if cached is not None:
            return cached

    page = _find_page(resolved, slug)
    if page is None:
        if slug:
            abort(404)
        html = render_template("site/placeholder.html", **_layout_context(resolved))
    else:
        html = render_template(
            "site/page.html",
            page=page,
            content=render_page(page.content),
            **_layout_context(resolved),
        )

    if resolved.preview:
        return html, 200, {"Cache-Control": "private, no-store"}

    cache.set(resolved.site.id, slug, html)
    return html
