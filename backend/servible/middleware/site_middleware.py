from urllib.parse import urlencode
from flask import current_app, g, redirect, request
from servible.domain.invariants.exceptions import SiteNotFound
from servible.sites.preview import looks_like_token
from servible.sites.resolver import extract_tenant_key, lookup_site, resolve_host


def _preview_handshake(token):
    """Move ``?preview=`` into an HTTP-only cookie and redirect to the clean URL."""
    key = extract_tenant_key(request.host, current_app.config["PLATFORM_DOMAIN"])
    if key is None or lookup_site(key.value) is None:
        raise SiteNotFound(request.host)

    args = [(k, v) for k, v in request.args.items(multi=True) if k != "preview"]
    location = request.path + ("?" + urlencode(args) if args else "")

    response = redirect(location, code=302)
    if looks_like_token(token):
        response.set_cookie(
            current_app.config["PREVIEW_COOKIE_NAME"],
            token,
            max_age=current_app.config["PREVIEW_COOKIE_MAX_AGE"],
            path="/",
            httponly=True,
            secure=current_app.config["PREVIEW_COOKIE_SECURE"],
            samesite="Lax",
        )
    return response


def site_middleware(bp):
    @bp.before_request
    def load_site():
        token = request.args.get("preview")
        if token is not None:
            return _preview_handshake(token)

        resolved = resolve_host(
            request.host,
            request.cookies.get(current_app.config["PREVIEW_COOKIE_NAME"]),
            platform_domain=current_app.config["PLATFORM_DOMAIN"],
            salt=current_app.config["PREVIEW_SALT"],
        )
        if resolved is None:
            raise SiteNotFound(request.host)

        # Attach site to global context
        g.current_site = resolved
