"""
Host -> tenant site resolution for the public renderer.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy import or_

from servible.models.site import Site
from .preview import DEFAULT_PREVIEW_SALT, is_preview

RESERVED_SUBDOMAINS = frozenset({"www", "app", "admin", "api"})
LOCAL_DOMAIN = "localhost"

_PORT_RE = re.compile(r":\d+$")


@dataclass(frozen=True)
class TenantKey:
    value: str
    custom_domain: bool = False


@dataclass(frozen=True)
class ResolvedSite:
    site: Site
    organization: object
    theme: object
    navigation: List[object] = field(default_factory=list)
    preview: bool = False


def extract_tenant_key(host: Optional[str], platform_domain: str) -> Optional[TenantKey]:
    """
    Map a Host header to the key used to look up a site.

    ``acme.<platform>`` and ``acme.localhost`` give the subdomain ``acme``;
    reserved or missing subdomains give None. Any other host is treated as
    a custom domain and looked up by its full name.
    """
    if not host:
        return None

    hostname = _PORT_RE.sub("", host.strip().lower()).rstrip(".")
    if not hostname:
        return None

    for base in (LOCAL_DOMAIN, (platform_domain or "").strip(".").lower()):
        if not base:
            continue
        if hostname == base:
            return None
        if hostname.endswith("." + base):
            subdomain = hostname[: -len(base) - 1].split(".")[0]
            if not subdomain or subdomain in RESERVED_SUBDOMAINS:
                return None
            return TenantKey(subdomain)

    return TenantKey(hostname, custom_domain=True)


def lookup_site(key: str) -> Optional[Site]:
    """Return the site registered under ``key`` if its organization is active, whatever its status."""
    site = (
        Site.query
        .filter(or_(Site.subdomain == key, Site.custom_domain == key))
        .order_by(Site.created_at.asc())
        .first()
    )
    if site is None:
        return None

    organization = site.organization
    if organization is None or not organization.is_active:
        return None
    return site


def find_site(key: str, preview_token: Optional[str] = None, salt: str = DEFAULT_PREVIEW_SALT) -> Optional[ResolvedSite]:
    """
    Look up the visible site for ``key``.

    A site is visible when it is published, or when ``preview_token`` is a
    valid preview token for it. Anything else resolves to None.
    """
    site = lookup_site(key)
    if site is None:
        return None

    preview = is_preview(site, preview_token, salt)
    if not site.is_published and not preview:
        return None

    return ResolvedSite(
        site=site,
        organization=site.organization,
        theme=site.theme,
        navigation=list(site.navigation),
        preview=preview,
    )


def resolve_host(
    host: Optional[str],
    preview_token: Optional[str] = None,
    *,
    platform_domain: str,
    salt: str = DEFAULT_PREVIEW_SALT,
) -> Optional[ResolvedSite]:
    key = extract_tenant_key(host, platform_domain)
    if key is None:
        return None
    return find_site(key.value, preview_token, salt)
