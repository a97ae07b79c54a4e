from .theme import normalize_theme


def normalize_site(site):
    return {
        "id": site.id,
        "organization_id": site.organization_id,
        "name": site.name,
        "subdomain": site.subdomain,
        "custom_domain": site.custom_domain,
        "status": site.status,
        "primary_color": site.primary_color,
        "secondary_color": site.secondary_color,
        "features": {
            "blog": bool(site.blog_enabled),
            "portal": bool(site.portal_enabled),
            "booking": bool(site.booking_enabled),
        },
        "seo": {
            "meta_title": site.meta_title,
            "meta_description": site.meta_description,
            "og_image": site.og_image,
            "description": site.description,
        },
        "theme": normalize_theme(site.theme) if site.theme else None,
        "navigation": [
            {"label": item.label, "href": item.href, "sort_order": item.sort_order}
            for item in site.navigation
        ],
    }
