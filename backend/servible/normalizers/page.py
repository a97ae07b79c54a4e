def normalize_page(page, include_content=True):
    data = {
        "id": page.id,
        "site_id": page.site_id,
        "title": page.title,
        "slug": page.slug,
        "is_homepage": page.is_homepage,
        "is_published": page.is_published,
        "meta_title": page.meta_title,
        "meta_description": page.meta_description,
        "version": page.version,
        "updated_at": page.updated_at.isoformat() if page.updated_at else None,
    }
    if include_content:
        data["content"] = page.content or {"blocks": []}
    return data
