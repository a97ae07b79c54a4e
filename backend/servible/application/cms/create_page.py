from typing import Any, Dict
from sqlalchemy.exc import IntegrityError
from servible.extensions import db
from servible.models.page import Page
from servible.domain.invariants.exceptions import InvariantViolation
from servible.domain.invariants.page import assert_page_content, assert_single_homepage
from servible.signals import site_content_changed
from servible.utils.audit import log_action
from servible.utils.transaction import transactional
from flask import current_app


def create_page(
    *,
    site,
    data: Dict[str, Any],
) -> Page:
    """
    Create a page on ``site``.

    Edge cases handled:
    - Missing title
    - Duplicate slug per site
    - Second homepage
    - Invalid block content
    """

    title: str | None = data.get("title")
    if not title:
        raise InvariantViolation("Title is required")

    is_homepage = bool(data.get("is_homepage", False))
    slug = "" if is_homepage else (data.get("slug") or "").strip("/")
    if not is_homepage and not slug:
        raise InvariantViolation("Slug is required for pages other than the homepage")

    content = data.get("content") or {"blocks": []}
    assert_page_content(content)

    page = Page()
    page.site_id = site.id
    page.title = title
    page.slug = slug
    page.content = content
    page.is_homepage = is_homepage
    page.is_published = bool(data.get("is_published", False))
    page.meta_title = data.get("meta_title")
    page.meta_description = data.get("meta_description")

    assert_single_homepage(page, site.pages)

    try:
        with transactional():
            db.session.add(page)
            db.session.flush()  # ensures page.id is available

            log_action(
                action="page.create",
                entity_type="page",
                entity_id=page.id,
                payload={
                    "title": page.title,
                    "slug": page.slug,
                    "is_homepage": page.is_homepage,
                },
            )
    except IntegrityError as exc:
        # Unique (site_id, slug)
        raise InvariantViolation("A page with this slug already exists") from exc

    site_content_changed.send(current_app._get_current_object(), site_id=site.id)
    return page
