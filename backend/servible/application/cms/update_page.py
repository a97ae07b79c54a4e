from typing import Any, Dict
from flask import current_app
from sqlalchemy.exc import IntegrityError
from servible.models.page import Page
from servible.domain.invariants.exceptions import InvariantViolation
from servible.domain.invariants.page import assert_page_content, assert_single_homepage
from servible.signals import site_content_changed
from servible.utils.audit import log_action
from servible.utils.transaction import transactional


ALLOWED_UPDATE_FIELDS = (
    "title",
    "slug",
    "content",
    "is_homepage",
    "is_published",
    "meta_title",
    "meta_description",
)


def update_page(
    *,
    page: Page,
    data: Dict[str, Any],
) -> Page:
    """
    Update mutable fields on a page.

    Design rules:
    - Only whitelisted fields are mutable
    - No silent no-op updates
    - Content is validated before it is stored
    - A concurrent save surfaces as StaleDataError on commit
    """

    changed_fields: list[str] = []

    if "content" in data:
        assert_page_content(data["content"])

    try:
        with transactional():
            for field in ALLOWED_UPDATE_FIELDS:
                if field in data and getattr(page, field) != data[field]:
                    setattr(page, field, data[field])
                    changed_fields.append(field)

            if not changed_fields:
                # Explicitly fail instead of silently succeeding
                raise InvariantViolation("No valid fields provided for update")

            if page.is_homepage:
                page.slug = ""
            elif not page.slug:
                raise InvariantViolation("Slug is required for pages other than the homepage")

            assert_single_homepage(page, page.site.pages)

            log_action(
                action="page.update",
                entity_type="page",
                entity_id=page.id,
                payload={
                    "fields": changed_fields,
                },
            )
    except IntegrityError as exc:
        raise InvariantViolation("A page with this slug already exists") from exc

    site_content_changed.send(current_app._get_current_object(), site_id=page.site_id)
    return page
