from flask import current_app
from servible.models.site import SITE_DRAFT
from servible.domain.lifecycle.site import assert_site_transition
from servible.signals import site_content_changed
from servible.utils.audit import log_action
from servible.utils.transaction import transactional


def unpublish_site(*, site):
    """Take a site offline; it stays reachable through preview links."""
    with transactional():
        assert_site_transition(from_status=site.status, to_status=SITE_DRAFT)
        site.status = SITE_DRAFT

        log_action(
            action="site.unpublish",
            entity_type="site",
            entity_id=site.id,
            payload={"status": site.status},
        )

    site_content_changed.send(current_app._get_current_object(), site_id=site.id)
    return site
