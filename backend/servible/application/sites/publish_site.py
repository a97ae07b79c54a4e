from flask import current_app
from servible.models.site import SITE_PUBLISHED
from servible.domain.lifecycle.site import assert_site_transition
from servible.signals import site_content_changed
from servible.utils.audit import log_action
from servible.utils.transaction import transactional


def publish_site(*, site):
    """Make a draft site publicly reachable."""
    with transactional():
        assert_site_transition(from_status=site.status, to_status=SITE_PUBLISHED)
        site.status = SITE_PUBLISHED

        log_action(
            action="site.publish",
            entity_type="site",
            entity_id=site.id,
            payload={"status": site.status},
        )

    site_content_changed.send(current_app._get_current_object(), site_id=site.id)
    return site
